"""Credential encryption.

Symmetric encryption for third-party API credentials stored in the
database (the family's Hermes API key). Uses Fernet (AES-128-CBC with
HMAC) from the cryptography library with a PBKDF2-derived key.
"""

import base64
import hashlib
from functools import lru_cache

from cryptography.fernet import Fernet, InvalidToken

from sprout_api.config import settings

_PBKDF2_ITERATIONS = 600_000
# Changing the salt invalidates every stored credential
_PBKDF2_SALT = b"sprout-track-credential-encryption-v1"


def _get_raw_key() -> str:
    """ENCRYPTION_KEY if set, otherwise the JWT secret."""
    return settings.encryption_key or settings.secret_key


@lru_cache(maxsize=4)
def _derive_key(raw_key: str) -> bytes:
    """Derive a Fernet key using PBKDF2-HMAC-SHA256."""
    key_bytes = hashlib.pbkdf2_hmac(
        "sha256",
        raw_key.encode("utf-8"),
        _PBKDF2_SALT,
        _PBKDF2_ITERATIONS,
    )
    return base64.urlsafe_b64encode(key_bytes)


def encrypt_credential(plaintext: str) -> str:
    """Encrypt a credential string.

    Returns:
        The encrypted value as a base64-encoded string
    """
    fernet = Fernet(_derive_key(_get_raw_key()))
    return fernet.encrypt(plaintext.encode("utf-8")).decode("utf-8")


def decrypt_credential(encrypted: str) -> str:
    """Decrypt a credential produced by ``encrypt_credential``.

    Raises:
        ValueError: If the key is wrong or the data is corrupted
    """
    fernet = Fernet(_derive_key(_get_raw_key()))
    try:
        return fernet.decrypt(encrypted.encode("utf-8")).decode("utf-8")
    except InvalidToken as e:
        raise ValueError(
            "Failed to decrypt credential - invalid key or corrupted data"
        ) from e
