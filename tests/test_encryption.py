"""Tests for credential encryption."""

import pytest

from sprout_api.core.encryption import decrypt_credential, encrypt_credential


def test_round_trip():
    encrypted = encrypt_credential("hermes-key-123")

    assert encrypted != "hermes-key-123"
    assert decrypt_credential(encrypted) == "hermes-key-123"


def test_ciphertexts_differ():
    assert encrypt_credential("same") != encrypt_credential("same")


def test_corrupted_value_raises():
    with pytest.raises(ValueError, match="Failed to decrypt"):
        decrypt_credential("garbage")
