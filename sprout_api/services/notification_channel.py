"""Push notification channels.

A channel delivers a ``NotificationPayload`` to every device registered
for a family. Channels report failures in the returned
``DispatchResult`` instead of raising, so callers decide whether to
retry.
"""

import uuid
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Protocol

import httpx
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from sprout_api.config import settings
from sprout_api.core.encryption import decrypt_credential
from sprout_api.database import get_db_session
from sprout_api.logging_config import get_logger
from sprout_api.models.family_settings import FamilySettings

logger = get_logger(__name__)


class NotificationPayload(BaseModel):
    """Push message body."""

    title: str
    subtitle: str | None = None
    body: str
    name: str
    sound: str

    def to_wire(self) -> dict[str, str]:
        """JSON body for the provider; subtitle omitted when unset."""
        return self.model_dump(exclude_none=True)


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of a single send."""

    success: bool
    error: str | None = None


class NotificationChannel(Protocol):
    """Anything that can push a payload to a family."""

    async def send(
        self, family_id: uuid.UUID, payload: NotificationPayload
    ) -> DispatchResult: ...


SettingsLoader = Callable[[uuid.UUID], Awaitable[FamilySettings | None]]


async def _load_family_settings(family_id: uuid.UUID) -> FamilySettings | None:
    from sprout_api.services.family_settings import get_family_settings

    async with get_db_session() as db:
        return await get_family_settings(db, family_id)


class HermesNotificationChannel:
    """Sends notifications through the Hermes push relay.

    The API key (stored encrypted) and endpoint are per family
    (FamilySettings). Hermes expects the decrypted key in the
    Authorization header, without a ``Bearer`` prefix.
    """

    def __init__(
        self,
        settings_loader: SettingsLoader | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float | None = None,
    ):
        self._settings_loader = settings_loader or _load_family_settings
        self._transport = transport
        self._timeout = timeout if timeout is not None else settings.hermes_timeout_seconds

    async def send(
        self, family_id: uuid.UUID, payload: NotificationPayload
    ) -> DispatchResult:
        """Push ``payload`` to the family's devices.

        Returns:
            DispatchResult; never raises.
        """
        try:
            family_settings = await self._settings_loader(family_id)
        except SQLAlchemyError as e:
            logger.error(
                "Could not load notification settings",
                family_id=str(family_id),
                error=str(e),
            )
            return DispatchResult(success=False, error="Could not load settings")

        if family_settings is None or not family_settings.notification_enabled:
            return DispatchResult(success=False, error="Notifications disabled")

        if not family_settings.hermes_api_key:
            return DispatchResult(success=False, error="Hermes API key missing")

        try:
            api_key = decrypt_credential(family_settings.hermes_api_key)
        except ValueError:
            logger.error(
                "Stored Hermes API key could not be decrypted",
                family_id=str(family_id),
            )
            return DispatchResult(success=False, error="Hermes API key unreadable")

        endpoint = family_settings.hermes_api_endpoint or settings.hermes_api_endpoint

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    endpoint,
                    json=payload.to_wire(),
                    headers={"Authorization": api_key},
                )
        except httpx.HTTPError as e:
            logger.warning(
                "Hermes request failed",
                family_id=str(family_id),
                error=str(e),
            )
            return DispatchResult(success=False, error=str(e) or "Unknown Hermes error")

        if not response.is_success:
            text = response.text.strip()
            return DispatchResult(
                success=False,
                error=text or f"Hermes error {response.status_code}",
            )

        logger.debug("Hermes notification accepted", family_id=str(family_id))
        return DispatchResult(success=True)
