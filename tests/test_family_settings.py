"""Tests for family settings endpoints and threshold config."""

from sprout_api.core.encryption import decrypt_credential
from sprout_api.models import Baby, FamilySettings
from sprout_api.services.family_settings import (
    build_threshold_config,
    get_family_settings,
    threshold_config_for_baby,
)

from helpers import add_family_settings, auth_headers


class TestSettingsEndpoints:
    """Tests for /api/settings."""

    async def test_get_creates_defaults(self, client, family):
        response = await client.get("/api/settings", headers=auth_headers(family.id))

        assert response.status_code == 200
        data = response.json()
        assert data["feed_warning_time"] == "02:00"
        assert data["diaper_warning_time"] == "03:00"
        assert data["notification_enabled"] is False
        assert data["hermes_api_key_set"] is False
        assert data["notification_title"] == "Warning ‼️"
        assert "hermes_api_key" not in data

    async def test_patch_updates_only_given_fields(self, client, family):
        headers = auth_headers(family.id)

        response = await client.patch(
            "/api/settings",
            json={
                "feed_warning_time": "02:30",
                "notification_enabled": True,
                "hermes_api_key": "abc123",
                "notification_feed_advance_minutes": 15,
            },
            headers=headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["feed_warning_time"] == "02:30"
        assert data["diaper_warning_time"] == "03:00"
        assert data["notification_enabled"] is True
        assert data["hermes_api_key_set"] is True
        assert data["notification_feed_advance_minutes"] == 15

    async def test_patch_can_clear_subtitle(self, client, family):
        response = await client.patch(
            "/api/settings",
            json={"notification_feed_subtitle": None},
            headers=auth_headers(family.id),
        )

        assert response.json()["notification_feed_subtitle"] is None

    async def test_rejects_malformed_warning_time(self, client, family):
        response = await client.patch(
            "/api/settings",
            json={"feed_warning_time": "2h"},
            headers=auth_headers(family.id),
        )

        assert response.status_code == 422

    async def test_rejects_out_of_range_advance(self, client, family):
        response = await client.patch(
            "/api/settings",
            json={"notification_diaper_advance_minutes": 1441},
            headers=auth_headers(family.id),
        )

        assert response.status_code == 422


class TestThresholdConfig:
    """Tests for combining family settings with baby overrides."""

    async def test_family_values(self, db_session, family):
        family_settings = await add_family_settings(
            db_session,
            family.id,
            feed_warning_time="02:00",
            notification_feed_advance_minutes=None,
        )

        config = build_threshold_config(family_settings)

        assert config.feed_warning_time == "02:00"
        assert config.feed_advance_minutes == 0
        assert config.notification_enabled is True

    def test_baby_override_wins(self):
        family_settings = FamilySettings(
            feed_warning_time="02:00",
            diaper_warning_time="03:00",
            notification_enabled=True,
            notification_title="Warning",
            notification_feed_body="feed",
            notification_diaper_body="diaper",
        )
        baby = Baby(first_name="Ada", feed_warning_time="01:30", diaper_warning_time=None)

        config = threshold_config_for_baby(family_settings, baby)

        assert config.feed_warning_time == "01:30"
        assert config.diaper_warning_time == "03:00"


async def test_api_key_is_stored_encrypted(client, db_session, family):
    await client.patch(
        "/api/settings",
        json={"hermes_api_key": "plain-key"},
        headers=auth_headers(family.id),
    )

    stored = await get_family_settings(db_session, family.id)

    assert stored.hermes_api_key != "plain-key"
    assert decrypt_credential(stored.hermes_api_key) == "plain-key"
