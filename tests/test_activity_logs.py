"""Tests for baby, feed log and diaper log endpoints."""

import uuid
from datetime import UTC, datetime, timedelta

from helpers import add_feed, auth_headers


class TestBabies:
    """Tests for /api/babies."""

    async def test_create_and_list(self, client, family):
        headers = auth_headers(family.id)

        response = await client.post(
            "/api/babies",
            json={"first_name": "Noor", "feed_warning_time": "02:30"},
            headers=headers,
        )
        assert response.status_code == 201
        assert response.json()["feed_warning_time"] == "02:30"
        assert response.json()["diaper_warning_time"] is None

        response = await client.get("/api/babies", headers=headers)
        assert [b["first_name"] for b in response.json()] == ["Noor"]

    async def test_rejects_malformed_warning_time(self, client, family):
        response = await client.post(
            "/api/babies",
            json={"first_name": "Noor", "diaper_warning_time": "3"},
            headers=auth_headers(family.id),
        )

        assert response.status_code == 422


class TestFeedLogs:
    """Tests for /api/feed-logs."""

    async def test_create_and_last(self, client, family, baby):
        headers = auth_headers(family.id)
        now = datetime.now(UTC)

        for hours_ago in (3, 1, 2):
            response = await client.post(
                "/api/feed-logs",
                json={
                    "baby_id": str(baby.id),
                    "time": (now - timedelta(hours=hours_ago)).isoformat(),
                    "feed_type": "BOTTLE",
                    "amount": 120,
                    "unit_abbr": "ml",
                },
                headers=headers,
            )
            assert response.status_code == 201

        response = await client.get(
            "/api/feed-logs/last", params={"baby_id": str(baby.id)}, headers=headers
        )

        assert response.status_code == 200
        last_time = datetime.fromisoformat(response.json()["time"].replace("Z", "+00:00"))
        assert abs(last_time - (now - timedelta(hours=1))) < timedelta(seconds=1)

    async def test_last_when_never_fed(self, client, family, baby):
        response = await client.get(
            "/api/feed-logs/last",
            params={"baby_id": str(baby.id)},
            headers=auth_headers(family.id),
        )

        assert response.status_code == 200
        assert response.json() is None

    async def test_unknown_baby(self, client, family):
        response = await client.post(
            "/api/feed-logs",
            json={
                "baby_id": str(uuid.uuid4()),
                "time": datetime.now(UTC).isoformat(),
                "feed_type": "BREAST",
            },
            headers=auth_headers(family.id),
        )

        assert response.status_code == 404

    async def test_delete(self, client, db_session, family, baby):
        log = await add_feed(db_session, baby, datetime.now(UTC))
        headers = auth_headers(family.id)

        response = await client.delete(f"/api/feed-logs/{log.id}", headers=headers)
        assert response.status_code == 204

        response = await client.get("/api/feed-logs", headers=headers)
        assert response.json() == []


class TestDiaperLogs:
    """Tests for /api/diaper-logs."""

    async def test_create_and_list(self, client, family, baby):
        headers = auth_headers(family.id)

        response = await client.post(
            "/api/diaper-logs",
            json={
                "baby_id": str(baby.id),
                "time": datetime.now(UTC).isoformat(),
                "diaper_type": "BOTH",
            },
            headers=headers,
        )
        assert response.status_code == 201

        response = await client.get(
            "/api/diaper-logs", params={"baby_id": str(baby.id)}, headers=headers
        )
        assert [d["diaper_type"] for d in response.json()] == ["BOTH"]

    async def test_delete_missing(self, client, family):
        response = await client.delete(
            f"/api/diaper-logs/{uuid.uuid4()}", headers=auth_headers(family.id)
        )

        assert response.status_code == 404
