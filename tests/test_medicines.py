"""Tests for medicine, medicine log and active dose endpoints."""

import uuid
from datetime import UTC, datetime, timedelta

import pytest

from helpers import add_dose, add_medicine, auth_headers


class TestMedicineEndpoints:
    """Tests for /api/medicines."""

    async def test_requires_authentication(self, client):
        response = await client.get("/api/medicines")

        assert response.status_code == 401

    async def test_requires_family_context(self, client):
        response = await client.get("/api/medicines", headers=auth_headers(None))

        assert response.status_code == 403

    async def test_create_and_list(self, client, family):
        headers = auth_headers(family.id)

        response = await client.post(
            "/api/medicines",
            json={"name": "  Paracetamol ", "dose_min_time": "0:04:00", "unit_abbr": "mg"},
            headers=headers,
        )
        assert response.status_code == 201
        created = response.json()
        assert created["name"] == "Paracetamol"
        assert created["dose_min_time"] == "0:04:00"
        assert created["contacts"] == []

        response = await client.get("/api/medicines", headers=headers)
        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 1
        assert data["medicines"][0]["id"] == created["id"]

    async def test_accepts_legacy_interval(self, client, family):
        response = await client.post(
            "/api/medicines",
            json={"name": "Ibuprofen", "dose_min_time": "06:00"},
            headers=auth_headers(family.id),
        )

        assert response.status_code == 201
        assert response.json()["dose_min_time"] == "06:00"

    @pytest.mark.parametrize("dose_min_time", ["abc", "0:24:00", "6h"])
    async def test_rejects_malformed_interval(self, client, family, dose_min_time):
        response = await client.post(
            "/api/medicines",
            json={"name": "Bad", "dose_min_time": dose_min_time},
            headers=auth_headers(family.id),
        )

        assert response.status_code == 422

    async def test_unknown_contact_is_rejected(self, client, family):
        response = await client.post(
            "/api/medicines",
            json={"name": "Amoxicillin", "contact_ids": [str(uuid.uuid4())]},
            headers=auth_headers(family.id),
        )

        assert response.status_code == 400

    async def test_update_clears_interval_with_empty_string(self, client, db_session, family):
        medicine = await add_medicine(db_session, family.id)

        response = await client.patch(
            f"/api/medicines/{medicine.id}",
            json={"dose_min_time": ""},
            headers=auth_headers(family.id),
        )

        assert response.status_code == 200
        assert response.json()["dose_min_time"] is None

    async def test_update_rejects_blank_name(self, client, db_session, family):
        medicine = await add_medicine(db_session, family.id)

        response = await client.patch(
            f"/api/medicines/{medicine.id}",
            json={"name": "   "},
            headers=auth_headers(family.id),
        )

        assert response.status_code == 422

    async def test_update_strips_name_and_clears_blank_unit(
        self, client, db_session, family
    ):
        medicine = await add_medicine(db_session, family.id, unit_abbr="mg")

        response = await client.patch(
            f"/api/medicines/{medicine.id}",
            json={"name": "  Calpol ", "unit_abbr": "  "},
            headers=auth_headers(family.id),
        )

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Calpol"
        assert data["unit_abbr"] is None

    async def test_soft_delete_hides_medicine(self, client, db_session, family):
        medicine = await add_medicine(db_session, family.id)
        headers = auth_headers(family.id)

        response = await client.delete(f"/api/medicines/{medicine.id}", headers=headers)
        assert response.status_code == 204

        response = await client.get(f"/api/medicines/{medicine.id}", headers=headers)
        assert response.status_code == 404

    async def test_other_family_cannot_see_medicine(self, client, db_session, family):
        medicine = await add_medicine(db_session, family.id)

        response = await client.get(
            f"/api/medicines/{medicine.id}",
            headers=auth_headers(uuid.uuid4()),
        )

        assert response.status_code == 404

    async def test_safety_waiting(self, client, db_session, family, baby):
        medicine = await add_medicine(db_session, family.id, dose_min_time="0:04:00")
        await add_dose(db_session, medicine, baby, datetime.now(UTC) - timedelta(hours=1))

        response = await client.get(
            f"/api/medicines/{medicine.id}/safety",
            params={"baby_id": str(baby.id)},
            headers=auth_headers(family.id),
        )

        assert response.status_code == 200
        data = response.json()
        assert data["is_safe"] is False
        assert 179 <= data["minutes_remaining"] <= 181
        assert data["status"] == "Waiting"
        assert data["time_remaining_text"].endswith("remaining")

    async def test_safety_sees_dose_older_than_a_day(self, client, db_session, family, baby):
        medicine = await add_medicine(db_session, family.id, dose_min_time="2:00:00")
        await add_dose(db_session, medicine, baby, datetime.now(UTC) - timedelta(hours=30))

        response = await client.get(
            f"/api/medicines/{medicine.id}/safety",
            params={"baby_id": str(baby.id)},
            headers=auth_headers(family.id),
        )

        data = response.json()
        assert data["is_safe"] is False
        assert data["total_in_24_hours"] == 0

    async def test_safety_unknown_baby(self, client, db_session, family):
        medicine = await add_medicine(db_session, family.id)

        response = await client.get(
            f"/api/medicines/{medicine.id}/safety",
            params={"baby_id": str(uuid.uuid4())},
            headers=auth_headers(family.id),
        )

        assert response.status_code == 404


class TestMedicineLogEndpoints:
    """Tests for /api/medicine-logs."""

    async def test_record_dose_stores_empty_unit_as_null(self, client, db_session, family, baby):
        medicine = await add_medicine(db_session, family.id)

        response = await client.post(
            "/api/medicine-logs",
            json={
                "medicine_id": str(medicine.id),
                "baby_id": str(baby.id),
                "time": datetime.now(UTC).isoformat(),
                "dose_amount": 2.5,
                "unit_abbr": "",
            },
            headers=auth_headers(family.id),
        )

        assert response.status_code == 201
        assert response.json()["unit_abbr"] is None

    async def test_record_dose_while_waiting_is_allowed(self, client, db_session, family, baby):
        medicine = await add_medicine(db_session, family.id, dose_min_time="0:04:00")
        await add_dose(db_session, medicine, baby, datetime.now(UTC) - timedelta(minutes=5))

        response = await client.post(
            "/api/medicine-logs",
            json={
                "medicine_id": str(medicine.id),
                "baby_id": str(baby.id),
                "time": datetime.now(UTC).isoformat(),
                "dose_amount": 5,
            },
            headers=auth_headers(family.id),
        )

        assert response.status_code == 201

    async def test_record_dose_rejects_naive_time(self, client, db_session, family, baby):
        medicine = await add_medicine(db_session, family.id)

        response = await client.post(
            "/api/medicine-logs",
            json={
                "medicine_id": str(medicine.id),
                "baby_id": str(baby.id),
                "time": "2026-10-19T10:00:00",
                "dose_amount": 5,
            },
            headers=auth_headers(family.id),
        )

        assert response.status_code == 422

    async def test_record_dose_unknown_medicine(self, client, family, baby):
        response = await client.post(
            "/api/medicine-logs",
            json={
                "medicine_id": str(uuid.uuid4()),
                "baby_id": str(baby.id),
                "time": datetime.now(UTC).isoformat(),
                "dose_amount": 5,
            },
            headers=auth_headers(family.id),
        )

        assert response.status_code == 404

    async def test_list_newest_first_and_soft_delete(self, client, db_session, family, baby):
        medicine = await add_medicine(db_session, family.id)
        now = datetime.now(UTC)
        older = await add_dose(db_session, medicine, baby, now - timedelta(hours=5))
        newer = await add_dose(db_session, medicine, baby, now - timedelta(hours=1))
        headers = auth_headers(family.id)

        response = await client.get(
            "/api/medicine-logs", params={"baby_id": str(baby.id)}, headers=headers
        )
        assert [log["id"] for log in response.json()["logs"]] == [
            str(newer.id),
            str(older.id),
        ]

        response = await client.delete(f"/api/medicine-logs/{newer.id}", headers=headers)
        assert response.status_code == 204

        response = await client.get("/api/medicine-logs", headers=headers)
        assert response.json()["count"] == 1

    async def test_update_dose_amount(self, client, db_session, family, baby):
        medicine = await add_medicine(db_session, family.id)
        log = await add_dose(db_session, medicine, baby, datetime.now(UTC))

        response = await client.patch(
            f"/api/medicine-logs/{log.id}",
            json={"dose_amount": 7.5},
            headers=auth_headers(family.id),
        )

        assert response.status_code == 200
        assert response.json()["dose_amount"] == 7.5


class TestActiveDoses:
    """Tests for GET /api/medicine-logs/active-doses."""

    async def test_active_doses(self, client, db_session, family, baby):
        now = datetime.now(UTC)
        waiting = await add_medicine(db_session, family.id, "Paracetamol", "0:04:00")
        safe = await add_medicine(db_session, family.id, "Vitamin D", "0:01:00")
        await add_dose(db_session, waiting, baby, now - timedelta(hours=1))
        await add_dose(db_session, safe, baby, now - timedelta(hours=2))
        await add_dose(db_session, safe, baby, now - timedelta(hours=10))
        await add_dose(db_session, safe, baby, now - timedelta(hours=30))

        response = await client.get(
            "/api/medicine-logs/active-doses",
            params={"baby_id": str(baby.id)},
            headers=auth_headers(family.id),
        )

        assert response.status_code == 200
        data = response.json()
        assert data["refresh_interval_seconds"] == 60
        names = [d["medicine_name"] for d in data["doses"]]
        assert names == ["Paracetamol", "Vitamin D"]
        assert data["doses"][0]["is_safe"] is False
        assert data["doses"][1]["is_safe"] is True
        assert data["doses"][1]["total_in_24_hours"] == 10
        assert data["doses"][1]["unit_abbr"] == "mg"

    async def test_deleted_doses_are_ignored(self, client, db_session, family, baby):
        medicine = await add_medicine(db_session, family.id)
        log = await add_dose(db_session, medicine, baby, datetime.now(UTC))
        headers = auth_headers(family.id)
        await client.delete(f"/api/medicine-logs/{log.id}", headers=headers)

        response = await client.get(
            "/api/medicine-logs/active-doses",
            params={"baby_id": str(baby.id)},
            headers=headers,
        )

        assert response.json()["doses"] == []

    async def test_malformed_stored_interval_is_safe(self, client, db_session, family, baby):
        medicine = await add_medicine(db_session, family.id, dose_min_time="abc")
        await add_dose(db_session, medicine, baby, datetime.now(UTC))

        response = await client.get(
            "/api/medicine-logs/active-doses",
            params={"baby_id": str(baby.id)},
            headers=auth_headers(family.id),
        )

        dose = response.json()["doses"][0]
        assert dose["is_safe"] is True
        assert dose["minutes_remaining"] == 0
        assert dose["status"] == "Safe"
