"""
Medication, medication log and trigger API tests
"""

import pytest


@pytest.fixture
def as_user_a(login, user_a):
    login(user_a.id)
    return user_a


def create_medication(client, name="Sumatriptan"):
    response = client.post("/api/medications", json={
        "name": name,
        "dosage": "50mg",
        "frequency": "as-needed",
        "sideEffects": ["Drowsiness"],
    })
    assert response.status_code == 200
    return response.json()


class TestMedications:
    def test_create_and_list(self, client, as_user_a):
        medication = create_medication(client)

        assert medication["isActive"] is True
        assert medication["sideEffects"] == ["Drowsiness"]

        listed = client.get("/api/medications").json()
        assert [m["id"] for m in listed] == [medication["id"]]

    def test_missing_dosage(self, client, as_user_a):
        response = client.post("/api/medications", json={"name": "Aspirin", "frequency": "daily"})

        assert response.status_code == 400
        assert '"dosage"' in response.json()["message"]

    def test_update(self, client, as_user_a):
        medication = create_medication(client)

        response = client.patch(f"/api/medications/{medication['id']}", json={"dosage": "100mg"})

        assert response.status_code == 200
        assert response.json()["dosage"] == "100mg"
        assert response.json()["name"] == "Sumatriptan"

    def test_deactivate_hides_medication(self, client, as_user_a):
        medication = create_medication(client)

        response = client.delete(f"/api/medications/{medication['id']}")

        assert response.status_code == 200
        assert response.json() == {"message": "Medication deactivated successfully"}
        assert client.get("/api/medications").json() == []

    def test_deactivate_other_users_medication(self, client, login, user_a, user_b):
        login(user_a.id)
        medication = create_medication(client)

        login(user_b.id)
        response = client.delete(f"/api/medications/{medication['id']}")

        assert response.status_code == 404
        assert response.json() == {"message": "Medication not found"}


class TestEffectiveness:
    def test_effectiveness_percent(self, client, as_user_a):
        medication = create_medication(client)
        for score in (4, 8, 6):
            response = client.post("/api/medication-logs", json={
                "medicationId": medication["id"],
                "takenAt": "2024-05-15T10:00:00",
                "effectiveness": score,
            })
            assert response.status_code == 200

        response = client.get(f"/api/medications/{medication['id']}/effectiveness")

        assert response.status_code == 200
        assert response.json() == {"effectiveness": 60}

    def test_no_logs(self, client, as_user_a):
        medication = create_medication(client)

        response = client.get(f"/api/medications/{medication['id']}/effectiveness")

        assert response.json() == {"effectiveness": 0}

    def test_unknown_medication(self, client, as_user_a):
        response = client.get("/api/medications/9999/effectiveness")

        assert response.status_code == 404


class TestMedicationLogs:
    def test_taken_at_defaults_to_now(self, client, as_user_a):
        response = client.post("/api/medication-logs", json={"notes": "Took with water"})

        assert response.status_code == 200
        assert response.json()["takenAt"] is not None
        assert response.json()["medicationId"] is None

    def test_effectiveness_out_of_range(self, client, as_user_a):
        response = client.post("/api/medication-logs", json={"effectiveness": 0})

        assert response.status_code == 400

    def test_reference_to_other_users_medication(self, client, login, user_a, user_b):
        login(user_b.id)
        medication = create_medication(client)

        login(user_a.id)
        response = client.post("/api/medication-logs", json={"medicationId": medication["id"]})

        assert response.status_code == 400
        assert response.json()["message"].startswith("Validation error:")

    def test_list_newest_first(self, client, as_user_a):
        client.post("/api/medication-logs", json={"takenAt": "2024-05-01T08:00:00", "effectiveness": 2})
        client.post("/api/medication-logs", json={"takenAt": "2024-05-02T08:00:00", "effectiveness": 9})

        logs = client.get("/api/medication-logs").json()

        assert [log["effectiveness"] for log in logs] == [9, 2]


class TestTriggers:
    def test_ordered_by_correlation(self, client, as_user_a):
        client.post("/api/triggers", json={"name": "Bright light", "category": "environment"})
        client.post("/api/triggers", json={"name": "Stress", "category": "lifestyle", "correlationScore": 0.3})
        client.post("/api/triggers", json={"name": "Sleep loss", "category": "sleep", "correlationScore": 0.8})

        triggers = client.get("/api/triggers").json()

        assert [t["name"] for t in triggers] == ["Sleep loss", "Stress", "Bright light"]
        assert triggers[-1]["frequency"] == 0

    def test_correlation_out_of_range(self, client, as_user_a):
        response = client.post("/api/triggers", json={"name": "Wine", "category": "food", "correlationScore": 1.5})

        assert response.status_code == 400

    def test_update_correlation(self, client, as_user_a):
        trigger = client.post("/api/triggers", json={"name": "Wine", "category": "food"}).json()

        response = client.patch(f"/api/triggers/{trigger['id']}/correlation", json={"correlationScore": 0.65})

        assert response.status_code == 200
        assert response.json()["correlationScore"] == 0.65

    def test_storage_failure_is_generic_500(self, client, storage, as_user_a, monkeypatch):
        def broken(user_id):
            raise RuntimeError("connection reset")

        monkeypatch.setattr(storage, "get_triggers", broken)

        response = client.get("/api/triggers")

        assert response.status_code == 500
        assert response.json() == {"message": "Failed to fetch triggers"}
