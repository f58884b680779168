"""
Storage layer: per-user scoping, ordering and limits
"""

from datetime import datetime, timedelta

import pytest

from neurorelief.core.error_handling import NotFoundError, ValidationFailure
from neurorelief.models import MedicalLogType

BASE = datetime(2024, 3, 1, 9, 0)


def make_episode(storage, user_id, start, intensity=5):
    return storage.create_episode(user_id, {"start_time": start, "intensity": intensity})


class TestUsers:
    def test_upsert_creates_then_updates(self, storage):
        created = storage.upsert_user("user_x", email="x@test.com")
        assert created.first_name is None

        updated = storage.upsert_user("user_x", first_name="Xan")

        assert updated.email == "x@test.com"
        assert updated.first_name == "Xan"
        assert storage.get_user("user_x").first_name == "Xan"

    def test_unknown_user(self, storage):
        assert storage.get_user("nobody") is None

    def test_register_with_email_held_by_another_user(self, storage):
        storage.register_user("subject_one", email="shared@test.com")

        second = storage.register_user("subject_two", email="shared@test.com", first_name="Sam")

        assert second.id == "subject_two"
        assert second.email is None
        assert second.first_name == "Sam"
        assert storage.get_user("subject_one").email == "shared@test.com"

    def test_register_same_subject_twice(self, storage):
        first = storage.register_user("subject_one", email="one@test.com", first_name="Ola")

        again = storage.register_user("subject_one", email="one@test.com", first_name="Other")

        assert again.id == first.id
        assert again.first_name == "Ola"
        assert again.email == "one@test.com"


class TestEpisodes:
    def test_newest_first_with_limit(self, storage, user_a):
        for day in range(5):
            make_episode(storage, user_a.id, BASE + timedelta(days=day), intensity=day + 1)

        episodes = storage.get_episodes(user_a.id, limit=3)

        assert [e.intensity for e in episodes] == [5, 4, 3]

    def test_list_is_scoped_to_user(self, storage, user_a, user_b):
        make_episode(storage, user_a.id, BASE)
        make_episode(storage, user_b.id, BASE)

        assert len(storage.get_episodes(user_a.id)) == 1
        assert all(e.user_id == user_a.id for e in storage.get_episodes(user_a.id))

    def test_date_range_is_inclusive(self, storage, user_a):
        make_episode(storage, user_a.id, BASE)
        make_episode(storage, user_a.id, BASE + timedelta(days=1))
        make_episode(storage, user_a.id, BASE + timedelta(days=2))

        episodes = storage.get_episodes_by_date_range(user_a.id, BASE, BASE + timedelta(days=1))

        assert len(episodes) == 2

    def test_update_other_users_episode(self, storage, user_a, user_b):
        episode = make_episode(storage, user_a.id, BASE)

        with pytest.raises(NotFoundError):
            storage.update_episode(user_b.id, episode.id, {"intensity": 1})

        assert storage.get_episode(user_a.id, episode.id).intensity == 5

    def test_update_checked_against_stored_start(self, storage, user_a):
        episode = make_episode(storage, user_a.id, BASE)
        storage.update_episode(user_a.id, episode.id, {"end_time": BASE + timedelta(hours=2)})

        with pytest.raises(ValidationFailure):
            storage.update_episode(user_a.id, episode.id, {"start_time": BASE + timedelta(hours=3)})

        stored = storage.get_episode(user_a.id, episode.id)
        assert stored.start_time == BASE
        assert stored.end_time == BASE + timedelta(hours=2)

    def test_update_sets_end_time(self, storage, user_a):
        episode = make_episode(storage, user_a.id, BASE)

        updated = storage.update_episode(user_a.id, episode.id, {"end_time": BASE + timedelta(hours=4)})

        assert updated.duration_hours() == 4.0
        assert updated.intensity == 5

    def test_default_limit(self, storage, user_a):
        for minute in range(55):
            make_episode(storage, user_a.id, BASE + timedelta(minutes=minute))

        assert len(storage.get_episodes(user_a.id)) == 50


class TestMedications:
    def test_deactivated_medication_hidden(self, storage, user_a):
        kept = storage.create_medication(user_a.id, {"name": "Topiramate", "dosage": "25mg", "frequency": "daily"})
        dropped = storage.create_medication(user_a.id, {"name": "Naproxen", "dosage": "500mg", "frequency": "as-needed"})

        storage.deactivate_medication(user_a.id, dropped.id)

        assert [m.id for m in storage.get_medications(user_a.id)] == [kept.id]
        assert storage.get_medication(user_a.id, dropped.id).is_active is False

    def test_effectiveness_scoped_to_user(self, storage, user_a, user_b):
        medication = storage.create_medication(user_a.id, {"name": "Topiramate", "dosage": "25mg", "frequency": "daily"})
        storage.create_medication_log(user_a.id, {"medication_id": medication.id, "taken_at": BASE, "effectiveness": 9})

        assert storage.get_medication_effectiveness(user_b.id, medication.id) == 0.0


class TestTriggers:
    def test_ordered_by_correlation_nulls_last(self, storage, user_a):
        for name, score in [("Unscored", None), ("Low", 0.1), ("High", 0.8)]:
            storage.create_trigger(user_a.id, {"name": name, "category": "other", "correlation_score": score})

        assert [t.name for t in storage.get_triggers(user_a.id)] == ["High", "Low", "Unscored"]

    def test_update_correlation(self, storage, user_a, user_b):
        trigger = storage.create_trigger(user_a.id, {"name": "Caffeine", "category": "food"})

        assert storage.update_trigger_correlation(user_a.id, trigger.id, 0.55).correlation_score == 0.55
        with pytest.raises(NotFoundError):
            storage.update_trigger_correlation(user_b.id, trigger.id, 0.1)


class TestMedicalLogs:
    def test_filters(self, storage, user_a):
        episode = make_episode(storage, user_a.id, BASE)
        storage.create_medical_log(user_a.id, {
            "episode_id": episode.id,
            "log_type": MedicalLogType.SYMPTOMS.value,
            "symptoms": ["Nausea", "Aura"],
        })
        storage.create_medical_log(user_a.id, {"log_type": MedicalLogType.VITALS.value})

        by_episode = storage.get_medical_logs_by_episode(user_a.id, episode.id)
        by_type = storage.get_medical_logs_by_type(user_a.id, "vitals")

        assert len(by_episode) == 1
        assert by_episode[0].symptoms == ["Nausea", "Aura"]
        assert len(by_type) == 1
        assert len(storage.get_medical_logs(user_a.id)) == 2

    def test_delete_other_users_log(self, storage, user_a, user_b):
        log = storage.create_medical_log(user_a.id, {"log_type": "assessment"})

        with pytest.raises(NotFoundError):
            storage.delete_medical_log(user_b.id, log.id)

        assert len(storage.get_medical_logs(user_a.id)) == 1

        storage.delete_medical_log(user_a.id, log.id)
        assert storage.get_medical_logs(user_a.id) == []


class TestAssessmentTemplates:
    def test_inactive_templates_hidden(self, storage, user_a):
        template = storage.create_assessment_template(user_a.id, {
            "template_name": "Daily check-in",
            "template_type": "daily",
            "questions": [{"id": "q1", "text": "Pain level?"}],
        })
        assert [t.id for t in storage.get_assessment_templates(user_a.id)] == [template.id]

        storage.update_assessment_template(user_a.id, template.id, {"is_active": False})

        assert storage.get_assessment_templates(user_a.id) == []
