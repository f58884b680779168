"""
Weekly analytics and medication effectiveness
"""

from datetime import date, datetime, timedelta

import pytest

from neurorelief.services.analytics import (
    AnalyticsService,
    average_duration_hours,
    build_weekly_data,
    round_half_up,
)

# Wednesday
NOW = datetime(2024, 5, 15, 12, 0)


@pytest.fixture
def analytics(storage):
    return AnalyticsService(storage)


def add_episode(storage, user_id, start, hours=None, intensity=5):
    end = start + timedelta(hours=hours) if hours is not None else None
    return storage.create_episode(user_id, {
        "start_time": start,
        "end_time": end,
        "intensity": intensity,
        "symptoms": [],
        "triggers": [],
    })


class TestRounding:
    def test_halves_round_up(self):
        assert round_half_up(2.25, 1) == 2.3
        assert round_half_up(62.5) == 63
        assert round_half_up(0.0, 1) == 0.0

    def test_effectiveness_percent(self):
        assert AnalyticsService.effectiveness_percent(6.0) == 60
        assert AnalyticsService.effectiveness_percent(6.25) == 63
        assert AnalyticsService.effectiveness_percent(0.0) == 0


class TestWeeklyData:
    def test_labels_oldest_first_ending_today(self):
        weekly = build_weekly_data([], NOW.date())

        assert [entry["day"] for entry in weekly] == ["Thu", "Fri", "Sat", "Sun", "Mon", "Tue", "Today"]
        assert all(entry["intensity"] == 0 for entry in weekly)

    def test_peak_intensity_per_day(self, storage, user_a):
        yesterday = NOW - timedelta(days=1)
        episodes = [
            add_episode(storage, user_a.id, yesterday.replace(hour=8), intensity=3),
            add_episode(storage, user_a.id, yesterday.replace(hour=18), intensity=8),
        ]

        weekly = build_weekly_data(episodes, date(2024, 5, 15))

        assert weekly[5] == {"day": "Tue", "intensity": 8}
        assert weekly[6] == {"day": "Today", "intensity": 0}


class TestAverageDuration:
    def test_open_episodes_are_left_out(self, storage, user_a):
        episodes = [
            add_episode(storage, user_a.id, NOW - timedelta(hours=5), hours=2),
            add_episode(storage, user_a.id, NOW - timedelta(hours=1)),
        ]
        assert average_duration_hours(episodes) == 2.0

    def test_no_finished_episodes(self, storage, user_a):
        episodes = [add_episode(storage, user_a.id, NOW - timedelta(hours=1))]
        assert average_duration_hours(episodes) == 0.0
        assert average_duration_hours([]) == 0.0


class TestWeeklyStats:
    def test_empty_week(self, analytics, user_a):
        stats = analytics.get_weekly_stats(user_a.id, now=NOW)

        assert stats["episode_count"] == 0
        assert stats["avg_duration"] == 0.0
        assert stats["medication_count"] == 0
        assert len(stats["weekly_data"]) == 7
        assert stats["weekly_data"][-1] == {"day": "Today", "intensity": 0}

    def test_single_episode_today(self, analytics, storage, user_a):
        add_episode(storage, user_a.id, NOW - timedelta(hours=3), hours=2, intensity=5)

        stats = analytics.get_weekly_stats(user_a.id, now=NOW)

        assert stats["episode_count"] == 1
        assert stats["avg_duration"] == 2.0
        assert stats["weekly_data"][-1] == {"day": "Today", "intensity": 5}

    def test_episodes_outside_window_ignored(self, analytics, storage, user_a):
        add_episode(storage, user_a.id, NOW - timedelta(days=10), hours=4, intensity=9)
        add_episode(storage, user_a.id, NOW - timedelta(days=2), hours=1, intensity=4)

        stats = analytics.get_weekly_stats(user_a.id, now=NOW)

        assert stats["episode_count"] == 1
        assert stats["avg_duration"] == 1.0
        assert max(entry["intensity"] for entry in stats["weekly_data"]) == 4

    def test_medication_logs_counted_in_window(self, analytics, storage, user_a):
        storage.create_medication_log(user_a.id, {"taken_at": NOW - timedelta(days=1), "effectiveness": 7})
        storage.create_medication_log(user_a.id, {"taken_at": NOW - timedelta(days=8), "effectiveness": 3})

        stats = analytics.get_weekly_stats(user_a.id, now=NOW)

        assert stats["medication_count"] == 1

    def test_other_users_data_excluded(self, analytics, storage, user_a, user_b):
        add_episode(storage, user_b.id, NOW - timedelta(hours=2), hours=1, intensity=9)

        stats = analytics.get_weekly_stats(user_a.id, now=NOW)

        assert stats["episode_count"] == 0
        assert stats["weekly_data"][-1]["intensity"] == 0


class TestMedicationEffectiveness:
    def test_mean_of_logged_scores(self, analytics, storage, user_a):
        medication = storage.create_medication(user_a.id, {"name": "Sumatriptan", "dosage": "50mg", "frequency": "as-needed"})
        for score in (4, 8, 6):
            storage.create_medication_log(user_a.id, {
                "medication_id": medication.id,
                "taken_at": NOW,
                "effectiveness": score,
            })

        mean = analytics.get_medication_effectiveness(user_a.id, medication.id)

        assert mean == 6.0
        assert analytics.effectiveness_percent(mean) == 60

    def test_unrated_logs_ignored(self, analytics, storage, user_a):
        medication = storage.create_medication(user_a.id, {"name": "Ibuprofen", "dosage": "400mg", "frequency": "as-needed"})
        storage.create_medication_log(user_a.id, {"medication_id": medication.id, "taken_at": NOW})

        assert analytics.get_medication_effectiveness(user_a.id, medication.id) == 0.0
