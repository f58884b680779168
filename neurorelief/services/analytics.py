"""
Analytics Service
Weekly episode statistics and per-medication effectiveness

All aggregations degrade to zero-valued results on empty input.
"""

import math
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional, Sequence

from neurorelief.models import Episode
from neurorelief.services.storage import DatabaseStorage

WINDOW_DAYS = 7

# Indexed by date.weekday()
WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with halves going up (2.25 -> 2.3), unlike round()'s banker's rounding."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def average_duration_hours(episodes: Sequence[Episode]) -> float:
    """
    Mean episode length in hours.
    Episodes still in progress (no end time) are left out entirely.
    """
    durations = [
        episode.duration_hours()
        for episode in episodes
        if episode.end_time is not None
    ]
    if not durations:
        return 0.0
    return sum(durations) / len(durations)


def build_weekly_data(episodes: Sequence[Episode], today: date) -> List[Dict[str, Any]]:
    """
    Peak intensity per calendar day for the last 7 days, oldest first.
    Days are matched on the local calendar date of the episode start.
    """
    peaks: Dict[date, int] = {}
    for episode in episodes:
        day = episode.start_time.date()
        peaks[day] = max(peaks.get(day, 0), episode.intensity)

    weekly_data = []
    for offset in range(WINDOW_DAYS - 1, -1, -1):
        day = today - timedelta(days=offset)
        weekly_data.append({
            "day": "Today" if offset == 0 else WEEKDAY_LABELS[day.weekday()],
            "intensity": peaks.get(day, 0),
        })
    return weekly_data


class AnalyticsService:
    def __init__(self, storage: DatabaseStorage):
        self.storage = storage

    def get_weekly_stats(self, user_id: str, now: Optional[datetime] = None) -> Dict[str, Any]:
        """
        Stats over the trailing 7 days ending at `now`.

        Returns:
            {"episode_count", "avg_duration", "medication_count", "weekly_data"}
        """
        now = now or datetime.now()
        week_ago = now - timedelta(days=WINDOW_DAYS)

        episode_count = self.storage.count_episodes_since(user_id, week_ago)
        medication_count = self.storage.count_medication_logs_since(user_id, week_ago)
        weekly_episodes = self.storage.get_episodes_by_date_range(user_id, week_ago, now)

        return {
            "episode_count": episode_count,
            "avg_duration": round_half_up(average_duration_hours(weekly_episodes), 1),
            "medication_count": medication_count,
            "weekly_data": build_weekly_data(weekly_episodes, now.date()),
        }

    def get_medication_effectiveness(self, user_id: str, medication_id: int) -> float:
        """Mean effectiveness on the 1-10 scale, 0 when nothing was rated"""
        return self.storage.get_medication_effectiveness(user_id, medication_id)

    @staticmethod
    def effectiveness_percent(mean_effectiveness: float) -> int:
        """1-10 mean -> 0-100 display value"""
        return int(round_half_up(mean_effectiveness * 10))
