"""
Report Generator
Builds a medical report snapshot for a date range and persists it in one insert

Payload layout (stored verbatim, camelCase keys):
    header       - company/product, report type, date range, generation time
    summary      - episode count, mean intensity, medication-log count, top triggers
    episodes     - one entry per episode started in range
    medications  - one entry per medication log taken in range
    triggers     - every trigger of the user, not range-filtered
"""

from datetime import date, datetime, time
from typing import Any, Dict, List, Optional, Sequence

from neurorelief.config import settings
from neurorelief.core.logging import log_audit
from neurorelief.models import Episode, MedicalReport, MedicationLog, ReportType, Trigger
from neurorelief.services.storage import DatabaseStorage

TOP_TRIGGER_COUNT = 3


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def average_intensity(episodes: Sequence[Episode]) -> float:
    if not episodes:
        return 0
    return sum(episode.intensity for episode in episodes) / len(episodes)


def build_summary(
    episodes: Sequence[Episode],
    medication_logs: Sequence[MedicationLog],
    triggers: Sequence[Trigger],
) -> Dict[str, Any]:
    return {
        "totalEpisodes": len(episodes),
        "avgIntensity": average_intensity(episodes),
        "totalMedications": len(medication_logs),
        "mostCommonTriggers": [trigger.name for trigger in triggers[:TOP_TRIGGER_COUNT]],
    }


def episode_entries(episodes: Sequence[Episode]) -> List[Dict[str, Any]]:
    return [
        {
            "date": _iso(episode.start_time),
            "intensity": episode.intensity,
            "duration": episode.duration_hours(),
            "symptoms": episode.symptoms or [],
            "triggers": episode.triggers or [],
        }
        for episode in episodes
    ]


def medication_entries(medication_logs: Sequence[MedicationLog]) -> List[Dict[str, Any]]:
    return [
        {
            "date": _iso(log.taken_at),
            "medication": log.medication_id,
            "effectiveness": log.effectiveness,
        }
        for log in medication_logs
    ]


def trigger_entries(triggers: Sequence[Trigger]) -> List[Dict[str, Any]]:
    return [
        {
            "name": trigger.name,
            "correlation": trigger.correlation_score,
            "frequency": trigger.frequency,
        }
        for trigger in triggers
    ]


class ReportGenerator:
    def __init__(self, storage: DatabaseStorage):
        self.storage = storage

    def build_payload(
        self,
        user_id: str,
        start_date: date,
        end_date: date,
        report_type: str,
        generated_at: datetime,
    ) -> Dict[str, Any]:
        # Both ends of the range are whole calendar days
        range_start = datetime.combine(start_date, time.min)
        range_end = datetime.combine(end_date, time.max)

        episodes = self.storage.get_episodes_by_date_range(user_id, range_start, range_end)
        medication_logs = self.storage.get_medication_logs_by_date_range(user_id, range_start, range_end)
        triggers = self.storage.get_triggers(user_id)

        return {
            "header": {
                "company": settings.REPORT_COMPANY,
                "product": settings.REPORT_PRODUCT,
                "reportType": report_type,
                "dateRange": {
                    "startDate": start_date.isoformat(),
                    "endDate": end_date.isoformat(),
                },
                "generatedAt": generated_at.isoformat(),
            },
            "summary": build_summary(episodes, medication_logs, triggers),
            "episodes": episode_entries(episodes),
            "medications": medication_entries(medication_logs),
            "triggers": trigger_entries(triggers),
        }

    def generate(
        self,
        user_id: str,
        start_date: date,
        end_date: date,
        report_type: str = ReportType.CUSTOM.value,
        now: Optional[datetime] = None,
    ) -> MedicalReport:
        """Assemble and persist a report. The returned record is never modified afterwards."""
        if end_date < start_date:
            raise ValueError("endDate must not be before startDate")

        report_type = ReportType(report_type).value
        generated_at = now or datetime.now()
        payload = self.build_payload(user_id, start_date, end_date, report_type, generated_at)

        report = self.storage.create_medical_report(user_id, {
            "report_type": report_type,
            "start_date": start_date,
            "end_date": end_date,
            "report_data": payload,
            "generated_at": generated_at,
        })

        log_audit("REPORT_GENERATED", user_id, {
            "report_id": report.id,
            "report_type": report_type,
            "start_date": start_date.isoformat(),
            "end_date": end_date.isoformat(),
            "episode_count": payload["summary"]["totalEpisodes"],
        })
        return report
