"""
Report Schemas
Request/response models for report generation and the weekly analytics view
"""

from datetime import date, datetime
from typing import Any, Dict, List

from pydantic import model_validator

from neurorelief.models.report import ReportType
from neurorelief.schemas.common import CamelModel, RecordResponse


class ReportGenerateRequest(CamelModel):
    start_date: date
    end_date: date
    report_type: ReportType = ReportType.CUSTOM

    @model_validator(mode="after")
    def _check_range(self):
        if self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        return self


class MedicalReportResponse(RecordResponse):
    id: int
    user_id: str
    report_type: str
    start_date: date
    end_date: date
    # Stored payload is already camelCase and returned as-is
    report_data: Dict[str, Any]
    generated_at: datetime


class DayIntensity(CamelModel):
    day: str
    intensity: int


class WeeklyStatsResponse(CamelModel):
    episode_count: int
    avg_duration: float
    medication_count: int
    weekly_data: List[DayIntensity]
