from datetime import datetime
from typing import List, Optional

from pydantic import Field, model_validator

from neurorelief.schemas.common import (
    CamelModel,
    LabelList,
    LocalDateTime,
    RecordResponse,
    RequiredText,
    Scale10,
    reject_nulls,
)


class MedicationCreate(CamelModel):
    name: RequiredText
    dosage: RequiredText
    frequency: RequiredText
    side_effects: Optional[LabelList] = None
    is_active: bool = True


class MedicationUpdate(CamelModel):
    name: Optional[RequiredText] = None
    dosage: Optional[RequiredText] = None
    frequency: Optional[RequiredText] = None
    side_effects: Optional[LabelList] = None
    is_active: Optional[bool] = None

    @model_validator(mode="after")
    def _check_fields(self):
        reject_nulls(self, ("name", "dosage", "frequency", "is_active"))
        return self


class MedicationResponse(RecordResponse):
    id: int
    user_id: str
    name: str
    dosage: str
    frequency: str
    side_effects: Optional[List[str]] = None
    is_active: Optional[bool] = None
    created_at: Optional[datetime] = None


class MedicationLogCreate(CamelModel):
    medication_id: Optional[int] = None
    episode_id: Optional[int] = None
    taken_at: LocalDateTime = Field(default_factory=datetime.now)
    effectiveness: Optional[Scale10] = None
    notes: Optional[str] = None


class MedicationLogResponse(RecordResponse):
    id: int
    user_id: str
    medication_id: Optional[int] = None
    episode_id: Optional[int] = None
    taken_at: datetime
    effectiveness: Optional[int] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None


class EffectivenessResponse(CamelModel):
    """Mean effectiveness on a 0-100 display scale"""
    effectiveness: int
