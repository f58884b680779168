from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import Field, field_serializer, model_validator

from neurorelief.models.medical_log import MedicalLogType
from neurorelief.schemas.common import (
    CamelModel,
    LabelList,
    RecordResponse,
    RequiredText,
    Scale10,
    reject_nulls,
)


class VitalSigns(CamelModel):
    blood_pressure: Optional[str] = Field(None, max_length=20)  # "120/80"
    heart_rate: Optional[float] = Field(None, gt=0, le=300)
    temperature: Optional[float] = Field(None, ge=25, le=45)  # Celsius


def dump_vital_signs(value: Optional[VitalSigns]) -> Optional[Dict[str, Any]]:
    """vital_signs is persisted as camelCase JSON"""
    if value is None:
        return None
    return value.model_dump(by_alias=True, exclude_none=True)


class MedicalLogCreate(CamelModel):
    episode_id: Optional[int] = None
    log_type: MedicalLogType
    severity: Optional[Scale10] = None
    vital_signs: Optional[VitalSigns] = None
    symptoms: LabelList = Field(default_factory=list)
    pain_location: Optional[str] = None
    pain_quality: Optional[str] = None
    associated_symptoms: LabelList = Field(default_factory=list)
    triggers: LabelList = Field(default_factory=list)
    medication_response: Optional[Scale10] = None
    functional_impact: Optional[Scale10] = None
    environmental_factors: LabelList = Field(default_factory=list)
    notes: Optional[str] = None

    @field_serializer("vital_signs")
    def _serialize_vital_signs(self, value: Optional[VitalSigns]):
        return dump_vital_signs(value)


class MedicalLogUpdate(CamelModel):
    episode_id: Optional[int] = None
    log_type: Optional[MedicalLogType] = None
    severity: Optional[Scale10] = None
    vital_signs: Optional[VitalSigns] = None
    symptoms: Optional[LabelList] = None
    pain_location: Optional[str] = None
    pain_quality: Optional[str] = None
    associated_symptoms: Optional[LabelList] = None
    triggers: Optional[LabelList] = None
    medication_response: Optional[Scale10] = None
    functional_impact: Optional[Scale10] = None
    environmental_factors: Optional[LabelList] = None
    notes: Optional[str] = None

    @field_serializer("vital_signs")
    def _serialize_vital_signs(self, value: Optional[VitalSigns]):
        return dump_vital_signs(value)

    @model_validator(mode="after")
    def _check_fields(self):
        reject_nulls(self, ("log_type",))
        return self


class MedicalLogResponse(RecordResponse):
    id: int
    user_id: str
    episode_id: Optional[int] = None
    log_type: str
    severity: Optional[int] = None
    vital_signs: Optional[Dict[str, Any]] = None
    symptoms: Optional[List[str]] = None
    pain_location: Optional[str] = None
    pain_quality: Optional[str] = None
    associated_symptoms: Optional[List[str]] = None
    triggers: Optional[List[str]] = None
    medication_response: Optional[int] = None
    functional_impact: Optional[int] = None
    environmental_factors: Optional[List[str]] = None
    notes: Optional[str] = None
    timestamp: datetime
    created_at: Optional[datetime] = None


class AssessmentTemplateCreate(CamelModel):
    template_name: RequiredText
    template_type: RequiredText  # pre_episode, during_episode, post_episode
    questions: List[Dict[str, Any]] = Field(..., min_length=1)
    is_active: bool = True


class AssessmentTemplateUpdate(CamelModel):
    template_name: Optional[RequiredText] = None
    template_type: Optional[RequiredText] = None
    questions: Optional[List[Dict[str, Any]]] = Field(None, min_length=1)
    is_active: Optional[bool] = None

    @model_validator(mode="after")
    def _check_fields(self):
        reject_nulls(self, ("template_name", "template_type", "questions", "is_active"))
        return self


class AssessmentTemplateResponse(RecordResponse):
    id: int
    user_id: str
    template_name: str
    template_type: str
    questions: List[Dict[str, Any]]
    is_active: Optional[bool] = None
    created_at: Optional[datetime] = None
