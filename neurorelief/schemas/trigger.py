from datetime import datetime
from typing import Annotated, Optional

from pydantic import Field

from neurorelief.schemas.common import CamelModel, LocalDateTime, RecordResponse, RequiredText

CorrelationScore = Annotated[float, Field(ge=0, le=1)]


class TriggerCreate(CamelModel):
    name: RequiredText
    category: RequiredText
    correlation_score: Optional[CorrelationScore] = None
    frequency: int = Field(0, ge=0)
    last_occurrence: Optional[LocalDateTime] = None


class TriggerCorrelationUpdate(CamelModel):
    correlation_score: CorrelationScore


class TriggerResponse(RecordResponse):
    id: int
    user_id: str
    name: str
    category: str
    correlation_score: Optional[float] = None
    frequency: Optional[int] = None
    last_occurrence: Optional[datetime] = None
    created_at: Optional[datetime] = None
