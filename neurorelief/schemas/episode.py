from datetime import datetime
from typing import List, Optional

from pydantic import Field, model_validator

from neurorelief.schemas.common import (
    CamelModel,
    LabelList,
    LocalDateTime,
    RecordResponse,
    Scale10,
    reject_nulls,
)


def check_episode_window(start_time: Optional[datetime], end_time: Optional[datetime]) -> None:
    if start_time is not None and end_time is not None and end_time < start_time:
        raise ValueError("endTime must not be before startTime")


class EpisodeCreate(CamelModel):
    start_time: LocalDateTime = Field(default_factory=datetime.now)
    end_time: Optional[LocalDateTime] = None
    intensity: Scale10
    symptoms: LabelList = Field(default_factory=list)
    triggers: LabelList = Field(default_factory=list)
    notes: Optional[str] = None
    is_emergency: bool = False

    @model_validator(mode="after")
    def _check_window(self):
        check_episode_window(self.start_time, self.end_time)
        return self


class EpisodeUpdate(CamelModel):
    start_time: Optional[LocalDateTime] = None
    end_time: Optional[LocalDateTime] = None
    intensity: Optional[Scale10] = None
    symptoms: Optional[LabelList] = None
    triggers: Optional[LabelList] = None
    notes: Optional[str] = None
    is_emergency: Optional[bool] = None

    @model_validator(mode="after")
    def _check_fields(self):
        reject_nulls(self, ("start_time", "intensity", "is_emergency"))
        check_episode_window(self.start_time, self.end_time)
        return self


class EpisodeResponse(RecordResponse):
    id: int
    user_id: str
    start_time: datetime
    end_time: Optional[datetime] = None
    intensity: int
    symptoms: Optional[List[str]] = None
    triggers: Optional[List[str]] = None
    notes: Optional[str] = None
    is_emergency: Optional[bool] = None
    created_at: Optional[datetime] = None
