"""
Shared schema building blocks
Field types reused by the create and update schema of every entity
"""

from datetime import datetime
from typing import Annotated, Any, Dict, Iterable, List

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def to_local_naive(value: datetime) -> datetime:
    """Offset-aware timestamps are stored as naive server-local time."""
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


LocalDateTime = Annotated[datetime, AfterValidator(to_local_naive)]

# 1-10 scales: intensity, severity, effectiveness, functional impact
Scale10 = Annotated[int, Field(ge=1, le=10)]

Label = Annotated[str, Field(min_length=1, max_length=200)]
LabelList = List[Label]

RequiredText = Annotated[str, Field(min_length=1, max_length=255)]


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )

    def to_record(self, partial: bool = False) -> Dict[str, Any]:
        """Column values for the storage layer; partial keeps only fields the client sent."""
        return self.model_dump(exclude_unset=partial)


class RecordResponse(CamelModel):
    model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseModel):
    message: str


def reject_nulls(model: BaseModel, fields: Iterable[str]) -> None:
    """Partial updates may omit a required column but may not null it out."""
    for name in fields:
        if name in model.model_fields_set and getattr(model, name) is None:
            raise ValueError(f"{to_camel(name)} cannot be null")
