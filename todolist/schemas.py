from datetime import datetime, timezone

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def _required_title(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("title is required")
    return value


class TaskCreate(BaseModel):
    title: str
    description: str = ""

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        return _required_title(v)


class TaskUpdate(BaseModel):
    title: str | None = None
    description: str | None = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str | None) -> str | None:
        return None if v is None else _required_title(v)


class TaskToggle(BaseModel):
    completed: bool


class TaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str
    completed: bool
    created_at: datetime = Field(
        validation_alias=AliasChoices("created_at", "createdAt"),
        serialization_alias="createdAt",
    )

    @field_validator("created_at")
    @classmethod
    def created_at_utc(cls, v: datetime) -> datetime:
        # SQLite hands stored timestamps back without tzinfo; they are always UTC
        return v.replace(tzinfo=timezone.utc) if v.tzinfo is None else v


class TaskDeleted(BaseModel):
    message: str
    id: str
