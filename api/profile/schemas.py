from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_core import PydanticCustomError

from utils import parse_skills, to_utc_naive


SOCIAL_FIELDS = ("youtube", "twitter", "instagram", "linkedin", "facebook")


def _required(value: str, message: str) -> str:
    if not value or not value.strip():
        raise PydanticCustomError("required", message)
    return value


class ProfileUpsertRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    status: str = Field(default="", validate_default=True, description="Current professional status")
    skills: list[str] | str = Field(
        default="",
        validate_default=True,
        description="List of skills or a comma-separated string, e.g. 'python, go, sql'",
    )
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    githubusername: str | None = None

    youtube: str | None = None
    twitter: str | None = None
    instagram: str | None = None
    linkedin: str | None = None
    facebook: str | None = None

    @field_validator("status")
    @classmethod
    def _status_required(cls, value: str) -> str:
        return _required(value, "Status is required")

    @field_validator("skills")
    @classmethod
    def _skills_required(cls, value: list[str] | str) -> list[str] | str:
        if isinstance(value, list):
            if not value:
                raise PydanticCustomError("required", "Skills is required")
            return value
        if not parse_skills(value):
            raise PydanticCustomError("required", "Skills is required")
        return value


class _DatedEntryRequest(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    from_: datetime | date | None = Field(default=None, alias="from", validate_default=True)
    to: datetime | date | None = None
    current: bool = False
    description: str | None = None

    @field_validator("from_")
    @classmethod
    def _from_required(cls, value: datetime | date | None) -> datetime:
        if value is None:
            raise PydanticCustomError("required", "From date is required")
        return to_utc_naive(value)

    @field_validator("to")
    @classmethod
    def _normalize_to(cls, value: datetime | date | None) -> datetime | None:
        return to_utc_naive(value) if value is not None else None

    @model_validator(mode="after")
    def _from_before_to(self):
        if self.to is not None and not self.from_ < self.to:
            raise PydanticCustomError("date_order", "From date must be before to date")
        return self

    def to_entry(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class ExperienceRequest(_DatedEntryRequest):
    title: str = Field(default="", validate_default=True)
    company: str = Field(default="", validate_default=True)
    location: str | None = None

    @field_validator("title")
    @classmethod
    def _title_required(cls, value: str) -> str:
        return _required(value, "Title is required")

    @field_validator("company")
    @classmethod
    def _company_required(cls, value: str) -> str:
        return _required(value, "Company is required")


class EducationRequest(_DatedEntryRequest):
    school: str = Field(default="", validate_default=True)
    degree: str = Field(default="", validate_default=True)
    fieldofstudy: str = Field(default="", validate_default=True)

    @field_validator("school")
    @classmethod
    def _school_required(cls, value: str) -> str:
        return _required(value, "School is required")

    @field_validator("degree")
    @classmethod
    def _degree_required(cls, value: str) -> str:
        return _required(value, "Degree is required")

    @field_validator("fieldofstudy")
    @classmethod
    def _fieldofstudy_required(cls, value: str) -> str:
        return _required(value, "Field of study is required")


class MessageResponse(BaseModel):
    msg: str
