# oceanofgigs/models.py
from __future__ import annotations
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserRole(str, Enum):
    STUDENT = "student"
    RECRUITER = "recruiter"


class ApplicationStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class Record(BaseModel):
    """Base for every stored row: immutable, camelCase on the wire."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        validate_default=True,
    )

    id: int


class User(Record):
    username: str
    password: str  # passlib hash, see security.py
    role: UserRole
    name: str
    email: str
    photo: str | None = None
    about: str | None = None
    university: str | None = None
    major: str | None = None
    graduation_year: str | None = None
    company: str | None = None
    location: str | None = None


class Skill(Record):
    name: str


class UserSkill(Record):
    user_id: int
    skill_id: int


class Gig(Record):
    title: str
    description: str
    min_price: int
    max_price: int | None = None
    is_price_hourly: bool = False
    estimated_hours: str | None = None
    recruiter_id: int
    company_name: str
    created_at: datetime = Field(default_factory=_utcnow)


class GigSkill(Record):
    gig_id: int
    skill_id: int


class Application(Record):
    gig_id: int
    student_id: int
    status: ApplicationStatus = ApplicationStatus.PENDING
    cover_letter: str | None = None
    created_at: datetime = Field(default_factory=_utcnow)


class SavedItem(Record):
    user_id: int
    gig_id: int | None = None
    saved_user_id: int | None = None
    created_at: datetime = Field(default_factory=_utcnow)

    @model_validator(mode="after")
    def _exactly_one_target(self) -> "SavedItem":
        if (self.gig_id is None) == (self.saved_user_id is None):
            raise ValueError("exactly one of gigId or savedUserId must be set")
        return self


# --- Derived read models (built on demand, never stored) ---

class UserWithSkills(User):
    skills: list[Skill] = Field(default_factory=list)


class GigWithSkills(Gig):
    skills: list[Skill] = Field(default_factory=list)
