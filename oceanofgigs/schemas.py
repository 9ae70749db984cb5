from datetime import datetime
from pydantic import BaseModel, ConfigDict, EmailStr, Field, StrictInt, model_validator
from pydantic.alias_generators import to_camel

from .models import ApplicationStatus, UserRole


class CamelModel(BaseModel):
    # JSON speaks camelCase; snake_case is accepted too
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# Users
class UserCreate(CamelModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=8)
    role: UserRole
    name: str = Field(min_length=1)
    email: EmailStr
    photo: str | None = None
    about: str | None = None
    university: str | None = None
    major: str | None = None
    graduation_year: str | None = None
    company: str | None = None
    location: str | None = None


class UserUpdate(CamelModel):
    """Partial profile update. ``username`` and ``role`` are fixed at signup."""

    password: str | None = Field(None, min_length=8)
    name: str | None = Field(None, min_length=1)
    email: EmailStr | None = None
    photo: str | None = None
    about: str | None = None
    university: str | None = None
    major: str | None = None
    graduation_year: str | None = None
    company: str | None = None
    location: str | None = None

    @model_validator(mode="after")
    def _required_fields_not_null(self) -> "UserUpdate":
        for field in ("password", "name", "email"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class UserOut(CamelModel):
    id: int
    username: str
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


# Skills
class SkillCreate(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=100)


class SkillOut(CamelModel):
    id: int
    name: str


class SkillLink(CamelModel):
    skill_id: StrictInt


class UserSkillOut(CamelModel):
    id: int
    user_id: int
    skill_id: int


class UserWithSkillsOut(UserOut):
    skills: list[SkillOut] = Field(default_factory=list)


# Gigs
class GigCreate(CamelModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    min_price: int = Field(ge=0)
    max_price: int | None = Field(None, ge=0)
    is_price_hourly: bool = False
    estimated_hours: str | None = None
    recruiter_id: StrictInt
    company_name: str = Field(min_length=1)

    @model_validator(mode="after")
    def _price_range(self) -> "GigCreate":
        if self.max_price is not None and self.max_price < self.min_price:
            raise ValueError("maxPrice must be greater than or equal to minPrice")
        return self


class GigOut(CamelModel):
    id: int
    title: str
    description: str
    min_price: int
    max_price: int | None = None
    is_price_hourly: bool
    estimated_hours: str | None = None
    recruiter_id: int
    company_name: str
    created_at: datetime


class GigWithSkillsOut(GigOut):
    skills: list[SkillOut] = Field(default_factory=list)


class GigSkillOut(CamelModel):
    id: int
    gig_id: int
    skill_id: int


# Applications
class ApplicationCreate(CamelModel):
    gig_id: StrictInt
    student_id: StrictInt
    cover_letter: str | None = None


class ApplicationStatusUpdate(CamelModel):
    status: ApplicationStatus


class ApplicationOut(CamelModel):
    id: int
    gig_id: int
    student_id: int
    status: ApplicationStatus
    cover_letter: str | None = None
    created_at: datetime


# Saved items
class SavedItemCreate(CamelModel):
    user_id: StrictInt
    gig_id: StrictInt | None = None
    saved_user_id: StrictInt | None = None

    @model_validator(mode="after")
    def _exactly_one_target(self) -> "SavedItemCreate":
        if (self.gig_id is None) == (self.saved_user_id is None):
            raise ValueError("exactly one of gigId or savedUserId must be set")
        return self


class SavedItemOut(CamelModel):
    id: int
    user_id: int
    gig_id: int | None = None
    saved_user_id: int | None = None
    created_at: datetime
