import uuid
from datetime import date
from typing import Annotated, Optional

from libs.common.datetime_utils import UTCDateTime
from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    StringConstraints,
    field_validator,
    model_validator,
)
from services.members_service.models.enums import Gender, MaritalStatus, Ministry

RequiredName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

REQUIRED_FIELDS = ("surname", "other_names", "email")
FLAG_FIELDS = ("saved_or_not", "baptism_status", "faith_declaration_status")


class MemberBase(BaseModel):
    phone: Optional[str] = None
    address: Optional[str] = None
    occupation: Optional[str] = None

    age: Optional[int] = Field(default=None, ge=0, le=150)
    gender: Optional[Gender] = None
    marital_status: Optional[MaritalStatus] = None
    number_of_children: Optional[int] = Field(default=None, ge=0)
    spouse_name: Optional[str] = None

    saved_or_not: bool = False
    baptism_status: bool = False
    baptism_date: Optional[date] = None
    faith_declaration_status: bool = False

    ministry_membership: Optional[Ministry] = None
    emergency_contact: Optional[str] = None


class MemberCreate(MemberBase):
    surname: RequiredName
    other_names: RequiredName
    email: EmailStr

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.lower()


class MemberUpdate(BaseModel):
    """Partial update; only fields present in the request are applied."""

    surname: Optional[RequiredName] = None
    other_names: Optional[RequiredName] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    occupation: Optional[str] = None

    age: Optional[int] = Field(default=None, ge=0, le=150)
    gender: Optional[Gender] = None
    marital_status: Optional[MaritalStatus] = None
    number_of_children: Optional[int] = Field(default=None, ge=0)
    spouse_name: Optional[str] = None

    saved_or_not: Optional[bool] = None
    baptism_status: Optional[bool] = None
    baptism_date: Optional[date] = None
    faith_declaration_status: Optional[bool] = None

    ministry_membership: Optional[Ministry] = None
    emergency_contact: Optional[str] = None

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: Optional[str]) -> Optional[str]:
        return v.lower() if v else v

    @model_validator(mode="after")
    def required_fields_not_cleared(self):
        for name in REQUIRED_FIELDS + FLAG_FIELDS:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be empty")
        return self


class MemberResponse(MemberBase):
    id: uuid.UUID
    surname: str
    other_names: str
    email: str
    owner: Optional[uuid.UUID] = None
    created_at: UTCDateTime
    updated_at: UTCDateTime

    model_config = ConfigDict(from_attributes=True)


class MemberListResponse(BaseModel):
    hits: int
    members: list[MemberResponse]


class MemberDetailResponse(BaseModel):
    member: MemberResponse


class MemberMutationResponse(BaseModel):
    msg: str
    member: MemberResponse
