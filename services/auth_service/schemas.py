import uuid

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from services.auth_service.models import UserRole


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Please provide name")
        return v


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class UserResponse(BaseModel):
    """Shape the admin frontend keeps as its logged-in user."""

    user_id: uuid.UUID = Field(..., validation_alias="id", serialization_alias="userId")
    name: str
    email: EmailStr
    role: UserRole

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class RegisterResponse(BaseModel):
    msg: str
    user: UserResponse


class LoginResponse(BaseModel):
    user: UserResponse
    access_token: str
    token_type: str = "bearer"


class CurrentUserResponse(BaseModel):
    user: UserResponse


class MessageResponse(BaseModel):
    msg: str
