import uuid
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class AuthUser(BaseModel):
    """
    The authenticated caller, as carried by a validated session token.
    """

    user_id: uuid.UUID = Field(..., alias="sub")
    session_id: Optional[uuid.UUID] = Field(default=None, alias="sid")
    email: Optional[EmailStr] = None
    name: Optional[str] = None
    role: str = "user"

    model_config = ConfigDict(populate_by_name=True)

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
