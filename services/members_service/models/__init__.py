"""Members Service models package."""

from services.members_service.models.enums import Gender, MaritalStatus, Ministry
from services.members_service.models.member import Member

__all__ = [
    "Gender",
    "MaritalStatus",
    "Member",
    "Ministry",
]
