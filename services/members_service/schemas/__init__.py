"""Members Service schemas package."""

from services.members_service.schemas.member import (  # noqa: F401
    MemberCreate,
    MemberDetailResponse,
    MemberListResponse,
    MemberMutationResponse,
    MemberResponse,
    MemberUpdate,
)

__all__ = [
    "MemberCreate",
    "MemberDetailResponse",
    "MemberListResponse",
    "MemberMutationResponse",
    "MemberResponse",
    "MemberUpdate",
]
