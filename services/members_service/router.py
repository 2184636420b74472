"""Members router - CRUD operations for church member profiles (admin only)."""

import uuid

from fastapi import APIRouter, Depends
from libs.auth.dependencies import require_admin
from libs.auth.models import AuthUser
from libs.db.session import get_async_db
from services.members_service import service as member_service
from services.members_service.schemas import (
    MemberCreate,
    MemberDetailResponse,
    MemberListResponse,
    MemberMutationResponse,
    MemberResponse,
    MemberUpdate,
)
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(prefix="/member", tags=["members"])


@router.get("", response_model=MemberListResponse)
async def list_members(
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """List every member."""
    members = await member_service.list_members(db)
    return MemberListResponse(
        hits=len(members),
        members=[MemberResponse.model_validate(m) for m in members],
    )


@router.post("", response_model=MemberMutationResponse)
async def create_member(
    member_in: MemberCreate,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Register a new member."""
    member = await member_service.create_member(
        db, member_in, owner=current_user.user_id
    )
    return MemberMutationResponse(
        msg="Member created successfully",
        member=MemberResponse.model_validate(member),
    )


@router.get("/{member_id}", response_model=MemberDetailResponse)
async def get_member(
    member_id: uuid.UUID,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    member = await member_service.get_member(db, member_id)
    return MemberDetailResponse(member=MemberResponse.model_validate(member))


@router.patch("/{member_id}", response_model=MemberMutationResponse)
async def update_member(
    member_id: uuid.UUID,
    member_in: MemberUpdate,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Partially update a member profile."""
    member = await member_service.update_member(db, member_id, member_in)
    return MemberMutationResponse(
        msg="Member updated successfully",
        member=MemberResponse.model_validate(member),
    )


@router.delete("/{member_id}", response_model=MemberMutationResponse)
async def delete_member(
    member_id: uuid.UUID,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    member = await member_service.delete_member(db, member_id)
    return MemberMutationResponse(
        msg="Member deleted successfully",
        member=MemberResponse.model_validate(member),
    )
