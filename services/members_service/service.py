"""Member registry operations."""

import uuid
from typing import Optional, Sequence

from libs.common.errors import NotFoundError, ValidationError
from libs.common.logging import get_logger
from services.members_service.models import Member
from services.members_service.schemas import MemberCreate, MemberUpdate
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)


async def _ensure_email_free(
    db: AsyncSession, email: str, exclude_id: Optional[uuid.UUID] = None
) -> None:
    query = select(Member.id).where(Member.email == email)
    if exclude_id is not None:
        query = query.where(Member.id != exclude_id)
    if (await db.execute(query)).first() is not None:
        raise ValidationError(f"A member with email {email} already exists")


async def _commit(db: AsyncSession, email: str) -> None:
    # The unique index is the last line of defence against concurrent writers
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        raise ValidationError(f"A member with email {email} already exists") from exc


async def get_member(db: AsyncSession, member_id: uuid.UUID) -> Member:
    result = await db.execute(select(Member).where(Member.id == member_id))
    member = result.scalar_one_or_none()
    if member is None:
        raise NotFoundError(f"No member with id: {member_id}")
    return member


async def member_exists(db: AsyncSession, member_id: uuid.UUID) -> bool:
    result = await db.execute(select(Member.id).where(Member.id == member_id))
    return result.first() is not None


async def list_members(db: AsyncSession) -> Sequence[Member]:
    result = await db.execute(select(Member).order_by(Member.created_at.asc()))
    return result.scalars().all()


async def create_member(
    db: AsyncSession, data: MemberCreate, owner: Optional[uuid.UUID]
) -> Member:
    await _ensure_email_free(db, data.email)

    member = Member(**data.model_dump(), owner=owner)
    db.add(member)
    await _commit(db, data.email)
    await db.refresh(member)
    logger.info(f"Created member {member.id}")
    return member


async def update_member(
    db: AsyncSession, member_id: uuid.UUID, data: MemberUpdate
) -> Member:
    member = await get_member(db, member_id)
    update_data = data.model_dump(exclude_unset=True)

    if "email" in update_data and update_data["email"] != member.email:
        await _ensure_email_free(db, update_data["email"], exclude_id=member.id)

    for field, value in update_data.items():
        setattr(member, field, value)

    await _commit(db, member.email)
    await db.refresh(member)
    logger.info(f"Updated member {member.id}: {sorted(update_data)}")
    return member


async def delete_member(db: AsyncSession, member_id: uuid.UUID) -> Member:
    """
    Delete a member. Attendance records that point at the member are kept.
    """
    member = await get_member(db, member_id)
    await db.delete(member)
    await db.commit()
    logger.info(f"Deleted member {member_id}")
    return member
