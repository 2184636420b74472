"""
Attendance ledger and attendance aggregation.

Ledger rules:
- A record must reference an existing member.
- A check-out needs a check-in, and cannot precede it.
- A record created with neither timestamp is a check-in at the current time.
- A member holds at most one open session (check-in without check-out).

Aggregation is computed from the ledger on every read; stored
``attendance`` figures on services and church days are never touched.
A check-in counts towards a service when it falls inside
``[start_time, end_time]``; services missing either bound count nothing.
A church day counts each check-in at most once across all of its services.
"""

import uuid
from datetime import datetime
from typing import Iterable, Optional, Sequence

from libs.common.datetime_utils import ensure_utc, utc_now
from libs.common.errors import ConflictError, NotFoundError, ValidationError
from libs.common.logging import get_logger
from services.attendance_service.models import AttendanceRecord
from services.attendance_service.schemas import AttendanceCreate
from services.members_service import service as member_service
from services.members_service.models import Member
from services.worship_service.models import Service
from sqlalchemy import and_, distinct, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)


# ============================================================================
# LEDGER
# ============================================================================


def validate_times(check_in: Optional[datetime], check_out: Optional[datetime]) -> None:
    if check_out is None:
        return
    if check_in is None:
        raise ValidationError("check_out requires a check_in")
    if ensure_utc(check_out) < ensure_utc(check_in):
        raise ValidationError("check_out cannot be earlier than check_in")


async def find_open_record(
    db: AsyncSession, member_id: uuid.UUID
) -> Optional[AttendanceRecord]:
    result = await db.execute(
        select(AttendanceRecord)
        .where(
            AttendanceRecord.member_id == member_id,
            AttendanceRecord.check_in.is_not(None),
            AttendanceRecord.check_out.is_(None),
        )
        .limit(1)
    )
    return result.scalar_one_or_none()


async def record(
    db: AsyncSession, data: AttendanceCreate, owner: uuid.UUID
) -> AttendanceRecord:
    """Add a check-in (optionally already checked out) to the ledger."""
    check_in, check_out = data.check_in, data.check_out
    validate_times(check_in, check_out)
    if check_in is None:
        check_in = utc_now()

    if not await member_service.member_exists(db, data.member_id):
        logger.warning(f"Rejected attendance for unknown member {data.member_id}")
        raise ValidationError(f"No member with id: {data.member_id}")

    if check_out is None:
        open_record = await find_open_record(db, data.member_id)
        if open_record is not None:
            logger.warning(
                f"Rejected second open check-in for member {data.member_id}"
            )
            raise ConflictError(
                f"Member {data.member_id} is already checked in "
                f"(record {open_record.id})"
            )

    attendance = AttendanceRecord(
        member_id=data.member_id,
        check_in=check_in,
        check_out=check_out,
        owner=owner,
    )
    db.add(attendance)
    try:
        await db.commit()
    except IntegrityError as exc:
        # A concurrent check-in for the same member won the race
        await db.rollback()
        logger.warning(f"Rejected concurrent open check-in for member {data.member_id}")
        raise ConflictError(f"Member {data.member_id} is already checked in") from exc
    await db.refresh(attendance)
    logger.info(f"Recorded attendance {attendance.id} for member {data.member_id}")
    return attendance


async def get_record(db: AsyncSession, record_id: uuid.UUID) -> AttendanceRecord:
    result = await db.execute(
        select(AttendanceRecord).where(AttendanceRecord.id == record_id)
    )
    attendance = result.scalar_one_or_none()
    if attendance is None:
        raise NotFoundError(f"No attendance record with id: {record_id}")
    return attendance


async def list_records_with_members(
    db: AsyncSession,
) -> Sequence[tuple[AttendanceRecord, Optional[Member]]]:
    """Ledger in insertion order, each record paired with its member if it still exists."""
    result = await db.execute(
        select(AttendanceRecord, Member)
        .outerjoin(Member, Member.id == AttendanceRecord.member_id)
        .order_by(AttendanceRecord.created_at.asc())
    )
    return result.tuples().all()


async def check_out(
    db: AsyncSession, record_id: uuid.UUID, at: Optional[datetime] = None
) -> AttendanceRecord:
    """Close an open session."""
    attendance = await get_record(db, record_id)
    if attendance.check_out is not None:
        raise ConflictError(f"Attendance record {record_id} is already checked out")

    at = at or utc_now()
    validate_times(attendance.check_in, at)

    attendance.check_out = at
    await db.commit()
    await db.refresh(attendance)
    logger.info(f"Checked out attendance {attendance.id}")
    return attendance


async def delete_record(db: AsyncSession, record_id: uuid.UUID) -> AttendanceRecord:
    attendance = await get_record(db, record_id)
    await db.delete(attendance)
    await db.commit()
    logger.info(f"Deleted attendance {record_id}")
    return attendance


# ============================================================================
# AGGREGATION
# ============================================================================


def _checked_in_during_service():
    return and_(
        AttendanceRecord.check_in.is_not(None),
        AttendanceRecord.check_in >= Service.start_time,
        AttendanceRecord.check_in <= Service.end_time,
    )


async def service_attendance_counts(
    db: AsyncSession, service_ids: Optional[Iterable[uuid.UUID]] = None
) -> dict[uuid.UUID, int]:
    """Ledger-derived headcount per service. Services with no check-ins are omitted."""
    query = (
        select(Service.id, func.count(AttendanceRecord.id))
        .select_from(Service)
        .join(AttendanceRecord, _checked_in_during_service())
        .group_by(Service.id)
    )
    if service_ids is not None:
        query = query.where(Service.id.in_(list(service_ids)))
    result = await db.execute(query)
    return {service_id: count for service_id, count in result.all()}


async def churchday_attendance_counts(
    db: AsyncSession, churchday_ids: Optional[Iterable[uuid.UUID]] = None
) -> dict[uuid.UUID, int]:
    """Ledger-derived headcount per church day, over all of its services."""
    query = (
        select(Service.churchday_id, func.count(distinct(AttendanceRecord.id)))
        .select_from(Service)
        .join(AttendanceRecord, _checked_in_during_service())
        .where(Service.churchday_id.is_not(None))
        .group_by(Service.churchday_id)
    )
    if churchday_ids is not None:
        query = query.where(Service.churchday_id.in_(list(churchday_ids)))
    result = await db.execute(query)
    return {churchday_id: count for churchday_id, count in result.all()}


async def count_for_service(db: AsyncSession, service: Service) -> int:
    if service.start_time is None or service.end_time is None:
        return 0
    counts = await service_attendance_counts(db, [service.id])
    return counts.get(service.id, 0)


async def count_for_churchday(db: AsyncSession, churchday_id: uuid.UUID) -> int:
    counts = await churchday_attendance_counts(db, [churchday_id])
    return counts.get(churchday_id, 0)
