"""
Service and church-day registry.

References between services and church days are weak: plain id columns
with no foreign key. A service must point at an existing church day when it
is created or re-linked, but deleting either side never cascades and
readers must tolerate ids that no longer resolve.
"""

import uuid
from datetime import datetime
from typing import Optional, Sequence

from libs.common.datetime_utils import ensure_utc
from libs.common.errors import NotFoundError, ValidationError
from libs.common.logging import get_logger
from services.worship_service.models import Churchday, Service
from services.worship_service.schemas import (
    ChurchdayCreate,
    ChurchdayUpdate,
    ServiceCreate,
    ServiceUpdate,
)
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)


def validate_window(start: Optional[datetime], end: Optional[datetime]) -> None:
    """A service may not end before it starts."""
    if start is not None and end is not None and ensure_utc(end) < ensure_utc(start):
        raise ValidationError("end_time cannot be earlier than start_time")


# ============================================================================
# CHURCH DAYS
# ============================================================================


async def find_churchday(
    db: AsyncSession, churchday_id: uuid.UUID
) -> Optional[Churchday]:
    result = await db.execute(select(Churchday).where(Churchday.id == churchday_id))
    return result.scalar_one_or_none()


async def get_churchday(db: AsyncSession, churchday_id: uuid.UUID) -> Churchday:
    churchday = await find_churchday(db, churchday_id)
    if churchday is None:
        raise NotFoundError(f"No church day with id: {churchday_id}")
    return churchday


async def list_churchdays(db: AsyncSession) -> Sequence[Churchday]:
    result = await db.execute(select(Churchday).order_by(Churchday.created_at.asc()))
    return result.scalars().all()


async def create_churchday(
    db: AsyncSession, data: ChurchdayCreate, owner: uuid.UUID
) -> Churchday:
    churchday = Churchday(**data.model_dump(), owner=owner)
    db.add(churchday)
    await db.commit()
    await db.refresh(churchday)
    logger.info(f"Created church day {churchday.id} ({churchday.service_type.value})")
    return churchday


async def update_churchday(
    db: AsyncSession, churchday_id: uuid.UUID, data: ChurchdayUpdate
) -> Churchday:
    churchday = await get_churchday(db, churchday_id)
    update_data = data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(churchday, field, value)
    await db.commit()
    await db.refresh(churchday)
    logger.info(f"Updated church day {churchday.id}: {sorted(update_data)}")
    return churchday


async def delete_churchday(db: AsyncSession, churchday_id: uuid.UUID) -> Churchday:
    """
    Delete a church day. Services that reference it keep the dangling id.
    """
    churchday = await get_churchday(db, churchday_id)
    await db.delete(churchday)
    await db.commit()
    logger.info(f"Deleted church day {churchday_id}")
    return churchday


# ============================================================================
# SERVICES
# ============================================================================


async def _require_churchday(db: AsyncSession, churchday_id: uuid.UUID) -> Churchday:
    churchday = await find_churchday(db, churchday_id)
    if churchday is None:
        logger.warning(f"Rejected service referencing unknown church day {churchday_id}")
        raise ValidationError(f"No church day with id: {churchday_id}")
    return churchday


async def get_service(db: AsyncSession, service_id: uuid.UUID) -> Service:
    result = await db.execute(select(Service).where(Service.id == service_id))
    service = result.scalar_one_or_none()
    if service is None:
        raise NotFoundError(f"No service with id: {service_id}")
    return service


async def list_services(db: AsyncSession) -> Sequence[Service]:
    result = await db.execute(select(Service).order_by(Service.created_at.asc()))
    return result.scalars().all()


async def create_service(
    db: AsyncSession, data: ServiceCreate, owner: uuid.UUID
) -> Service:
    """
    Create a service under an existing church day and point the church
    day's back-reference at it.
    """
    churchday = await _require_churchday(db, data.churchday)
    validate_window(data.start_time, data.end_time)

    service = Service(
        start_time=data.start_time,
        end_time=data.end_time,
        location=data.location,
        attendance=data.attendance,
        speaker=data.speaker,
        theme=data.theme,
        churchday_id=churchday.id,
        owner=owner,
    )
    db.add(service)
    await db.flush()
    churchday.service_id = service.id

    await db.commit()
    await db.refresh(service)
    logger.info(f"Created service {service.id} for church day {churchday.id}")
    return service


async def update_service(
    db: AsyncSession, service_id: uuid.UUID, data: ServiceUpdate
) -> Service:
    service = await get_service(db, service_id)
    update_data = data.model_dump(exclude_unset=True)

    validate_window(
        update_data.get("start_time", service.start_time),
        update_data.get("end_time", service.end_time),
    )

    new_churchday_id = update_data.pop("churchday", None)
    if new_churchday_id is not None and new_churchday_id != service.churchday_id:
        churchday = await _require_churchday(db, new_churchday_id)
        service.churchday_id = churchday.id
        churchday.service_id = service.id

    for field, value in update_data.items():
        setattr(service, field, value)

    await db.commit()
    await db.refresh(service)
    logger.info(f"Updated service {service.id}: {sorted(data.model_fields_set)}")
    return service


async def delete_service(db: AsyncSession, service_id: uuid.UUID) -> Service:
    """
    Delete a service. A church day whose back-reference points here keeps it.
    """
    service = await get_service(db, service_id)
    await db.delete(service)
    await db.commit()
    logger.info(f"Deleted service {service_id}")
    return service
