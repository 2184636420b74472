"""Unit tests for the service and church-day registry."""

import uuid

import pytest
from libs.common.errors import NotFoundError, ValidationError
from services.worship_service import service as worship_service
from services.worship_service.models import ServiceType
from services.worship_service.schemas import (
    ChurchdayCreate,
    ChurchdayUpdate,
    ServiceCreate,
    ServiceUpdate,
)
from tests.factories import ChurchdayFactory, at

OWNER = uuid.uuid4()


async def _churchday(db_session, **overrides):
    churchday = ChurchdayFactory.create(**overrides)
    db_session.add(churchday)
    await db_session.commit()
    return churchday


def test_validate_window_rejects_end_before_start():
    with pytest.raises(ValidationError):
        worship_service.validate_window(at(11), at(9))


def test_validate_window_accepts_missing_bounds():
    worship_service.validate_window(None, at(9))
    worship_service.validate_window(at(9), None)
    worship_service.validate_window(at(9), at(9))


# ---------------------------------------------------------------------------
# Church days
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_create_and_update_churchday(db_session):
    churchday = await worship_service.create_churchday(
        db_session,
        ChurchdayCreate(service_type=ServiceType.EASTER, speaker="Rev. Bello"),
        owner=OWNER,
    )
    assert churchday.service_type == ServiceType.EASTER
    assert churchday.owner == OWNER
    assert churchday.service_id is None

    updated = await worship_service.update_churchday(
        db_session, churchday.id, ChurchdayUpdate(comment="Joint service")
    )

    assert updated.comment == "Joint service"
    assert updated.speaker == "Rev. Bello"


def test_churchday_update_cannot_clear_service_type():
    with pytest.raises(ValueError):
        ChurchdayUpdate(service_type=None)


@pytest.mark.asyncio
async def test_get_unknown_churchday(db_session):
    with pytest.raises(NotFoundError):
        await worship_service.get_churchday(db_session, uuid.uuid4())


# ---------------------------------------------------------------------------
# Services
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_create_service_links_both_ways(db_session):
    churchday = await _churchday(db_session)

    service = await worship_service.create_service(
        db_session,
        ServiceCreate(
            churchday=churchday.id,
            location="Main Auditorium",
            start_time=at(9),
            end_time=at(11),
        ),
        owner=OWNER,
    )

    assert service.churchday_id == churchday.id
    assert service.attendance == 0
    refreshed = await worship_service.get_churchday(db_session, churchday.id)
    assert refreshed.service_id == service.id


@pytest.mark.asyncio
async def test_create_service_requires_existing_churchday(db_session):
    with pytest.raises(ValidationError):
        await worship_service.create_service(
            db_session,
            ServiceCreate(churchday=uuid.uuid4(), location="Hall"),
            owner=OWNER,
        )
    assert await worship_service.list_services(db_session) == []


@pytest.mark.asyncio
async def test_create_service_rejects_inverted_window(db_session):
    churchday = await _churchday(db_session)
    with pytest.raises(ValidationError):
        await worship_service.create_service(
            db_session,
            ServiceCreate(
                churchday=churchday.id,
                location="Hall",
                start_time=at(11),
                end_time=at(9),
            ),
            owner=OWNER,
        )


def test_service_location_cannot_be_blank():
    with pytest.raises(ValueError):
        ServiceCreate(churchday=uuid.uuid4(), location="   ")


@pytest.mark.asyncio
async def test_update_service_checks_window_against_stored_bounds(db_session):
    churchday = await _churchday(db_session)
    service = await worship_service.create_service(
        db_session,
        ServiceCreate(
            churchday=churchday.id, location="Hall", start_time=at(9), end_time=at(11)
        ),
        owner=OWNER,
    )

    with pytest.raises(ValidationError):
        await worship_service.update_service(
            db_session, service.id, ServiceUpdate(end_time=at(8))
        )


@pytest.mark.asyncio
async def test_update_service_relinks_churchday(db_session):
    sunday = await _churchday(db_session)
    christmas = await _churchday(db_session, service_type=ServiceType.CHRISTMAS)
    service = await worship_service.create_service(
        db_session, ServiceCreate(churchday=sunday.id, location="Hall"), owner=OWNER
    )

    updated = await worship_service.update_service(
        db_session, service.id, ServiceUpdate(churchday=christmas.id, theme="Joy")
    )

    assert updated.churchday_id == christmas.id
    assert updated.theme == "Joy"
    assert (await worship_service.get_churchday(db_session, christmas.id)).service_id == service.id


@pytest.mark.asyncio
async def test_update_service_rejects_unknown_churchday(db_session):
    churchday = await _churchday(db_session)
    service = await worship_service.create_service(
        db_session, ServiceCreate(churchday=churchday.id, location="Hall"), owner=OWNER
    )

    with pytest.raises(ValidationError):
        await worship_service.update_service(
            db_session, service.id, ServiceUpdate(churchday=uuid.uuid4())
        )


@pytest.mark.asyncio
async def test_deleting_churchday_leaves_services_in_place(db_session):
    churchday = await _churchday(db_session)
    service = await worship_service.create_service(
        db_session, ServiceCreate(churchday=churchday.id, location="Hall"), owner=OWNER
    )

    await worship_service.delete_churchday(db_session, churchday.id)

    remaining = await worship_service.get_service(db_session, service.id)
    assert remaining.churchday_id == churchday.id
    assert await worship_service.find_churchday(db_session, churchday.id) is None


@pytest.mark.asyncio
async def test_deleting_service_keeps_churchday_back_reference(db_session):
    churchday = await _churchday(db_session)
    service = await worship_service.create_service(
        db_session, ServiceCreate(churchday=churchday.id, location="Hall"), owner=OWNER
    )

    await worship_service.delete_service(db_session, service.id)

    assert (await worship_service.get_churchday(db_session, churchday.id)).service_id == service.id
    with pytest.raises(NotFoundError):
        await worship_service.get_service(db_session, service.id)
