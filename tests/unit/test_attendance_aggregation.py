"""Unit tests for ledger-derived attendance counts.

A check-in counts towards a service when it falls inside
[start_time, end_time], both ends inclusive.
"""

import pytest
from services.attendance_service import service as attendance_service
from tests.factories import (
    AttendanceRecordFactory,
    ChurchdayFactory,
    ServiceFactory,
    at,
)


@pytest.mark.asyncio
async def test_service_window_is_inclusive(db_session):
    service = ServiceFactory.create(start_time=at(9), end_time=at(11))
    db_session.add(service)
    db_session.add_all(
        [
            AttendanceRecordFactory.create(check_in=at(8, 59)),
            AttendanceRecordFactory.create(check_in=at(9)),
            AttendanceRecordFactory.create(check_in=at(10), check_out=at(10, 30)),
            AttendanceRecordFactory.create(check_in=at(11)),
            AttendanceRecordFactory.create(check_in=at(11, 1)),
        ]
    )
    await db_session.commit()

    assert await attendance_service.count_for_service(db_session, service) == 3


@pytest.mark.asyncio
async def test_service_without_both_bounds_counts_nothing(db_session):
    open_ended = ServiceFactory.create(start_time=at(9), end_time=None)
    unscheduled = ServiceFactory.create(start_time=None, end_time=None)
    db_session.add_all([open_ended, unscheduled])
    db_session.add(AttendanceRecordFactory.create(check_in=at(10)))
    await db_session.commit()

    assert await attendance_service.count_for_service(db_session, open_ended) == 0
    assert await attendance_service.count_for_service(db_session, unscheduled) == 0
    counts = await attendance_service.service_attendance_counts(db_session)
    assert counts == {}


@pytest.mark.asyncio
async def test_counts_are_recomputed_as_the_ledger_changes(db_session):
    service = ServiceFactory.create(start_time=at(9), end_time=at(11))
    record = AttendanceRecordFactory.create(check_in=at(10))
    db_session.add_all([service, record])
    await db_session.commit()
    assert await attendance_service.count_for_service(db_session, service) == 1

    await attendance_service.delete_record(db_session, record.id)

    assert await attendance_service.count_for_service(db_session, service) == 0


@pytest.mark.asyncio
async def test_stored_attendance_is_not_touched(db_session):
    service = ServiceFactory.create(start_time=at(9), end_time=at(11), attendance=250)
    db_session.add(service)
    db_session.add(AttendanceRecordFactory.create(check_in=at(10)))
    await db_session.commit()

    assert await attendance_service.count_for_service(db_session, service) == 1
    await db_session.refresh(service)
    assert service.attendance == 250


@pytest.mark.asyncio
async def test_churchday_counts_each_check_in_once(db_session):
    """Overlapping services share a check-in; the church day sees it once."""
    churchday = ChurchdayFactory.create()
    first = ServiceFactory.create(
        churchday_id=churchday.id, start_time=at(9), end_time=at(11)
    )
    second = ServiceFactory.create(
        churchday_id=churchday.id, start_time=at(10), end_time=at(12)
    )
    db_session.add_all([churchday, first, second])
    db_session.add_all(
        [
            AttendanceRecordFactory.create(check_in=at(9, 30)),
            AttendanceRecordFactory.create(check_in=at(10, 30)),
            AttendanceRecordFactory.create(check_in=at(11, 30)),
            AttendanceRecordFactory.create(check_in=at(13)),
        ]
    )
    await db_session.commit()

    service_counts = await attendance_service.service_attendance_counts(
        db_session, [first.id, second.id]
    )
    assert service_counts == {first.id: 2, second.id: 2}
    assert await attendance_service.count_for_churchday(db_session, churchday.id) == 3


@pytest.mark.asyncio
async def test_churchday_counts_are_scoped_per_day(db_session):
    sunday = ChurchdayFactory.create()
    wednesday = ChurchdayFactory.create()
    empty = ChurchdayFactory.create()
    db_session.add_all([sunday, wednesday, empty])
    db_session.add_all(
        [
            ServiceFactory.create(
                churchday_id=sunday.id, start_time=at(9), end_time=at(11)
            ),
            ServiceFactory.create(
                churchday_id=wednesday.id,
                start_time=at(17, day=4),
                end_time=at(19, day=4),
            ),
        ]
    )
    db_session.add_all(
        [
            AttendanceRecordFactory.create(check_in=at(10)),
            AttendanceRecordFactory.create(check_in=at(18, day=4)),
            AttendanceRecordFactory.create(check_in=at(18, 30, day=4)),
        ]
    )
    await db_session.commit()

    counts = await attendance_service.churchday_attendance_counts(
        db_session, [sunday.id, wednesday.id, empty.id]
    )

    assert counts == {sunday.id: 1, wednesday.id: 2}
    assert await attendance_service.count_for_churchday(db_session, empty.id) == 0
