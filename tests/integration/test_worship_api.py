"""Integration tests for the /services and /churchday endpoints."""

import uuid

import pytest
from tests.factories import AttendanceRecordFactory, ChurchdayFactory, at

SERVICES = "/api/v1/services"
CHURCHDAYS = "/api/v1/churchday"


async def _create_churchday(client, **overrides):
    payload = {"service_type": "sunday", "speaker": "Pastor Ade"}
    payload.update(overrides)
    response = await client.post(CHURCHDAYS, json=payload)
    assert response.status_code == 200, response.text
    return response.json()["churchday"]


async def _create_service(client, churchday_id, **overrides):
    payload = {
        "churchday": churchday_id,
        "location": "Main Auditorium",
        "start_time": "2023-10-01T09:00:00Z",
        "end_time": "2023-10-01T11:00:00Z",
        "theme": "Grace",
    }
    payload.update(overrides)
    return await client.post(SERVICES, json=payload)


# ---------------------------------------------------------------------------
# Church days
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.integration
async def test_create_churchday(admin_client, admin_user):
    churchday = await _create_churchday(admin_client, comment="Harvest")

    assert churchday["service_type"] == "sunday"
    assert churchday["comment"] == "Harvest"
    assert churchday["service"] is None
    assert churchday["recorded_attendance"] == 0
    assert churchday["owner"] == str(admin_user.user_id)


@pytest.mark.asyncio
@pytest.mark.integration
async def test_create_churchday_rejects_unknown_type(admin_client):
    response = await admin_client.post(CHURCHDAYS, json={"service_type": "friday"})

    assert response.status_code == 400


@pytest.mark.asyncio
@pytest.mark.integration
async def test_create_churchday_rejects_negative_attendance(admin_client):
    response = await admin_client.post(
        CHURCHDAYS, json={"service_type": "sunday", "attendance": -1}
    )

    assert response.status_code == 400


@pytest.mark.asyncio
@pytest.mark.integration
async def test_list_and_update_churchdays(admin_client, db_session):
    db_session.add_all([ChurchdayFactory.create(), ChurchdayFactory.create()])
    await db_session.commit()

    listing = await admin_client.get(CHURCHDAYS)
    assert listing.status_code == 200
    assert listing.json()["hits"] == 2

    churchday_id = listing.json()["churchdays"][0]["id"]
    response = await admin_client.patch(
        f"{CHURCHDAYS}/{churchday_id}", json={"attendance": 320}
    )
    assert response.status_code == 200, response.text
    assert response.json()["msg"] == "Church day updated successfully"
    assert response.json()["churchday"]["attendance"] == 320


@pytest.mark.asyncio
@pytest.mark.integration
async def test_delete_unknown_churchday(admin_client):
    response = await admin_client.delete(f"{CHURCHDAYS}/{uuid.uuid4()}")

    assert response.status_code == 404


# ---------------------------------------------------------------------------
# Services
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.integration
async def test_create_service_sets_churchday_back_reference(admin_client):
    churchday = await _create_churchday(admin_client)

    response = await _create_service(admin_client, churchday["id"])

    assert response.status_code == 200, response.text
    data = response.json()
    assert data["msg"] == "Service created successfully"
    service = data["service"]
    assert service["churchday"] == churchday["id"]
    assert service["attendance"] == 0
    assert service["recorded_attendance"] == 0

    detail = await admin_client.get(f"{CHURCHDAYS}/{churchday['id']}")
    assert detail.json()["churchday"]["service"] == service["id"]


@pytest.mark.asyncio
@pytest.mark.integration
async def test_create_service_with_unknown_churchday(admin_client):
    response = await _create_service(admin_client, str(uuid.uuid4()))

    assert response.status_code == 400
    assert response.json()["msg"].startswith("No church day with id")


@pytest.mark.asyncio
@pytest.mark.integration
async def test_create_service_requires_location(admin_client):
    churchday = await _create_churchday(admin_client)

    response = await _create_service(admin_client, churchday["id"], location="")

    assert response.status_code == 400


@pytest.mark.asyncio
@pytest.mark.integration
async def test_create_service_rejects_end_before_start(admin_client):
    churchday = await _create_churchday(admin_client)

    response = await _create_service(
        admin_client,
        churchday["id"],
        start_time="2023-10-01T11:00:00Z",
        end_time="2023-10-01T09:00:00Z",
    )

    assert response.status_code == 400
    assert response.json() == {"msg": "end_time cannot be earlier than start_time"}


@pytest.mark.asyncio
@pytest.mark.integration
async def test_service_exposes_recorded_attendance(admin_client, db_session):
    churchday = await _create_churchday(admin_client)
    service = (await _create_service(admin_client, churchday["id"])).json()["service"]
    db_session.add_all(
        [
            AttendanceRecordFactory.create(check_in=at(9, 15)),
            AttendanceRecordFactory.create(check_in=at(10, 45)),
            AttendanceRecordFactory.create(check_in=at(12)),
        ]
    )
    await db_session.commit()

    detail = await admin_client.get(f"{SERVICES}/{service['id']}")
    assert detail.status_code == 200
    assert detail.json()["service"]["recorded_attendance"] == 2
    assert detail.json()["service"]["attendance"] == 0

    listing = await admin_client.get(SERVICES)
    assert listing.json()["hits"] == 1
    assert listing.json()["services"][0]["recorded_attendance"] == 2

    day = await admin_client.get(f"{CHURCHDAYS}/{churchday['id']}")
    assert day.json()["churchday"]["recorded_attendance"] == 2


@pytest.mark.asyncio
@pytest.mark.integration
async def test_update_service(admin_client):
    churchday = await _create_churchday(admin_client)
    service = (await _create_service(admin_client, churchday["id"])).json()["service"]

    response = await admin_client.patch(
        f"{SERVICES}/{service['id']}", json={"speaker": "Rev. Bello", "attendance": 150}
    )

    assert response.status_code == 200, response.text
    updated = response.json()["service"]
    assert updated["speaker"] == "Rev. Bello"
    assert updated["attendance"] == 150
    assert updated["theme"] == "Grace"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_update_service_cannot_clear_location(admin_client):
    churchday = await _create_churchday(admin_client)
    service = (await _create_service(admin_client, churchday["id"])).json()["service"]

    response = await admin_client.patch(
        f"{SERVICES}/{service['id']}", json={"location": None}
    )

    assert response.status_code == 400


@pytest.mark.asyncio
@pytest.mark.integration
async def test_service_keeps_churchday_after_churchday_is_deleted(admin_client):
    churchday = await _create_churchday(admin_client)
    service = (await _create_service(admin_client, churchday["id"])).json()["service"]

    deleted = await admin_client.delete(f"{CHURCHDAYS}/{churchday['id']}")
    assert deleted.status_code == 200
    assert deleted.json()["msg"] == "Church day deleted successfully"

    response = await admin_client.get(f"{SERVICES}/{service['id']}")
    assert response.status_code == 200
    assert response.json()["service"]["churchday"] == churchday["id"]


@pytest.mark.asyncio
@pytest.mark.integration
async def test_delete_service(admin_client):
    churchday = await _create_churchday(admin_client)
    service = (await _create_service(admin_client, churchday["id"])).json()["service"]

    response = await admin_client.delete(f"{SERVICES}/{service['id']}")
    assert response.status_code == 200
    assert response.json()["service"]["id"] == service["id"]

    assert (await admin_client.get(f"{SERVICES}/{service['id']}")).status_code == 404
    assert (await admin_client.delete(f"{SERVICES}/{service['id']}")).status_code == 404


@pytest.mark.asyncio
@pytest.mark.integration
async def test_open_ended_service_records_no_attendance(admin_client, db_session):
    churchday = await _create_churchday(admin_client)
    service = (
        await _create_service(admin_client, churchday["id"], end_time=None)
    ).json()["service"]
    db_session.add(AttendanceRecordFactory.create(check_in=at(10)))
    await db_session.commit()

    detail = await admin_client.get(f"{SERVICES}/{service['id']}")
    day = await admin_client.get(f"{CHURCHDAYS}/{churchday['id']}")

    assert detail.json()["service"]["recorded_attendance"] == 0
    assert day.json()["churchday"]["recorded_attendance"] == 0
