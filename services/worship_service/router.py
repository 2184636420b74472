"""Routers for services and church days (admin only).

Every response carries the stored ``attendance`` figure alongside
``recorded_attendance``, which is recomputed from the attendance ledger on
each request.
"""

import uuid
from typing import Sequence

from fastapi import APIRouter, Depends
from libs.auth.dependencies import require_admin
from libs.auth.models import AuthUser
from libs.db.session import get_async_db
from services.attendance_service import service as attendance_service
from services.worship_service import service as worship_service
from services.worship_service.models import Churchday, Service
from services.worship_service.schemas import (
    ChurchdayCreate,
    ChurchdayDetailResponse,
    ChurchdayListResponse,
    ChurchdayMutationResponse,
    ChurchdayResponse,
    ChurchdayUpdate,
    ServiceCreate,
    ServiceDetailResponse,
    ServiceListResponse,
    ServiceMutationResponse,
    ServiceResponse,
    ServiceUpdate,
)
from sqlalchemy.ext.asyncio import AsyncSession

services_router = APIRouter(prefix="/services", tags=["services"])
churchday_router = APIRouter(prefix="/churchday", tags=["churchdays"])


async def _service_responses(
    db: AsyncSession, services: Sequence[Service]
) -> list[ServiceResponse]:
    counts = await attendance_service.service_attendance_counts(
        db, [s.id for s in services]
    )
    responses = []
    for service in services:
        resp = ServiceResponse.model_validate(service)
        resp.recorded_attendance = counts.get(service.id, 0)
        responses.append(resp)
    return responses


async def _churchday_responses(
    db: AsyncSession, churchdays: Sequence[Churchday]
) -> list[ChurchdayResponse]:
    counts = await attendance_service.churchday_attendance_counts(
        db, [c.id for c in churchdays]
    )
    responses = []
    for churchday in churchdays:
        resp = ChurchdayResponse.model_validate(churchday)
        resp.recorded_attendance = counts.get(churchday.id, 0)
        responses.append(resp)
    return responses


async def _service_response(db: AsyncSession, service: Service) -> ServiceResponse:
    resp = ServiceResponse.model_validate(service)
    resp.recorded_attendance = await attendance_service.count_for_service(db, service)
    return resp


async def _churchday_response(db: AsyncSession, churchday: Churchday) -> ChurchdayResponse:
    resp = ChurchdayResponse.model_validate(churchday)
    resp.recorded_attendance = await attendance_service.count_for_churchday(
        db, churchday.id
    )
    return resp


# ============================================================================
# SERVICES
# ============================================================================


@services_router.get("", response_model=ServiceListResponse)
async def list_services(
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    services = await worship_service.list_services(db)
    return ServiceListResponse(
        hits=len(services), services=await _service_responses(db, services)
    )


@services_router.post("", response_model=ServiceMutationResponse)
async def create_service(
    service_in: ServiceCreate,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Schedule a service under an existing church day."""
    service = await worship_service.create_service(
        db, service_in, owner=current_user.user_id
    )
    resp = await _service_response(db, service)
    return ServiceMutationResponse(msg="Service created successfully", service=resp)


@services_router.get("/{service_id}", response_model=ServiceDetailResponse)
async def get_service(
    service_id: uuid.UUID,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    service = await worship_service.get_service(db, service_id)
    resp = await _service_response(db, service)
    return ServiceDetailResponse(service=resp)


@services_router.patch("/{service_id}", response_model=ServiceMutationResponse)
async def update_service(
    service_id: uuid.UUID,
    service_in: ServiceUpdate,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    service = await worship_service.update_service(db, service_id, service_in)
    resp = await _service_response(db, service)
    return ServiceMutationResponse(msg="Service updated successfully", service=resp)


@services_router.delete("/{service_id}", response_model=ServiceMutationResponse)
async def delete_service(
    service_id: uuid.UUID,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    service = await worship_service.delete_service(db, service_id)
    return ServiceMutationResponse(
        msg="Service deleted successfully",
        service=ServiceResponse.model_validate(service),
    )


# ============================================================================
# CHURCH DAYS
# ============================================================================


@churchday_router.get("", response_model=ChurchdayListResponse)
async def list_churchdays(
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    churchdays = await worship_service.list_churchdays(db)
    return ChurchdayListResponse(
        hits=len(churchdays), churchdays=await _churchday_responses(db, churchdays)
    )


@churchday_router.post("", response_model=ChurchdayMutationResponse)
async def create_churchday(
    churchday_in: ChurchdayCreate,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    churchday = await worship_service.create_churchday(
        db, churchday_in, owner=current_user.user_id
    )
    return ChurchdayMutationResponse(
        msg="Church day created successfully",
        churchday=ChurchdayResponse.model_validate(churchday),
    )


@churchday_router.get("/{churchday_id}", response_model=ChurchdayDetailResponse)
async def get_churchday(
    churchday_id: uuid.UUID,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    churchday = await worship_service.get_churchday(db, churchday_id)
    resp = await _churchday_response(db, churchday)
    return ChurchdayDetailResponse(churchday=resp)


@churchday_router.patch("/{churchday_id}", response_model=ChurchdayMutationResponse)
async def update_churchday(
    churchday_id: uuid.UUID,
    churchday_in: ChurchdayUpdate,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    churchday = await worship_service.update_churchday(db, churchday_id, churchday_in)
    resp = await _churchday_response(db, churchday)
    return ChurchdayMutationResponse(
        msg="Church day updated successfully", churchday=resp
    )


@churchday_router.delete("/{churchday_id}", response_model=ChurchdayMutationResponse)
async def delete_churchday(
    churchday_id: uuid.UUID,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Delete a church day. Services pointing at it are left untouched."""
    churchday = await worship_service.delete_churchday(db, churchday_id)
    return ChurchdayMutationResponse(
        msg="Church day deleted successfully",
        churchday=ChurchdayResponse.model_validate(churchday),
    )
