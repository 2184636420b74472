import uuid
from typing import Optional

from fastapi import APIRouter, Depends
from libs.auth.dependencies import require_admin
from libs.auth.models import AuthUser
from libs.db.session import get_async_db
from services.attendance_service import service as attendance_service
from services.attendance_service.models import AttendanceRecord
from services.attendance_service.schemas import (
    AttendanceCreate,
    AttendanceDetailResponse,
    AttendanceListResponse,
    AttendanceMutationResponse,
    AttendanceResponse,
    CheckOutRequest,
)
from services.members_service.models import Member
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(prefix="/attendance", tags=["attendance"])


def _to_response(
    attendance: AttendanceRecord, member: Optional[Member] = None
) -> AttendanceResponse:
    resp = AttendanceResponse.model_validate(attendance)
    if member is not None:
        resp.member_name = f"{member.surname} {member.other_names}"
        resp.member_email = member.email
    return resp


@router.get("", response_model=AttendanceListResponse)
async def list_attendance(
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """
    List the whole ledger in insertion order (Admin only).
    """
    rows = await attendance_service.list_records_with_members(db)
    return AttendanceListResponse(
        hits=len(rows),
        attendance_records=[_to_response(record, member) for record, member in rows],
    )


@router.post("", response_model=AttendanceMutationResponse)
async def create_attendance(
    attendance_in: AttendanceCreate,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """
    Check a member in. Rejected with 409 while the member has an open session.
    """
    attendance = await attendance_service.record(
        db, attendance_in, owner=current_user.user_id
    )
    return AttendanceMutationResponse(
        msg="Record created successfully", attendance_record=_to_response(attendance)
    )


@router.get("/{record_id}", response_model=AttendanceDetailResponse)
async def get_attendance(
    record_id: uuid.UUID,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    attendance = await attendance_service.get_record(db, record_id)
    return AttendanceDetailResponse(attendance_record=_to_response(attendance))


@router.patch("/{record_id}/check-out", response_model=AttendanceMutationResponse)
async def check_out_attendance(
    record_id: uuid.UUID,
    payload: Optional[CheckOutRequest] = None,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """
    Close an open session, at the given time or now.
    """
    at = payload.check_out if payload else None
    attendance = await attendance_service.check_out(db, record_id, at)
    return AttendanceMutationResponse(
        msg="Checked out successfully", attendance_record=_to_response(attendance)
    )


@router.delete("/{record_id}", response_model=AttendanceMutationResponse)
async def delete_attendance(
    record_id: uuid.UUID,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    attendance = await attendance_service.delete_record(db, record_id)
    return AttendanceMutationResponse(
        msg="Record deleted successfully", attendance_record=_to_response(attendance)
    )
