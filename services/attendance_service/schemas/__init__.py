"""Attendance Service schemas package."""

from services.attendance_service.schemas.main import (
    AttendanceBase,
    AttendanceCreate,
    AttendanceDetailResponse,
    AttendanceListResponse,
    AttendanceMutationResponse,
    AttendanceResponse,
    CheckOutRequest,
)

__all__ = [
    "AttendanceBase",
    "AttendanceCreate",
    "AttendanceDetailResponse",
    "AttendanceListResponse",
    "AttendanceMutationResponse",
    "AttendanceResponse",
    "CheckOutRequest",
]
