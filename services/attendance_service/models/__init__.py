"""Attendance Service models package."""

from services.attendance_service.models.core import AttendanceRecord

__all__ = [
    "AttendanceRecord",
]
