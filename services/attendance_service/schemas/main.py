import uuid
from typing import Optional

from libs.common.datetime_utils import UTCDateTime
from pydantic import BaseModel, ConfigDict, Field


class AttendanceBase(BaseModel):
    check_in: Optional[UTCDateTime] = None
    check_out: Optional[UTCDateTime] = None


class AttendanceCreate(AttendanceBase):
    member_id: uuid.UUID


class CheckOutRequest(BaseModel):
    # Defaults to the time of the request
    check_out: Optional[UTCDateTime] = None


class AttendanceResponse(AttendanceBase):
    id: uuid.UUID
    member_id: uuid.UUID
    owner: uuid.UUID
    created_at: UTCDateTime
    updated_at: UTCDateTime

    # Optional fields populated by joins
    member_name: Optional[str] = None
    member_email: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class AttendanceListResponse(BaseModel):
    hits: int
    attendance_records: list[AttendanceResponse] = Field(
        serialization_alias="attendanceRecords"
    )


class AttendanceDetailResponse(BaseModel):
    attendance_record: AttendanceResponse = Field(
        serialization_alias="attendanceRecord"
    )


class AttendanceMutationResponse(BaseModel):
    msg: str
    attendance_record: AttendanceResponse = Field(
        serialization_alias="attendanceRecord"
    )
