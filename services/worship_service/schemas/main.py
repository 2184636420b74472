import uuid
from typing import Annotated, Optional

from libs.common.datetime_utils import UTCDateTime
from pydantic import BaseModel, ConfigDict, Field, StringConstraints, model_validator
from services.worship_service.models import ServiceType

Location = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


# ============================================================================
# CHURCH DAY
# ============================================================================


class ChurchdayBase(BaseModel):
    attendance: Optional[int] = Field(default=None, ge=0)
    speaker: Optional[str] = None
    comment: Optional[str] = None


class ChurchdayCreate(ChurchdayBase):
    service_type: ServiceType


class ChurchdayUpdate(ChurchdayBase):
    service_type: Optional[ServiceType] = None

    @model_validator(mode="after")
    def service_type_not_cleared(self):
        if "service_type" in self.model_fields_set and self.service_type is None:
            raise ValueError("service_type cannot be empty")
        return self


class ChurchdayResponse(ChurchdayBase):
    id: uuid.UUID
    service_type: ServiceType
    service: Optional[uuid.UUID] = Field(default=None, validation_alias="service_id")
    owner: uuid.UUID
    created_at: UTCDateTime
    updated_at: UTCDateTime

    # Check-ins inside the windows of the services linked to this day
    recorded_attendance: int = 0

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class ChurchdayListResponse(BaseModel):
    hits: int
    churchdays: list[ChurchdayResponse]


class ChurchdayDetailResponse(BaseModel):
    churchday: ChurchdayResponse


class ChurchdayMutationResponse(BaseModel):
    msg: str
    churchday: ChurchdayResponse


# ============================================================================
# SERVICE
# ============================================================================


class ServiceBase(BaseModel):
    start_time: Optional[UTCDateTime] = None
    end_time: Optional[UTCDateTime] = None
    speaker: Optional[str] = None
    theme: Optional[str] = None


class ServiceCreate(ServiceBase):
    location: Location
    attendance: int = Field(default=0, ge=0)
    churchday: uuid.UUID


class ServiceUpdate(ServiceBase):
    location: Optional[Location] = None
    attendance: Optional[int] = Field(default=None, ge=0)
    churchday: Optional[uuid.UUID] = None

    @model_validator(mode="after")
    def required_fields_not_cleared(self):
        for name in ("location", "attendance", "churchday"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be empty")
        return self


class ServiceResponse(ServiceBase):
    id: uuid.UUID
    location: str
    attendance: int
    churchday: Optional[uuid.UUID] = Field(default=None, validation_alias="churchday_id")
    owner: uuid.UUID
    created_at: UTCDateTime
    updated_at: UTCDateTime

    # Check-ins inside [start_time, end_time], recomputed on every read
    recorded_attendance: int = 0

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class ServiceListResponse(BaseModel):
    hits: int
    services: list[ServiceResponse]


class ServiceDetailResponse(BaseModel):
    service: ServiceResponse


class ServiceMutationResponse(BaseModel):
    msg: str
    service: ServiceResponse
