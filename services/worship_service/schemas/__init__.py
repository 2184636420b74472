"""Worship Service schemas package."""

from services.worship_service.schemas.main import (
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

__all__ = [
    "ChurchdayCreate",
    "ChurchdayDetailResponse",
    "ChurchdayListResponse",
    "ChurchdayMutationResponse",
    "ChurchdayResponse",
    "ChurchdayUpdate",
    "ServiceCreate",
    "ServiceDetailResponse",
    "ServiceListResponse",
    "ServiceMutationResponse",
    "ServiceResponse",
    "ServiceUpdate",
]
