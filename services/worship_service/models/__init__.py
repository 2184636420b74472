"""Worship Service models package."""

from services.worship_service.models.core import Churchday, Service
from services.worship_service.models.enums import ServiceType

__all__ = [
    "Churchday",
    "Service",
    "ServiceType",
]
