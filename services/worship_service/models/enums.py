"""Enum definitions for worship service models."""

import enum


def enum_values(enum_cls):
    """Return persistent DB values for SAEnum mappings."""
    return [member.value for member in enum_cls]


class ServiceType(str, enum.Enum):
    """Category of a church day."""

    SUNDAY = "sunday"
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    CHRISTMAS = "christmas"
    EASTER = "easter"
