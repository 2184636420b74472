"""Enum definitions for members service models."""

import enum


def enum_values(enum_cls):
    """Return persistent DB values for SAEnum mappings."""
    return [member.value for member in enum_cls]


class Gender(str, enum.Enum):
    MALE = "male"
    FEMALE = "female"


class MaritalStatus(str, enum.Enum):
    SINGLE = "single"
    MARRIED = "married"
    DIVORCED = "divorced"
    SEPARATED = "separated"


class Ministry(str, enum.Enum):
    MEN = "Men's"
    WOMEN = "Women's"
    CHILDREN = "Children's"
    OTHER = "Other"
