"""Declarative base shared by every service's models."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
