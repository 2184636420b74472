"""Church member profile."""

import uuid
from datetime import date, datetime
from typing import Optional

from libs.common.datetime_utils import utc_now
from libs.db.base import Base
from services.members_service.models.enums import (
    Gender,
    MaritalStatus,
    Ministry,
    enum_values,
)
from sqlalchemy import Boolean, Date, DateTime
from sqlalchemy import Enum as SAEnum
from sqlalchemy import Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column


class Member(Base):
    """A church member as registered by an admin.

    Attendance records point at members by id; nothing enforces that
    reference at the database level.
    """

    __tablename__ = "members"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    # Identity
    surname: Mapped[str] = mapped_column(String, nullable=False)
    other_names: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, unique=True, index=True, nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    address: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    occupation: Mapped[Optional[str]] = mapped_column(String, nullable=True)

    # Demographics
    age: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    gender: Mapped[Optional[Gender]] = mapped_column(
        SAEnum(
            Gender,
            name="member_gender_enum",
            values_callable=enum_values,
            validate_strings=True,
        ),
        nullable=True,
    )
    marital_status: Mapped[Optional[MaritalStatus]] = mapped_column(
        SAEnum(
            MaritalStatus,
            name="member_marital_status_enum",
            values_callable=enum_values,
            validate_strings=True,
        ),
        nullable=True,
    )
    number_of_children: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    spouse_name: Mapped[Optional[str]] = mapped_column(String, nullable=True)

    # Spiritual status
    saved_or_not: Mapped[bool] = mapped_column(Boolean, default=False)
    baptism_status: Mapped[bool] = mapped_column(Boolean, default=False)
    baptism_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    faith_declaration_status: Mapped[bool] = mapped_column(Boolean, default=False)

    ministry_membership: Mapped[Optional[Ministry]] = mapped_column(
        SAEnum(
            Ministry,
            name="member_ministry_enum",
            values_callable=enum_values,
            validate_strings=True,
        ),
        nullable=True,
    )
    emergency_contact: Mapped[Optional[str]] = mapped_column(String, nullable=True)

    owner: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid, nullable=True, index=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    def __repr__(self):
        return f"<Member {self.email}>"
