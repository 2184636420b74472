import uuid
from datetime import datetime
from typing import Optional

from libs.common.datetime_utils import utc_now
from libs.db.base import Base
from services.worship_service.models.enums import ServiceType, enum_values
from sqlalchemy import DateTime
from sqlalchemy import Enum as SAEnum
from sqlalchemy import Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

# ============================================================================
# CHURCH DAY
# ============================================================================


class Churchday(Base):
    """A grouping of services under one category, e.g. a Sunday."""

    __tablename__ = "churchdays"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    service_type: Mapped[ServiceType] = mapped_column(
        SAEnum(
            ServiceType,
            name="churchday_service_type_enum",
            values_callable=enum_values,
            validate_strings=True,
        ),
        nullable=False,
    )
    # Caller-supplied headcount; the ledger-derived figure is computed on read
    attendance: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    speaker: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    comment: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Weak back-reference to the most recently linked service (no FK)
    service_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid, nullable=True)

    owner: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    def __repr__(self):
        return f"<Churchday {self.id} type={self.service_type}>"


# ============================================================================
# SERVICE
# ============================================================================


class Service(Base):
    """A single scheduled gathering with a location and time window."""

    __tablename__ = "services"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    start_time: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    end_time: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    location: Mapped[str] = mapped_column(String, nullable=False)
    attendance: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    speaker: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    theme: Mapped[Optional[str]] = mapped_column(String, nullable=True)

    # Weak reference: survives deletion of the church day it points at
    churchday_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, nullable=True, index=True
    )

    owner: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    def __repr__(self):
        return f"<Service {self.id} at {self.location}>"
