import uuid
from datetime import datetime
from typing import Optional

from libs.common.datetime_utils import utc_now
from libs.db.base import Base
from sqlalchemy import DateTime, Index, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column


class AttendanceRecord(Base):
    """One member's check-in/check-out event.

    A record with a check-in and no check-out is an open session; a member
    may hold at most one at a time.
    """

    __tablename__ = "attendance_records"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    # Weak reference to members.id (no FK, survives member deletion)
    member_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)

    check_in: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    check_out: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    owner: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    __table_args__ = (
        Index("ix_attendance_records_check_in", "check_in"),
        # One open session per member, enforced by the database as well
        Index(
            "uq_attendance_records_member_open",
            "member_id",
            unique=True,
            postgresql_where=text("check_out IS NULL"),
            sqlite_where=text("check_out IS NULL"),
        ),
    )

    @property
    def is_open(self) -> bool:
        return self.check_in is not None and self.check_out is None

    def __repr__(self):
        return f"<AttendanceRecord Member={self.member_id} in={self.check_in} out={self.check_out}>"
