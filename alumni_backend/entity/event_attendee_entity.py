from datetime import datetime, timezone
from sqlalchemy import Integer, DateTime, ForeignKey, Enum, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from alumni_backend.common.base import Base
from alumni_backend.common.alumni_enums import AttendeeStatus


class EventAttendeeEntity(Base):
    __tablename__ = "event_attendees"

    attendee_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    event_id: Mapped[int] = mapped_column(
        ForeignKey("events.event_id", ondelete="CASCADE")
    )
    user_id: Mapped[int] = mapped_column(ForeignKey("users.user_id"))
    status: Mapped[AttendeeStatus] = mapped_column(
        Enum(
            AttendeeStatus,
            name="attendee_status_enum",
            values_callable=lambda obj: [e.value for e in obj],
        ),
        default=AttendeeStatus.GOING,
    )
    registered_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    __table_args__ = (UniqueConstraint("event_id", "user_id"),)
