from datetime import datetime, timezone
from sqlalchemy import (
    Boolean,
    Integer,
    String,
    Text,
    DateTime,
    JSON,
    ForeignKey,
    Enum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from alumni_backend.common.base import Base
from alumni_backend.common.alumni_enums import (
    EventType,
    EventMode,
    EventStatus,
    TargetAudience,
)
from alumni_backend.entity.event_attendee_entity import EventAttendeeEntity


class EventEntity(Base):
    __tablename__ = "events"

    event_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String)
    description: Mapped[str] = mapped_column(Text)
    type: Mapped[EventType] = mapped_column(
        Enum(
            EventType,
            name="event_type_enum",
            values_callable=lambda obj: [e.value for e in obj],
        )
    )
    mode: Mapped[EventMode] = mapped_column(
        Enum(
            EventMode,
            name="event_mode_enum",
            values_callable=lambda obj: [e.value for e in obj],
        )
    )
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    # {"address": str, "city": str, "virtual_link": str}
    venue: Mapped[dict | None] = mapped_column(JSON)
    organizer_id: Mapped[int] = mapped_column(ForeignKey("users.user_id"))
    target_audience: Mapped[TargetAudience] = mapped_column(
        Enum(
            TargetAudience,
            name="target_audience_enum",
            values_callable=lambda obj: [e.value for e in obj],
        ),
        default=TargetAudience.ALL,
    )
    max_attendees: Mapped[int | None] = mapped_column(Integer)
    registration_deadline: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True)
    )
    status: Mapped[EventStatus] = mapped_column(
        Enum(
            EventStatus,
            name="event_status_enum",
            values_callable=lambda obj: [e.value for e in obj],
        ),
        default=EventStatus.UPCOMING,
    )
    is_approved: Mapped[bool] = mapped_column(Boolean, default=False)
    created_timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    attendees: Mapped[list[EventAttendeeEntity]] = relationship(
        order_by=EventAttendeeEntity.attendee_id,
        cascade="all, delete-orphan",
        lazy="selectin",
    )
