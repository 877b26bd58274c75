from datetime import datetime, timezone
from sqlalchemy import (
    Integer,
    String,
    Text,
    DateTime,
    ForeignKey,
    CheckConstraint,
    Enum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from alumni_backend.common.base import Base
from alumni_backend.common.alumni_enums import MentorshipStatus, PreferredMode
from alumni_backend.entity.mentorship_session_entity import MentorshipSessionEntity


class MentorshipEntity(Base):
    __tablename__ = "mentorships"

    mentorship_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    mentor_id: Mapped[int] = mapped_column(ForeignKey("users.user_id"))
    mentee_id: Mapped[int] = mapped_column(ForeignKey("users.user_id"))
    status: Mapped[MentorshipStatus] = mapped_column(
        Enum(
            MentorshipStatus,
            name="mentorship_status_enum",
            values_callable=lambda obj: [e.value for e in obj],
        ),
        default=MentorshipStatus.PENDING,
    )
    domain: Mapped[str] = mapped_column(String)
    goals: Mapped[str] = mapped_column(Text)
    preferred_mode: Mapped[PreferredMode] = mapped_column(
        Enum(
            PreferredMode,
            name="preferred_mode_enum",
            values_callable=lambda obj: [e.value for e in obj],
        ),
        default=PreferredMode.ONLINE,
    )
    request_message: Mapped[str | None] = mapped_column(Text)
    start_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    end_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    created_timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    sessions: Mapped[list[MentorshipSessionEntity]] = relationship(
        order_by=MentorshipSessionEntity.session_id,
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    __table_args__ = (
        CheckConstraint("mentor_id <> mentee_id", name="check_different_ids"),
    )
