from datetime import datetime
from sqlalchemy import Integer, String, Text, DateTime, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from alumni_backend.common.base import Base


class MentorshipSessionEntity(Base):
    __tablename__ = "mentorship_sessions"

    session_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    mentorship_id: Mapped[int] = mapped_column(
        ForeignKey("mentorships.mentorship_id", ondelete="CASCADE")
    )
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    duration: Mapped[int | None] = mapped_column(Integer)
    mode: Mapped[str | None] = mapped_column(String)
    notes: Mapped[str | None] = mapped_column(Text)
    # {"rating": int, "comment": str}, written by the mentee.
    feedback: Mapped[dict | None] = mapped_column(JSON)
