from datetime import datetime, timezone
from sqlalchemy import Boolean, Integer, String, DateTime, JSON, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column
from alumni_backend.common.base import Base
from alumni_backend.common.user_role import UserRole


class UsersEntity(Base):
    __tablename__ = "users"

    user_id: Mapped[int] = mapped_column(Integer, primary_key=True)

    first_name: Mapped[str] = mapped_column(String)
    last_name: Mapped[str] = mapped_column(String)
    primary_email: Mapped[str] = mapped_column(String, unique=True)

    role: Mapped[UserRole] = mapped_column(
        SAEnum(
            UserRole,
            name="user_role",
            values_callable=lambda obj: [e.value for e in obj],
        ),
        default=UserRole.ALUMNI,
    )

    is_verified: Mapped[bool] = mapped_column(Boolean, default=False)
    is_mentor: Mapped[bool] = mapped_column(Boolean, default=False)
    is_suspended: Mapped[bool] = mapped_column(Boolean, default=False)

    # Mentor profile, only meaningful when is_mentor is set.
    expertise: Mapped[list[str] | None] = mapped_column(JSON)
    experience: Mapped[int | None] = mapped_column(Integer)
    availability: Mapped[str | None] = mapped_column(String)
    max_mentees: Mapped[int | None] = mapped_column(Integer)

    created_timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
