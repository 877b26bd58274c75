from datetime import datetime, timezone
from sqlalchemy import Integer, String, Text, DateTime, ForeignKey, Enum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from alumni_backend.common.base import Base
from alumni_backend.common.alumni_enums import JobType, JobStatus
from alumni_backend.entity.job_application_entity import JobApplicationEntity


class JobEntity(Base):
    __tablename__ = "jobs"

    job_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String)
    company: Mapped[str] = mapped_column(String)
    location: Mapped[str] = mapped_column(String)
    type: Mapped[JobType] = mapped_column(
        Enum(
            JobType,
            name="job_type_enum",
            values_callable=lambda obj: [e.value for e in obj],
        )
    )
    description: Mapped[str] = mapped_column(Text)
    posted_by_id: Mapped[int] = mapped_column(ForeignKey("users.user_id"))
    status: Mapped[JobStatus] = mapped_column(
        Enum(
            JobStatus,
            name="job_status_enum",
            values_callable=lambda obj: [e.value for e in obj],
        ),
        default=JobStatus.PENDING,
    )
    created_timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    applications: Mapped[list[JobApplicationEntity]] = relationship(
        order_by=JobApplicationEntity.application_id,
        cascade="all, delete-orphan",
        lazy="selectin",
    )
