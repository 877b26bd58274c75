from datetime import datetime, timezone
from sqlalchemy import Integer, DateTime, ForeignKey, Enum, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from alumni_backend.common.base import Base
from alumni_backend.common.alumni_enums import ApplicationStatus


class JobApplicationEntity(Base):
    __tablename__ = "job_applications"

    application_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    job_id: Mapped[int] = mapped_column(ForeignKey("jobs.job_id", ondelete="CASCADE"))
    applicant_id: Mapped[int] = mapped_column(ForeignKey("users.user_id"))
    status: Mapped[ApplicationStatus] = mapped_column(
        Enum(
            ApplicationStatus,
            name="application_status_enum",
            values_callable=lambda obj: [e.value for e in obj],
        ),
        default=ApplicationStatus.APPLIED,
    )
    applied_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    __table_args__ = (UniqueConstraint("job_id", "applicant_id"),)
