from datetime import datetime
from alumni_backend.dto.base_dto import BaseDto
from alumni_backend.common.alumni_enums import ApplicationStatus, JobStatus, JobType


class JobApplicationDto(BaseDto):
    applicant_id: int
    status: ApplicationStatus
    applied_at: datetime


class JobDto(BaseDto):
    id: int
    title: str
    company: str
    location: str
    type: JobType
    description: str
    posted_by_id: int
    status: JobStatus
    application_count: int
    created_at: datetime | None = None


class JobsPageDto(BaseDto):
    jobs: list[JobDto]
    total: int
    total_pages: int
    current_page: int
