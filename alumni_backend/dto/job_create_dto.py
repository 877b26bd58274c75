from pydantic import Field
from alumni_backend.dto.base_request_dto import BaseRequestDto
from alumni_backend.common.alumni_enums import JobStatus, JobType


class JobCreateDto(BaseRequestDto):
    title: str = Field(min_length=1)
    company: str = Field(min_length=1)
    location: str = Field(min_length=1)
    type: JobType
    description: str = Field(min_length=1)


class JobUpdateDto(BaseRequestDto):
    title: str | None = Field(default=None, min_length=1)
    company: str | None = Field(default=None, min_length=1)
    location: str | None = Field(default=None, min_length=1)
    type: JobType | None = None
    description: str | None = Field(default=None, min_length=1)
    status: JobStatus | None = None
