from datetime import datetime
from typing import Literal
from pydantic import Field
from alumni_backend.dto.base_request_dto import BaseRequestDto
from alumni_backend.common.alumni_enums import PreferredMode


class MentorshipRequestCreateDto(BaseRequestDto):
    mentor_id: int
    domain: str = Field(min_length=1)
    goals: str = Field(min_length=1)
    preferred_mode: PreferredMode = PreferredMode.ONLINE
    request_message: str | None = None


class MentorshipDecisionCreateDto(BaseRequestDto):
    status: Literal["accepted", "rejected"]


class MentorshipCloseCreateDto(BaseRequestDto):
    status: Literal["completed", "cancelled"]


class SessionCreateDto(BaseRequestDto):
    date: datetime
    duration: int | None = Field(default=None, gt=0)
    mode: str | None = None
    notes: str | None = None


class FeedbackCreateDto(BaseRequestDto):
    session_id: int
    rating: int = Field(ge=1, le=5)
    comment: str | None = None


class MentorRegistrationCreateDto(BaseRequestDto):
    expertise: list[str] = []
    experience: int | None = Field(default=None, ge=0)
    availability: str | None = None
    max_mentees: int | None = Field(default=None, ge=1)
