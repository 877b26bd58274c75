from datetime import datetime
from alumni_backend.dto.base_dto import BaseDto
from alumni_backend.common.alumni_enums import MentorshipStatus, PreferredMode


class FeedbackDto(BaseDto):
    rating: int
    comment: str | None = None


class SessionDto(BaseDto):
    id: int
    date: datetime
    duration: int | None = None
    mode: str | None = None
    notes: str | None = None
    feedback: FeedbackDto | None = None


class MentorshipDto(BaseDto):
    id: int
    mentor_id: int
    mentee_id: int
    status: MentorshipStatus
    domain: str
    goals: str
    preferred_mode: PreferredMode
    request_message: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    created_at: datetime | None = None
    sessions: list[SessionDto] = []
