from datetime import datetime
from alumni_backend.dto.base_dto import BaseDto
from alumni_backend.common.alumni_enums import (
    AttendeeStatus,
    EventMode,
    EventStatus,
    EventType,
    TargetAudience,
)


class VenueDto(BaseDto):
    address: str | None = None
    city: str | None = None
    virtual_link: str | None = None


class AttendeeDto(BaseDto):
    user_id: int
    status: AttendeeStatus
    registered_at: datetime


class EventDto(BaseDto):
    id: int
    title: str
    description: str
    type: EventType
    mode: EventMode
    start_date: datetime
    end_date: datetime
    venue: VenueDto | None = None
    organizer_id: int
    target_audience: TargetAudience
    max_attendees: int | None = None
    registration_deadline: datetime | None = None
    status: EventStatus
    is_approved: bool
    going_count: int
    attendees: list[AttendeeDto] = []


class EventsPageDto(BaseDto):
    events: list[EventDto]
    total: int
    total_pages: int
    current_page: int
