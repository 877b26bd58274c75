from datetime import datetime
from pydantic import Field, field_validator, model_validator
from alumni_backend.dto.base_request_dto import BaseRequestDto
from alumni_backend.utils.date_time_parser import as_utc
from alumni_backend.common.alumni_enums import (
    AttendeeStatus,
    EventMode,
    EventStatus,
    EventType,
    TargetAudience,
)


class VenueCreateDto(BaseRequestDto):
    address: str | None = None
    city: str | None = None
    virtual_link: str | None = None


class EventCreateDto(BaseRequestDto):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    type: EventType
    mode: EventMode
    start_date: datetime
    end_date: datetime
    venue: VenueCreateDto | None = None
    target_audience: TargetAudience = TargetAudience.ALL
    max_attendees: int | None = Field(default=None, ge=1)
    registration_deadline: datetime | None = None

    @field_validator("start_date", "end_date", "registration_deadline")
    @classmethod
    def normalize_dates(cls, value):
        return as_utc(value)

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        return self


class EventUpdateDto(BaseRequestDto):
    title: str | None = Field(default=None, min_length=1)
    description: str | None = Field(default=None, min_length=1)
    type: EventType | None = None
    mode: EventMode | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    venue: VenueCreateDto | None = None
    target_audience: TargetAudience | None = None
    max_attendees: int | None = Field(default=None, ge=1)
    registration_deadline: datetime | None = None
    status: EventStatus | None = None

    @field_validator("start_date", "end_date", "registration_deadline")
    @classmethod
    def normalize_dates(cls, value):
        return as_utc(value)


class RsvpCreateDto(BaseRequestDto):
    status: AttendeeStatus = AttendeeStatus.GOING
