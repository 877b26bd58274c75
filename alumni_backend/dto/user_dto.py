from datetime import datetime
from alumni_backend.dto.base_dto import BaseDto
from alumni_backend.common.user_role import UserRole


class MentorDetailsDto(BaseDto):
    expertise: list[str] = []
    experience: int | None = None
    availability: str | None = None
    max_mentees: int | None = None


class MentorDto(BaseDto):
    id: int
    first_name: str
    last_name: str
    primary_email: str
    role: UserRole
    is_verified: bool
    mentor_details: MentorDetailsDto


class MentorsPageDto(BaseDto):
    mentors: list[MentorDto]
    total: int
    total_pages: int
    current_page: int


class UserDto(BaseDto):
    id: int
    first_name: str
    last_name: str
    primary_email: str
    role: UserRole
    is_verified: bool
    is_mentor: bool
    is_suspended: bool
    created_at: datetime | None = None


class UsersPageDto(BaseDto):
    users: list[UserDto]
    total: int
    total_pages: int
    current_page: int
