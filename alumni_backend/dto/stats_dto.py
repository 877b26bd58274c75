from alumni_backend.dto.base_dto import BaseDto


class StatsDto(BaseDto):
    total_users: int
    total_alumni: int
    total_students: int
    verified_alumni: int
    total_mentors: int
    total_jobs: int
    active_jobs: int
    total_events: int
    upcoming_events: int
    active_mentorships: int
