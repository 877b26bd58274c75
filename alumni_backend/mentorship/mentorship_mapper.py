from alumni_backend.dto.mentorship_dto import FeedbackDto, MentorshipDto, SessionDto
from alumni_backend.dto.user_dto import MentorDetailsDto, MentorDto
from alumni_backend.entity.mentorship_entity import MentorshipEntity
from alumni_backend.entity.mentorship_session_entity import MentorshipSessionEntity
from alumni_backend.entity.users_entity import UsersEntity


class MentorshipMapper:
    """
    Mapper for converting mentorship and mentor entities to DTOs.
    """

    def map_to_session_dto(self, entity: MentorshipSessionEntity) -> SessionDto:
        return SessionDto(
            id=entity.session_id,
            date=entity.date,
            duration=entity.duration,
            mode=entity.mode,
            notes=entity.notes,
            feedback=FeedbackDto(**entity.feedback) if entity.feedback else None,
        )

    def map_to_mentorship_dto(self, entity: MentorshipEntity) -> MentorshipDto:
        return MentorshipDto(
            id=entity.mentorship_id,
            mentor_id=entity.mentor_id,
            mentee_id=entity.mentee_id,
            status=entity.status,
            domain=entity.domain,
            goals=entity.goals,
            preferred_mode=entity.preferred_mode,
            request_message=entity.request_message,
            start_date=entity.start_date,
            end_date=entity.end_date,
            created_at=entity.created_timestamp,
            sessions=[self.map_to_session_dto(s) for s in entity.sessions or []],
        )

    def map_to_mentorship_dtos(
        self, entities: list[MentorshipEntity]
    ) -> list[MentorshipDto]:
        """Maps a list of MentorshipEntity objects to MentorshipDto objects."""
        return [self.map_to_mentorship_dto(e) for e in entities]

    def map_to_mentor_dtos(self, users: list[UsersEntity]) -> list[MentorDto]:
        """Maps mentor user entities to MentorDto objects, leaving out private fields."""
        return [
            MentorDto(
                id=u.user_id,
                first_name=u.first_name,
                last_name=u.last_name,
                primary_email=u.primary_email,
                role=u.role,
                is_verified=u.is_verified,
                mentor_details=MentorDetailsDto(
                    expertise=u.expertise or [],
                    experience=u.experience,
                    availability=u.availability,
                    max_mentees=u.max_mentees,
                ),
            )
            for u in users
        ]
