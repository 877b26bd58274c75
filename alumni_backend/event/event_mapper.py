from alumni_backend.common.alumni_enums import AttendeeStatus
from alumni_backend.dto.event_dto import AttendeeDto, EventDto, VenueDto
from alumni_backend.entity.event_entity import EventEntity


class EventMapper:
    """
    Mapper for converting event entities to DTOs.
    """

    def map_to_event_dto(self, entity: EventEntity) -> EventDto:
        attendees = entity.attendees or []
        return EventDto(
            id=entity.event_id,
            title=entity.title,
            description=entity.description,
            type=entity.type,
            mode=entity.mode,
            start_date=entity.start_date,
            end_date=entity.end_date,
            venue=VenueDto(**entity.venue) if entity.venue else None,
            organizer_id=entity.organizer_id,
            target_audience=entity.target_audience,
            max_attendees=entity.max_attendees,
            registration_deadline=entity.registration_deadline,
            status=entity.status,
            is_approved=entity.is_approved,
            going_count=sum(1 for a in attendees if a.status == AttendeeStatus.GOING),
            attendees=[
                AttendeeDto(
                    user_id=a.user_id, status=a.status, registered_at=a.registered_at
                )
                for a in attendees
            ],
        )

    def map_to_event_dtos(self, entities: list[EventEntity]) -> list[EventDto]:
        """Maps a list of EventEntity objects to EventDto objects."""
        return [self.map_to_event_dto(e) for e in entities]
