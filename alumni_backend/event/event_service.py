from sqlalchemy.ext.asyncio import AsyncSession
from alumni_backend.common.alumni_enums import (
    AttendeeStatus,
    EventMode,
    EventStatus,
    EventType,
)
from alumni_backend.common.exceptions import (
    CapacityExceededError,
    NotFoundError,
    ValidationError,
)
from alumni_backend.common.user_role import UserRole
from alumni_backend.dto.event_create_dto import EventCreateDto, EventUpdateDto
from alumni_backend.dto.event_dto import EventDto, EventsPageDto
from alumni_backend.dto.user_context_dto import UserContextDto
from alumni_backend.entity.event_attendee_entity import EventAttendeeEntity
from alumni_backend.entity.event_entity import EventEntity
from alumni_backend.utils.access_policy import AccessAction
from alumni_backend.utils.date_time_parser import as_utc
from alumni_backend.utils.target_lock_registry import event_key


class EventService:
    """
    Service handling events and their RSVP lists.
    """

    def __init__(
        self,
        logger,
        event_repository,
        event_mapper,
        capacity_evaluator,
        access_policy,
        target_lock_registry,
    ):
        """
        Initialize the EventService with its dependencies.

        Args:
            logger: The logger instance for logging messages.
            event_repository (EventRepository): Event and attendee record store.
            event_mapper (EventMapper): Converts entities to DTOs.
            capacity_evaluator (CapacityEvaluator): Decides event capacity.
            access_policy (AccessPolicy): Relation and role based authorization.
            target_lock_registry (TargetLockRegistry): Serializes RSVPs per event.
        """
        self.logger = logger
        self.event_repository = event_repository
        self.event_mapper = event_mapper
        self.capacity_evaluator = capacity_evaluator
        self.access_policy = access_policy
        self.target_lock_registry = target_lock_registry

    async def rsvp(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        event_id: int,
        status: AttendeeStatus = AttendeeStatus.GOING,
    ) -> EventDto:
        """
        Record the current user's RSVP for an event.

        An existing entry of the user only has its status replaced, without
        any capacity check, so a "maybe" can become "going" on a full event.
        A new "going" entry is admitted only while the going count is below
        max_attendees (when set).

        Args:
            session (AsyncSession): Active SQLAlchemy async session.
            user_context (UserContextDto): Authenticated user context.
            event_id (int): Target event.
            status (AttendeeStatus): going, maybe or not-going.

        Returns:
            EventDto: The event with its refreshed attendee list.

        Raises:
            NotFoundError: If the event does not exist.
            CapacityExceededError: If a new going entry would exceed max_attendees.
        """
        event = await self._get_event_or_raise(session=session, event_id=event_id)
        user_id = user_context.user_id

        async with self.target_lock_registry.hold(event_key(event_id)):
            existing = await self.event_repository.find_attendee(
                session=session, event_id=event_id, user_id=user_id
            )

            if not existing and status == AttendeeStatus.GOING:
                going_count = await self.event_repository.count_going(
                    session=session, event_id=event_id
                )
                if not self.capacity_evaluator.can_admit(
                    going_count, event.max_attendees
                ):
                    self.logger.info(
                        "[EventService] event %s is full (%s/%s), rsvp of user %s rejected.",
                        event_id,
                        going_count,
                        event.max_attendees,
                        user_id,
                    )
                    raise CapacityExceededError("Event is full.")

            await self.event_repository.upsert_attendee(
                session=session,
                entity=EventAttendeeEntity(
                    event_id=event_id, user_id=user_id, status=status
                ),
            )
            await session.commit()

        self.logger.info(
            "[EventService] user %s rsvp %s for event %s.",
            user_id,
            status.value,
            event_id,
        )
        await session.refresh(event, attribute_names=["attendees"])
        return self.event_mapper.map_to_event_dto(event)

    async def cancel_rsvp(
        self, session: AsyncSession, user_context: UserContextDto, event_id: int
    ) -> EventDto:
        """
        Remove the current user's RSVP for an event.

        Cancelling without an RSVP is a no-op.

        Raises:
            NotFoundError: If the event does not exist.
        """
        event = await self._get_event_or_raise(session=session, event_id=event_id)

        removed = await self.event_repository.remove_attendee(
            session=session, event_id=event_id, user_id=user_context.user_id
        )
        await session.commit()

        if removed:
            self.logger.info(
                "[EventService] user %s cancelled rsvp for event %s.",
                user_context.user_id,
                event_id,
            )
        else:
            self.logger.debug(
                "[EventService] user %s had no rsvp for event %s.",
                user_context.user_id,
                event_id,
            )
        await session.refresh(event, attribute_names=["attendees"])
        return self.event_mapper.map_to_event_dto(event)

    async def create_event(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        event_data: EventCreateDto,
    ) -> EventDto:
        """
        Create an event organized by the current user.

        Events created by admins are approved right away; all others wait for
        moderation.
        """
        is_admin = user_context.has_role(UserRole.ADMIN)
        event = await self.event_repository.upsert_event(
            session=session,
            entity=EventEntity(
                title=event_data.title,
                description=event_data.description,
                type=event_data.type,
                mode=event_data.mode,
                start_date=event_data.start_date,
                end_date=event_data.end_date,
                venue=event_data.venue.to_db_dict() if event_data.venue else None,
                organizer_id=user_context.user_id,
                target_audience=event_data.target_audience,
                max_attendees=event_data.max_attendees,
                registration_deadline=event_data.registration_deadline,
                status=EventStatus.UPCOMING,
                is_approved=is_admin,
                attendees=[],
            ),
        )
        await session.commit()

        self.logger.info(
            "[EventService] event %s created by user %s (approved=%s).",
            event.event_id,
            user_context.user_id,
            is_admin,
        )
        return self.event_mapper.map_to_event_dto(event)

    async def get_event(self, session: AsyncSession, event_id: int) -> EventDto:
        event = await self._get_event_or_raise(session=session, event_id=event_id)
        return self.event_mapper.map_to_event_dto(event)

    async def get_events(
        self,
        session: AsyncSession,
        event_type: EventType | None = None,
        mode: EventMode | None = None,
        status: EventStatus | None = EventStatus.UPCOMING,
        page: int = 1,
        limit: int = 10,
    ) -> EventsPageDto:
        """Retrieve one page of approved events ordered by start date."""
        events, total = await self.event_repository.get_events(
            session=session,
            event_type=event_type,
            mode=mode,
            status=status,
            page=page,
            limit=limit,
        )

        return EventsPageDto(
            events=self.event_mapper.map_to_event_dtos(events),
            total=total,
            total_pages=-(-total // limit),
            current_page=page,
        )

    async def update_event(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        event_id: int,
        event_data: EventUpdateDto,
    ) -> EventDto:
        """
        Update the fields present in the payload.

        Only the organizer or an admin may update an event. The organizer and
        the approval flag are never changed here, and fields sent as null are
        left untouched.

        Raises:
            NotFoundError: If the event does not exist.
            ForbiddenError: If the current user is neither organizer nor admin.
            ValidationError: If the resulting end date precedes the start date.
        """
        event = await self._get_event_or_raise(session=session, event_id=event_id)
        self.access_policy.ensure_allowed(
            user_context,
            event,
            AccessAction.MODIFY_EVENT,
            message="Not authorized to update this event.",
        )

        changes = event_data.to_changes()
        start_date = as_utc(changes.get("start_date", event.start_date))
        end_date = as_utc(changes.get("end_date", event.end_date))
        if end_date < start_date:
            raise ValidationError("endDate must not be before startDate")

        for field, value in changes.items():
            if field == "venue":
                value = event_data.venue.to_db_dict() if event_data.venue else None
            setattr(event, field, value)

        event = await self.event_repository.upsert_event(session=session, entity=event)
        await session.commit()

        self.logger.info(
            "[EventService] event %s updated by user %s.",
            event_id,
            user_context.user_id,
        )
        return self.event_mapper.map_to_event_dto(event)

    async def delete_event(
        self, session: AsyncSession, user_context: UserContextDto, event_id: int
    ) -> None:
        """
        Delete an event together with its RSVP list.

        Raises:
            NotFoundError: If the event does not exist.
            ForbiddenError: If the current user is neither organizer nor admin.
        """
        event = await self._get_event_or_raise(session=session, event_id=event_id)
        self.access_policy.ensure_allowed(
            user_context,
            event,
            AccessAction.MODIFY_EVENT,
            message="Not authorized to delete this event.",
        )

        await self.event_repository.delete_event(session=session, entity=event)
        await session.commit()

        self.logger.info(
            "[EventService] event %s deleted by user %s.",
            event_id,
            user_context.user_id,
        )

    async def _get_event_or_raise(
        self, session: AsyncSession, event_id: int
    ) -> EventEntity:
        event = await self.event_repository.get_by_event_id(
            session=session, event_id=event_id
        )
        if not event:
            raise NotFoundError("Event not found.")
        return event
