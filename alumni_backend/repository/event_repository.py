from alumni_backend.entity.event_entity import EventEntity
from alumni_backend.entity.event_attendee_entity import EventAttendeeEntity
from alumni_backend.common.alumni_enums import (
    AttendeeStatus,
    EventMode,
    EventStatus,
    EventType,
)
from sqlalchemy import select, delete, func
from sqlalchemy.ext.asyncio import AsyncSession


class EventRepository:
    """
    Repository for handling database operations related to EventEntity and its
    attendee entries.
    """

    async def get_by_event_id(
        self, session: AsyncSession, event_id: int
    ) -> EventEntity | None:
        """
        Retrieve an event, with its attendees, by ID.

        Args:
            session (AsyncSession): The active async database session.
            event_id (int): Event id.

        Returns:
            EventEntity | None: The matching event or None.
        """
        result = await session.execute(
            select(EventEntity).where(EventEntity.event_id == event_id)
        )

        return result.scalars().one_or_none()

    async def get_events(
        self,
        session: AsyncSession,
        event_type: EventType | None = None,
        mode: EventMode | None = None,
        status: EventStatus | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[EventEntity], int]:
        """
        Retrieve one page of approved events ordered by start date.

        Args:
            session (AsyncSession): The active async database session.
            event_type (EventType | None): Optional type filter.
            mode (EventMode | None): Optional mode filter.
            status (EventStatus | None): Optional status filter.
            page (int): 1-based page number.
            limit (int): Page size.

        Returns:
            tuple[list[EventEntity], int]: The requested page and the total count.
        """
        conditions = [EventEntity.is_approved.is_(True)]
        if event_type:
            conditions.append(EventEntity.type == event_type)
        if mode:
            conditions.append(EventEntity.mode == mode)
        if status:
            conditions.append(EventEntity.status == status)

        total = (
            await session.execute(
                select(func.count()).select_from(EventEntity).where(*conditions)
            )
        ).scalar_one()

        result = await session.execute(
            select(EventEntity)
            .where(*conditions)
            .order_by(EventEntity.start_date)
            .offset((page - 1) * limit)
            .limit(limit)
        )

        return list(result.scalars().all()), total

    async def get_pending_events(self, session: AsyncSession) -> list[EventEntity]:
        """Retrieve events awaiting approval, newest first."""
        result = await session.execute(
            select(EventEntity)
            .where(EventEntity.is_approved.is_(False))
            .order_by(EventEntity.created_timestamp.desc())
        )

        return list(result.scalars().all())

    async def count_events(
        self, session: AsyncSession, status: EventStatus | None = None
    ) -> int:
        """Count events, optionally restricted to one status."""
        query = select(func.count()).select_from(EventEntity)
        if status is not None:
            query = query.where(EventEntity.status == status)

        result = await session.execute(query)
        return result.scalar_one()

    async def upsert_event(
        self, session: AsyncSession, entity: EventEntity
    ) -> EventEntity:
        """
        Inserts or updates an EventEntity object in the database.

        Args:
            session (AsyncSession): The active async database session.
            entity (EventEntity): The event to persist.

        Returns:
            EventEntity: The entity synchronized with the database.
        """
        merged_entity = await session.merge(entity)
        await session.flush()

        return merged_entity

    async def delete_event(self, session: AsyncSession, entity: EventEntity) -> None:
        """Delete an event together with its attendee entries."""
        await session.delete(entity)
        await session.flush()

    async def find_attendee(
        self, session: AsyncSession, event_id: int, user_id: int
    ) -> EventAttendeeEntity | None:
        """
        Retrieve the attendee entry of a user for an event.

        Args:
            session (AsyncSession): The active async database session.
            event_id (int): Event id.
            user_id (int): Attendee user id.

        Returns:
            EventAttendeeEntity | None: The entry, or None if the user never RSVP'd.
        """
        result = await session.execute(
            select(EventAttendeeEntity).where(
                EventAttendeeEntity.event_id == event_id,
                EventAttendeeEntity.user_id == user_id,
            )
        )

        return result.scalars().one_or_none()

    async def count_going(self, session: AsyncSession, event_id: int) -> int:
        """
        Count the attendees of an event whose status is going.

        Args:
            session (AsyncSession): The active async database session.
            event_id (int): Event id.

        Returns:
            int: Number of going attendees.
        """
        result = await session.execute(
            select(func.count())
            .select_from(EventAttendeeEntity)
            .where(
                EventAttendeeEntity.event_id == event_id,
                EventAttendeeEntity.status == AttendeeStatus.GOING,
            )
        )

        return result.scalar_one()

    async def upsert_attendee(
        self, session: AsyncSession, entity: EventAttendeeEntity
    ) -> EventAttendeeEntity:
        """
        Create or replace the attendee entry keyed by (event_id, user_id).

        An existing entry for the same user keeps its identity and registration
        time and takes the new status; otherwise the entry is inserted.

        Args:
            session (AsyncSession): The active async database session.
            entity (EventAttendeeEntity): The desired attendee state.

        Returns:
            EventAttendeeEntity: The persisted attendee entry.
        """
        existing = await self.find_attendee(
            session=session, event_id=entity.event_id, user_id=entity.user_id
        )
        if existing:
            existing.status = entity.status
            await session.flush()
            return existing

        session.add(entity)
        await session.flush()

        return entity

    async def remove_attendee(
        self, session: AsyncSession, event_id: int, user_id: int
    ) -> int:
        """
        Remove any attendee entry of a user for an event.

        Args:
            session (AsyncSession): The active async database session.
            event_id (int): Event id.
            user_id (int): Attendee user id.

        Returns:
            int: Number of removed entries (0 when the user had none).
        """
        result = await session.execute(
            delete(EventAttendeeEntity).where(
                EventAttendeeEntity.event_id == event_id,
                EventAttendeeEntity.user_id == user_id,
            )
        )

        return result.rowcount
