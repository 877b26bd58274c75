from alumni_backend.entity.mentorship_entity import MentorshipEntity
from alumni_backend.entity.mentorship_session_entity import MentorshipSessionEntity
from alumni_backend.common.alumni_enums import (
    MentorshipStatus,
    ACTIVE_MENTORSHIP_STATUSES,
)
from sqlalchemy import select, func, or_, and_
from sqlalchemy.ext.asyncio import AsyncSession


class MentorshipRepository:
    """
    Repository for handling database operations related to MentorshipEntity and
    the sessions it owns.
    """

    async def get_by_mentorship_id(
        self, session: AsyncSession, mentorship_id: int
    ) -> MentorshipEntity | None:
        """
        Retrieve a mentorship, with its sessions, by ID.

        Args:
            session (AsyncSession): The active async database session.
            mentorship_id (int): Mentorship id.

        Returns:
            MentorshipEntity | None: The matching mentorship or None.
        """
        result = await session.execute(
            select(MentorshipEntity).where(
                MentorshipEntity.mentorship_id == mentorship_id
            )
        )

        return result.scalars().one_or_none()

    async def find_active_between(
        self, session: AsyncSession, mentor_id: int, mentee_id: int
    ) -> MentorshipEntity | None:
        """
        Retrieve the active (pending or accepted) mentorship of a mentor/mentee pair.

        Args:
            session (AsyncSession): The active async database session.
            mentor_id (int): The mentor's user id.
            mentee_id (int): The mentee's user id.

        Returns:
            MentorshipEntity | None: The active mentorship, or None when the pair has
            no pending or accepted record.
        """
        result = await session.execute(
            select(MentorshipEntity)
            .where(
                and_(
                    MentorshipEntity.mentor_id == mentor_id,
                    MentorshipEntity.mentee_id == mentee_id,
                    MentorshipEntity.status.in_(ACTIVE_MENTORSHIP_STATUSES),
                )
            )
            .limit(1)
        )

        return result.scalars().first()

    async def count_accepted(self, session: AsyncSession, mentor_id: int) -> int:
        """
        Count the accepted mentorships of a mentor.

        Pending requests are not included.

        Args:
            session (AsyncSession): The active async database session.
            mentor_id (int): The mentor's user id.

        Returns:
            int: Number of accepted mentorships.
        """
        result = await session.execute(
            select(func.count())
            .select_from(MentorshipEntity)
            .where(
                MentorshipEntity.mentor_id == mentor_id,
                MentorshipEntity.status == MentorshipStatus.ACCEPTED,
            )
        )

        return result.scalar_one()

    async def count_by_status(
        self, session: AsyncSession, status: MentorshipStatus
    ) -> int:
        """Count all mentorships in the given status."""
        result = await session.execute(
            select(func.count())
            .select_from(MentorshipEntity)
            .where(MentorshipEntity.status == status)
        )

        return result.scalar_one()

    async def get_pending_for_mentor(
        self, session: AsyncSession, mentor_id: int
    ) -> list[MentorshipEntity]:
        """
        Retrieve the pending requests addressed to a mentor, oldest first.

        Args:
            session (AsyncSession): The active async database session.
            mentor_id (int): The mentor's user id.

        Returns:
            list[MentorshipEntity]: Pending mentorships, or an empty list.
        """
        result = await session.execute(
            select(MentorshipEntity)
            .where(
                MentorshipEntity.mentor_id == mentor_id,
                MentorshipEntity.status == MentorshipStatus.PENDING,
            )
            .order_by(MentorshipEntity.mentorship_id)
        )

        return list(result.scalars().all())

    async def get_active_for_user(
        self, session: AsyncSession, user_id: int
    ) -> list[MentorshipEntity]:
        """
        Retrieve accepted mentorships where the user is either mentor or mentee.

        Args:
            session (AsyncSession): The active async database session.
            user_id (int): The user id.

        Returns:
            list[MentorshipEntity]: Accepted mentorships, or an empty list.
        """
        result = await session.execute(
            select(MentorshipEntity)
            .where(
                or_(
                    MentorshipEntity.mentor_id == user_id,
                    MentorshipEntity.mentee_id == user_id,
                ),
                MentorshipEntity.status == MentorshipStatus.ACCEPTED,
            )
            .order_by(MentorshipEntity.mentorship_id)
        )

        return list(result.scalars().all())

    async def upsert_mentorship(
        self, session: AsyncSession, entity: MentorshipEntity
    ) -> MentorshipEntity:
        """
        Inserts or updates a MentorshipEntity object in the database.

        Args:
            session (AsyncSession): The active async database session.
            entity (MentorshipEntity): The mentorship to persist.

        Returns:
            MentorshipEntity: The entity synchronized with the database, including
            generated keys.
        """
        merged_entity = await session.merge(entity)
        await session.flush()

        return merged_entity

    async def add_session(
        self,
        session: AsyncSession,
        mentorship: MentorshipEntity,
        entity: MentorshipSessionEntity,
    ) -> MentorshipSessionEntity:
        """
        Append a session to a mentorship's session list.

        Sessions are append-only; no ordering or overlap rule is applied.

        Args:
            session (AsyncSession): The active async database session.
            mentorship (MentorshipEntity): The owning mentorship, loaded in this session.
            entity (MentorshipSessionEntity): The new session.

        Returns:
            MentorshipSessionEntity: The persisted session with its generated id.
        """
        mentorship.sessions.append(entity)
        await session.flush()

        return entity
