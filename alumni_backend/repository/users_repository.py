from alumni_backend.entity.users_entity import UsersEntity
from alumni_backend.common.user_role import UserRole
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession


class UsersRepository:
    """
    Repository for handling database operations related to UsersEntity.
    """

    async def get_user_by_user_id(
        self, session: AsyncSession, user_id: int
    ) -> UsersEntity | None:
        """Load one user, mentor or not, by id; None when absent."""
        result = await session.execute(
            select(UsersEntity).where(UsersEntity.user_id == user_id)
        )

        return result.scalars().one_or_none()

    async def get_mentors(
        self,
        session: AsyncSession,
        expertise: str | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[UsersEntity], int]:
        """
        Retrieve one page of verified mentors, optionally filtered by expertise.

        The expertise filter is applied in Python because the expertise list is
        stored as a portable JSON column.

        Args:
            session (AsyncSession): The active async database session.
            expertise (str | None): Case-insensitive substring of an expertise entry.
            page (int): 1-based page number.
            limit (int): Page size.

        Returns:
            tuple[list[UsersEntity], int]: The requested page and the total count of
            matching mentors.
        """
        result = await session.execute(
            select(UsersEntity)
            .where(UsersEntity.is_mentor.is_(True), UsersEntity.is_verified.is_(True))
            .order_by(UsersEntity.user_id)
        )
        mentors = list(result.scalars().all())

        if expertise:
            needle = expertise.lower()
            mentors = [
                m
                for m in mentors
                if any(needle in e.lower() for e in m.expertise or [])
            ]

        offset = (page - 1) * limit
        return mentors[offset : offset + limit], len(mentors)

    async def get_users(
        self,
        session: AsyncSession,
        role: UserRole | None = None,
        is_verified: bool | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> tuple[list[UsersEntity], int]:
        """
        Retrieve one page of users, newest first.

        Args:
            session (AsyncSession): The active async database session.
            role (UserRole | None): Restrict to a role.
            is_verified (bool | None): Restrict to verified/unverified users.
            page (int): 1-based page number.
            limit (int): Page size.

        Returns:
            tuple[list[UsersEntity], int]: The requested page and the total count.
        """
        filters = []
        if role is not None:
            filters.append(UsersEntity.role == role)
        if is_verified is not None:
            filters.append(UsersEntity.is_verified.is_(is_verified))

        total = (
            await session.execute(
                select(func.count()).select_from(UsersEntity).where(*filters)
            )
        ).scalar_one()

        result = await session.execute(
            select(UsersEntity)
            .where(*filters)
            .order_by(UsersEntity.created_timestamp.desc(), UsersEntity.user_id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )

        return list(result.scalars().all()), total

    async def count_users(
        self,
        session: AsyncSession,
        role: UserRole | None = None,
        is_verified: bool | None = None,
        is_mentor: bool | None = None,
    ) -> int:
        """
        Count users matching the given optional filters.

        Args:
            session (AsyncSession): The active async database session.
            role (UserRole | None): Restrict to a role.
            is_verified (bool | None): Restrict to verified/unverified users.
            is_mentor (bool | None): Restrict to mentors/non-mentors.

        Returns:
            int: Number of matching users.
        """
        query = select(func.count()).select_from(UsersEntity)
        if role is not None:
            query = query.where(UsersEntity.role == role)
        if is_verified is not None:
            query = query.where(UsersEntity.is_verified.is_(is_verified))
        if is_mentor is not None:
            query = query.where(UsersEntity.is_mentor.is_(is_mentor))

        result = await session.execute(query)
        return result.scalar_one()

    async def upsert_users(
        self, session: AsyncSession, entity: UsersEntity
    ) -> UsersEntity:
        """
        Persist a user, inserting it when its id is new.

        Used by mentor registration, which edits a loaded user in place.

        Returns:
            UsersEntity: The session-bound instance after flush.
        """
        merged_entity = await session.merge(entity)
        await session.flush()

        return merged_entity
