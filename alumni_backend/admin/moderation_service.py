from sqlalchemy.ext.asyncio import AsyncSession
from alumni_backend.common.alumni_enums import EventStatus, JobStatus, MentorshipStatus
from alumni_backend.common.exceptions import NotFoundError
from alumni_backend.common.user_role import UserRole
from alumni_backend.dto.event_dto import EventDto
from alumni_backend.dto.job_dto import JobDto
from alumni_backend.dto.stats_dto import StatsDto
from alumni_backend.dto.user_dto import UserDto, UsersPageDto
from alumni_backend.dto.user_context_dto import UserContextDto
from alumni_backend.utils.access_policy import AccessAction


class ModerationService:
    """
    Admin-only service moderating user accounts, events and jobs and reporting
    platform counts.
    """

    def __init__(
        self,
        logger,
        users_repository,
        mentorship_repository,
        event_repository,
        job_repository,
        event_mapper,
        job_mapper,
        user_mapper,
        access_policy,
    ):
        self.logger = logger
        self.users_repository = users_repository
        self.mentorship_repository = mentorship_repository
        self.event_repository = event_repository
        self.job_repository = job_repository
        self.event_mapper = event_mapper
        self.job_mapper = job_mapper
        self.user_mapper = user_mapper
        self.access_policy = access_policy

    async def get_users(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        role: UserRole | None = None,
        is_verified: bool | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> UsersPageDto:
        """List user accounts, newest first, optionally by role and verification."""
        self.access_policy.ensure_allowed(user_context, None, AccessAction.MODERATE)

        users, total = await self.users_repository.get_users(
            session=session,
            role=role,
            is_verified=is_verified,
            page=page,
            limit=limit,
        )

        return UsersPageDto(
            users=self.user_mapper.map_to_user_dtos(users),
            total=total,
            total_pages=-(-total // limit),
            current_page=page,
        )

    async def verify_user(
        self, session: AsyncSession, user_context: UserContextDto, user_id: int
    ) -> UserDto:
        """
        Mark a user as verified.

        Only verified mentors are listed in the mentor directory, so this is
        what makes a registered mentor visible to students.

        Raises:
            ForbiddenError: If the current user is not an admin.
            NotFoundError: If the user does not exist.
        """
        self.access_policy.ensure_allowed(user_context, None, AccessAction.MODERATE)

        user = await self._get_user_or_raise(session=session, user_id=user_id)
        user.is_verified = True
        user = await self.users_repository.upsert_users(session=session, entity=user)
        await session.commit()

        self.logger.info(
            "[ModerationService] user %s verified by admin %s.",
            user_id,
            user_context.user_id,
        )
        return self.user_mapper.map_to_user_dto(user)

    async def suspend_user(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        user_id: int,
        suspend: bool,
    ) -> UserDto:
        """
        Suspend or reinstate a user account.

        Raises:
            ForbiddenError: If the current user is not an admin.
            NotFoundError: If the user does not exist.
        """
        self.access_policy.ensure_allowed(user_context, None, AccessAction.MODERATE)

        user = await self._get_user_or_raise(session=session, user_id=user_id)
        user.is_suspended = suspend
        user = await self.users_repository.upsert_users(session=session, entity=user)
        await session.commit()

        self.logger.info(
            "[ModerationService] user %s %s by admin %s.",
            user_id,
            "suspended" if suspend else "reinstated",
            user_context.user_id,
        )
        return self.user_mapper.map_to_user_dto(user)

    async def approve_event(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        event_id: int,
        approve: bool,
    ) -> EventDto:
        """
        Set the approval flag of an event.

        Args:
            session (AsyncSession): Active SQLAlchemy async session.
            user_context (UserContextDto): Authenticated admin context.
            event_id (int): Event to moderate.
            approve (bool): True to approve, False to withdraw approval.

        Returns:
            EventDto: The moderated event.

        Raises:
            ForbiddenError: If the current user is not an admin.
            NotFoundError: If the event does not exist.
        """
        self.access_policy.ensure_allowed(user_context, None, AccessAction.MODERATE)

        event = await self.event_repository.get_by_event_id(
            session=session, event_id=event_id
        )
        if not event:
            raise NotFoundError("Event not found.")

        event.is_approved = approve
        event = await self.event_repository.upsert_event(session=session, entity=event)
        await session.commit()

        self.logger.info(
            "[ModerationService] event %s %s by admin %s.",
            event_id,
            "approved" if approve else "rejected",
            user_context.user_id,
        )
        return self.event_mapper.map_to_event_dto(event)

    async def approve_job(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        job_id: int,
        approve: bool,
    ) -> JobDto:
        """
        Activate or reject a job posting.

        Raises:
            ForbiddenError: If the current user is not an admin.
            NotFoundError: If the job does not exist.
        """
        self.access_policy.ensure_allowed(user_context, None, AccessAction.MODERATE)

        job = await self.job_repository.get_by_job_id(session=session, job_id=job_id)
        if not job:
            raise NotFoundError("Job not found.")

        job.status = JobStatus.ACTIVE if approve else JobStatus.REJECTED
        job = await self.job_repository.upsert_job(session=session, entity=job)
        await session.commit()

        self.logger.info(
            "[ModerationService] job %s set to %s by admin %s.",
            job_id,
            job.status.value,
            user_context.user_id,
        )
        return self.job_mapper.map_to_job_dto(job)

    async def get_pending_events(
        self, session: AsyncSession, user_context: UserContextDto
    ) -> list[EventDto]:
        self.access_policy.ensure_allowed(user_context, None, AccessAction.MODERATE)
        events = await self.event_repository.get_pending_events(session=session)
        return self.event_mapper.map_to_event_dtos(events)

    async def get_pending_jobs(
        self, session: AsyncSession, user_context: UserContextDto
    ) -> list[JobDto]:
        self.access_policy.ensure_allowed(user_context, None, AccessAction.MODERATE)
        jobs = await self.job_repository.get_pending_jobs(session=session)
        return self.job_mapper.map_to_job_dtos(jobs)

    async def get_stats(
        self, session: AsyncSession, user_context: UserContextDto
    ) -> StatsDto:
        """Collect platform-wide counters for the admin dashboard."""
        self.access_policy.ensure_allowed(user_context, None, AccessAction.MODERATE)

        users = self.users_repository
        return StatsDto(
            total_users=await users.count_users(session=session),
            total_alumni=await users.count_users(
                session=session, role=UserRole.ALUMNI
            ),
            total_students=await users.count_users(
                session=session, role=UserRole.STUDENT
            ),
            verified_alumni=await users.count_users(
                session=session, role=UserRole.ALUMNI, is_verified=True
            ),
            total_mentors=await users.count_users(session=session, is_mentor=True),
            total_jobs=await self.job_repository.count_jobs(session=session),
            active_jobs=await self.job_repository.count_jobs(
                session=session, status=JobStatus.ACTIVE
            ),
            total_events=await self.event_repository.count_events(session=session),
            upcoming_events=await self.event_repository.count_events(
                session=session, status=EventStatus.UPCOMING
            ),
            active_mentorships=await self.mentorship_repository.count_by_status(
                session=session, status=MentorshipStatus.ACCEPTED
            ),
        )

    async def _get_user_or_raise(self, session: AsyncSession, user_id: int):
        user = await self.users_repository.get_user_by_user_id(
            session=session, user_id=user_id
        )
        if not user:
            raise NotFoundError("User not found.")
        return user
