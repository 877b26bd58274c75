from sqlalchemy.ext.asyncio import AsyncSession
from alumni_backend.common.alumni_enums import ApplicationStatus, JobStatus
from alumni_backend.common.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
)
from alumni_backend.common.user_role import UserRole
from alumni_backend.dto.job_create_dto import JobCreateDto, JobUpdateDto
from alumni_backend.dto.job_dto import JobApplicationDto, JobDto, JobsPageDto
from alumni_backend.dto.user_context_dto import UserContextDto
from alumni_backend.entity.job_application_entity import JobApplicationEntity
from alumni_backend.entity.job_entity import JobEntity
from alumni_backend.utils.access_policy import AccessAction


class JobService:
    """
    Service handling job postings and applications.
    """

    def __init__(self, logger, job_repository, job_mapper, access_policy):
        """
        Initialize the JobService with its dependencies.

        Args:
            logger: The logger instance for logging messages.
            job_repository (JobRepository): Job and application record store.
            job_mapper (JobMapper): Converts entities to DTOs.
            access_policy (AccessPolicy): Ownership and role based authorization.
        """
        self.logger = logger
        self.job_repository = job_repository
        self.job_mapper = job_mapper
        self.access_policy = access_policy

    async def create_job(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        job_data: JobCreateDto,
    ) -> JobDto:
        """
        Post a job as the current user.

        Jobs posted by admins are active immediately; others are pending
        until an admin approves them.

        Raises:
            ForbiddenError: If the current user is a student.
        """
        self.access_policy.ensure_allowed(
            user_context,
            None,
            AccessAction.POST_JOB,
            message="Students cannot post jobs.",
        )

        status = (
            JobStatus.ACTIVE
            if user_context.has_role(UserRole.ADMIN)
            else JobStatus.PENDING
        )
        job = await self.job_repository.upsert_job(
            session=session,
            entity=JobEntity(
                title=job_data.title,
                company=job_data.company,
                location=job_data.location,
                type=job_data.type,
                description=job_data.description,
                posted_by_id=user_context.user_id,
                status=status,
                applications=[],
            ),
        )
        await session.commit()

        self.logger.info(
            "[JobService] job %s posted by user %s with status %s.",
            job.job_id,
            user_context.user_id,
            status.value,
        )
        return self.job_mapper.map_to_job_dto(job)

    async def get_job(self, session: AsyncSession, job_id: int) -> JobDto:
        job = await self._get_job_or_raise(session=session, job_id=job_id)
        return self.job_mapper.map_to_job_dto(job)

    async def get_jobs(
        self, session: AsyncSession, page: int = 1, limit: int = 10
    ) -> JobsPageDto:
        """Retrieve one page of active jobs, newest first."""
        jobs, total = await self.job_repository.get_jobs(
            session=session, status=JobStatus.ACTIVE, page=page, limit=limit
        )

        return JobsPageDto(
            jobs=self.job_mapper.map_to_job_dtos(jobs),
            total=total,
            total_pages=-(-total // limit),
            current_page=page,
        )

    async def update_job(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        job_id: int,
        job_data: JobUpdateDto,
    ) -> JobDto:
        """
        Update the fields present in the payload.

        Only the poster or an admin may update a job, and the poster is never
        changed. A poster may close their own job, but any other status change
        is a moderation decision left to admins.

        Raises:
            NotFoundError: If the job does not exist.
            ForbiddenError: If the current user is neither poster nor admin, or
                a non-admin sets a status other than closed.
        """
        job = await self._get_job_or_raise(session=session, job_id=job_id)
        self.access_policy.ensure_allowed(
            user_context,
            job,
            AccessAction.MODIFY_JOB,
            message="Not authorized to update this job.",
        )

        changes = job_data.to_changes()
        new_status = changes.get("status")
        if (
            new_status is not None
            and new_status != JobStatus.CLOSED
            and not user_context.has_role(UserRole.ADMIN)
        ):
            raise ForbiddenError("Only admins can change the status of a job.")

        for field, value in changes.items():
            setattr(job, field, value)

        job = await self.job_repository.upsert_job(session=session, entity=job)
        await session.commit()

        self.logger.info(
            "[JobService] job %s updated by user %s.", job_id, user_context.user_id
        )
        return self.job_mapper.map_to_job_dto(job)

    async def delete_job(
        self, session: AsyncSession, user_context: UserContextDto, job_id: int
    ) -> None:
        """
        Delete a job together with its applications.

        Raises:
            NotFoundError: If the job does not exist.
            ForbiddenError: If the current user is neither poster nor admin.
        """
        job = await self._get_job_or_raise(session=session, job_id=job_id)
        self.access_policy.ensure_allowed(
            user_context,
            job,
            AccessAction.MODIFY_JOB,
            message="Not authorized to delete this job.",
        )

        await self.job_repository.delete_job(session=session, entity=job)
        await session.commit()

        self.logger.info(
            "[JobService] job %s deleted by user %s.", job_id, user_context.user_id
        )

    async def apply_to_job(
        self, session: AsyncSession, user_context: UserContextDto, job_id: int
    ) -> JobApplicationDto:
        """
        Apply the current user to a job.

        Raises:
            NotFoundError: If the job does not exist.
            ConflictError: If the user already applied to this job.
        """
        await self._get_job_or_raise(session=session, job_id=job_id)

        existing = await self.job_repository.find_application(
            session=session, job_id=job_id, applicant_id=user_context.user_id
        )
        if existing:
            raise ConflictError("You have already applied to this job.")

        application = await self.job_repository.add_application(
            session=session,
            entity=JobApplicationEntity(
                job_id=job_id,
                applicant_id=user_context.user_id,
                status=ApplicationStatus.APPLIED,
            ),
        )
        await session.commit()

        self.logger.info(
            "[JobService] user %s applied to job %s.", user_context.user_id, job_id
        )
        return self.job_mapper.map_to_application_dto(application)

    async def _get_job_or_raise(self, session: AsyncSession, job_id: int) -> JobEntity:
        job = await self.job_repository.get_by_job_id(session=session, job_id=job_id)
        if not job:
            raise NotFoundError("Job not found.")
        return job
