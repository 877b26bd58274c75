from alumni_backend.entity.job_entity import JobEntity
from alumni_backend.entity.job_application_entity import JobApplicationEntity
from alumni_backend.common.alumni_enums import JobStatus
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession


class JobRepository:
    """
    Repository for handling database operations related to JobEntity and its
    applications.
    """

    async def get_by_job_id(
        self, session: AsyncSession, job_id: int
    ) -> JobEntity | None:
        """
        Retrieve a job posting, with its applications, by ID.

        Args:
            session (AsyncSession): The active async database session.
            job_id (int): Job id.

        Returns:
            JobEntity | None: The matching job or None.
        """
        result = await session.execute(select(JobEntity).where(JobEntity.job_id == job_id))

        return result.scalars().one_or_none()

    async def get_jobs(
        self,
        session: AsyncSession,
        status: JobStatus = JobStatus.ACTIVE,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[JobEntity], int]:
        """
        Retrieve one page of jobs in the given status, newest first.

        Returns:
            tuple[list[JobEntity], int]: The requested page and the total count.
        """
        total = (
            await session.execute(
                select(func.count())
                .select_from(JobEntity)
                .where(JobEntity.status == status)
            )
        ).scalar_one()

        result = await session.execute(
            select(JobEntity)
            .where(JobEntity.status == status)
            .order_by(JobEntity.created_timestamp.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )

        return list(result.scalars().all()), total

    async def get_pending_jobs(self, session: AsyncSession) -> list[JobEntity]:
        """Retrieve jobs awaiting approval, newest first."""
        result = await session.execute(
            select(JobEntity)
            .where(JobEntity.status == JobStatus.PENDING)
            .order_by(JobEntity.created_timestamp.desc())
        )

        return list(result.scalars().all())

    async def count_jobs(
        self, session: AsyncSession, status: JobStatus | None = None
    ) -> int:
        """Count jobs, optionally restricted to one status."""
        query = select(func.count()).select_from(JobEntity)
        if status is not None:
            query = query.where(JobEntity.status == status)

        result = await session.execute(query)
        return result.scalar_one()

    async def upsert_job(self, session: AsyncSession, entity: JobEntity) -> JobEntity:
        """
        Inserts or updates a JobEntity object in the database.

        Returns:
            JobEntity: The entity synchronized with the database.
        """
        merged_entity = await session.merge(entity)
        await session.flush()

        return merged_entity

    async def delete_job(self, session: AsyncSession, entity: JobEntity) -> None:
        """Delete a job posting together with its applications."""
        await session.delete(entity)
        await session.flush()

    async def find_application(
        self, session: AsyncSession, job_id: int, applicant_id: int
    ) -> JobApplicationEntity | None:
        """
        Retrieve the application of a user for a job.

        Args:
            session (AsyncSession): The active async database session.
            job_id (int): Job id.
            applicant_id (int): Applicant user id.

        Returns:
            JobApplicationEntity | None: The application, or None.
        """
        result = await session.execute(
            select(JobApplicationEntity).where(
                JobApplicationEntity.job_id == job_id,
                JobApplicationEntity.applicant_id == applicant_id,
            )
        )

        return result.scalars().one_or_none()

    async def add_application(
        self, session: AsyncSession, entity: JobApplicationEntity
    ) -> JobApplicationEntity:
        """Insert a new job application."""
        session.add(entity)
        await session.flush()

        return entity
