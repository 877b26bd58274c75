from http import HTTPStatus
from fastapi import APIRouter, Query

from alumni_backend.common.fast_api_response_wrapper import api_response
from alumni_backend.common.api_endpoints import (
    JOBS_ENDPOINT,
    JOB_ENDPOINT,
    JOB_APPLY_ENDPOINT,
)
from alumni_backend.dto.user_context_dto import UserContextDto
from alumni_backend.dto.job_create_dto import JobCreateDto, JobUpdateDto
from alumni_backend.job.job_service import JobService
from alumni_backend.utils.permission_decorators import authenticate


class JobController:
    def __init__(self, job_service: JobService, database):
        """
        Initialize the JobController with required dependencies and register routes.

        Args:
            job_service (JobService): Service handling job postings.
            database (Database): Database access object providing async session management.
        """
        if not job_service:
            raise ValueError("JobService instance is required.")

        self.job_service = job_service
        self.database = database

        self.router = APIRouter(tags=["jobs"])

        self.router.add_api_route(
            JOBS_ENDPOINT,
            endpoint=authenticate()(self.get_jobs),
            methods=["GET"],
            response_model=None,
        )
        self.router.add_api_route(
            JOBS_ENDPOINT,
            endpoint=authenticate()(self.create_job),
            methods=["POST"],
            response_model=None,
        )
        self.router.add_api_route(
            JOB_ENDPOINT,
            endpoint=authenticate()(self.get_job),
            methods=["GET"],
            response_model=None,
        )
        self.router.add_api_route(
            JOB_ENDPOINT,
            endpoint=authenticate()(self.update_job),
            methods=["PUT"],
            response_model=None,
        )
        self.router.add_api_route(
            JOB_ENDPOINT,
            endpoint=authenticate()(self.delete_job),
            methods=["DELETE"],
            response_model=None,
        )
        self.router.add_api_route(
            JOB_APPLY_ENDPOINT,
            endpoint=authenticate()(self.apply_to_job),
            methods=["POST"],
            response_model=None,
        )

    async def get_jobs(
        self,
        page: int = Query(1, ge=1),
        limit: int = Query(10, ge=1, le=100),
    ):
        async with self.database.session() as session:
            jobs_page = await self.job_service.get_jobs(
                session=session, page=page, limit=limit
            )

        return api_response(
            message="Jobs retrieved successfully",
            data=jobs_page,
        )

    async def get_job(self, job_id: int):
        async with self.database.session() as session:
            job = await self.job_service.get_job(session=session, job_id=job_id)

        return api_response(
            message="Job retrieved successfully",
            data={"job": job},
        )

    async def create_job(self, current_user: UserContextDto, body: JobCreateDto):
        """
        Post a job. Admin postings are active at once, others await approval.

        Raises:
            - 403 if the current user is a student
        """
        async with self.database.session() as session:
            job = await self.job_service.create_job(
                session=session, user_context=current_user, job_data=body
            )

        return api_response(
            message="Job posted successfully",
            data={"job": job},
            status_code=HTTPStatus.CREATED,
        )

    async def update_job(
        self,
        job_id: int,
        current_user: UserContextDto,
        body: JobUpdateDto,
    ):
        """
        Update a job posting.

        Raises:
            - 403 if the current user is neither the poster nor an admin
            - 404 if the job does not exist
        """
        async with self.database.session() as session:
            job = await self.job_service.update_job(
                session=session,
                user_context=current_user,
                job_id=job_id,
                job_data=body,
            )

        return api_response(
            message="Job updated successfully",
            data={"job": job},
        )

    async def delete_job(self, job_id: int, current_user: UserContextDto):
        async with self.database.session() as session:
            await self.job_service.delete_job(
                session=session, user_context=current_user, job_id=job_id
            )

        return api_response(message="Job deleted successfully")

    async def apply_to_job(self, job_id: int, current_user: UserContextDto):
        async with self.database.session() as session:
            application = await self.job_service.apply_to_job(
                session=session, user_context=current_user, job_id=job_id
            )

        return api_response(
            message="Application submitted successfully",
            data={"application": application},
        )
