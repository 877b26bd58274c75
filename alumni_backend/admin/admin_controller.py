from fastapi import APIRouter, Query

from alumni_backend.common.user_role import UserRole
from alumni_backend.common.fast_api_response_wrapper import api_response
from alumni_backend.common.api_endpoints import (
    ADMIN_STATS_ENDPOINT,
    ADMIN_USERS_ENDPOINT,
    ADMIN_VERIFY_USER_ENDPOINT,
    ADMIN_SUSPEND_USER_ENDPOINT,
    ADMIN_PENDING_EVENTS_ENDPOINT,
    ADMIN_APPROVE_EVENT_ENDPOINT,
    ADMIN_PENDING_JOBS_ENDPOINT,
    ADMIN_APPROVE_JOB_ENDPOINT,
)
from alumni_backend.admin.moderation_service import ModerationService
from alumni_backend.dto.approval_create_dto import ApprovalCreateDto, SuspendCreateDto
from alumni_backend.dto.user_context_dto import UserContextDto
from alumni_backend.utils.permission_decorators import authenticate


class AdminController:
    """
    FastAPI controller exposing the admin moderation endpoints.

    Every route requires the admin role.
    """

    def __init__(self, moderation_service: ModerationService, database):
        if not moderation_service:
            raise ValueError("ModerationService instance is required.")

        self.moderation_service = moderation_service
        self.database = database

        self.router = APIRouter(tags=["admin"])
        admin_only = authenticate(roles=[UserRole.ADMIN])

        self.router.add_api_route(
            ADMIN_STATS_ENDPOINT,
            endpoint=admin_only(self.get_stats),
            methods=["GET"],
            response_model=None,
        )
        self.router.add_api_route(
            ADMIN_USERS_ENDPOINT,
            endpoint=admin_only(self.get_users),
            methods=["GET"],
            response_model=None,
        )
        self.router.add_api_route(
            ADMIN_VERIFY_USER_ENDPOINT,
            endpoint=admin_only(self.verify_user),
            methods=["PUT"],
            response_model=None,
        )
        self.router.add_api_route(
            ADMIN_SUSPEND_USER_ENDPOINT,
            endpoint=admin_only(self.suspend_user),
            methods=["PUT"],
            response_model=None,
        )
        self.router.add_api_route(
            ADMIN_PENDING_EVENTS_ENDPOINT,
            endpoint=admin_only(self.get_pending_events),
            methods=["GET"],
            response_model=None,
        )
        self.router.add_api_route(
            ADMIN_APPROVE_EVENT_ENDPOINT,
            endpoint=admin_only(self.approve_event),
            methods=["PUT"],
            response_model=None,
        )
        self.router.add_api_route(
            ADMIN_PENDING_JOBS_ENDPOINT,
            endpoint=admin_only(self.get_pending_jobs),
            methods=["GET"],
            response_model=None,
        )
        self.router.add_api_route(
            ADMIN_APPROVE_JOB_ENDPOINT,
            endpoint=admin_only(self.approve_job),
            methods=["PUT"],
            response_model=None,
        )

    async def get_stats(self, current_user: UserContextDto):
        async with self.database.session() as session:
            stats = await self.moderation_service.get_stats(
                session=session, user_context=current_user
            )

        return api_response(
            message="Stats retrieved successfully",
            data={"stats": stats},
        )

    async def get_users(
        self,
        current_user: UserContextDto,
        role: UserRole | None = None,
        is_verified: bool | None = Query(None, alias="isVerified"),
        page: int = Query(1, ge=1),
        limit: int = Query(20, ge=1, le=100),
    ):
        async with self.database.session() as session:
            users_page = await self.moderation_service.get_users(
                session=session,
                user_context=current_user,
                role=role,
                is_verified=is_verified,
                page=page,
                limit=limit,
            )

        return api_response(
            message="Users retrieved successfully",
            data=users_page,
        )

    async def verify_user(self, target_user_id: int, current_user: UserContextDto):
        """
        Mark a user as verified.

        Raises:
            - 403 if the current user is not an admin
            - 404 if the user does not exist
        """
        async with self.database.session() as session:
            user = await self.moderation_service.verify_user(
                session=session,
                user_context=current_user,
                user_id=target_user_id,
            )

        return api_response(
            message="User verified successfully",
            data={"user": user},
        )

    async def suspend_user(
        self,
        target_user_id: int,
        current_user: UserContextDto,
        body: SuspendCreateDto,
    ):
        async with self.database.session() as session:
            user = await self.moderation_service.suspend_user(
                session=session,
                user_context=current_user,
                user_id=target_user_id,
                suspend=body.suspend,
            )

        return api_response(
            message=f"User {'suspended' if body.suspend else 'unsuspended'} successfully",
            data={"user": user},
        )

    async def get_pending_events(self, current_user: UserContextDto):
        async with self.database.session() as session:
            events = await self.moderation_service.get_pending_events(
                session=session, user_context=current_user
            )

        return api_response(
            message="Pending events retrieved successfully",
            data={"events": events},
        )

    async def approve_event(
        self,
        event_id: int,
        current_user: UserContextDto,
        body: ApprovalCreateDto,
    ):
        """
        Approve or reject an event.

        Raises:
            - 403 if the current user is not an admin
            - 404 if the event does not exist
        """
        async with self.database.session() as session:
            event = await self.moderation_service.approve_event(
                session=session,
                user_context=current_user,
                event_id=event_id,
                approve=body.approve,
            )

        return api_response(
            message=f"Event {'approved' if body.approve else 'rejected'}",
            data={"event": event},
        )

    async def get_pending_jobs(self, current_user: UserContextDto):
        async with self.database.session() as session:
            jobs = await self.moderation_service.get_pending_jobs(
                session=session, user_context=current_user
            )

        return api_response(
            message="Pending jobs retrieved successfully",
            data={"jobs": jobs},
        )

    async def approve_job(
        self,
        job_id: int,
        current_user: UserContextDto,
        body: ApprovalCreateDto,
    ):
        async with self.database.session() as session:
            job = await self.moderation_service.approve_job(
                session=session,
                user_context=current_user,
                job_id=job_id,
                approve=body.approve,
            )

        return api_response(
            message=f"Job {'approved' if body.approve else 'rejected'}",
            data={"job": job},
        )
