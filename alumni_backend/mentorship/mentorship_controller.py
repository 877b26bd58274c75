from http import HTTPStatus
from fastapi import APIRouter, Query

from alumni_backend.common.alumni_enums import MentorshipStatus
from alumni_backend.common.fast_api_response_wrapper import api_response
from alumni_backend.common.api_endpoints import (
    MENTORS_ENDPOINT,
    MENTOR_REGISTER_ENDPOINT,
    MENTORSHIP_REQUEST_ENDPOINT,
    MENTORSHIP_PENDING_REQUESTS_ENDPOINT,
    MY_MENTORSHIPS_ENDPOINT,
    MENTORSHIP_DECISION_ENDPOINT,
    MENTORSHIP_STATUS_ENDPOINT,
    MENTORSHIP_SESSION_ENDPOINT,
    MENTORSHIP_FEEDBACK_ENDPOINT,
)
from alumni_backend.dto.user_context_dto import UserContextDto
from alumni_backend.dto.mentorship_create_dto import (
    FeedbackCreateDto,
    MentorRegistrationCreateDto,
    MentorshipCloseCreateDto,
    MentorshipDecisionCreateDto,
    MentorshipRequestCreateDto,
    SessionCreateDto,
)
from alumni_backend.mentorship.mentorship_service import MentorshipService
from alumni_backend.utils.permission_decorators import authenticate


class MentorshipController:
    """
    FastAPI controller exposing the mentorship workflow endpoints.

    Opens one session per request and delegates the workflow rules to
    MentorshipService.
    """

    def __init__(self, mentorship_service: MentorshipService, database):
        """
        Initialize the MentorshipController with required dependencies and register routes.

        Args:
            mentorship_service (MentorshipService): Service handling the mentorship workflow.
            database (Database): Database access object providing async session management.
        """
        if not mentorship_service:
            raise ValueError("MentorshipService instance is required.")

        self.mentorship_service = mentorship_service
        self.database = database

        self.router = APIRouter(tags=["mentorship"])

        self.router.add_api_route(
            MENTORS_ENDPOINT,
            endpoint=authenticate()(self.get_mentors),
            methods=["GET"],
            response_model=None,
        )
        self.router.add_api_route(
            MENTOR_REGISTER_ENDPOINT,
            endpoint=authenticate()(self.register_as_mentor),
            methods=["POST"],
            response_model=None,
        )
        self.router.add_api_route(
            MENTORSHIP_REQUEST_ENDPOINT,
            endpoint=authenticate()(self.request_mentorship),
            methods=["POST"],
            response_model=None,
        )
        self.router.add_api_route(
            MENTORSHIP_PENDING_REQUESTS_ENDPOINT,
            endpoint=authenticate()(self.get_pending_requests),
            methods=["GET"],
            response_model=None,
        )
        self.router.add_api_route(
            MY_MENTORSHIPS_ENDPOINT,
            endpoint=authenticate()(self.get_my_mentorships),
            methods=["GET"],
            response_model=None,
        )
        self.router.add_api_route(
            MENTORSHIP_DECISION_ENDPOINT,
            endpoint=authenticate()(self.decide_request),
            methods=["PUT"],
            response_model=None,
        )
        self.router.add_api_route(
            MENTORSHIP_STATUS_ENDPOINT,
            endpoint=authenticate()(self.close_mentorship),
            methods=["PUT"],
            response_model=None,
        )
        self.router.add_api_route(
            MENTORSHIP_SESSION_ENDPOINT,
            endpoint=authenticate()(self.schedule_session),
            methods=["POST"],
            response_model=None,
        )
        self.router.add_api_route(
            MENTORSHIP_FEEDBACK_ENDPOINT,
            endpoint=authenticate()(self.submit_feedback),
            methods=["POST"],
            response_model=None,
        )

    async def get_mentors(
        self,
        expertise: str | None = Query(None),
        page: int = Query(1, ge=1),
        limit: int = Query(10, ge=1, le=100),
    ):
        """
        Retrieve verified mentors, optionally filtered by an expertise substring.

        Query Parameters:
            expertise (str | None): Case-insensitive substring of an expertise entry.
            page (int): 1-based page number.
            limit (int): Page size.
        """
        async with self.database.session() as session:
            mentors_page = await self.mentorship_service.get_mentors(
                session=session, expertise=expertise, page=page, limit=limit
            )

        return api_response(
            message="Mentors retrieved successfully",
            data=mentors_page,
        )

    async def register_as_mentor(
        self,
        current_user: UserContextDto,
        body: MentorRegistrationCreateDto,
    ):
        async with self.database.session() as session:
            mentor = await self.mentorship_service.register_as_mentor(
                session=session, user_context=current_user, registration=body
            )

        return api_response(
            message="Registered as mentor successfully",
            data={"mentor": mentor},
        )

    async def request_mentorship(
        self,
        current_user: UserContextDto,
        body: MentorshipRequestCreateDto,
    ):
        """
        Send a mentorship request from the current user to a mentor.

        Returns:
            201 with the created pending mentorship.

        Raises:
            - 404 if the mentor does not exist or is not a mentor
            - 409 if a pending or accepted request to the same mentor exists,
              or the mentor is at capacity
        """
        async with self.database.session() as session:
            mentorship = await self.mentorship_service.request_mentorship(
                session=session, user_context=current_user, request=body
            )

        return api_response(
            message="Mentorship request sent successfully",
            data={"mentorship": mentorship},
            status_code=HTTPStatus.CREATED,
        )

    async def get_pending_requests(self, current_user: UserContextDto):
        async with self.database.session() as session:
            requests = await self.mentorship_service.get_pending_requests(
                session=session, user_context=current_user
            )

        return api_response(
            message="Pending requests retrieved successfully",
            data={"requests": requests},
        )

    async def get_my_mentorships(self, current_user: UserContextDto):
        async with self.database.session() as session:
            mentorships = await self.mentorship_service.get_my_mentorships(
                session=session, user_context=current_user
            )

        return api_response(
            message="Mentorships retrieved successfully",
            data={"mentorships": mentorships},
        )

    async def decide_request(
        self,
        mentorship_id: int,
        current_user: UserContextDto,
        body: MentorshipDecisionCreateDto,
    ):
        """
        Accept or reject a pending request addressed to the current user.

        Raises:
            - 404 if the request does not exist
            - 403 if the current user is not the request's mentor
            - 409 if the request is no longer pending
        """
        decision = MentorshipStatus(body.status)
        async with self.database.session() as session:
            mentorship = await self.mentorship_service.decide_request(
                session=session,
                user_context=current_user,
                mentorship_id=mentorship_id,
                decision=decision,
            )

        return api_response(
            message=f"Mentorship request {decision.value}",
            data={"mentorship": mentorship},
        )

    async def close_mentorship(
        self,
        mentorship_id: int,
        current_user: UserContextDto,
        body: MentorshipCloseCreateDto,
    ):
        status = MentorshipStatus(body.status)
        async with self.database.session() as session:
            mentorship = await self.mentorship_service.close_mentorship(
                session=session,
                user_context=current_user,
                mentorship_id=mentorship_id,
                status=status,
            )

        return api_response(
            message=f"Mentorship {status.value}",
            data={"mentorship": mentorship},
        )

    async def schedule_session(
        self,
        mentorship_id: int,
        current_user: UserContextDto,
        body: SessionCreateDto,
    ):
        async with self.database.session() as session:
            mentorship = await self.mentorship_service.schedule_session(
                session=session,
                user_context=current_user,
                mentorship_id=mentorship_id,
                session_data=body,
            )

        return api_response(
            message="Session scheduled successfully",
            data={"mentorship": mentorship},
        )

    async def submit_feedback(
        self,
        mentorship_id: int,
        current_user: UserContextDto,
        body: FeedbackCreateDto,
    ):
        async with self.database.session() as session:
            mentorship_session = await self.mentorship_service.submit_feedback(
                session=session,
                user_context=current_user,
                mentorship_id=mentorship_id,
                feedback=body,
            )

        return api_response(
            message="Feedback added successfully",
            data={"session": mentorship_session},
        )
