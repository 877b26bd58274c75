from http import HTTPStatus
from fastapi import APIRouter, Query

from alumni_backend.common.alumni_enums import (
    AttendeeStatus,
    EventMode,
    EventStatus,
    EventType,
)
from alumni_backend.common.fast_api_response_wrapper import api_response
from alumni_backend.common.api_endpoints import (
    EVENTS_ENDPOINT,
    EVENT_ENDPOINT,
    EVENT_RSVP_ENDPOINT,
)
from alumni_backend.dto.user_context_dto import UserContextDto
from alumni_backend.dto.event_create_dto import (
    EventCreateDto,
    EventUpdateDto,
    RsvpCreateDto,
)
from alumni_backend.event.event_service import EventService
from alumni_backend.utils.permission_decorators import authenticate


class EventController:
    """
    FastAPI controller exposing event and RSVP endpoints.
    """

    def __init__(self, event_service: EventService, database):
        """
        Initialize the EventController with required dependencies and register routes.

        Args:
            event_service (EventService): Service handling events and RSVPs.
            database (Database): Database access object providing async session management.
        """
        if not event_service:
            raise ValueError("EventService instance is required.")

        self.event_service = event_service
        self.database = database

        self.router = APIRouter(tags=["events"])

        self.router.add_api_route(
            EVENTS_ENDPOINT,
            endpoint=authenticate()(self.get_events),
            methods=["GET"],
            response_model=None,
        )
        self.router.add_api_route(
            EVENTS_ENDPOINT,
            endpoint=authenticate()(self.create_event),
            methods=["POST"],
            response_model=None,
        )
        self.router.add_api_route(
            EVENT_ENDPOINT,
            endpoint=authenticate()(self.get_event),
            methods=["GET"],
            response_model=None,
        )
        self.router.add_api_route(
            EVENT_ENDPOINT,
            endpoint=authenticate()(self.update_event),
            methods=["PUT"],
            response_model=None,
        )
        self.router.add_api_route(
            EVENT_ENDPOINT,
            endpoint=authenticate()(self.delete_event),
            methods=["DELETE"],
            response_model=None,
        )
        self.router.add_api_route(
            EVENT_RSVP_ENDPOINT,
            endpoint=authenticate()(self.rsvp),
            methods=["POST"],
            response_model=None,
        )
        self.router.add_api_route(
            EVENT_RSVP_ENDPOINT,
            endpoint=authenticate()(self.cancel_rsvp),
            methods=["DELETE"],
            response_model=None,
        )

    async def get_events(
        self,
        event_type: EventType | None = Query(None, alias="type"),
        mode: EventMode | None = Query(None),
        status: EventStatus = Query(EventStatus.UPCOMING),
        page: int = Query(1, ge=1),
        limit: int = Query(10, ge=1, le=100),
    ):
        """
        Retrieve approved events ordered by start date.

        Query Parameters:
            type (EventType | None): Optional event type filter.
            mode (EventMode | None): Optional event mode filter.
            status (EventStatus): Event status filter, upcoming by default.
            page (int): 1-based page number.
            limit (int): Page size.
        """
        async with self.database.session() as session:
            events_page = await self.event_service.get_events(
                session=session,
                event_type=event_type,
                mode=mode,
                status=status,
                page=page,
                limit=limit,
            )

        return api_response(
            message="Events retrieved successfully",
            data=events_page,
        )

    async def get_event(self, event_id: int):
        async with self.database.session() as session:
            event = await self.event_service.get_event(
                session=session, event_id=event_id
            )

        return api_response(
            message="Event retrieved successfully",
            data={"event": event},
        )

    async def create_event(self, current_user: UserContextDto, body: EventCreateDto):
        async with self.database.session() as session:
            event = await self.event_service.create_event(
                session=session, user_context=current_user, event_data=body
            )

        return api_response(
            message="Event created successfully",
            data={"event": event},
            status_code=HTTPStatus.CREATED,
        )

    async def update_event(
        self,
        event_id: int,
        current_user: UserContextDto,
        body: EventUpdateDto,
    ):
        async with self.database.session() as session:
            event = await self.event_service.update_event(
                session=session,
                user_context=current_user,
                event_id=event_id,
                event_data=body,
            )

        return api_response(
            message="Event updated successfully",
            data={"event": event},
        )

    async def delete_event(self, event_id: int, current_user: UserContextDto):
        async with self.database.session() as session:
            await self.event_service.delete_event(
                session=session, user_context=current_user, event_id=event_id
            )

        return api_response(message="Event deleted successfully")

    async def rsvp(
        self,
        event_id: int,
        current_user: UserContextDto,
        body: RsvpCreateDto | None = None,
    ):
        """
        RSVP the current user to an event; the status defaults to going.

        Raises:
            - 404 if the event does not exist
            - 409 if a new going RSVP would exceed the event's capacity
        """
        status = body.status if body else AttendeeStatus.GOING
        async with self.database.session() as session:
            event = await self.event_service.rsvp(
                session=session,
                user_context=current_user,
                event_id=event_id,
                status=status,
            )

        return api_response(
            message="RSVP updated successfully",
            data={"event": event},
        )

    async def cancel_rsvp(self, event_id: int, current_user: UserContextDto):
        async with self.database.session() as session:
            event = await self.event_service.cancel_rsvp(
                session=session, user_context=current_user, event_id=event_id
            )

        return api_response(
            message="RSVP cancelled successfully",
            data={"event": event},
        )
