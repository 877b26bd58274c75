from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession
from alumni_backend.common.alumni_enums import MentorshipStatus
from alumni_backend.common.exceptions import (
    CapacityExceededError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from alumni_backend.dto.user_context_dto import UserContextDto
from alumni_backend.dto.mentorship_dto import MentorshipDto, SessionDto
from alumni_backend.dto.user_dto import MentorDto, MentorsPageDto
from alumni_backend.dto.mentorship_create_dto import (
    FeedbackCreateDto,
    MentorRegistrationCreateDto,
    MentorshipRequestCreateDto,
    SessionCreateDto,
)
from alumni_backend.entity.mentorship_entity import MentorshipEntity
from alumni_backend.entity.mentorship_session_entity import MentorshipSessionEntity
from alumni_backend.utils.access_policy import AccessAction
from alumni_backend.utils.target_lock_registry import mentor_key

# Allowed source states for each target state. Terminal states have no outgoing edges.
ALLOWED_TRANSITIONS = {
    MentorshipStatus.ACCEPTED: {MentorshipStatus.PENDING},
    MentorshipStatus.REJECTED: {MentorshipStatus.PENDING},
    MentorshipStatus.COMPLETED: {MentorshipStatus.ACCEPTED},
    MentorshipStatus.CANCELLED: {MentorshipStatus.PENDING, MentorshipStatus.ACCEPTED},
}


class MentorshipService:
    """
    Service implementing the mentorship workflow: request, decision, session
    scheduling, feedback and closing, plus mentor registration and listings.
    """

    def __init__(
        self,
        logger,
        users_repository,
        mentorship_repository,
        mentorship_mapper,
        capacity_evaluator,
        access_policy,
        target_lock_registry,
    ):
        """
        Initialize the MentorshipService with its dependencies.

        Args:
            logger: The logger instance for logging messages.
            users_repository (UsersRepository): Lookup of mentors and mentor profiles.
            mentorship_repository (MentorshipRepository): Mentorship record store.
            mentorship_mapper (MentorshipMapper): Converts entities to DTOs.
            capacity_evaluator (CapacityEvaluator): Decides mentor capacity.
            access_policy (AccessPolicy): Relation and role based authorization.
            target_lock_registry (TargetLockRegistry): Serializes admissions per mentor.
        """
        self.logger = logger
        self.users_repository = users_repository
        self.mentorship_repository = mentorship_repository
        self.mentorship_mapper = mentorship_mapper
        self.capacity_evaluator = capacity_evaluator
        self.access_policy = access_policy
        self.target_lock_registry = target_lock_registry

    async def request_mentorship(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        request: MentorshipRequestCreateDto,
    ) -> MentorshipDto:
        """
        Create a pending mentorship request from the current user to a mentor.

        This method:
        1. Validates that domain and goals are present.
        2. Checks that the target user exists and is a mentor.
        3. Under the mentor's lock, rejects a duplicate active (pending or
           accepted) request of the same pair and checks the mentor's capacity
           against accepted mentorships only.
        4. Persists the pending record and commits.

        Args:
            session (AsyncSession): Active SQLAlchemy async session.
            user_context (UserContextDto): Authenticated user context (the mentee).
            request (MentorshipRequestCreateDto): Request payload.

        Returns:
            MentorshipDto: The created mentorship in pending state.

        Raises:
            ValidationError: If domain or goals are blank, or the mentee targets themself.
            NotFoundError: If the mentor does not exist or is not a mentor.
            ConflictError: If the pair already has an active mentorship.
            CapacityExceededError: If the mentor's accepted mentorships reached max_mentees.
        """
        if not (request.domain or "").strip() or not (request.goals or "").strip():
            raise ValidationError("Domain and goals are required.")

        mentee_id = user_context.user_id
        mentor = await self.users_repository.get_user_by_user_id(
            session=session, user_id=request.mentor_id
        )
        if not mentor or not mentor.is_mentor:
            self.logger.warning(
                "[MentorshipService] user %s requested unknown mentor %s.",
                mentee_id,
                request.mentor_id,
            )
            raise NotFoundError("Mentor not found or not available.")

        if mentor.user_id == mentee_id:
            raise ValidationError("You cannot request mentorship from yourself.")

        async with self.target_lock_registry.hold(mentor_key(mentor.user_id)):
            existing = await self.mentorship_repository.find_active_between(
                session=session, mentor_id=mentor.user_id, mentee_id=mentee_id
            )
            if existing:
                raise ConflictError(
                    "You already have an active request with this mentor."
                )

            accepted_count = await self.mentorship_repository.count_accepted(
                session=session, mentor_id=mentor.user_id
            )
            if not self.capacity_evaluator.can_admit(
                accepted_count, mentor.max_mentees
            ):
                self.logger.info(
                    "[MentorshipService] mentor %s at capacity (%s/%s).",
                    mentor.user_id,
                    accepted_count,
                    mentor.max_mentees,
                )
                raise CapacityExceededError("Mentor has reached maximum capacity.")

            mentorship = await self.mentorship_repository.upsert_mentorship(
                session=session,
                entity=MentorshipEntity(
                    mentor_id=mentor.user_id,
                    mentee_id=mentee_id,
                    status=MentorshipStatus.PENDING,
                    domain=request.domain,
                    goals=request.goals,
                    preferred_mode=request.preferred_mode,
                    request_message=request.request_message,
                    sessions=[],
                ),
            )
            await session.commit()

        self.logger.info(
            "[MentorshipService] mentorship %s requested by mentee %s to mentor %s.",
            mentorship.mentorship_id,
            mentee_id,
            mentor.user_id,
        )
        return self.mentorship_mapper.map_to_mentorship_dto(mentorship)

    async def decide_request(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        mentorship_id: int,
        decision: MentorshipStatus,
    ) -> MentorshipDto:
        """
        Accept or reject a pending mentorship request as its mentor.

        Capacity is not re-checked here; it is only checked when the request
        is created.

        Args:
            session (AsyncSession): Active SQLAlchemy async session.
            user_context (UserContextDto): Authenticated user context (the mentor).
            mentorship_id (int): The mentorship to decide on.
            decision (MentorshipStatus): ACCEPTED or REJECTED.

        Returns:
            MentorshipDto: The updated mentorship.

        Raises:
            ValidationError: If the decision is neither accepted nor rejected.
            NotFoundError: If the mentorship does not exist.
            ForbiddenError: If the current user is not the mentor.
            ConflictError: If the request is no longer pending.
        """
        if decision not in (MentorshipStatus.ACCEPTED, MentorshipStatus.REJECTED):
            raise ValidationError("Decision must be either accepted or rejected.")

        mentorship = await self._get_mentorship_or_raise(
            session=session,
            mentorship_id=mentorship_id,
            message="Mentorship request not found.",
        )
        self.access_policy.ensure_allowed(
            user_context,
            mentorship,
            AccessAction.DECIDE_MENTORSHIP,
            message="Not authorized to update this request.",
        )

        async with self.target_lock_registry.hold(mentor_key(mentorship.mentor_id)):
            # Another decision may have landed since the record was read.
            await session.refresh(mentorship, attribute_names=["status"])
            self._apply_transition(mentorship, decision)
            if decision == MentorshipStatus.ACCEPTED:
                mentorship.start_date = datetime.now(timezone.utc)

            mentorship = await self.mentorship_repository.upsert_mentorship(
                session=session, entity=mentorship
            )
            await session.commit()

        self.logger.info(
            "[MentorshipService] mentorship %s %s by mentor %s.",
            mentorship_id,
            decision.value,
            user_context.user_id,
        )
        return self.mentorship_mapper.map_to_mentorship_dto(mentorship)

    async def close_mentorship(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        mentorship_id: int,
        status: MentorshipStatus,
    ) -> MentorshipDto:
        """
        Complete or cancel a mentorship as one of its participants.

        Completion is only possible from accepted; cancellation from pending
        or accepted. The end date is set to now.

        Raises:
            ValidationError: If status is neither completed nor cancelled.
            NotFoundError: If the mentorship does not exist.
            ForbiddenError: If the current user is not a participant.
            ConflictError: If the transition is not allowed from the current status.
        """
        if status not in (MentorshipStatus.COMPLETED, MentorshipStatus.CANCELLED):
            raise ValidationError("Status must be either completed or cancelled.")

        mentorship = await self._get_mentorship_or_raise(
            session=session, mentorship_id=mentorship_id
        )
        self.access_policy.ensure_allowed(
            user_context, mentorship, AccessAction.CLOSE_MENTORSHIP
        )

        self._apply_transition(mentorship, status)
        mentorship.end_date = datetime.now(timezone.utc)

        mentorship = await self.mentorship_repository.upsert_mentorship(
            session=session, entity=mentorship
        )
        await session.commit()

        self.logger.info(
            "[MentorshipService] mentorship %s %s by user %s.",
            mentorship_id,
            status.value,
            user_context.user_id,
        )
        return self.mentorship_mapper.map_to_mentorship_dto(mentorship)

    async def schedule_session(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        mentorship_id: int,
        session_data: SessionCreateDto,
    ) -> MentorshipDto:
        """
        Append a session to a mentorship as its mentor or mentee.

        Sessions may overlap; no ordering or status rule is applied.

        Raises:
            NotFoundError: If the mentorship does not exist.
            ForbiddenError: If the current user is not a participant.
        """
        mentorship = await self._get_mentorship_or_raise(
            session=session, mentorship_id=mentorship_id
        )
        self.access_policy.ensure_allowed(
            user_context,
            mentorship,
            AccessAction.SCHEDULE_SESSION,
            message="Not authorized.",
        )

        new_session = await self.mentorship_repository.add_session(
            session=session,
            mentorship=mentorship,
            entity=MentorshipSessionEntity(
                date=session_data.date,
                duration=session_data.duration,
                mode=session_data.mode,
                notes=session_data.notes,
            ),
        )
        await session.commit()

        self.logger.info(
            "[MentorshipService] session %s scheduled on mentorship %s by user %s.",
            new_session.session_id,
            mentorship_id,
            user_context.user_id,
        )
        return self.mentorship_mapper.map_to_mentorship_dto(mentorship)

    async def submit_feedback(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        mentorship_id: int,
        feedback: FeedbackCreateDto,
    ) -> SessionDto:
        """
        Record the mentee's feedback on a session.

        Any earlier feedback on the same session is replaced.

        Raises:
            NotFoundError: If the mentorship or the session does not exist.
            ForbiddenError: If the current user is not the mentee.
        """
        mentorship = await self._get_mentorship_or_raise(
            session=session, mentorship_id=mentorship_id
        )
        self.access_policy.ensure_allowed(
            user_context,
            mentorship,
            AccessAction.SUBMIT_FEEDBACK,
            message="Only mentees can provide feedback.",
        )

        target = next(
            (s for s in mentorship.sessions if s.session_id == feedback.session_id),
            None,
        )
        if not target:
            raise NotFoundError("Session not found.")

        if target.feedback:
            self.logger.debug(
                "[MentorshipService] overwriting feedback on session %s.",
                target.session_id,
            )
        target.feedback = {"rating": feedback.rating, "comment": feedback.comment}
        await session.flush()
        await session.commit()

        return self.mentorship_mapper.map_to_session_dto(target)

    async def register_as_mentor(
        self,
        session: AsyncSession,
        user_context: UserContextDto,
        registration: MentorRegistrationCreateDto,
    ) -> MentorDto:
        """
        Turn the current user into a mentor with the given profile.

        Raises:
            ForbiddenError: If the current user is a student.
            NotFoundError: If the current user has no user record.
        """
        self.access_policy.ensure_allowed(
            user_context,
            None,
            AccessAction.REGISTER_MENTOR,
            message="Students cannot register as mentors.",
        )

        user = await self.users_repository.get_user_by_user_id(
            session=session, user_id=user_context.user_id
        )
        if not user:
            raise NotFoundError("User not found.")

        user.is_mentor = True
        user.expertise = registration.expertise
        user.experience = registration.experience
        user.availability = registration.availability
        user.max_mentees = registration.max_mentees

        user = await self.users_repository.upsert_users(session=session, entity=user)
        await session.commit()

        self.logger.info(
            "[MentorshipService] user %s registered as mentor.", user.user_id
        )
        return self.mentorship_mapper.map_to_mentor_dtos([user])[0]

    async def get_mentors(
        self,
        session: AsyncSession,
        expertise: str | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> MentorsPageDto:
        """Retrieve one page of verified mentors, optionally filtered by expertise."""
        mentors, total = await self.users_repository.get_mentors(
            session=session, expertise=expertise, page=page, limit=limit
        )

        return MentorsPageDto(
            mentors=self.mentorship_mapper.map_to_mentor_dtos(mentors),
            total=total,
            total_pages=-(-total // limit),
            current_page=page,
        )

    async def get_pending_requests(
        self, session: AsyncSession, user_context: UserContextDto
    ) -> list[MentorshipDto]:
        """Retrieve the pending requests addressed to the current user as mentor."""
        requests = await self.mentorship_repository.get_pending_for_mentor(
            session=session, mentor_id=user_context.user_id
        )

        return self.mentorship_mapper.map_to_mentorship_dtos(requests)

    async def get_my_mentorships(
        self, session: AsyncSession, user_context: UserContextDto
    ) -> list[MentorshipDto]:
        """Retrieve accepted mentorships where the current user is mentor or mentee."""
        mentorships = await self.mentorship_repository.get_active_for_user(
            session=session, user_id=user_context.user_id
        )

        return self.mentorship_mapper.map_to_mentorship_dtos(mentorships)

    async def _get_mentorship_or_raise(
        self,
        session: AsyncSession,
        mentorship_id: int,
        message: str = "Mentorship not found.",
    ) -> MentorshipEntity:
        mentorship = await self.mentorship_repository.get_by_mentorship_id(
            session=session, mentorship_id=mentorship_id
        )
        if not mentorship:
            raise NotFoundError(message)
        return mentorship

    def _apply_transition(
        self, mentorship: MentorshipEntity, target: MentorshipStatus
    ) -> None:
        if mentorship.status not in ALLOWED_TRANSITIONS[target]:
            raise ConflictError(
                f"Cannot move mentorship from {mentorship.status.value} to {target.value}."
            )
        mentorship.status = target
