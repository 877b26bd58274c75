import asyncio
import unittest
from datetime import datetime, timezone
from unittest.mock import MagicMock, AsyncMock

from alumni_backend.mentorship.mentorship_service import MentorshipService
from alumni_backend.common.alumni_enums import MentorshipStatus, PreferredMode
from alumni_backend.common.exceptions import (
    CapacityExceededError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from alumni_backend.common.user_role import UserRole
from alumni_backend.dto.user_context_dto import UserContextDto
from alumni_backend.dto.mentorship_create_dto import (
    FeedbackCreateDto,
    MentorRegistrationCreateDto,
    MentorshipRequestCreateDto,
    SessionCreateDto,
)
from alumni_backend.entity.users_entity import UsersEntity
from alumni_backend.entity.mentorship_entity import MentorshipEntity
from alumni_backend.entity.mentorship_session_entity import MentorshipSessionEntity
from alumni_backend.utils.access_policy import AccessPolicy
from alumni_backend.utils.capacity_evaluator import CapacityEvaluator
from alumni_backend.utils.target_lock_registry import TargetLockRegistry

MENTOR_ID = 10
MENTEE_ID = 20
OUTSIDER_ID = 30


class TestMentorshipService(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.logger = MagicMock()
        self.mock_session = AsyncMock()

        self.mock_users_repo = MagicMock()
        self.mock_users_repo.get_user_by_user_id = AsyncMock()
        self.mock_users_repo.get_mentors = AsyncMock()
        self.mock_users_repo.upsert_users = AsyncMock(
            side_effect=lambda session, entity: entity
        )

        self.mock_mentorship_repo = MagicMock()
        self.mock_mentorship_repo.get_by_mentorship_id = AsyncMock()
        self.mock_mentorship_repo.find_active_between = AsyncMock(return_value=None)
        self.mock_mentorship_repo.count_accepted = AsyncMock(return_value=0)
        self.mock_mentorship_repo.get_pending_for_mentor = AsyncMock()
        self.mock_mentorship_repo.get_active_for_user = AsyncMock()
        self.mock_mentorship_repo.upsert_mentorship = AsyncMock(
            side_effect=lambda session, entity: entity
        )
        self.mock_mentorship_repo.add_session = AsyncMock()

        self.mock_mapper = MagicMock()
        self.capacity_evaluator = CapacityEvaluator()

        self.service = MentorshipService(
            logger=self.logger,
            users_repository=self.mock_users_repo,
            mentorship_repository=self.mock_mentorship_repo,
            mentorship_mapper=self.mock_mapper,
            capacity_evaluator=self.capacity_evaluator,
            access_policy=AccessPolicy(logger=self.logger),
            target_lock_registry=TargetLockRegistry(),
        )

        self.mentor = UsersEntity(
            user_id=MENTOR_ID,
            first_name="Mia",
            last_name="Mentor",
            primary_email="mia@example.com",
            role=UserRole.ALUMNI,
            is_mentor=True,
            is_verified=True,
            max_mentees=1,
        )
        self.mentee_context = UserContextDto(
            user_id=MENTEE_ID, roles=[UserRole.STUDENT]
        )
        self.mentor_context = UserContextDto(user_id=MENTOR_ID, roles=[UserRole.ALUMNI])
        self.outsider_context = UserContextDto(
            user_id=OUTSIDER_ID, roles=[UserRole.ALUMNI]
        )
        self.request = MentorshipRequestCreateDto(
            mentor_id=MENTOR_ID,
            domain="Data Science",
            goals="Get a first internship",
            preferred_mode=PreferredMode.ONLINE,
        )

    def _mentorship(self, status=MentorshipStatus.PENDING, sessions=None):
        return MentorshipEntity(
            mentorship_id=1,
            mentor_id=MENTOR_ID,
            mentee_id=MENTEE_ID,
            status=status,
            domain="Data Science",
            goals="Get a first internship",
            sessions=sessions or [],
        )

    async def test_request_mentorship_success(self):
        self.mock_users_repo.get_user_by_user_id.return_value = self.mentor

        result = await self.service.request_mentorship(
            session=self.mock_session,
            user_context=self.mentee_context,
            request=self.request,
        )

        created = self.mock_mentorship_repo.upsert_mentorship.call_args.kwargs[
            "entity"
        ]
        self.assertEqual(created.status, MentorshipStatus.PENDING)
        self.assertEqual(created.mentor_id, MENTOR_ID)
        self.assertEqual(created.mentee_id, MENTEE_ID)
        self.mock_session.commit.assert_awaited_once()
        self.mock_mapper.map_to_mentorship_dto.assert_called_once_with(created)
        self.assertEqual(result, self.mock_mapper.map_to_mentorship_dto.return_value)

    async def test_request_mentorship_pending_requests_do_not_use_capacity(self):
        # Only accepted mentorships are counted; the repository reports none.
        self.mock_users_repo.get_user_by_user_id.return_value = self.mentor
        self.mock_mentorship_repo.count_accepted.return_value = 0

        await self.service.request_mentorship(
            session=self.mock_session,
            user_context=self.mentee_context,
            request=self.request,
        )
        await self.service.request_mentorship(
            session=self.mock_session,
            user_context=self.outsider_context,
            request=self.request,
        )

        self.assertEqual(self.mock_mentorship_repo.upsert_mentorship.await_count, 2)

    async def test_request_mentorship_capacity_exceeded(self):
        self.mock_users_repo.get_user_by_user_id.return_value = self.mentor
        self.mock_mentorship_repo.count_accepted.return_value = 1

        with self.assertRaises(CapacityExceededError):
            await self.service.request_mentorship(
                session=self.mock_session,
                user_context=self.mentee_context,
                request=self.request,
            )

        self.mock_mentorship_repo.upsert_mentorship.assert_not_awaited()
        self.mock_session.commit.assert_not_awaited()

    async def test_request_mentorship_unlimited_capacity(self):
        self.mentor.max_mentees = None
        self.mock_users_repo.get_user_by_user_id.return_value = self.mentor
        self.mock_mentorship_repo.count_accepted.return_value = 50

        await self.service.request_mentorship(
            session=self.mock_session,
            user_context=self.mentee_context,
            request=self.request,
        )

        self.mock_mentorship_repo.upsert_mentorship.assert_awaited_once()

    async def test_request_mentorship_duplicate_active_request(self):
        self.mock_users_repo.get_user_by_user_id.return_value = self.mentor
        self.mock_mentorship_repo.find_active_between.return_value = (
            self._mentorship()
        )

        with self.assertRaises(ConflictError):
            await self.service.request_mentorship(
                session=self.mock_session,
                user_context=self.mentee_context,
                request=self.request,
            )

        self.mock_mentorship_repo.upsert_mentorship.assert_not_awaited()

    async def test_request_mentorship_mentor_not_found(self):
        self.mock_users_repo.get_user_by_user_id.return_value = None

        with self.assertRaises(NotFoundError):
            await self.service.request_mentorship(
                session=self.mock_session,
                user_context=self.mentee_context,
                request=self.request,
            )

    async def test_request_mentorship_target_is_not_a_mentor(self):
        self.mentor.is_mentor = False
        self.mock_users_repo.get_user_by_user_id.return_value = self.mentor

        with self.assertRaises(NotFoundError):
            await self.service.request_mentorship(
                session=self.mock_session,
                user_context=self.mentee_context,
                request=self.request,
            )

    async def test_request_mentorship_blank_goals(self):
        request = MentorshipRequestCreateDto.model_construct(
            mentor_id=MENTOR_ID,
            domain="Data",
            goals="   ",
            preferred_mode=PreferredMode.ONLINE,
            request_message=None,
        )

        with self.assertRaises(ValidationError):
            await self.service.request_mentorship(
                session=self.mock_session,
                user_context=self.mentee_context,
                request=request,
            )

        self.mock_users_repo.get_user_by_user_id.assert_not_awaited()

    async def test_request_mentorship_to_self(self):
        self.mock_users_repo.get_user_by_user_id.return_value = self.mentor

        with self.assertRaises(ValidationError):
            await self.service.request_mentorship(
                session=self.mock_session,
                user_context=self.mentor_context,
                request=self.request,
            )

    async def test_concurrent_requests_for_same_pair_create_one_record(self):
        self.mock_users_repo.get_user_by_user_id.return_value = self.mentor
        created = []

        async def find_active_between(session, mentor_id, mentee_id):
            await asyncio.sleep(0)
            return created[0] if created else None

        async def upsert_mentorship(session, entity):
            await asyncio.sleep(0)
            created.append(entity)
            return entity

        self.mock_mentorship_repo.find_active_between.side_effect = (
            find_active_between
        )
        self.mock_mentorship_repo.upsert_mentorship.side_effect = upsert_mentorship

        results = await asyncio.gather(
            *[
                self.service.request_mentorship(
                    session=self.mock_session,
                    user_context=self.mentee_context,
                    request=self.request,
                )
                for _ in range(2)
            ],
            return_exceptions=True,
        )

        self.assertEqual(len(created), 1)
        self.assertEqual(
            sum(isinstance(r, ConflictError) for r in results),
            1,
        )

    async def test_decide_request_accept(self):
        mentorship = self._mentorship()
        self.mock_mentorship_repo.get_by_mentorship_id.return_value = mentorship

        await self.service.decide_request(
            session=self.mock_session,
            user_context=self.mentor_context,
            mentorship_id=1,
            decision=MentorshipStatus.ACCEPTED,
        )

        self.assertEqual(mentorship.status, MentorshipStatus.ACCEPTED)
        self.assertIsNotNone(mentorship.start_date)
        self.mock_session.commit.assert_awaited_once()

    async def test_decide_request_reject_keeps_start_date_empty(self):
        mentorship = self._mentorship()
        self.mock_mentorship_repo.get_by_mentorship_id.return_value = mentorship

        await self.service.decide_request(
            session=self.mock_session,
            user_context=self.mentor_context,
            mentorship_id=1,
            decision=MentorshipStatus.REJECTED,
        )

        self.assertEqual(mentorship.status, MentorshipStatus.REJECTED)
        self.assertIsNone(mentorship.start_date)

    async def test_decide_request_does_not_recheck_capacity(self):
        mentorship = self._mentorship()
        self.mock_mentorship_repo.get_by_mentorship_id.return_value = mentorship
        self.mock_mentorship_repo.count_accepted.return_value = 99

        await self.service.decide_request(
            session=self.mock_session,
            user_context=self.mentor_context,
            mentorship_id=1,
            decision=MentorshipStatus.ACCEPTED,
        )

        self.assertEqual(mentorship.status, MentorshipStatus.ACCEPTED)
        self.mock_mentorship_repo.count_accepted.assert_not_awaited()

    async def test_decide_request_not_found(self):
        self.mock_mentorship_repo.get_by_mentorship_id.return_value = None

        with self.assertRaises(NotFoundError):
            await self.service.decide_request(
                session=self.mock_session,
                user_context=self.mentor_context,
                mentorship_id=404,
                decision=MentorshipStatus.ACCEPTED,
            )

    async def test_decide_request_by_mentee_is_forbidden(self):
        mentorship = self._mentorship()
        self.mock_mentorship_repo.get_by_mentorship_id.return_value = mentorship

        with self.assertRaises(ForbiddenError):
            await self.service.decide_request(
                session=self.mock_session,
                user_context=self.mentee_context,
                mentorship_id=1,
                decision=MentorshipStatus.ACCEPTED,
            )

        self.assertEqual(mentorship.status, MentorshipStatus.PENDING)

    async def test_decide_request_terminal_state_is_final(self):
        mentorship = self._mentorship(status=MentorshipStatus.REJECTED)
        self.mock_mentorship_repo.get_by_mentorship_id.return_value = mentorship

        with self.assertRaises(ConflictError):
            await self.service.decide_request(
                session=self.mock_session,
                user_context=self.mentor_context,
                mentorship_id=1,
                decision=MentorshipStatus.ACCEPTED,
            )

        self.assertEqual(mentorship.status, MentorshipStatus.REJECTED)
        self.mock_session.commit.assert_not_awaited()

    async def test_decide_request_invalid_decision(self):
        with self.assertRaises(ValidationError):
            await self.service.decide_request(
                session=self.mock_session,
                user_context=self.mentor_context,
                mentorship_id=1,
                decision=MentorshipStatus.COMPLETED,
            )

    async def test_close_mentorship_complete_sets_end_date(self):
        mentorship = self._mentorship(status=MentorshipStatus.ACCEPTED)
        self.mock_mentorship_repo.get_by_mentorship_id.return_value = mentorship

        await self.service.close_mentorship(
            session=self.mock_session,
            user_context=self.mentee_context,
            mentorship_id=1,
            status=MentorshipStatus.COMPLETED,
        )

        self.assertEqual(mentorship.status, MentorshipStatus.COMPLETED)
        self.assertIsNotNone(mentorship.end_date)

    async def test_close_mentorship_cancel_pending(self):
        mentorship = self._mentorship()
        self.mock_mentorship_repo.get_by_mentorship_id.return_value = mentorship

        await self.service.close_mentorship(
            session=self.mock_session,
            user_context=self.mentor_context,
            mentorship_id=1,
            status=MentorshipStatus.CANCELLED,
        )

        self.assertEqual(mentorship.status, MentorshipStatus.CANCELLED)

    async def test_close_mentorship_complete_from_pending_conflicts(self):
        mentorship = self._mentorship()
        self.mock_mentorship_repo.get_by_mentorship_id.return_value = mentorship

        with self.assertRaises(ConflictError):
            await self.service.close_mentorship(
                session=self.mock_session,
                user_context=self.mentor_context,
                mentorship_id=1,
                status=MentorshipStatus.COMPLETED,
            )

    async def test_close_mentorship_by_outsider_is_forbidden(self):
        mentorship = self._mentorship(status=MentorshipStatus.ACCEPTED)
        self.mock_mentorship_repo.get_by_mentorship_id.return_value = mentorship

        with self.assertRaises(ForbiddenError):
            await self.service.close_mentorship(
                session=self.mock_session,
                user_context=self.outsider_context,
                mentorship_id=1,
                status=MentorshipStatus.CANCELLED,
            )

    async def test_schedule_session_by_participant(self):
        mentorship = self._mentorship(status=MentorshipStatus.ACCEPTED)
        self.mock_mentorship_repo.get_by_mentorship_id.return_value = mentorship
        session_data = SessionCreateDto(
            date=datetime(2026, 11, 2, 15, 0, tzinfo=timezone.utc),
            duration=45,
            mode="online",
            notes="Intro call",
        )

        await self.service.schedule_session(
            session=self.mock_session,
            user_context=self.mentee_context,
            mentorship_id=1,
            session_data=session_data,
        )

        kwargs = self.mock_mentorship_repo.add_session.call_args.kwargs
        self.assertIs(kwargs["mentorship"], mentorship)
        self.assertEqual(kwargs["entity"].duration, 45)
        self.assertEqual(kwargs["entity"].notes, "Intro call")
        self.mock_session.commit.assert_awaited_once()
        self.mock_mapper.map_to_mentorship_dto.assert_called_once_with(mentorship)

    async def test_schedule_session_by_outsider_is_forbidden(self):
        self.mock_mentorship_repo.get_by_mentorship_id.return_value = (
            self._mentorship(status=MentorshipStatus.ACCEPTED)
        )

        with self.assertRaises(ForbiddenError):
            await self.service.schedule_session(
                session=self.mock_session,
                user_context=self.outsider_context,
                mentorship_id=1,
                session_data=SessionCreateDto(
                    date=datetime(2026, 11, 2, tzinfo=timezone.utc)
                ),
            )

        self.mock_mentorship_repo.add_session.assert_not_awaited()

    async def test_schedule_session_not_found(self):
        self.mock_mentorship_repo.get_by_mentorship_id.return_value = None

        with self.assertRaises(NotFoundError):
            await self.service.schedule_session(
                session=self.mock_session,
                user_context=self.mentee_context,
                mentorship_id=1,
                session_data=SessionCreateDto(
                    date=datetime(2026, 11, 2, tzinfo=timezone.utc)
                ),
            )

    async def test_submit_feedback_overwrites_previous_feedback(self):
        mentorship_session = MentorshipSessionEntity(
            session_id=5,
            date=datetime(2026, 11, 2, tzinfo=timezone.utc),
            feedback={"rating": 2, "comment": "Too short"},
        )
        self.mock_mentorship_repo.get_by_mentorship_id.return_value = (
            self._mentorship(
                status=MentorshipStatus.ACCEPTED, sessions=[mentorship_session]
            )
        )

        await self.service.submit_feedback(
            session=self.mock_session,
            user_context=self.mentee_context,
            mentorship_id=1,
            feedback=FeedbackCreateDto(session_id=5, rating=5, comment="Great"),
        )

        self.assertEqual(mentorship_session.feedback, {"rating": 5, "comment": "Great"})
        self.mock_mapper.map_to_session_dto.assert_called_once_with(mentorship_session)

    async def test_submit_feedback_by_mentor_is_forbidden(self):
        self.mock_mentorship_repo.get_by_mentorship_id.return_value = (
            self._mentorship(status=MentorshipStatus.ACCEPTED)
        )

        with self.assertRaises(ForbiddenError):
            await self.service.submit_feedback(
                session=self.mock_session,
                user_context=self.mentor_context,
                mentorship_id=1,
                feedback=FeedbackCreateDto(session_id=5, rating=4),
            )

    async def test_submit_feedback_unknown_session(self):
        self.mock_mentorship_repo.get_by_mentorship_id.return_value = (
            self._mentorship(status=MentorshipStatus.ACCEPTED)
        )

        with self.assertRaises(NotFoundError):
            await self.service.submit_feedback(
                session=self.mock_session,
                user_context=self.mentee_context,
                mentorship_id=1,
                feedback=FeedbackCreateDto(session_id=99, rating=4),
            )

    async def test_register_as_mentor(self):
        user = UsersEntity(
            user_id=MENTOR_ID,
            first_name="Mia",
            last_name="Mentor",
            primary_email="mia@example.com",
            is_mentor=False,
        )
        self.mock_users_repo.get_user_by_user_id.return_value = user
        self.mock_mapper.map_to_mentor_dtos.return_value = ["mentor-dto"]

        result = await self.service.register_as_mentor(
            session=self.mock_session,
            user_context=self.mentor_context,
            registration=MentorRegistrationCreateDto(
                expertise=["Python"], experience=5, max_mentees=3
            ),
        )

        self.assertTrue(user.is_mentor)
        self.assertEqual(user.expertise, ["Python"])
        self.assertEqual(user.max_mentees, 3)
        self.assertEqual(result, "mentor-dto")
        self.mock_session.commit.assert_awaited_once()

    async def test_register_as_mentor_student_forbidden(self):
        with self.assertRaises(ForbiddenError):
            await self.service.register_as_mentor(
                session=self.mock_session,
                user_context=self.mentee_context,
                registration=MentorRegistrationCreateDto(expertise=["Python"]),
            )

        self.mock_users_repo.get_user_by_user_id.assert_not_awaited()

    async def test_get_mentors_builds_page(self):
        self.mock_users_repo.get_mentors.return_value = ([self.mentor], 11)
        self.mock_mapper.map_to_mentor_dtos.return_value = []

        result = await self.service.get_mentors(
            session=self.mock_session, expertise="py", page=2, limit=5
        )

        self.mock_users_repo.get_mentors.assert_awaited_once_with(
            session=self.mock_session, expertise="py", page=2, limit=5
        )
        self.assertEqual(result.total, 11)
        self.assertEqual(result.total_pages, 3)
        self.assertEqual(result.current_page, 2)

    async def test_get_pending_requests(self):
        pending = [self._mentorship()]
        self.mock_mentorship_repo.get_pending_for_mentor.return_value = pending

        result = await self.service.get_pending_requests(
            session=self.mock_session, user_context=self.mentor_context
        )

        self.mock_mentorship_repo.get_pending_for_mentor.assert_awaited_once_with(
            session=self.mock_session, mentor_id=MENTOR_ID
        )
        self.mock_mapper.map_to_mentorship_dtos.assert_called_once_with(pending)
        self.assertEqual(result, self.mock_mapper.map_to_mentorship_dtos.return_value)

    async def test_get_my_mentorships(self):
        self.mock_mentorship_repo.get_active_for_user.return_value = []

        await self.service.get_my_mentorships(
            session=self.mock_session, user_context=self.mentee_context
        )

        self.mock_mentorship_repo.get_active_for_user.assert_awaited_once_with(
            session=self.mock_session, user_id=MENTEE_ID
        )


if __name__ == "__main__":
    unittest.main()
