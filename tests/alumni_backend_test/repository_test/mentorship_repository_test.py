import unittest
from datetime import datetime, timezone

from alumni_backend.repository.mentorship_repository import MentorshipRepository
from alumni_backend.entity.users_entity import UsersEntity
from alumni_backend.entity.mentorship_entity import MentorshipEntity
from alumni_backend.entity.mentorship_session_entity import MentorshipSessionEntity
from alumni_backend.common.alumni_enums import MentorshipStatus
from tests.alumni_backend_test.repository_test.base_repository_test_lib import (
    BaseRepositoryTestLib,
)


class TestMentorshipRepository(BaseRepositoryTestLib):
    async def asyncSetUp(self):
        await super().asyncSetUp()

        self.repo = MentorshipRepository()

        self.mentor = UsersEntity(
            first_name="Mia",
            last_name="Mentor",
            primary_email="mia@example.com",
            is_mentor=True,
            is_verified=True,
            max_mentees=1,
        )
        self.mentee = UsersEntity(
            first_name="Sam", last_name="Student", primary_email="sam@example.com"
        )
        self.other = UsersEntity(
            first_name="Oli", last_name="Other", primary_email="oli@example.com"
        )
        await self.insert_entities([self.mentor, self.mentee, self.other])

        self.pending = self._mentorship(self.mentee, MentorshipStatus.PENDING)
        self.accepted = self._mentorship(self.other, MentorshipStatus.ACCEPTED)
        self.rejected = self._mentorship(self.mentee, MentorshipStatus.REJECTED)
        await self.insert_entities([self.pending, self.accepted, self.rejected])

    def _mentorship(self, mentee, status):
        return MentorshipEntity(
            mentor_id=self.mentor.user_id,
            mentee_id=mentee.user_id,
            status=status,
            domain="Data",
            goals="Learn pandas",
        )

    async def test_get_by_mentorship_id(self):
        result = await self.repo.get_by_mentorship_id(
            self.session, self.pending.mentorship_id
        )

        self.assertEqual(result, self.pending)

    async def test_get_by_mentorship_id_not_found(self):
        result = await self.repo.get_by_mentorship_id(self.session, 999)

        self.assertIsNone(result)

    async def test_find_active_between_ignores_terminal_records(self):
        result = await self.repo.find_active_between(
            self.session, mentor_id=self.mentor.user_id, mentee_id=self.mentee.user_id
        )

        self.assertEqual(result, self.pending)

    async def test_find_active_between_none_after_close(self):
        self.pending.status = MentorshipStatus.CANCELLED
        await self.session.flush()

        result = await self.repo.find_active_between(
            self.session, mentor_id=self.mentor.user_id, mentee_id=self.mentee.user_id
        )

        self.assertIsNone(result)

    async def test_count_accepted_excludes_pending(self):
        count = await self.repo.count_accepted(self.session, self.mentor.user_id)

        self.assertEqual(count, 1)

    async def test_count_by_status(self):
        count = await self.repo.count_by_status(
            self.session, MentorshipStatus.REJECTED
        )

        self.assertEqual(count, 1)

    async def test_get_pending_for_mentor(self):
        result = await self.repo.get_pending_for_mentor(
            self.session, self.mentor.user_id
        )

        self.assertEqual(result, [self.pending])

    async def test_get_active_for_user_as_mentor_and_mentee(self):
        as_mentor = await self.repo.get_active_for_user(
            self.session, self.mentor.user_id
        )
        as_mentee = await self.repo.get_active_for_user(
            self.session, self.other.user_id
        )
        no_accepted = await self.repo.get_active_for_user(
            self.session, self.mentee.user_id
        )

        self.assertEqual(as_mentor, [self.accepted])
        self.assertEqual(as_mentee, [self.accepted])
        self.assertEqual(no_accepted, [])

    async def test_upsert_mentorship_insert(self):
        entity = MentorshipEntity(
            mentor_id=self.mentor.user_id,
            mentee_id=self.other.user_id,
            domain="Career",
            goals="Switch teams",
            sessions=[],
        )

        result = await self.repo.upsert_mentorship(self.session, entity)

        self.assertIsNotNone(result.mentorship_id)
        self.assertEqual(result.status, MentorshipStatus.PENDING)
        self.assertIsNotNone(result.created_timestamp)

    async def test_add_session(self):
        mentorship = await self.repo.get_by_mentorship_id(
            self.session, self.accepted.mentorship_id
        )

        new_session = await self.repo.add_session(
            self.session,
            mentorship,
            MentorshipSessionEntity(
                date=datetime(2026, 1, 5, 10, 0, tzinfo=timezone.utc),
                duration=60,
                mode="online",
            ),
        )

        self.assertIsNotNone(new_session.session_id)
        self.assertEqual(new_session.mentorship_id, self.accepted.mentorship_id)
        self.assertEqual(mentorship.sessions, [new_session])


if __name__ == "__main__":
    unittest.main()
