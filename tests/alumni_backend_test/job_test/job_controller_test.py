import unittest
from unittest.mock import MagicMock, AsyncMock, patch
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from alumni_backend.common.user_role import UserRole
from alumni_backend.common.api_endpoints import JOBS_ENDPOINT
from alumni_backend.job.job_controller import JobController
from alumni_backend.dto.user_context_dto import UserContextDto


class TestJobController(unittest.TestCase):
    def setUp(self):
        self.mock_job_service = MagicMock()
        self.mock_database = MagicMock()
        self.mock_session = AsyncMock()
        self.mock_database.session.return_value.__aenter__.return_value = (
            self.mock_session
        )

        self.controller = JobController(
            job_service=self.mock_job_service, database=self.mock_database
        )

        self.app = FastAPI()
        self.app.include_router(self.controller.router)

        self.patcher = patch("alumni_backend.job.job_controller.api_response")
        self.mock_api_response = self.patcher.start()
        self.mock_api_response.side_effect = (
            lambda *, message, data=None, status_code=HTTPStatus.OK: {
                "message": message,
                "data": data,
            }
        )

        self.current_user = UserContextDto(user_id=2, roles=[UserRole.ALUMNI])

        @self.app.middleware("http")
        async def mock_auth_middleware(request: Request, call_next):
            request.state.user = self.current_user
            return await call_next(request)

        self.client = TestClient(self.app)

    def tearDown(self):
        self.patcher.stop()

    def test_get_jobs(self):
        self.mock_job_service.get_jobs = AsyncMock(return_value={"jobs": []})

        response = self.client.get(f"{JOBS_ENDPOINT}?page=2&limit=20")

        self.assertEqual(response.status_code, HTTPStatus.OK)
        self.mock_job_service.get_jobs.assert_awaited_once_with(
            session=self.mock_session, page=2, limit=20
        )

    def test_get_jobs_rejects_bad_limit(self):
        self.mock_job_service.get_jobs = AsyncMock()

        response = self.client.get(f"{JOBS_ENDPOINT}?limit=0")

        self.assertEqual(response.status_code, HTTPStatus.UNPROCESSABLE_ENTITY)

    def test_create_job(self):
        self.mock_job_service.create_job = AsyncMock(return_value=None)

        response = self.client.post(
            JOBS_ENDPOINT,
            json={
                "title": "SRE",
                "company": "Acme",
                "location": "Remote",
                "type": "full-time",
                "description": "On call",
            },
        )

        self.assertEqual(response.status_code, HTTPStatus.OK)
        self.assertEqual(
            self.mock_api_response.call_args.kwargs["status_code"], HTTPStatus.CREATED
        )
        self.assertEqual(
            self.mock_job_service.create_job.call_args.kwargs["user_context"],
            self.current_user,
        )

    def test_get_job_and_apply(self):
        self.mock_job_service.get_job = AsyncMock(return_value=None)
        self.mock_job_service.apply_to_job = AsyncMock(return_value=None)

        self.client.get("/jobs/4")
        response = self.client.post("/jobs/4/apply")

        self.mock_job_service.get_job.assert_awaited_once_with(
            session=self.mock_session, job_id=4
        )
        self.mock_job_service.apply_to_job.assert_awaited_once_with(
            session=self.mock_session, user_context=self.current_user, job_id=4
        )
        self.assertEqual(
            response.json()["message"], "Application submitted successfully"
        )

    def test_update_job(self):
        self.mock_job_service.update_job = AsyncMock(return_value=None)

        response = self.client.put("/jobs/4", json={"title": "Staff SRE"})

        self.assertEqual(response.status_code, HTTPStatus.OK)
        self.assertEqual(response.json()["message"], "Job updated successfully")
        kwargs = self.mock_job_service.update_job.call_args.kwargs
        self.assertEqual(kwargs["job_id"], 4)
        self.assertEqual(kwargs["user_context"], self.current_user)
        self.assertEqual(kwargs["job_data"].to_changes(), {"title": "Staff SRE"})

    def test_update_job_rejects_owner_change(self):
        self.mock_job_service.update_job = AsyncMock()

        response = self.client.put("/jobs/4", json={"postedBy": 99})

        self.assertEqual(response.status_code, HTTPStatus.UNPROCESSABLE_ENTITY)
        self.mock_job_service.update_job.assert_not_awaited()

    def test_delete_job(self):
        self.mock_job_service.delete_job = AsyncMock(return_value=None)

        response = self.client.delete("/jobs/4")

        self.assertEqual(response.json()["message"], "Job deleted successfully")
        self.mock_job_service.delete_job.assert_awaited_once_with(
            session=self.mock_session, user_context=self.current_user, job_id=4
        )


if __name__ == "__main__":
    unittest.main()
