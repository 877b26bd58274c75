from alumni_backend.common.logger import get_logger
from alumni_backend.common.database import Database
from alumni_backend.utils.fast_app_factory import FastAppFactory
from alumni_backend.utils.capacity_evaluator import CapacityEvaluator
from alumni_backend.utils.access_policy import AccessPolicy
from alumni_backend.utils.target_lock_registry import TargetLockRegistry
from alumni_backend.authentication.authentication_controller import (
    AuthenticationController,
)
from alumni_backend.authentication.authentication_service import AuthenticationService
from alumni_backend.repository.users_repository import UsersRepository
from alumni_backend.repository.mentorship_repository import MentorshipRepository
from alumni_backend.repository.event_repository import EventRepository
from alumni_backend.repository.job_repository import JobRepository
from alumni_backend.mentorship.mentorship_mapper import MentorshipMapper
from alumni_backend.mentorship.mentorship_service import MentorshipService
from alumni_backend.mentorship.mentorship_controller import MentorshipController
from alumni_backend.event.event_mapper import EventMapper
from alumni_backend.event.event_service import EventService
from alumni_backend.event.event_controller import EventController
from alumni_backend.job.job_mapper import JobMapper
from alumni_backend.job.job_service import JobService
from alumni_backend.job.job_controller import JobController
from alumni_backend.admin.moderation_service import ModerationService
from alumni_backend.admin.user_mapper import UserMapper
from alumni_backend.admin.admin_controller import AdminController


class AppDependencyBuilder:
    """
    A builder class responsible for constructing all service and controller
    dependencies used throughout the application.

    Example:
        builder = AppDependencyBuilder()
        app = builder.fast_app_factory.create_app()
    """

    def __init__(self, database: Database | None = None):
        """
        Wire repositories, services and controllers together.

        Args:
            database (Database | None): Database to use; one is built from
                DATABASE_URL when omitted.
        """
        self.logger = get_logger()
        self.database = database or Database()

        self.capacity_evaluator = CapacityEvaluator()
        self.access_policy = AccessPolicy(logger=self.logger)
        self.target_lock_registry = TargetLockRegistry()

        self.users_repository = UsersRepository()
        self.mentorship_repository = MentorshipRepository()
        self.event_repository = EventRepository()
        self.job_repository = JobRepository()

        self.mentorship_mapper = MentorshipMapper()
        self.event_mapper = EventMapper()
        self.job_mapper = JobMapper()
        self.user_mapper = UserMapper()

        self.authentication_service = AuthenticationService(logger=self.logger)
        self.authentication_controller = AuthenticationController()

        self.mentorship_service = MentorshipService(
            logger=self.logger,
            users_repository=self.users_repository,
            mentorship_repository=self.mentorship_repository,
            mentorship_mapper=self.mentorship_mapper,
            capacity_evaluator=self.capacity_evaluator,
            access_policy=self.access_policy,
            target_lock_registry=self.target_lock_registry,
        )
        self.mentorship_controller = MentorshipController(
            mentorship_service=self.mentorship_service,
            database=self.database,
        )

        self.event_service = EventService(
            logger=self.logger,
            event_repository=self.event_repository,
            event_mapper=self.event_mapper,
            capacity_evaluator=self.capacity_evaluator,
            access_policy=self.access_policy,
            target_lock_registry=self.target_lock_registry,
        )
        self.event_controller = EventController(
            event_service=self.event_service,
            database=self.database,
        )

        self.job_service = JobService(
            logger=self.logger,
            job_repository=self.job_repository,
            job_mapper=self.job_mapper,
            access_policy=self.access_policy,
        )
        self.job_controller = JobController(
            job_service=self.job_service,
            database=self.database,
        )

        self.moderation_service = ModerationService(
            logger=self.logger,
            users_repository=self.users_repository,
            mentorship_repository=self.mentorship_repository,
            event_repository=self.event_repository,
            job_repository=self.job_repository,
            event_mapper=self.event_mapper,
            job_mapper=self.job_mapper,
            user_mapper=self.user_mapper,
            access_policy=self.access_policy,
        )
        self.admin_controller = AdminController(
            moderation_service=self.moderation_service,
            database=self.database,
        )

        self.fast_app_factory = FastAppFactory(
            authentication_controller=self.authentication_controller,
            authentication_service=self.authentication_service,
            mentorship_controller=self.mentorship_controller,
            event_controller=self.event_controller,
            job_controller=self.job_controller,
            admin_controller=self.admin_controller,
            database=self.database,
        )
