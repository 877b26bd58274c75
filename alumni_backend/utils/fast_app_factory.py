import contextlib
from fastapi import FastAPI
from alumni_backend.common.api_endpoints import HEALTH_ENDPOINT
from alumni_backend.common.fast_api_error_handler import register_exception_handlers
from alumni_backend.utils.auth_middleware import AuthMiddleware


class FastAppFactory:
    """
    Factory class for creating and configuring the FastAPI application.

    Holds the controllers and the authentication service built by
    AppDependencyBuilder and assembles them into an app.
    """

    def __init__(
        self,
        authentication_controller,
        authentication_service,
        mentorship_controller,
        event_controller,
        job_controller,
        admin_controller,
        database=None,
    ):
        """
        Initialize the factory.

        Args:
            authentication_controller: Controller serving the current user's roles.
            authentication_service: AuthenticationService used by the middleware.
            mentorship_controller: Controller for the mentorship workflow.
            event_controller: Controller for events and RSVPs.
            job_controller: Controller for job postings.
            admin_controller: Controller for admin moderation.
            database (Database | None): Disposed on application shutdown when given.
        """
        self.authentication_controller = authentication_controller
        self.authentication_service = authentication_service
        self.mentorship_controller = mentorship_controller
        self.event_controller = event_controller
        self.job_controller = job_controller
        self.admin_controller = admin_controller
        self.database = database

    def create_app(self, is_prod: bool = False) -> FastAPI:
        """
        Create and configure a FastAPI application instance.

        This method performs the following setup steps:
            1. Initializes the FastAPI application. In production mode the
               Swagger UI, ReDoc and OpenAPI schema endpoints are disabled.
            2. Registers global exception handlers.
            3. Adds authentication middleware using AuthMiddleware.
            4. Registers the controller routes under the '/api' prefix.
            5. Adds an unauthenticated health check at '/fastapi/health'.
            6. Disposes the database engine when the application shuts down.

        Args:
            is_prod (bool): Whether the application is running in production mode.

        Returns:
            FastAPI: A fully configured FastAPI application instance.
        """

        @contextlib.asynccontextmanager
        async def lifespan(_app: FastAPI):
            yield
            if self.database is not None:
                await self.database.close()

        app = FastAPI(
            title="Alumni Backend",
            lifespan=lifespan,
            docs_url=None if is_prod else "/docs",
            redoc_url=None if is_prod else "/redoc",
            openapi_url=None if is_prod else "/openapi.json",
        )

        register_exception_handlers(app)

        app.add_middleware(AuthMiddleware, auth_service=self.authentication_service)

        for controller in (
            self.authentication_controller,
            self.mentorship_controller,
            self.event_controller,
            self.job_controller,
            self.admin_controller,
        ):
            app.include_router(controller.router, prefix="/api")

        @app.get(HEALTH_ENDPOINT)
        def health_check():
            """
            Health check endpoint, reachable without a token.

            Returns:
                dict: JSON containing the health status.
            """
            return {"status": "ok"}

        return app
