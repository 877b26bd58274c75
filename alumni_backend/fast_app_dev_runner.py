"""
Development ASGI entry point for the FastAPI backend application.

This script performs the following steps:
1. Builds application dependencies via AppDependencyBuilder.
2. Swaps in an authentication service that accepts every request.
3. Creates the FastAPI application and runs it with Uvicorn.
"""

import uvicorn
from starlette.datastructures import Headers
from alumni_backend.utils.app_dependency_builder import AppDependencyBuilder
from alumni_backend.authentication.authentication_service import AuthenticationService
from alumni_backend.dto.user_context_dto import UserContextDto
from alumni_backend.common.user_role import UserRole

DEV_USER_ID_HEADER = "X-Dev-User-Id"


class DevAuthenticationService(AuthenticationService):
    """
    Authentication service used exclusively in development mode.

    Skips token validation. The user id is taken from the X-Dev-User-Id
    header (default 1) and the user always holds the admin and alumni roles.
    """

    def authenticate_request(self, headers: Headers) -> UserContextDto:
        return UserContextDto(
            user_id=int(headers.get(DEV_USER_ID_HEADER, "1")),
            primary_email="admin@dev.local",
            roles=[UserRole.ADMIN, UserRole.ALUMNI],
        )


builder = AppDependencyBuilder()

# Never use this override outside local development.
builder.fast_app_factory.authentication_service = DevAuthenticationService(
    logger=builder.logger
)

app = builder.fast_app_factory.create_app()

if __name__ == "__main__":
    uvicorn.run(
        "alumni_backend.fast_app_dev_runner:app", host="0.0.0.0", port=5001, reload=True
    )
