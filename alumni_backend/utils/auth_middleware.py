from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from alumni_backend.common.api_endpoints import HEALTH_ENDPOINT
from alumni_backend.common.exceptions import UnavailableError
from alumni_backend.common.fast_api_response_wrapper import api_response
from http import HTTPStatus

PUBLIC_PATHS = frozenset({HEALTH_ENDPOINT, "/docs", "/redoc", "/openapi.json"})


class AuthMiddleware(BaseHTTPMiddleware):
    """
    Middleware for authenticating incoming HTTP requests.

    Delegates Bearer token verification to `AuthenticationService` and stores
    the resulting `UserContextDto` (user_id, primary_email, roles) in
    `request.state.user` for the permission decorators and controllers.

    The health check and the API documentation pages are served without a token.

    Usage:
        app.add_middleware(AuthMiddleware, auth_service=auth_service)

    Exception Handling:
        - ValueError: Returns HTTP 401 UNAUTHORIZED with the error message.
        - UnavailableError: Returns HTTP 503 SERVICE UNAVAILABLE, e.g. when no
          signing secret is configured.
        - Other exceptions: Returns HTTP 403 FORBIDDEN with "Authentication failed".
    """

    def __init__(self, app, auth_service):
        super().__init__(app)
        self.auth_service = auth_service

    async def dispatch(self, request: Request, call_next):
        """
        Authenticate the request, then hand it to the next handler.

        Args:
            request (Request): The incoming FastAPI request object.
            call_next (Callable): The next middleware or route handler to call.

        Returns:
            Response: The response returned by the next handler, or an error response
                    if authentication fails.
        """
        if request.url.path in PUBLIC_PATHS:
            return await call_next(request)

        try:
            request.state.user = self.auth_service.authenticate_request(
                request.headers
            )
        except UnavailableError:
            self.auth_service.logger.error(
                "[AuthMiddleware] authentication unavailable on %s",
                request.url.path,
                exc_info=True,
            )
            return api_response(
                success=False,
                message="Authentication is temporarily unavailable",
                status_code=HTTPStatus.SERVICE_UNAVAILABLE,
            )
        except ValueError as e:
            return api_response(
                success=False,
                message=str(e),
                status_code=HTTPStatus.UNAUTHORIZED,
            )
        except Exception:
            self.auth_service.logger.exception(
                "[AuthMiddleware] authentication error on %s", request.url.path
            )
            return api_response(
                success=False,
                message="Authentication failed",
                status_code=HTTPStatus.FORBIDDEN,
            )

        return await call_next(request)
