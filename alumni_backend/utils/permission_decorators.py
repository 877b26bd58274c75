import functools
import inspect
from enum import Enum
from http import HTTPStatus
from starlette.requests import Request
from alumni_backend.common.fast_api_response_wrapper import api_response
from alumni_backend.common.user_role import UserRole


class ApiParamName(str, Enum):
    REQUEST = "request"
    CURRENT_USER = "current_user"
    USER_ID = "user_id"


INJECTED_PARAMS = {p.value for p in ApiParamName}


def _has_any_role(user, roles: list[UserRole]) -> bool:
    user_roles = getattr(user, "roles", None) or []
    return any(role in user_roles for role in roles)


def _injected_values(request: Request, user) -> dict:
    return {
        ApiParamName.REQUEST.value: request,
        ApiParamName.CURRENT_USER.value: user,
        ApiParamName.USER_ID.value: getattr(user, "user_id", None),
    }


def authenticate(roles: list[UserRole] | None = None):
    """
    Authentication and role check decorator for controller endpoints.

    The wrapped endpoint's signature is rewritten so that FastAPI injects the
    `Request`, while `current_user` and `user_id` are hidden from FastAPI and
    filled in from `request.state.user` (set by AuthMiddleware).

    Supported injectable parameters (by name):
    - `request`      → Starlette/FastAPI Request object
    - `current_user` → UserContextDto from `request.state.user`
    - `user_id`      → `current_user.user_id` shortcut

    Args:
        roles: Roles allowed to call the endpoint. None only requires a
            logged-in user; otherwise the user needs at least one listed role.

    Returns:
        The decorated async function.

    Example:
        self.router.add_api_route(
            "/admin/stats",
            endpoint=authenticate(roles=[UserRole.ADMIN])(self.get_stats),
            methods=["GET"],
        )
    """

    def decorator(func):
        declared = inspect.signature(func).parameters
        wanted = [name for name in declared if name in INJECTED_PARAMS]

        exposed = [
            inspect.Parameter(
                ApiParamName.REQUEST.value,
                inspect.Parameter.POSITIONAL_OR_KEYWORD,
                annotation=Request,
            )
        ]
        exposed.extend(p for name, p in declared.items() if name not in INJECTED_PARAMS)

        @functools.wraps(func)
        async def wrapper(request: Request, *args, **kwargs):
            user = getattr(request.state, "user", None)
            if not user:
                return api_response(
                    success=False,
                    message="Unauthorized: User context missing",
                    status_code=HTTPStatus.UNAUTHORIZED,
                )

            if roles is not None and not _has_any_role(user, roles):
                return api_response(
                    success=False,
                    message="Forbidden: Insufficient permissions",
                    status_code=HTTPStatus.FORBIDDEN,
                )

            injected = _injected_values(request, user)
            kwargs.pop(ApiParamName.REQUEST.value, None)
            kwargs.update({name: injected[name] for name in wanted})

            return await func(*args, **kwargs)

        wrapper.__signature__ = inspect.Signature(exposed)
        return wrapper

    return decorator
