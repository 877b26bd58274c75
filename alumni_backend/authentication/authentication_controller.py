from fastapi import APIRouter
from alumni_backend.common.fast_api_response_wrapper import api_response
from alumni_backend.common.api_endpoints import MY_ROLES
from alumni_backend.dto.user_context_dto import UserContextDto
from alumni_backend.utils.permission_decorators import authenticate


class AuthenticationController:
    """
    Exposes who the bearer token belongs to.

    Endpoints:
        GET /roles/me: id and roles of the current user, e.g.
            {"success": true, "message": "Successfully",
             "data": {"userId": 7, "roles": ["alumni"]}}
    """

    def __init__(self):
        self.router = APIRouter(tags=["Authentication"])

        self.router.add_api_route(
            MY_ROLES,
            endpoint=authenticate()(self.get_my_roles),
            methods=["GET"],
            response_model=None,
        )

    async def get_my_roles(self, current_user: UserContextDto):
        return api_response(
            data={"userId": current_user.user_id, "roles": current_user.roles},
            message="Successfully",
        )
