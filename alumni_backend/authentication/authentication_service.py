import os
from datetime import datetime, timedelta, timezone

import jwt
from starlette.datastructures import Headers
from alumni_backend.common.environment_constants import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    JWT_ALGORITHM,
    JWT_SECRET,
)
from alumni_backend.common.exceptions import UnavailableError
from alumni_backend.common.user_role import UserRole
from alumni_backend.dto.user_context_dto import UserContextDto

DEFAULT_ALGORITHM = "HS256"
DEFAULT_EXPIRE_MINUTES = 1440


class AuthenticationService:
    """
    Service responsible for authenticating HTTP requests carrying a Bearer JWT.

    Tokens are signed with a shared secret. The payload carries:
        - sub: the user id, as a string
        - email: the user's primary email
        - roles: list of role names (see UserRole)
    """

    def __init__(
        self,
        logger,
        secret: str | None = None,
        algorithm: str | None = None,
        expire_minutes: int | None = None,
    ):
        """
        Initialize the AuthenticationService.

        Args:
            logger: A logger instance.
            secret (str | None): Signing secret; defaults to the JWT_SECRET environment variable.
            algorithm (str | None): Signing algorithm; defaults to JWT_ALGORITHM or HS256.
            expire_minutes (int | None): Token lifetime; defaults to
                ACCESS_TOKEN_EXPIRE_MINUTES or one day.
        """
        self.logger = logger
        self.secret = secret or os.getenv(JWT_SECRET)
        self.algorithm = algorithm or os.getenv(JWT_ALGORITHM, DEFAULT_ALGORITHM)
        self.expire_minutes = expire_minutes or int(
            os.getenv(ACCESS_TOKEN_EXPIRE_MINUTES, DEFAULT_EXPIRE_MINUTES)
        )

    def authenticate_request(self, headers: Headers) -> UserContextDto:
        """
        Authenticate an incoming request from its Authorization header.

        Args:
            headers (Headers): The request headers containing authentication information.

        Returns:
            UserContextDto: Contains the user's id, primary_email and roles.

        Raises:
            ValueError: If the header is missing or the token is invalid.
        """
        auth_header = headers.get("Authorization")
        if not auth_header or not auth_header.startswith("Bearer "):
            raise ValueError("Missing authentication credentials")

        token = auth_header.split(" ", 1)[1].strip()
        return self.verify_token(token)

    def verify_token(self, token: str) -> UserContextDto:
        """
        Decode and validate a token, then build the user context from its claims.

        Raises:
            ValueError: If the signature, expiry or claims are invalid.
        """
        if not self.secret:
            raise UnavailableError("JWT secret is not configured")

        try:
            payload = jwt.decode(
                token,
                key=self.secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.PyJWTError as e:
            raise ValueError(f"Token Invalid: {str(e)}")

        return self._build_context(payload)

    def create_access_token(
        self,
        user_id: int,
        primary_email: str | None = None,
        roles: list[UserRole] | None = None,
    ) -> str:
        """
        Issue a signed token for a user.

        Tokens are minted out of band by the alumni-issue-token command, as
        the service itself has no login endpoint.

        Args:
            user_id (int): The user id, stored in the sub claim.
            primary_email (str | None): The user's email.
            roles (list[UserRole] | None): Roles granted to the user.

        Returns:
            str: The encoded JWT.
        """
        if not self.secret:
            raise UnavailableError("JWT secret is not configured")

        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "email": primary_email,
            "roles": [UserRole(r).value for r in roles or []],
            "iat": now,
            "exp": now + timedelta(minutes=self.expire_minutes),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def _build_context(self, payload: dict) -> UserContextDto:
        try:
            user_id = int(payload["sub"])
        except (TypeError, ValueError):
            raise ValueError("Token Invalid: sub must be a user id")

        roles = []
        for role in payload.get("roles") or []:
            try:
                roles.append(UserRole(role))
            except ValueError:
                self.logger.warning(
                    "[AuthenticationService] ignoring unknown role %s for user %s",
                    role,
                    user_id,
                )

        return UserContextDto(
            user_id=user_id,
            primary_email=payload.get("email"),
            roles=roles,
        )
