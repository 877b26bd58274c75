import argparse
import asyncio

from alumni_backend.authentication.authentication_service import AuthenticationService
from alumni_backend.common.database import Database
from alumni_backend.common.exceptions import NotFoundError
from alumni_backend.common.logger import get_logger
from alumni_backend.repository.users_repository import UsersRepository

logger = get_logger()


async def issue_token(
    database: Database,
    auth_service: AuthenticationService,
    user_id: int,
    users_repository: UsersRepository | None = None,
) -> str:
    """
    Sign an access token for an existing user.

    The token carries the user's stored email and role, so it grants exactly
    what the users table says the account is.

    Args:
        database (Database): Database holding the users table.
        auth_service (AuthenticationService): Signs the token.
        user_id (int): Id of the user to issue the token for.
        users_repository (UsersRepository | None): Lookup of the user record.

    Returns:
        str: The encoded JWT.

    Raises:
        NotFoundError: If no user has the given id.
    """
    users_repository = users_repository or UsersRepository()

    async with database.session() as session:
        user = await users_repository.get_user_by_user_id(
            session=session, user_id=user_id
        )
    if not user:
        raise NotFoundError(f"User {user_id} not found.")

    if user.is_suspended:
        logger.warning("Issuing a token for suspended user %s", user_id)

    return auth_service.create_access_token(
        user_id=user.user_id,
        primary_email=user.primary_email,
        roles=[user.role],
    )


def main():
    parser = argparse.ArgumentParser(
        description="Print a signed access token for an existing user."
    )
    parser.add_argument("user_id", type=int, help="id of the user")
    args = parser.parse_args()

    async def run():
        database = Database()
        try:
            return await issue_token(
                database, AuthenticationService(logger=logger), args.user_id
            )
        finally:
            await database.close()

    print(asyncio.run(run()))


if __name__ == "__main__":
    main()
