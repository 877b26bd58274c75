from alumni_backend.dto.user_dto import UserDto
from alumni_backend.entity.users_entity import UsersEntity


class UserMapper:
    """
    Mapper for the admin view of user accounts.
    """

    def map_to_user_dto(self, entity: UsersEntity) -> UserDto:
        return UserDto(
            id=entity.user_id,
            first_name=entity.first_name,
            last_name=entity.last_name,
            primary_email=entity.primary_email,
            role=entity.role,
            is_verified=bool(entity.is_verified),
            is_mentor=bool(entity.is_mentor),
            is_suspended=bool(entity.is_suspended),
            created_at=entity.created_timestamp,
        )

    def map_to_user_dtos(self, entities: list[UsersEntity]) -> list[UserDto]:
        return [self.map_to_user_dto(e) for e in entities]
