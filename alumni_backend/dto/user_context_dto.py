from dataclasses import dataclass, field
from alumni_backend.common.user_role import UserRole


@dataclass
class UserContextDto:
    user_id: int
    primary_email: str | None = None
    roles: list[UserRole] = field(default_factory=list)

    def has_role(self, role: UserRole) -> bool:
        return role in self.roles
