from pydantic import BaseModel

from ..core.security import UserRole
from ..models.user import User

class UserResponse(BaseModel):
    username: str
    role: UserRole
    is_active: bool
    access: str

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            username=user.username,
            role=user.role,
            is_active=user.is_active,
            access=user.access_control(),
        )
