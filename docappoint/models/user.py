from pydantic import BaseModel
import logging

from ..core.security import UserRole, ACCESS_MESSAGES, ACCESS_DENIED_MESSAGE, verify_password

logger = logging.getLogger(__name__)

class User(BaseModel):
    username: str
    password_hash: str
    role: UserRole
    is_active: bool = True

    def authenticate(self, username: str, password: str) -> bool:
        """Check a username/password pair against this account."""
        return self.username == username and verify_password(password, self.password_hash)

    def access_control(self) -> str:
        """Return (and log) the access message for this user's role."""
        message = ACCESS_MESSAGES.get(self.role, ACCESS_DENIED_MESSAGE)
        logger.info(message)
        return message

    def __repr__(self):
        return f"<User(username='{self.username}', role='{self.role.value}')>"
