from typing import Dict, List, Optional
import logging

from ..models.user import User
from ..core.security import get_password_hash, UserRole

logger = logging.getLogger(__name__)

class AuthService:
    """In-memory user directory."""

    def __init__(self):
        self._users: Dict[str, User] = {}

    def register_user(self, username: str, password: str, role: UserRole) -> User:
        """Register a new user."""
        if username in self._users:
            raise ValueError(f"Username '{username}' already registered")

        user = User(
            username=username,
            password_hash=get_password_hash(password),
            role=role,
        )
        self._users[username] = user
        logger.info(f"User {username} registered with role {user.role.value}")
        return user

    def authenticate(self, username: str, password: str) -> Optional[User]:
        """Return the user for valid, active credentials, None otherwise."""
        user = self._users.get(username)
        if not user or not user.is_active:
            return None

        if not user.authenticate(username, password):
            logger.info(f"Failed login for {username}")
            return None

        return user

    def get_user(self, username: str) -> Optional[User]:
        return self._users.get(username)

    def list_users(self) -> List[User]:
        return list(self._users.values())
