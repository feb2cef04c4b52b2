from passlib.context import CryptContext
from fastapi import HTTPException, status
from fastapi.security import HTTPBasic
from enum import Enum

# Password hashing, verified on every authenticated request
PASSWORD_HASH_ROUNDS = 29000
pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
    pbkdf2_sha256__default_rounds=PASSWORD_HASH_ROUNDS,
)

# HTTP Basic credentials checked against the in-memory user directory
security = HTTPBasic()

class UserRole(str, Enum):
    ADMIN = "admin"
    DOCTOR = "doctor"
    PATIENT = "patient"

ACCESS_MESSAGES = {
    UserRole.ADMIN: "Admin access granted.",
    UserRole.DOCTOR: "Doctor access granted.",
    UserRole.PATIENT: "Patient access granted.",
}

ACCESS_DENIED_MESSAGE = "Access denied."

# Password utilities
def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    """Generate password hash."""
    return pwd_context.hash(password)

# Security exceptions
class AuthenticationError(HTTPException):
    def __init__(self, detail: str = "Could not validate credentials"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Basic"},
        )

class AuthorizationError(HTTPException):
    def __init__(self, detail: str = "Not enough permissions"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
        )
