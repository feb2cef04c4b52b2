from fastapi import Depends, HTTPException, status, Request
from fastapi.security import HTTPBasicCredentials
from typing import List

from ..core.security import (
    security, AuthenticationError, AuthorizationError, UserRole
)
from ..models.user import User
from ..schemas.scheduling import OperationStatus, SchedulingResult
from ..services.appointment_service import AppointmentManager
from ..services.auth_service import AuthService

class NotFoundError(HTTPException):
    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)

class ConflictError(HTTPException):
    def __init__(self, detail: str = "Resource is not available"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)

# Application state dependencies
def get_appointment_manager(request: Request) -> AppointmentManager:
    """Get the application's appointment manager."""
    return request.app.state.appointment_manager

def get_auth_service(request: Request) -> AuthService:
    """Get the application's user directory."""
    return request.app.state.auth_service

async def get_current_user(
    credentials: HTTPBasicCredentials = Depends(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> User:
    """Authenticate the HTTP Basic credentials against the user directory.

    Runs a full password hash verification on the event loop for each
    request; its cost is set by PASSWORD_HASH_ROUNDS.
    """
    user = auth_service.authenticate(credentials.username, credentials.password)
    if not user:
        raise AuthenticationError("Invalid username or password")

    return user

# Role-based access control dependencies
def require_role(allowed_roles: List[UserRole]):
    """Create a dependency that requires specific user roles."""
    async def role_checker(
        current_user: User = Depends(get_current_user)
    ) -> User:
        if current_user.role not in allowed_roles:
            raise AuthorizationError(
                f"Access denied. Required roles: {[role.value for role in allowed_roles]}"
            )
        return current_user

    return role_checker

# Specific role dependencies
async def get_admin_user(
    current_user: User = Depends(require_role([UserRole.ADMIN]))
) -> User:
    """Require admin role."""
    return current_user

async def get_doctor_user(
    current_user: User = Depends(require_role([UserRole.DOCTOR, UserRole.ADMIN]))
) -> User:
    """Require doctor or admin role."""
    return current_user

def raise_for_result(result: SchedulingResult) -> SchedulingResult:
    """Turn a rejected scheduling outcome into the matching HTTP error."""
    if result.status == OperationStatus.NOT_FOUND:
        raise NotFoundError(result.message)
    if result.status == OperationStatus.DOCTOR_UNAVAILABLE:
        raise ConflictError(result.message)
    return result
