from pydantic import BaseModel
from enum import Enum
from typing import Optional

from ..models.appointment import Appointment

class OperationStatus(str, Enum):
    SUCCESS = "success"
    NOT_FOUND = "not_found"
    DOCTOR_UNAVAILABLE = "doctor_unavailable"

class SchedulingResult(BaseModel):
    """Outcome of a scheduling operation.

    Expected failures (unknown appointment, closed slot) are reported here
    instead of being raised, and leave the manager's state untouched.
    """
    status: OperationStatus
    message: str
    appointment: Optional[Appointment] = None

    @property
    def ok(self) -> bool:
        return self.status == OperationStatus.SUCCESS
