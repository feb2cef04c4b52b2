from pydantic import BaseModel, Field
from datetime import datetime
from typing import Dict, List

class Doctor(BaseModel):
    doctor_id: int

    # Professional information
    name: str
    specialty: str

    # Availability ledger: exact slot -> open flag. Missing slots are closed.
    availability: Dict[datetime, bool] = Field(default_factory=dict)

    def set_availability(self, slot: datetime, is_available: bool) -> None:
        """Open or close a slot, overwriting any previous value."""
        self.availability[slot] = is_available

    def is_available(self, slot: datetime) -> bool:
        """Return True only for slots explicitly marked open."""
        return self.availability.get(slot, False) is True

    def available_slots(self) -> List[datetime]:
        """Return the open slots in chronological order.

        Naive and timezone-aware slots may be mixed; naive ones are taken as
        local time when ordering.
        """
        open_slots = [slot for slot, is_open in self.availability.items() if is_open]
        return sorted(open_slots, key=_chronological_key)

    def __str__(self):
        return f"ID: {self.doctor_id}, Name: {self.name}, Specialty: {self.specialty}"

    def __repr__(self):
        return f"<Doctor(id={self.doctor_id}, name='{self.name}', specialty='{self.specialty}')>"

def _chronological_key(slot: datetime) -> datetime:
    return slot.astimezone() if slot.tzinfo is None else slot
