from pydantic import BaseModel, Field
from typing import List
import logging

logger = logging.getLogger(__name__)

class Patient(BaseModel):
    patient_id: int

    # Personal information
    name: str

    # Contact information
    email: str
    phone_number: str

    # Medical information, append-only
    medical_history: List[str] = Field(default_factory=list)

    def add_to_medical_history(self, entry: str) -> None:
        """Append an entry to the medical history."""
        self.medical_history.append(entry)

    def show_medical_history(self) -> List[str]:
        """Log the medical history and return a copy of it."""
        logger.info(f"Medical History for {self.name}:")
        for entry in self.medical_history:
            logger.info(entry)
        return list(self.medical_history)

    def __str__(self):
        return f"ID: {self.patient_id}, Name: {self.name}, Email: {self.email}, Phone: {self.phone_number}"

    def __repr__(self):
        return f"<Patient(id={self.patient_id}, name='{self.name}')>"
