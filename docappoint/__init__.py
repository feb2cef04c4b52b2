"""
DocAppoint

An in-memory doctor appointment scheduler: patients, doctors with slot
availability ledgers, appointment booking, rescheduling, cancellation and
reminders, with an optional FastAPI front end.
"""

__version__ = "1.0.0"
