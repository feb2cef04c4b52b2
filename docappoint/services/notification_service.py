import logging

from ..core.config import settings

logger = logging.getLogger(__name__)

class NotificationService:
    """Simulated e-mail and SMS delivery.

    Messages are written to the log and never leave the process. Both
    operations are fire-and-forget: they return nothing and callers never
    branch on their outcome.
    """

    def __init__(self, sender: str = None):
        self.sender = sender or settings.NOTIFICATION_SENDER

    def send_email(self, to: str, subject: str, body: str) -> None:
        """Send an e-mail notification."""
        if not settings.EMAIL_NOTIFICATIONS_ENABLED:
            logger.debug(f"Email notifications disabled, dropping '{subject}' for {to}")
            return
        logger.info(f"Email sent to {to} from {self.sender} with subject: {subject} and body: {body}")

    def send_sms(self, phone_number: str, message: str) -> None:
        """Send an SMS notification."""
        if not settings.SMS_NOTIFICATIONS_ENABLED:
            logger.debug(f"SMS notifications disabled, dropping message for {phone_number}")
            return
        logger.info(f"SMS sent to {phone_number} with message: {message}")
