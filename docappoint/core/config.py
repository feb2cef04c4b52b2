from pydantic_settings import BaseSettings
from typing import List
import os

class Settings(BaseSettings):
    # Application
    APP_NAME: str = "DocAppoint"
    VERSION: str = "1.0.0"
    DEBUG: bool = False
    TESTING: bool = os.getenv("TESTING", "0").lower() in ("1", "true", "t", "yes", "y")
    LOG_LEVEL: str = "INFO"

    # Scheduling
    REMINDER_WINDOW_HOURS: int = 24

    # Notifications (simulated, logged only)
    EMAIL_NOTIFICATIONS_ENABLED: bool = True
    SMS_NOTIFICATIONS_ENABLED: bool = True
    NOTIFICATION_SENDER: str = "no-reply@docappoint.local"

    # Bootstrap data
    SEED_DEMO_DATA: bool = False
    DEFAULT_ADMIN_USERNAME: str = "admin"
    DEFAULT_ADMIN_PASSWORD: str = "adminpass"

    # CORS
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8080", "http://testserver"]

    class Config:
        env_file = ".env"
        case_sensitive = True

# Create settings instance
settings = Settings()
