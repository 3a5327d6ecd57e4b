"""
Configuration module for the sauna scheduling service.
Loads environment variables and provides typed configuration.
"""

from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file
env_path = Path(__file__).parent / ".env"
load_dotenv(dotenv_path=env_path)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Telegram Bot (optional: without a token only the HTTP API runs)
    bot_token: Optional[str] = None

    # Admin Settings
    admin_chat_id: Optional[int] = None  # Unset means every chat is admin

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: str = "*"  # Comma-separated, e.g. "https://sauna.example.com"
    environment: str = "development"  # development, staging, production

    # Logging
    log_level: str = "INFO"
    log_dir: str = "logs"

    # Schedule defaults
    standard_start_hour: int = 10
    standard_end_hour: int = 22
    scheduled_days_limit: int = 7  # Days listed by "show schedule"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def is_admin(self, chat_id: int) -> bool:
        """
        Check if a chat may run admin commands.

        With no admin_chat_id configured every chat is allowed.

        Args:
            chat_id: Telegram chat ID to check

        Returns:
            True if chat is admin, False otherwise
        """
        if not self.admin_chat_id:
            return True
        return chat_id == self.admin_chat_id

    def allowed_origins(self) -> List[str]:
        """Parse cors_origins into a list."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    def standard_hours(self) -> range:
        """Hours offered by the "standard hours" admin button."""
        return range(self.standard_start_hour, self.standard_end_hour)

    def validate_all_required(self) -> None:
        """
        Validate settings that cannot be checked per field.

        Raises:
            ValueError: If the standard hour-set is not a valid range
        """
        start, end = self.standard_start_hour, self.standard_end_hour
        if not (0 <= start < 24 and start < end <= 24):
            raise ValueError(
                f"Invalid standard hours: {start}-{end}. "
                f"Expected 0 <= STANDARD_START_HOUR < STANDARD_END_HOUR <= 24."
            )


# Global settings instance
settings = Settings()
