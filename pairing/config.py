"""
Configuration module for the device pairing gateway.

Loads environment variables into an explicit, immutable Settings object that
is built once at startup and handed to the automation routine.
"""
import os
from dataclasses import dataclass
from typing import List

from dotenv import load_dotenv

# Load .env file
load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Target account (exactly one, never provided by callers)
    NANOMID_EMAIL: str = ""
    NANOMID_PASSWORD: str = ""
    NANOMID_BASE_URL: str = "https://nanomid.com/en"

    # HTTP server
    HOST: str = "0.0.0.0"
    PORT: int = 8080
    FRONTEND_ORIGIN: str = "*"

    # Application Settings
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Browser automation
    HEADLESS: bool = True
    NAVIGATION_TIMEOUT_MS: int = 20000
    SETTLE_DELAY_MS: int = 1500
    WORKFLOW_TIMEOUT_SECONDS: float = 90.0
    MAX_CONCURRENT_SESSIONS: int = 2
    ERROR_SCREENSHOT_PATH: str = "last-error.png"

    # Rate limiting (per client address)
    RATE_LIMIT_POINTS: int = 5
    RATE_LIMIT_WINDOW_SECONDS: int = 60

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the process environment."""
        return cls(
            NANOMID_EMAIL=os.getenv("NANOMID_EMAIL", ""),
            NANOMID_PASSWORD=os.getenv("NANOMID_PASSWORD", ""),
            NANOMID_BASE_URL=os.getenv("NANOMID_BASE_URL", cls.NANOMID_BASE_URL).rstrip("/"),
            HOST=os.getenv("HOST", cls.HOST),
            PORT=int(os.getenv("PORT", str(cls.PORT))),
            FRONTEND_ORIGIN=os.getenv("FRONTEND_ORIGIN", cls.FRONTEND_ORIGIN),
            ENVIRONMENT=os.getenv("ENVIRONMENT", cls.ENVIRONMENT),
            LOG_LEVEL=os.getenv("LOG_LEVEL", cls.LOG_LEVEL),
            HEADLESS=_env_bool("HEADLESS", cls.HEADLESS),
            NAVIGATION_TIMEOUT_MS=int(
                os.getenv("NAVIGATION_TIMEOUT_MS", str(cls.NAVIGATION_TIMEOUT_MS))
            ),
            SETTLE_DELAY_MS=int(os.getenv("SETTLE_DELAY_MS", str(cls.SETTLE_DELAY_MS))),
            WORKFLOW_TIMEOUT_SECONDS=float(
                os.getenv("WORKFLOW_TIMEOUT_SECONDS", str(cls.WORKFLOW_TIMEOUT_SECONDS))
            ),
            MAX_CONCURRENT_SESSIONS=int(
                os.getenv("MAX_CONCURRENT_SESSIONS", str(cls.MAX_CONCURRENT_SESSIONS))
            ),
            ERROR_SCREENSHOT_PATH=os.getenv("ERROR_SCREENSHOT_PATH", cls.ERROR_SCREENSHOT_PATH),
            RATE_LIMIT_POINTS=int(os.getenv("RATE_LIMIT_POINTS", str(cls.RATE_LIMIT_POINTS))),
            RATE_LIMIT_WINDOW_SECONDS=int(
                os.getenv("RATE_LIMIT_WINDOW_SECONDS", str(cls.RATE_LIMIT_WINDOW_SECONDS))
            ),
        )

    @property
    def LOGIN_URL(self) -> str:
        return f"{self.NANOMID_BASE_URL}/login"

    @property
    def DEVICES_URL(self) -> str:
        return f"{self.NANOMID_BASE_URL}/dashboard/player/devices"

    def missing_credentials(self) -> List[str]:
        """
        Return the names of required credential settings that are empty.

        Pairing fails fast (without opening a browser) while this is non-empty.
        """
        required_settings = {
            "NANOMID_EMAIL": self.NANOMID_EMAIL,
            "NANOMID_PASSWORD": self.NANOMID_PASSWORD,
        }
        return [key for key, value in required_settings.items() if not value]

    def cors_origins(self) -> List[str]:
        """Allowed CORS origins; '*' (the default) permits any caller."""
        origins = [origin.strip() for origin in self.FRONTEND_ORIGIN.split(",")]
        return [origin for origin in origins if origin] or ["*"]

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT.lower() == "production"


# Create a singleton instance
settings = Settings.from_env()


def get_settings() -> Settings:
    """FastAPI dependency returning the process-wide settings instance."""
    return settings
