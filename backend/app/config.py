"""
Application configuration
"""

import os
from typing import List, Optional, Tuple

# ScreenshotOne cache policy
EXAMPLE_CACHE_KEY = "example"
EXAMPLE_CACHE_TTL = 30 * 24 * 60 * 60  # 30 days
DEFAULT_CACHE_TTL = 4 * 60 * 60  # 4 hours


class ConfigurationError(RuntimeError):
    """Raised when a required setting is missing"""


class Settings:
    """Application settings"""

    def __init__(self):
        self.DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
        self.HOST: str = os.getenv("HOST", "0.0.0.0")
        self.PORT: int = int(os.getenv("PORT", "8000"))
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "DEBUG" if self.DEBUG else "INFO").upper()

        # Security settings - parse comma-separated values
        cors_origins_str = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:8000")
        self.CORS_ORIGINS: List[str] = [origin.strip() for origin in cors_origins_str.split(",") if origin.strip()]

        # ScreenshotOne credentials
        self.SCREENSHOTONE_ACCESS_KEY: Optional[str] = os.getenv("SCREENSHOTONE_ACCESS_KEY") or None
        self.SCREENSHOTONE_SECRET_KEY: Optional[str] = os.getenv("SCREENSHOTONE_SECRET_KEY") or None

        # Demo website rendered on the tool pages
        self.SCREENSHOT_EXAMPLE_URL: str = os.getenv("SCREENSHOT_EXAMPLE_URL", "https://example.com")

    @property
    def screenshotone_configured(self) -> bool:
        return bool(self.SCREENSHOTONE_ACCESS_KEY and self.SCREENSHOTONE_SECRET_KEY)

    def screenshotone_keys(self) -> Tuple[str, str]:
        """Return (access_key, secret_key) or raise ConfigurationError"""
        if not self.screenshotone_configured:
            raise ConfigurationError(
                "SCREENSHOTONE_ACCESS_KEY and SCREENSHOTONE_SECRET_KEY environment variables are required"
            )
        return self.SCREENSHOTONE_ACCESS_KEY, self.SCREENSHOTONE_SECRET_KEY


settings = Settings()
