"""
Application configuration.

All configuration is loaded from environment variables.
Never hardcode secrets or connection strings in code.
"""

import os
from functools import lru_cache

from dotenv import load_dotenv
from sqlalchemy.engine import URL, make_url

from loyalty_admin.exceptions import ConfigurationError

# Load .env file into environment variables
load_dotenv()

REQUIRED_VARIABLES = ("DATABASE_URL", "DATABASE_PASSWORD")


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self, environ=None):
        environ = os.environ if environ is None else environ

        missing = [name for name in REQUIRED_VARIABLES if not environ.get(name)]
        if missing:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing)}"
            )

        # Application
        self.APP_NAME: str = environ.get("APP_NAME", "Loyalty Admin")
        self.APP_VERSION: str = "0.1.0"
        self.DEBUG: bool = environ.get("DEBUG", "false").lower() == "true"
        self.LOG_LEVEL: str = environ.get("LOG_LEVEL", "INFO").upper()

        # Store location and credential
        self.DATABASE_URL: str = environ["DATABASE_URL"]
        self.DATABASE_PASSWORD: str = environ["DATABASE_PASSWORD"]

        # Environment
        self.ENVIRONMENT: str = environ.get("ENVIRONMENT", "development")

    @property
    def database_url(self) -> URL:
        """
        Connection URL with the credential applied.

        SQLite has no authentication, so the password is only
        attached for server databases.
        """
        url = make_url(self.DATABASE_URL)
        if url.get_backend_name() == "sqlite":
            return url
        return url.set(password=self.DATABASE_PASSWORD)


@lru_cache()
def get_settings() -> Settings:
    """
    Return cached settings instance.

    Raises ConfigurationError when the store location or
    credential is absent. This is meant to stop the process
    at startup, not to be handled at request time.
    """
    return Settings()
