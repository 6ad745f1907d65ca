"""Client configuration with Pydantic Settings.

Settings are loaded from environment variables and a .env file in the
working directory.

Examples:
    >>> from utapi.config import get_settings
    >>> settings = get_settings()
    >>> settings.UPLOADTHING_API_URL
    'https://api.uploadthing.com'

Tests:
    - tests/unit/test_config.py::TestSettings
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from utapi.errors import ConfigurationError

DEFAULT_API_URL = "https://api.uploadthing.com"
DEFAULT_VERSION = "7.6.0"
DEFAULT_BE_ADAPTER = "utapi-python"
DEFAULT_TIMEOUT = 60.0


class ACL(str, Enum):
    """Access control applied to uploaded files."""

    PUBLIC_READ = "public-read"
    PRIVATE = "private"


class ContentDisposition(str, Enum):
    """Content-Disposition served with uploaded files."""

    INLINE = "inline"
    ATTACHMENT = "attachment"


class Settings(BaseSettings):
    """UploadThing client settings.

    Attributes:
        UPLOADTHING_SECRET: API key sent as x-uploadthing-api-key
        UPLOADTHING_API_URL: API host
        UPLOADTHING_VERSION: Protocol version sent as x-uploadthing-version
        UPLOADTHING_FE_PACKAGE: Optional x-uploadthing-fe-package header
        UPLOADTHING_BE_ADAPTER: Optional x-uploadthing-be-adapter header
        UPLOADTHING_TIMEOUT: Request timeout in seconds
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    UPLOADTHING_SECRET: str = Field(
        default="",
        validate_default=True,
        description="UploadThing API key",
    )
    UPLOADTHING_API_URL: str = Field(
        default=DEFAULT_API_URL,
        description="UploadThing API host",
    )
    UPLOADTHING_VERSION: str = Field(
        default=DEFAULT_VERSION,
        description="UploadThing protocol version",
    )
    UPLOADTHING_FE_PACKAGE: str = Field(
        default="",
        description="Frontend package reported to UploadThing",
    )
    UPLOADTHING_BE_ADAPTER: str = Field(
        default=DEFAULT_BE_ADAPTER,
        description="Backend adapter reported to UploadThing",
    )
    UPLOADTHING_TIMEOUT: float = Field(
        default=DEFAULT_TIMEOUT,
        gt=0,
        description="Request timeout in seconds",
    )

    @field_validator("UPLOADTHING_SECRET")
    @classmethod
    def validate_secret(cls, v: str) -> str:
        """Reject a missing or blank API key."""
        if not v or not v.strip():
            raise ValueError("UPLOADTHING_SECRET is not set")
        return v

    @field_validator("UPLOADTHING_API_URL")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        """Require an http(s) URL and drop any trailing slash."""
        if not v.startswith(("https://", "http://")):
            raise ValueError("UPLOADTHING_API_URL must start with http:// or https://")
        return v.rstrip("/")


def load_settings(**overrides) -> Settings:
    """Build settings, converting validation failures to ConfigurationError.

    Args:
        **overrides: Explicit setting values taking precedence over the
            environment.

    Returns:
        Settings: The validated settings.

    Raises:
        ConfigurationError: If a setting is missing or invalid.
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        messages = "; ".join(err["msg"].removeprefix("Value error, ") for err in e.errors())
        raise ConfigurationError(messages) from e


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: The client settings.

    Raises:
        ConfigurationError: If UPLOADTHING_SECRET is not configured.
    """
    return load_settings()
