"""
Configuration management for the microservices
"""
from pathlib import Path
from typing import List, Optional, Union

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError


class ServiceSettings(BaseSettings):
    """Settings shared by every microservice, loaded from environment variables"""

    # Server Configuration
    HOST: str = "127.0.0.1"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None

    # Database Configuration
    DATABASE_URL: str = "sqlite:///./capstone.db"

    # IANA zone for creation stamps, server local time when unset
    TIMEZONE: Optional[str] = None

    # CORS Configuration
    CORS_ORIGINS: List[str] = ["http://127.0.0.1:5502"]

    model_config = SettingsConfigDict(
        env_file=None,
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    @field_validator("TIMEZONE")
    @classmethod
    def validate_timezone(cls, v: Optional[str]) -> Optional[str]:
        """Resolve the zone up front so a bad name fails at startup"""
        if not v:
            return None
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"unknown time zone '{v}'") from exc
        return v


class AuthSettings(ServiceSettings):
    """Settings for the auth microservice, including the token signing secret"""

    CORS_ORIGINS: List[str] = ["http://127.0.0.1:8080"]

    # Token Configuration
    SECRET_KEY: str = ""
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 5
    COOKIE_NAME: str = "jwtToken"


def load_service_settings(env_file: Optional[Union[str, Path]] = None, **overrides) -> ServiceSettings:
    """
    Load settings for the accounts or records microservice.

    Overrides (typically command line flags) win over the environment and the
    optional env file.
    """
    if env_file is not None and not Path(env_file).is_file():
        raise ConfigurationError(f"Error loading {env_file} file.")
    try:
        return ServiceSettings(_env_file=env_file, **overrides)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid settings: {e}") from e


def load_auth_settings(env_file: Union[str, Path] = ".env", **overrides) -> AuthSettings:
    """
    Load settings for the auth microservice.

    The env file is mandatory and must provide a non-empty SECRET_KEY.

    Raises:
        ConfigurationError: If the env file cannot be read or the secret is missing,
            or a setting is invalid
    """
    env_path = Path(env_file)
    if not env_path.is_file():
        raise ConfigurationError(f"Error loading {env_path} file.")

    try:
        settings = AuthSettings(_env_file=env_path, **overrides)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid settings: {e}") from e
    if not settings.SECRET_KEY:
        raise ConfigurationError(f"SECRET_KEY not found in {env_path} file")
    return settings
