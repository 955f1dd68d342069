"""
Settings Module
===============

Pydantic-based configuration with environment variable loading.

Version: 0.1.0
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Deployment environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class JobBackend(str, Enum):
    """Where the job queue and result store live."""

    REDIS = "redis"
    MEMORY = "memory"


class RedisSettings(BaseSettings):
    """Redis queue/store configuration."""

    model_config = SettingsConfigDict(env_prefix="REDIS_", populate_by_name=True)

    host: str = "127.0.0.1"
    port: int = 6379
    password: SecretStr = SecretStr("")
    db: int = 0
    dsn: str | None = Field(default=None, alias="REDIS_URL")

    @property
    def url(self) -> str:
        """Connection URL; REDIS_URL wins over the individual fields."""
        if self.dsn:
            return self.dsn
        pwd = self.password.get_secret_value()
        auth = f":{pwd}@" if pwd else ""
        return f"redis://{auth}{self.host}:{self.port}/{self.db}"


class JobSettings(BaseSettings):
    """Job pipeline configuration."""

    model_config = SettingsConfigDict(env_prefix="JOBS_")

    backend: JobBackend = JobBackend.REDIS


class VerifierSettings(BaseSettings):
    """Defaults for the independent verifier CLI."""

    model_config = SettingsConfigDict(env_prefix="VERIFIER_")

    # Public threshold agreed out of band with the prover
    threshold: int = Field(default=700, ge=0, le=2**64 - 1)
    protocol_version: int = 1


class CORSSettings(BaseSettings):
    """CORS configuration."""

    model_config = SettingsConfigDict(env_prefix="CORS_")

    origins: str = "http://localhost:3000,http://localhost:5173"
    allow_credentials: bool = True

    @property
    def origins_list(self) -> list[str]:
        """Parse origins string into list."""
        return [o.strip() for o in self.origins.split(",") if o.strip()]


class ServicePorts(BaseSettings):
    """Service port configuration."""

    gateway: int = Field(default=3000, alias="GATEWAY_PORT")


class Settings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables with sensible defaults.
    Use the global `settings` singleton or call `get_settings()`.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # General
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = True
    log_level: LogLevel = LogLevel.INFO

    # Service ports
    ports: ServicePorts = Field(default_factory=ServicePorts)

    # Queue / result store
    redis: RedisSettings = Field(default_factory=RedisSettings)
    jobs: JobSettings = Field(default_factory=JobSettings)

    # Independent verifier
    verifier: VerifierSettings = Field(default_factory=VerifierSettings)

    # Security
    cors: CORSSettings = Field(default_factory=CORSSettings)

    @field_validator("log_level", mode="before")
    @classmethod
    def uppercase_log_level(cls, v: str | LogLevel) -> LogLevel:
        """Ensure log level is uppercase."""
        if isinstance(v, str):
            return LogLevel(v.upper())
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == Environment.PRODUCTION

    @property
    def is_testing(self) -> bool:
        """Check if running in test mode."""
        return self.environment == Environment.TESTING


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Application settings singleton.
    """
    return Settings()
