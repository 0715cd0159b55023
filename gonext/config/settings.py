"""
Configuration management system using Pydantic Settings.
Supports environment-based configuration for the local journal store.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from typing import Optional
from enum import Enum
from pathlib import Path


class Environment(str, Enum):
    """Supported deployment environments"""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Supported log levels"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class StorageBackend(str, Enum):
    """Where the relational store lives"""
    SQLITE = "sqlite"
    MEMORY = "memory"


class PhotoBackend(str, Enum):
    """Photo file storage implementations"""
    FILESYSTEM = "filesystem"
    DISABLED = "disabled"


class DatabaseSettings(BaseSettings):
    """Embedded database configuration"""

    name: str = Field(default="gonext.db", description="Database file name")
    version: int = Field(default=1, ge=1, description="Schema version")
    directory: str = Field(default="data")
    backend: StorageBackend = Field(default=StorageBackend.SQLITE)
    echo: bool = Field(default=False)

    @field_validator('backend', mode='before')
    @classmethod
    def normalize_backend(cls, v):
        if isinstance(v, str):
            return StorageBackend(v.lower())
        return v

    def get_path(self) -> Path:
        """Absolute path of the database file"""
        return (Path(self.directory) / self.name).resolve()

    @property
    def url(self) -> str:
        """Generate the SQLAlchemy URL from configuration"""
        if self.backend == StorageBackend.MEMORY:
            return "sqlite+aiosqlite://"
        return f"sqlite+aiosqlite:///{self.get_path()}"

    model_config = {"env_prefix": "DATABASE_", "extra": "ignore"}


class PhotoSettings(BaseSettings):
    """Photo storage configuration"""

    backend: PhotoBackend = Field(default=PhotoBackend.FILESYSTEM)
    directory: str = Field(default="photos", description="Directory for imported photo files")
    file_extension: str = Field(default=".jpg")

    @field_validator('backend', mode='before')
    @classmethod
    def normalize_backend(cls, v):
        if isinstance(v, str):
            return PhotoBackend(v.lower())
        return v

    @field_validator('file_extension')
    @classmethod
    def normalize_extension(cls, v: str) -> str:
        """Ensure the extension carries its leading dot"""
        v = v.strip()
        if v and not v.startswith("."):
            v = f".{v}"
        return v

    def get_directory(self) -> Path:
        """Absolute path of the photo directory"""
        return Path(self.directory).resolve()

    model_config = {"env_prefix": "PHOTOS_", "extra": "ignore"}


class Settings(BaseSettings):
    """Main application settings"""

    # Application Configuration
    app_name: str = Field(default="GoNext")
    app_version: str = Field(default="1.0.0")
    environment: Environment = Field(default=Environment.DEVELOPMENT)
    debug: bool = Field(default=False)

    # Logging Configuration
    log_level: LogLevel = Field(default=LogLevel.INFO)
    log_format: str = Field(default="json", description="json or text")
    log_file: Optional[str] = Field(default=None)

    # Nested Settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    photos: PhotoSettings = Field(default_factory=PhotoSettings)

    @field_validator('environment', mode='before')
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment setting"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    @field_validator('log_format')
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return v

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment == Environment.DEVELOPMENT

    def is_testing(self) -> bool:
        return self.environment == Environment.TESTING

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings instance"""
    return settings


def reload_settings() -> Settings:
    """Reload settings from environment and files"""
    global settings
    settings = Settings()
    return settings
