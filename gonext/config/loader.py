"""
Configuration loader utility for environment-specific settings.
"""

import logging
import os
from pathlib import Path
from typing import Optional
from .settings import Settings, Environment, DatabaseSettings, PhotoSettings

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Utility class for loading environment-specific configurations"""

    @staticmethod
    def load_environment_config(environment: Optional[str] = None) -> Settings:
        """
        Load configuration for the specified environment.

        Args:
            environment: Target environment (development, staging, production, testing)
                        If None, uses ENVIRONMENT env var or defaults to development

        Returns:
            Settings instance with environment-specific configuration
        """
        if environment is None:
            environment = os.getenv("ENVIRONMENT", "development")

        env = Environment(environment.lower())
        env_file_path = Path(f".env.{env.value}")

        if env_file_path.exists():
            # nested settings read their prefixed keys from the same file
            return Settings(
                _env_file=str(env_file_path),
                environment=env,
                database=DatabaseSettings(_env_file=str(env_file_path)),
                photos=PhotoSettings(_env_file=str(env_file_path)),
            )

        logger.warning(
            "Environment file %s not found, using default settings", env_file_path
        )
        return Settings(environment=env)

    @staticmethod
    def get_available_environments(directory: str = ".") -> list[str]:
        """Get list of available environment configurations"""
        env_files = []
        for env_file in Path(directory).glob(".env.*"):
            env_name = env_file.name.replace(".env.", "", 1)
            if env_name.endswith(".sample"):
                continue
            env_files.append(env_name)
        return sorted(env_files)

    @staticmethod
    def create_sample_env_file(environment: str, output_path: Optional[str] = None) -> str:
        """
        Create a sample .env file for the specified environment.

        Args:
            environment: Target environment
            output_path: Optional custom output path

        Returns:
            Path to the created sample file
        """
        env = Environment(environment.lower())

        if output_path is None:
            output_path = f".env.{env.value}.sample"

        defaults = Settings()

        sample_content = f"""# Sample configuration for {env.value} environment
# Copy this file to .env.{env.value} and modify as needed

# Application Configuration
APP_NAME={defaults.app_name}
APP_VERSION={defaults.app_version}
ENVIRONMENT={env.value}
DEBUG={'true' if env == Environment.DEVELOPMENT else 'false'}

# Logging Configuration
LOG_LEVEL={defaults.log_level.value}
LOG_FORMAT={defaults.log_format}

# Database Configuration
DATABASE_NAME={defaults.database.name}
DATABASE_DIRECTORY={defaults.database.directory}
DATABASE_BACKEND={defaults.database.backend.value}

# Photo Storage Configuration
PHOTOS_BACKEND={defaults.photos.backend.value}
PHOTOS_DIRECTORY={defaults.photos.directory}
"""

        with open(output_path, "w") as f:
            f.write(sample_content)

        return output_path


def load_config_for_environment(environment: Optional[str] = None) -> Settings:
    """Convenience function to load configuration for an environment"""
    return ConfigLoader.load_environment_config(environment)
