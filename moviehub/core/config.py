# Settings management (reads env vars/secrets)
# moviehub/core/config.py

import json
import logging
from functools import lru_cache
from typing import Annotated, List, Optional, Union
from urllib.parse import quote_plus

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

logger = logging.getLogger(__name__)

ATLAS_URI_TEMPLATE = (
    "mongodb+srv://{user}:{password}@{host}/"
    "?retryWrites=true&w=majority&appName=Cluster0"
)


class Settings(BaseSettings):
    """
    Application configuration settings loaded from environment variables or .env file.
    """
    # --- Project Info ---
    PROJECT_NAME: str = Field("MovieHub API", validation_alias="PROJECT_NAME")
    VERSION: str = Field("1.0.0", validation_alias="APP_VERSION")

    # --- Server ---
    HOST: str = Field("0.0.0.0", validation_alias="HOST")
    PORT: int = Field(5000, validation_alias="PORT")

    # --- Logging ---
    LOG_LEVEL: str = Field("INFO", validation_alias="LOG_LEVEL")

    # --- Database (MongoDB) ---
    # Credentials are composed into the Atlas SRV URI unless MONGODB_URI overrides it
    DB_USER: Optional[SecretStr] = Field(None, validation_alias="DB_USER")
    DB_PASS: Optional[SecretStr] = Field(None, validation_alias="DB_PASS")
    MONGODB_HOST: str = Field("cluster0.ju1bs.mongodb.net", validation_alias="MONGODB_HOST")
    MONGODB_URI: Optional[SecretStr] = Field(None, validation_alias="MONGODB_URI")
    MONGODB_DB_NAME: str = Field("movieDB", validation_alias="MONGODB_DB_NAME")
    MOVIE_COLLECTION: str = Field("movie", validation_alias="MOVIE_COLLECTION")
    FAVORITES_COLLECTION: str = Field("favorites", validation_alias="FAVORITES_COLLECTION")
    MONGODB_TIMEOUT_MS: int = Field(
        default=5000,
        validation_alias="MONGODB_TIMEOUT_MS",
        description="Server selection timeout for the MongoDB client in milliseconds",
    )

    # --- CORS ---
    # Expects a comma-separated string in env var like "http://localhost:3000,https://example.com"
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = Field(
        default=["*"],
        validation_alias="BACKEND_CORS_ORIGINS"
    )

    @field_validator("BACKEND_CORS_ORIGINS", mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> Union[List[str], str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, str):
            return json.loads(v)
        elif isinstance(v, list):
            return v
        raise ValueError(f"Invalid BACKEND_CORS_ORIGINS format: {v}")

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    @property
    def mongodb_uri(self) -> str:
        """
        Connection string for the MongoDB client.

        An explicit MONGODB_URI wins; otherwise the DB_USER/DB_PASS pair is
        URL-escaped into the Atlas SRV template.

        Raises:
            ValueError: If neither MONGODB_URI nor both credentials are set.
        """
        if self.MONGODB_URI is not None:
            return self.MONGODB_URI.get_secret_value()
        if self.DB_USER is None or self.DB_PASS is None:
            raise ValueError("MongoDB credentials missing: set DB_USER and DB_PASS, or MONGODB_URI")
        return ATLAS_URI_TEMPLATE.format(
            user=quote_plus(self.DB_USER.get_secret_value()),
            password=quote_plus(self.DB_PASS.get_secret_value()),
            host=self.MONGODB_HOST,
        )

    model_config = SettingsConfigDict(
        # Load .env file if it exists (useful for local development)
        env_file=".env",
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore'
    )


@lru_cache()
def get_settings() -> Settings:
    """Returns the application settings instance."""
    logger.info("Attempting to load application settings...")
    try:
        settings_instance = Settings()
        # Log some non-sensitive settings for verification
        logger.info(f"Settings loaded successfully for Project: {settings_instance.PROJECT_NAME}")
        logger.info(f"Log Level: {settings_instance.LOG_LEVEL}")
        logger.info(f"Database: {settings_instance.MONGODB_DB_NAME}")
        logger.info(f"CORS Origins: {settings_instance.BACKEND_CORS_ORIGINS}")
        # DO NOT log SecretStr values
        logger.debug(f"MongoDB credentials loaded: {settings_instance.DB_USER is not None}")
        return settings_instance
    except Exception as e:
        logger.critical(f"CRITICAL ERROR: Failed to load application settings: {e}", exc_info=True)
        raise RuntimeError(f"Could not load settings: {e}")
