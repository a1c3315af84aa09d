"""
Configuration settings for Database Filler.

Uses Pydantic Settings to load environment variables (or a `.env` file) for
the schema file, generation policy, MySQL connection and logging. CLI options
override these values per run.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from dbfiller.domain.models import GenerationPolicy


class Settings(BaseSettings):
    # Schema / generation
    schema_file: Optional[str] = Field(None, alias="SCHEMA_FILE")
    num_rows: int = Field(1, alias="NUM_ROWS")
    random_data: bool = Field(True, alias="RANDOM_DATA")
    low_char: int = Field(33, alias="LOW_CHAR")
    high_char: int = Field(126, alias="HIGH_CHAR")
    random_seed: Optional[int] = Field(None, alias="RANDOM_SEED")
    secure_random: bool = Field(False, alias="SECURE_RANDOM")
    strict_types: bool = Field(False, alias="STRICT_TYPES")

    # Dry run: no database interaction, statements surface as diagnostics
    debug: bool = Field(False, alias="DEBUG")

    # Database
    db_host: str = Field("localhost", alias="DB_HOST")
    db_port: int = Field(3306, alias="DB_PORT")
    db_user: str = Field("root", alias="DB_USER")
    db_password: str = Field("", alias="DB_PASSWORD")
    db_name: str = Field("test", alias="DB_NAME")
    db_encoding: str = Field("utf8mb4", alias="DB_ENCODING")

    # Application
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    json_logs: bool = Field(False, alias="JSON_LOGS")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    def generation_policy(self) -> GenerationPolicy:
        """
        Build the validated generation policy described by these settings.
        """
        return GenerationPolicy(
            row_count=self.num_rows,
            randomized=self.random_data,
            char_code_low=self.low_char,
            char_code_high=self.high_char,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
