# File: app/core/config.py

from functools import lru_cache
from typing import Annotated, List, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    # Basic app info
    PROJECT_NAME: str = "3-Tier Architecture Test Application"
    VERSION: str = "1.0.0"

    environment: str = "dev"
    development_mode: bool = False
    log_level: str = "INFO"

    # HTTP server
    app_host: str = "0.0.0.0"
    app_port: int = Field(default=8080, validation_alias=AliasChoices("APP_PORT", "PORT"))

    # CORS
    cors_origins: Annotated[List[str], NoDecode] = ["*"]

    # Served at /static when the directory exists
    static_dir: str = "public"

    # Database. database_url wins over the individual parts when set.
    database_url: Optional[str] = None
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "appdb"
    db_user: str = "appuser"
    db_password: str = "password"
    # Cloud SQL instance connection name, e.g. "project:region:instance"
    db_connection: Optional[str] = None

    @field_validator("cors_origins", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v):
        if isinstance(v, str):
            return [i.strip() for i in v.split(",") if i.strip()]
        if isinstance(v, list):
            return v
        return []

    @property
    def sqlalchemy_database_url(self) -> str | URL:
        if self.database_url:
            return self.database_url

        if self.db_connection:
            # psycopg treats a host starting with "/" as a unix socket directory
            return URL.create(
                "postgresql+psycopg",
                username=self.db_user,
                password=self.db_password,
                database=self.db_name,
                port=self.db_port,
                query={"host": f"/cloudsql/{self.db_connection}"},
            )

        return URL.create(
            "postgresql+psycopg",
            username=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
