from typing import Any, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "n8n Execution Hooks"
    PROJECT_DESCRIPTION: str = "Lifecycle hooks that persist n8n execution summaries"
    VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"

    # Database settings, same variable names the n8n host uses for its own store
    DB_POSTGRESDB_HOST: str = "localhost"
    DB_POSTGRESDB_PORT: int = 5432
    DB_POSTGRESDB_DATABASE: str = "n8n"
    DB_POSTGRESDB_USER: str = "n8n"
    DB_POSTGRESDB_PASSWORD: str = ""
    DATABASE_URI: Optional[str] = None

    # Connection pool
    DB_POOL_SIZE: int = 5
    DB_POOL_TIMEOUT: float = 5.0  # seconds to wait for a free connection
    DB_POOL_RECYCLE: int = 30  # seconds before an idle connection is replaced

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None

    @field_validator("DATABASE_URI", mode="before")
    def assemble_db_connection(cls, v: Optional[str], info) -> Any:
        if isinstance(v, str) and v:
            return v

        user = info.data.get("DB_POSTGRESDB_USER")
        password = info.data.get("DB_POSTGRESDB_PASSWORD") or ""
        host = info.data.get("DB_POSTGRESDB_HOST")
        port = info.data.get("DB_POSTGRESDB_PORT", 5432)
        database = info.data.get("DB_POSTGRESDB_DATABASE") or ""
        credentials = f"{user}:{password}" if password else f"{user}"
        return f"postgresql+asyncpg://{credentials}@{host}:{port}/{database}"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        validate_default=True,
    )


settings = Settings()
