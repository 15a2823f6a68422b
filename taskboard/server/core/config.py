"""
Configuration Settings.

This module defines the application configuration using Pydantic's BaseSettings.
It automatically loads all configuration from environment variables and .env file
without explicit dotenv loading.
"""

from typing import Optional

from pydantic import BaseModel, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

# =====================================================================
# Grouped Configuration Models
# =====================================================================


class PostgreSQLConfig(BaseModel):
    """PostgreSQL database configuration."""

    db: str = Field(default="taskboard", alias="POSTGRES_DB", description="PostgreSQL database name")
    user: str = Field(default="taskboard", alias="POSTGRES_USER", description="PostgreSQL database user")
    password: str = Field(default="changeme", alias="POSTGRES_PASSWORD", description="PostgreSQL database password")
    host: str = Field(default="localhost", alias="POSTGRES_HOST", description="PostgreSQL database host address")
    port: int = Field(default=5432, alias="POSTGRES_PORT", description="PostgreSQL database port number")

    model_config = {"populate_by_name": True}

    @property
    def url(self) -> str:
        """Async connection URL assembled from the individual parts."""
        return f"postgresql+asyncpg://{self.user}:{self.password}@{self.host}:{self.port}/{self.db}"


class CORSConfig(BaseModel):
    """CORS configuration."""

    origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS", description="Allowed CORS origins (use * for all)")
    allow_credentials: bool = Field(
        default=True, alias="CORS_ALLOW_CREDENTIALS", description="Allow credentials in CORS requests"
    )
    allow_methods: list[str] = Field(
        default=["*"], alias="CORS_ALLOW_METHODS", description="Allowed HTTP methods (use * for all)"
    )
    allow_headers: list[str] = Field(
        default=["*"], alias="CORS_ALLOW_HEADERS", description="Allowed HTTP headers (use * for all)"
    )

    model_config = {"populate_by_name": True}


class JWTConfig(BaseModel):
    """Bearer token signing configuration."""

    secret: SecretStr = Field(default=SecretStr("change-me"), alias="JWT_SECRET", description="HMAC signing secret")
    algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM", description="JWT signing algorithm")
    expire_seconds: int = Field(
        default=3600, alias="JWT_EXPIRE_SECONDS", description="Token lifetime in seconds from issuance"
    )

    model_config = {"populate_by_name": True}


# =====================================================================
# Main Settings Class
# =====================================================================


class Settings(BaseSettings):
    """
    Application settings model.

    All properties are automatically bound from environment variables and .env file.
    Pydantic's BaseSettings handles dotenv loading automatically via model_config.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
        populate_by_name=True,
    )

    # =====================================================================
    # Taskboard Server Configuration
    # =====================================================================
    server_host: str = Field(
        default="0.0.0.0",
        description="Taskboard server host address to bind to",
        alias="TASKBOARD_SERVER_HOST",
    )
    server_port: int = Field(
        default=3000,
        description="Taskboard server port number",
        alias="TASKBOARD_SERVER_PORT",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        alias="TASKBOARD_LOG_LEVEL",
    )
    log_format: str = Field(
        default="detailed",
        description="Log format (simple, detailed, json)",
        alias="LOG_FORMAT",
    )
    log_file_dir: str = Field(default="logs", description="Directory for the log file", alias="LOG_FILE_DIR")
    enable_file_logging: bool = Field(
        default=False,
        description="Also write logs to <LOG_FILE_DIR>/taskboard.log",
        alias="ENABLE_FILE_LOGGING",
    )

    # =====================================================================
    # Database Configuration
    # =====================================================================
    database_url: Optional[str] = Field(
        default=None,
        description="Database connection URL; assembled from the POSTGRES_* variables when unset",
        alias="DATABASE_URL",
    )
    init_db_on_startup: bool = Field(
        default=False,
        description="Create missing tables when the server starts",
        alias="TASKBOARD_INIT_DB_ON_STARTUP",
    )

    # PostgreSQL parts (grouped in the ``postgres`` property)
    postgres_db: str = Field(default="taskboard", alias="POSTGRES_DB")
    postgres_user: str = Field(default="taskboard", alias="POSTGRES_USER")
    postgres_password: str = Field(default="changeme", alias="POSTGRES_PASSWORD")
    postgres_host: str = Field(default="localhost", alias="POSTGRES_HOST")
    postgres_port: int = Field(default=5432, alias="POSTGRES_PORT")

    # =====================================================================
    # Authentication Configuration
    # =====================================================================
    jwt_secret: SecretStr = Field(default=SecretStr("change-me"), alias="JWT_SECRET")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    jwt_expire_seconds: int = Field(default=3600, alias="JWT_EXPIRE_SECONDS")
    bcrypt_rounds: int = Field(
        default=10,
        ge=4,
        le=31,
        description="bcrypt cost factor for password hashing",
        alias="BCRYPT_ROUNDS",
    )

    # =====================================================================
    # CORS Configuration
    # =====================================================================
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(default=["*"], alias="CORS_ALLOW_METHODS")
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    # =====================================================================
    # Computed Properties (Grouped Configurations)
    # =====================================================================

    @property
    def postgres(self) -> PostgreSQLConfig:
        """Get PostgreSQL configuration from environment variables."""
        return PostgreSQLConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def cors(self) -> CORSConfig:
        """Get CORS configuration from environment variables."""
        return CORSConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def jwt(self) -> JWTConfig:
        """Get bearer token configuration from environment variables."""
        return JWTConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def resolved_database_url(self) -> str:
        """``DATABASE_URL`` when set, otherwise the URL built from the POSTGRES_* parts."""
        return self.database_url or self.postgres.url


settings = Settings()
