"""
Centralized configuration management using pydantic-settings.
This module provides a single source of truth for all application configuration.
"""


from dotenv import load_dotenv
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.utils.logger import setup_logger

load_dotenv()


logger = setup_logger("core_config")


class Settings(BaseSettings):
    """
    Application settings managed by pydantic-settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        # Allow override from environment variables
        env_prefix="",
    )

    # ===== Database Configuration =====
    database_url: str = Field(
        default="sqlite+aiosqlite:///./persona_morph.db",
        alias="DATABASE_URL",
        description="Application database URL (sqlite+aiosqlite or postgresql+asyncpg)",
    )

    database_echo: bool = Field(
        default=False,
        alias="DATABASE_ECHO",
        description="Log every SQL statement emitted by the engine",
    )

    # ===== Session Token Configuration =====
    secret_key: str = Field(
        default="default-secret-key",
        alias="SECRET_KEY",
        description="Secret used to sign session tokens",
    )

    token_algorithm: str = Field(
        default="HS256",
        alias="TOKEN_ALGORITHM",
        description="JWT signing algorithm",
    )

    access_token_expire_minutes: int = Field(
        default=7 * 24 * 60,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
        description="Session token validity window in minutes (default 7 days)",
    )

    session_cookie_name: str = Field(
        default="token",
        alias="SESSION_COOKIE_NAME",
        description="Name of the cookie carrying the session token",
    )

    session_cookie_secure: bool = Field(
        default=True,
        alias="SESSION_COOKIE_SECURE",
        description="Only send the session cookie over HTTPS",
    )

    session_cookie_samesite: str = Field(
        default="none",
        alias="SESSION_COOKIE_SAMESITE",
        description="SameSite attribute of the session cookie (lax, strict, none)",
    )

    # ===== Gemini Configuration =====
    gemini_api_key: str | None = Field(
        default=None, alias="GEMINI_API_KEY", description="Google Gemini API key"
    )

    gemini_image_model: str = Field(
        default="gemini-2.5-flash-image",
        alias="GEMINI_IMAGE_MODEL",
        description="Gemini model used for image-to-image style generation",
    )

    # ===== Generation Configuration =====
    generation_concurrency: int = Field(
        default=2,
        ge=1,
        alias="GENERATION_CONCURRENCY",
        description="Number of styles dispatched to the generation service at once",
    )

    default_style: str = Field(
        default="cinematic-hero",
        alias="DEFAULT_STYLE",
        description="Style id stored in the preferences of newly registered users",
    )

    # ===== Server Configuration =====
    server_host: str = Field(
        default="0.0.0.0", alias="SERVER_HOST", description="Server host address"
    )

    server_port: int = Field(
        default=3000, alias="SERVER_PORT", description="Server port number"
    )

    server_workers: int = Field(
        default=1, alias="SERVER_WORKERS", description="Number of uvicorn workers"
    )

    # ===== CORS Configuration =====
    cors_allow_origins: list[str] = Field(
        default_factory=lambda: [
            "http://localhost:5173",  # Vite dev server default port
            "http://localhost:3000",
            "http://127.0.0.1:5173",
        ],
        alias="CORS_ALLOW_ORIGINS",
        description="CORS allowed origins",
    )

    cors_allow_credentials: bool = Field(
        default=True,
        alias="CORS_ALLOW_CREDENTIALS",
        description="Whether to allow credentials in CORS requests",
    )

    cors_allow_methods: list[str] = Field(
        default_factory=lambda: ["*"],
        alias="CORS_ALLOW_METHODS",
        description="CORS allowed methods",
    )

    cors_allow_headers: list[str] = Field(
        default_factory=lambda: ["*"],
        alias="CORS_ALLOW_HEADERS",
        description="CORS allowed headers",
    )

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Validate settings and log warnings for missing critical configurations."""

        if self.secret_key == "default-secret-key":
            logger.warning(
                "SECRET_KEY environment variable not set, using the insecure default."
            )

        if not self.gemini_api_key:
            logger.warning("GEMINI_API_KEY environment variable not set.")

        if self.session_cookie_samesite.lower() == "none" and not self.session_cookie_secure:
            logger.warning(
                "SESSION_COOKIE_SAMESITE=none without SESSION_COOKIE_SECURE; browsers will drop the cookie."
            )

        logger.debug(f"Generation concurrency: {self.generation_concurrency}")

        return self

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


# Global settings instance
settings = Settings()
