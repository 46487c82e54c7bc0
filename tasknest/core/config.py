"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Required fields (e.g. SECRET_KEY, backend credentials)
are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DATABASE_BACKENDS = ("memory", "firestore", "postgres")


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults except those validated in
    validate_required_and_backend (secret_key, and backend credentials
    when the backend needs them).
    """

    # App
    app_name: str = "tasknest"
    app_version: str = "1.0.0"
    debug: bool = False

    # Task store: "memory" (process-local), "firestore" (REST) or "postgres" (SQLAlchemy)
    database_backend: str = "memory"
    database_url: str = ""
    database_echo: bool = False
    db_pool_size: int | None = None
    db_max_overflow: int | None = None

    # Firebase / Firestore: use key (env) or path (file).
    firebase_service_account_key: SecretStr | None = None
    firebase_service_account_path: str | None = None
    firestore_tasks_collection: str = "tasks"
    firestore_timeout_seconds: float = 30.0

    # Identity (bearer JWT issued by the identity provider; sub = owner id)
    secret_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 480  # 8 hours

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Request / middleware
    request_id_header: str = "X-Request-ID"
    rate_limit_enabled: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required_and_backend(self) -> "Settings":
        """Validate required env and task store backend.

        - Postgres: DATABASE_URL required.
        - Firestore: FIREBASE_SERVICE_ACCOUNT_KEY or FIREBASE_SERVICE_ACCOUNT_PATH required.
        - Memory: nothing required (data lives for the process lifetime).
        """
        backend = self.database_backend.lower()
        if backend not in DATABASE_BACKENDS:
            raise ValueError(
                f"database_backend must be one of {', '.join(DATABASE_BACKENDS)}, "
                f"got: {self.database_backend!r}"
            )
        self.database_backend = backend
        if backend == "postgres" and not self.database_url:
            raise ValueError(
                "DATABASE_URL is required when database_backend is 'postgres'. "
                "Set in environment or .env file."
            )
        if backend == "firestore":
            has_key = (
                self.firebase_service_account_key
                and self.firebase_service_account_key.get_secret_value()
            )
            if not has_key and not self.firebase_service_account_path:
                raise ValueError(
                    "When database_backend is 'firestore', set FIREBASE_SERVICE_ACCOUNT_KEY (full JSON string) "
                    "or FIREBASE_SERVICE_ACCOUNT_PATH (path to JSON file)."
                )
        if not self.secret_key.get_secret_value():
            raise ValueError(
                "SECRET_KEY is required. Generate with: openssl rand -hex 32."
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
