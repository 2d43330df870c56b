# app/core/config.py

from typing import Literal

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # -------------------------------------------------
    # Project
    # -------------------------------------------------
    APP_NAME: str = "Zone MFA Providers"
    DEBUG: bool = False
    ENVIRONMENT: str = "local"

    # -------------------------------------------------
    # Storage
    # -------------------------------------------------
    # "postgres" for real deployments, "memory" for local runs / tests
    STORAGE_BACKEND: Literal["postgres", "memory"] = "postgres"

    DATABASE_HOST: str = "localhost"
    DATABASE_PORT: int = 5432
    DATABASE_USER: str = "postgres"
    DATABASE_PASSWORD: str = "postgres"
    DATABASE_NAME: str = "mfa_providers"

    DATABASE_POOL_MIN_SIZE: int = 2
    DATABASE_POOL_SIZE: int = 10

    # -------------------------------------------------
    # JWT / Auth
    # -------------------------------------------------
    JWT_SECRET_KEY: str = "CHANGE_ME_SUPER_SECRET"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 15

    # -------------------------------------------------
    # Identity zones
    # -------------------------------------------------
    # The zone whose uaa.admin scope may administer every other zone
    PLATFORM_ZONE_ID: str = "uaa"
    PLATFORM_ZONE_SUBDOMAIN: str = ""
    PLATFORM_ZONE_NAME: str = "uaa"

    # What happens when a zone's active MFA provider is deleted:
    #   block -> ConflictError, record kept
    #   allow -> deleted, zone keeps a dangling provider name
    MFA_ACTIVE_PROVIDER_DELETE_POLICY: Literal["block", "allow"] = "block"

    # -------------------------------------------------
    # Pydantic Settings
    # -------------------------------------------------
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",        # ignore unknown env vars
        case_sensitive=False,
    )

    # -------------------------------------------------
    # Computed / convenience properties
    # -------------------------------------------------
    @computed_field
    @property
    def DATABASE_URL(self) -> str:  # type: ignore[override]
        """
        Convenience DSN string for libraries that want a URL.
        """
        return (
            f"postgresql://{self.DATABASE_USER}:{self.DATABASE_PASSWORD}"
            f"@{self.DATABASE_HOST}:{self.DATABASE_PORT}/{self.DATABASE_NAME}"
        )


settings = Settings()
