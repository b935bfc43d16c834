from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENV_CONFIG = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


class AppSettings(BaseSettings):
    """General application settings."""

    model_config = _ENV_CONFIG

    name: str = Field("Governance Proposal Builder", validation_alias="APP_NAME")
    debug: bool = Field(False, validation_alias="DEBUG")
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")
    log_file: Optional[str] = Field(None, validation_alias="LOG_FILE")

    @property
    def effective_log_level(self) -> str:
        """DEBUG=true forces debug logging regardless of LOG_LEVEL."""
        return "DEBUG" if self.debug else self.log_level


class LedgerSettings(BaseSettings):
    """Settings for the local proposal ledger snapshot."""

    model_config = _ENV_CONFIG

    state_file: str = Field(
        default="proposals.json",
        validation_alias="LEDGER_STATE_FILE",
        description="Path of the JSON snapshot the CLI loads and saves",
    )


class SubmissionSettings(BaseSettings):
    """Retry policy applied around the transaction-broadcasting collaborator."""

    model_config = _ENV_CONFIG

    max_retries: int = Field(default=3, ge=0, validation_alias="SUBMISSION_MAX_RETRIES")
    initial_delay: float = Field(default=1.0, ge=0, validation_alias="SUBMISSION_INITIAL_DELAY")
    backoff_factor: float = Field(default=2.0, ge=1, validation_alias="SUBMISSION_BACKOFF_FACTOR")


class Settings(BaseSettings):
    """
    Main Settings class that composes all sub-settings.
    Each sub-settings class reads its own flat env vars.
    """

    app: AppSettings = Field(default_factory=AppSettings)
    ledger: LedgerSettings = Field(default_factory=LedgerSettings)
    submission: SubmissionSettings = Field(default_factory=SubmissionSettings)

    # Config to load from .env file
    model_config = _ENV_CONFIG


# Singleton instance
settings = Settings()
