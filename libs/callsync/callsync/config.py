"""Configuration management using pydantic-settings."""

from pathlib import Path
from typing import Any

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from callsync.error_codes import ErrorCode
from callsync.exceptions import ConfigurationError
from callsync.models.qa import NoteCategory

_ENV_FILES = (".env", "../.env", "../../.env")

_REPO_ROOT = Path(__file__).resolve().parents[3]


def _resolve_repo_path(value: str) -> str:
    raw = str(value or "").strip()
    if not raw:
        return raw
    p = Path(raw)
    if p.is_absolute():
        return str(p)
    return str((_REPO_ROOT / p).resolve())


class PlaybackConfig(BaseSettings):
    """Audio player controls shared by every call view."""

    model_config = SettingsConfigDict(
        env_prefix="PLAYBACK_",
        env_file=_ENV_FILES,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    seek_step_s: float = Field(default=5.0, gt=0, description="Arrow-key skip distance.")
    volume_step: float = Field(default=0.1, gt=0, le=1)
    initial_volume: float = Field(default=1.0, ge=0, le=1)
    playback_rates: list[float] = Field(default_factory=lambda: [0.5, 0.75, 1.0, 1.25, 1.5, 2.0])
    default_playback_rate: float = 1.0

    @model_validator(mode="after")
    def _validate_rates(self) -> "PlaybackConfig":
        if not self.playback_rates:
            raise ConfigurationError("PLAYBACK_PLAYBACK_RATES must not be empty")
        if any(float(r) <= 0 for r in self.playback_rates):
            raise ConfigurationError("PLAYBACK_PLAYBACK_RATES must be positive")
        if float(self.default_playback_rate) not in {float(r) for r in self.playback_rates}:
            raise ConfigurationError(
                "PLAYBACK_DEFAULT_PLAYBACK_RATE must be one of PLAYBACK_PLAYBACK_RATES",
                error_code=ErrorCode.UNSUPPORTED_PLAYBACK_RATE,
            )
        return self


class QAConfig(BaseSettings):
    """QA review scoring configuration."""

    model_config = SettingsConfigDict(
        env_prefix="QA_",
        env_file=_ENV_FILES,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    min_score: int = Field(default=1, ge=0)
    max_score: int = Field(default=10, ge=1)
    default_note_category: str = "general"

    @model_validator(mode="after")
    def _validate_range(self) -> "QAConfig":
        if int(self.min_score) > int(self.max_score):
            raise ConfigurationError("QA_MIN_SCORE must be <= QA_MAX_SCORE")
        try:
            NoteCategory.parse(self.default_note_category)
        except ValueError as exc:
            raise ConfigurationError(
                f"QA_DEFAULT_NOTE_CATEGORY is not a note category: {self.default_note_category!r}",
                error_code=ErrorCode.UNKNOWN_NOTE_CATEGORY,
            ) from exc
        return self


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=_ENV_FILES,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"
    console: bool = True
    file: str | None = None
    max_bytes: int = Field(default=10 * 1024 * 1024, ge=0)
    backup_count: int = Field(default=5, ge=0)
    logger_name: str = "callsync"
    propagate: bool = False
    file_level: str | None = None


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=_ENV_FILES, env_file_encoding="utf-8", extra="ignore"
    )

    log_dir: str = "./logs"

    playback: PlaybackConfig = PlaybackConfig()
    qa: QAConfig = QAConfig()

    # Logging
    logging: LoggingSettings = LoggingSettings()

    @model_validator(mode="after")
    def _resolve_paths(self) -> "Settings":
        self.log_dir = _resolve_repo_path(self.log_dir)
        return self

    def model_post_init(self, __context: Any) -> None:
        # Only create the log directory when a file handler will need it.
        if self.logging.file and not Path(str(self.logging.file)).is_absolute():
            Path(self.log_dir).mkdir(parents=True, exist_ok=True)
