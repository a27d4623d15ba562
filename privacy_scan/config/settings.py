import tempfile
from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_scratch_root() -> Path:
    return Path(tempfile.gettempdir()) / "privacy-scan"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    phone_weight: int = Field(default=4, ge=0)
    email_weight: int = Field(default=4, ge=0)
    address_weight: int = Field(default=3, ge=0)
    max_score: int = Field(default=10, ge=1)

    risk_low_threshold: int = 1
    risk_medium_threshold: int = 3
    risk_high_threshold: int = 5

    snippet_length: int = Field(default=100, ge=100, le=120)

    max_archive_depth: int = Field(default=5, ge=1)
    max_walk_depth: int = Field(default=32, ge=1)
    max_extracted_bytes: int = Field(default=512 * 1024 * 1024, ge=1)
    scratch_root: Path = Field(default_factory=_default_scratch_root)

    detect_workers: int = Field(default=1, ge=1)
    csv_text_columns: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_thresholds(self) -> "Settings":
        if not 0 < self.risk_low_threshold <= self.risk_medium_threshold <= self.risk_high_threshold:
            raise ValueError(
                "risk thresholds must satisfy 0 < low <= medium <= high, got "
                f"{self.risk_low_threshold}/{self.risk_medium_threshold}/{self.risk_high_threshold}"
            )
        return self
