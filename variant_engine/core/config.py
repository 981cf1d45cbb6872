"""Engine configuration with strict environment validation."""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_ENV_FILE = Path(__file__).resolve().parents[2] / ".env"


class Settings(BaseSettings):
    """Settings loaded from environment variables or .env file."""

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE if _ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    LOG_LEVEL: str = "INFO"

    # --- SKU ---
    SKU_SEGMENT_LENGTH: int = 3
    SKU_SEPARATOR: str = "-"

    # --- Barcode ---
    BARCODE_PREFIX: str = "123456789"
    BARCODE_SUFFIX_LENGTH: int = 6
    BARCODE_MAX_ATTEMPTS: int = 50

    # --- Filtros y estadisticas ---
    FILTER_ALL_SENTINEL: str = "all"
    LOW_STOCK_THRESHOLD: int = Field(10, ge=0)

    @field_validator("BARCODE_PREFIX")
    @classmethod
    def validate_barcode_prefix(cls, value: str) -> str:
        if value and not value.isdigit():
            raise ValueError("BARCODE_PREFIX must contain digits only.")
        return value

    @field_validator("SKU_SEGMENT_LENGTH", "BARCODE_SUFFIX_LENGTH", "BARCODE_MAX_ATTEMPTS")
    @classmethod
    def validate_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be positive.")
        return value


settings = Settings()
