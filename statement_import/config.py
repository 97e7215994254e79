"""
Configuration settings for Statement Import.
Centralized configuration management for the application.
"""

import os
from decimal import Decimal
from pathlib import Path


class Config:
    """Application configuration class."""

    # Application Settings
    APP_NAME = "Statement Transaction Import"
    VERSION = "1.0.0"

    # Input Settings
    MAX_FILE_SIZE_MB: int = int(os.getenv("MAX_FILE_SIZE_MB", "10"))
    MAX_FILE_SIZE_BYTES: int = MAX_FILE_SIZE_MB * 1024 * 1024
    ALLOWED_FILE_TYPES: list[str] = [".pdf", ".txt"]

    # Output Settings
    OUTPUT_DIR: Path = Path(os.getenv("OUTPUT_DIR", "./output"))
    LOG_DIR: Path = Path(os.getenv("LOG_DIR", "./logs"))

    # Validation Settings
    STRICT_MODE: bool = os.getenv("STRICT_MODE", "false").lower() == "true"

    # Scanner Settings
    # Lines searched above a compact detail row for its anchoring date
    DATE_LOOKBACK_LINES: int = int(os.getenv("DATE_LOOKBACK_LINES", "10"))
    # Lines searched below a date/time pair for the transaction detail
    DETAIL_LOOKAHEAD_LINES: int = int(os.getenv("DETAIL_LOOKAHEAD_LINES", "6"))
    # Shorter lines are never tried against the legacy single-line formats
    MIN_LINE_LENGTH: int = int(os.getenv("MIN_LINE_LENGTH", "10"))

    # Classification Settings
    INCOME_AMOUNT_THRESHOLD: Decimal = Decimal(os.getenv("INCOME_AMOUNT_THRESHOLD", "5000"))

    # Logging Settings
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def ensure_directories(cls):
        """Ensure required directories exist."""
        cls.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
        cls.LOG_DIR.mkdir(parents=True, exist_ok=True)

    @classmethod
    def get_output_path(cls, filename: str) -> Path:
        """Get full path for output file."""
        cls.ensure_directories()
        return cls.OUTPUT_DIR / filename

    @classmethod
    def get_log_path(cls, filename: str) -> Path:
        """Get full path for log file."""
        cls.ensure_directories()
        return cls.LOG_DIR / filename

    @classmethod
    def validate_file(cls, filename: str, file_size: int) -> tuple[bool, str | None]:
        """
        Validate a statement file before loading.

        Returns:
            tuple: (is_valid, error_message)
        """
        if not any(filename.lower().endswith(ext) for ext in cls.ALLOWED_FILE_TYPES):
            return False, f"Invalid file type. Allowed types: {', '.join(cls.ALLOWED_FILE_TYPES)}"

        if file_size > cls.MAX_FILE_SIZE_BYTES:
            size_mb = file_size / (1024 * 1024)
            return False, f"File too large ({size_mb:.2f} MB). Maximum: {cls.MAX_FILE_SIZE_MB} MB"

        if file_size == 0:
            return False, "File is empty"

        return True, None

    @classmethod
    def to_dict(cls) -> dict:
        """Convert configuration to dictionary."""
        return {
            "app_name": cls.APP_NAME,
            "version": cls.VERSION,
            "max_file_size_mb": cls.MAX_FILE_SIZE_MB,
            "output_dir": str(cls.OUTPUT_DIR),
            "log_dir": str(cls.LOG_DIR),
            "strict_mode": cls.STRICT_MODE,
            "date_lookback_lines": cls.DATE_LOOKBACK_LINES,
            "detail_lookahead_lines": cls.DETAIL_LOOKAHEAD_LINES,
            "min_line_length": cls.MIN_LINE_LENGTH,
            "income_amount_threshold": str(cls.INCOME_AMOUNT_THRESHOLD),
            "log_level": cls.LOG_LEVEL,
        }


# Create a singleton instance
config = Config()
