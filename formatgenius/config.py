"""
Configuration module for FormatGenius.

Centralizes all configuration settings, environment variables, and defaults.
Settings can be overridden via environment variables or .env file.

Usage:
    from formatgenius.config import config

    port = config.SERVER_PORT
    max_bytes = config.max_upload_bytes
"""

import os
from pathlib import Path
from dataclasses import dataclass, field

# Try to load .env file if python-dotenv is available
try:
    from dotenv import load_dotenv
    # Load from project root .env file
    env_path = Path(__file__).parent.parent / '.env'
    if env_path.exists():
        load_dotenv(env_path)
except ImportError:
    pass  # python-dotenv not installed, use environment variables directly


def _get_env(key: str, default: str = "") -> str:
    """Get environment variable with default."""
    return os.environ.get(key, default)


def _get_env_bool(key: str, default: bool = False) -> bool:
    """Get boolean environment variable."""
    val = os.environ.get(key, "").lower()
    if val in ("true", "1", "yes", "on"):
        return True
    if val in ("false", "0", "no", "off"):
        return False
    return default


def _get_env_int(key: str, default: int = 0) -> int:
    """Get integer environment variable."""
    val = os.environ.get(key, "")
    try:
        return int(val) if val else default
    except ValueError:
        return default


def _get_env_float(key: str, default: float = 0.0) -> float:
    """Get float environment variable."""
    val = os.environ.get(key, "")
    try:
        return float(val) if val else default
    except ValueError:
        return default


@dataclass
class Config:
    """
    FormatGenius configuration settings.

    All settings can be overridden via environment variables.
    """

    # ==========================================================================
    # HTTP Server Settings
    # ==========================================================================

    SERVER_HOST: str = field(default_factory=lambda: _get_env(
        "SERVER_HOST", "127.0.0.1"
    ))

    SERVER_PORT: int = field(default_factory=lambda: _get_env_int(
        "SERVER_PORT", 3001
    ))

    # Uploads larger than this are rejected with 413
    MAX_UPLOAD_MB: int = field(default_factory=lambda: _get_env_int(
        "MAX_UPLOAD_MB", 10
    ))

    # Temporary location for uploaded documents (deleted after processing)
    UPLOAD_DIR: str = field(default_factory=lambda: _get_env(
        "UPLOAD_DIR", "uploads"
    ))

    # Static frontend files
    PUBLIC_DIR: str = field(default_factory=lambda: _get_env(
        "PUBLIC_DIR", "public"
    ))

    # ==========================================================================
    # Document Formatting Settings
    # ==========================================================================

    # Label shown in the output title line only
    DEFAULT_STYLE: str = field(default_factory=lambda: _get_env(
        "DEFAULT_STYLE", "harvard"
    ))

    DOCUMENT_FONT: str = field(default_factory=lambda: _get_env(
        "DOCUMENT_FONT", "Times New Roman"
    ))

    # Point sizes
    BODY_FONT_SIZE: int = field(default_factory=lambda: _get_env_int(
        "BODY_FONT_SIZE", 12
    ))

    TITLE_FONT_SIZE: int = field(default_factory=lambda: _get_env_int(
        "TITLE_FONT_SIZE", 14
    ))

    # 1.0 = single, 2.0 = double
    LINE_SPACING: float = field(default_factory=lambda: _get_env_float(
        "LINE_SPACING", 2.0
    ))

    MARGIN_INCHES: float = field(default_factory=lambda: _get_env_float(
        "MARGIN_INCHES", 1.0
    ))

    # ==========================================================================
    # Logging Settings
    # ==========================================================================

    # Log level: DEBUG, INFO, WARNING, ERROR
    LOG_LEVEL: str = field(default_factory=lambda: _get_env(
        "LOG_LEVEL", "INFO"
    ))

    # Enable verbose logging
    VERBOSE: bool = field(default_factory=lambda: _get_env_bool(
        "VERBOSE", False
    ))

    # Enable file logging
    ENABLE_FILE_LOGGING: bool = field(default_factory=lambda: _get_env_bool(
        "ENABLE_FILE_LOGGING", True
    ))

    # Log file rotation size (MB)
    LOG_ROTATION_SIZE_MB: int = field(default_factory=lambda: _get_env_int(
        "LOG_ROTATION_SIZE_MB", 10
    ))

    # Number of log files to retain
    LOG_RETENTION_COUNT: int = field(default_factory=lambda: _get_env_int(
        "LOG_RETENTION_COUNT", 5
    ))

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        valid_levels = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}
        if self.LOG_LEVEL.upper() not in valid_levels:
            self.LOG_LEVEL = 'INFO'

        # Ensure positive values
        if not 0 < self.SERVER_PORT < 65536:
            self.SERVER_PORT = 3001
        if self.MAX_UPLOAD_MB < 1:
            self.MAX_UPLOAD_MB = 10
        if self.BODY_FONT_SIZE < 1:
            self.BODY_FONT_SIZE = 12
        if self.TITLE_FONT_SIZE < 1:
            self.TITLE_FONT_SIZE = 14
        if self.LINE_SPACING <= 0:
            self.LINE_SPACING = 2.0
        if self.MARGIN_INCHES < 0:
            self.MARGIN_INCHES = 1.0
        if not self.DEFAULT_STYLE.strip():
            self.DEFAULT_STYLE = 'harvard'

    @property
    def max_upload_bytes(self) -> int:
        return self.MAX_UPLOAD_MB * 1024 * 1024

    def to_dict(self) -> dict:
        """Convert config to dictionary for logging/debugging."""
        return {
            'SERVER_HOST': self.SERVER_HOST,
            'SERVER_PORT': self.SERVER_PORT,
            'MAX_UPLOAD_MB': self.MAX_UPLOAD_MB,
            'DEFAULT_STYLE': self.DEFAULT_STYLE,
            'DOCUMENT_FONT': self.DOCUMENT_FONT,
            'LOG_LEVEL': self.LOG_LEVEL,
        }


# Global config instance
config = Config()


# ==========================================================================
# Version Information
# ==========================================================================

VERSION = "1.0.0"


__all__ = ['config', 'Config', 'VERSION']
