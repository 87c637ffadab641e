"""Application-wide settings and configuration."""

import os
from pathlib import Path
from typing import Optional


class Settings:
    """Centralized application settings."""

    # Project paths
    PROJECT_ROOT = Path(__file__).parent.parent.parent.parent
    DATA_DIR = PROJECT_ROOT / "data"
    LOGS_DIR = PROJECT_ROOT / "logs"

    # Default database settings
    DEFAULT_DB_PATH = DATA_DIR / "lightbnb.duckdb"
    DB_PATH_ENV_VAR = "LIGHTBNB_DB_PATH"

    # Query settings
    DEFAULT_RESULT_LIMIT = 10
    QUERY_LOG_PREVIEW_CHARS = 200

    # Logging settings
    LOG_FILE_MAX_BYTES = 10 * 1024 * 1024  # 10 MB
    LOG_FILE_BACKUP_COUNT = 5

    # Performance settings
    CONNECTION_POOL_SIZE = 8

    # Legacy behaviour: reservation listing is pinned to guest 1 unless enabled
    RESERVATIONS_FILTER_BY_GUEST = False

    @classmethod
    def ensure_directories(cls) -> None:
        """Ensure all required directories exist."""
        cls.DATA_DIR.mkdir(parents=True, exist_ok=True)
        cls.LOGS_DIR.mkdir(parents=True, exist_ok=True)

    @classmethod
    def get_db_path(cls, custom_path: Optional[Path] = None) -> Path:
        """Get the database path, with optional override."""
        if custom_path:
            return custom_path
        env_path = os.environ.get(cls.DB_PATH_ENV_VAR)
        if env_path:
            return Path(env_path)
        return cls.DEFAULT_DB_PATH
