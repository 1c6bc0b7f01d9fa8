"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ────────────────────────────────────────────────
#
# Settings are read from TWO sources (in priority order):
#
#   1. **Environment variables** — e.g., CATALOG_DIR=/var/lib/songpicker
#   2. **.env file** — key=value lines in the project root .env file
#
# Field name `catalog_dir` maps to env var `CATALOG_DIR`.  Defaults below
# apply when neither source sets a value.
# ──────────────────────────────────────────────────────────────────────
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """SongPicker application settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # === Catalog storage ===
    # "json" keeps songs.json / artists.json under catalog_dir;
    # "memory" is process-local and is lost on restart.
    catalog_backend: str = "json"
    catalog_dir: str = "db"

    # === Selection ===
    default_algorithm: str = "random"

    # === HTTP ===
    cors_origins: list[str] = ["*"]

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    app_env: str = "development"
    log_level: str = "INFO"
