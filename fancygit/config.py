import logging
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import ValidationError

from fancygit.constants import CONFIG_DIR_NAME


class AppSettings(BaseSettings):
    """
    Process-level options read from FANCYGIT_* environment variables.
    Per-project behaviour lives in the Settings Store, not here.
    """

    log_level: str = "INFO"
    # Empty means the per-user log directory.
    log_file: str | None = None
    config_dir_name: str = CONFIG_DIR_NAME

    model_config = SettingsConfigDict(
        env_prefix="FANCYGIT_", env_file=".env", extra="ignore"
    )


def load_settings() -> AppSettings:
    try:
        return AppSettings()
    except ValidationError as e:
        logging.getLogger(__name__).error(f"Configuration Error: {e}")
        return AppSettings.model_construct()
