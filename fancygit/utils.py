import json
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from appdirs import AppDirs

from fancygit.constants import APP_AUTHOR, APP_NAME, LOG_FILE_NAME
from fancygit.exceptions import ConfigError

# Initialize AppDirs
dirs = AppDirs(APP_NAME, APP_AUTHOR)
USER_CONFIG_DIR = Path(dirs.user_config_dir)
USER_LOG_DIR = Path(dirs.user_log_dir)


def setup_logging(level: str = "INFO", log_file: str | None = None):
    """Configures application-wide logging with rotation and UTF-8 support.

    The log lives in the per-user log directory by default so that writing it
    never touches the working tree being committed.
    """
    if log_file:
        log_path = Path(log_file)
    else:
        log_path = USER_LOG_DIR / LOG_FILE_NAME
    log_path.parent.mkdir(parents=True, exist_ok=True)

    log_handler = RotatingFileHandler(
        log_path, maxBytes=5 * 1024 * 1024, backupCount=1, encoding="utf-8"  # 5 MB
    )
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[log_handler],
        force=True,
    )
    return logging.getLogger("FancyGit")


def read_json(path: Path, default):
    """Loads a JSON document, returning `default` when the file is absent or blank."""
    if not path.is_file():
        return default
    try:
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
        if not content.strip():
            return default
        return json.loads(content)
    except (json.JSONDecodeError, IOError) as e:
        logging.getLogger(__name__).error(
            f"Failed to load config file {path}: {e}", exc_info=True
        )
        raise ConfigError(f"Could not read {path}: {e}") from e


def write_json(path: Path, data) -> None:
    """Writes the whole document, creating parent directories as needed."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
    except (TypeError, IOError) as e:
        logging.getLogger(__name__).error(
            f"Failed to save config file {path}: {e}", exc_info=True
        )
        raise ConfigError(f"Could not write {path}: {e}") from e
