# fancygit/stores.py

"""
File-backed Settings and Format stores.

Both stores behave as empty/default when their file is absent and always
write the complete document back on mutation.
"""

import logging
from pathlib import Path
from typing import Dict, Optional

from pydantic import ValidationError

from fancygit.constants import CONFIG_DIR_NAME, FORMATS_FILE_NAME, SETTINGS_FILE_NAME
from fancygit.exceptions import ConfigError
from fancygit.schemas import Settings
from fancygit.utils import USER_CONFIG_DIR, read_json, write_json

logger = logging.getLogger(__name__)

Format = Dict[str, str]


class SettingsStore:
    def __init__(self, root: str | Path = ".", config_dir_name: str = CONFIG_DIR_NAME):
        self.path = Path(root) / config_dir_name / SETTINGS_FILE_NAME

    def exists(self) -> bool:
        return self.path.is_file()

    def get(self) -> Settings:
        """Returns the persisted settings, completed with defaults for missing keys."""
        data = read_json(self.path, {})
        try:
            return Settings.model_validate(data)
        except ValidationError as e:
            logger.error(f"Invalid settings in {self.path}: {e}")
            raise ConfigError(f"Invalid settings file {self.path}: {e}") from e

    def save(self, settings: Settings) -> None:
        write_json(self.path, settings.to_json_dict())
        logger.info(f"Settings written to {self.path}")


class FormatStore:
    """
    Named custom formats. Reads the project-local file when it exists, otherwise
    the per-user global file. Writes go to the local file unless is_global.
    """

    def __init__(
        self,
        root: str | Path = ".",
        config_dir_name: str = CONFIG_DIR_NAME,
        global_dir: Optional[Path] = None,
    ):
        self.local_path = Path(root) / config_dir_name / FORMATS_FILE_NAME
        self.global_path = (global_dir or USER_CONFIG_DIR) / FORMATS_FILE_NAME

    @property
    def path(self) -> Path:
        return self.local_path if self.local_path.is_file() else self.global_path

    def _target(self, is_global: bool) -> Path:
        return self.global_path if is_global else self.local_path

    def _read(self, path: Path) -> Dict[str, Format]:
        data = read_json(path, {})
        if not isinstance(data, dict):
            raise ConfigError(f"Formats file {path} must contain a JSON object.")
        return data

    def list(self) -> Dict[str, Format]:
        """Formats in effect: the local file when present, else the global one."""
        return self._read(self.path)

    def get(self, name: str) -> Optional[Format]:
        return self.list().get(name)

    def exists(self, name: str) -> bool:
        return name in self.list()

    def contains(self, name: str, is_global: bool = False) -> bool:
        """Whether the file that add/remove would write already holds `name`."""
        return name in self._read(self._target(is_global))

    def save(self, formats: Dict[str, Format], is_global: bool = False) -> None:
        target = self._target(is_global)
        write_json(target, formats)
        logger.info(f"Formats written to {target}")

    def add(self, name: str, prefixes: Format, is_global: bool = False) -> bool:
        """Stores a new format. Returns False, without writing, if the name is taken."""
        formats = self._read(self._target(is_global))
        if name in formats:
            return False
        formats[name] = {commit_type: prefix.strip() for commit_type, prefix in prefixes.items()}
        self.save(formats, is_global)
        return True

    def remove(self, name: str, is_global: bool = False) -> bool:
        """Deletes a format. Returns False, without writing, if it does not exist."""
        formats = self._read(self._target(is_global))
        if name not in formats:
            return False
        del formats[name]
        self.save(formats, is_global)
        return True
