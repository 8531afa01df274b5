import json
import logging
from pathlib import Path
from pydantic import ValidationError

from fancygit.constants import DEFAULT_STYLE
from fancygit.exceptions import ConfigError
from fancygit.schemas import DefaultFormatter

logger = logging.getLogger(__name__)

# Build a path relative to this file's location -> <package_dir>/templates
TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"
DEFAULT_FORMATTER_FILE = TEMPLATE_DIR / "default_formatter.json"


def load_default_formatter() -> dict[str, str]:
    """
    Reads the bundled style -> template mapping and validates it against the
    DefaultFormatter schema. The mapping must provide the 'clean' style since
    every unresolved style falls back to it.
    """
    try:
        with DEFAULT_FORMATTER_FILE.open("r", encoding="utf-8") as f:
            data = json.load(f)
        templates = DefaultFormatter.model_validate(data).root
    except ValidationError as e:
        logger.error(f"Validation failed for '{DEFAULT_FORMATTER_FILE.name}': {e}")
        raise ConfigError(f"Invalid default formatter file: {e}") from e
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in '{DEFAULT_FORMATTER_FILE.name}'.")
        raise ConfigError(f"Invalid default formatter file: {e}") from e
    except OSError as e:
        logger.error(f"Failed to load default formatter: {e}", exc_info=True)
        raise ConfigError(f"Missing default formatter file: {e}") from e

    if DEFAULT_STYLE not in templates:
        raise ConfigError(f"Default formatter does not define '{DEFAULT_STYLE}'.")
    return templates
