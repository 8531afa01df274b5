import logging
from typing import Dict, Optional

from rich.console import Console

from fancygit.constants import (
    DEFAULT_STYLE,
    PLACEHOLDER_DESCRIPTION,
    PLACEHOLDER_MESSAGE,
    PLACEHOLDER_TYPE,
)

logger = logging.getLogger(__name__)


def apply_template(template: str, commit_type: str, message: str, description: str) -> str:
    """Substitutes the first occurrence of each placeholder. No trimming."""
    return (
        template.replace(PLACEHOLDER_TYPE, commit_type or "", 1)
        .replace(PLACEHOLDER_MESSAGE, message or "", 1)
        .replace(PLACEHOLDER_DESCRIPTION, description or "", 1)
    )


def apply_prefix(prefix: str, message: str, description: str) -> str:
    formatted = f"{prefix} {message}"
    if description:
        formatted += f" -- {description}"
    return formatted


class MessageFormatter:
    """
    Resolves a commit message style: default templates first, then custom
    formats, then the 'clean' template with a warning.
    """

    def __init__(
        self,
        defaults: Dict[str, str],
        custom_formats: Dict[str, Dict[str, str]],
        console: Optional[Console] = None,
    ):
        self.defaults = defaults
        self.custom_formats = custom_formats
        self.console = console

    def _warn(self, message: str):
        logger.warning(message)
        if self.console:
            self.console.print(f"Warning: {message}", style="yellow", markup=False)

    def _fallback(self, commit_type: str, message: str, description: str) -> str:
        return apply_template(
            self.defaults[DEFAULT_STYLE], commit_type, message, description
        )

    def format(
        self, style: str, commit_type: str, message: str, description: str = ""
    ) -> str:
        style = style or DEFAULT_STYLE

        if style in self.defaults:
            return apply_template(self.defaults[style], commit_type, message, description)

        if style in self.custom_formats:
            prefix = self.custom_formats[style].get(commit_type)
            if prefix:
                return apply_prefix(prefix, message, description)
            self._warn(
                f'Commit type "{commit_type}" not found in custom format "{style}". '
                f'Using "{DEFAULT_STYLE}" format.'
            )
            return self._fallback(commit_type, message, description)

        self._warn(f'Format "{style}" not found. Using the "{DEFAULT_STYLE}" format.')
        return self._fallback(commit_type, message, description)
