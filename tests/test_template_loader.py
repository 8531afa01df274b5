import pytest
from unittest.mock import patch, MagicMock

from fancygit.exceptions import ConfigError
from fancygit.template_loader import load_default_formatter


def test_load_bundled_default_formatter():
    templates = load_default_formatter()

    assert set(templates) == {"clean", "compact", "modern"}
    for template in templates.values():
        assert "[type]" in template
        assert "[message]" in template
        assert "[description]" in template


@patch("fancygit.template_loader.DEFAULT_FORMATTER_FILE")
@patch("fancygit.template_loader.json.load")
def test_load_default_formatter_requires_clean(mock_json_load, mock_file):
    mock_file.open.return_value = MagicMock()
    mock_json_load.return_value = {"compact": "[type] [message] [description]"}

    with pytest.raises(ConfigError, match="clean"):
        load_default_formatter()


@patch("fancygit.template_loader.logger")
@patch("fancygit.template_loader.DEFAULT_FORMATTER_FILE")
@patch("fancygit.template_loader.json.load")
def test_load_default_formatter_invalid_schema(mock_json_load, mock_file, mock_logger):
    """Non-string templates are rejected and logged."""
    mock_file.open.return_value = MagicMock()
    mock_json_load.return_value = {"clean": ["not", "a", "string"]}

    with pytest.raises(ConfigError):
        load_default_formatter()

    assert mock_logger.error.called


@patch("fancygit.template_loader.DEFAULT_FORMATTER_FILE")
def test_load_default_formatter_missing_file(mock_file):
    mock_file.open.side_effect = FileNotFoundError("gone")

    with pytest.raises(ConfigError, match="Missing"):
        load_default_formatter()
