import pytest
from unittest.mock import MagicMock, patch
from git.exc import GitCommandNotFound

from fancygit.exceptions import CommandError
from fancygit.runner import COMMAND_NOT_FOUND_STATUS, CommandRunner


def test_run_success(temp_git_repo):
    runner = CommandRunner(temp_git_repo)
    result = runner.git("rev-parse", "--is-inside-work-tree")

    assert result.ok
    assert result.stdout == "true"


def test_run_failure_is_returned_not_raised(temp_git_repo):
    runner = CommandRunner(temp_git_repo)
    result = runner.git("rev-parse", "--verify", "no-such-ref")

    assert not result.ok
    assert result.status != 0


def test_run_check_raises_command_error(temp_git_repo):
    runner = CommandRunner(temp_git_repo)

    with pytest.raises(CommandError) as excinfo:
        runner.git("rev-parse", "--verify", "no-such-ref", check=True)

    assert excinfo.value.command == ["git", "rev-parse", "--verify", "no-such-ref"]
    assert "exited with status" in str(excinfo.value)


@patch("fancygit.runner.git.Git")
def test_missing_executable_maps_to_127(mock_git_cls, tmp_path):
    mock_git_cls.return_value.execute.side_effect = GitCommandNotFound(
        ["npm"], FileNotFoundError("npm")
    )
    runner = CommandRunner(tmp_path)

    result = runner.npm("version", "patch")

    assert result.status == COMMAND_NOT_FOUND_STATUS
    assert not result.ok


@patch("fancygit.runner.git.Git")
def test_npm_command_line(mock_git_cls, tmp_path):
    executor = MagicMock()
    executor.execute.return_value = (0, "v1.0.1", "")
    mock_git_cls.return_value = executor

    result = CommandRunner(tmp_path).npm("version", "patch")

    executor.execute.assert_called_once_with(
        ["npm", "version", "patch"], with_extended_output=True, with_exceptions=False
    )
    assert result.stdout == "v1.0.1"
