# fancygit/exceptions.py


class FancyGitError(Exception):
    """Base class for all errors raised by fancygit."""


class ConfigError(FancyGitError):
    """A configuration file could not be read or written."""


class CommandError(FancyGitError):
    """An external command exited with a non-zero status."""

    def __init__(self, command, result):
        self.command = command
        self.result = result
        detail = (result.stderr or result.stdout).strip()
        message = f"'{' '.join(command)}' exited with status {result.status}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class PromptCancelled(FancyGitError):
    """The user interrupted an interactive prompt."""
