# fancygit/runner.py

"""
Thin process-invocation layer. Every git and npm call goes through here and
comes back as a CommandResult, so the string parsing lives in the callers that
know what the output means.
"""

import logging
from pathlib import Path
from typing import List, Sequence

import git
from git.exc import GitCommandNotFound

from fancygit.exceptions import CommandError
from fancygit.schemas import CommandResult

logger = logging.getLogger(__name__)

COMMAND_NOT_FOUND_STATUS = 127


class CommandRunner:
    """Runs external commands synchronously inside a working directory."""

    def __init__(self, working_dir: str | Path = "."):
        self.working_dir = Path(working_dir)
        # GitPython's executor is a plain Popen wrapper; it runs npm just as well.
        self._executor = git.Git(str(self.working_dir))

    def run(self, command: Sequence[str], check: bool = False) -> CommandResult:
        """
        Executes `command` and returns its status and output.
        With check=True a non-zero status raises CommandError.
        """
        argv: List[str] = list(command)
        logger.debug(f"Running: {' '.join(argv)} (cwd={self.working_dir})")
        try:
            status, stdout, stderr = self._executor.execute(
                argv, with_extended_output=True, with_exceptions=False
            )
            result = CommandResult(status=status, stdout=stdout, stderr=stderr)
        except GitCommandNotFound as e:
            logger.warning(f"Executable not found for {argv[0]}: {e}")
            result = CommandResult(status=COMMAND_NOT_FOUND_STATUS, stderr=str(e))

        if not result.ok:
            logger.debug(f"{argv[0]} exited with {result.status}: {result.stderr}")
            if check:
                raise CommandError(argv, result)
        return result

    def git(self, *args: str, check: bool = False) -> CommandResult:
        return self.run(["git", *args], check=check)

    def npm(self, *args: str, check: bool = False) -> CommandResult:
        return self.run(["npm", *args], check=check)
