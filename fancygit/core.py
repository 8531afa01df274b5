import logging
from typing import List

from fancygit.constants import DEFAULT_REMOTE, NPM_MANIFEST
from fancygit.runner import CommandRunner
from fancygit.schemas import RepositoryState

# Initialize module-level logger
logger = logging.getLogger(__name__)


def parse_porcelain(output: str) -> List[tuple[str, str, str]]:
    """
    Splits `git status --porcelain` output into (index, worktree, path) tuples.
    Renames report the destination path.
    """
    entries = []
    for line in output.splitlines():
        if len(line) < 4:
            continue
        index_status, worktree_status, path = line[0], line[1], line[3:]
        if " -> " in path:
            path = path.split(" -> ", 1)[1]
        entries.append((index_status, worktree_status, path.strip('"')))
    return entries


class RepositoryInspector:
    """
    Read-only status queries against the repository in the runner's working
    directory. Every query fails soft: an invocation error yields an
    empty/negative answer instead of an exception.
    """

    def __init__(self, runner: CommandRunner):
        self.runner = runner

    def _query(self, *args: str) -> str | None:
        """Returns stdout of a git query, or None if it could not be answered."""
        try:
            result = self.runner.git(*args)
        except Exception as e:
            logger.debug(f"git {' '.join(args)} failed: {e}", exc_info=True)
            return None
        if not result.ok:
            return None
        return result.stdout

    def is_repository(self) -> bool:
        output = self._query("rev-parse", "--is-inside-work-tree")
        return output is not None and output.strip() == "true"

    def staged_files(self) -> List[str]:
        output = self._query("diff", "--cached", "--name-only")
        if not output:
            return []
        return [line for line in output.splitlines() if line.strip()]

    def has_staged_changes(self) -> bool:
        return len(self.staged_files()) > 0

    def _porcelain(self) -> str | None:
        return self._query("status", "--porcelain")

    def has_uncommitted_changes(self) -> bool:
        output = self._porcelain()
        return bool(output and output.strip())

    def is_working_tree_clean(self) -> bool:
        output = self._porcelain()
        # A status we could not read is never reported as clean.
        return output is not None and output.strip() == ""

    def tracked_changes(self) -> List[str]:
        """Every changed tracked path, staged or not. Untracked files are excluded."""
        output = self._porcelain()
        if not output:
            return []
        return [
            path
            for index_status, worktree_status, path in parse_porcelain(output)
            if (index_status, worktree_status) != ("?", "?")
        ]

    def changed_files(self) -> List[str]:
        """Tracked paths with modifications that are not staged yet."""
        output = self._porcelain()
        if not output:
            return []
        return [
            path
            for index_status, worktree_status, path in parse_porcelain(output)
            if worktree_status not in (" ", "?")
        ]

    def has_remote(self) -> bool:
        output = self._query("remote")
        return bool(output and output.strip())

    def current_branch(self) -> str:
        output = self._query("branch", "--show-current")
        return output.strip() if output else ""

    def commits_ahead_of_remote(self) -> List[str]:
        """One-line summaries of local commits missing from the upstream branch."""
        if not self.has_remote():
            return []
        branch = self.current_branch()
        if not branch:
            return []
        output = self._query("log", f"{DEFAULT_REMOTE}/{branch}..HEAD", "--oneline")
        if not output:
            return []
        return [line for line in output.splitlines() if line.strip()]

    def has_manifest(self) -> bool:
        return (self.runner.working_dir / NPM_MANIFEST).is_file()

    def snapshot(self) -> RepositoryState:
        if not self.is_repository():
            return RepositoryState(is_repository=False)
        return RepositoryState(
            is_repository=True,
            changed_files=self.changed_files(),
            staged_files=self.staged_files(),
            has_remote=self.has_remote(),
            commits_ahead_of_remote=self.commits_ahead_of_remote(),
            is_working_tree_clean=self.is_working_tree_clean(),
        )
