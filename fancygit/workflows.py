# fancygit/workflows.py
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional

from rich.console import Console

from fancygit.constants import (
    COMMIT_TYPES,
    DEFAULT_REMOTE,
    DEFAULT_STYLES,
    EXIT_CANCELLED,
    EXIT_NOT_A_REPOSITORY,
    EXIT_OK,
    EXIT_UNEXPECTED_ERROR,
    FORMAT_COMMIT_TYPES,
    GOODBYE_MESSAGE,
    MIN_FORMATTED_MESSAGE_LENGTH,
    OPT_ADD_ALL,
    OPT_ADD_NONE,
    OPT_ADD_SPECIFIC,
    OPT_NO_CHANGES_CANCEL,
    OPT_NO_CHANGES_NPM,
    OPT_NO_CHANGES_PUSH,
    VERSION_OPTIONS,
)
from fancygit.core import RepositoryInspector
from fancygit.exceptions import FancyGitError, PromptCancelled
from fancygit.formatter import MessageFormatter
from fancygit.runner import CommandRunner
from fancygit.schemas import Choice, Question, Settings
from fancygit.stores import FormatStore, SettingsStore
from fancygit.template_loader import load_default_formatter
from fancygit.tui import Prompter, render_repository_state, render_settings

logger = logging.getLogger(__name__)


def validate_formatted_message(text: str):
    return len(text) >= MIN_FORMATTED_MESSAGE_LENGTH or "Commit message is too short"


def validate_plain_message(text: str):
    return len(text) > 0 or "Commit message cannot be empty"


def validate_not_blank(text: str):
    return len(text.strip()) > 0 or "Please enter at least one value"


def split_file_list(raw: str) -> List[str]:
    """Turns 'a.py, b.py,,c.py' into ['a.py', 'b.py', 'c.py']."""
    return [item.strip() for item in raw.split(",") if item.strip()]


class WorkflowHandler(ABC):
    """Abstract base class for all workflow handlers."""

    def __init__(
        self,
        console: Console,
        prompter: Prompter,
        settings_store: SettingsStore,
        format_store: FormatStore,
    ):
        self.console = console
        self.prompter = prompter
        self.settings_store = settings_store
        self.format_store = format_store

    @abstractmethod
    def execute(self, **kwargs) -> int:
        """Execute the specific workflow."""
        pass

    def run(self, **kwargs) -> int:
        """Runs the workflow, turning every failure into a message and an exit code."""
        try:
            return self.execute(**kwargs)
        except (PromptCancelled, KeyboardInterrupt):
            self.console.print(GOODBYE_MESSAGE, style="bold red")
            logger.info(f"{type(self).__name__} cancelled by user")
            return EXIT_CANCELLED
        except Exception as e:
            self.console.print(f"\nAn unexpected error occurred: {e}", style="bold red")
            logger.error(f"{type(self).__name__} failed", exc_info=True)
            return EXIT_UNEXPECTED_ERROR

    def ask(self, question: Question):
        return self.prompter.ask(question)


class CommitWorkflowHandler(WorkflowHandler):
    """The guided commit: stage, compose, format, commit, bump, push."""

    def __init__(
        self,
        console: Console,
        prompter: Prompter,
        settings_store: SettingsStore,
        format_store: FormatStore,
        runner: CommandRunner,
        inspector: Optional[RepositoryInspector] = None,
        default_formatter: Optional[Dict[str, str]] = None,
    ):
        super().__init__(console, prompter, settings_store, format_store)
        self.runner = runner
        self.inspector = inspector or RepositoryInspector(runner)
        self.default_formatter = default_formatter

    def execute(self, skip_npm: bool = False, skip_formatter: bool = False, **kwargs) -> int:
        if not self.inspector.is_repository():
            self.console.print(
                "\nError: Not a git repository. Please initialize a git repository first.",
                style="bold red",
            )
            logger.warning(f"Not a git repository: {self.runner.working_dir}")
            return EXIT_NOT_A_REPOSITORY

        settings = self.settings_store.get()
        if settings.log_settings:
            render_settings(self.console, settings)

        defaults = self.default_formatter or load_default_formatter()
        formatter = MessageFormatter(defaults, self.format_store.list(), self.console)
        use_formatter = settings.trigger_message_formatter and not skip_formatter

        render_repository_state(self.console, self.inspector.snapshot())

        tracked = self.inspector.tracked_changes()
        if settings.trigger_git_add and tracked:
            self._stage_files()

        if (
            not settings.trigger_git_add
            and not self.inspector.has_staged_changes()
            and not self.inspector.has_uncommitted_changes()
        ):
            self._handle_no_changes()
            return EXIT_OK

        if tracked:
            message = self._compose_until_confirmed(
                formatter, settings.commit_message_style, use_formatter
            )
            self._commit(message)

        if settings.trigger_npm and not skip_npm and self.inspector.has_manifest():
            self._bump_version()

        self._offer_push(settings)
        return EXIT_OK

    # --- Steps ---

    def _stage_files(self):
        choice = self.ask(
            Question.select(
                "What files would you like to add?",
                [OPT_ADD_ALL, OPT_ADD_SPECIFIC, OPT_ADD_NONE],
            )
        )
        if choice == OPT_ADD_SPECIFIC:
            raw = self.ask(
                Question.text(
                    "Enter the files to add (comma separated):",
                    validate_answer=validate_not_blank,
                )
            )
            files = split_file_list(raw)
            logger.info(f"Staging {files}")
            self.runner.git("add", "--", *files, check=True)
        elif choice == OPT_ADD_ALL:
            logger.info("Staging all files")
            self.runner.git("add", ".", check=True)

    def _handle_no_changes(self):
        self.console.print("\nNo changes to commit.", style="yellow")

        if self.inspector.commits_ahead_of_remote():
            action = self.ask(
                Question.select(
                    "There are no changes to commit. What would you like to do?",
                    [
                        Choice(title="Push existing commits to remote", value=OPT_NO_CHANGES_PUSH),
                        Choice(title="Update npm version", value=OPT_NO_CHANGES_NPM),
                        Choice(title="Cancel", value=OPT_NO_CHANGES_CANCEL),
                    ],
                )
            )
            if action == OPT_NO_CHANGES_PUSH:
                self._push_current_branch()
            elif action == OPT_NO_CHANGES_NPM:
                self._bump_version(ask_first=False)
            return

        update_npm = self.ask(
            Question.confirm(
                "No changes to commit. Would you like to update the npm version?",
                default=False,
            )
        )
        if update_npm:
            self._bump_version(ask_first=False)
        else:
            self.console.print("No action taken. Exiting.", style="yellow")

    def _compose_message(self, use_formatter: bool):
        """Returns (type, message, description); type and description are '' without the formatter."""
        if not use_formatter:
            message = self.ask(
                Question.text(
                    "Enter your commit message:", validate_answer=validate_plain_message
                )
            )
            return "", message, ""

        commit_type = self.ask(
            Question.select("Select the type of commit:", COMMIT_TYPES)
        )
        message = self.ask(
            Question.text(
                "Enter your commit message:", validate_answer=validate_formatted_message
            )
        )
        description = self.ask(
            Question.text("Optional commit description (or press Enter to skip):")
        )
        return commit_type, message, description or ""

    def _compose_until_confirmed(
        self, formatter: MessageFormatter, style: str, use_formatter: bool
    ) -> str:
        while True:
            commit_type, message, description = self._compose_message(use_formatter)
            formatted = formatter.format(style, commit_type, message, description)
            if not use_formatter:
                return formatted

            self.console.print("\nFormatted Commit Message:", style="bold cyan")
            self.console.print(f"{formatted}\n", style="magenta", highlight=False, markup=False)
            if self.ask(Question.confirm("Does the commit look good?")):
                return formatted
            self.console.print("Commit aborted. Let's try again...\n", style="yellow")

    def _commit(self, message: str):
        # The staging step may have added nothing.
        if not self.inspector.has_staged_changes():
            self.console.print(
                "\nNo changes staged for commit. Skipping commit step.", style="yellow"
            )
            return
        with self.console.status("Creating commit..."):
            self.runner.git("commit", "-m", message.strip(), check=True)
        logger.info("Commit created")
        self.console.print("✔ Commit created successfully!", style="green")

    def _bump_version(self, ask_first: bool = True):
        if not self.inspector.is_working_tree_clean():
            self.console.print(
                "Cannot update npm version: Git working directory is not clean. "
                "Please commit or stash your changes first.",
                style="red",
            )
            return

        if ask_first and not self.ask(
            Question.confirm("Would you like to update the npm version?", default=True)
        ):
            return

        version_type = self.ask(
            Question.select("Select the version type:", VERSION_OPTIONS)
        )
        with self.console.status("Updating npm version..."):
            result = self.runner.npm("version", version_type)

        if result.ok:
            logger.info(f"npm version {version_type} -> {result.stdout.strip()}")
            self.console.print("✔ NPM version updated successfully!", style="green")
        else:
            detail = (result.stderr or result.stdout).strip()
            logger.error(f"npm version {version_type} failed: {detail}")
            self.console.print(
                f"\nFailed to update npm version: {detail}", style="bold red"
            )

    def _push_current_branch(self):
        branch = self.inspector.current_branch()
        if not branch:
            raise FancyGitError("Could not determine the current branch to push.")
        with self.console.status("Pushing changes..."):
            self.runner.git("push", DEFAULT_REMOTE, branch, check=True)
        logger.info(f"Pushed {branch} to {DEFAULT_REMOTE}")
        self.console.print("✔ Changes pushed successfully!", style="green")

    def _offer_push(self, settings: Settings):
        has_remote = self.inspector.has_remote()
        if settings.trigger_push and has_remote:
            if self.ask(
                Question.confirm("Would you like to push the changes?", default=True)
            ):
                self._push_current_branch()
        elif not has_remote:
            self.console.print("✔ No remote configured. Skipping push.", style="green")
        else:
            self.console.print("✔ Alright, skipping push.", style="green")


# --- Format management ---


class FormatListHandler(WorkflowHandler):
    def execute(self, **kwargs) -> int:
        formats = self.format_store.list()
        if not formats:
            self.console.print(
                "No formats available. Use 'fancygit format add <name>' to add a new format.",
                style="yellow",
            )
            return EXIT_OK

        self.console.print("Available Commit Message Formats:", style="bold")
        for name in formats:
            self.console.print(f"- {name}", style="cyan", highlight=False, markup=False)
        return EXIT_OK


class FormatAddHandler(WorkflowHandler):
    def execute(self, name: str = "", is_global: bool = False, **kwargs) -> int:
        if self.format_store.contains(name, is_global=is_global):
            self.console.print(f'Format "{name}" already exists.', style="red")
            return EXIT_OK

        prefixes = {}
        for commit_type in FORMAT_COMMIT_TYPES:
            prefixes[commit_type] = self.ask(
                Question.text(
                    f'Enter the prefix for commit type "{commit_type}" '
                    f"(e.g., [{commit_type}], {commit_type}:, <{commit_type}>):"
                )
            )

        self.format_store.add(name, prefixes, is_global=is_global)
        self.console.print(f'Format "{name}" added successfully!', style="green")
        return EXIT_OK


class FormatRemoveHandler(WorkflowHandler):
    def execute(self, name: str = "", is_global: bool = False, **kwargs) -> int:
        if not self.format_store.remove(name, is_global=is_global):
            self.console.print(f'Format "{name}" does not exist.', style="red")
            return EXIT_OK
        self.console.print(f'Format "{name}" removed successfully!', style="green")
        return EXIT_OK


class FormatExportHandler(WorkflowHandler):
    def execute(self, name: str = "", **kwargs) -> int:
        fmt = self.format_store.get(name)
        if fmt is None:
            self.console.print(f'Format "{name}" does not exist.', style="red")
            return EXIT_OK
        self.console.print(f'Format "{name}":', style="bold")
        self.console.print(json.dumps(fmt, indent=2), style="cyan", highlight=False, markup=False)
        return EXIT_OK


class FormatExportAllHandler(WorkflowHandler):
    def execute(self, **kwargs) -> int:
        formats = self.format_store.list()
        if not formats:
            self.console.print("No formats available to export.", style="yellow")
            return EXIT_OK

        self.console.print("Available Formats:", style="bold")
        for name, fmt in formats.items():
            self.console.print(f"- {name}:", style="cyan", highlight=False, markup=False)
            for commit_type, prefix in fmt.items():
                self.console.print(
                    f"  {commit_type}: {prefix}", style="green", highlight=False, markup=False
                )
        return EXIT_OK


# --- Settings management ---


class SettingsGetHandler(WorkflowHandler):
    def execute(self, **kwargs) -> int:
        render_settings(self.console, self.settings_store.get())
        return EXIT_OK


class SettingsUpdateHandler(WorkflowHandler):
    def execute(self, **kwargs) -> int:
        current = self.settings_store.get()
        styles = list(self.format_store.list()) + DEFAULT_STYLES

        def toggle(message: str, value: bool) -> bool:
            return self.ask(Question.confirm(message, default=value))

        updated = Settings(
            log_settings=toggle("Enable log settings?", current.log_settings),
            trigger_git_add=toggle("Enable the git add feature?", current.trigger_git_add),
            trigger_npm=toggle("Enable the npm versioning feature?", current.trigger_npm),
            trigger_message_formatter=toggle(
                "Enable the commit message formatter feature?",
                current.trigger_message_formatter,
            ),
            trigger_push=toggle("Enable the push to server feature?", current.trigger_push),
            commit_message_style=self.ask(
                Question.select(
                    "Select the default commit message style:",
                    styles,
                    default=current.commit_message_style
                    if current.commit_message_style in styles
                    else None,
                )
            ),
        )

        self.settings_store.save(updated)
        self.console.print("Settings updated successfully!", style="green")
        return EXIT_OK


class InitHandler(WorkflowHandler):
    """Creates the project config directory, then optionally a format and settings."""

    def execute(self, **kwargs) -> int:
        config_dir: Path = self.settings_store.path.parent
        if config_dir.is_dir():
            self.console.print(f"Directory {config_dir} already exists.", style="yellow")
        else:
            config_dir.mkdir(parents=True, exist_ok=True)
            self.console.print(f"Directory {config_dir} created successfully!", style="green")

        if self.ask(
            Question.confirm(
                "Would you like to create a new commit message format?", default=False
            )
        ):
            name = self.ask(
                Question.text(
                    "Enter the name of the new format:", validate_answer=validate_not_blank
                )
            )
            self._delegate(FormatAddHandler).execute(name=name.strip())

        if self.ask(
            Question.confirm("Would you like to update the settings?", default=False)
        ):
            return self._delegate(SettingsUpdateHandler).execute()

        self.settings_store.save(self.settings_store.get())
        self.console.print("Default settings saved successfully!", style="green")
        return EXIT_OK

    def _delegate(self, handler_cls):
        return handler_cls(
            self.console, self.prompter, self.settings_store, self.format_store
        )
