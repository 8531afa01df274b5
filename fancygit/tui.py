# fancygit/tui.py

"""
Terminal User Interface (TUI) components for user interaction.

Workflows never call questionary directly: they hand a Question to a
Prompter, which lets tests substitute canned answers.
"""

from abc import ABC, abstractmethod
from typing import Any

import questionary
from rich.console import Console
from rich.table import Table
from rich.text import Text

from fancygit.exceptions import PromptCancelled
from fancygit.schemas import Question, RepositoryState, Settings


class Prompter(ABC):
    @abstractmethod
    def ask(self, question: Question) -> Any:
        """Blocks until the user answers. Raises PromptCancelled on interrupt."""


class QuestionaryPrompter(Prompter):
    def _build(self, question: Question) -> questionary.Question:
        if question.kind == "select":
            return questionary.select(
                question.message,
                choices=[
                    questionary.Choice(title=c.title, value=c.value)
                    for c in question.choices
                ],
                default=question.default,
            )
        if question.kind == "confirm":
            return questionary.confirm(
                question.message, default=bool(question.default)
            )
        kwargs = {"default": question.default or ""}
        if question.validate_answer is not None:
            kwargs["validate"] = question.validate_answer
        return questionary.text(question.message, **kwargs)

    def ask(self, question: Question) -> Any:
        try:
            answer = self._build(question).unsafe_ask()
        except KeyboardInterrupt as e:
            raise PromptCancelled(question.message) from e
        if answer is None:
            raise PromptCancelled(question.message)
        return answer


def _file_section(console: Console, title: str, items, empty_label: str = "None"):
    if items:
        console.print(f"[green]{title}:[/green]")
        for item in items:
            console.print(f"  - {item}", highlight=False, markup=False)
    else:
        console.print(f"[green]{title}:[/green] [yellow]{empty_label}[/yellow]")


def render_repository_state(console: Console, state: RepositoryState):
    console.print("\n[bold]Project State:[/bold]")
    console.print("---------------------------", style="cyan")
    _file_section(console, "Changed Files (Not Staged)", state.changed_files)
    console.print()
    _file_section(console, "Staged Files", state.staged_files)
    console.print()
    if state.has_remote:
        _file_section(console, "Commits Not Pushed", state.commits_ahead_of_remote)
    else:
        _file_section(console, "Commits Not Pushed", [], "No remote configured")
    console.print("---------------------------\n", style="cyan")


def _toggle(value: bool) -> str:
    return "[yellow]Enabled[/yellow]" if value else "[red]Disabled[/red]"


def render_settings(console: Console, settings: Settings):
    table = Table(title="Current Settings", show_header=False, title_justify="left")
    table.add_column("Setting", style="green")
    table.add_column("Value")
    table.add_row("Enable logging settings", _toggle(settings.log_settings))
    table.add_row("Enable Git add feature", _toggle(settings.trigger_git_add))
    table.add_row("Enable NPM versioning feature", _toggle(settings.trigger_npm))
    table.add_row(
        "Enable Commit Message Formatter feature",
        _toggle(settings.trigger_message_formatter),
    )
    table.add_row("Enable Push to Server feature", _toggle(settings.trigger_push))
    table.add_row(
        "Commit Message Style", Text(settings.commit_message_style, style="magenta")
    )
    console.print(table)
