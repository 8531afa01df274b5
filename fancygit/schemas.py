from typing import Any, Callable, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, RootModel

from fancygit.constants import DEFAULT_STYLE


class Settings(BaseModel):
    """Behavioural toggles persisted in .fancygit/settings.json (camelCase on disk)."""

    model_config = ConfigDict(populate_by_name=True)

    log_settings: bool = Field(default=False, alias="logSettings")
    trigger_git_add: bool = Field(default=True, alias="triggerGitAdd")
    trigger_npm: bool = Field(default=True, alias="triggerNpm")
    trigger_message_formatter: bool = Field(
        default=True, alias="triggerMessageFormatter"
    )
    trigger_push: bool = Field(default=True, alias="triggerPush")
    commit_message_style: str = Field(default=DEFAULT_STYLE, alias="commitMessageStyle")

    def to_json_dict(self) -> dict:
        return self.model_dump(by_alias=True)


class DefaultFormatter(RootModel[dict[str, str]]):
    """Read-only style name -> template mapping shipped with the package."""


class CommandResult(BaseModel):
    status: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.status == 0


class RepositoryState(BaseModel):
    is_repository: bool
    changed_files: List[str] = Field(default_factory=list)
    staged_files: List[str] = Field(default_factory=list)
    has_remote: bool = False
    commits_ahead_of_remote: List[str] = Field(default_factory=list)
    is_working_tree_clean: bool = False


class Choice(BaseModel):
    title: str
    value: Any


class Question(BaseModel):
    """A prompt description handed to a Prompter."""

    kind: Literal["select", "text", "confirm"]
    message: str
    choices: List[Choice] = Field(default_factory=list)
    default: Optional[Union[str, bool]] = None
    validate_answer: Optional[Callable[[str], Union[bool, str]]] = None

    @classmethod
    def select(cls, message: str, choices, default=None) -> "Question":
        """Builds a select question; plain strings become title == value choices."""
        normalised = [
            c if isinstance(c, Choice) else Choice(title=str(c), value=c)
            for c in choices
        ]
        return cls(kind="select", message=message, choices=normalised, default=default)

    @classmethod
    def text(cls, message: str, default: str = "", validate_answer=None) -> "Question":
        return cls(
            kind="text",
            message=message,
            default=default,
            validate_answer=validate_answer,
        )

    @classmethod
    def confirm(cls, message: str, default: bool = True) -> "Question":
        return cls(kind="confirm", message=message, default=default)
