import logging
from pathlib import Path

import click
from rich.console import Console

from fancygit import __version__
from fancygit.config import load_settings
from fancygit.runner import CommandRunner
from fancygit.stores import FormatStore, SettingsStore
from fancygit.tui import QuestionaryPrompter
from fancygit.utils import setup_logging
from fancygit.workflows import (
    CommitWorkflowHandler,
    FormatAddHandler,
    FormatExportAllHandler,
    FormatExportHandler,
    FormatListHandler,
    FormatRemoveHandler,
    InitHandler,
    SettingsGetHandler,
    SettingsUpdateHandler,
)

logger = logging.getLogger(__name__)


class App:
    """Wires stores, prompter and console together for one project directory."""

    def __init__(self, path: str | Path = ".", console=None, prompter=None, app_settings=None):
        self.app_settings = app_settings or load_settings()
        self.root = Path(path)
        self.console = console or Console()
        # For dependency injection into handlers
        self.prompter = prompter or QuestionaryPrompter()
        self.settings_store = SettingsStore(self.root, self.app_settings.config_dir_name)
        self.format_store = FormatStore(self.root, self.app_settings.config_dir_name)

    def handler(self, handler_cls):
        return handler_cls(
            self.console, self.prompter, self.settings_store, self.format_store
        )

    def commit_handler(self) -> CommitWorkflowHandler:
        return CommitWorkflowHandler(
            self.console,
            self.prompter,
            self.settings_store,
            self.format_store,
            CommandRunner(self.root),
        )


def _app(ctx: click.Context, path: str | Path = ".") -> App:
    """Builds an App reusing the AppSettings loaded by the group callback."""
    return App(path, app_settings=ctx.obj)


def _finish(ctx: click.Context, code: int):
    if code:
        ctx.exit(code)


@click.group()
@click.version_option(__version__, prog_name="fancygit")
@click.option("-v", "--verbose", is_flag=True, help="Write debug output to the log file")
@click.pass_context
def main(ctx, verbose: bool):
    """A clean and structured way to make git commits and more."""
    app_settings = load_settings()
    level = "DEBUG" if verbose else app_settings.log_level
    setup_logging(level, app_settings.log_file)
    ctx.obj = app_settings


@main.command("run")
@click.argument(
    "path",
    required=False,
    default=".",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
)
@click.option("-n", "--npm", "skip_npm", is_flag=True, help="Skip npm version bumping")
@click.option("-m", "--msg", "skip_formatter", is_flag=True, help="Skip message formatting")
@click.pass_context
def run_command(ctx, path: Path, skip_npm: bool, skip_formatter: bool):
    """Run a clean commit."""
    logger.info(f"Session started for: {path.resolve()}")
    app = _app(ctx, path)
    code = app.commit_handler().run(skip_npm=skip_npm, skip_formatter=skip_formatter)
    _finish(ctx, code)


@main.group("format")
def format_group():
    """Manage commit message formats."""


@format_group.command("list")
@click.pass_context
def format_list(ctx):
    """List all commit message formats."""
    _finish(ctx, _app(ctx).handler(FormatListHandler).run())


@format_group.command("add")
@click.argument("name")
@click.option("-g", "--global", "is_global", is_flag=True, help="Store in the user config directory")
@click.pass_context
def format_add(ctx, name: str, is_global: bool):
    """Add a commit message format."""
    _finish(ctx, _app(ctx).handler(FormatAddHandler).run(name=name, is_global=is_global))


@format_group.command("remove")
@click.argument("name")
@click.option("-g", "--global", "is_global", is_flag=True, help="Remove from the user config directory")
@click.pass_context
def format_remove(ctx, name: str, is_global: bool):
    """Remove a commit message format."""
    _finish(ctx, _app(ctx).handler(FormatRemoveHandler).run(name=name, is_global=is_global))


@format_group.command("export")
@click.argument("name")
@click.pass_context
def format_export(ctx, name: str):
    """Export a commit format."""
    _finish(ctx, _app(ctx).handler(FormatExportHandler).run(name=name))


@format_group.command("export-all")
@click.pass_context
def format_export_all(ctx):
    """Export and display all commit message formats."""
    _finish(ctx, _app(ctx).handler(FormatExportAllHandler).run())


@main.group("settings")
def settings_group():
    """Get or update CLI settings."""


@settings_group.command("get")
@click.pass_context
def settings_get(ctx):
    """Get current settings."""
    _finish(ctx, _app(ctx).handler(SettingsGetHandler).run())


@settings_group.command("update")
@click.pass_context
def settings_update(ctx):
    """Update settings interactively."""
    _finish(ctx, _app(ctx).handler(SettingsUpdateHandler).run())


@main.command("init")
@click.pass_context
def init_command(ctx):
    """Initialize .fancygit configuration in the current project."""
    _finish(ctx, _app(ctx).handler(InitHandler).run())


if __name__ == "__main__":
    main()
