"""Main entry point for Focus TUI."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from focus_tui import __version__
from focus_tui.services.config_service import get_config_service
from focus_tui.services.notifier import DesktopNotifier, NullNotifier
from focus_tui.services.task_store import TaskStore
from focus_tui.ui.app import App
from focus_tui.ui.theme import THEMES, get_theme
from focus_tui.utils.logger import get_logger

app = typer.Typer(
    name="focus-tui",
    help="A terminal focus timer with work/break cycles and a task list",
)
config_app = typer.Typer(help="Configuration commands")
app.add_typer(config_app, name="config")

console = Console()


@app.callback(invoke_without_command=True)
def run(
    ctx: typer.Context,
    tasks_file: Path | None = typer.Option(
        None, "--tasks-file", help="Task file to use instead of the default"
    ),
    theme: str | None = typer.Option(
        None, "--theme", help=f"Color theme ({', '.join(THEMES)})"
    ),
    no_notify: bool = typer.Option(
        False, "--no-notify", help="Disable desktop notifications"
    ),
) -> None:
    """Start the focus timer."""
    if ctx.invoked_subcommand is not None:
        return

    config_service = get_config_service()
    config = config_service.config

    try:
        selected_theme = get_theme(theme or config.ui.theme)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(2) from e

    if no_notify or not config.ui.notifications:
        notifier = NullNotifier()
    else:
        notifier = DesktopNotifier()

    if tasks_file is None:
        tasks_file = config_service.tasks_path()
        tasks_file.parent.mkdir(parents=True, exist_ok=True)
    store = TaskStore(tasks_file)

    get_logger().info("Starting Focus TUI %s (tasks: %s)", __version__, store.path)

    tui = App(
        store,
        theme=selected_theme,
        notifier=notifier,
        work_minutes=config.timer.work_minutes,
        break_minutes=config.timer.break_minutes,
        tick_seconds=config.ui.tick_ms / 1000,
        console=console,
    )
    tui.load_tasks()
    tui.run()


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]Focus TUI[/bold] version [cyan]{__version__}[/cyan]")


@config_app.command("show")
def show_config() -> None:
    """Print the effective configuration as JSON."""
    config_service = get_config_service()
    console.print_json(config_service.config.model_dump_json())
    console.print(f"[dim]Config file: {config_service.config_path}[/dim]")
    console.print(f"[dim]Tasks file: {config_service.tasks_path()}[/dim]")


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
