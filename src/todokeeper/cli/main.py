"""todokeeper CLI — the main entry point."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from todokeeper import __version__
from todokeeper.config.settings import Settings, get_settings
from todokeeper.logging_setup import setup_logging
from todokeeper.scheduler.autosave import AutosaveScheduler
from todokeeper.tasks.persistence import TaskFileError
from todokeeper.tasks.store import TaskStore

app = typer.Typer(
    name="todokeeper",
    help="A terminal to-do list that autosaves to disk.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
console = Console()
logger = logging.getLogger("todokeeper.cli")

FILE_OPTION_HELP = "Task file (defaults to the configured data_file)"


@app.callback(invoke_without_command=True)
def version_callback(
    version: bool = typer.Option(False, "--version", "-v", help="Show version"),
):
    if version:
        console.print(f"todokeeper v{__version__}")
        raise typer.Exit()


def _bootstrap() -> Settings:
    """Load settings and configure logging."""
    settings = get_settings()
    setup_logging(log_dir=settings.logging.log_dir, file_level=settings.logging.level_no)
    return settings


def _open_store(path: Path) -> TaskStore:
    """Load the task file for a one-shot command; exit 1 if it is unreadable."""
    store = TaskStore()
    try:
        store.load(path)
    except (OSError, TaskFileError) as exc:
        console.print(f"[red]Error loading {path}: {exc}[/red]")
        raise typer.Exit(1)
    return store


def _commit(store: TaskStore, path: Path) -> None:
    try:
        store.save(path)
    except OSError as exc:
        console.print(f"[red]Error saving {path}: {exc}[/red]")
        raise typer.Exit(1)


@app.command()
def start(
    file: Optional[Path] = typer.Option(None, "--file", "-f", help=FILE_OPTION_HELP),
    interval: Optional[float] = typer.Option(
        None, "--interval", "-i", help="Autosave interval in seconds",
    ),
    no_autosave: bool = typer.Option(False, "--no-autosave", help="Only save on exit or on demand"),
):
    """Open the interactive to-do menu with background autosave."""
    from todokeeper.cli.menu import run_menu

    settings = _bootstrap()
    path = file or settings.data_path

    store = TaskStore()
    try:
        store.load(path)
    except (OSError, TaskFileError) as exc:
        # Not fatal: carry on with an empty list.
        logger.info("Could not load %s: %s", path, exc)
        console.print(f"[red]Error loading file: {exc}[/red]")

    autosave: AutosaveScheduler | None = None
    if settings.autosave.enabled and not no_autosave:
        try:
            autosave = AutosaveScheduler(
                store,
                path,
                interval if interval is not None else settings.autosave.interval_seconds,
            )
        except ValueError as exc:
            console.print(f"[red]{exc}[/red]")
            raise typer.Exit(1)
        autosave.start()

    console.print("[bold]To-Do List[/bold] [dim]with auto-save[/dim]")
    console.print(f"  [dim]File: {path}[/dim]")
    if autosave:
        console.print(f"  [dim]Autosave every {autosave.interval_seconds:g}s[/dim]")

    try:
        run_menu(store, path)
    finally:
        if autosave:
            autosave.stop()
        if settings.autosave.save_on_exit and store.is_dirty:
            try:
                store.save(path)
            except OSError as exc:
                console.print(f"[red]Error saving file: {exc}[/red]")


@app.command("list")
def list_tasks(
    file: Optional[Path] = typer.Option(None, "--file", "-f", help=FILE_OPTION_HELP),
):
    """List all to-dos."""
    from todokeeper.cli.menu import task_table

    settings = _bootstrap()
    store = _open_store(file or settings.data_path)
    tasks = store.list_tasks()

    if not tasks:
        console.print("[dim]No To-Dos found.[/dim]")
        console.print('[dim]Add one: todokeeper add "Buy milk"[/dim]')
        raise typer.Exit()

    console.print(task_table(tasks))
    done = sum(1 for t in tasks if t.completed)
    console.print(f"\n  [dim]{len(tasks)} to-dos, {done} completed.[/dim]\n")


@app.command("add")
def add_task(
    title: str = typer.Argument(help="Title of the new to-do"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help=FILE_OPTION_HELP),
):
    """Add a new to-do."""
    if not title.strip():
        console.print("[red]Title cannot be empty.[/red]")
        raise typer.Exit(1)

    settings = _bootstrap()
    path = file or settings.data_path
    store = _open_store(path)
    task_id = store.create(title)
    _commit(store, path)
    console.print(f"  [green]✓[/green] Added to-do [bold]{escape(title.strip())}[/bold] (ID: {task_id})")


@app.command("update")
def update_task(
    task_id: int = typer.Argument(help="ID of the to-do to update"),
    title: str = typer.Option("", "--title", "-t", help="New title (empty keeps the current one)"),
    done: bool = typer.Option(False, "--done/--not-done", help="Completion flag to set"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help=FILE_OPTION_HELP),
):
    """Update a to-do's title and completion flag."""
    settings = _bootstrap()
    path = file or settings.data_path
    store = _open_store(path)

    task = store.update(task_id, title, done)
    if task is None:
        console.print(f"[red]To-Do {task_id} not found.[/red]")
        raise typer.Exit(1)

    _commit(store, path)
    console.print(
        f"  [green]✓[/green] Updated to-do [bold]{escape(task.title)}[/bold] "
        f"(ID: {task.id}, {task.status_label})"
    )


@app.command("delete")
def delete_task(
    task_id: int = typer.Argument(help="ID of the to-do to delete"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help=FILE_OPTION_HELP),
):
    """Delete a to-do permanently."""
    settings = _bootstrap()
    path = file or settings.data_path
    store = _open_store(path)

    if not store.delete(task_id):
        console.print(f"[red]To-Do {task_id} not found.[/red]")
        raise typer.Exit(1)

    _commit(store, path)
    console.print(f"  [green]✓[/green] Deleted to-do [bold]{task_id}[/bold].")


@app.command("config")
def show_config():
    """Show the resolved configuration."""
    settings = get_settings()
    console.print()
    console.print(f"  [bold]Task file:[/bold]  {settings.data_path}")
    if settings.autosave.enabled:
        console.print(f"  [bold]Autosave:[/bold]   every {settings.autosave.interval_seconds:g}s")
    else:
        console.print("  [bold]Autosave:[/bold]   [dim]disabled[/dim]")
    console.print(f"  [bold]Save on exit:[/bold] {'yes' if settings.autosave.save_on_exit else 'no'}")
    console.print(f"  [bold]Log level:[/bold]  {settings.logging.level}")
    console.print(f"  [bold]Log dir:[/bold]    {settings.logging.log_dir}")
    console.print()


def main() -> None:
    app()
