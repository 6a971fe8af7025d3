"""Interactive numbered menu over a TaskStore."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from todokeeper.tasks.models import Task
from todokeeper.tasks.store import TaskStore

console = Console()

MENU_ITEMS = (
    ("1", "Create To-Do"),
    ("2", "List To-Dos"),
    ("3", "Update To-Do"),
    ("4", "Delete To-Do"),
    ("5", "Exit"),
    ("6", "Save now"),
)

_YES = {"yes", "y"}


def parse_task_id(raw: str) -> int | None:
    """Parse a user-typed task ID; None if it is not an integer."""
    try:
        return int(raw.strip())
    except ValueError:
        return None


def task_table(tasks: Sequence[Task]) -> Table:
    """Render tasks as a rich table."""
    table = Table(title="To-Do List", show_lines=False)
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Title", style="bold")
    table.add_column("Status")
    table.add_column("Created At", style="dim")

    for task in tasks:
        status = "[green]Completed[/green]" if task.completed else "[yellow]Incomplete[/yellow]"
        table.add_row(
            str(task.id),
            escape(task.title),
            status,
            task.created_at.astimezone().strftime("%d %b %y %H:%M %Z"),
        )
    return table


def _show_menu() -> None:
    console.print()
    console.print("[bold]Menu:[/bold]")
    for key, label in MENU_ITEMS:
        console.print(f"  [bold]{key}.[/bold] {label}")


def _create(store: TaskStore) -> None:
    title = console.input("Enter the title of the new to-do: ").strip()
    if not title:
        console.print("[red]Title cannot be empty.[/red]")
        return
    task_id = store.create(title)
    console.print(f"  [green]✓[/green] To-Do added (ID: {task_id}).")


def _list(store: TaskStore) -> None:
    tasks = store.list_tasks()
    if not tasks:
        console.print("[dim]No To-Dos found.[/dim]")
        return
    console.print(task_table(tasks))


def _update(store: TaskStore) -> None:
    task_id = parse_task_id(console.input("Enter the ID of the to-do to update: "))
    if task_id is None:
        console.print("[red]Invalid ID. Please enter a numeric value.[/red]")
        return

    new_title = console.input("Enter new title (leave empty to keep the current title): ")
    answer = console.input("Mark as completed? (yes/no): ")
    completed = answer.strip().lower() in _YES

    if store.update(task_id, new_title, completed) is None:
        console.print(f"[red]To-Do {task_id} not found.[/red]")
    else:
        console.print(f"  [green]✓[/green] To-Do {task_id} updated.")


def _delete(store: TaskStore) -> None:
    task_id = parse_task_id(console.input("Enter the ID of the to-do to delete: "))
    if task_id is None:
        console.print("[red]Invalid ID. Please enter a numeric value.[/red]")
        return

    if store.delete(task_id):
        console.print(f"  [green]✓[/green] To-Do {task_id} deleted.")
    else:
        console.print(f"[red]To-Do {task_id} not found.[/red]")


def _save(store: TaskStore, path: Path) -> None:
    try:
        count = store.save(path)
    except OSError as exc:
        console.print(f"[red]Error saving file: {exc}[/red]")
        return
    console.print(f"  [green]✓[/green] Saved {count} to-dos to {path}.")


def run_menu(store: TaskStore, path: Path) -> None:
    """Read menu choices until the user exits or input ends."""
    while True:
        _show_menu()
        try:
            choice = console.input("Enter your choice: ").strip()

            if choice == "1":
                _create(store)
            elif choice == "2":
                _list(store)
            elif choice == "3":
                _update(store)
            elif choice == "4":
                _delete(store)
            elif choice == "5":
                break
            elif choice == "6":
                _save(store, path)
            else:
                console.print("[yellow]Invalid choice. Please try again.[/yellow]")
        except (KeyboardInterrupt, EOFError):
            break

    console.print("[dim]Exiting...[/dim]")
