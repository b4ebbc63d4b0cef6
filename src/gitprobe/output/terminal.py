"""Rich terminal reporter — tables, coloured diff, rendered description."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

_STATUS_STYLE = {
    "modified": "yellow",
    "added": "green",
    "deleted": "red",
    "renamed": "cyan",
    "copied": "cyan",
    "updated": "magenta",
    "unknown": "dim",
}


def _changes_table(title: str, changes: List[Dict[str, Any]]) -> Table:
    table = Table(title=title, title_style="bold", border_style="dim", show_header=True)
    table.add_column("Status", justify="center", width=10)
    table.add_column("Path", style="magenta")
    for change in changes:
        status = change["status"]
        table.add_row(Text(status, style=_STATUS_STYLE.get(status, "dim")), escape(change["path"]))
    return table


def _print_diff(console: Console, diff: str, show_diff: bool) -> None:
    if not show_diff:
        return
    console.print()
    if diff:
        console.print(Syntax(diff, "diff", theme="ansi_dark", word_wrap=True))
    else:
        console.print("[dim]No diff.[/dim]")


def render_status(
    record: Dict[str, Any], *, console: Optional[Console] = None, show_diff: bool = True
) -> None:
    """Print a status snapshot record."""
    console = console or Console()
    console.print(f"[bold]On branch[/bold] [cyan]{escape(record['branch'])}[/cyan]")

    staged, unstaged, untracked = record["staged"], record["unstaged"], record["untracked"]
    if not (staged or unstaged or untracked):
        console.print("[bold green]Working tree clean.[/bold green]")
    if staged:
        console.print(_changes_table("Staged", staged))
    if unstaged:
        console.print(_changes_table("Not staged", unstaged))
    if untracked:
        console.print("[bold]Untracked[/bold]")
        for path in untracked:
            console.print(f"  [red]{escape(path)}[/red]")

    _print_diff(console, record["diff"], show_diff)


def render_report(
    record: Dict[str, Any], *, console: Optional[Console] = None, show_diff: bool = True
) -> None:
    """Print a change-set report record."""
    console = console or Console()
    console.print(
        Panel(
            f"[cyan]{escape(record['sourceBranch'])}[/cyan] → [cyan]{escape(record['targetBranch'])}[/cyan]\n"
            f"[dim]Author:[/dim] {escape(record['author'])}   "
            f"[dim]All authors:[/dim] {escape(', '.join(record['allAuthors']))}",
            title=f"[bold]{escape(record['title'])}[/bold]",
            border_style="blue",
        )
    )

    files = Table(title="Changed files", title_style="bold", border_style="dim")
    files.add_column("File", style="magenta")
    files.add_column("+", justify="right", style="green")
    files.add_column("-", justify="right", style="red")
    additions = deletions = 0
    for stat in record["changedFiles"]:
        files.add_row(escape(stat["path"]), str(stat["additions"]), str(stat["deletions"]))
        additions += stat["additions"]
        deletions += stat["deletions"]
    console.print(files)
    console.print(
        f"[dim]Commits:[/dim] {len(record['commits'])}   "
        f"[dim]Files:[/dim] {len(record['changedFiles'])}   "
        f"[green]+{additions}[/green] [red]-{deletions}[/red]"
    )

    console.print()
    console.print(Markdown(record["description"]))
    _print_diff(console, record["diff"], show_diff)


def render_error(record: Dict[str, Any], *, console: Optional[Console] = None) -> None:
    console = console or Console(stderr=True)
    console.print(f"[bold red]Error:[/bold red] {escape(record['error'])}")


def render_notice(record: Dict[str, Any], *, console: Optional[Console] = None) -> None:
    console = console or Console(stderr=True)
    console.print(f"[yellow]{escape(record['error'])}[/yellow]")
