"""gitprobe CLI — Typer application with status, pr-info, serve, and init commands."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import typer
from rich.console import Console

from gitprobe import __version__

app = typer.Typer(
    name="gitprobe",
    help="Inspect a git working copy and summarise its branch as a pull request.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)

_state: Dict[str, Any] = {"verbose": False}


def _load(repo: Optional[str], config: Optional[str], format: Optional[str]):
    """Load config for *repo*, apply CLI overrides, exit 2 on failure."""
    from gitprobe.config.loader import ConfigError, load_config
    from gitprobe.config.schema import OUTPUT_FORMATS
    from gitprobe.log import configure_logging

    root = Path(repo) if repo else Path.cwd()
    try:
        cfg = load_config(root if root.is_dir() else Path.cwd(), config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    if format:
        if format not in OUTPUT_FORMATS:
            console.print(f"[bold red]Invalid format:[/bold red] {format}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]

    configure_logging("DEBUG" if _state["verbose"] else cfg.logging.level)
    return cfg


def _runner(cfg):
    from gitprobe.git.runner import CommandRunner

    return CommandRunner(cfg.git.binary, cfg.git.timeout)


def _emit(record: Dict[str, Any], fmt: str, renderer, show_diff: bool) -> None:
    """Print *record* in *fmt* and exit with the matching code."""
    from gitprobe.output import json_report, terminal, yaml_report
    from gitprobe.tools import is_error, is_up_to_date

    failed = is_error(record) and not is_up_to_date(record)

    if fmt == "json":
        print(json_report.render(record))
    elif fmt == "yaml":
        print(yaml_report.render(record), end="")
    elif is_up_to_date(record):
        terminal.render_notice(record, console=console)
    elif failed:
        terminal.render_error(record, console=console)
    else:
        renderer(record, show_diff=show_diff)

    raise typer.Exit(code=1 if failed else 0)


# ── status ────────────────────────────────────────────────────────────────────


@app.command()
def status(
    repo: Optional[str] = typer.Option(None, "--repo", "-r", help="Path to the repository (default: cwd)"),
    untracked: Optional[bool] = typer.Option(None, "--untracked/--no-untracked", help="List untracked files"),
    context: Optional[int] = typer.Option(None, "--context", "-U", min=0, help="Diff context lines"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json | yaml"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .gitprobe.toml"),
    no_diff: bool = typer.Option(False, "--no-diff", help="Hide the diff in terminal output"),
) -> None:
    """Show branch, staged / unstaged / untracked files and the diff against HEAD."""
    from gitprobe.output import terminal
    from gitprobe.tools import git_status

    cfg = _load(repo, config, format)
    record = git_status(
        repo,
        include_untracked=cfg.status.include_untracked if untracked is None else untracked,
        diff_context_lines=cfg.status.diff_context_lines if context is None else context,
        runner=_runner(cfg),
    )
    _emit(record, cfg.output.format, terminal.render_status, not no_diff)


# ── pr-info ───────────────────────────────────────────────────────────────────


@app.command("pr-info")
def pr_info(
    repo: Optional[str] = typer.Option(None, "--repo", "-r", help="Path to the repository (default: cwd)"),
    target: Optional[str] = typer.Option(None, "--target", "-t", help="Target branch (default: main / master)"),
    context: Optional[int] = typer.Option(None, "--context", "-U", min=0, help="Diff context lines"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json | yaml"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .gitprobe.toml"),
    no_diff: bool = typer.Option(False, "--no-diff", help="Hide the diff in terminal output"),
) -> None:
    """Summarise the current branch against its target branch as a pull request."""
    from gitprobe.output import terminal
    from gitprobe.tools import pr_info as run_pr_info

    cfg = _load(repo, config, format)
    record = run_pr_info(
        repo,
        target_branch=target or cfg.compare.target_branch or None,
        diff_context_lines=cfg.compare.diff_context_lines if context is None else context,
        runner=_runner(cfg),
    )
    _emit(record, cfg.output.format, terminal.render_report, not no_diff)


# ── serve ─────────────────────────────────────────────────────────────────────


@app.command()
def serve(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .gitprobe.toml"),
) -> None:
    """Run the MCP server on stdio."""
    from gitprobe.server import main as run_server

    run_server(_load(None, config, None))


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init(
    repo: Optional[str] = typer.Option(None, "--repo", "-r", help="Directory to write the config into"),
) -> None:
    """Generate a starter .gitprobe.toml."""
    from gitprobe.config.defaults import CONFIG_FILENAME, DEFAULT_TOML

    root = Path(repo) if repo else Path.cwd()
    config_path = root / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"gitprobe {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr"),
) -> None:
    """Read-only git status and pull-request inspection."""
    _state["verbose"] = verbose
