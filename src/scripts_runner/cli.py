"""Typer commands exposed to the user."""
from __future__ import annotations

from pathlib import Path
from typing import List, NoReturn, Optional

import typer
from rich.console import Console

from .config import APP_NAME, DEFAULT_WATCH_INTERVAL, configure_logging, resolve_roots
from .errors import ScriptsError
from .hierarchy import HierarchyBuilder
from .models import ScriptRecord
from .registry import ScriptRegistry
from .rendering import build_table, build_tree
from .runner import run_record

console = Console()
app = typer.Typer(help="Discover and run the scripts declared in .scriptsrc files.")


def _registry(ctx: typer.Context) -> ScriptRegistry:
    return ctx.obj["registry"]


def _fail(message: str) -> NoReturn:
    console.print(f"[red]{message}[/red]")
    raise typer.Exit(code=1)


@app.callback()
def main(
    ctx: typer.Context,
    root: Optional[List[Path]] = typer.Option(
        None,
        "--root",
        "-r",
        help="Workspace folder to search (repeatable, defaults to the current directory).",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging."),
) -> None:
    configure_logging(verbose)
    roots = resolve_roots(root)
    ctx.obj = {"registry": ScriptRegistry(roots)}


@app.command("list")
def list_scripts(
    ctx: typer.Context,
    flat: bool = typer.Option(False, "--flat", help="Show a plain table instead of the tree."),
) -> None:
    """Show the discovered scripts."""

    registry = _registry(ctx)
    scripts = registry.get_all()
    if not scripts:
        console.print("[yellow]No scripts found. Run 'init' to create a .scriptsrc file.[/yellow]")
        return

    if flat:
        console.print(build_table(scripts))
    else:
        console.print(build_tree(HierarchyBuilder(registry), title=APP_NAME))


def _choose_script(scripts: tuple[ScriptRecord, ...]) -> ScriptRecord:
    for index, script in enumerate(scripts, start=1):
        console.print(f"[cyan]{index:>3}[/cyan] {script.name} [dim]{script.command}[/dim]")
    choice = typer.prompt("Select a script to run", type=int)
    if choice < 1 or choice > len(scripts):
        _fail(f"Invalid selection: {choice}.")
    return scripts[choice - 1]


@app.command("run")
def run(
    ctx: typer.Context,
    name: Optional[str] = typer.Argument(None, help="Script name (asks when omitted)"),
) -> None:
    """Run a script in a shell."""

    registry = _registry(ctx)
    if name is None:
        scripts = registry.get_all()
        if not scripts:
            console.print("[yellow]No scripts available.[/yellow]")
            raise typer.Exit(code=1)
        script = _choose_script(scripts)
    else:
        try:
            script = registry.get(name)
        except ScriptsError as exc:
            _fail(str(exc))

    try:
        process = run_record(script)
    except ScriptsError as exc:
        _fail(str(exc))
    raise typer.Exit(code=process.wait())


@app.command("add")
def add_script(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Script name, e.g. build"),
    command: str = typer.Argument(..., help="Command to run, e.g. 'npm run build'"),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="Description"),
    category: Optional[str] = typer.Option(None, "--category", "-c", help="Category"),
) -> None:
    """Add a new script."""

    record = ScriptRecord(name=name, command=command, description=description, category=category)
    try:
        _registry(ctx).add(record)
    except ScriptsError as exc:
        _fail(f"Cannot add script: {exc}")
    console.print(f"[green]Added script '{name}'.[/green]")


@app.command("edit")
def edit_script(
    ctx: typer.Context,
    old_name: str = typer.Argument(..., help="Current script name"),
    name: Optional[str] = typer.Option(None, "--name", help="New name"),
    command: Optional[str] = typer.Option(None, "--command", help="New command"),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="New description"),
    category: Optional[str] = typer.Option(None, "--category", "-c", help="New category"),
) -> None:
    """Change an existing script; omitted fields keep their value."""

    registry = _registry(ctx)
    try:
        current = registry.get(old_name)
        record = ScriptRecord(
            name=name if name is not None else current.name,
            command=command if command is not None else current.command,
            description=description if description is not None else current.description,
            category=category if category is not None else current.category,
        )
        registry.update(old_name, record)
    except ScriptsError as exc:
        _fail(f"Cannot update script: {exc}")
    console.print(f"[green]Updated script '{record.name}'.[/green]")


@app.command("remove")
def remove_script(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Script name"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Delete a script."""

    if not yes and not typer.confirm(f"Delete script '{name}'?"):
        console.print("[yellow]Nothing deleted.[/yellow]")
        return

    try:
        _registry(ctx).delete(name)
    except ScriptsError as exc:
        _fail(f"Cannot delete script: {exc}")
    console.print(f"[green]Deleted script '{name}'.[/green]")


@app.command("init")
def init(ctx: typer.Context) -> None:
    """Create a .scriptsrc file with an example script."""

    try:
        path = _registry(ctx).create_default_file()
    except ScriptsError as exc:
        _fail(f"Cannot create file: {exc}")
    console.print(f"[green]Created {path}.[/green]")


@app.command("path")
def show_path(
    ctx: typer.Context,
    open_file: bool = typer.Option(False, "--open", help="Open the file in the default editor"),
) -> None:
    """Print the scripts file that changes are written to."""

    path = _registry(ctx).primary_file_path
    if path is None:
        console.print("[yellow]No .scriptsrc file was found.[/yellow]")
        raise typer.Exit(code=1)

    typer.echo(str(path))
    if open_file:
        typer.launch(str(path))


@app.command("watch")
def watch_scripts(
    ctx: typer.Context,
    interval: float = typer.Option(
        DEFAULT_WATCH_INTERVAL, "--interval", help="Seconds between checks for changes"
    ),
) -> None:
    """Keep the script tree up to date while .scriptsrc files change."""

    from .watcher import watch

    registry = _registry(ctx)

    def show(current: ScriptRegistry) -> None:
        console.print(build_tree(HierarchyBuilder(current), title=APP_NAME))

    show(registry)
    watch(registry, interval=interval, on_reload=show)


@app.command("gui")
def open_gui(ctx: typer.Context) -> None:
    """Open the graphical script browser."""

    from .gui import launch_gui

    launch_gui(_registry(ctx))


__all__ = ["app"]
