"""CLI entry point for pane."""

from typing import Annotated

import typer
import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from pane import __version__
from pane.command_generator import generate_commands, resolve_windows
from pane.config import SessionConfig, config_to_dict, get_example_config, load_config, save_config
from pane.errors import PaneError
from pane.executor import attach_session, kill_session, list_running_sessions, run_session
from pane.layouts import LAYOUT_DESCRIPTIONS
from pane.preview import render_preview
from pane.templates import list_templates
from pane.utils import is_inside_tmux
from pane.xdg_paths import ensure_directories, get_default_config_path

app = typer.Typer(
    name="pane",
    help="A tmux session manager for creating consistent development environments.",
    no_args_is_help=False,
)

console = Console()
err_console = Console(stderr=True)

ConfigOption = Annotated[
    str | None,
    typer.Option(
        "--config",
        "-c",
        help="Config name (e.g. myproject) or file (e.g. path/to/config.yaml).",
    ),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"pane {__version__}")
        raise typer.Exit()


def _load_or_exit(config_name: str | None, verbose: bool = False) -> SessionConfig:
    """Load the configuration, turning errors into a clean exit."""
    try:
        config = load_config(config_name)
    except PaneError as e:
        err_console.print(f"[red]Error:[/] Could not load configuration: {escape(str(e))}")
        raise typer.Exit(1) from None

    if verbose:
        console.print(f"[dim]Loaded configuration from: {escape(config.config_path or '')}[/]")
        console.print(f"[dim]Session name: {escape(config.session)}[/]")
        console.print(f"[dim]Root directory: {escape(config.root)}[/]")
        console.print(f"[dim]Default layout: {escape(config.default_layout)}[/]")
        console.print(f"[dim]Available layouts: {escape(', '.join(config.layouts))}[/]")
        console.print(f"[dim]Windows: {len(config.windows)}[/]")
    return config


def _generate_or_exit(config: SessionConfig) -> list[str]:
    """Generate the session commands, turning errors into a clean exit."""
    try:
        return generate_commands(config)
    except PaneError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise typer.Exit(1) from None


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    preview: Annotated[
        bool,
        typer.Option("--preview", "-p", help="Show commands without executing them."),
    ] = False,
    config_name: ConfigOption = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show detailed information during execution."),
    ] = False,
    attach: Annotated[
        bool,
        typer.Option("--attach", "-a", help="Directly attach to the session (run this from a terminal)."),
    ] = False,
    no_attach: Annotated[
        bool,
        typer.Option("--no-attach", help="Create the session but don't automatically attach to it."),
    ] = False,
    print_session: Annotated[
        bool,
        typer.Option("--print-session", help="Print the session name from the config and exit."),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option("--version", callback=version_callback, is_eager=True, help="Show version."),
    ] = None,
) -> None:
    """Create a tmux session from a YAML description and attach to it."""
    # If a subcommand was invoked, don't run main logic
    if ctx.invoked_subcommand is not None:
        return

    config = _load_or_exit(config_name, verbose=verbose)

    if print_session:
        console.print(config.session, markup=False, highlight=False)
        raise typer.Exit()

    if preview:
        commands = _generate_or_exit(config)
        render_preview(config, commands, console, no_attach=no_attach)
        raise typer.Exit()

    if attach:
        if verbose:
            console.print("[dim]Attempting direct attachment[/]")
        console.print(f"\nAttaching to tmux session '{escape(config.session)}'...")
        raise typer.Exit(attach_session(config.session))

    auto_attach = not no_attach
    if auto_attach and is_inside_tmux():
        err_console.print("[yellow]Already inside a tmux session, not attaching.[/]")
        auto_attach = False

    if verbose:
        console.print(f"[dim]Auto-attach enabled: {auto_attach}[/]")

    try:
        run_session(config, auto_attach=auto_attach, console=console, verbose=verbose, err_console=err_console)
    except PaneError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise typer.Exit(1) from None


@app.command()
def init_config(
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Create the default configuration file."""
    ensure_directories()
    config_file = get_default_config_path()

    if config_file.exists() and not force:
        err_console.print(f"[yellow]Config file already exists:[/] {config_file}")
        raise typer.Exit(1)

    save_config(get_example_config(), config_file)
    console.print(f"[green]✓[/] Created config file: {config_file}")


@app.command()
def kill(config_name: ConfigOption = None) -> None:
    """Kill the configured session."""
    config = _load_or_exit(config_name)

    if not kill_session(config.session):
        err_console.print(f"[yellow]Session not running:[/] {escape(config.session)}")
        raise typer.Exit(1)
    console.print(f"[green]✓[/] Killed session: {escape(config.session)}")


@app.command()
def sessions() -> None:
    """List running tmux sessions."""
    running = list_running_sessions()
    if not running:
        console.print("[dim]No tmux sessions running.[/]")
        return
    for line in running:
        console.print(line, markup=False, highlight=False)


config_app = typer.Typer(
    name="config",
    help="Configuration management commands.",
)
app.add_typer(config_app, name="config")


@config_app.command("show")
def config_show(config_name: ConfigOption = None) -> None:
    """Show the normalized configuration."""
    config = _load_or_exit(config_name)
    console.print(f"[dim]# {escape(config.config_path or '')}[/]")
    console.print(
        yaml.dump(config_to_dict(config), default_flow_style=False, sort_keys=False),
        markup=False,
        highlight=False,
    )


@config_app.command("validate")
def config_validate(config_name: ConfigOption = None) -> None:
    """Check that the configuration loads and every window's layout resolves."""
    config = _load_or_exit(config_name)
    commands = _generate_or_exit(config)

    if not config.windows:
        err_console.print("[yellow]Warning:[/] No windows defined.")

    console.print(
        f"[green]✓[/] {escape(config.config_path or '')} is valid "
        f"({len(config.windows)} windows, {len(commands)} commands)."
    )


layout_app = typer.Typer(
    name="layout",
    help="Layout and template information.",
)
app.add_typer(layout_app, name="layout")


@layout_app.command("list")
def layout_list(config_name: ConfigOption = None) -> None:
    """List pane templates and the layouts of the configuration."""
    template_table = Table(title="Templates")
    template_table.add_column("Name", style="cyan")
    template_table.add_column("Panes")
    template_table.add_column("Description")
    for template in list_templates():
        template_table.add_row(template.name.value, ", ".join(template.positions), template.description)
    console.print(template_table)

    config = _load_or_exit(config_name)

    layout_table = Table(title="Layouts")
    layout_table.add_column("Name", style="cyan")
    layout_table.add_column("Template", style="dim")
    layout_table.add_column("Description")
    for name, layout in config.layouts.items():
        layout_table.add_row(name, layout.template, LAYOUT_DESCRIPTIONS.get(name, ""))
    console.print(layout_table)


@layout_app.command("windows")
def layout_windows(config_name: ConfigOption = None) -> None:
    """Show how each window of the configuration resolves."""
    config = _load_or_exit(config_name)

    table = Table(title=f"Windows of {escape(config.session)}")
    table.add_column("Target", style="cyan")
    table.add_column("Label")
    table.add_column("Layout", style="dim")
    table.add_column("Directory")
    for window in resolve_windows(config):
        table.add_row(window.target, window.label, window.layout_name, window.cwd)
    console.print(table)


if __name__ == "__main__":
    app()
