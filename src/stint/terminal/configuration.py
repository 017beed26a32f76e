# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from stint import configuration
from stint.app_context import AppContext
from stint.terminal.custom_typer import AliasedTyperGroup

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def __config_table(config: configuration.Configuration, title: Optional[str] = None) -> Table:
    table = Table(title=title)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row(
        "show_seconds",
        "✓ Enabled" if config["show_seconds"] else "✗ Disabled",
    )
    table.add_row(
        "delete_confirmation",
        "✓ Enabled" if config["delete_confirmation"] else "✗ Disabled",
    )
    table.add_row("data_path", str(configuration.get_data_path(config)))
    return table


@app.command("view, v")
def view(ctx: typer.Context) -> None:
    """Display current configuration settings."""
    app_context: AppContext = ctx.obj

    console = Console()
    console.print(__config_table(app_context.config))


@app.command("set, s")
def set(
    ctx: typer.Context,
    show_seconds: Annotated[
        Optional[bool],
        typer.Option(
            "--show-seconds/--no-show-seconds",
            help="Enter and display times with seconds",
        ),
    ] = None,
    delete_confirmation: Annotated[
        Optional[bool],
        typer.Option(
            "--delete-confirmation/--no-delete-confirmation",
            help="Ask before deleting entries or groups",
        ),
    ] = None,
    data_path: Annotated[
        Optional[str],
        typer.Option("--data-path", help="Directory holding entries.yaml"),
    ] = None,
    remove_data_path: Annotated[
        bool,
        typer.Option("--remove-data-path", help="Use the platform data directory"),
    ] = False,
) -> None:
    """
    Update configuration settings.
    """
    app_context: AppContext = ctx.obj

    app_context.configuration_repo.update_config(
        show_seconds=show_seconds,
        delete_confirmation=delete_confirmation,
        data_path=data_path,
        remove_data_path=remove_data_path,
    )
    app_context.configuration_repo.flush()

    console = Console()
    console.print("[green]Configuration updated successfully![/green]\n")
    console.print(__config_table(app_context.config, title="Updated Configuration"))
