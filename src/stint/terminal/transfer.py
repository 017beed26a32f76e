# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Annotated

import typer

from stint.app_context import AppContext
from stint.repository.entry_store import StoreError
from stint.service.transfer import (
    TransferError,
    default_backup_name,
    default_export_name,
)
from stint.view.message import error_view

CLEAR_HISTORY_CONFIRMATION = "DELETE"


def backup(
    ctx: typer.Context,
    destination: Annotated[
        Path, typer.Argument(help="file to write the backup to")
    ] = Path(default_backup_name()),
) -> None:
    """Copy the entry store to a backup file."""
    app_context: AppContext = ctx.obj

    try:
        app_context.transfer.backup(destination)
    except TransferError as e:
        error_view(str(e))
        raise typer.Exit(1)

    typer.echo(f"backed up to {destination}")


def import_store(
    ctx: typer.Context,
    source: Annotated[Path, typer.Argument(help="backup file to import")],
    yes: Annotated[bool, typer.Option("--yes", "-y", help="skip confirmation")] = False,
) -> None:
    """Replace the entry store with a backup file."""
    app_context: AppContext = ctx.obj

    if not yes and not typer.confirm("This replaces ALL of your task history. Continue?"):
        raise typer.Exit(0)

    try:
        app_context.transfer.import_store(source)
    except TransferError as e:
        error_view(str(e))
        raise typer.Exit(1)

    typer.echo(f"imported {source}")


def export_csv(
    ctx: typer.Context,
    destination: Annotated[
        Path, typer.Argument(help="CSV file to write")
    ] = Path(default_export_name()),
) -> None:
    """Export every entry to a CSV file."""
    app_context: AppContext = ctx.obj

    try:
        count = app_context.transfer.export_csv(destination, app_context.precision)
    except (TransferError, StoreError) as e:
        error_view(str(e))
        raise typer.Exit(1)

    typer.echo(f"exported {count} entries to {destination}")


def clear_history(ctx: typer.Context) -> None:
    """Delete ALL task history."""
    app_context: AppContext = ctx.obj

    typer.echo("This will delete ALL of your task history.")
    answer = typer.prompt(
        f"Type {CLEAR_HISTORY_CONFIRMATION} to proceed", default="", show_default=False
    )
    if answer.strip().upper() != CLEAR_HISTORY_CONFIRMATION:
        raise typer.Exit(0)

    try:
        app_context.editor.delete_history()
    except StoreError as e:
        error_view(str(e))
        raise typer.Exit(1)

    typer.echo("history deleted")
