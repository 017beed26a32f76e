# SPDX-License-Identifier: MIT

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from stint.initialize import initialize
from stint.terminal import configuration, entry, group, transfer
from stint.terminal.custom_typer import AliasedTyperGroup

app = typer.Typer(
    cls=AliasedTyperGroup,
    help="stint - Group and edit your recorded work intervals",
    no_args_is_help=True,
)
app.command(name="add, a", no_args_is_help=True)(entry.add)
app.command(name="list, ls")(group.list_groups)
app.command(name="show, s", no_args_is_help=True)(group.show)
app.command(name="edit, e", no_args_is_help=True)(entry.edit)
app.command(name="similar, sim", no_args_is_help=True)(entry.similar)
app.command(name="rename, r", no_args_is_help=True)(group.rename)
app.command(name="delete, d", no_args_is_help=True)(entry.delete)
app.command(name="delete-group, dg", no_args_is_help=True)(group.delete_group)
app.command(name="clear-history")(transfer.clear_history)
app.command(name="backup")(transfer.backup)
app.command(name="import", no_args_is_help=True)(transfer.import_store)
app.command(name="export-csv")(transfer.export_csv)
app.add_typer(configuration.app, name="config, c")


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log store and editor activity"),
    ] = False,
) -> None:
    """
    stint - Group and edit your recorded work intervals

    Global options that apply to all commands.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )
    ctx.obj = initialize()


def run() -> None:
    app()
