# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from stint.app_context import AppContext
from stint.repository.entry_store import StoreError
from stint.service.tag import render_name_with_tags
from stint.service.validate import EntryValidationError
from stint.terminal.parse import parse_day, resolve_entry_id
from stint.view.group import groups_view, single_group_view
from stint.view.message import error_view, refresh_view, validation_error_view


def list_groups(
    ctx: typer.Context,
    day: Annotated[
        Optional[str],
        typer.Option("--day", "-d", parser=parse_day, help="YYYY-MM-DD"),
    ] = None,
) -> None:
    """List task groups, newest day first."""
    app_context: AppContext = ctx.obj
    editor = app_context.editor

    try:
        groups = [(group, editor.members(group)) for group in editor.groups(day)]
    except StoreError as e:
        error_view(str(e))
        raise typer.Exit(1)

    groups_view(groups, app_context.precision)


def show(
    ctx: typer.Context,
    id: Annotated[str, typer.Argument(help="id of any entry in the group")],
) -> None:
    """Show the entries of a task group."""
    app_context: AppContext = ctx.obj
    editor = app_context.editor

    try:
        entry_id = resolve_entry_id(app_context.store, id)
        group = editor.group_for_entry(entry_id)
        members = editor.members(group)
    except StoreError as e:
        error_view(str(e))
        raise typer.Exit(1)

    single_group_view(group, members, app_context.precision)


def rename(
    ctx: typer.Context,
    id: Annotated[str, typer.Argument(help="id of any entry in the group")],
    name_with_tags: Annotated[
        Optional[str],
        typer.Argument(help='new name and tags, e.g. "Write docs #work"'),
    ] = None,
) -> None:
    """Rename a whole task group and replace its tags."""
    app_context: AppContext = ctx.obj
    editor = app_context.editor

    try:
        entry_id = resolve_entry_id(app_context.store, id)
        group = editor.group_for_entry(entry_id)
    except StoreError as e:
        error_view(str(e))
        raise typer.Exit(1)

    if name_with_tags is None:
        name_with_tags = typer.prompt(
            "New Name #tags",
            default=render_name_with_tags(group["task_name"], group["tags"]),
        )

    try:
        refresh = editor.rename_group_from_text(group, name_with_tags)
    except EntryValidationError as e:
        validation_error_view(e, app_context.precision)
        raise typer.Exit(1)
    except StoreError as e:
        error_view(str(e))
        raise typer.Exit(1)

    refresh_view(refresh)
    if refresh["group"] is not None:
        single_group_view(
            refresh["group"], editor.members(refresh["group"]), app_context.precision
        )


def delete_group(
    ctx: typer.Context,
    id: Annotated[str, typer.Argument(help="id of any entry in the group")],
    yes: Annotated[bool, typer.Option("--yes", "-y", help="skip confirmation")] = False,
) -> None:
    """Delete every entry of a task group."""
    app_context: AppContext = ctx.obj
    editor = app_context.editor

    try:
        entry_id = resolve_entry_id(app_context.store, id)
        group = editor.group_for_entry(entry_id)
    except StoreError as e:
        error_view(str(e))
        raise typer.Exit(1)

    if app_context.config["delete_confirmation"] and not yes:
        typer.echo("This will delete all occurrences of this task on this day.")
        if not typer.confirm("Delete All?"):
            raise typer.Exit(0)

    try:
        deleted_ids = editor.delete_group(group)
    except StoreError as e:
        error_view(str(e))
        raise typer.Exit(1)

    typer.echo(f"deleted {len(deleted_ids)} entries")
