# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from stint.app_context import AppContext
from stint.model.edit import EntryEdit
from stint.repository.entry_store import StoreError
from stint.service.validate import EntryValidationError
from stint.terminal.parse import resolve_entry_id
from stint.view.group import single_group_view
from stint.view.message import error_view, refresh_view, validation_error_view


def add(
    ctx: typer.Context,
    task_name: str,
    start: Annotated[
        str,
        typer.Option("--start", "-s", help="YYYY-MM-DD HH:MM[:SS], local time"),
    ],
    stop: Annotated[
        str,
        typer.Option("--stop", "-e", help="YYYY-MM-DD HH:MM[:SS], local time"),
    ],
    tags: Annotated[
        str, typer.Option("--tags", "-t", help='tags as "#work #urgent"')
    ] = "",
) -> None:
    """Record a finished time entry."""
    app_context: AppContext = ctx.obj
    editor = app_context.editor

    try:
        entry_id = editor.create_entry(task_name, tags, start, stop)
        group = editor.group_for_entry(entry_id)
    except EntryValidationError as e:
        validation_error_view(e, app_context.precision)
        raise typer.Exit(1)
    except StoreError as e:
        error_view(str(e))
        raise typer.Exit(1)

    single_group_view(group, editor.members(group), app_context.precision)


def edit(
    ctx: typer.Context,
    id: str,
    task_name: Annotated[Optional[str], typer.Option("--name", "-n")] = None,
    tags: Annotated[
        Optional[str], typer.Option("--tags", "-t", help='replace tags, "#a #b"')
    ] = None,
    start: Annotated[
        Optional[str],
        typer.Option("--start", "-s", help="YYYY-MM-DD HH:MM[:SS], local time"),
    ] = None,
    stop: Annotated[
        Optional[str],
        typer.Option("--stop", "-e", help="YYYY-MM-DD HH:MM[:SS], local time"),
    ] = None,
) -> None:
    """Edit one entry. Only the options given are changed."""
    app_context: AppContext = ctx.obj
    editor = app_context.editor

    entry_edit: EntryEdit = {}
    if task_name is not None:
        entry_edit["task_name"] = task_name
    if tags is not None:
        entry_edit["tags"] = tags
    if start is not None:
        entry_edit["start"] = start
    if stop is not None:
        entry_edit["stop"] = stop

    try:
        entry_id = resolve_entry_id(app_context.store, id)
        group = editor.group_for_entry(entry_id)
        editor.edit_single(group, entry_id, entry_edit)
        new_group = editor.group_for_entry(entry_id)
    except EntryValidationError as e:
        validation_error_view(e, app_context.precision)
        raise typer.Exit(1)
    except StoreError as e:
        error_view(str(e))
        raise typer.Exit(1)

    single_group_view(new_group, editor.members(new_group), app_context.precision)


def similar(
    ctx: typer.Context,
    id: Annotated[str, typer.Argument(help="id of any entry in the group")],
    task_name: Annotated[Optional[str], typer.Option("--name", "-n")] = None,
    tags: Annotated[Optional[str], typer.Option("--tags", "-t")] = None,
    start: Annotated[
        Optional[str],
        typer.Option("--start", "-s", help="defaults to one minute ago"),
    ] = None,
    stop: Annotated[
        Optional[str], typer.Option("--stop", "-e", help="defaults to now")
    ] = None,
) -> None:
    """Add a new entry to a group, copying its name and tags."""
    app_context: AppContext = ctx.obj
    editor = app_context.editor

    try:
        entry_id = resolve_entry_id(app_context.store, id)
        group = editor.group_for_entry(entry_id)
        defaults = editor.similar_defaults(group)
        new_id = editor.add_similar(
            group,
            start if start is not None else defaults["start"],
            stop if stop is not None else defaults["stop"],
            raw_tags=tags,
            task_name=task_name,
        )
        new_group = editor.group_for_entry(new_id)
    except EntryValidationError as e:
        validation_error_view(e, app_context.precision)
        raise typer.Exit(1)
    except StoreError as e:
        error_view(str(e))
        raise typer.Exit(1)

    single_group_view(new_group, editor.members(new_group), app_context.precision)


def delete(
    ctx: typer.Context,
    id: str,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="skip confirmation")] = False,
) -> None:
    """Delete one entry."""
    app_context: AppContext = ctx.obj
    editor = app_context.editor

    try:
        entry_id = resolve_entry_id(app_context.store, id)
        group = editor.group_for_entry(entry_id)
    except StoreError as e:
        error_view(str(e))
        raise typer.Exit(1)

    if app_context.config["delete_confirmation"] and not yes:
        if not typer.confirm("Delete task?"):
            raise typer.Exit(0)

    try:
        refresh = editor.delete_single(group, entry_id)
    except StoreError as e:
        error_view(str(e))
        raise typer.Exit(1)

    refresh_view(refresh)
    if refresh["group"] is not None:
        single_group_view(
            refresh["group"], editor.members(refresh["group"]), app_context.precision
        )
