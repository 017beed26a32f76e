# SPDX-License-Identifier: MIT

from typing import Optional

import typer

from stint.model.entity_id import EntityId
from stint.repository.entry_store import EntryStore
from stint.time import local_day_from_str


def resolve_entry_id(store: EntryStore, id_param: str) -> EntityId:
    """
    Resolve a full entry id or a unique prefix of one.

    Raises:
        typer.BadParameter: If no entry or more than one entry matches
    """
    id_param = id_param.strip()
    if not id_param:
        raise typer.BadParameter("No entry id provided")

    matches = [
        entry["id"] for entry in store.get_all_entries() if entry["id"].startswith(id_param)
    ]
    if id_param in matches:
        return id_param
    if len(matches) == 0:
        raise typer.BadParameter(f"No entry matches id '{id_param}'")
    if len(matches) > 1:
        raise typer.BadParameter(
            f"Id '{id_param}' is ambiguous ({len(matches)} entries match)"
        )
    return matches[0]


def parse_day(day_param: Optional[str]) -> Optional[str]:
    if day_param is None:
        return None
    try:
        return local_day_from_str(day_param)
    except ValueError:
        raise typer.BadParameter("Day must be in YYYY-MM-DD format")
