# SPDX-License-Identifier: MIT

import logging
from typing import Callable, Optional

import pendulum

from stint.model.edit import EntryEdit, EntryForm
from stint.model.entity_id import EntityId
from stint.model.task_group import GroupKey, GroupRefresh, RefreshStatus, TaskGroup
from stint.model.time_entry import TimeEntry
from stint.repository.entry_store import EntryStore, StoreError
from stint.service.group import (
    derive_groups,
    entry_group_key,
    group_key,
    make_group,
    matching_entries,
)
from stint.service.tag import (
    format_tags_input,
    normalize_tags,
    render_tags,
    split_name_and_tags,
)
from stint.service.validate import (
    EntryValidationError,
    Rule,
    validate_entry_edit,
    validate_new_entry,
)
from stint.time import Precision, format_local_datetime, now_utc

logger = logging.getLogger(__name__)


class GroupEditor:
    """
    Batch operations over task groups.

    A TaskGroup handed to these methods is only a cached view. Membership
    is always re-derived from the values currently stored, so an id that
    was moved out of the group by an earlier edit is never touched by a
    later group operation.

    Mutations are serialized through the store's lock. Store failures are
    raised as StoreError as soon as they happen; writes that already
    committed earlier in the same batch are not rolled back.
    """

    def __init__(
        self,
        store: EntryStore,
        precision: Precision,
        clock: Callable[[], pendulum.DateTime] = now_utc,
    ) -> None:
        self.store = store
        self.precision = precision
        self.clock = clock

    def groups(self, day: Optional[str] = None) -> list[TaskGroup]:
        return derive_groups(self.store.get_all_entries(), day)

    def find_group(self, key: GroupKey) -> Optional[TaskGroup]:
        members = matching_entries(key, self.store.get_all_entries())
        if len(members) == 0:
            return None
        return make_group(key, members)

    def group_for_entry(self, entry_id: EntityId) -> TaskGroup:
        with self.store.lock:
            entry = self.store.get_entry(entry_id)
            group = self.find_group(entry_group_key(entry))
        if group is None:
            raise StoreError(f"entry {entry_id} disappeared while grouping")
        return group

    def members(self, group: TaskGroup) -> list[TimeEntry]:
        """Stored entries of the group that still match its key, oldest first."""
        return matching_entries(
            group_key(group), self.store.get_by_ids(group["entry_ids"])
        )

    def refresh(self, group: TaskGroup) -> GroupRefresh:
        with self.store.lock:
            members = self.members(group)

        dropped = len(group["entry_ids"]) - len(members)
        if dropped > 0:
            logger.debug(
                "refresh of %r on %s dropped %d entries",
                group["task_name"],
                group["day"],
                dropped,
            )
        if len(members) == 0:
            return {"status": RefreshStatus.EMPTY, "group": None}
        return {
            "status": RefreshStatus.REFRESHED,
            "group": make_group(group_key(group), members),
        }

    def rename_group(
        self, group: TaskGroup, new_name: str, new_tags: str
    ) -> GroupRefresh:
        """
        Give every entry of the group a new name and tag set.

        The result is the group for the new key derived from the whole
        store, so entries that now collide with a pre-existing group are
        reported together with that group's members.

        Raises:
            EntryValidationError: With NAME_REQUIRED if the trimmed name is
                empty; the store is not touched
        """
        task_name = new_name.strip()
        if not task_name:
            raise EntryValidationError([Rule.NAME_REQUIRED])
        tags = normalize_tags(new_tags)

        with self.store.lock:
            members = self.members(group)
            for entry in members:
                self.store.update_entry(entry["id"], task_name=task_name, tags=tags)
            logger.info(
                "renamed %d entries from %r to %r",
                len(members),
                group["task_name"],
                task_name,
            )
            renamed = self.find_group((task_name, tuple(tags), group["day"]))

        if renamed is None:
            return {"status": RefreshStatus.EMPTY, "group": None}
        return {"status": RefreshStatus.REFRESHED, "group": renamed}

    def rename_group_from_text(self, group: TaskGroup, text: str) -> GroupRefresh:
        """Rename from combined 'New name #tag #tag' input."""
        task_name, tags = split_name_and_tags(text)
        return self.rename_group(group, task_name, render_tags(tags))

    def edit_single(
        self, group: TaskGroup, entry_id: EntityId, edit: EntryEdit
    ) -> GroupRefresh:
        """
        Validate and apply an edit to one entry of the group.

        Either every field of the edit is written in a single store update
        or, when any rule is violated, nothing is.

        Raises:
            EntryValidationError: Listing every violated rule
            StoreError: If the entry is gone or the write fails
        """
        with self.store.lock:
            entry = self.store.get_entry(entry_id)
            patch = validate_entry_edit(entry, edit, self.precision, self.clock())
            if patch:
                self.store.update_entry(entry_id, **patch)
                logger.info("edited entry %s: %s", entry_id, ", ".join(patch))
            return self.refresh(group)

    def delete_single(self, group: TaskGroup, entry_id: EntityId) -> GroupRefresh:
        """
        Delete one entry.

        The result is EMPTY when that was the last member of the group,
        otherwise REFRESHED with the remaining members.
        """
        with self.store.lock:
            self.store.delete(entry_id)
            return self.refresh(group)

    def delete_group(self, group: TaskGroup) -> list[EntityId]:
        """
        Delete the entries that still belong to the group.

        Ids whose stored name, tags or day no longer match the group are
        filtered out first and left alone. Returns the ids deleted.
        """
        with self.store.lock:
            ids = [entry["id"] for entry in self.members(group)]
            stale = len(group["entry_ids"]) - len(ids)
            if stale > 0:
                logger.warning(
                    "skipping %d entries no longer in group %r on %s",
                    stale,
                    group["task_name"],
                    group["day"],
                )
            if ids:
                self.store.delete_many(ids)
        logger.info("deleted group %r on %s", group["task_name"], group["day"])
        return ids

    def create_entry(
        self, task_name: str, raw_tags: str, start_text: str, stop_text: str
    ) -> EntityId:
        """
        Create an entry from raw user input.

        Raises:
            EntryValidationError: Listing every violated rule
        """
        patch = validate_new_entry(
            {
                "task_name": task_name,
                "tags": raw_tags,
                "start": start_text,
                "stop": stop_text,
            },
            self.precision,
            self.clock(),
        )
        with self.store.lock:
            return self.store.create(
                patch["task_name"],
                patch["tags"],
                patch["start_time"],
                patch["stop_time"],
            )

    def add_similar(
        self,
        group: TaskGroup,
        start_text: str,
        stop_text: str,
        raw_tags: Optional[str] = None,
        task_name: Optional[str] = None,
    ) -> EntityId:
        """Create a new entry with the group's name and tags unless overridden."""
        if task_name is None:
            task_name = group["task_name"]
        if raw_tags is None:
            raw_tags = format_tags_input(group["tags"])
        return self.create_entry(task_name, raw_tags, start_text, stop_text)

    def similar_defaults(self, group: TaskGroup) -> EntryForm:
        stop = self.clock()
        start = stop.subtract(minutes=1)
        return {
            "task_name": group["task_name"],
            "tags": format_tags_input(group["tags"]),
            "start": format_local_datetime(start, self.precision),
            "stop": format_local_datetime(stop, self.precision),
        }

    def delete_history(self) -> None:
        with self.store.lock:
            self.store.delete_all()
