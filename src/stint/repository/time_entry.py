# SPDX-License-Identifier: MIT

import datetime
import logging
import threading
from collections.abc import Iterable
from contextlib import AbstractContextManager
from copy import deepcopy
from pathlib import Path
from typing import Any, Optional, cast

import pendulum
from yaml import YAMLError, dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from stint import time
from stint.model.entity_id import EntityId, generate_entity_id
from stint.model.time_entry import TimeEntry
from stint.repository.entry_store import StoreError
from stint.service.tag import normalize_tags, render_tags

logger = logging.getLogger(__name__)

STORE_VERSION = 1
ENTRY_FIELDS = ("id", "task_name", "tags", "start_time", "stop_time")


class StoreFormatError(StoreError):
    """Raised when a store document is not structurally compatible."""

    pass


def _timestamp_text(value: Any) -> str:
    # unquoted timestamps come back from YAML as datetime objects
    if isinstance(value, datetime.datetime):
        return value.isoformat()
    if not isinstance(value, str):
        raise ValueError(f"not a timestamp: {value!r}")
    return value


def get_empty_store_document() -> dict[str, Any]:
    return {"version": STORE_VERSION, "entries": []}


def validate_store_document(data: Any) -> None:
    """
    Check that a loaded YAML document is a store this version can read.

    Raises:
        StoreFormatError: Naming the first structural problem found
    """
    if not isinstance(data, dict):
        raise StoreFormatError("store document is not a mapping")
    version = data.get("version")
    if not isinstance(version, int) or isinstance(version, bool):
        raise StoreFormatError("store document has no integer 'version'")
    if version > STORE_VERSION:
        raise StoreFormatError(
            f"store version {version} is newer than supported version {STORE_VERSION}"
        )
    entries = data.get("entries")
    if not isinstance(entries, list):
        raise StoreFormatError("store document has no 'entries' list")

    seen_ids: set[str] = set()
    for index, raw_entry in enumerate(entries):
        if not isinstance(raw_entry, dict):
            raise StoreFormatError(f"entry {index} is not a mapping")
        missing = [field for field in ENTRY_FIELDS if field not in raw_entry]
        if missing:
            raise StoreFormatError(
                f"entry {index} is missing field(s): {', '.join(missing)}"
            )

        raw_id = raw_entry["id"]
        if isinstance(raw_id, bool) or not isinstance(raw_id, (str, int)):
            raise StoreFormatError(f"entry {index} has an unusable id: {raw_id!r}")
        entry_id = str(raw_id)
        if entry_id in seen_ids:
            raise StoreFormatError(f"entry {index} repeats id {entry_id!r}")
        seen_ids.add(entry_id)

        if not isinstance(raw_entry["task_name"], str):
            raise StoreFormatError(f"entry {index} has a non-text task_name")
        # blank tags may come back from YAML as null
        if raw_entry["tags"] is not None and not isinstance(raw_entry["tags"], str):
            raise StoreFormatError(f"entry {index} has non-text tags")

        for field in ("start_time", "stop_time"):
            value = raw_entry[field]
            try:
                time.datetime_from_str(_timestamp_text(value))
            except ValueError as e:
                raise StoreFormatError(
                    f"entry {index} has an unreadable {field}: {value!r}"
                ) from e


class TimeEntryRepository:
    """
    Time entries persisted in a single YAML document.

    Every mutation is written through: the new entry list is built on a
    copy and the file is replaced before the cache adopts it, so a failed
    write leaves both untouched.
    """

    def __init__(self, path: Path) -> None:
        self._path = path
        self._entries: Optional[list[TimeEntry]] = None
        self._lock = threading.RLock()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def lock(self) -> AbstractContextManager[bool]:
        return self._lock

    @property
    def entries(self) -> list[TimeEntry]:
        if self._entries is None:
            self.__load_data()
        if self._entries is None:
            raise ValueError()
        return self._entries

    def __load_data(self) -> None:
        if not self._path.is_file():
            self._entries = []
            return
        try:
            data = load(self._path.read_text(), Loader=Loader)
        except (OSError, YAMLError) as e:
            raise StoreError(f"could not read store {self._path}: {e}") from e
        if data is None:
            self._entries = []
            return
        validate_store_document(data)
        self._entries = [
            self.__convert_entry_for_deserialization(raw_entry)
            for raw_entry in data["entries"]
        ]
        logger.debug("loaded %d entries from %s", len(self._entries), self._path)

    def __save_data(self, entries: list[TimeEntry]) -> None:
        data = get_empty_store_document()
        data["entries"] = [
            self.__convert_entry_for_serialization(deepcopy(entry))
            for entry in entries
        ]
        temp_path = self._path.with_name(f"{self._path.name}.tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            temp_path.write_text(dump(data, Dumper=Dumper, sort_keys=False))
            temp_path.replace(self._path)
        except OSError as e:
            raise StoreError(f"could not write store {self._path}: {e}") from e

    def __commit(self, entries: list[TimeEntry]) -> None:
        self.__save_data(entries)
        self._entries = entries

    def __convert_entry_for_serialization(self, entry: TimeEntry) -> dict[str, Any]:
        serializable_entry = cast(dict[str, Any], entry)
        serializable_entry["tags"] = render_tags(entry["tags"])
        serializable_entry["start_time"] = time.datetime_to_iso_str(
            entry["start_time"]
        )
        serializable_entry["stop_time"] = time.datetime_to_iso_str(entry["stop_time"])
        return serializable_entry

    def __convert_entry_for_deserialization(self, entry: dict[str, Any]) -> TimeEntry:
        return {
            "id": str(entry["id"]),
            "task_name": entry["task_name"],
            "tags": normalize_tags(entry["tags"] or ""),
            "start_time": time.datetime_from_str(_timestamp_text(entry["start_time"])),
            "stop_time": time.datetime_from_str(_timestamp_text(entry["stop_time"])),
        }

    def __index_of(self, entries: list[TimeEntry], id: EntityId) -> int:
        for index, entry in enumerate(entries):
            if entry["id"] == id:
                return index
        raise StoreError(f"no entry with id {id}")

    def reload(self) -> None:
        with self._lock:
            self._entries = None

    def get_all_entries(self) -> list[TimeEntry]:
        with self._lock:
            return deepcopy(self.entries)

    def get_entry(self, id: EntityId) -> TimeEntry:
        with self._lock:
            entries = self.entries
            return deepcopy(entries[self.__index_of(entries, id)])

    def get_by_ids(self, ids: Iterable[EntityId]) -> list[TimeEntry]:
        wanted = set(ids)
        with self._lock:
            found = [entry for entry in self.entries if entry["id"] in wanted]
            return deepcopy(sorted(found, key=lambda entry: entry["start_time"]))

    def create(
        self,
        task_name: str,
        tags: list[str],
        start_time: pendulum.DateTime,
        stop_time: pendulum.DateTime,
    ) -> EntityId:
        entry: TimeEntry = {
            "id": generate_entity_id(),
            "task_name": task_name,
            "tags": normalize_tags(render_tags(tags)),
            "start_time": start_time.in_tz("UTC"),
            "stop_time": stop_time.in_tz("UTC"),
        }
        with self._lock:
            entries = deepcopy(self.entries)
            entries.append(entry)
            self.__commit(entries)
        logger.info("created entry %s: %s", entry["id"], task_name)
        return entry["id"]

    def update_entry(
        self,
        id: EntityId,
        task_name: Optional[str] = None,
        tags: Optional[list[str]] = None,
        start_time: Optional[pendulum.DateTime] = None,
        stop_time: Optional[pendulum.DateTime] = None,
    ) -> None:
        with self._lock:
            entries = deepcopy(self.entries)
            entry = entries[self.__index_of(entries, id)]
            if task_name is not None:
                entry["task_name"] = task_name
            if tags is not None:
                entry["tags"] = normalize_tags(render_tags(tags))
            if start_time is not None:
                entry["start_time"] = start_time.in_tz("UTC")
            if stop_time is not None:
                entry["stop_time"] = stop_time.in_tz("UTC")
            self.__commit(entries)
        logger.info("updated entry %s", id)

    def update_task_name(self, id: EntityId, task_name: str) -> None:
        self.update_entry(id, task_name=task_name)

    def update_tags(self, id: EntityId, tags: list[str]) -> None:
        self.update_entry(id, tags=tags)

    def update_start_time(self, id: EntityId, start_time: pendulum.DateTime) -> None:
        self.update_entry(id, start_time=start_time)

    def update_stop_time(self, id: EntityId, stop_time: pendulum.DateTime) -> None:
        self.update_entry(id, stop_time=stop_time)

    def delete(self, id: EntityId) -> None:
        self.delete_many([id])

    def delete_many(self, ids: Iterable[EntityId]) -> None:
        doomed = set(ids)
        with self._lock:
            known = {entry["id"] for entry in self.entries}
            unknown = doomed - known
            if unknown:
                raise StoreError(f"no entry with id(s) {', '.join(sorted(unknown))}")
            entries = [
                deepcopy(entry) for entry in self.entries if entry["id"] not in doomed
            ]
            self.__commit(entries)
        logger.info("deleted %d entries", len(doomed))

    def delete_all(self) -> None:
        with self._lock:
            self.__commit([])
        logger.info("deleted all entries")
