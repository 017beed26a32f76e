# SPDX-License-Identifier: MIT

from collections.abc import Iterable
from contextlib import AbstractContextManager
from pathlib import Path
from typing import Optional, Protocol

import pendulum

from stint.model.entity_id import EntityId
from stint.model.time_entry import TimeEntry


class StoreError(Exception):
    """Raised when the underlying store cannot complete a read or write."""

    pass


class EntryStore(Protocol):
    """Durable CRUD over individual time entries, keyed by entry id."""

    @property
    def path(self) -> Path: ...

    @property
    def lock(self) -> AbstractContextManager[bool]: ...

    def get_by_ids(self, ids: Iterable[EntityId]) -> list[TimeEntry]: ...

    def get_entry(self, id: EntityId) -> TimeEntry: ...

    def get_all_entries(self) -> list[TimeEntry]: ...

    def create(
        self,
        task_name: str,
        tags: list[str],
        start_time: pendulum.DateTime,
        stop_time: pendulum.DateTime,
    ) -> EntityId: ...

    def update_entry(
        self,
        id: EntityId,
        task_name: Optional[str] = None,
        tags: Optional[list[str]] = None,
        start_time: Optional[pendulum.DateTime] = None,
        stop_time: Optional[pendulum.DateTime] = None,
    ) -> None: ...

    def update_task_name(self, id: EntityId, task_name: str) -> None: ...

    def update_tags(self, id: EntityId, tags: list[str]) -> None: ...

    def update_start_time(self, id: EntityId, start_time: pendulum.DateTime) -> None: ...

    def update_stop_time(self, id: EntityId, stop_time: pendulum.DateTime) -> None: ...

    def delete(self, id: EntityId) -> None: ...

    def delete_many(self, ids: Iterable[EntityId]) -> None: ...

    def delete_all(self) -> None: ...

    def reload(self) -> None: ...
