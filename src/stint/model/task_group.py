# SPDX-License-Identifier: MIT

from enum import Enum
from typing import Optional, TypedDict

from stint.model.entity_id import EntityId

# (task_name, tags, local day as YYYY-MM-DD)
type GroupKey = tuple[str, tuple[str, ...], str]


class TaskGroup(TypedDict):
    task_name: str
    tags: list[str]
    day: str
    entry_ids: list[EntityId]  # ordered by start time, oldest first


class RefreshStatus(Enum):
    REFRESHED = "refreshed"
    EMPTY = "empty"


class GroupRefresh(TypedDict):
    status: RefreshStatus
    group: Optional[TaskGroup]
