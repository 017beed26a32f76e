# SPDX-License-Identifier: MIT

from typing import Optional

from stint.model.task_group import GroupKey, TaskGroup
from stint.model.time_entry import TimeEntry
from stint.time import local_day_of


def entry_group_key(entry: TimeEntry) -> GroupKey:
    return (entry["task_name"], tuple(entry["tags"]), local_day_of(entry["start_time"]))


def group_key(group: TaskGroup) -> GroupKey:
    return (group["task_name"], tuple(group["tags"]), group["day"])


def make_group(key: GroupKey, entries: list[TimeEntry]) -> TaskGroup:
    task_name, tags, day = key
    ordered = sorted(entries, key=lambda entry: entry["start_time"])
    return {
        "task_name": task_name,
        "tags": list(tags),
        "day": day,
        "entry_ids": [entry["id"] for entry in ordered],
    }


def matching_entries(key: GroupKey, entries: list[TimeEntry]) -> list[TimeEntry]:
    """Entries whose current name, tags and day equal the key."""
    return [entry for entry in entries if entry_group_key(entry) == key]


def derive_groups(
    entries: list[TimeEntry], day: Optional[str] = None
) -> list[TaskGroup]:
    """
    Group entries by (task name, tags, local day).

    Groups come back newest day first; within a day the group whose first
    entry started most recently comes first.
    """
    buckets: dict[GroupKey, list[TimeEntry]] = {}
    for entry in entries:
        key = entry_group_key(entry)
        if day is not None and key[2] != day:
            continue
        buckets.setdefault(key, []).append(entry)

    groups = [make_group(key, members) for key, members in buckets.items()]
    first_start = {
        group_key(group): min(entry["start_time"] for entry in buckets[group_key(group)])
        for group in groups
    }
    return sorted(
        groups,
        key=lambda group: (group["day"], first_start[group_key(group)]),
        reverse=True,
    )


def group_total_seconds(entries: list[TimeEntry]) -> int:
    return sum(
        int((entry["stop_time"] - entry["start_time"]).total_seconds())
        for entry in entries
    )
