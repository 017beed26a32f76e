# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from stint.model.entity_id import EntityId
from stint.model.task_group import TaskGroup
from stint.model.time_entry import TimeEntry
from stint.service.group import group_total_seconds
from stint.service.tag import format_tags_input
from stint.time import Precision, format_duration, format_local_time
from stint.view.header import header

SHORT_ID_LENGTH = 8


def short_id(id: EntityId) -> str:
    return id[:SHORT_ID_LENGTH]


def groups_view(
    groups: list[tuple[TaskGroup, list[TimeEntry]]],
    precision: Precision,
    report_name: str = "task groups",
) -> None:
    header(report_name)

    groups_table = Table(box=box.SIMPLE)
    for column in ["id", "day", "task", "tags", "entries", "total"]:
        groups_table.add_column(column)

    for group, members in groups:
        groups_table.add_row(
            short_id(group["entry_ids"][-1]),
            group["day"],
            group["task_name"],
            format_tags_input(group["tags"]),
            str(len(members)),
            format_duration(group_total_seconds(members), precision),
        )

    console = Console()
    console.print(groups_table)


def single_group_view(
    group: TaskGroup, members: list[TimeEntry], precision: Precision
) -> None:
    header(f"{group['task_name']} {format_tags_input(group['tags'])}".strip())

    group_table = Table(box=box.SIMPLE, title=group["day"])
    for column in ["id", "start", "stop", "duration"]:
        group_table.add_column(column)

    # newest first, the way the history reads
    for entry in reversed(members):
        group_table.add_row(
            short_id(entry["id"]),
            format_local_time(entry["start_time"], precision),
            format_local_time(entry["stop_time"], precision),
            format_duration(group_total_seconds([entry]), precision),
        )
    total = format_duration(group_total_seconds(members), precision)
    group_table.add_row("", "", "[bold]total[/bold]", f"[bold]{total}[/bold]")

    console = Console()
    console.print(group_table)
