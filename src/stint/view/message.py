# SPDX-License-Identifier: MIT

from rich.console import Console

from stint.model.task_group import GroupRefresh, RefreshStatus
from stint.service.validate import EntryValidationError, rule_messages
from stint.time import Precision

console = Console(stderr=True)


def error_view(message: str) -> None:
    console.print(f"[red]{message}[/red]")


def validation_error_view(error: EntryValidationError, precision: Precision) -> None:
    for message in rule_messages(error.violations, precision):
        error_view(message)


def refresh_view(refresh: GroupRefresh) -> None:
    if refresh["status"] is RefreshStatus.EMPTY:
        console.print("[yellow]group is now empty[/yellow]")
