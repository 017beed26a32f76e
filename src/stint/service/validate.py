# SPDX-License-Identifier: MIT

from enum import Enum
from typing import Optional

import pendulum

from stint.model.edit import EntryEdit, EntryPatch
from stint.model.time_entry import TimeEntry
from stint.service.tag import normalize_tags
from stint.time import (
    InvalidTimeFormatError,
    Precision,
    input_format_hint,
    now_utc,
    parse_local_datetime,
)


class Rule(Enum):
    # Declaration order is the order violations are reported in.
    NAME_REQUIRED = "name_required"
    START_FORMAT = "start_format"
    STOP_FORMAT = "stop_format"
    FUTURE_TIME = "future_time"
    RANGE_INVALID = "range_invalid"


class EntryValidationError(Exception):
    """Raised when a proposed entry edit violates one or more rules."""

    def __init__(self, violations: list[Rule]) -> None:
        super().__init__(", ".join(rule.value for rule in violations))
        self.violations = violations


def rule_message(rule: Rule, precision: Precision) -> str:
    match rule:
        case Rule.NAME_REQUIRED:
            return "*Task name cannot be blank."
        case Rule.START_FORMAT | Rule.STOP_FORMAT:
            return f"*Use the format {input_format_hint(precision)}"
        case Rule.FUTURE_TIME:
            return "*Time cannot be in the future."
        case Rule.RANGE_INVALID:
            return "*Start time cannot be later than stop time."


def rule_messages(violations: list[Rule], precision: Precision) -> list[str]:
    # both format rules share one instruction
    return list(dict.fromkeys(rule_message(rule, precision) for rule in violations))


def __evaluate(
    entry: Optional[TimeEntry],
    edit: EntryEdit,
    precision: Precision,
    now: pendulum.DateTime,
) -> tuple[EntryPatch, list[Rule]]:
    """
    Evaluate every rule independently against one proposed edit.

    With no existing entry the edit is a fresh creation: the name, start
    and stop are all required. Otherwise only the keys present in the edit
    are checked, and an edited time is ranged against the stored value of
    the field that is not being edited.
    """
    creating = entry is None
    violations: set[Rule] = set()
    patch: EntryPatch = {}

    if "task_name" in edit or creating:
        task_name = edit.get("task_name", "").strip()
        if task_name:
            patch["task_name"] = task_name
        else:
            violations.add(Rule.NAME_REQUIRED)

    if "tags" in edit:
        patch["tags"] = normalize_tags(edit["tags"])
    elif creating:
        patch["tags"] = []

    resolved: dict[str, Optional[pendulum.DateTime]] = {}
    for field, rule in (("start", Rule.START_FORMAT), ("stop", Rule.STOP_FORMAT)):
        stored_field = f"{field}_time"
        if field not in edit:
            if creating:
                violations.add(rule)
                resolved[field] = None
            else:
                resolved[field] = entry[stored_field]  # type: ignore[literal-required, index]
            continue
        try:
            instant = parse_local_datetime(edit[field], precision)  # type: ignore[literal-required]
        except InvalidTimeFormatError:
            violations.add(rule)
            resolved[field] = None
            continue
        if instant > now:
            violations.add(Rule.FUTURE_TIME)
        patch[stored_field] = instant  # type: ignore[literal-required]
        resolved[field] = instant

    start = resolved["start"]
    stop = resolved["stop"]
    if start is not None and stop is not None and start > stop:
        violations.add(Rule.RANGE_INVALID)

    return patch, [rule for rule in Rule if rule in violations]


def check_entry_edit(
    entry: TimeEntry,
    edit: EntryEdit,
    precision: Precision,
    now: Optional[pendulum.DateTime] = None,
) -> list[Rule]:
    _, violations = __evaluate(entry, edit, precision, now or now_utc())
    return violations


def validate_entry_edit(
    entry: TimeEntry,
    edit: EntryEdit,
    precision: Precision,
    now: Optional[pendulum.DateTime] = None,
) -> EntryPatch:
    """
    Turn proposed edits for an existing entry into an applyable patch.

    Raises:
        EntryValidationError: Listing every violated rule; nothing in the
            edit may be applied in that case
    """
    patch, violations = __evaluate(entry, edit, precision, now or now_utc())
    if violations:
        raise EntryValidationError(violations)
    return patch


def check_new_entry(
    edit: EntryEdit,
    precision: Precision,
    now: Optional[pendulum.DateTime] = None,
) -> list[Rule]:
    _, violations = __evaluate(None, edit, precision, now or now_utc())
    return violations


def validate_new_entry(
    edit: EntryEdit,
    precision: Precision,
    now: Optional[pendulum.DateTime] = None,
) -> EntryPatch:
    """
    Validate input for a brand new entry.

    The returned patch always carries task_name, tags, start_time and
    stop_time.

    Raises:
        EntryValidationError: Listing every violated rule
    """
    patch, violations = __evaluate(None, edit, precision, now or now_utc())
    if violations:
        raise EntryValidationError(violations)
    return patch
