# SPDX-License-Identifier: MIT

from stint.model.edit import EntryEdit, EntryForm
from stint.model.time_entry import TimeEntry
from stint.service.tag import format_tags_input
from stint.time import Precision, format_local_datetime


def entry_form(entry: TimeEntry, precision: Precision) -> EntryForm:
    return {
        "task_name": entry["task_name"],
        "tags": format_tags_input(entry["tags"]),
        "start": format_local_datetime(entry["start_time"], precision),
        "stop": format_local_datetime(entry["stop_time"], precision),
    }


def edit_from_form(entry: TimeEntry, form: EntryForm, precision: Precision) -> EntryEdit:
    """
    Keep only the form fields the user actually changed.

    A time field left as prefilled is not re-parsed, so stored seconds
    survive an edit made with seconds hidden.
    """
    prefill = entry_form(entry, precision)
    edit: EntryEdit = {}
    if form["task_name"] != prefill["task_name"]:
        edit["task_name"] = form["task_name"]
    if form["tags"] != prefill["tags"]:
        edit["tags"] = form["tags"]
    if form["start"] != prefill["start"]:
        edit["start"] = form["start"]
    if form["stop"] != prefill["stop"]:
        edit["stop"] = form["stop"]
    return edit
