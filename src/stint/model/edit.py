# SPDX-License-Identifier: MIT

from typing import TypedDict

import pendulum


class EntryEdit(TypedDict, total=False):
    """Raw user input for one entry. Only the keys present are being edited."""

    task_name: str
    tags: str
    start: str
    stop: str


class EntryPatch(TypedDict, total=False):
    task_name: str
    tags: list[str]
    start_time: pendulum.DateTime
    stop_time: pendulum.DateTime


class EntryForm(TypedDict):
    """Prefill texts for an editable entry."""

    task_name: str
    tags: str
    start: str
    stop: str
