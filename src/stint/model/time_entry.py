# SPDX-License-Identifier: MIT

from typing import TypedDict

import pendulum

from stint.model.entity_id import EntityId


class TimeEntry(TypedDict):
    id: EntityId
    task_name: str
    tags: list[str]  # ordered set, lowercase, no empties
    start_time: pendulum.DateTime
    stop_time: pendulum.DateTime
