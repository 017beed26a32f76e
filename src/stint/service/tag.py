# SPDX-License-Identifier: MIT

TAG_DELIMITER = "#"
TAG_JOINER = " #"


def normalize_tags(raw: str) -> list[str]:
    """
    Turn free-text tag input into the canonical ordered tag set.

    Fragments between '#' delimiters are trimmed, empty fragments are
    dropped, and the rest are lowercased and deduplicated keeping the
    first occurrence.

    >>> normalize_tags("  Work ## urgent #Work")
    ['work', 'urgent']
    """
    fragments = (fragment.strip() for fragment in raw.split(TAG_DELIMITER))
    return list(dict.fromkeys(fragment.lower() for fragment in fragments if fragment))


def render_tags(tags: list[str]) -> str:
    """Storage rendering of a tag set, e.g. 'work #urgent'."""
    return TAG_JOINER.join(tags)


def format_tags_input(tags: list[str]) -> str:
    """Editable rendering of a tag set, e.g. '#work #urgent'."""
    if len(tags) == 0:
        return ""
    return f"{TAG_DELIMITER}{render_tags(tags)}"


def split_name_and_tags(text: str) -> tuple[str, list[str]]:
    """
    Split combined 'Task name #tag #tag' input.

    Everything before the first '#' is the task name, the remainder is
    normalized as tags.
    """
    name, _, raw_tags = text.strip().partition(TAG_DELIMITER)
    return name.strip(), normalize_tags(raw_tags)


def render_name_with_tags(task_name: str, tags: list[str]) -> str:
    if len(tags) == 0:
        return task_name
    return f"{task_name} {format_tags_input(tags)}"
