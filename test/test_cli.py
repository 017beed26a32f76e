"""
End-to-end tests for the command line interface.
"""

from __future__ import annotations

import pytest
from typer.testing import CliRunner

from stint.repository.time_entry import TimeEntryRepository
from stint.terminal.app import app

runner = CliRunner()


@pytest.fixture
def entries_store(tmp_path):
    """
    Open the store the CLI writes to under the isolated data path.

    Returns
    -------
    TimeEntryRepository
        Repository over the CLI's entries file.
    """
    return TimeEntryRepository(tmp_path / "data" / "entries.yaml")


def invoke(*args, input=None):
    return runner.invoke(app, list(args), input=input)


def add(name="Write", start="2024-01-01 09:00:00", stop="2024-01-01 09:30:00",
        tags="#work"):
    result = invoke("add", name, "--start", start, "--stop", stop, "--tags", tags)
    assert result.exit_code == 0, result.output
    return result


def only_entry(store):
    store.reload()
    [entry] = store.get_all_entries()
    return entry


def test_add_and_list(entries_store):
    """
    Ensure added entries are grouped in the listing.

    Returns
    -------
    None
        This test asserts add/list.
    """
    add()
    add(start="2024-01-01 10:00:00", stop="2024-01-01 10:15:00")

    result = invoke("ls")

    assert result.exit_code == 0
    assert "Write" in result.output
    assert "#work" in result.output
    assert "00:45:00" in result.output


def test_list_day_filter(entries_store):
    """
    Ensure --day restricts the listing and rejects bad input.

    Returns
    -------
    None
        This test asserts day filtering.
    """
    add()
    add(name="Read", start="2024-01-02 09:00:00", stop="2024-01-02 09:10:00")

    result = invoke("list", "--day", "2024-01-02")
    assert result.exit_code == 0
    assert "Read" in result.output
    assert "Write" not in result.output

    assert invoke("list", "--day", "January").exit_code == 2


def test_add_invalid_time(entries_store):
    """
    Ensure a malformed time fails with the format instruction.

    Returns
    -------
    None
        This test asserts add validation output.
    """
    result = invoke("add", "Write", "--start", "2024-01-01 09:00", "--stop",
                    "2024-01-01 09:30:00")
    assert result.exit_code == 1
    assert "*Use the format YYYY-MM-DD HH:MM:SS" in result.output
    assert entries_store.get_all_entries() == []


def test_edit_rejects_start_after_stop(entries_store):
    """
    Ensure an out of range edit fails and leaves the entry alone.

    Returns
    -------
    None
        This test asserts edit validation output.
    """
    add()
    entry = only_entry(entries_store)

    result = invoke("edit", entry["id"][:8], "--start", "2024-01-01 09:45:00")

    assert result.exit_code == 1
    assert "*Start time cannot be later than stop time." in result.output
    assert only_entry(entries_store) == entry


def test_edit_name(entries_store):
    """
    Ensure an edit by id prefix updates the entry.

    Returns
    -------
    None
        This test asserts edit.
    """
    add()
    entry = only_entry(entries_store)

    result = invoke("e", entry["id"][:6], "--name", "Review")

    assert result.exit_code == 0, result.output
    assert only_entry(entries_store)["task_name"] == "Review"


def test_unknown_id_is_usage_error(entries_store):
    """
    Ensure an id matching nothing is rejected.

    Returns
    -------
    None
        This test asserts id resolution.
    """
    add()
    result = invoke("show", "zzzz")
    assert result.exit_code == 2


def test_delete_last_entry(entries_store):
    """
    Ensure deleting the last member reports the empty group.

    Returns
    -------
    None
        This test asserts delete.
    """
    add()
    entry = only_entry(entries_store)

    result = invoke("delete", entry["id"])

    assert result.exit_code == 0
    assert "group is now empty" in result.output
    entries_store.reload()
    assert entries_store.get_all_entries() == []


def test_similar_joins_group(entries_store):
    """
    Ensure a similar entry copies name and tags.

    Returns
    -------
    None
        This test asserts similar.
    """
    add()
    entry = only_entry(entries_store)

    result = invoke("similar", entry["id"], "--start", "2024-01-01 11:00:00",
                    "--stop", "2024-01-01 11:20:00")

    assert result.exit_code == 0, result.output
    entries_store.reload()
    entries = entries_store.get_all_entries()
    assert len(entries) == 2
    assert {(e["task_name"], tuple(e["tags"])) for e in entries} == {
        ("Write", ("work",))
    }


def test_rename_group(entries_store):
    """
    Ensure every entry of the group is renamed.

    Returns
    -------
    None
        This test asserts rename.
    """
    add()
    add(start="2024-01-01 10:00:00", stop="2024-01-01 10:15:00")
    entries_store.reload()
    entry_id = entries_store.get_all_entries()[0]["id"]

    result = invoke("rename", entry_id, "Review #Docs")

    assert result.exit_code == 0, result.output
    entries_store.reload()
    assert {(e["task_name"], tuple(e["tags"])) for e in entries_store.get_all_entries()} == {
        ("Review", ("docs",))
    }


def test_rename_blank_name(entries_store):
    """
    Ensure a blank rename is rejected.

    Returns
    -------
    None
        This test asserts rename validation.
    """
    add()
    entry = only_entry(entries_store)
    result = invoke("rename", entry["id"], "#only-tags")
    assert result.exit_code == 1
    assert "*Task name cannot be blank." in result.output


def test_delete_group(entries_store):
    """
    Ensure the whole group is deleted and others survive.

    Returns
    -------
    None
        This test asserts delete-group.
    """
    add()
    add(start="2024-01-01 10:00:00", stop="2024-01-01 10:15:00")
    add(name="Read")
    entries_store.reload()
    write_id = next(
        e["id"] for e in entries_store.get_all_entries() if e["task_name"] == "Write"
    )

    result = invoke("dg", write_id)

    assert result.exit_code == 0
    assert "deleted 2 entries" in result.output
    assert only_entry(entries_store)["task_name"] == "Read"


def test_clear_history_requires_confirmation_word(entries_store):
    """
    Ensure history is cleared only after typing the confirmation word.

    Returns
    -------
    None
        This test asserts clear-history.
    """
    add()

    result = invoke("clear-history", input="no\n")
    assert result.exit_code == 0
    entries_store.reload()
    assert len(entries_store.get_all_entries()) == 1

    result = invoke("clear-history", input="DELETE\n")
    assert result.exit_code == 0
    entries_store.reload()
    assert entries_store.get_all_entries() == []


def test_backup_and_import(entries_store, tmp_path):
    """
    Ensure a backup can be imported back after clearing history.

    Returns
    -------
    None
        This test asserts backup/import.
    """
    add()
    backup = tmp_path / "backup.yaml"

    assert invoke("backup", str(backup)).exit_code == 0
    invoke("clear-history", input="DELETE\n")

    result = invoke("import", str(backup), "--yes")

    assert result.exit_code == 0, result.output
    assert only_entry(entries_store)["task_name"] == "Write"


def test_import_incompatible(entries_store, tmp_path):
    """
    Ensure an incompatible import fails with exit code 1.

    Returns
    -------
    None
        This test asserts import error output.
    """
    add()
    source = tmp_path / "bad.yaml"
    source.write_text("hello\n")

    result = invoke("import", str(source), "--yes")

    assert result.exit_code == 1
    assert only_entry(entries_store)["task_name"] == "Write"


def test_config_set_switches_precision(entries_store):
    """
    Ensure turning seconds off changes the accepted input format.

    Returns
    -------
    None
        This test asserts config set.
    """
    result = invoke("config", "set", "--no-show-seconds")
    assert result.exit_code == 0, result.output

    add(start="2024-01-01 09:00", stop="2024-01-01 09:30")
    assert invoke("c", "view").exit_code == 0


@pytest.mark.parametrize(
    "args",
    [
        ("list",),
        ("show", "abc"),
        ("edit", "abc", "--name", "x"),
        ("similar", "abc"),
        ("rename", "abc", "New"),
        ("delete", "abc", "--yes"),
        ("delete-group", "abc", "--yes"),
        ("export-csv",),
    ],
)
def test_unreadable_store_exits_cleanly(tmp_path, args):
    """
    Ensure a malformed store file is reported instead of crashing.

    Returns
    -------
    None
        This test asserts store error handling in every reading command.
    """
    store_path = tmp_path / "data" / "entries.yaml"
    store_path.parent.mkdir(parents=True)
    store_path.write_text("version: 1\nentries: 3\n")

    result = invoke(*args)

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "no 'entries' list" in result.output


def test_export_csv(entries_store, tmp_path):
    """
    Ensure entries are exported as CSV rows.

    Returns
    -------
    None
        This test asserts export-csv.
    """
    add()
    destination = tmp_path / "entries.csv"

    result = invoke("export-csv", str(destination))

    assert result.exit_code == 0, result.output
    assert "exported 1 entries" in result.output
    lines = destination.read_text().splitlines()
    assert lines[0] == "id,task_name,tags,start,stop,duration"
    assert lines[1].endswith(",Write,#work,2024-01-01 09:00:00,2024-01-01 09:30:00,00:30:00")
