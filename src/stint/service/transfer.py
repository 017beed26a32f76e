# SPDX-License-Identifier: MIT

import csv
import logging
import shutil
from pathlib import Path
from typing import Callable

from yaml import YAMLError, load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]

from stint.repository.entry_store import EntryStore
from stint.repository.time_entry import StoreFormatError, validate_store_document
from stint.service.group import group_total_seconds
from stint.service.tag import format_tags_input
from stint.time import Precision, format_duration, format_local_datetime

logger = logging.getLogger(__name__)

DEFAULT_BACKUP_NAME = "stint_backup.yaml"
DEFAULT_EXPORT_NAME = "stint_export.csv"
CSV_FIELDS = ("id", "task_name", "tags", "start", "stop", "duration")


def default_backup_name() -> str:
    return DEFAULT_BACKUP_NAME


def default_export_name() -> str:
    return DEFAULT_EXPORT_NAME


class TransferError(Exception):
    pass


class TransferIoError(TransferError):
    """The file system refused the copy (permissions, disk full, missing file)."""

    pass


class IncompatibleFormatError(TransferError):
    """The file to import is not a store this version can read."""

    pass


class StoreTransferService:
    """
    Backup and import of the whole store file.

    Both operations hold the store lock for their full duration so no
    mutation or read runs against a half-copied file.
    """

    def __init__(self, store: EntryStore) -> None:
        self.store = store
        self._listeners: list[Callable[[], None]] = []

    def subscribe(self, listener: Callable[[], None]) -> None:
        """Register a callback run after a successful import."""
        self._listeners.append(listener)

    def backup(self, destination_path: Path) -> None:
        """
        Copy the store file byte for byte to destination_path.

        Raises:
            TransferIoError: If the copy fails; the live store is untouched
        """
        with self.store.lock:
            try:
                shutil.copyfile(self.store.path, destination_path)
            except OSError as e:
                raise TransferIoError(
                    f"could not back up {self.store.path} to {destination_path}: {e}"
                ) from e
        logger.info("backed up %s to %s", self.store.path, destination_path)

    def import_store(self, source_path: Path) -> None:
        """
        Replace the live store with the file at source_path.

        The source is read once and the validated bytes are what replace
        the store. Nothing is replaced before validation passes. On success
        every subscriber is notified, since ids held by callers may now
        point at different rows.

        Raises:
            TransferIoError: If the source cannot be read or the copy fails
            IncompatibleFormatError: If the source is not a readable store
        """
        try:
            content = source_path.read_bytes()
            text = content.decode("utf-8")
        except OSError as e:
            raise TransferIoError(f"could not read {source_path}: {e}") from e
        except UnicodeDecodeError as e:
            raise IncompatibleFormatError(f"{source_path} is not a text store") from e

        try:
            validate_store_document(load(text, Loader=Loader))
        except (YAMLError, StoreFormatError) as e:
            logger.warning("rejected import of %s: %s", source_path, e)
            raise IncompatibleFormatError(
                f"{source_path} is not a compatible store: {e}"
            ) from e

        with self.store.lock:
            staging_path = self.store.path.with_name(f"{self.store.path.name}.import")
            try:
                self.store.path.parent.mkdir(parents=True, exist_ok=True)
                staging_path.write_bytes(content)
                staging_path.replace(self.store.path)
            except OSError as e:
                staging_path.unlink(missing_ok=True)
                raise TransferIoError(
                    f"could not import {source_path} into {self.store.path}: {e}"
                ) from e
            self.store.reload()
        logger.info("imported %s into %s", source_path, self.store.path)

        for listener in self._listeners:
            listener()

    def export_csv(
        self, destination_path: Path, precision: Precision = Precision.WITH_SECONDS
    ) -> int:
        """
        Write every entry, oldest first, as CSV rows in local time.

        Returns the number of entries written.

        Raises:
            TransferIoError: If the file cannot be written
        """
        with self.store.lock:
            entries = sorted(
                self.store.get_all_entries(), key=lambda entry: entry["start_time"]
            )

        try:
            with destination_path.open("w", newline="", encoding="utf-8") as csv_file:
                writer = csv.DictWriter(csv_file, fieldnames=CSV_FIELDS)
                writer.writeheader()
                for entry in entries:
                    writer.writerow(
                        {
                            "id": entry["id"],
                            "task_name": entry["task_name"],
                            "tags": format_tags_input(entry["tags"]),
                            "start": format_local_datetime(entry["start_time"], precision),
                            "stop": format_local_datetime(entry["stop_time"], precision),
                            "duration": format_duration(
                                group_total_seconds([entry]), precision
                            ),
                        }
                    )
        except OSError as e:
            raise TransferIoError(f"could not export to {destination_path}: {e}") from e
        logger.info("exported %d entries to %s", len(entries), destination_path)
        return len(entries)
