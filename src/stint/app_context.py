# SPDX-License-Identifier: MIT

from stint import configuration
from stint.repository.configuration import ConfigurationRepository
from stint.repository.time_entry import TimeEntryRepository
from stint.service.editor import GroupEditor
from stint.service.transfer import StoreTransferService
from stint.time import Precision, precision_for


class AppContext:
    """Everything a command needs, passed explicitly instead of looked up globally."""

    def __init__(self, configuration_repo: ConfigurationRepository) -> None:
        self.configuration_repo = configuration_repo
        config = configuration_repo.get_config()
        self.store = TimeEntryRepository(configuration.get_entries_path(config))
        self.editor = GroupEditor(self.store, precision_for(config["show_seconds"]))
        self.transfer = StoreTransferService(self.store)

    @property
    def config(self) -> configuration.Configuration:
        return self.configuration_repo.get_config()

    @property
    def precision(self) -> Precision:
        return self.editor.precision
