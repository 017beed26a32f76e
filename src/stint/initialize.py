# SPDX-License-Identifier: MIT

from yaml import dump

try:
    from yaml import CDumper as Dumper
except ImportError:
    from yaml import Dumper  # type: ignore[assignment]

from stint import configuration
from stint.app_context import AppContext
from stint.repository.configuration import ConfigurationRepository
from stint.repository.time_entry import get_empty_store_document


def initialize() -> AppContext:
    config_path = configuration.get_app_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    __ensure_config_file()

    context = AppContext(ConfigurationRepository(config_path))
    __ensure_data_files(context)
    return context


def __ensure_config_file() -> None:
    config_path = configuration.get_app_config_path()
    if not config_path.is_file():
        config = configuration.get_default_configuration()
        config_path.write_text(dump(config, Dumper=Dumper))


def __ensure_data_files(context: AppContext) -> None:
    entries_path = context.store.path
    entries_path.parent.mkdir(parents=True, exist_ok=True)
    if not entries_path.is_file():
        entries_path.write_text(dump(get_empty_store_document(), Dumper=Dumper))
