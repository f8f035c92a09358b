"""
Copyright (C) 2025  EntityStore Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of EntityStore. See the LICENSE file in the project
root for full license details.
"""
import configparser
import os
import typing
from entity_store.configuration.configuration_setup import (
    ConfigItemDataType, ConfigurationSetup, ConfigurationSetupItem)

BOOLEAN_TRUE_VALUES = frozenset({"true", "1", "yes", "on"})
BOOLEAN_FALSE_VALUES = frozenset({"false", "0", "no", "off"})


class Configuration:
    """
    Wraps configparser to read a typed layout, letting environment variables
    override the config file and falling back to layout defaults.
    """

    def __init__(self, env_prefix: str = ""):
        """
        Args:
            env_prefix: Prepended to `SECTION_ITEM` when looking up
                environment overrides, e.g. `ENTITY_STORE_`.
        """
        self._parser = configparser.ConfigParser()
        self._env_prefix: str = env_prefix
        self._config_file: typing.Optional[str] = None
        self._has_config_file: bool = False
        self._config_file_required: bool = False
        self._layout: typing.Optional[ConfigurationSetup] = None
        self._config_items: dict[str, dict[str, typing.Any]] = {}

        self._readers: dict[ConfigItemDataType,
                            typing.Callable[[str, ConfigurationSetupItem],
                                            typing.Any]] = {
            ConfigItemDataType.INT: self._read_int,
            ConfigItemDataType.STRING: self._read_str,
            ConfigItemDataType.BOOLEAN: self._read_bool,
            ConfigItemDataType.FLOAT: self._read_float,
            ConfigItemDataType.UNSIGNED_INT: self._read_uint,
        }

    @property
    def has_config_file(self) -> bool:
        return self._has_config_file

    @property
    def config_file(self) -> typing.Optional[str]:
        return self._config_file

    def configure(self,
                  layout: ConfigurationSetup,
                  config_file: typing.Optional[str] = None,
                  file_required: bool = False) -> None:
        """
        Configure the parser with schema and optional file.

        Args:
            layout: Schema definition of configuration (required).
            config_file: Path to config file (optional).
            file_required: Whether file must exist and be readable.
        """
        if layout is None:
            raise ValueError("Configuration layout cannot be None.")

        self._config_file = config_file
        self._config_file_required = file_required
        self._layout = layout

    def process_config(self) -> None:
        """
        Read the config file (if any) and resolve every item in the layout.

        Raises:
            RuntimeError: `configure` has not been called.
            ValueError: The file is unreadable or a value is invalid.
        """
        if self._layout is None:
            raise RuntimeError("Configuration layout must be set before "
                               "processing.")

        if self._config_file:
            try:
                files_read = self._parser.read(self._config_file,
                                               encoding="utf-8")
            except configparser.Error as ex:
                raise ValueError(
                    f"[ConfigError] Failed to parse file '{self._config_file}'"
                    f": {ex}") from ex

            if not files_read and self._config_file_required:
                raise ValueError(
                    f"[ConfigError] Required config file '{self._config_file}'"
                    " could not be opened.")

            self._has_config_file = bool(files_read)

        self._read_configuration()

    def get_entry(self, section: str, item: str) -> typing.Any:
        """
        Get a parsed configuration value.

        Raises:
            ValueError: If section or item not found.
        """
        try:
            return self._config_items[section][item]
        except KeyError as ex:
            raise ValueError(
                f"[ConfigError] Invalid key '{section}::{item}'") from ex

    def _lookup_value(self,
                      section: str,
                      item: ConfigurationSetupItem) -> typing.Any:
        env_var = f"{self._env_prefix}{section}_{item.item_name}".upper()
        value = os.getenv(env_var)

        if value is None and self._has_config_file:
            value = self._parser.get(section, item.item_name, fallback=None)

        return value if value is not None else item.default_value

    def _required_value(self,
                        section: str,
                        item: ConfigurationSetupItem) -> typing.Any:
        value = self._lookup_value(section, item)
        if value is None and item.is_required:
            raise ValueError(f"[ConfigError] Missing required '{section}::"
                             f"{item.item_name}'")
        return value

    def _read_str(self,
                  section: str,
                  item: ConfigurationSetupItem) -> typing.Optional[str]:
        value = self._required_value(section, item)
        if value is None:
            return None

        value = str(value)
        if item.valid_values and value not in item.valid_values:
            raise ValueError(
                f"[ConfigError] '{section}::{item.item_name}' has invalid "
                f"value '{value}', expected one of {item.valid_values}")
        return value

    def _read_int(self,
                  section: str,
                  item: ConfigurationSetupItem) -> typing.Optional[int]:
        value = self._required_value(section, item)
        if value is None:
            return None

        try:
            return int(value)
        except (ValueError, TypeError) as ex:
            raise ValueError(
                f"[ConfigError] '{section}::{item.item_name}' has invalid "
                f"int '{value}'") from ex

    def _read_uint(self,
                   section: str,
                   item: ConfigurationSetupItem) -> typing.Optional[int]:
        value = self._read_int(section, item)
        if value is not None and value < 0:
            raise ValueError(
                f"[ConfigError] '{section}::{item.item_name}' has invalid "
                f"unsigned int '{value}'")
        return value

    def _read_float(self,
                    section: str,
                    item: ConfigurationSetupItem) -> typing.Optional[float]:
        value = self._required_value(section, item)
        if value is None:
            return None

        try:
            return float(value)
        except (ValueError, TypeError) as ex:
            raise ValueError(
                f"[ConfigError] '{section}::{item.item_name}' has invalid "
                f"float '{value}'") from ex

    def _read_bool(self,
                   section: str,
                   item: ConfigurationSetupItem) -> typing.Optional[bool]:
        value = self._required_value(section, item)
        if value is None or isinstance(value, bool):
            return value

        lowered = str(value).strip().lower()
        if lowered in BOOLEAN_TRUE_VALUES:
            return True
        if lowered in BOOLEAN_FALSE_VALUES:
            return False

        raise ValueError(
            f"[ConfigError] '{section}::{item.item_name}' has invalid boolean "
            f"'{value}'")

    def _read_configuration(self) -> None:
        for section_name in self._layout.get_sections():
            section_values = self._config_items.setdefault(section_name, {})

            for section_item in self._layout.get_section(section_name):
                reader = self._readers.get(section_item.item_type)
                if not reader:
                    raise ValueError(
                        f"[ConfigError] Unsupported type "
                        f"'{section_item.item_type}' "
                        f"for '{section_name}::{section_item.item_name}'")

                section_values[section_item.item_name] = \
                    reader(section_name, section_item)
