"""
Copyright (C) 2025  EntityStore Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of EntityStore. See the LICENSE file in the project
root for full license details.
"""
import logging
import os
import sys
import typing
from entity_store import __version__
from entity_store.configuration.configuration import (BOOLEAN_FALSE_VALUES,
                                                      BOOLEAN_TRUE_VALUES,
                                                      Configuration)
from entity_store.configuration_layout import CONFIGURATION_LAYOUT
from entity_store.connection_source import (ConnectionSource,
                                            SqlAlchemyConnectionSource)
from entity_store.entity_mapping import EntityMapping
from entity_store.entity_store import EntityStore, ErrorPolicy
from entity_store.logging_consts import (LOGGING_DATETIME_FORMAT_STRING,
                                         LOGGING_DEFAULT_LOG_LEVEL,
                                         LOGGING_LOG_FORMAT_STRING)
from entity_store.state_object import StateObject

ENV_PREFIX = "ENTITY_STORE_"
CONFIG_FILE_ENV = "ENTITY_STORE_CONFIG_FILE"
CONFIG_FILE_REQUIRED_ENV = "ENTITY_STORE_CONFIG_FILE_REQUIRED"


def create_logger(name: str = "entity_store",
                  log_level: typing.Union[int, str] = LOGGING_DEFAULT_LOG_LEVEL
                  ) -> logging.Logger:
    """
    Get a logger writing to stdout in the package's log format. Calling it
    again for the same name only updates the level.
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        log_format = logging.Formatter(LOGGING_LOG_FORMAT_STRING,
                                       LOGGING_DATETIME_FORMAT_STRING)
        console_stream = logging.StreamHandler(sys.stdout)
        console_stream.setFormatter(log_format)
        logger.addHandler(console_stream)

    logger.setLevel(log_level)
    logger.propagate = True
    return logger


def load_configuration() -> Configuration:
    """
    Load configuration from the file named by ENTITY_STORE_CONFIG_FILE (if
    any) with ENTITY_STORE_<SECTION>_<ITEM> environment overrides.

    Raises:
        ValueError: The required-file flag is invalid, a required file is
            missing, or a configuration value is invalid.
    """
    config_file = os.getenv(CONFIG_FILE_ENV, None)
    raw_required = os.getenv(CONFIG_FILE_REQUIRED_ENV,
                             "false").strip().lower()

    if raw_required in BOOLEAN_TRUE_VALUES:
        config_file_required: bool = True
    elif raw_required in BOOLEAN_FALSE_VALUES:
        config_file_required: bool = False
    else:
        raise ValueError(f"[ConfigError] Invalid value for "
                         f"{CONFIG_FILE_REQUIRED_ENV}: '{raw_required}'")

    if not config_file and config_file_required:
        raise ValueError("[ConfigError] Configuration file missing!")

    config = Configuration(env_prefix=ENV_PREFIX)
    config.configure(CONFIGURATION_LAYOUT, config_file, config_file_required)
    config.process_config()
    return config


def display_configuration_details(config: Configuration,
                                  logger: logging.Logger) -> None:
    """ Log the resolved configuration, one line per item. """
    logger.info("EntityStore %s", __version__)
    if config.has_config_file:
        logger.info("Loaded configuration file '%s'", config.config_file)
    else:
        logger.info("No configuration file loaded, using environment and "
                    "defaults")
    logger.info("Configuration")
    logger.info("=============")
    for section in CONFIGURATION_LAYOUT.get_sections():
        logger.info("[%s]", section)
        for item in CONFIGURATION_LAYOUT.get_section(section):
            logger.info("=> %-30s : %s", item.item_name,
                        config.get_entry(section, item.item_name))


def configure_logging(config: Configuration, logger: logging.Logger) -> None:
    """ Apply the configured [logging] log_level to the logger. """
    logger.setLevel(config.get_entry("logging", "log_level"))


def create_connection_source(config: Configuration
                             ) -> SqlAlchemyConnectionSource:
    """ Build a pooled connection source from the [database] section. """
    return SqlAlchemyConnectionSource.from_url(
        config.get_entry("database", "url"),
        pool_size=config.get_entry("database", "pool_size"),
        pool_pre_ping=config.get_entry("database", "pool_pre_ping"),
        echo=config.get_entry("database", "echo"))


def create_store(connection_source: ConnectionSource,
                 mapping: EntityMapping,
                 logger: logging.Logger,
                 config: typing.Optional[Configuration] = None,
                 state_object: typing.Optional[StateObject] = None
                 ) -> EntityStore:
    """
    Create a store for one entity type, taking its error policy from the
    [store] section when a configuration is given.
    """
    error_policy = ErrorPolicy.RAISE
    if config is not None:
        error_policy = ErrorPolicy(config.get_entry("store", "error_policy"))

    if state_object is None:
        state_object = StateObject(version=__version__)

    return EntityStore(connection_source, mapping, logger,
                       state_object=state_object,
                       error_policy=error_policy)
