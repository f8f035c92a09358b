"""
Copyright (C) 2025  EntityStore Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of EntityStore. See the LICENSE file in the project
root for full license details.
"""
from entity_store.configuration import configuration_setup

CONFIGURATION_LAYOUT = configuration_setup.ConfigurationSetup(
    {
        "logging": [
            configuration_setup.ConfigurationSetupItem(
                "log_level", configuration_setup.ConfigItemDataType.STRING,
                valid_values=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                default_value="INFO")
        ],
        "database": [
            configuration_setup.ConfigurationSetupItem(
                "url", configuration_setup.ConfigItemDataType.STRING,
                default_value="sqlite:///entity_store.db"),
            configuration_setup.ConfigurationSetupItem(
                "pool_size", configuration_setup.ConfigItemDataType.UNSIGNED_INT,
                default_value=5),
            configuration_setup.ConfigurationSetupItem(
                "pool_pre_ping", configuration_setup.ConfigItemDataType.BOOLEAN,
                default_value=True),
            configuration_setup.ConfigurationSetupItem(
                "echo", configuration_setup.ConfigItemDataType.BOOLEAN,
                default_value=False)
        ],
        "store": [
            configuration_setup.ConfigurationSetupItem(
                "error_policy", configuration_setup.ConfigItemDataType.STRING,
                valid_values=['raise', 'swallow'], default_value="raise")
        ]
    }
)
