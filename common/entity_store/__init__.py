"""
Copyright (C) 2025  EntityStore Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of EntityStore. See the LICENSE file in the project
root for full license details.
"""
from entity_store.connection_source import (ConnectionSource,
                                            SqlAlchemyConnectionSource)
from entity_store.entity_mapping import EntityMapping, QuerySet
from entity_store.entity_store import EntityStore, ErrorPolicy
from entity_store.exceptions import (EntityNotFoundError, ExecutionFailure,
                                     GenerationFailure, StoreError)
from entity_store.state_object import StateObject

# Semantic version components
MAJOR = 0
MINOR = 1
PATCH = 0

# e.g. "alpha", "beta", "rc1", or None
PRE_RELEASE = None

# Version tuple for comparisons
VERSION = (MAJOR, MINOR, PATCH, PRE_RELEASE)

# Construct the string representation
__version__ = f"V{MAJOR}.{MINOR}.{PATCH}"

if PRE_RELEASE:
    __version__ += f"-{PRE_RELEASE}"

__all__ = ["ConnectionSource", "EntityMapping", "EntityNotFoundError",
           "EntityStore", "ErrorPolicy", "ExecutionFailure",
           "GenerationFailure", "QuerySet", "SqlAlchemyConnectionSource",
           "StateObject", "StoreError", "__version__"]
