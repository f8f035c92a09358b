"""
Copyright (C) 2025  EntityStore Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of EntityStore. See the LICENSE file in the project
root for full license details.
"""
import abc
import contextlib
import logging
import typing
from entity_store.connection_source import ConnectionSource
from entity_store.service_health_enums import ComponentDegradationLevel
from entity_store.state_object import StateObject


class BaseDataAccessLayer(abc.ABC):
    """
    Shared plumbing for data access layers: scoped connection and cursor
    handling on top of a connection source, plus health bookkeeping on a
    StateObject.
    """

    def __init__(self,
                 db: ConnectionSource,
                 logger: logging.Logger,
                 state_object: typing.Optional[StateObject] = None):
        self._db: ConnectionSource = db
        self._logger: logging.Logger = logger.getChild(__name__)
        self._state_object: StateObject = state_object \
            if state_object is not None else StateObject()

    @property
    def state_object(self) -> StateObject:
        return self._state_object

    @contextlib.contextmanager
    def _connection(self) -> typing.Iterator[typing.Any]:
        """
        Acquire a connection from the source and release it on exit, whether
        the block completes or raises.
        """
        connection = self._db.acquire()
        try:
            yield connection
        finally:
            try:
                self._db.release(connection)
            except Exception as ex:  # pylint: disable=broad-exception-caught
                self._logger.warning("Failed to release connection: %s", ex)

    @contextlib.contextmanager
    def _cursor(self, connection) -> typing.Iterator[typing.Any]:
        """ Open a cursor on the connection and close it on exit. """
        cursor = connection.cursor()
        try:
            yield cursor
        finally:
            try:
                cursor.close()
            except Exception as ex:  # pylint: disable=broad-exception-caught
                self._logger.warning("Failed to close cursor: %s", ex)

    def _rollback(self, connection) -> None:
        try:
            connection.rollback()
        except Exception as ex:  # pylint: disable=broad-exception-caught
            self._logger.warning("Failed to roll back connection: %s", ex)

    def _mark_database_healthy(self) -> None:
        self._state_object.database_health = ComponentDegradationLevel.NONE
        self._state_object.database_health_state_str = "Database operational"

    def _mark_database_failure(self, description: str) -> None:
        self._state_object.database_health = \
            ComponentDegradationLevel.FULLY_DEGRADED
        self._state_object.database_health_state_str = description

    def _mark_service_failure(self, description: str) -> None:
        self._state_object.service_health = \
            ComponentDegradationLevel.PART_DEGRADED
        self._state_object.service_health_state_str = description
