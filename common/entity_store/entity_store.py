"""
Copyright (C) 2025  EntityStore Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of EntityStore. See the LICENSE file in the project
root for full license details.
"""
import enum
import logging
import typing
from entity_store.base_data_access_layer import BaseDataAccessLayer
from entity_store.connection_source import ConnectionSource
from entity_store.entity_mapping import EntityMapping
from entity_store.exceptions import (EntityNotFoundError, ExecutionFailure,
                                     GenerationFailure, StoreError)
from entity_store.state_object import StateObject

T = typing.TypeVar("T")


class ErrorPolicy(enum.Enum):
    """ How an EntityStore reports a failed round trip """

    # Raise ExecutionFailure, EntityNotFoundError or GenerationFailure
    RAISE = "raise"

    # Log the failure and return None (or an empty list from get_all)
    SWALLOW = "swallow"


class EntityStore(BaseDataAccessLayer, typing.Generic[T]):
    """
    Generic CRUD access for one entity type.

    Every call is a single stateless round trip: acquire a connection, open
    a cursor, execute one statement from the mapping's QuerySet, map the
    result, then close the cursor and release the connection in that order,
    whatever the outcome. Writes are committed before the cursor's
    connection is released and rolled back if anything fails.
    """

    def __init__(self,
                 db: ConnectionSource,
                 mapping: EntityMapping[T],
                 logger: logging.Logger,
                 state_object: typing.Optional[StateObject] = None,
                 error_policy: ErrorPolicy = ErrorPolicy.RAISE):
        super().__init__(db, logger, state_object)
        self._mapping: EntityMapping[T] = mapping
        self._error_policy: ErrorPolicy = error_policy

    @property
    def mapping(self) -> EntityMapping[T]:
        return self._mapping

    @property
    def error_policy(self) -> ErrorPolicy:
        return self._error_policy

    def create(self, entity: T) -> typing.Optional[T]:
        """
        Insert a new entity and return it as stored, with the identifier the
        database generated for it.

        Raises:
            GenerationFailure: The insert produced no identifier.
            ExecutionFailure: The database call failed.
        """
        return self._apply_policy(None, self._create, entity)

    def update(self, entity: T) -> typing.Optional[T]:
        """
        Write the entity's fields to the row with its identifier. The entity
        passed in is returned as-is, it is not read back.

        Raises:
            ExecutionFailure: The database call failed.
        """
        return self._apply_policy(None, self._update, entity)

    def delete(self, entity: T) -> None:
        """
        Delete the row with the entity's identifier.

        Raises:
            ExecutionFailure: The database call failed.
        """
        self._apply_policy(None, self._delete, entity)

    def get_by_id(self, entity_id: int) -> typing.Optional[T]:
        """
        Fetch one entity by identifier.

        Raises:
            EntityNotFoundError: No row has that identifier.
            ExecutionFailure: The database call failed.
        """
        return self._apply_policy(None, self._get_by_id, entity_id)

    def get_all(self) -> typing.List[T]:
        """
        Fetch every entity, in the order the get-all query returns them.

        Raises:
            ExecutionFailure: The database call failed.
        """
        return self._apply_policy([], self._get_all)

    def _create(self, entity: T) -> T:
        binder = self._mapping.create_binder

        def insert(cursor) -> int:
            cursor.execute(self._mapping.queries.create, tuple(binder(entity)))
            new_id = self._generated_id(cursor)
            if new_id is None:
                raise GenerationFailure(self._mapping.entity_name)
            self._logger.debug("Creating %s with id: %s",
                               self._mapping.entity_name, new_id)
            return new_id

        new_id = self._round_trip("create", insert, write=True)
        return self._get_by_id(new_id)

    def _update(self, entity: T) -> T:
        binder = self._mapping.update_binder

        def update(cursor) -> None:
            self._logger.debug("Updating %s with id: %s",
                               self._mapping.entity_name,
                               self._mapping.identifier(entity))
            cursor.execute(self._mapping.queries.update, tuple(binder(entity)))

        self._round_trip("update", update, write=True)
        return entity

    def _delete(self, entity: T) -> None:
        entity_id = self._mapping.identifier(entity)

        def delete(cursor) -> None:
            self._logger.debug("Deleting %s with id: %s",
                               self._mapping.entity_name, entity_id)
            cursor.execute(self._mapping.queries.delete, (entity_id,))

        self._round_trip("delete", delete, write=True)

    def _get_by_id(self, entity_id: int) -> T:
        def select(cursor) -> T:
            cursor.execute(self._mapping.queries.get_by_id, (entity_id,))
            row = cursor.fetchone()
            if row is None:
                raise EntityNotFoundError(self._mapping.entity_name, entity_id)
            self._logger.debug("Returning %s with id: %s",
                               self._mapping.entity_name, entity_id)
            return self._mapping.row_mapper(row)

        return self._round_trip("get_by_id", select)

    def _get_all(self) -> typing.List[T]:
        def select(cursor) -> typing.List[T]:
            cursor.execute(self._mapping.queries.get_all)
            return [self._mapping.row_mapper(row) for row in cursor.fetchall()]

        return self._round_trip("get_all", select)

    @staticmethod
    def _generated_id(cursor) -> typing.Optional[int]:
        # A statement with RETURNING hands the id back as a result row,
        # otherwise fall back to the driver's lastrowid. lastrowid is
        # connection-wide, so it is stale when the insert wrote no row.
        if cursor.description is not None:
            row = cursor.fetchone()
            return row[0] if row is not None else None
        if cursor.rowcount == 0:
            return None
        return cursor.lastrowid

    def _round_trip(self,
                    operation: str,
                    work: typing.Callable[[typing.Any], typing.Any],
                    write: bool = False) -> typing.Any:
        entity_name = self._mapping.entity_name

        try:
            with self._connection() as connection:
                try:
                    with self._cursor(connection) as cursor:
                        result = work(cursor)
                    if write:
                        connection.commit()

                except BaseException:
                    if write:
                        self._rollback(connection)
                    raise

        except self._db.database_errors as ex:
            self._logger.exception("Database error during %s of %s: %s",
                                   operation, entity_name, ex)
            self._mark_database_failure(
                f"Database error during {operation} of {entity_name}: {ex}")
            raise ExecutionFailure(entity_name, operation, str(ex)) from ex

        except StoreError:
            self._mark_database_healthy()
            raise

        except Exception as ex:
            self._logger.exception("Unexpected error during %s of %s: %s",
                                   operation, entity_name, ex)
            self._mark_service_failure(
                f"Unexpected error during {operation} of {entity_name}: {ex}")
            raise

        self._mark_database_healthy()
        return result

    def _apply_policy(self, default, call, *args):
        if self._error_policy is ErrorPolicy.RAISE:
            return call(*args)

        try:
            return call(*args)

        except StoreError as ex:
            self._logger.debug("Returning empty result for %s: %s",
                               self._mapping.entity_name, ex)
            return default
