"""
Copyright (C) 2025  EntityStore Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of EntityStore. See the LICENSE file in the project
root for full license details.
"""
import operator
import typing
from dataclasses import dataclass, field

T = typing.TypeVar("T")

RowMapper = typing.Callable[[typing.Any], T]
ParameterBinder = typing.Callable[[T], typing.Sequence[typing.Any]]


@dataclass(frozen=True)
class QuerySet:
    """
    The five SQL statements used to persist one entity type.

    Placeholders are positional and written in the paramstyle of the
    DB-API driver behind the connection source (`?` for sqlite3, `%s` for
    psycopg).

    Attributes:
        create (str): Insert statement. Either returns the new identifier as
            its first column (e.g. `RETURNING id`) or relies on the
            cursor's `lastrowid`.
        delete (str): Delete statement taking the identifier as its only
            parameter.
        update (str): Update statement keyed on the identifier.
        get_by_id (str): Select statement taking the identifier as its only
            parameter.
        get_all (str): Select statement without parameters.
    """
    # pylint: disable=too-few-public-methods
    create: str
    delete: str
    update: str
    get_by_id: str
    get_all: str

    def __post_init__(self):
        for name in ("create", "delete", "update", "get_by_id", "get_all"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"QuerySet '{name}' query must be a "
                                 "non-empty string")


@dataclass(frozen=True)
class EntityMapping(typing.Generic[T]):
    """
    Everything an EntityStore needs to know about one entity type.

    Attributes:
        entity_name (str): Name used in log lines and error messages.
        queries (QuerySet): SQL statements for the entity's table.
        row_mapper (RowMapper): Builds an entity from a result row.
        create_binder (ParameterBinder): Positional parameters for the
            create statement.
        update_binder (ParameterBinder): Positional parameters for the
            update statement, identifier included.
        identifier (Callable): Reads the identifier from an entity, defaults
            to the `id` attribute.
    """
    entity_name: str
    queries: QuerySet
    row_mapper: RowMapper
    create_binder: ParameterBinder
    update_binder: ParameterBinder
    identifier: typing.Callable[[T], int] = field(
        default=operator.attrgetter("id"))
