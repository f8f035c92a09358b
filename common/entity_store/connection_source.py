"""
Copyright (C) 2025  EntityStore Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of EntityStore. See the LICENSE file in the project
root for full license details.
"""
import abc
import typing
import sqlalchemy
from sqlalchemy import exc as sqlalchemy_exc


class ConnectionSource(abc.ABC):
    """
    Supplies and reclaims DB-API connections for data access layers.

    A source owns any pooling. Data access layers acquire one connection per
    round trip and always hand it back through `release`.
    """

    @abc.abstractmethod
    def acquire(self) -> typing.Any:
        """ Return a DB-API 2.0 connection ready for use. """

    @abc.abstractmethod
    def release(self, connection: typing.Any) -> None:
        """ Hand a connection obtained from `acquire` back to the source. """

    @property
    def database_errors(self) -> tuple:
        """
        Exception types that mean the database call failed, as opposed to a
        bug in the calling code. Pool errors such as a checkout timeout
        count as database failures.
        """
        return (sqlalchemy_exc.SQLAlchemyError,)


class SqlAlchemyConnectionSource(ConnectionSource):
    """
    Connection source backed by a SQLAlchemy engine and its pool.

    Connections handed out are the pool's proxied DB-API connections, so
    releasing one returns it to the pool rather than closing the socket.
    """

    def __init__(self, engine: sqlalchemy.engine.Engine):
        self._engine = engine

    @classmethod
    def from_url(cls, url: str,
                 **engine_kwargs) -> "SqlAlchemyConnectionSource":
        """
        Build a source from a database URL.

        Args:
            url: SQLAlchemy database URL, e.g. `sqlite:///people.db`.
            **engine_kwargs: Passed through to `sqlalchemy.create_engine`.
        """
        return cls(sqlalchemy.create_engine(url, **engine_kwargs))

    @property
    def engine(self) -> sqlalchemy.engine.Engine:
        return self._engine

    def acquire(self) -> typing.Any:
        return self._engine.raw_connection()

    def release(self, connection: typing.Any) -> None:
        connection.close()

    @property
    def database_errors(self) -> tuple:
        dbapi = self._engine.dialect.loaded_dbapi
        return (sqlalchemy_exc.SQLAlchemyError, dbapi.Error)

    def dispose(self) -> None:
        """ Close every pooled connection. """
        self._engine.dispose()
