import typing
from dataclasses import dataclass
from entity_store.connection_source import ConnectionSource
from entity_store.entity_mapping import EntityMapping, QuerySet

PERSON_SCHEMA = """
CREATE TABLE person (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    age INTEGER NOT NULL
)
"""

PERSON_QUERIES = QuerySet(
    create="INSERT INTO person (name, age) VALUES (?, ?)",
    delete="DELETE FROM person WHERE id = ?",
    update="UPDATE person SET name = ?, age = ? WHERE id = ?",
    get_by_id="SELECT id, name, age FROM person WHERE id = ?",
    get_all="SELECT id, name, age FROM person ORDER BY id",
)


@dataclass(frozen=True)
class Person:
    name: typing.Optional[str]
    age: int
    id: typing.Optional[int] = None


def person_mapping(queries: QuerySet = PERSON_QUERIES) -> EntityMapping:
    return EntityMapping(
        entity_name="person",
        queries=queries,
        row_mapper=lambda row: Person(id=row[0], name=row[1], age=row[2]),
        create_binder=lambda person: (person.name, person.age),
        update_binder=lambda person: (person.name, person.age, person.id),
    )


class FakeDatabaseError(Exception):
    """ Stands in for a driver's DB-API Error class. """


class FakeCursor:
    def __init__(self, source: "CountingConnectionSource"):
        self._source = source
        self._rows: list = []
        self.description = None
        self.lastrowid = None
        self.rowcount = -1

    def execute(self, sql, params=()):
        self._source.record("execute")
        self._source.raise_fault("execute")
        self._source.executed.append((sql, tuple(params)))
        if sql in self._source.results:
            self._rows = list(self._source.results[sql])
            self.description = (("column",),)
            self.rowcount = -1
        else:
            self._rows = []
            self.description = None
            self.lastrowid = self._source.lastrowid
            self.rowcount = self._source.rowcount

    def fetchone(self):
        self._source.raise_fault("fetch")
        return self._rows.pop(0) if self._rows else None

    def fetchall(self):
        self._source.raise_fault("fetch")
        rows, self._rows = self._rows, []
        return rows

    def close(self):
        self._source.record("cursor_close")
        self._source.raise_fault("cursor_close")


class FakeConnection:
    def __init__(self, source: "CountingConnectionSource"):
        self._source = source

    def cursor(self):
        self._source.raise_fault("cursor_open")
        self._source.record("cursor_open")
        return FakeCursor(self._source)

    def commit(self):
        self._source.record("commit")
        self._source.raise_fault("commit")

    def rollback(self):
        self._source.record("rollback")


class CountingConnectionSource(ConnectionSource):
    """
    Connection source whose connections and cursors record every
    acquire/release and open/close, with faults injectable per stage.
    """

    def __init__(self,
                 results: typing.Optional[dict] = None,
                 lastrowid: typing.Optional[int] = None,
                 rowcount: int = 1,
                 faults: typing.Optional[dict] = None):
        self.results: dict = results or {}
        self.lastrowid = lastrowid
        self.rowcount = rowcount
        self.faults: dict = faults or {}
        self.events: list = []
        self.executed: list = []

    @property
    def database_errors(self) -> tuple:
        return (FakeDatabaseError,)

    def record(self, event: str) -> None:
        self.events.append(event)

    def raise_fault(self, stage: str) -> None:
        fault = self.faults.get(stage)
        if fault is not None:
            raise fault

    def count(self, event: str) -> int:
        return self.events.count(event)

    @property
    def open_connections(self) -> int:
        return self.count("acquire") - self.count("release")

    @property
    def open_cursors(self) -> int:
        return self.count("cursor_open") - self.count("cursor_close")

    def acquire(self):
        self.raise_fault("acquire")
        self.record("acquire")
        return FakeConnection(self)

    def release(self, connection):
        self.record("release")
        self.raise_fault("release")
