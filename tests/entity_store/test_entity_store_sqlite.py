import dataclasses
import logging
import os
import tempfile
import unittest
from entity_store.connection_source import SqlAlchemyConnectionSource
from entity_store.entity_store import EntityStore, ErrorPolicy
from entity_store.exceptions import (EntityNotFoundError, ExecutionFailure,
                                     GenerationFailure)
from entity_store.service_health_enums import ComponentDegradationLevel
from entity_store.state_object import StateObject
from support import PERSON_SCHEMA, Person, person_mapping


class TestEntityStoreSqlite(unittest.TestCase):
    def setUp(self):
        self._tmp_dir = tempfile.TemporaryDirectory()
        db_path = os.path.join(self._tmp_dir.name, "people.db")
        self.source = SqlAlchemyConnectionSource.from_url(f"sqlite:///{db_path}")
        with self.source.engine.begin() as conn:
            conn.exec_driver_sql(PERSON_SCHEMA)

        self.logger = logging.getLogger("test_entity_store_sqlite")
        self.logger.addHandler(logging.NullHandler())
        self.state = StateObject()
        self.store = EntityStore(self.source, person_mapping(), self.logger,
                                 state_object=self.state)

    def tearDown(self):
        self.source.dispose()
        self._tmp_dir.cleanup()

    def assertPoolIdle(self):
        self.assertEqual(self.source.engine.pool.checkedout(), 0)

    def test_person_lifecycle(self):
        created = self.store.create(Person(name="Ann", age=30))
        self.assertEqual(created, Person(id=1, name="Ann", age=30))

        updated = self.store.update(Person(id=1, name="Ann", age=31))
        self.assertEqual(updated, Person(id=1, name="Ann", age=31))
        self.assertEqual(self.store.get_by_id(1),
                         Person(id=1, name="Ann", age=31))

        self.store.delete(Person(id=1, name="Ann", age=31))
        with self.assertRaises(EntityNotFoundError) as ctx:
            self.store.get_by_id(1)

        self.assertEqual(ctx.exception.entity_id, 1)
        self.assertPoolIdle()

    def test_create_then_get_matches_except_for_id(self):
        for name, age in (("Bob", 44), ("Cy", 0), ("Dee", 99)):
            with self.subTest(name=name):
                created = self.store.create(Person(name=name, age=age))
                fetched = self.store.get_by_id(created.id)

                self.assertEqual((fetched.name, fetched.age), (name, age))
                self.assertEqual(fetched, created)

    def test_get_all_matches_live_rows(self):
        self.assertEqual(self.store.get_all(), [])

        ids = [self.store.create(Person(name=f"p{n}", age=n)).id
               for n in range(4)]
        self.store.delete(self.store.get_by_id(ids[1]))

        people = self.store.get_all()

        self.assertEqual([p.id for p in people], [ids[0], ids[2], ids[3]])
        for person in people:
            self.assertEqual(self.store.get_by_id(person.id), person)
        self.assertPoolIdle()

    def test_constraint_violation_is_execution_failure(self):
        with self.assertRaises(ExecutionFailure) as ctx:
            self.store.create(Person(name=None, age=20))

        self.assertEqual(ctx.exception.operation, "create")
        self.assertEqual(self.state.database_health,
                         ComponentDegradationLevel.FULLY_DEGRADED)
        self.assertEqual(self.store.get_all(), [])
        self.assertEqual(self.state.database_health,
                         ComponentDegradationLevel.NONE)
        self.assertPoolIdle()

    def test_bad_sql_under_swallow_policy_reads_as_not_found(self):
        mapping = person_mapping()
        queries = dataclasses.replace(
            mapping.queries,
            get_by_id="SELECT * FROM no_such_table WHERE id = ?")
        broken = EntityStore(self.source,
                             dataclasses.replace(mapping, queries=queries),
                             self.logger,
                             error_policy=ErrorPolicy.SWALLOW)

        self.assertIsNone(broken.get_by_id(1))
        self.assertEqual(broken.state_object.database_health,
                         ComponentDegradationLevel.FULLY_DEGRADED)
        self.assertPoolIdle()

    def test_ignored_insert_is_generation_failure(self):
        with self.source.engine.begin() as conn:
            conn.exec_driver_sql(
                "CREATE UNIQUE INDEX person_name ON person (name)")
        mapping = person_mapping()
        queries = dataclasses.replace(
            mapping.queries,
            create="INSERT OR IGNORE INTO person (name, age) VALUES (?, ?)")
        store = EntityStore(self.source,
                            dataclasses.replace(mapping, queries=queries),
                            self.logger)
        store.create(Person(name="Ann", age=30))
        store.create(Person(name="Bob", age=40))

        with self.assertRaises(GenerationFailure):
            store.create(Person(name="Ann", age=99))

        self.assertEqual([(p.name, p.age) for p in store.get_all()],
                         [("Ann", 30), ("Bob", 40)])
        self.assertPoolIdle()

    def test_exhausted_pool_is_execution_failure(self):
        db_path = os.path.join(self._tmp_dir.name, "people.db")
        source = SqlAlchemyConnectionSource.from_url(
            f"sqlite:///{db_path}", pool_size=1, max_overflow=0,
            pool_timeout=0.1)
        state = StateObject()
        store = EntityStore(source, person_mapping(), self.logger,
                            state_object=state)
        swallowing = EntityStore(source, person_mapping(), self.logger,
                                 error_policy=ErrorPolicy.SWALLOW)
        held = source.acquire()
        try:
            with self.assertRaises(ExecutionFailure) as ctx:
                store.get_all()
            self.assertEqual(swallowing.get_all(), [])
        finally:
            source.release(held)
            source.dispose()

        self.assertEqual(ctx.exception.operation, "get_all")
        self.assertEqual(state.database_health,
                         ComponentDegradationLevel.FULLY_DEGRADED)
        self.assertEqual(state.service_health,
                         ComponentDegradationLevel.NONE)

    def test_update_of_missing_row_is_silent(self):
        ghost = Person(id=42, name="Ghost", age=1)

        self.assertIs(self.store.update(ghost), ghost)
        self.assertEqual(self.store.get_all(), [])


if __name__ == "__main__":
    unittest.main()
