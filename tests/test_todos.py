import unittest

from tests.fakes import FakeSupabase
from todos.models import Todo
from todos.service import TodoService, TODOS_TABLE


class TodoServiceTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.db = FakeSupabase()
        self.service = TodoService(self.db)
        self.snapshots = []

    async def asyncTearDown(self):
        await self.service.close()

    def _server_contents(self):
        return [row["content"] for row in self.db.tables.get(TODOS_TABLE, [])]

    async def test_observe_delivers_initial_snapshot(self):
        self.db.insert_remote(TODOS_TABLE, "buy milk")

        await self.service.observe(self.snapshots.append)

        self.assertEqual(len(self.snapshots), 1)
        self.assertEqual([t.content for t in self.snapshots[0]], ["buy milk"])

    async def test_create_and_delete_are_reflected_in_next_snapshot(self):
        await self.service.observe(self.snapshots.append)

        first = await self.service.create_todo("one")
        await self.service.create_todo("two")
        await self.service.delete_todo(first.id)
        await self.service.create_todo(None)

        latest = self.snapshots[-1]
        self.assertEqual([t.content for t in latest], self._server_contents())
        self.assertEqual([t.content for t in latest], ["two", None])

    async def test_empty_content_is_allowed(self):
        todo = await self.service.create_todo("")
        self.assertEqual(todo.content, "")
        self.assertIsInstance(todo, Todo)

    async def test_delete_unknown_id_is_not_an_error(self):
        await self.service.delete_todo("missing")
        self.assertEqual(await self.service.list_todos(), [])

    async def test_list_todos_is_ordered_by_creation(self):
        await self.service.create_todo("a")
        await self.service.create_todo("b")
        todos = await self.service.list_todos()
        self.assertEqual([t.content for t in todos], ["a", "b"])


if __name__ == "__main__":
    unittest.main()
