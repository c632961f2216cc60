"""
Business logic for todo operations.
"""

import logging
from typing import Callable, List, Optional

from shared.live_query import LiveQuery, Subscription
from .models import Todo

logger = logging.getLogger(__name__)

TODOS_TABLE = "todos"


class TodoService:
    """
    Service class for todo CRUD operations and the live todo list.

    Mutations do not return the new list; subscribers see the change in the
    next snapshot pushed by `observe`.
    """

    def __init__(self, client, realtime: bool = True):
        self.client = client
        self.live_query = LiveQuery(
            self.list_todos,
            realtime_client=client if realtime else None,
            table=TODOS_TABLE,
        )

    async def list_todos(self) -> List[Todo]:
        """Fetch every todo, oldest first."""
        result = await self.client.table(TODOS_TABLE) \
            .select("*") \
            .order("created_at") \
            .execute()

        return [Todo.from_row(row) for row in result.data or []]

    async def observe(self, on_snapshot: Callable[[List[Todo]], None]) -> Subscription:
        """
        Subscribe to the todo list.

        Args:
            on_snapshot: Called with the full ordered list on subscribe and
                after every change

        Returns:
            Subscription to release when the caller is done
        """
        return await self.live_query.subscribe(on_snapshot)

    async def create_todo(self, content: Optional[str] = None) -> Todo:
        """
        Create a todo. Content is free text and may be empty or None.

        Returns:
            The created record
        """
        result = await self.client.table(TODOS_TABLE) \
            .insert({"content": content}) \
            .execute()

        if not result.data:
            raise Exception("Failed to create todo")

        todo = Todo.from_row(result.data[0])
        logger.info(f"Created todo {todo.id}")
        await self.live_query.refresh()
        return todo

    async def delete_todo(self, todo_id: str) -> None:
        """Delete a todo by ID. Deleting an unknown ID is not an error."""
        await self.client.table(TODOS_TABLE) \
            .delete() \
            .eq("id", todo_id) \
            .execute()

        logger.info(f"Deleted todo {todo_id}")
        await self.live_query.refresh()

    async def close(self) -> None:
        await self.live_query.close()
