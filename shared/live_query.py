"""
Live query over a Supabase table.

Subscribers receive full snapshots of the table: one on subscribe, then one
after every change notification. Change notifications come from Supabase
Realtime (postgres_changes) when a client is attached, and from explicit
`refresh()` calls made after local mutations.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Set

logger = logging.getLogger(__name__)

SnapshotCallback = Callable[[List[Any]], Any]
SnapshotFetcher = Callable[[], Awaitable[List[Any]]]


class Subscription:
    """Handle returned by `LiveQuery.subscribe`; release it with `unsubscribe()`."""

    def __init__(self, live_query: "LiveQuery", callback: SnapshotCallback):
        self._live_query = live_query
        self.callback = callback
        self.active = True

    async def unsubscribe(self) -> None:
        """Stop receiving snapshots. Safe to call more than once."""
        if not self.active:
            return
        self.active = False
        await self._live_query._remove(self)

    async def __aenter__(self) -> "Subscription":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.unsubscribe()


class LiveQuery:
    """
    Standing query that pushes the current record set to subscribers.

    Args:
        fetch_snapshot: Coroutine function returning the current records
        realtime_client: Supabase AsyncClient used for change notifications
            (optional; without it only `refresh()` triggers pushes)
        table: Table watched for postgres_changes
        schema: Schema of the table
    """

    def __init__(
        self,
        fetch_snapshot: SnapshotFetcher,
        realtime_client=None,
        table: str = "*",
        schema: str = "public"
    ):
        self._fetch_snapshot = fetch_snapshot
        self._realtime_client = realtime_client
        self.table = table
        self.schema = schema
        self._subscriptions: List[Subscription] = []
        self._channel = None
        self._pending: Set[asyncio.Task] = set()
        self._lock = asyncio.Lock()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    async def subscribe(self, callback: SnapshotCallback) -> Subscription:
        """
        Start receiving snapshots.

        The current snapshot is delivered to `callback` before this returns.
        If opening the channel or the first fetch fails, the subscription is
        released and the error re-raised.
        """
        subscription = Subscription(self, callback)
        self._subscriptions.append(subscription)

        try:
            if self._channel is None and self._realtime_client is not None:
                await self._open_channel()

            # Refreshes triggered meanwhile wait here, so they deliver after us
            async with self._lock:
                snapshot = await self._fetch_snapshot()
                await self._deliver(subscription, snapshot)
        except BaseException:
            subscription.active = False
            await self._remove(subscription)
            raise

        return subscription

    async def refresh(self) -> None:
        """Fetch the record set once and push it to every subscriber."""
        if not self._subscriptions:
            return

        async with self._lock:
            snapshot = await self._fetch_snapshot()
            for subscription in list(self._subscriptions):
                await self._deliver(subscription, snapshot)

    async def close(self) -> None:
        """Release every subscription and the realtime channel."""
        for subscription in list(self._subscriptions):
            await subscription.unsubscribe()

    async def _deliver(self, subscription: Subscription, snapshot: List[Any]) -> None:
        if not subscription.active:
            return
        result = subscription.callback(list(snapshot))
        if asyncio.iscoroutine(result):
            await result

    async def _remove(self, subscription: Subscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

        if not self._subscriptions:
            for task in list(self._pending):
                task.cancel()
            self._pending.clear()
            await self._close_channel()

    async def _open_channel(self) -> None:
        channel = self._realtime_client.channel(f"live:{self.schema}:{self.table}")
        channel.on_postgres_changes(
            "*",
            schema=self.schema,
            table=self.table,
            callback=self._on_change
        )
        # Held before subscribe() so a failed join is still removed
        self._channel = channel
        await channel.subscribe()
        logger.info(f"Realtime channel opened for {self.schema}.{self.table}")

    async def _close_channel(self) -> None:
        if self._channel is None:
            return
        channel, self._channel = self._channel, None
        try:
            await self._realtime_client.remove_channel(channel)
            logger.info(f"Realtime channel closed for {self.schema}.{self.table}")
        except Exception as e:
            logger.warning(f"Failed to remove realtime channel: {str(e)}")

    def _on_change(self, payload: Optional[Dict] = None) -> None:
        """Realtime callback; runs on the event loop and schedules a refresh."""
        if not self._subscriptions:
            return
        task = asyncio.get_running_loop().create_task(self._refresh_logged())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _refresh_logged(self) -> None:
        try:
            await self.refresh()
        except Exception as e:
            logger.error(f"Error refreshing live query on {self.table}: {str(e)}")
