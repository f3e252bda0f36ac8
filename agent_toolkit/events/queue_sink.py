"""An event sink that hands events to a separate observer through a queue."""
from __future__ import annotations

import asyncio
from typing import List

from agent_toolkit.events.base import BaseEventSink, ReasoningEvent
from utils.logger import get_logger

logger = get_logger(__name__)

__all__ = ["QueueEventSink"]


class QueueEventSink(BaseEventSink):
    """Pushes events onto an ``asyncio.Queue`` without ever waiting on it.

    A full queue drops the event rather than blocking the reasoning loop.
    """

    def __init__(self, maxsize: int = 0) -> None:
        self.queue: asyncio.Queue[ReasoningEvent] = asyncio.Queue(maxsize=maxsize)
        self.dropped = 0

    def publish(self, event: ReasoningEvent) -> None:
        try:
            self.queue.put_nowait(event)
        except asyncio.QueueFull:
            self.dropped += 1
            logger.warning("event_dropped", event_name=event.name, dropped=self.dropped)

    def drain(self) -> List[ReasoningEvent]:
        """Return every pending event in publication order."""
        events: List[ReasoningEvent] = []
        while True:
            try:
                events.append(self.queue.get_nowait())
            except asyncio.QueueEmpty:
                return events

    async def next_event(self) -> ReasoningEvent:
        return await self.queue.get()
