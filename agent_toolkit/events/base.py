"""Lifecycle events emitted by the reasoning strategies."""
from __future__ import annotations

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Union

from utils.logger import get_logger

logger = get_logger(__name__)

__all__ = [
    "REASONING_STARTED",
    "REASONING_STEP",
    "REASONING_ABORTED",
    "REASONING_COMPLETED",
    "REASONING_GRAPH_UPDATED",
    "REASONING_CONSENSUS",
    "ReasoningEvent",
    "BaseEventSink",
    "EventSink",
    "EventEmitter",
]

REASONING_STARTED = "reasoning.started"
REASONING_STEP = "reasoning.step"
REASONING_ABORTED = "reasoning.aborted"
REASONING_COMPLETED = "reasoning.completed"
REASONING_GRAPH_UPDATED = "reasoning.graph.updated"
REASONING_CONSENSUS = "reasoning.consensus"


@dataclass(frozen=True)
class ReasoningEvent:
    name: str
    payload: Dict[str, Any]
    timestamp: float = field(default_factory=time.time)


class BaseEventSink(ABC):
    """Abstract contract for receiving reasoning events."""

    @abstractmethod
    def publish(self, event: ReasoningEvent) -> None:  # pragma: no cover
        """
        Accept a single event.

        Implementations must return immediately; any slow delivery work
        belongs to whoever drains the sink.
        """
        raise NotImplementedError

    def __call__(self, name: str, payload: Dict[str, Any]) -> None:
        self.publish(ReasoningEvent(name=name, payload=payload))


EventSink = Union[BaseEventSink, Callable[[str, Dict[str, Any]], None]]


class EventEmitter:
    """Fire-and-continue wrapper around an optional sink."""

    def __init__(self, sink: Optional[EventSink] = None) -> None:
        self.sink = sink

    def __call__(self, name: str, payload: Dict[str, Any]) -> None:
        if self.sink is None:
            return
        try:
            self.sink(name, payload)
        except Exception as exc:
            logger.warning("event_sink_failed", event_name=name, error=str(exc), exc_info=True)
