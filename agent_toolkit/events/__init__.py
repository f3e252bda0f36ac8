from agent_toolkit.events.base import (
    REASONING_ABORTED,
    REASONING_COMPLETED,
    REASONING_CONSENSUS,
    REASONING_GRAPH_UPDATED,
    REASONING_STARTED,
    REASONING_STEP,
    BaseEventSink,
    EventEmitter,
    EventSink,
    ReasoningEvent,
)
from agent_toolkit.events.logging_sink import LoggingEventSink
from agent_toolkit.events.queue_sink import QueueEventSink

__all__ = [
    "REASONING_ABORTED",
    "REASONING_COMPLETED",
    "REASONING_CONSENSUS",
    "REASONING_GRAPH_UPDATED",
    "REASONING_STARTED",
    "REASONING_STEP",
    "BaseEventSink",
    "EventEmitter",
    "EventSink",
    "LoggingEventSink",
    "QueueEventSink",
    "ReasoningEvent",
]
