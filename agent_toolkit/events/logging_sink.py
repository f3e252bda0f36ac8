"""A simple event sink that logs every event."""
from agent_toolkit.events.base import BaseEventSink, ReasoningEvent
from utils.logger import get_logger

__all__ = ["LoggingEventSink"]


class LoggingEventSink(BaseEventSink):
    """A simple event sink that logs every event."""

    def __init__(self):
        self._logger = get_logger(self.__class__.__name__)

    def publish(self, event: ReasoningEvent) -> None:
        """Log the event name together with its scalar payload fields."""
        fields = {k: v for k, v in event.payload.items() if k != "event" and isinstance(v, (str, int, float, bool))}
        self._logger.info("reasoning_event", event_name=event.name, **fields)
