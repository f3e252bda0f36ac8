import pytest
from typing import Any, Dict, List, Tuple

from agent_toolkit.tools.base import ToolExecutor


class FakeToolExecutor(ToolExecutor):
    """Serves queued observations for ``reasoning.plan`` and a fixed result for other tools.

    - plan_queue entries are returned in order; an Exception entry is raised instead
    - calls records every (tool_name, input) pair
    """

    def __init__(self, plan_queue: List[Any] | None = None, result: Any = None, tools: List[str] | None = None):
        self.plan_queue = list(plan_queue or [])
        self.result = {"result": "ok"} if result is None else result
        self.tools = tools or ["ripgrep"]
        self.calls: List[Tuple[str, Dict[str, Any]]] = []

    async def execute(self, tool_name: str, tool_input: Dict[str, Any]) -> Any:
        self.calls.append((tool_name, tool_input))
        if tool_name != "reasoning.plan":
            return self.result
        if not self.plan_queue:
            return {"done": False}
        item = self.plan_queue.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    async def is_available(self, tool_name: str) -> bool:
        return tool_name in self.tools

    async def get_available_tools(self) -> List[str]:
        return list(self.tools)


class RecordingSink:
    """Event sink that keeps (name, payload) pairs in order."""

    def __init__(self):
        self.events: List[Tuple[str, Dict[str, Any]]] = []

    def __call__(self, name: str, payload: Dict[str, Any]) -> None:
        self.events.append((name, payload))

    def names(self) -> List[str]:
        return [name for name, _ in self.events]

    def payloads(self, name: str) -> List[Dict[str, Any]]:
        return [payload for n, payload in self.events if n == name]


@pytest.fixture
def fake_tools() -> FakeToolExecutor:
    return FakeToolExecutor()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()
