"""Contract for executing tools on behalf of the reasoning layer."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Dict, List, Mapping

from agent_toolkit.tools.exceptions import ToolNotFoundError

__all__ = ["ToolExecutor", "ToolExecCallback", "CallableToolExecutor"]

ToolExecCallback = Callable[[str, Dict[str, Any]], Awaitable[Any]]


class ToolExecutor(ABC):
    """Runs named tools. Transport is left entirely to implementations."""

    @abstractmethod
    async def execute(self, tool_name: str, tool_input: Dict[str, Any]) -> Any:
        """Run ``tool_name`` with ``tool_input`` and return its output."""
        raise NotImplementedError

    @abstractmethod
    async def is_available(self, tool_name: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    async def get_available_tools(self) -> List[str]:
        raise NotImplementedError


class CallableToolExecutor(ToolExecutor):
    """A ToolExecutor backed by a mapping of tool name to async callable."""

    def __init__(self, tools: Mapping[str, Callable[[Dict[str, Any]], Awaitable[Any]]]):
        self._tools = dict(tools)

    async def execute(self, tool_name: str, tool_input: Dict[str, Any]) -> Any:
        fn = self._tools.get(tool_name)
        if fn is None:
            raise ToolNotFoundError(tool_name)
        return await fn(tool_input)

    async def is_available(self, tool_name: str) -> bool:
        return tool_name in self._tools

    async def get_available_tools(self) -> List[str]:
        return list(self._tools)
