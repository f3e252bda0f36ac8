from agent_toolkit.tools.base import CallableToolExecutor, ToolExecCallback, ToolExecutor
from agent_toolkit.tools.exceptions import ToolExecutionError, ToolNotFoundError

__all__ = [
    "CallableToolExecutor",
    "ToolExecCallback",
    "ToolExecutionError",
    "ToolExecutor",
    "ToolNotFoundError",
]
