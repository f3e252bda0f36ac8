import asyncio

import pytest

from agent_toolkit.reasoner import ReActExecutor
from agent_toolkit.tools import CallableToolExecutor, ToolExecutionError, ToolNotFoundError


async def _plan(tool_input):
    return {"done": True, "summary": f"final answer: step {tool_input['step']}"}


async def _grep(tool_input):
    return {"matches": [tool_input["pattern"]]}


def test_callable_executor_dispatches_by_name():
    tools = CallableToolExecutor({"reasoning.plan": _plan, "ripgrep": _grep})

    assert asyncio.run(tools.execute("ripgrep", {"pattern": "TODO"})) == {"matches": ["TODO"]}
    assert asyncio.run(tools.is_available("ripgrep")) is True
    assert asyncio.run(tools.is_available("sed")) is False
    assert asyncio.run(tools.get_available_tools()) == ["reasoning.plan", "ripgrep"]


def test_callable_executor_unknown_tool_raises():
    tools = CallableToolExecutor({})

    with pytest.raises(ToolNotFoundError) as exc:
        asyncio.run(tools.execute("sed", {}))
    assert isinstance(exc.value, ToolExecutionError)
    assert exc.value.tool_id == "sed"
    assert str(exc.value) == "Tool 'sed': tool is not available"


def test_callable_executor_drives_react_loop():
    tools = CallableToolExecutor({"reasoning.plan": _plan})

    result = asyncio.run(ReActExecutor(tool_exec=tools.execute).execute("find TODOs"))

    assert result.success is True
    assert result.final_answer == "step 0"


def test_react_records_missing_planner_as_error_observation():
    tools = CallableToolExecutor({})

    result = asyncio.run(ReActExecutor(tool_exec=tools.execute).execute("find TODOs"))

    assert result.success is False
    assert result.path[0].observation == {"error": "Tool 'reasoning.plan': tool is not available"}
