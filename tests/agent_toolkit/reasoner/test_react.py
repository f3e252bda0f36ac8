import asyncio

import pytest

from agent_toolkit.cancellation import CancellationToken
from agent_toolkit.reasoner.react import ReActExecutor
from tests.conftest import FakeToolExecutor, RecordingSink


def _run(executor: ReActExecutor, goal: str = "find TODOs", cancel=None):
    return asyncio.run(executor.execute(goal, cancel))


def test_react_stops_on_done_observation_and_strips_marker():
    tools = FakeToolExecutor(plan_queue=[{"done": False}, {"done": True, "value": "Final Answer:  X  "}])
    sink = RecordingSink()
    react = ReActExecutor(tool_exec=tools.execute, emit=sink, max_iters=5)

    result = _run(react)

    assert result.success is True
    assert result.final_answer == "X"
    assert len(result.path) == 2
    assert sink.names() == [
        "reasoning.started",
        "reasoning.step",
        "reasoning.step",
        "reasoning.completed",
    ]
    completed = sink.payloads("reasoning.completed")[0]
    assert completed == {"goal": "find TODOs", "success": True, "iterations": 2, "final_answer": "X"}


def test_react_uses_summary_when_value_missing():
    tools = FakeToolExecutor(plan_queue=[{"done": True, "summary": "all clear"}])
    result = _run(ReActExecutor(tool_exec=tools.execute))

    assert result.success is True
    assert result.final_answer == "all clear"


def test_react_marker_without_colon_returns_text_after_marker():
    tools = FakeToolExecutor(plan_queue=[{"done": True, "value": "final answer 42"}])
    result = _run(ReActExecutor(tool_exec=tools.execute))

    assert result.final_answer == "42"


def test_react_non_text_done_value_is_not_an_answer():
    tools = FakeToolExecutor(plan_queue=[{"done": True, "value": 7}])
    result = _run(ReActExecutor(tool_exec=tools.execute, max_iters=2))

    assert result.success is False
    assert result.final_answer is None
    assert len(result.path) == 2


def test_react_reads_final_answer_from_thought_text():
    tools = FakeToolExecutor()
    result = _run(ReActExecutor(tool_exec=tools.execute), goal="final answer: ship it")

    assert result.success is True
    assert result.final_answer == "ship it"
    assert len(result.path) == 1


@pytest.mark.parametrize("max_iters", [1, 3, 7])
def test_react_path_never_exceeds_max_iters(max_iters):
    tools = FakeToolExecutor()
    result = _run(ReActExecutor(tool_exec=tools.execute, max_iters=max_iters))

    assert result.success is False
    assert result.final_answer is None
    assert len(result.path) == max_iters


def test_react_max_iters_is_clamped_to_one():
    react = ReActExecutor(tool_exec=FakeToolExecutor().execute, max_iters=0)
    assert react.max_iters == 1
    assert len(_run(react).path) == 1


def test_react_tool_failure_terminates_without_retry():
    tools = FakeToolExecutor(plan_queue=[RuntimeError("boom"), {"done": True, "value": "never"}])
    sink = RecordingSink()
    result = _run(ReActExecutor(tool_exec=tools.execute, emit=sink, max_iters=5))

    assert result.success is False
    assert len(result.path) == 1
    assert result.path[0].observation == {"error": "boom"}
    assert len(tools.calls) == 1
    step_event = sink.payloads("reasoning.step")[0]
    assert step_event["errored"] is True
    assert sink.payloads("reasoning.completed")[0]["success"] is False


def test_react_builds_trace_window_and_prior_input():
    tools = FakeToolExecutor()
    result = _run(ReActExecutor(tool_exec=tools.execute, max_iters=5), goal="g")

    assert result.path[0].thought == "plan step 1 for g"
    assert result.path[0].trace == ["goal:g"]
    assert result.path[1].thought == "reflect step 2 for g"
    assert result.path[2].trace == ["2:plan step 1 for g", "1:reflect step 2 for g"]
    # window holds only the last three prior steps
    assert len(result.path[4].trace) == 3
    assert result.path[4].trace[-1].endswith("reflect step 4 for g")

    action = result.path[2].action
    assert action.tool == "reasoning.plan"
    assert action.input["step"] == 2
    assert [p["thought"] for p in action.input["prior"]] == ["plan step 1 for g", "reflect step 2 for g"]


def test_react_aborts_before_first_step_when_already_cancelled():
    tools = FakeToolExecutor()
    sink = RecordingSink()
    token = CancellationToken()
    token.cancel()

    result = _run(ReActExecutor(tool_exec=tools.execute, emit=sink), cancel=token)

    assert result.success is False
    assert result.path == []
    assert tools.calls == []
    assert sink.names() == ["reasoning.started", "reasoning.aborted", "reasoning.completed"]
    assert sink.payloads("reasoning.aborted")[0] == {"goal": "find TODOs", "reason": "aborted", "iterations": 0}


def test_react_cancellation_during_step_stops_after_that_step():
    token = CancellationToken()
    calls = []

    async def tool_exec(tool, tool_input):
        calls.append(tool_input["step"])
        if tool_input["step"] == 1:
            token.cancel()
        return {"done": False}

    sink = RecordingSink()
    result = _run(ReActExecutor(tool_exec=tool_exec, emit=sink, max_iters=10), cancel=token)

    assert result.success is False
    assert len(result.path) == 2
    assert calls == [0, 1]
    assert sink.names() == [
        "reasoning.started",
        "reasoning.step",
        "reasoning.step",
        "reasoning.aborted",
        "reasoning.completed",
    ]
    assert sink.payloads("reasoning.aborted")[0] == {"goal": "find TODOs", "reason": "aborted", "iterations": 2}
    assert sink.payloads("reasoning.completed")[0] == {"goal": "find TODOs", "success": False, "iterations": 2}


def test_react_survives_a_failing_event_sink():
    def broken_sink(name, payload):
        raise RuntimeError("sink down")

    tools = FakeToolExecutor(plan_queue=[{"done": True, "value": "fine"}])
    result = _run(ReActExecutor(tool_exec=tools.execute, emit=broken_sink))

    assert result.final_answer == "fine"
