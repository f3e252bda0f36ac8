from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, List, Optional

from agent_toolkit.cancellation import CancellationToken
from agent_toolkit.events import (
    REASONING_ABORTED,
    REASONING_COMPLETED,
    REASONING_STARTED,
    REASONING_STEP,
    EventEmitter,
    EventSink,
)
from agent_toolkit.models import ReasoningResult, ReasoningStep, ToolAction
from agent_toolkit.reasoner.answers import answer_after_marker, strip_final_answer_prefix
from agent_toolkit.tools.base import ToolExecCallback

from utils.logger import get_logger

logger = get_logger(__name__)

PLAN_TOOL = "reasoning.plan"
TRACE_WINDOW = 3


class ReActExecutor:
    """Bounded thought -> action -> observation loop.

    Each iteration asks the injected ``tool_exec`` callback to run the
    ``reasoning.plan`` tool with the goal and every prior thought/observation.
    The loop stops on the first final answer, the first tool failure,
    cancellation, or after ``max_iters`` iterations.
    """

    DEFAULT_MAX_ITERS = 10

    def __init__(
        self,
        *,
        tool_exec: ToolExecCallback,
        emit: Optional[EventSink] = None,
        max_iters: int = DEFAULT_MAX_ITERS,
    ) -> None:
        self.tool_exec = tool_exec
        self.emit = EventEmitter(emit)
        self.max_iters = max(1, max_iters)

    async def execute(self, goal: str, cancel: Optional[CancellationToken] = None) -> ReasoningResult:
        logger.info("react_started", goal=goal, max_iters=self.max_iters)
        path: List[ReasoningStep] = []
        self.emit(REASONING_STARTED, {"goal": goal})

        for index in range(self.max_iters):
            if cancel is not None and cancel.cancelled:
                return self._abort(goal, path, "aborted")

            step = self._create_step(goal, index, path)
            step.action = ToolAction(tool=PLAN_TOOL, input=self._create_input(goal, index, path))

            try:
                step.observation = await self.tool_exec(step.action.tool, step.action.input)
            except Exception as exc:
                step.observation = {"error": str(exc)}
                path.append(step)
                logger.error("react_tool_failed", goal=goal, index=index, error=str(exc))
                self.emit(REASONING_STEP, {"goal": goal, "index": index, "step": step, "errored": True})
                return self._complete(goal, path, None)

            path.append(step)
            obs_preview = str(step.observation)
            if len(obs_preview) > 200:
                obs_preview = obs_preview[:200] + "..."
            logger.info("react_step_completed", goal=goal, index=index, observation_preview=obs_preview)
            self.emit(REASONING_STEP, {"goal": goal, "index": index, "step": step})

            answer = self._extract_answer(step)
            if answer:
                return self._complete(goal, path, answer)

            if cancel is not None and cancel.cancelled:
                return self._abort(goal, path, "aborted")

        logger.warning("react_max_iters_reached", goal=goal, max_iters=self.max_iters)
        return self._complete(goal, path, None)

    # ---------- helpers -----------------------------------------
    def _create_step(self, goal: str, index: int, history: List[ReasoningStep]) -> ReasoningStep:
        prefix = "plan" if not history else "reflect"
        return ReasoningStep(
            thought=f"{prefix} step {index + 1} for {goal}",
            trace=self._build_trace(history, goal),
        )

    @staticmethod
    def _create_input(goal: str, index: int, history: List[ReasoningStep]) -> Dict[str, Any]:
        prior = [{"thought": entry.thought, "observation": entry.observation} for entry in history]
        return {"goal": goal, "step": index, "prior": prior}

    @staticmethod
    def _build_trace(history: List[ReasoningStep], goal: str) -> List[str]:
        if not history:
            return [f"goal:{goal}"]
        window = history[-TRACE_WINDOW:]
        return [f"{len(history) - offset}:{entry.thought}" for offset, entry in enumerate(window)]

    @staticmethod
    def _extract_answer(step: ReasoningStep) -> Optional[str]:
        observation = step.observation
        if isinstance(observation, Mapping) and observation.get("done") is True:
            value = observation.get("value")
            if value is None:
                value = observation.get("summary")
            return strip_final_answer_prefix(value) if isinstance(value, str) else None
        return answer_after_marker(step.thought)

    def _abort(self, goal: str, path: List[ReasoningStep], reason: str) -> ReasoningResult:
        logger.info("react_aborted", goal=goal, reason=reason, iterations=len(path))
        self.emit(REASONING_ABORTED, {"goal": goal, "reason": reason, "iterations": len(path)})
        self.emit(REASONING_COMPLETED, {"goal": goal, "success": False, "iterations": len(path)})
        return ReasoningResult(path=path, success=False)

    def _complete(self, goal: str, path: List[ReasoningStep], answer: Optional[str]) -> ReasoningResult:
        success = bool(answer)
        logger.info("react_completed", goal=goal, success=success, iterations=len(path))
        self.emit(
            REASONING_COMPLETED,
            {"goal": goal, "success": success, "iterations": len(path), "final_answer": answer},
        )
        return ReasoningResult(final_answer=answer or None, path=path, success=success)
