"""
ReasoningToolExecutor

Top-level entry point: runs one reasoning strategy for a tool invocation,
then executes the tool and returns both.  Strategies are injected; a mode
whose strategy is missing fails with StrategyUnavailableError.
"""
from __future__ import annotations

import copy
from dataclasses import replace
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Union

from agent_toolkit.events import REASONING_CONSENSUS, REASONING_GRAPH_UPDATED, EventEmitter, EventSink
from agent_toolkit.models import ProgramRun, ReasoningResult, ReasoningStep, ThoughtNode
from agent_toolkit.orchestration.multi_agent import DeliberateFn, MultiAgentOrchestrator
from agent_toolkit.orchestration.validator import ThoughtValidator
from agent_toolkit.reasoner.exceptions import ConsensusError, StrategyUnavailableError, UnsupportedModeError
from agent_toolkit.reasoner.graph import ReasoningGraphTracker
from agent_toolkit.reasoner.program_of_thought import ProgramOfThoughtExecutor
from agent_toolkit.reasoner.react import ReActExecutor
from agent_toolkit.reasoner.reflexion import EpisodeMemory, ReflexionEngine
from agent_toolkit.reasoner.tree_of_thoughts import ProposeFn, ScoreFn, TreeOfThoughtsExecutor
from agent_toolkit.tools.base import ToolExecutor
from agent_toolkit.use_cases.outcomes import (
    AnyModeOutcome,
    ConsensusOutcome,
    ConsensusSummary,
    ProgramOutcome,
    ReactOutcome,
    ReasoningMode,
    ReasoningOptions,
    ReasoningOutcome,
    ReflexionOutcome,
    TotOutcome,
)

from utils.config import Config
from utils.logger import get_logger, trace_method

logger = get_logger(__name__)

DEFAULT_REFLEXION_FEEDBACK = "Auto-reflection requested"


class ReasoningToolExecutor:
    """Selects a reasoning strategy by mode and composes a uniform outcome."""

    def __init__(
        self,
        *,
        tool_executor: ToolExecutor,
        react: ReActExecutor,
        tree_of_thoughts: Optional[TreeOfThoughtsExecutor] = None,
        orchestrator: Optional[MultiAgentOrchestrator] = None,
        reflexion: Optional[ReflexionEngine] = None,
        reasoning_graph: Optional[ReasoningGraphTracker] = None,
        program_of_thought: Optional[ProgramOfThoughtExecutor] = None,
        emit: Optional[EventSink] = None,
        default_mode: Union[ReasoningMode, str] = ReasoningMode.REACT,
    ) -> None:
        self.tool_executor = tool_executor
        self.react = react
        self.tree_of_thoughts = tree_of_thoughts
        self.orchestrator = orchestrator
        self.reflexion = reflexion
        self.reasoning_graph = reasoning_graph
        self.program_of_thought = program_of_thought
        self.emit = EventEmitter(emit)
        self.default_mode = self._resolve_mode(default_mode)

        self._handlers: Dict[ReasoningMode, Callable[[str, ReasoningOptions], Awaitable[AnyModeOutcome]]] = {
            ReasoningMode.REACT: self._run_react,
            ReasoningMode.TOT: self._run_tree_of_thoughts,
            ReasoningMode.REFLEXION: self._run_reflexion,
            ReasoningMode.PROGRAM: self._run_program,
            ReasoningMode.MULTI_AGENT: self._run_multi_agent,
        }

    @classmethod
    def from_config(
        cls,
        config: Config,
        *,
        tool_executor: ToolExecutor,
        propose: Optional[ProposeFn] = None,
        score: Optional[ScoreFn] = None,
        deliberate: Optional[DeliberateFn] = None,
        validator: Optional[ThoughtValidator] = None,
        memory: Optional[EpisodeMemory] = None,
        emit: Optional[EventSink] = None,
    ) -> "ReasoningToolExecutor":
        """Wire every strategy with the bounds from ``config``.

        Tree-of-Thoughts needs both ``propose`` and ``score``; multi-agent
        mode needs ``deliberate``. Modes without their collaborators stay
        unavailable.
        """
        settings = config.reasoning
        tree = None
        if propose is not None and score is not None:
            tree = TreeOfThoughtsExecutor(
                propose=propose,
                score=score,
                max_depth=settings.tot.max_depth,
                beam_width=settings.tot.beam_width,
            )
        orchestrator = None
        if deliberate is not None:
            orchestrator = MultiAgentOrchestrator(
                deliberate=deliberate, validator=validator, rounds=settings.consensus.rounds
            )
        return cls(
            tool_executor=tool_executor,
            react=ReActExecutor(tool_exec=tool_executor.execute, emit=emit, max_iters=settings.react.max_iters),
            tree_of_thoughts=tree,
            orchestrator=orchestrator,
            reflexion=ReflexionEngine(memory=memory),
            reasoning_graph=ReasoningGraphTracker(),
            program_of_thought=ProgramOfThoughtExecutor(timeout_ms=settings.program.timeout_ms),
            emit=emit,
            default_mode=settings.default_mode,
        )

    @trace_method
    async def execute_with_reasoning(
        self,
        tool_name: str,
        tool_input: Mapping[str, Any],
        mode: Union[ReasoningMode, str, None] = None,
        options: Optional[ReasoningOptions] = None,
    ) -> ReasoningOutcome:
        """Run the reasoning for ``mode`` (the configured default when omitted), then the tool."""
        resolved = self.default_mode if mode is None else self._resolve_mode(mode)
        opts = options or ReasoningOptions()

        goal = self.build_goal(tool_name, tool_input)
        logger.info("reasoning_mode_selected", goal=goal, mode=resolved.value)

        detail = await self._handlers[resolved](goal, opts)
        detail = self._wrap_with_graph(goal, detail)

        result = await self.tool_executor.execute(tool_name, dict(tool_input))
        logger.info("reasoning_tool_executed", tool=tool_name, mode=resolved.value, confidence=detail.confidence)
        return ReasoningOutcome(result=result, mode=resolved, detail=detail)

    @staticmethod
    def _resolve_mode(mode: Union[ReasoningMode, str]) -> ReasoningMode:
        try:
            return ReasoningMode(mode)
        except ValueError:
            raise UnsupportedModeError(str(mode)) from None

    # ---------- goal ----------------------------------------------
    @classmethod
    def build_goal(cls, tool_name: str, tool_input: Mapping[str, Any]) -> str:
        return f"Run {tool_name} for {cls._describe_input(tool_input)}"

    @staticmethod
    def _describe_input(tool_input: Mapping[str, Any]) -> str:
        pattern = tool_input.get("pattern")
        if isinstance(pattern, str):
            return pattern
        if "find" in tool_input and "replace" in tool_input:
            return f"{tool_input['find']} -> {tool_input['replace']}"
        files = tool_input.get("files")
        if isinstance(files, (list, tuple)):
            return ", ".join(str(f) for f in files[:3])
        return "the requested task"

    # ---------- modes ---------------------------------------------
    async def _run_react(self, goal: str, opts: ReasoningOptions) -> ReactOutcome:
        result = await self.react.execute(goal, opts.cancel)
        return ReactOutcome(
            path=list(result.path),
            confidence=self._reactive_confidence(result),
            final_answer=result.final_answer,
            success=result.success,
        )

    async def _run_tree_of_thoughts(self, goal: str, opts: ReasoningOptions) -> TotOutcome:
        executor = self._require(self.tree_of_thoughts, ReasoningMode.TOT, "TreeOfThoughtsExecutor")
        tot = opts.tot
        node = await executor.explore(
            (tot.problem if tot and tot.problem else goal),
            max_depth=tot.max_depth if tot else None,
            beam_width=tot.beam_width if tot else None,
        )
        thought_path = executor.extract_path(node.id)
        return TotOutcome(
            path=[ReasoningStep(thought=entry.content) for entry in thought_path],
            confidence=self._tot_confidence(node),
            thought_path=thought_path,
        )

    async def _run_reflexion(self, goal: str, opts: ReasoningOptions) -> ReflexionOutcome:
        engine = self._require(self.reflexion, ReasoningMode.REFLEXION, "ReflexionEngine")
        baseline = await self.react.execute(goal, opts.cancel)
        feedback = opts.reflexion_feedback if opts.reflexion_feedback is not None else DEFAULT_REFLEXION_FEEDBACK
        episode = await engine.improve(attempt=baseline.path, feedback=feedback)
        improved = episode.improved_attempt or []
        return ReflexionOutcome(
            path=improved or episode.attempt,
            confidence=self._reflexion_confidence(bool(improved), baseline.success),
            reflection=episode.reflection,
            baseline_success=baseline.success,
        )

    async def _run_program(self, goal: str, opts: ReasoningOptions) -> ProgramOutcome:
        executor = self._require(self.program_of_thought, ReasoningMode.PROGRAM, "ProgramOfThoughtExecutor")
        run = await executor.run(goal, timeout_ms=opts.program.timeout_ms if opts.program else None)
        return ProgramOutcome(
            path=[ReasoningStep(thought=line) for line in run.trace],
            confidence=self._program_confidence(run),
            program=run,
        )

    async def _run_multi_agent(self, goal: str, opts: ReasoningOptions) -> ConsensusOutcome:
        orchestrator = self._require(self.orchestrator, ReasoningMode.MULTI_AGENT, "MultiAgentOrchestrator")
        if not opts.agents:
            raise ConsensusError('Reasoning mode "multi-agent" requires at least one agent role')

        outcome = await orchestrator.coordinate(goal, opts.agents, rounds=opts.consensus_rounds)
        summary = ConsensusSummary(
            outcome=outcome.consensus,
            participants=outcome.participants,
            confidence=outcome.confidence,
        )
        self.emit(
            REASONING_CONSENSUS,
            {
                "goal": goal,
                "consensus": outcome.consensus,
                "confidence": outcome.confidence,
                "participants": summary.participants,
            },
        )
        first = next(iter(outcome.paths.values()), [])
        return ConsensusOutcome(
            path=[replace(step, trace=list(step.trace)) for step in first],
            confidence=round(outcome.confidence, 2),
            consensus=summary,
            agent_paths=outcome.paths,
        )

    # ---------- graph ---------------------------------------------
    def _wrap_with_graph(self, goal: str, detail: AnyModeOutcome) -> AnyModeOutcome:
        if self.reasoning_graph is None or not detail.path:
            return detail
        graph = self.reasoning_graph.summarise([copy.copy(step) for step in detail.path])
        self.emit(REASONING_GRAPH_UPDATED, {"goal": goal, "graph": graph, "iterations": len(detail.path)})
        logger.debug("reasoning_graph_attached", goal=goal, nodes=len(graph.nodes), has_cycles=graph.has_cycles)
        return replace(detail, graph=graph)

    # ---------- confidence ----------------------------------------
    @staticmethod
    def _reactive_confidence(result: ReasoningResult) -> float:
        if not result.success:
            return 0.35
        steps = max(1, len(result.path))
        return round(max(0.5, 1 - (steps - 1) * 0.1), 2)

    @staticmethod
    def _tot_confidence(node: ThoughtNode) -> float:
        base = node.score if node.score is not None else 0.5
        return round(min(0.95, 0.5 + base * 0.5), 2)

    @staticmethod
    def _reflexion_confidence(improved: bool, baseline_success: bool) -> float:
        base = 0.6 if baseline_success else 0.45
        return round(min(0.95, base + (0.2 if improved else 0.0)), 2)

    @staticmethod
    def _program_confidence(run: ProgramRun) -> float:
        return round(min(0.9, 0.6 + len(run.trace) * 0.05), 2)

    @staticmethod
    def _require(dependency: Any, mode: ReasoningMode, name: str) -> Any:
        if dependency is None:
            raise StrategyUnavailableError(mode.value, name)
        return dependency
