"""Multi-strategy reasoning engine: ReAct, Tree-of-Thoughts, Reflexion, Program-of-Thought."""

from agent_toolkit.cancellation import CancellationToken
from agent_toolkit.models import (
    MISSING,
    NodeType,
    ProgramRun,
    ProgramStep,
    ReasoningNode,
    ReasoningResult,
    ReasoningStep,
    ReflexionEpisode,
    ThoughtNode,
    ThoughtStatus,
    ToolAction,
)
from agent_toolkit.use_cases import ReasoningMode, ReasoningOptions, ReasoningOutcome, ReasoningToolExecutor

__all__ = [
    "MISSING",
    "CancellationToken",
    "NodeType",
    "ProgramRun",
    "ProgramStep",
    "ReasoningMode",
    "ReasoningNode",
    "ReasoningOptions",
    "ReasoningOutcome",
    "ReasoningResult",
    "ReasoningStep",
    "ReasoningToolExecutor",
    "ReflexionEpisode",
    "ThoughtNode",
    "ThoughtStatus",
    "ToolAction",
]
