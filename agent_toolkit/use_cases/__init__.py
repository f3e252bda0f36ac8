from agent_toolkit.use_cases.outcomes import (
    ConsensusOutcome,
    ConsensusSummary,
    ModeOutcome,
    ProgramOptions,
    ProgramOutcome,
    ReactOutcome,
    ReasoningMode,
    ReasoningOptions,
    ReasoningOutcome,
    ReflexionOutcome,
    TotOptions,
    TotOutcome,
)
from agent_toolkit.use_cases.reasoning_tool_executor import ReasoningToolExecutor

__all__ = [
    "ConsensusOutcome",
    "ConsensusSummary",
    "ModeOutcome",
    "ProgramOptions",
    "ProgramOutcome",
    "ReactOutcome",
    "ReasoningMode",
    "ReasoningOptions",
    "ReasoningOutcome",
    "ReasoningToolExecutor",
    "ReflexionOutcome",
    "TotOptions",
    "TotOutcome",
]
