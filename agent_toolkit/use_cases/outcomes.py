"""Per-mode reasoning outcomes and the uniform envelope returned to callers."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from agent_toolkit.models import ProgramRun, ReasoningStep, ThoughtNode
from agent_toolkit.orchestration.models import AgentRole
from agent_toolkit.cancellation import CancellationToken
from agent_toolkit.reasoner.graph import GraphSummary

__all__ = [
    "ReasoningMode",
    "TotOptions",
    "ProgramOptions",
    "ReasoningOptions",
    "ModeOutcome",
    "ReactOutcome",
    "TotOutcome",
    "ReflexionOutcome",
    "ProgramOutcome",
    "ConsensusSummary",
    "ConsensusOutcome",
    "AnyModeOutcome",
    "ReasoningOutcome",
]


class ReasoningMode(str, Enum):
    REACT = "react"
    TOT = "tot"
    REFLEXION = "reflexion"
    PROGRAM = "program"
    MULTI_AGENT = "multi-agent"


@dataclass
class TotOptions:
    max_depth: Optional[int] = None
    beam_width: Optional[int] = None
    problem: Optional[str] = None  # explored instead of the goal when set


@dataclass
class ProgramOptions:
    timeout_ms: Optional[float] = None


@dataclass
class ReasoningOptions:
    cancel: Optional[CancellationToken] = None
    agents: List[AgentRole] = field(default_factory=list)
    tot: Optional[TotOptions] = None
    reflexion_feedback: Optional[str] = None
    consensus_rounds: Optional[int] = None
    program: Optional[ProgramOptions] = None


@dataclass(kw_only=True)
class ModeOutcome:
    path: List[ReasoningStep]
    confidence: float
    graph: Optional[GraphSummary] = None


@dataclass(kw_only=True)
class ReactOutcome(ModeOutcome):
    final_answer: Optional[str] = None
    success: bool = False


@dataclass(kw_only=True)
class TotOutcome(ModeOutcome):
    thought_path: List[ThoughtNode]


@dataclass(kw_only=True)
class ReflexionOutcome(ModeOutcome):
    reflection: Optional[str] = None
    baseline_success: bool = False


@dataclass(kw_only=True)
class ProgramOutcome(ModeOutcome):
    program: ProgramRun


@dataclass
class ConsensusSummary:
    outcome: str
    participants: List[str]
    confidence: float


@dataclass(kw_only=True)
class ConsensusOutcome(ModeOutcome):
    consensus: ConsensusSummary
    agent_paths: Dict[str, List[ReasoningStep]] = field(default_factory=dict)


AnyModeOutcome = Union[ReactOutcome, TotOutcome, ReflexionOutcome, ProgramOutcome, ConsensusOutcome]


@dataclass
class ReasoningOutcome:
    """Tool result plus the reasoning that preceded it.

    ``detail`` holds the mode-specific outcome; ``path``, ``confidence`` and
    ``reasoning_graph`` project the fields every mode shares.
    """

    result: Any
    mode: ReasoningMode
    detail: AnyModeOutcome

    @property
    def path(self) -> List[ReasoningStep]:
        return self.detail.path

    @property
    def confidence(self) -> float:
        return self.detail.confidence

    @property
    def reasoning_graph(self) -> Optional[GraphSummary]:
        return self.detail.graph
