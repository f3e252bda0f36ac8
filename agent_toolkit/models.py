"""Data models shared by every reasoning strategy."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

__all__ = [
    "MISSING",
    "ToolAction",
    "ReasoningStep",
    "ReasoningResult",
    "ThoughtStatus",
    "ThoughtNode",
    "NodeType",
    "ReasoningNode",
    "ProgramStep",
    "ProgramRun",
    "ReflexionEpisode",
]


class _Missing(Enum):
    MISSING = "MISSING"

    def __repr__(self) -> str:
        return "MISSING"


# observation placeholder for steps that never ran a tool; None is a real tool result
MISSING = _Missing.MISSING


@dataclass
class ToolAction:
    """A tool invocation requested by a reasoning step."""

    tool: str
    input: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ReasoningStep:
    """A single thought, its optional action and the observation it produced."""

    thought: str
    action: Optional[ToolAction] = None
    observation: Any = MISSING
    trace: List[str] = field(default_factory=list)


@dataclass
class ReasoningResult:
    final_answer: Optional[str] = None
    path: List[ReasoningStep] = field(default_factory=list)
    success: bool = False

    @property
    def iterations(self) -> int:
        return len(self.path)


class ThoughtStatus(str, Enum):
    """Lifecycle of a Tree-of-Thoughts node."""

    PENDING = "pending"
    EXPLORED = "explored"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class ThoughtNode:
    id: int
    content: str
    status: ThoughtStatus = ThoughtStatus.PENDING
    score: Optional[float] = None
    parent_id: Optional[int] = None
    children: List[int] = field(default_factory=list)


class NodeType(str, Enum):
    QUESTION = "question"
    TOOL_CALL = "tool_call"
    OBSERVATION = "observation"
    CONCLUSION = "conclusion"


@dataclass
class ReasoningNode:
    """A vertex of the reasoning graph; ``edges`` hold forward node ids."""

    id: str
    type: NodeType
    content: str
    confidence: float
    edges: List[str] = field(default_factory=list)


@dataclass
class ProgramStep:
    variable: str
    operation: str
    result: Any = None
    deps: List[str] = field(default_factory=list)


@dataclass
class ProgramRun:
    """Output of a Program-of-Thought run: the program, its value and trace lines."""

    program: List[ProgramStep]
    result: Any
    trace: List[str]


@dataclass
class ReflexionEpisode:
    attempt: List[ReasoningStep]
    feedback: str
    reflection: Optional[str] = None
    improved_attempt: Optional[List[ReasoningStep]] = None
