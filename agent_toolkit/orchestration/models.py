"""Data models for multi-agent deliberation."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, List

from agent_toolkit.models import MISSING, ReasoningStep, ToolAction

__all__ = ["AgentRole", "AgentDeliberation", "ValidationResult", "ConsensusResult", "as_step"]


@dataclass(frozen=True)
class AgentRole:
    id: str
    role: str
    capabilities: List[str] = field(default_factory=list)
    model: str = ""


@dataclass
class AgentDeliberation:
    """One agent's proposal for the shared goal."""

    agent_id: str
    proposal: str
    confidence: float
    steps: List[ReasoningStep] = field(default_factory=list)

    @classmethod
    def coerce(cls, value: Any) -> "AgentDeliberation":
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            return cls(
                agent_id=str(value.get("agent_id") or value.get("agentId") or ""),
                proposal=str(value.get("proposal") or ""),
                confidence=float(value.get("confidence", 0.0)),
                steps=[as_step(s) for s in value.get("steps") or []],
            )
        raise TypeError(f"Unsupported deliberation type: {type(value).__name__}")


@dataclass
class ValidationResult:
    valid: bool
    reasons: List[str] = field(default_factory=list)


@dataclass
class ConsensusResult:
    consensus: str
    confidence: float
    paths: Dict[str, List[ReasoningStep]] = field(default_factory=dict)

    @property
    def participants(self) -> List[str]:
        return list(self.paths)


def as_step(value: Any) -> ReasoningStep:
    """Accept either a ReasoningStep or its mapping form."""
    if isinstance(value, ReasoningStep):
        return value
    action = value.get("action")
    if isinstance(action, Mapping):
        action = ToolAction(tool=str(action.get("tool", "")), input=dict(action.get("input") or {}))
    return ReasoningStep(
        thought=str(value.get("thought", "")),
        action=action,
        observation=value.get("observation", MISSING),
        trace=list(value.get("trace") or []),
    )
