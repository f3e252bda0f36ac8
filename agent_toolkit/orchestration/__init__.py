from agent_toolkit.orchestration.models import (
    AgentDeliberation,
    AgentRole,
    ConsensusResult,
    ValidationResult,
)
from agent_toolkit.orchestration.multi_agent import MultiAgentOrchestrator
from agent_toolkit.orchestration.validator import ThoughtValidator

__all__ = [
    "AgentDeliberation",
    "AgentRole",
    "ConsensusResult",
    "MultiAgentOrchestrator",
    "ThoughtValidator",
    "ValidationResult",
]
