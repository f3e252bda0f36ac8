from __future__ import annotations

import re
from typing import Iterable, List, Pattern

from agent_toolkit.orchestration.models import AgentDeliberation, ValidationResult

from utils.logger import get_logger

logger = get_logger(__name__)


class ThoughtValidator:
    """Policy gate for agent deliberations.

    Rejects empty proposals, confidence outside [0, 1], and any proposal or
    step thought matching one of the blocked patterns.
    """

    def __init__(self, blocked_patterns: Iterable[str] = ()) -> None:
        self.blocked: List[Pattern[str]] = [re.compile(p, re.IGNORECASE) for p in blocked_patterns]

    def validate(self, deliberation: AgentDeliberation) -> ValidationResult:
        reasons: List[str] = []
        if not deliberation.proposal.strip():
            reasons.append("empty proposal")
        if not 0.0 <= deliberation.confidence <= 1.0:
            reasons.append(f"confidence {deliberation.confidence} outside [0, 1]")

        texts = [deliberation.proposal, *(step.thought for step in deliberation.steps)]
        for pattern in self.blocked:
            if any(pattern.search(text) for text in texts):
                reasons.append(f"matched blocked pattern '{pattern.pattern}'")

        if reasons:
            logger.warning("deliberation_rejected", agent_id=deliberation.agent_id, reasons=reasons)
        return ValidationResult(valid=not reasons, reasons=reasons)
