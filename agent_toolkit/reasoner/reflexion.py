from __future__ import annotations

import copy
import inspect
import re
from dataclasses import replace
from typing import Any, Dict, List, Optional, Protocol, Sequence

from agent_toolkit.models import ReasoningStep, ReflexionEpisode

from utils.logger import get_logger

logger = get_logger(__name__)

NO_FEEDBACK_REFLECTION = "no feedback provided"
_REFLECTION_PREFIX = re.compile(r"^\s*reflection:\s*", re.IGNORECASE)


class EpisodeMemory(Protocol):
    """Persistence collaborator for reflexion episodes."""

    def store_episode(self, episode: ReflexionEpisode) -> Any: ...

    def retrieve_patterns(self, query: str) -> Any: ...


class ReflexionEngine:
    """Single corrective pass that turns feedback into a rewritten final answer."""

    def __init__(self, *, memory: Optional[EpisodeMemory] = None) -> None:
        self.memory = memory

    async def improve(self, *, attempt: Sequence[ReasoningStep], feedback: str) -> ReflexionEpisode:
        reflection = self._compose_reflection(feedback)
        improved = self._rewrite(list(attempt), reflection)
        episode = ReflexionEpisode(
            attempt=list(attempt),
            feedback=feedback,
            reflection=reflection,
            improved_attempt=improved,
        )
        logger.info("reflexion_completed", steps=len(improved), has_feedback=bool(feedback and feedback.strip()))

        if self.memory is not None:
            stored = self.memory.store_episode(episode)
            if inspect.isawaitable(stored):
                await stored
        return episode

    async def history(self, query: str) -> List[Dict[str, Any]]:
        """Patterns previously stored for ``query``; empty without a memory collaborator."""
        if self.memory is None:
            return []
        patterns = self.memory.retrieve_patterns(query)
        if inspect.isawaitable(patterns):
            patterns = await patterns
        return list(patterns)

    @staticmethod
    def _compose_reflection(feedback: str) -> str:
        trimmed = (feedback or "").strip()
        if not trimmed:
            return NO_FEEDBACK_REFLECTION
        return f"Reflection: {trimmed[0].lower()}{trimmed[1:]}"

    @staticmethod
    def _rewrite(attempt: List[ReasoningStep], reflection: str) -> List[ReasoningStep]:
        final_thought = f"final answer: {_REFLECTION_PREFIX.sub('', reflection, count=1)}"
        if not attempt:
            return [ReasoningStep(thought=final_thought)]

        improved = [replace(copy.deepcopy(step), thought=f"{step.thought} (revisited)") for step in attempt[:-1]]
        improved.append(replace(copy.deepcopy(attempt[-1]), thought=final_thought))
        return improved
