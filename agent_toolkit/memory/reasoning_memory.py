"""Episode memory for the reflexion engine, backed by any MutableMapping."""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any, Dict, List, Optional, TypedDict

from agent_toolkit.models import ReflexionEpisode
from agent_toolkit.reasoner.answers import has_final_answer

from utils.logger import get_logger

logger = get_logger(__name__)

EPISODES_KEY = "reflexion_episodes"


class ReflexionPattern(TypedDict):
    """A lesson aggregated from every stored episode sharing the same key."""

    key: str
    feedback: str
    reflection: str
    success_rate: float
    occurrences: int


class ReasoningMemoryManager:
    """
    Stores reflexion episodes and serves them back as patterns.

    Episodes are kept under ``reflexion_episodes`` in the given mapping, so a
    plain dict works for tests and single sessions while any MutableMapping
    (Redis wrapper, shelve, custom classes) can provide persistence.

    An episode's key is the thought of its first attempted step, or its
    feedback when the attempt was empty.
    """

    def __init__(self, store: Optional[MutableMapping[str, Any]] = None) -> None:
        self.store: MutableMapping[str, Any] = store if store is not None else {}
        self.store.setdefault(EPISODES_KEY, [])

    def store_episode(self, episode: ReflexionEpisode) -> None:
        episodes: List[ReflexionEpisode] = self.store[EPISODES_KEY]
        episodes.append(episode)
        # reassign so mapping backends that copy on read still persist the change
        self.store[EPISODES_KEY] = episodes
        logger.info("episode_stored", key=self._key(episode), total=len(episodes))

    def retrieve_patterns(self, query: str) -> List[ReflexionPattern]:
        needle = (query or "").strip().lower()
        grouped: Dict[str, List[ReflexionEpisode]] = {}
        for episode in self.store.get(EPISODES_KEY, []):
            if needle and needle not in self._searchable(episode):
                continue
            grouped.setdefault(self._key(episode), []).append(episode)

        patterns: List[ReflexionPattern] = []
        for key, episodes in grouped.items():
            latest = episodes[-1]
            successes = sum(1 for e in episodes if self._succeeded(e))
            patterns.append(
                ReflexionPattern(
                    key=key,
                    feedback=latest.feedback,
                    reflection=latest.reflection or "",
                    success_rate=round(successes / len(episodes), 2),
                    occurrences=len(episodes),
                )
            )
        logger.debug("patterns_retrieved", query=query, count=len(patterns))
        return patterns

    @staticmethod
    def _key(episode: ReflexionEpisode) -> str:
        return episode.attempt[0].thought if episode.attempt else episode.feedback

    @staticmethod
    def _searchable(episode: ReflexionEpisode) -> str:
        parts = [step.thought for step in episode.attempt]
        parts.extend([episode.feedback, episode.reflection or ""])
        return "\n".join(parts).lower()

    @staticmethod
    def _succeeded(episode: ReflexionEpisode) -> bool:
        improved = episode.improved_attempt or []
        return bool(improved) and has_final_answer(improved[-1].thought)
