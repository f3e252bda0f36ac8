from __future__ import annotations

import asyncio
import inspect
from collections import deque
from typing import Any, Awaitable, Callable, Deque, List, Optional, Sequence, Tuple, Union

from agent_toolkit.models import ThoughtNode, ThoughtStatus
from agent_toolkit.reasoner.answers import has_final_answer

from utils.logger import get_logger

logger = get_logger(__name__)

ProposeFn = Callable[[str], Union[Sequence[str], Awaitable[Sequence[str]]]]
ScoreFn = Callable[[str], Union[float, Awaitable[float]]]

SUCCESS_SCORE = 0.8
MAX_BEAM_WIDTH = 6
MAX_DEPTH = 10


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


class TreeOfThoughtsExecutor:
    """Breadth-first frontier search over proposed thoughts with per-node beam pruning.

    Nodes live in an arena owned by the executor; a node's id is its index.
    Each ``explore`` call starts a fresh arena, so nodes from the previous
    search are no longer addressable afterwards.
    """

    def __init__(
        self,
        *,
        propose: ProposeFn,
        score: ScoreFn,
        max_depth: int = 3,
        beam_width: int = 3,
    ) -> None:
        self.propose = propose
        self.score = score
        self.max_depth = _clamp(max_depth, 1, MAX_DEPTH)
        self.beam_width = _clamp(beam_width, 1, MAX_BEAM_WIDTH)
        self._nodes: List[ThoughtNode] = []

    async def explore(
        self,
        problem: str,
        *,
        max_depth: Optional[int] = None,
        beam_width: Optional[int] = None,
    ) -> ThoughtNode:
        depth_limit = _clamp(max_depth if max_depth is not None else self.max_depth, 1, MAX_DEPTH)
        beam = _clamp(beam_width if beam_width is not None else self.beam_width, 1, MAX_BEAM_WIDTH)
        logger.info("tot_explore_started", problem=problem, max_depth=depth_limit, beam_width=beam)

        self._nodes = []
        root = self._register(problem, parent=None)
        frontier: Deque[Tuple[ThoughtNode, int]] = deque([(root, 0)])
        expansions = 0

        while frontier:
            node, depth = frontier.popleft()
            if depth >= depth_limit:
                if not node.children:
                    node.status = ThoughtStatus.FAILED
                continue

            ideas = list(await _resolve(self.propose(node.content)) or [])
            expansions += 1
            if not ideas:
                logger.debug("tot_no_proposals", node_id=node.id, depth=depth)
                continue

            kept = await self._rank(ideas, beam)
            node.status = ThoughtStatus.EXPLORED

            children: List[ThoughtNode] = []
            winner: Optional[ThoughtNode] = None
            for idea, score in kept:
                child = self._register(idea, parent=node)
                child.score = score
                if score >= SUCCESS_SCORE or has_final_answer(idea):
                    child.status = ThoughtStatus.SUCCESS
                    if winner is None:
                        winner = child
                children.append(child)

            if winner is not None:
                logger.info("tot_success", node_id=winner.id, depth=depth + 1, score=winner.score, expansions=expansions)
                return winner

            frontier.extend((child, depth + 1) for child in children)

        if not root.children:
            root.status = ThoughtStatus.FAILED
        logger.info("tot_exhausted", nodes=len(self._nodes), expansions=expansions, root_status=root.status.value)
        return root

    def extract_path(self, node_id: int) -> List[ThoughtNode]:
        """Nodes from the root down to ``node_id``."""
        path: List[ThoughtNode] = []
        current = self.get_node(node_id)
        while current is not None:
            path.append(current)
            current = self.get_node(current.parent_id) if current.parent_id is not None else None
        path.reverse()
        return path

    def get_node(self, node_id: int) -> Optional[ThoughtNode]:
        if 0 <= node_id < len(self._nodes):
            return self._nodes[node_id]
        return None

    @property
    def nodes(self) -> List[ThoughtNode]:
        return list(self._nodes)

    # ---------- helpers -----------------------------------------
    def _register(self, content: str, parent: Optional[ThoughtNode]) -> ThoughtNode:
        node = ThoughtNode(id=len(self._nodes), content=content, parent_id=parent.id if parent else None)
        self._nodes.append(node)
        if parent is not None:
            parent.children.append(node.id)
        return node

    async def _rank(self, ideas: List[str], beam: int) -> List[Tuple[str, float]]:
        scores = await asyncio.gather(*(_resolve(self.score(idea)) for idea in ideas))
        scored = [(idea, max(0.0, min(1.0, float(s)))) for idea, s in zip(ideas, scores)]
        # sorted() is stable, so equal scores keep proposal order
        return sorted(scored, key=lambda pair: pair[1], reverse=True)[:beam]
