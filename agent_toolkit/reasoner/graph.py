from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from agent_toolkit.models import MISSING, NodeType, ReasoningNode, ReasoningStep
from agent_toolkit.reasoner.answers import has_final_answer, strip_final_answer_prefix

from utils.logger import get_logger

logger = get_logger(__name__)

QUESTION_CONFIDENCE = 0.6
TOOL_CALL_CONFIDENCE = 0.55
OBSERVATION_CONFIDENCE = 0.65
CONCLUSION_CONFIDENCE = 0.9
OBSERVATION_PREVIEW_CHARS = 120


@dataclass
class GraphSummary:
    nodes: List[ReasoningNode] = field(default_factory=list)
    best_path: List[str] = field(default_factory=list)
    has_cycles: bool = False


def _serialise(value: Any) -> str:
    if value is None:
        return "unknown"
    if isinstance(value, str):
        return value
    if isinstance(value, (bool, int, float)):
        return str(value)
    try:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)[:OBSERVATION_PREVIEW_CHARS]
    except (TypeError, ValueError):
        return "unserializable"


class ReasoningGraphTracker:
    """Builds and analyses the question/tool_call/observation/conclusion graph of a path."""

    def build(self, steps: Sequence[ReasoningStep]) -> List[ReasoningNode]:
        nodes: List[ReasoningNode] = []
        registry: Dict[str, ReasoningNode] = {}
        tail: Optional[str] = None

        def append(node_id: str, node_type: NodeType, content: str, confidence: float) -> None:
            nonlocal tail
            node = ReasoningNode(id=node_id, type=node_type, content=content, confidence=confidence)
            nodes.append(node)
            registry[node_id] = node
            if tail is not None and node_id not in registry[tail].edges:
                registry[tail].edges.append(node_id)
            tail = node_id

        for index, step in enumerate(steps):
            append(f"thought-{index}", NodeType.QUESTION, step.thought, QUESTION_CONFIDENCE)
            if step.action is not None:
                append(f"action-{index}", NodeType.TOOL_CALL, step.action.tool, TOOL_CALL_CONFIDENCE)
            if step.observation is not MISSING:
                append(f"observation-{index}", NodeType.OBSERVATION, _serialise(step.observation), OBSERVATION_CONFIDENCE)
            if has_final_answer(step.thought):
                append(
                    f"conclusion-{index}",
                    NodeType.CONCLUSION,
                    strip_final_answer_prefix(step.thought),
                    CONCLUSION_CONFIDENCE,
                )

        logger.debug("reasoning_graph_built", steps=len(steps), nodes=len(nodes))
        return nodes

    def summarise(self, steps: Sequence[ReasoningStep]) -> GraphSummary:
        nodes = self.build(steps)
        return GraphSummary(nodes=nodes, best_path=self.best_path(nodes), has_cycles=self.has_cycles(nodes))

    @staticmethod
    def has_cycles(nodes: Sequence[ReasoningNode]) -> bool:
        adjacency = {node.id: node.edges for node in nodes}
        visiting: set[str] = set()
        visited: set[str] = set()

        for start in nodes:
            if start.id in visited:
                continue
            visiting.add(start.id)
            stack: List[Tuple[str, Iterator[str]]] = [(start.id, iter(adjacency.get(start.id, [])))]
            while stack:
                node_id, edges = stack[-1]
                nxt = next(edges, None)
                if nxt is None:
                    stack.pop()
                    visiting.discard(node_id)
                    visited.add(node_id)
                    continue
                if nxt in visiting:
                    return True
                if nxt in visited:
                    continue
                visiting.add(nxt)
                stack.append((nxt, iter(adjacency.get(nxt, []))))
        return False

    @staticmethod
    def best_path(nodes: Sequence[ReasoningNode]) -> List[str]:
        """Root-to-leaf path with the greatest summed confidence; first found wins ties."""
        registry = {node.id: node for node in nodes}
        incoming: Dict[str, int] = {}
        for node in nodes:
            for edge in node.edges:
                incoming[edge] = incoming.get(edge, 0) + 1

        roots = [node for node in nodes if incoming.get(node.id, 0) == 0]
        best_score = float("-inf")
        best: List[str] = []

        for root in roots:
            stack: List[Tuple[str, List[str], float]] = [(root.id, [], 0.0)]
            while stack:
                node_id, path, score = stack.pop()
                node = registry.get(node_id)
                if node is None:
                    continue
                score += node.confidence
                path = path + [node_id]
                if not node.edges and score > best_score:
                    best_score = score
                    best = path
                # reversed so children are visited in edge order; cycles are not re-entered
                stack.extend((edge, path, score) for edge in reversed(node.edges) if edge not in path)
        return best
