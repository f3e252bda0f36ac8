from __future__ import annotations

import asyncio
import inspect
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, Tuple, Union

from agent_toolkit.orchestration.models import AgentDeliberation, AgentRole, ConsensusResult
from agent_toolkit.orchestration.validator import ThoughtValidator
from agent_toolkit.reasoner.exceptions import ConsensusError

from utils.logger import get_logger

logger = get_logger(__name__)

DeliberateFn = Callable[[AgentRole], Union[Any, Awaitable[Any]]]


class MultiAgentOrchestrator:
    """Fans a goal out to several agents and reduces their proposals to a consensus.

    Every round runs all deliberations concurrently. Valid proposals are
    tallied by summed confidence; the heaviest proposal wins (first seen on
    ties). Deliberation stops early once every valid proposal agrees.
    """

    def __init__(
        self,
        *,
        deliberate: DeliberateFn,
        validator: Optional[ThoughtValidator] = None,
        rounds: int = 1,
    ) -> None:
        self.deliberate = deliberate
        self.validator = validator or ThoughtValidator()
        self.rounds = max(1, rounds)

    async def coordinate(
        self,
        goal: str,
        agents: Sequence[AgentRole],
        *,
        rounds: Optional[int] = None,
    ) -> ConsensusResult:
        if not agents:
            raise ConsensusError('Reasoning mode "multi-agent" requires at least one agent role')

        role_ids = [agent.id for agent in agents]
        if len(set(role_ids)) != len(role_ids):
            raise ConsensusError(f"Agent role ids must be unique: {role_ids}")

        total_rounds = max(1, rounds if rounds is not None else self.rounds)
        logger.info("consensus_started", goal=goal, agents=len(agents), rounds=total_rounds)

        accepted: List[Tuple[AgentRole, AgentDeliberation]] = []
        for round_index in range(total_rounds):
            results = await asyncio.gather(*(self._deliberate(agent) for agent in agents))
            accepted = [(agent, d) for agent, d in zip(agents, results) if self.validator.validate(d).valid]
            logger.info("consensus_round", goal=goal, round=round_index + 1, accepted=len(accepted))
            if accepted and len({d.proposal for _, d in accepted}) == 1:
                break

        if not accepted:
            raise ConsensusError(f"No agent produced a valid proposal for goal: {goal}")

        proposal, supporters = self._tally([d for _, d in accepted])
        confidence = round(sum(d.confidence for d in supporters) / len(supporters), 2)
        logger.info("consensus_reached", goal=goal, consensus=proposal, confidence=confidence)
        return ConsensusResult(
            consensus=proposal,
            confidence=confidence,
            paths={agent.id: list(d.steps) for agent, d in accepted},
        )

    async def _deliberate(self, agent: AgentRole) -> AgentDeliberation:
        raw = self.deliberate(agent)
        if inspect.isawaitable(raw):
            raw = await raw
        deliberation = AgentDeliberation.coerce(raw)
        if not deliberation.agent_id:
            deliberation.agent_id = agent.id
        return deliberation

    @staticmethod
    def _tally(accepted: List[AgentDeliberation]) -> Tuple[str, List[AgentDeliberation]]:
        weights: Dict[str, float] = {}
        backers: Dict[str, List[AgentDeliberation]] = {}
        for d in accepted:
            weights[d.proposal] = weights.get(d.proposal, 0.0) + d.confidence
            backers.setdefault(d.proposal, []).append(d)
        winner = max(weights, key=lambda p: weights[p])
        return winner, backers[winner]
