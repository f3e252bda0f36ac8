import asyncio
from collections import Counter

from agent_toolkit.models import ThoughtStatus
from agent_toolkit.reasoner.tree_of_thoughts import TreeOfThoughtsExecutor


def _scorer(table=None, default=0.4):
    table = table or {}

    async def score(idea: str) -> float:
        if "final answer" in idea:
            return 0.9
        return table.get(idea, default)

    return score


def test_tot_finds_success_and_extracts_root_to_leaf_path():
    proposals = Counter()

    async def propose(text: str):
        proposals[text] += 1
        return ["branch A", "branch B"] if text == "root" else ["final answer: done"]

    tree = TreeOfThoughtsExecutor(propose=propose, score=_scorer())
    node = asyncio.run(tree.explore("root", max_depth=3, beam_width=2))

    assert node.status == ThoughtStatus.SUCCESS
    assert "final answer: done" in node.content
    assert node.score == 0.9
    path = tree.extract_path(node.id)
    assert [n.content for n in path] == ["root", "branch A", "final answer: done"]
    assert len(path) <= 3 + 1
    assert all(count == 1 for count in proposals.values())
    assert tree.get_node(0).status == ThoughtStatus.EXPLORED


def test_tot_keeps_top_beam_width_ideas_with_stable_ties():
    async def propose(text: str):
        return ["a", "b", "c", "d"] if text == "root" else []

    score = _scorer({"a": 0.3, "b": 0.5, "c": 0.5, "d": 0.1})
    tree = TreeOfThoughtsExecutor(propose=propose, score=score)
    root = asyncio.run(tree.explore("root", max_depth=2, beam_width=2))

    children = [tree.get_node(i).content for i in root.children]
    assert children == ["b", "c"]
    assert root.status == ThoughtStatus.EXPLORED


def test_tot_high_score_counts_as_success_without_marker():
    async def propose(text: str):
        return ["weak", "strong", "later"]

    score = _scorer({"weak": 0.2, "strong": 0.85, "later": 0.95})
    tree = TreeOfThoughtsExecutor(propose=propose, score=score)
    node = asyncio.run(tree.explore("problem", beam_width=3))

    # ranked highest first, so "later" is classified first
    assert node.content == "later"
    assert node.status == ThoughtStatus.SUCCESS
    # siblings of the winning expansion are still registered
    assert len(tree.nodes) == 4
    assert [n.status for n in tree.nodes[1:]] == [
        ThoughtStatus.SUCCESS,
        ThoughtStatus.SUCCESS,
        ThoughtStatus.PENDING,
    ]


def test_tot_first_success_in_proposal_order_wins_on_equal_scores():
    async def propose(text: str):
        return ["final answer: one", "final answer: two"]

    tree = TreeOfThoughtsExecutor(propose=propose, score=_scorer())
    node = asyncio.run(tree.explore("problem"))

    assert node.content == "final answer: one"


def test_tot_exhaustion_returns_failed_root_when_nothing_proposed():
    async def propose(text: str):
        return []

    tree = TreeOfThoughtsExecutor(propose=propose, score=_scorer())
    node = asyncio.run(tree.explore("problem"))

    assert node.id == 0
    assert node.status == ThoughtStatus.FAILED
    assert tree.extract_path(node.id) == [node]


def test_tot_depth_limit_marks_leaves_failed_and_returns_root():
    calls = []

    async def propose(text: str):
        calls.append(text)
        return [f"{text}.1"]

    tree = TreeOfThoughtsExecutor(propose=propose, score=_scorer(default=0.1))
    root = asyncio.run(tree.explore("r", max_depth=2, beam_width=1))

    assert root.id == 0
    assert root.status == ThoughtStatus.EXPLORED
    assert calls == ["r", "r.1"]
    leaf = tree.nodes[-1]
    assert leaf.content == "r.1.1"
    assert leaf.status == ThoughtStatus.FAILED


def test_tot_scores_every_idea_concurrently():
    started = []
    release = asyncio.Event()

    async def propose(text: str):
        return ["x", "y", "z"] if text == "root" else []

    async def score(idea: str) -> float:
        started.append(idea)
        if len(started) == 3:
            release.set()
        await asyncio.wait_for(release.wait(), timeout=1)
        return 0.5

    async def scenario():
        tree = TreeOfThoughtsExecutor(propose=propose, score=score)
        return await tree.explore("root", max_depth=1)

    asyncio.run(scenario())
    assert sorted(started) == ["x", "y", "z"]


def test_tot_bounds_are_clamped():
    tree = TreeOfThoughtsExecutor(propose=lambda t: [], score=lambda t: 0.0, max_depth=50, beam_width=0)
    assert tree.max_depth == 10
    assert tree.beam_width == 1

    wide = TreeOfThoughtsExecutor(propose=lambda t: [], score=lambda t: 0.0, beam_width=99)
    assert wide.beam_width == 6


def test_tot_fresh_explore_clears_previous_nodes():
    async def propose(text: str):
        return ["final answer: yes"]

    tree = TreeOfThoughtsExecutor(propose=propose, score=_scorer())
    first = asyncio.run(tree.explore("one"))
    asyncio.run(tree.explore("two"))

    assert len(tree.nodes) == 2
    assert tree.extract_path(first.id)[0].content == "two"
    assert tree.extract_path(99) == []
