from agent_toolkit.reasoner.graph import GraphSummary, ReasoningGraphTracker
from agent_toolkit.reasoner.program_of_thought import ProgramOfThoughtExecutor
from agent_toolkit.reasoner.react import ReActExecutor
from agent_toolkit.reasoner.reflexion import ReflexionEngine
from agent_toolkit.reasoner.tree_of_thoughts import TreeOfThoughtsExecutor

__all__ = [
    "GraphSummary",
    "ProgramOfThoughtExecutor",
    "ReActExecutor",
    "ReasoningGraphTracker",
    "ReflexionEngine",
    "TreeOfThoughtsExecutor",
]
