from agent_toolkit.memory.reasoning_memory import ReasoningMemoryManager, ReflexionPattern

__all__ = ["ReasoningMemoryManager", "ReflexionPattern"]
