from __future__ import annotations

from utils.logger import get_logger

logger = get_logger(__name__)


class ReasoningError(Exception):
    """Base exception for all reasoning-related errors."""

    def __init__(self, message: str):
        super().__init__(message)
        logger.warning(
            "reasoning_error",
            error_type=self.__class__.__name__,
            message=message,
        )


class ProgramTimeoutError(ReasoningError):
    """Program-of-Thought exceeded its wall-clock budget."""

    def __init__(self, timeout_ms: float, elapsed_ms: float):
        self.timeout_ms = timeout_ms
        self.elapsed_ms = elapsed_ms
        super().__init__(
            f"Program-of-Thought timed out after {elapsed_ms:.1f}ms (budget {timeout_ms}ms)"
        )


class StrategyUnavailableError(ReasoningError):
    """A reasoning mode was requested but its strategy was not configured."""

    def __init__(self, mode: str, dependency: str):
        self.mode = mode
        self.dependency = dependency
        super().__init__(f'Reasoning mode "{mode}" requires {dependency} dependency')


class UnsupportedModeError(ReasoningError):
    """The requested reasoning mode does not exist."""

    def __init__(self, mode: str):
        self.mode = mode
        super().__init__(f"Reasoning mode '{mode}' not yet supported")


class ConsensusError(ReasoningError):
    """Multi-agent deliberation could not produce a consensus."""
