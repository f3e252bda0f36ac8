from __future__ import annotations

import re
import time
from typing import List, Optional, Union

from agent_toolkit.models import ProgramRun, ProgramStep
from agent_toolkit.reasoner.exceptions import ProgramTimeoutError

from utils.logger import get_logger

logger = get_logger(__name__)

Number = Union[int, float]

_NUMBER = re.compile(r"-?\d+(?:\.\d+)?")
_MULTIPLY = re.compile(r"product|multiply", re.IGNORECASE)


def _parse_number(literal: str) -> Number:
    return float(literal) if "." in literal else int(literal)


def _format(value: Number) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class ProgramOfThoughtExecutor:
    """Deterministic arithmetic program built from the numbers in a problem statement."""

    DEFAULT_TIMEOUT_MS = 1000

    def __init__(self, *, timeout_ms: float = DEFAULT_TIMEOUT_MS) -> None:
        self.timeout_ms = timeout_ms

    async def run(self, problem: str, *, timeout_ms: Optional[float] = None) -> ProgramRun:
        budget = self.timeout_ms if timeout_ms is None else timeout_ms
        started = time.monotonic()

        def check_budget() -> None:
            elapsed = (time.monotonic() - started) * 1000
            if elapsed >= budget:
                logger.error("program_timeout", timeout_ms=budget, elapsed_ms=elapsed)
                raise ProgramTimeoutError(budget, elapsed)

        numbers: List[Number] = [_parse_number(m) for m in _NUMBER.findall(problem)] or [0]
        program: List[ProgramStep] = []
        trace: List[str] = []

        for i, value in enumerate(numbers):
            check_budget()
            program.append(ProgramStep(variable=f"x{i}", operation="parse", result=value))
            trace.append(f"x{i}={_format(value)}")

        operation = "multiply" if _MULTIPLY.search(problem) else "add"
        result: Number = 1 if operation == "multiply" else 0
        for value in numbers:
            check_budget()
            result = result * value if operation == "multiply" else result + value

        final_var = f"x{len(numbers)}"
        program.append(
            ProgramStep(
                variable=final_var,
                operation=operation,
                result=result,
                deps=[step.variable for step in program],
            )
        )
        trace.append(f"{final_var}={_format(result)}")
        logger.info("program_completed", operation=operation, operands=len(numbers), result=result)
        return ProgramRun(program=program, result=result, trace=trace)
