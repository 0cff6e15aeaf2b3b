"""Interactive calculator state: expression buffer, angle mode, memory and history.

None of this is used by the pipeline itself; ``CalculatorSession`` feeds the
buffer and angle mode to ``calculate`` and keeps what comes back.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional

from .calculator import Calculation, calculate
from .errors import CalculatorError
from .evaluator import AngleMode
from .formatter import format_result

logger = logging.getLogger(__name__)

ERROR_DISPLAY = "Error"
DEFAULT_HISTORY_LIMIT = 6


@dataclass(frozen=True)
class HistoryEntry:
    expression: str
    result: str


class History:
    """Most-recent-first list of successful calculations, bounded to ``limit`` entries."""

    def __init__(self, limit: int = DEFAULT_HISTORY_LIMIT):
        if limit < 1:
            raise ValueError("History limit must be at least 1")
        self.limit = limit
        self._entries: List[HistoryEntry] = []

    def record(self, expression: str, result: str) -> HistoryEntry:
        entry = HistoryEntry(expression, result)
        self._entries.insert(0, entry)
        del self._entries[self.limit:]
        return entry

    def get(self, index: int) -> HistoryEntry:
        if not 0 <= index < len(self._entries):
            raise IndexError(f"No history entry at index {index}")
        return self._entries[index]

    def clear(self) -> None:
        self._entries.clear()

    def __iter__(self):
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)


class MemoryRegister:
    """Single stored number, 0 by default. Non-finite values are ignored."""

    def __init__(self) -> None:
        self.value = 0.0

    def store(self, value: float) -> None:
        if math.isfinite(value):
            self.value = float(value)

    def add(self, value: float) -> None:
        self.store(self.value + value)

    def subtract(self, value: float) -> None:
        self.store(self.value - value)

    def clear(self) -> None:
        self.value = 0.0

    def as_text(self) -> str:
        return format_result(self.value)

    def as_literal(self) -> str:
        """Full-precision text that reads back as the same number."""
        if self.value.is_integer():
            return str(int(self.value))
        return repr(self.value)


def _as_number(text: str) -> Optional[float]:
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


class CalculatorSession:
    """State behind one calculator display."""

    def __init__(
        self,
        angle_mode: AngleMode = AngleMode.DEGREES,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
    ):
        self.expression = ""
        self.last_result = "0"
        self.angle_mode = AngleMode(angle_mode)
        self.memory = MemoryRegister()
        self.history = History(history_limit)
        self.last_error: Optional[CalculatorError] = None

    # -- expression buffer --

    def insert(self, text: str) -> str:
        self.expression += text
        return self.expression

    def insert_function(self, name: str) -> str:
        return self.insert(f"{name}(")

    def percent(self) -> str:
        if self.expression:
            self.expression += "/100"
        return self.expression

    def backspace(self) -> str:
        self.expression = self.expression[:-1]
        return self.expression

    def clear(self) -> None:
        self.expression = ""
        self.last_result = "0"

    def set_expression(self, text: str) -> None:
        self.expression = text

    # -- angle mode --

    def toggle_angle_mode(self) -> AngleMode:
        self.angle_mode = self.angle_mode.toggled()
        logger.debug(f"Angle mode is now {self.angle_mode.value}")
        return self.angle_mode

    def set_angle_mode(self, mode: AngleMode) -> AngleMode:
        self.angle_mode = AngleMode(mode)
        return self.angle_mode

    # -- evaluation --

    def evaluate(self) -> Optional[Calculation]:
        """Evaluate the buffer; returns None for a blank buffer or a failed evaluation.

        On failure the display shows ERROR_DISPLAY and the buffer is kept so it
        can be corrected. Only successes are recorded in the history.
        """
        if not self.expression.strip():
            return None
        try:
            calc = calculate(self.expression, self.angle_mode)
        except CalculatorError as e:
            self.last_result = ERROR_DISPLAY
            self.last_error = e
            return None
        self.last_result = calc.display
        self.last_error = None
        self.history.record(calc.expression, calc.display)
        return calc

    def recall_history(self, index: int) -> HistoryEntry:
        entry = self.history.get(index)
        self.expression = entry.expression
        self.last_result = entry.result
        return entry

    # -- memory --

    def memory_clear(self) -> None:
        self.memory.clear()

    def memory_recall(self) -> str:
        return self.insert(self.memory.as_literal())

    def memory_add(self) -> None:
        value = _as_number(self.last_result)
        if value is not None:
            self.memory.add(value)

    def memory_subtract(self) -> None:
        value = _as_number(self.last_result)
        if value is not None:
            self.memory.subtract(value)

    def snapshot(self) -> dict:
        return {
            "expression": self.expression,
            "last_result": self.last_result,
            "angle_mode": self.angle_mode.value,
            "memory": self.memory.as_text(),
            "history": [
                {"expression": entry.expression, "result": entry.result}
                for entry in self.history
            ],
        }
