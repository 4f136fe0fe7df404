"""Interactive read-eval-print session."""

from __future__ import annotations

import shutil
import uuid
from typing import Any, Callable

from scicalc.config import DEFAULT_CONFIG
from scicalc.expression import LineResult, calculate
from scicalc.logging.events import (
    EventType,
    emit_info,
    emit_warning,
    error_code_for,
)

SEPARATOR = "=" * 62

FAREWELL = "Thank you for using the Scientific Calculator"

FEATURES = [
    "1. Arithmetic: (+, -, *, /)",
    "2. Complex Expressions (DMAS)",
    "3. Trig: sinx, cosx, tanx (in degrees)",
    "4. Factorial (!n)",
    "5. Natural Logarithm: lnx",
    "6. Exponentiation (expx or a^b)",
    "7. Square Root (a^0.5)",
]

INSTRUCTIONS = [
    "- Enter expressions (e.g., -2.5 + 3 * -4.0 / 2.5)",
    "- For trig, use sinx, cosx, tanx (no parentheses)",
    "- For cosecx, secx, cotx use 1/sinx, 1/cosx, 1/tanx",
    "- Factorial: !n (e.g., !3 for 3!), decimals are truncated",
    "- For natural logarithm, use lnx (no parentheses)",
    "- Exponential Function: expx (e.g., exp2 for e^2)",
    "- Power: a^b (e.g., 2^3), operands are truncated to integers",
    "- Square root: a^0.5",
    "- Type 'exit' to quit",
]


def center(text: str, width: int | None = None) -> str:
    """Pad *text* with leading spaces to center it in the terminal."""
    if width is None:
        width = shutil.get_terminal_size().columns
    padding = max(0, (width - len(text)) // 2)
    return " " * padding + text


def banner_lines() -> list[str]:
    lines = [SEPARATOR, "Scientific Calculator", SEPARATOR, "Features:", SEPARATOR]
    lines += FEATURES
    lines += [SEPARATOR, "Instructions:", SEPARATOR]
    lines += INSTRUCTIONS
    lines.append(SEPARATOR)
    return lines


def is_exit_command(line: str) -> bool:
    """``exit`` in any letter case ends the session."""
    return line.strip().lower() == "exit"


class CalculatorSession:
    """One interactive session: reads lines until ``exit`` or end of input.

    Each line is calculated independently; a failed line never ends the
    session.
    """

    def __init__(self, config: dict[str, Any] | None = None, session_id: str | None = None) -> None:
        self.config = dict(DEFAULT_CONFIG)
        if config:
            self.config.update(config)
        self.session_id = session_id or uuid.uuid4().hex[:12]
        self.lines_evaluated = 0
        self.lines_failed = 0

    def handle_line(self, line: str) -> LineResult:
        """Calculate one line and record the outcome."""
        result = calculate(line, max_operands=self.config["max_operands"])
        ctx = {"session_id": self.session_id, "expression": line}
        if result.ok:
            self.lines_evaluated += 1
            emit_info(
                EventType.line_evaluated,
                f"Evaluated {line!r}",
                {**ctx, "value": result.value},
                session_id=self.session_id,
            )
        else:
            self.lines_failed += 1
            emit_warning(
                EventType.line_failed,
                result.message or "",
                ctx,
                error_code=error_code_for(result.error_kind),
                session_id=self.session_id,
            )
        return result

    def run(
        self,
        read_line: Callable[[str], str],
        write: Callable[[str], None],
    ) -> None:
        """Drive the loop.

        Args:
            read_line: Returns the next line without its newline after
                showing the prompt; raises ``EOFError`` at end of input.
            write: Outputs one line of text.
        """
        emit_info(
            EventType.session_started,
            "Session started",
            {"session_id": self.session_id},
            session_id=self.session_id,
        )
        if self.config["banner"]:
            for text in banner_lines():
                write(center(text))

        precision = self.config["precision"]
        try:
            while True:
                write("")
                try:
                    line = read_line(self.config["prompt"])
                except EOFError:
                    break
                if is_exit_command(line):
                    write("")
                    write(center(FAREWELL))
                    write("")
                    break
                result = self.handle_line(line)
                write("")
                write(result.display(precision))
                write("")
                write(SEPARATOR)
        finally:
            emit_info(
                EventType.session_ended,
                "Session ended",
                {
                    "session_id": self.session_id,
                    "lines_evaluated": self.lines_evaluated,
                    "lines_failed": self.lines_failed,
                },
                session_id=self.session_id,
            )
