from __future__ import annotations

from bigidle.bignum import BigCounter
from bigidle.persistence import format_last_saved
from bigidle.state import GameState

SUFFIXES = ["", "K", "M", "B", "T", "Qa", "Qi", "Sx", "Sp", "Oc"]


def format_number(n: BigCounter | int) -> str:
    """Render a non-negative number compactly: ``999``, ``1.50K``, ``1.23e29``.

    Values under 1000 are shown exactly. Larger values keep one to three
    leading digits plus two decimals (dropped when both are zero) and a
    magnitude suffix; past the suffix table the result is scientific.
    """
    if not isinstance(n, BigCounter):
        n = BigCounter(n)
    digits = n.to_decimal_string()
    length = len(digits)

    if length <= 3:
        return digits

    if length // 3 >= len(SUFFIXES):
        return f"{digits[0]}.{digits[1:3] or '0'}e{length - 1}"

    suffix_index = (length - 1) // 3
    offset = length - suffix_index * 3
    main_digits = digits[:offset]
    decimal_digits = digits[offset:offset + 2]
    if len(decimal_digits) < 2:
        decimal_digits = "00"

    if decimal_digits == "00":
        return f"{main_digits}{SUFFIXES[suffix_index]}"
    return f"{main_digits}.{decimal_digits}{SUFFIXES[suffix_index]}"


def format_status(state: GameState, now: float, title: str | None = None) -> str:
    """Format the game state as a small text panel for the console."""
    lines: list[str] = []

    if title:
        lines.append("=" * 10 + f" {title} " + "=" * 10)
    lines.append(f"Counter: {format_number(state.counter)}")
    lines.append(f"Production per second: {format_number(state.production)}")
    lines.append(f"Last saved: {format_last_saved(state, now)}")

    return "\n".join(lines)
