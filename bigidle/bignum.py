from __future__ import annotations

from dataclasses import dataclass

from bigidle.errors import ParseError

# CPython refuses str(int)/int(str) past ~4300 digits, so long values are
# converted in fixed-size decimal chunks.
_CHUNK_DIGITS = 1000
_CHUNK_BASE = 10 ** _CHUNK_DIGITS


def _to_digits(value: int) -> str:
    if value < _CHUNK_BASE:
        return str(value)
    chunks: list[int] = []
    while value:
        value, low = divmod(value, _CHUNK_BASE)
        chunks.append(low)
    head = str(chunks.pop())
    return head + "".join(str(c).zfill(_CHUNK_DIGITS) for c in reversed(chunks))


def _from_digits(text: str) -> int:
    value = 0
    for start in range(0, len(text), _CHUNK_DIGITS):
        chunk = text[start:start + _CHUNK_DIGITS]
        value = value * 10 ** len(chunk) + int(chunk)
    return value


@dataclass(frozen=True, order=True)
class BigCounter:
    """Non-negative integer of unbounded magnitude.

    Production doubles on every upgrade, so values leave the 64-bit range
    within a normal session. Arithmetic is exact; instances are immutable.
    """

    value: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError(f"BigCounter needs an int, got {self.value!r}")
        if self.value < 0:
            raise ValueError(f"BigCounter cannot be negative: {self.value}")

    @classmethod
    def zero(cls) -> BigCounter:
        return cls(0)

    @classmethod
    def one(cls) -> BigCounter:
        return cls(1)

    @classmethod
    def from_decimal(cls, text: str) -> BigCounter:
        """Parse a string of ASCII digits. Raises ParseError otherwise."""
        if not isinstance(text, str):
            raise ParseError(f"Expected a decimal string, got {type(text).__name__}")
        if not text or not (text.isascii() and text.isdigit()):
            raise ParseError(f"Not a decimal number: {text!r}")
        return cls(_from_digits(text))

    def add(self, other: BigCounter) -> BigCounter:
        return BigCounter(self.value + other.value)

    def scale(self, k: int) -> BigCounter:
        """Multiply by a positive integer."""
        if isinstance(k, bool) or not isinstance(k, int):
            raise ValueError(f"Scale factor must be an int, got {k!r}")
        if k < 1:
            raise ValueError(f"Scale factor must be positive, got {k}")
        return BigCounter(self.value * k)

    def to_decimal_string(self) -> str:
        return _to_digits(self.value)

    def digit_count(self) -> int:
        return len(self.to_decimal_string())

    def __add__(self, other: object) -> BigCounter:
        if not isinstance(other, BigCounter):
            return NotImplemented
        return self.add(other)

    def __mul__(self, k: object) -> BigCounter:
        if not isinstance(k, int):
            return NotImplemented
        return self.scale(k)

    __rmul__ = __mul__

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return self.to_decimal_string()
