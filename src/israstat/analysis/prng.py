# src/israstat/analysis/prng.py
"""
Seeded pseudo-randomness for deal synthesis.

Everything is 32-bit integer arithmetic so a given seed yields the same
stream on every platform. Generators are plain objects created per call;
nothing here keeps module-level state.
"""
from __future__ import annotations

_MASK32 = 0xFFFFFFFF
_MULBERRY_INCREMENT = 0x6D2B79F5


def _imul(a: int, b: int) -> int:
    """Low 32 bits of a * b (both taken as 32-bit patterns)."""
    return ((a & _MASK32) * (b & _MASK32)) & _MASK32


def _to_int32(x: int) -> int:
    x &= _MASK32
    return x - 0x100000000 if x & 0x80000000 else x


def seed_from_string(text: str) -> int:
    """
    Polynomial rolling hash (h = h*31 + unit) over the UTF-16 code units
    of `text`, wrapped to signed 32-bit after every step, then abs().

    UTF-16 units rather than code points so names outside the BMP hash the
    same way a browser would hash them.
    """
    raw = text.encode("utf-16-le")
    h = 0
    for i in range(0, len(raw), 2):
        unit = raw[i] | (raw[i + 1] << 8)
        h = _to_int32(h * 31 + unit)
    return abs(h)


class Mulberry32:
    """
    Mulberry32 counter-based generator.

    State advances by a fixed odd increment; each output is a mixed copy of
    the state scaled into [0, 1).
    """

    def __init__(self, seed: int) -> None:
        self._state = seed & _MASK32

    def next_uint32(self) -> int:
        self._state = (self._state + _MULBERRY_INCREMENT) & _MASK32
        s = self._state
        t = _imul(s ^ (s >> 15), 1 | s)
        t = ((t + _imul(t ^ (t >> 7), 61 | t)) & _MASK32) ^ t
        return (t ^ (t >> 14)) & _MASK32

    def random(self) -> float:
        return self.next_uint32() / 4294967296.0

    def __call__(self) -> float:
        return self.random()

    def randint_below(self, n: int) -> int:
        """floor(random() * n), i.e. uniform over 0..n-1."""
        return int(self.random() * n)

    def choice(self, items):
        return items[self.randint_below(len(items))]
