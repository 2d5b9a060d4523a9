"""Seeded pseudo-random stream used by maze generation.

Mulberry32 is a 32-bit mix-and-multiply generator. All state arithmetic is
masked to 32 bits and floats are produced as ``uint32 / 2**32``, which keeps
the stream identical to every other Mulberry32 port for the same seed. Each
maze owns its own instance; there is no module-level random state anywhere in
the package.
"""

from __future__ import annotations

_MASK32 = 0xFFFFFFFF
_INCREMENT = 0x6D2B79F5
_TWO_POW_32 = 4294967296.0


def _imul(a: int, b: int) -> int:
    """32-bit wrapping multiply (unsigned view of ``Math.imul``)."""
    return (a * b) & _MASK32


class Mulberry32:
    """Deterministic float stream in ``[0, 1)`` from an integer seed."""

    __slots__ = ("_state", "seed")

    def __init__(self, seed: int):
        self.seed = seed
        self._state = seed & _MASK32

    def next_uint32(self) -> int:
        self._state = (self._state + _INCREMENT) & _MASK32
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK32
        return (t ^ (t >> 14)) & _MASK32

    def next_float(self) -> float:
        return self.next_uint32() / _TWO_POW_32

    __call__ = next_float

    def randrange(self, n: int) -> int:
        """Integer in ``[0, n)`` using ``floor(next_float() * n)``."""
        return int(self.next_float() * n)
