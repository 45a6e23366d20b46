# src/factordb/factor.py
"""
A factor with a unique base and its exponent, as reported by FactorDB.

The API encodes each entry of ``factors`` as ``["<decimal>", <exponent>]``.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from itertools import repeat
from typing import Any

from factordb.utility import parse_decimal

_PAIR_LEN = 2


@dataclass(frozen=True, order=True)
class Factor:
    value: int
    exponent: int

    def __post_init__(self) -> None:
        if self.exponent < 0:
            raise ValueError(f"negative exponent {self.exponent} for factor {self.value}")

    @classmethod
    def from_pair(cls, pair: Any) -> Factor:
        """
        Build from one API pair. The value must be a decimal string (ints
        are tolerated); the exponent an int (decimal strings are tolerated).
        Raises ValueError / TypeError on anything else.
        """
        if not isinstance(pair, (list, tuple)) or len(pair) != _PAIR_LEN:
            raise TypeError(f"factor entry must be a [value, exponent] pair, got {pair!r}")
        raw_value, raw_exp = pair
        return cls(_as_int(raw_value, "factor"), _as_int(raw_exp, "exponent"))

    def power(self) -> int:
        return self.value ** self.exponent

    def __iter__(self) -> Iterator[int]:
        """Repeat the base ``exponent`` times."""
        return repeat(self.value, self.exponent)

    def __str__(self) -> str:
        return " ".join(str(v) for v in self)

    def to_pair(self) -> list[Any]:
        return [str(self.value), self.exponent]


def _as_int(raw: Any, what: str) -> int:
    if isinstance(raw, bool):
        raise TypeError(f"{what} must be an integer, got {raw!r}")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        return parse_decimal(raw, what)
    raise TypeError(f"{what} must be a decimal string or integer, got {type(raw).__name__}")
