# src/factordb/number.py
"""
Response model for FactorDB API requests.

A query answers with a JSON object such as::

    {"id": "42", "status": "FF", "factors": [["2", 1], ["3", 1], ["7", 1]]}

which ``FactorizationResult.from_json`` turns into an immutable record.
The factor pairs live in ``factordb.factor``.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from math import prod
from typing import Any

from factordb.errors import ParseError
from factordb.factor import Factor
from factordb.utility import normalize_decimal, parse_decimal


class NumberStatus(Enum):
    """The status of a number in FactorDB."""

    NO_FACTORS_KNOWN = "C"      # composite, no factors known
    FACTORS_KNOWN = "CF"        # composite, some factors known
    FULLY_FACTORED = "FF"       # composite, fully factored
    DEFINITELY_PRIME = "P"
    PROBABLY_PRIME = "PRP"
    UNKNOWN = "U"
    UNIT = "Unit"               # just for 1
    ZERO = "Zero"               # just for 0
    NOT_IN_DATABASE = "N"

    @classmethod
    def parse(cls, code: Any) -> NumberStatus:
        """Strict lookup; unknown codes raise ValueError."""
        if not isinstance(code, str):
            raise ValueError(f"status must be a string, got {code!r}")
        alias = _STATUS_ALIASES.get(code)
        if alias is not None:
            return alias
        return cls(code)

    @property
    def description(self) -> str:
        return _STATUS_TEXT[self]


_STATUS_ALIASES = {"Prp": NumberStatus.PROBABLY_PRIME}

_STATUS_TEXT = {
    NumberStatus.NO_FACTORS_KNOWN: "composite, no factors known",
    NumberStatus.FACTORS_KNOWN: "composite, factors known",
    NumberStatus.FULLY_FACTORED: "composite, fully factored",
    NumberStatus.DEFINITELY_PRIME: "definitely prime",
    NumberStatus.PROBABLY_PRIME: "probably prime",
    NumberStatus.UNKNOWN: "unknown",
    NumberStatus.UNIT: "unit",
    NumberStatus.ZERO: "zero",
    NumberStatus.NOT_IN_DATABASE: "not in database",
}

_COMPLETE = frozenset({
    NumberStatus.FULLY_FACTORED,
    NumberStatus.DEFINITELY_PRIME,
    NumberStatus.PROBABLY_PRIME,
    NumberStatus.UNIT,
    NumberStatus.ZERO,
})


@dataclass(frozen=True)
class FactorizationResult:
    """A number entry in FactorDB: its id, status and factors."""

    id: int
    status: NumberStatus
    number: str
    factors: tuple[Factor, ...] = field(default_factory=tuple)

    # --- construction ------------------------------------------------------

    @classmethod
    def from_json(cls, payload: Any, number: str | None = None) -> FactorizationResult:
        """
        Build from a decoded API payload.

        ``number`` is the decimal string that was queried. When omitted it
        is read from a ``number`` key, falling back to ``id`` (FactorDB
        uses the value itself as the id for small numbers).
        """
        if not isinstance(payload, Mapping):
            raise ParseError(f"expected a JSON object, got {type(payload).__name__}")

        try:
            raw_id = payload["id"]
            raw_status = payload["status"]
            raw_factors = payload["factors"]
        except KeyError as e:
            raise ParseError(f"missing field {e.args[0]!r} in response", e) from e

        try:
            status = NumberStatus.parse(raw_status)
        except ValueError as e:
            raise ParseError(f"unrecognized status {raw_status!r}", e) from e

        try:
            rec_id = _parse_id(raw_id)
        except (TypeError, ValueError) as e:
            raise ParseError(f"bad id {raw_id!r}: {e}", e) from e

        if not isinstance(raw_factors, list):
            raise ParseError(f"'factors' must be a list, got {type(raw_factors).__name__}")
        try:
            factors = tuple(Factor.from_pair(p) for p in raw_factors)
        except (TypeError, ValueError) as e:
            raise ParseError(f"bad factor entry: {e}", e) from e

        if number is None:
            number = payload.get("number", raw_id)
        dec = None
        if isinstance(number, str):
            dec = normalize_decimal(number)
        elif isinstance(number, int) and not isinstance(number, bool) and number >= 0:
            dec = str(number)
        if dec is None:
            raise ParseError(f"cannot determine the queried number from {number!r}")

        return cls(id=rec_id, status=status, number=dec, factors=factors)

    @classmethod
    def from_text(cls, text: str | bytes, number: str | None = None) -> FactorizationResult:
        """Decode a raw response body, then from_json()."""
        try:
            payload = json.loads(text)
        except ValueError as e:  # JSONDecodeError, UnicodeDecodeError
            raise ParseError(f"invalid JSON in response: {e}", e) from e
        return cls.from_json(payload, number=number)

    # --- accessors ---------------------------------------------------------

    @property
    def original_number(self) -> int:
        """The queried number as an int; ParseError past the digit guard."""
        try:
            return int(self.number)
        except ValueError as e:
            raise ParseError(
                f"{len(self.number)}-digit number exceeds the int conversion limit; raise BEHAVIOUR.MAX_DIGITS",
                e,
            ) from e

    def is_prime(self) -> bool:
        """True if the number may be prime (P or PRP)."""
        return self.status in (NumberStatus.DEFINITELY_PRIME, NumberStatus.PROBABLY_PRIME)

    def is_definitely_prime(self) -> bool:
        return self.status is NumberStatus.DEFINITELY_PRIME

    def is_fully_factored(self) -> bool:
        return self.status in _COMPLETE

    # --- derived views (computed on demand) --------------------------------

    def factors_flattened(self) -> list[int]:
        """Factors with exponents expanded, in API order: [(2,3)] -> [2, 2, 2]."""
        return [v for f in self.factors for v in f]

    def unique_factors(self) -> list[int]:
        """Distinct factor values in order of first occurrence."""
        return list(dict.fromkeys(f.value for f in self.factors))

    def product(self) -> int:
        return prod(f.power() for f in self.factors)

    def verify(self) -> bool:
        """
        Check that the factors multiply back to the number. Only meaningful
        for complete statuses; partial results return False.
        """
        if not self.is_fully_factored():
            return False
        n = self.original_number
        if n in (0, 1):
            return True
        return self.product() == n

    def to_json(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "status": self.status.value,
            "factors": [f.to_pair() for f in self.factors],
        }

    def __str__(self) -> str:
        return " ".join(str(v) for v in self.factors_flattened())


def _parse_id(raw: Any) -> int:
    if isinstance(raw, bool):
        raise TypeError("id must be an integer or decimal string")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        return parse_decimal(raw, "id")
    raise TypeError(f"id must be an integer or decimal string, got {type(raw).__name__}")
