# src/factordb/fmt.py
from __future__ import annotations

from collections.abc import Iterable

from colorama import Fore, Style

from factordb.factor import Factor
from factordb.number import FactorizationResult, NumberStatus

_STATUS_COLOR = {
    NumberStatus.FULLY_FACTORED: Fore.GREEN,
    NumberStatus.DEFINITELY_PRIME: Fore.GREEN,
    NumberStatus.PROBABLY_PRIME: Fore.YELLOW,
    NumberStatus.FACTORS_KNOWN: Fore.YELLOW,
    NumberStatus.NO_FACTORS_KNOWN: Fore.RED,
    NumberStatus.UNKNOWN: Fore.RED,
    NumberStatus.NOT_IN_DATABASE: Fore.RED,
}


def abbr_decimal(s: str, head: int = 10, tail: int = 10, threshold: int = 35, ellipsis: str = "…") -> str:
    """Abbreviate long decimal strings as first<head>…last<tail>."""
    if len(s) <= threshold or head + tail >= len(s):
        return s
    return f"{s[:head]}{ellipsis}{s[-tail:]} ({len(s)} digits)"


def factor_lines(values: Iterable[int]) -> list[str]:
    """One decimal per line, in the given order."""
    return [str(v) for v in values]


def format_factorization(factors: Iterable[Factor]) -> str:
    """
    Turn [(p, e), ...] into a tidy string like: 2^3 × 3 × 5^2
    """
    parts: list[str] = []
    for f in sorted(factors):
        parts.append(f"{f.value}^{f.exponent}" if f.exponent > 1 else f"{f.value}")
    return " × ".join(parts) if parts else "1"


def format_status(status: NumberStatus, color: bool = True) -> str:
    text = f"{status.value} ({status.description})"
    tint = _STATUS_COLOR.get(status) if color else None
    return f"{tint}{text}{Style.RESET_ALL}" if tint else text


def format_summary(result: FactorizationResult, label: str | None = None) -> str:
    """``<label> = f1 f2 ...``; label defaults to the queried number."""
    lhs = label if label is not None else result.number
    return f"{lhs} = {result}".rstrip()
