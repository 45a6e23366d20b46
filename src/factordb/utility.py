# -----------------------------------------------------------------------------
#  Utility functions
# -----------------------------------------------------------------------------

from __future__ import annotations

import os
import re
import sys

from factordb.errors import UserInputError

_THIN_SPACES = ("\u2009", "\u202F", "\u00A0")  # thin, narrow no-break, no-break
_SEP_CLASS = r"[ ,_\u00A0\u2009\u202F]"       # spaces/commas/underscores & NBSP variants
_GROUPED_RE = re.compile(rf"^\+?[0-9]{{1,3}}(?:{_SEP_CLASS}[0-9]{{3}})+$")
_PLAIN_RE = re.compile(r"^\+?[0-9]+(?:_[0-9]+)*$")


def normalize_decimal(text: str) -> str | None:
    """Canonical decimal string for a non-negative integer literal, else None.

       Accepts: 42  +42  007  1_000_000  123 456 789  1,234,567
       Rejects: -7  3.14  2.000  1,23  0xFF  abc  ''

    Works on the digits only, so the result is not bounded by
    sys.get_int_max_str_digits().
    """
    if text is None:
        return None

    s = text.strip()
    if not s:
        return None

    for ch in _THIN_SPACES:
        s = s.replace(ch, " ")

    if _PLAIN_RE.match(s):
        digits = s.lstrip("+").replace("_", "")
    elif _GROUPED_RE.match(s):
        digits = re.sub(_SEP_CLASS, "", s.lstrip("+"))
    else:
        return None

    return digits.lstrip("0") or "0"


def to_query_string(number: int | str) -> str:
    """
    Decimal string the API expects for ``number``.

    ``int`` values of any width are accepted as long as they are
    non-negative; strings must be non-negative integer literals.
    Raises UserInputError otherwise. Nothing here touches the network.
    """
    if isinstance(number, bool):
        raise UserInputError(f"Invalid input: expected an integer, got {number!r}.")

    if isinstance(number, int):
        if number < 0:
            raise UserInputError(f"Invalid input: {number} is negative.")
        try:
            return str(number)
        except ValueError as e:
            # Python's int->str digit guard
            raise UserInputError(
                f"Invalid input: {e}. Raise BEHAVIOUR.MAX_DIGITS or pass the number as a string."
            ) from None

    if isinstance(number, str):
        dec = normalize_decimal(number)
        if dec is None:
            shown = number if len(number) <= 40 else number[:37] + "..."
            raise UserInputError(f"Invalid input: {shown!r} is not a non-negative integer.")
        return dec

    raise UserInputError(f"Invalid input: expected int or str, got {type(number).__name__}.")


def parse_decimal(text: str, what: str = "integer") -> int:
    """Strict base-10 parse used for API fields; raises ValueError."""
    if not isinstance(text, str) or not text.isascii() or not text.isdigit():
        raise ValueError(f"{what} is not a decimal string: {text!r}")
    return int(text)


def apply_max_digits(limit: int | None) -> bool:
    """
    Raise the int<->str digit guard to ``limit`` (0 = unlimited) unless the
    user already set PYTHONINTMAXSTRDIGITS. Never lowers an existing guard.
    Returns True when the guard was changed.
    """
    if os.environ.get("PYTHONINTMAXSTRDIGITS") or limit is None:
        return False
    if not hasattr(sys, "set_int_max_str_digits"):
        return False
    try:
        limit = int(limit)
    except (TypeError, ValueError) as e:
        raise UserInputError(f"BEHAVIOUR.MAX_DIGITS: {e}.") from None
    current = sys.get_int_max_str_digits()
    if current == 0 or (limit != 0 and current >= limit):
        return False
    try:
        sys.set_int_max_str_digits(limit)
    except ValueError as e:
        raise UserInputError(f"BEHAVIOUR.MAX_DIGITS: {e}.") from None
    return True


def typename(v: object) -> str:
    return type(v).__name__


def flatten_dotted(d: dict, prefix: str = "") -> dict[str, object]:
    out: dict[str, object] = {}
    for k, v in (d or {}).items():
        key = f"{prefix}.{k}" if prefix else str(k)
        if isinstance(v, dict):
            out.update(flatten_dotted(v, key))
        else:
            out[key] = v
    return out
