"""Per-field value getters and display formatters.

Getters receive the raw upstream value, which is frequently missing (None)
or an empty string. Numeric getters are lenient (default to zero); date
parsing is strict and raises `FieldCoercionError`.
"""

from __future__ import annotations

import datetime as dt
import math
import re
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from ..errors import FieldCoercionError

_INT_PREFIX_RE = re.compile(r"^\s*([+-]?\d+)")
_FLOAT_PREFIX_RE = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")
_WORD_START_RE = re.compile(r"\b(?<!['’`])[a-z]")

_DATE_FORMATS: tuple[str, ...] = ("%m/%d/%Y", "%Y%m%d", "%B %d, %Y", "%b %d, %Y")


def to_int(value: Any) -> int:
    """Coerce a count; non-numeric/empty input yields 0."""
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    m = _INT_PREFIX_RE.match(str(value))
    return int(m.group(1)) if m else 0


def to_float(value: Any) -> float:
    """Coerce an amount; non-numeric/empty input yields 0.0 (always finite)."""
    if value is None:
        return 0.0
    if isinstance(value, (int, float)):
        out = float(value)
    else:
        m = _FLOAT_PREFIX_RE.match(str(value))
        if not m:
            return 0.0
        out = float(m.group(1))
    return out if math.isfinite(out) else 0.0


def titleize(value: Any) -> str | None:
    """Capitalize each word of a free-text name (`"GOLDMAN SACHS"` -> `"Goldman Sachs"`)."""
    if value is None:
        return None
    s = str(value).replace("_", " ").lower()
    return _WORD_START_RE.sub(lambda m: m.group(0).upper(), s)


def lookup(
    mapping: Mapping[str, str],
    *,
    fallback: str | Callable[[Any], Any] | None = None,
) -> Callable[[Any], Any]:
    """Build a code-translation getter.

    `fallback` is returned for unknown codes; if callable, it is called with
    the raw code.
    """

    def _get(value: Any) -> Any:
        if value is not None and value in mapping:
            return mapping[value]
        if callable(fallback):
            return fallback(value)
        return fallback

    return _get


def parse_date(value: Any) -> dt.date | None:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value

    s = str(value).strip()
    try:
        return dt.date.fromisoformat(s)
    except ValueError:
        pass
    try:
        return dt.datetime.fromisoformat(s).date()
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            return dt.datetime.strptime(s, fmt).date()
        except ValueError:
            continue
    raise FieldCoercionError(f"Unparseable date: {value!r}")


def format_number(num: Any) -> str:
    """Insert thousands separators into the integer part (`1234567.5` -> `1,234,567.5`)."""
    s = str(num)
    sign = ""
    if s.startswith("-"):
        sign, s = "-", s[1:]
    whole, dot, frac = s.partition(".")
    if not whole.isdigit():
        return sign + s
    return f"{sign}{int(whole):,}{dot}{frac}"


def contribution_summary(value: Any) -> str | None:
    """Render a `[count, amount]` pair as `"12 contributions ($1,500.0)"`."""
    if value is None:
        return None
    if (
        not isinstance(value, Sequence)
        or isinstance(value, (str, bytes))
        or len(value) != 2
    ):
        raise FieldCoercionError(
            f"Expected a [count, amount] pair, got {value!r}"
        )
    count, amount = value
    return f"{count} contributions (${format_number(to_float(amount))})"


def format_currency(value: Any) -> str | None:
    """Display form of a currency value (`1234.5` -> `$1,234.50`)."""
    if value is None:
        return None
    amount = to_float(value)
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"
