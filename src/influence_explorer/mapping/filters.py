"""Whole-payload before-filters (text -> text) applied ahead of field extraction."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Sequence
from typing import Any

from ..errors import MalformedResponseError
from .getters import to_float, to_int

logger = logging.getLogger(__name__)


def wrap_object(text: str) -> str:
    """Wrap a bare JSON object into a one-element array; arrays pass through."""
    stripped = text.strip()
    if stripped.startswith("["):
        return stripped
    return f"[{stripped}]"


def _is_pair(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes)) and len(value) == 2


def pivot_breakdown(
    keys: Sequence[str],
    *,
    discriminator: str,
) -> Callable[[str], str]:
    """Pivot `{"Democrats": [12, 500.0], ...}` into row records.

    Rows follow `keys` order and carry `{discriminator: key, "count": int,
    "amount": float}`. A key that is absent (or not a `[count, amount]` pair)
    yields no row.
    """
    keys = tuple(keys)

    def _filter(text: str) -> str:
        try:
            struct = json.loads(text)
        except json.JSONDecodeError as e:
            raise MalformedResponseError(f"Breakdown payload is not JSON: {e}") from e
        if not isinstance(struct, dict):
            raise MalformedResponseError(
                f"Breakdown payload must be an object, got {type(struct).__name__}"
            )

        rows: list[dict[str, Any]] = []
        for key in keys:
            pair = struct.get(key)
            if not _is_pair(pair):
                logger.debug("Breakdown key missing or malformed key=%s value=%r", key, pair)
                continue
            rows.append(
                {
                    discriminator: key,
                    "count": to_int(pair[0]),
                    "amount": to_float(pair[1]),
                }
            )
        return json.dumps(rows)

    return _filter
