"""Choice catalog: labels for parameter options and coded upstream values.

Static tables live as module constants. The CRP category and
independent-expenditure transaction-type tables are fetched lazily, once per
process, through `ReferenceTable` (single-flight: concurrent first callers
wait for one fetch and observe the same table).
"""

from __future__ import annotations

import datetime as dt
import io
import logging
import re
import threading
from collections.abc import Callable
from typing import Final, Generic, TypeVar

import polars as pl

from ..errors import MalformedResponseError
from .getters import format_number, titleize
from .transport import Fetch, http_get

logger = logging.getLogger(__name__)

T = TypeVar("T")

CRP_CATEGORIES_URL: Final[str] = (
    "http://www.opensecrets.org/downloads/crp/CRP_Categories.txt"
)
IE_TRANSACTION_TYPES_URL: Final[str] = (
    "http://assets.transparencydata.org.s3.amazonaws.com/docs/"
    "transaction_types-20100402.csv"
)

PARTIES: Final[dict[str, str]] = {
    "D": "Democrat",
    "R": "Republican",
    "I": "Independent",
}

SEATS: Final[dict[str, str]] = {
    "federal:senate": "US Senate",
    "federal:house": "US House of Representatives",
    "federal:president": "US President",
    "state:upper": "Upper chamber of state legislature",
    "state:lower": "Lower chamber of state legislature",
    "state:governor": "State governor",
}

# FEC summary report office codes
OFFICES: Final[dict[str, str]] = {"P": "President", "H": "House", "S": "Senate"}

FILING_TYPE_CHOICES: Final[dict[str, str]] = {
    "n": "Non-self filer parent",
    "m": "Non-self filer subsidiary for a non-self filer parent",
    "x": "Self filer subsidiary for a non-self filer parent",
    "p": "Self filer parent",
    "i": "Non-self filer for a self filer parent that has same catorder as the parent",
    "s": "Self filer subsidiary for a self filer parent",
    "e": "Non-self filer subsidiary for a self filer subsidiary",
    "c": "Non-self filer subsidiary for a self filer parent with same catorder",
    "b": "Non-self filer subsidiary for a self filer parent that has different catorder",
}

ALL_CYCLES: Final[dict[str, str]] = {"-1": "All available"}

_BLOCK_SEP_RE = re.compile(r"(?:\r?\n){2,}")


def election_cycles_since(
    start_year: int,
    *,
    current_year: int | None = None,
) -> dict[str, str]:
    """Return `{"2010": "2009 - 2010", ...}` for even years through `current_year`."""
    if current_year is None:
        current_year = dt.date.today().year

    first = start_year + (start_year % 2)
    return {str(y): f"{y - 1} - {y}" for y in range(first, current_year + 1, 2)}


def seat_label(code: str | None) -> str | None:
    """Label an office code; unknown `a:b` codes render as `"A, B"`."""
    if code is None:
        return None
    if code in SEATS:
        return SEATS[code]
    return titleize(", ".join(code.split(":")))


class ReferenceTable(Generic[T]):
    """Write-once, lazily loaded process-wide value.

    The loader runs at most once per successful load, under a lock; a failing
    loader leaves the table empty so the next caller retries. `reset()` exists
    for tests only.
    """

    def __init__(self, name: str, loader: Callable[[Fetch], T]) -> None:
        self.name = name
        self._loader = loader
        self._lock = threading.Lock()
        self._value: T | None = None

    @property
    def loaded(self) -> bool:
        return self._value is not None

    def get(self, fetch: Fetch | None = None) -> T:
        value = self._value
        if value is not None:
            return value

        with self._lock:
            if self._value is None:
                logger.info("Loading reference table name=%s", self.name)
                self._value = self._loader(fetch or http_get)
            return self._value

    def reset(self) -> None:
        with self._lock:
            self._value = None


def parse_crp_categories(text: str) -> pl.DataFrame:
    """Parse the tab-separated block that follows the file's preamble."""
    blocks = _BLOCK_SEP_RE.split(text.strip())
    if len(blocks) < 2:
        raise MalformedResponseError(
            "CRP categories file has no table block after the preamble"
        )
    return pl.read_csv(
        io.StringIO(blocks[1]),
        separator="\t",
        infer_schema_length=0,
        quote_char=None,
    )


def parse_ie_transaction_types(text: str) -> dict[str, str]:
    """Parse `|code|,|label|` rows into a code -> label mapping."""
    df = pl.read_csv(
        io.StringIO(text.strip()),
        has_header=False,
        quote_char="|",
        infer_schema_length=0,
    )
    if df.width < 2:
        raise MalformedResponseError(
            f"Expected at least 2 columns in transaction types, got {df.width}"
        )
    codes = df.get_column(df.columns[0]).str.strip_chars("|").to_list()
    labels = df.get_column(df.columns[1]).str.strip_chars("|").to_list()
    return dict(zip(codes, labels))


def _load_crp_categories(fetch: Fetch) -> pl.DataFrame:
    text = fetch(CRP_CATEGORIES_URL).decode("utf-8", errors="replace")
    return parse_crp_categories(text)


def _load_ie_transaction_types(fetch: Fetch) -> dict[str, str]:
    text = fetch(IE_TRANSACTION_TYPES_URL).decode("utf-8", errors="replace")
    return parse_ie_transaction_types(text)


_CRP_CATEGORIES: ReferenceTable[pl.DataFrame] = ReferenceTable(
    "crp_categories", _load_crp_categories
)
_IE_TRANSACTION_TYPES: ReferenceTable[dict[str, str]] = ReferenceTable(
    "ie_transaction_types", _load_ie_transaction_types
)


def crp_categories(fetch: Fetch | None = None) -> pl.DataFrame:
    """CRP industry category table (header row included as column names)."""
    return _CRP_CATEGORIES.get(fetch)


def crp_category_choices(fetch: Fetch | None = None) -> dict[str, str]:
    """Map CRP category codes (`Catcode`) to names (`Catname`)."""
    df = crp_categories(fetch)
    if df.width < 2:
        raise MalformedResponseError("CRP categories table has fewer than 2 columns")
    return dict(
        zip(
            df.get_column(df.columns[0]).to_list(),
            df.get_column(df.columns[1]).to_list(),
        )
    )


def ie_transaction_types(fetch: Fetch | None = None) -> dict[str, str]:
    return _IE_TRANSACTION_TYPES.get(fetch)


def reset_reference_tables() -> None:
    """Drop memoized reference tables (tests only; production never refreshes)."""
    _CRP_CATEGORIES.reset()
    _IE_TRANSACTION_TYPES.reset()


STATIC_CHOICES: Final[dict[str, dict[str, str]]] = {
    "parties": PARTIES,
    "seats": SEATS,
    "offices": OFFICES,
    "filing_types": FILING_TYPE_CHOICES,
}

__all__ = [
    "ALL_CYCLES",
    "FILING_TYPE_CHOICES",
    "OFFICES",
    "PARTIES",
    "SEATS",
    "STATIC_CHOICES",
    "ReferenceTable",
    "crp_categories",
    "crp_category_choices",
    "election_cycles_since",
    "format_number",
    "ie_transaction_types",
    "reset_reference_tables",
    "seat_label",
]
