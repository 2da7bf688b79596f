"""Tabular views of normalized records (polars).

- `records_to_frame`: typed frame, one column per field in declaration order
- `display_frame`: string frame with currency/date formatting for printing
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Sequence
from typing import Any

import polars as pl

from .getters import format_currency
from .normalize import ResolvedRecord
from .spec import FieldFormat, ResponseSchema

_FORMAT_DTYPES: dict[FieldFormat, type[pl.DataType]] = {
    FieldFormat.CURRENCY: pl.Float64,
    FieldFormat.DATE: pl.Date,
}


def records_to_frame(
    records: Sequence[ResolvedRecord],
    schema: ResponseSchema,
) -> pl.DataFrame:
    """Build a frame with columns ordered as `schema.fields`."""
    columns = list(schema.field_names)
    overrides = {
        f.name: _FORMAT_DTYPES[f.format]
        for f in schema.fields
        if f.format in _FORMAT_DTYPES
    }

    if not records:
        return pl.DataFrame(
            schema={name: overrides.get(name, pl.Utf8) for name in columns}
        )

    return pl.from_dicts(
        list(records),
        schema=columns,
        schema_overrides=overrides,
        strict=False,
        infer_schema_length=None,
    )


def _display_value(value: Any, fmt: FieldFormat) -> str | None:
    if value is None:
        return None
    if fmt is FieldFormat.CURRENCY:
        return format_currency(value)
    if fmt is FieldFormat.DATE and isinstance(value, dt.date):
        return value.isoformat()
    return str(value)


def display_frame(
    records: Sequence[ResolvedRecord],
    schema: ResponseSchema,
    *,
    use_labels: bool = True,
) -> pl.DataFrame:
    """String-typed frame for console output (labels as headers by default)."""
    data: dict[str, list[str | None]] = {}
    for f in schema.fields:
        header = f.label if use_labels else f.name
        data[header] = [_display_value(r.get(f.name), f.format) for r in records]
    return pl.DataFrame(data, schema={name: pl.Utf8 for name in data})
