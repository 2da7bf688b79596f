"""Raw response body -> ordered list of resolved records.

Steps:
1. reshape: `schema.before_filter(text)` when declared
2. decode: JSON array -> records, JSON object -> one record
3. project: for each record and each field (declaration order), read
   `source_key` (missing -> None) and apply the field getter

Record and field order are preserved; nothing is sorted, filtered or limited.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from ..errors import FieldCoercionError, MalformedResponseError
from .spec import FieldSpec, ResponseSchema

logger = logging.getLogger(__name__)

ResolvedRecord = dict[str, Any]


def _as_text(raw_body: bytes | str) -> str:
    if isinstance(raw_body, bytes):
        try:
            return raw_body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedResponseError(f"Response is not UTF-8: {e}") from e
    return raw_body


def decode_records(text: str) -> list[Mapping[str, Any]]:
    """Decode JSON text into a list of upstream record mappings."""
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedResponseError(f"Response is not valid JSON: {e}") from e

    if isinstance(payload, dict):
        return [payload]
    if not isinstance(payload, list):
        raise MalformedResponseError(
            f"Expected a JSON array or object, got {type(payload).__name__}"
        )

    for i, item in enumerate(payload):
        if not isinstance(item, dict):
            raise MalformedResponseError(
                f"Record {i} is {type(item).__name__}, expected an object"
            )
    return payload


def project_field(spec: FieldSpec, record: Mapping[str, Any]) -> Any:
    raw = record.get(spec.source_key)
    if spec.getter is None:
        return raw
    try:
        return spec.getter(raw)
    except FieldCoercionError as e:
        if spec.strict:
            e.field = spec.name
            raise
        logger.warning("Nulling field=%s value=%r err=%s", spec.name, raw, e)
        return None


def project_record(
    schema: ResponseSchema,
    record: Mapping[str, Any],
) -> ResolvedRecord:
    return {spec.name: project_field(spec, record) for spec in schema.fields}


def normalize(raw_body: bytes | str, schema: ResponseSchema) -> list[ResolvedRecord]:
    text = _as_text(raw_body)
    if schema.before_filter is not None:
        text = schema.before_filter(text)

    records = decode_records(text)
    out = [project_record(schema, r) for r in records]
    logger.debug("Normalized records=%d fields=%d", len(out), len(schema.fields))
    return out
