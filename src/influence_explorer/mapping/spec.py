"""
Declarative endpoint descriptors (API contract).

These frozen dataclasses are the small "contract" shared by the request
builder and the response normalizer:
- `ParamSpec`: one user-facing parameter (type, options, default, setter,
  validator)
- `FieldSpec`: one output column (source key, label, format tag, getter)
- `ResponseSchema`: optional whole-payload before-filter + ordered fields
- `EndpointSpec`: URI template + params + response schema

Callbacks are plain functions stored on the descriptors:
- setter:        (value: str, context: RequestContext) -> str
- validator:     (value: str) -> bool
- getter:        (raw_value: Any) -> Any
- before_filter: (text: str) -> str
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .request import RequestContext

PLACEHOLDER_RE = re.compile(r":([A-Za-z_][A-Za-z0-9_]*)")

Setter = Callable[[str, "RequestContext"], str]
Validator = Callable[[str], bool]
Getter = Callable[[Any], Any]
BeforeFilter = Callable[[str], str]


class ParamType(Enum):
    STRING = "string"
    SELECT = "select"
    INTEGER = "integer"


class FieldFormat(Enum):
    PLAIN = "plain"
    CURRENCY = "currency"
    DATE = "date"


def humanize(key: str) -> str:
    """Default display label for a source key (`employee_amount` -> `Employee amount`)."""
    s = key[:-3] if key.endswith("_id") else key
    s = s.replace("_", " ").strip()
    if not s:
        return key
    return s[0].upper() + s[1:].lower()


def placeholders(uri_template: str) -> tuple[str, ...]:
    """Return placeholder names in template order (duplicates kept)."""
    return tuple(PLACEHOLDER_RE.findall(uri_template))


@dataclass(frozen=True)
class ParamSpec:
    name: str
    label: str
    type: ParamType = ParamType.STRING
    default: str | None = None
    options: Mapping[str, str] = field(default_factory=dict)
    validator: Validator | None = None
    setter: Setter | None = None

    def __post_init__(self) -> None:
        if self.type is ParamType.SELECT and not self.options:
            raise ValueError(f"select param '{self.name}' requires non-empty options")


@dataclass(frozen=True)
class FieldSpec:
    """One output column.

    Attributes
    ----------
    source_key:
        Key read from each upstream record (missing -> None).
    name:
        Output key in the resolved record. Defaults to `source_key`.
    label:
        Display label. Defaults to `humanize(source_key)`.
    format:
        Semantic format tag used by display layers.
    getter:
        Optional coercion applied to the raw value (including None).
    strict:
        If False, a `FieldCoercionError` from the getter nulls the field
        instead of failing the call.
    """

    source_key: str
    name: str = ""
    label: str = ""
    format: FieldFormat = FieldFormat.PLAIN
    getter: Getter | None = None
    strict: bool = True

    def __post_init__(self) -> None:
        if not self.name:
            object.__setattr__(self, "name", self.source_key)
        if not self.label:
            object.__setattr__(self, "label", humanize(self.source_key))


@dataclass(frozen=True)
class ResponseSchema:
    fields: tuple[FieldSpec, ...]
    before_filter: BeforeFilter | None = None

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)


@dataclass(frozen=True)
class EndpointSpec:
    key: str
    title: str
    uri_template: str
    response: ResponseSchema
    params: tuple[ParamSpec, ...] = ()
    help_text: str = ""

    def param(self, name: str) -> ParamSpec:
        for p in self.params:
            if p.name == name:
                return p
        raise KeyError(f"Endpoint '{self.key}' has no param '{name}'")

    @property
    def template_params(self) -> tuple[str, ...]:
        return placeholders(self.uri_template)

    def describe(self) -> dict[str, Any]:
        """Host-facing description of the endpoint (no callbacks)."""
        return {
            "key": self.key,
            "title": self.title,
            "help_text": self.help_text,
            "uri": self.uri_template,
            "params": [
                {
                    "name": p.name,
                    "label": p.label,
                    "type": p.type.value,
                    "options": dict(p.options),
                    "default": p.default,
                }
                for p in self.params
            ],
            "fields": [
                {"name": f.name, "label": f.label, "format": f.format.value}
                for f in self.response.fields
            ],
        }
