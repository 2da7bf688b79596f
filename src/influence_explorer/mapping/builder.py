from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from ..errors import TemplateError
from .choices import ALL_CYCLES
from .getters import to_float, to_int
from .resolver import entity_setter
from .spec import (
    BeforeFilter,
    EndpointSpec,
    FieldFormat,
    FieldSpec,
    Getter,
    ParamSpec,
    ParamType,
    ResponseSchema,
    Setter,
    Validator,
    placeholders,
)

ENTITY_ID_RE = re.compile(r"[0-9a-f]+")
DIGITS_RE = re.compile(r"[0-9]+")

DEFAULT_LIMIT = "10"


def is_entity_id(value: str) -> bool:
    return ENTITY_ID_RE.fullmatch(value) is not None


def is_positive_int(value: str) -> bool:
    s = value.strip()
    return DIGITS_RE.fullmatch(s) is not None and int(s) > 0


class EndpointBuilder:
    """Fluent construction of one `EndpointSpec`.

    Example
    -------
    >>> spec = (
    ...     EndpointBuilder("politician_industries", "Politician - Industries")
    ...     .uri("/aggregates/pol/:entity_id/contributors/industries.json")
    ...     .entity_param("Politician")
    ...     .cycle_param(cycles)
    ...     .limit_param()
    ...     .field("name", label="Industry", getter=titleize)
    ...     .build()
    ... )

    `build()` checks that every URI placeholder is declared exactly once as a
    parameter and raises `TemplateError` otherwise.
    """

    def __init__(self, key: str, title: str) -> None:
        self._key = key
        self._title = title
        self._uri: str | None = None
        self._help_text = ""
        self._params: list[ParamSpec] = []
        self._fields: list[FieldSpec] = []
        self._before_filter: BeforeFilter | None = None

    def uri(self, template: str) -> EndpointBuilder:
        self._uri = template
        return self

    def help_text(self, text: str) -> EndpointBuilder:
        self._help_text = text
        return self

    def param(
        self,
        name: str,
        *,
        label: str,
        type: ParamType = ParamType.STRING,
        default: str | None = None,
        options: Mapping[str, str] | None = None,
        validator: Validator | None = None,
        setter: Setter | None = None,
    ) -> EndpointBuilder:
        if any(p.name == name for p in self._params):
            raise ValueError(f"Duplicate param '{name}' on endpoint '{self._key}'")
        self._params.append(
            ParamSpec(
                name=name,
                label=label,
                type=type,
                default=default,
                options=dict(options or {}),
                validator=validator,
                setter=setter,
            )
        )
        return self

    def entity_param(self, label: str) -> EndpointBuilder:
        """`entity_id` resolved by name lookup, then checked as a hex id."""
        return self.param(
            "entity_id",
            label=label,
            setter=entity_setter,
            validator=is_entity_id,
        )

    def cycle_param(self, cycles: Mapping[str, str]) -> EndpointBuilder:
        return self.param(
            "cycle",
            label="Election Cycle",
            type=ParamType.SELECT,
            options=cycles,
        )

    def top_cycle_param(self, cycles: Mapping[str, str]) -> EndpointBuilder:
        return self.cycle_param({**cycles, **ALL_CYCLES})

    def limit_param(self, default: str | None = DEFAULT_LIMIT) -> EndpointBuilder:
        return self.param(
            "limit",
            label="Number of Results",
            type=ParamType.INTEGER,
            default=default,
            validator=is_positive_int,
        )

    def field(
        self,
        source_key: str,
        *,
        name: str = "",
        label: str = "",
        format: FieldFormat = FieldFormat.PLAIN,
        getter: Getter | None = None,
        strict: bool = True,
    ) -> EndpointBuilder:
        self._fields.append(
            FieldSpec(
                source_key=source_key,
                name=name,
                label=label,
                format=format,
                getter=getter,
                strict=strict,
            )
        )
        return self

    def count_field(self, source_key: str, *, label: str = "") -> EndpointBuilder:
        return self.field(source_key, label=label, getter=to_int)

    def currency_field(self, source_key: str, *, label: str = "") -> EndpointBuilder:
        return self.field(
            source_key,
            label=label,
            format=FieldFormat.CURRENCY,
            getter=to_float,
        )

    def before_filter(self, fn: BeforeFilter) -> EndpointBuilder:
        self._before_filter = fn
        return self

    def build(self) -> EndpointSpec:
        if not self._uri:
            raise TemplateError(f"Endpoint '{self._key}' has no URI template")
        if not self._fields:
            raise ValueError(f"Endpoint '{self._key}' declares no response fields")

        names = placeholders(self._uri)
        declared = {p.name for p in self._params}
        dupes = sorted({n for n in names if names.count(n) > 1})
        missing = sorted(set(names) - declared)
        if dupes or missing:
            raise TemplateError(
                f"Endpoint '{self._key}' template '{self._uri}' "
                f"duplicated={dupes} undeclared={missing}"
            )

        return EndpointSpec(
            key=self._key,
            title=self._title,
            uri_template=self._uri,
            help_text=self._help_text,
            params=tuple(self._params),
            response=ResponseSchema(
                fields=tuple(self._fields),
                before_filter=self._before_filter,
            ),
        )


def summary_fields(builder: EndpointBuilder, prefixes: tuple[str, ...], **labels: Any) -> EndpointBuilder:
    """Add `<prefix>_count` / `<prefix>_amount` pairs (employee/direct/total)."""
    for prefix in prefixes:
        builder.count_field(f"{prefix}_count", label=labels.get(f"{prefix}_count", ""))
        builder.currency_field(f"{prefix}_amount", label=labels.get(f"{prefix}_amount", ""))
    return builder
