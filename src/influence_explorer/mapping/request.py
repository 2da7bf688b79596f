"""Parameter resolution and URI templating.

Per parameter, in order:
1. omitted (missing/None) -> substitute `default`; without a default the
   parameter is skipped, unless the URI template needs it (required)
2. `setter(candidate, context)` -> resolved value
3. `validator(resolved)` must be truthy
4. `select` values must be option keys; `integer` values must parse

Any rejection raises `ParameterValidationError` before a URL exists. The
resolved values named in the template become path segments; the rest go to
the query string.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote, urlencode

from ..errors import ParameterValidationError, TemplateError
from .spec import PLACEHOLDER_RE, EndpointSpec, ParamSpec, ParamType
from .transport import Fetch, http_get

logger = logging.getLogger(__name__)

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class RequestContext:
    """Collaborators available to param setters."""

    api_key: str = ""
    fetch: Fetch = http_get


@dataclass(frozen=True)
class BuiltRequest:
    endpoint: str
    path: str
    query: dict[str, str] = field(default_factory=dict)

    def url(self, base_url: str, api_key: str | None = None) -> str:
        """Absolute URL; `api_key` (if given) is appended as `apikey`."""
        url = base_url.rstrip("/") + "/" + self.path.lstrip("/")
        query = dict(self.query)
        if api_key:
            query["apikey"] = api_key
        if query:
            url = f"{url}?{urlencode(query)}"
        return url


def _canonical_integer(value: str) -> str | None:
    """ASCII base-10 integer in canonical form (`" 010"` -> `"10"`), else None."""
    s = value.strip()
    if _INTEGER_RE.fullmatch(s) is None:
        return None
    return str(int(s))


def resolve_param(
    spec: ParamSpec,
    candidate: Any,
    context: RequestContext,
) -> str:
    """Run one (non-missing) candidate through setter, validator and type checks."""
    value = str(candidate)
    if spec.setter is not None:
        value = spec.setter(value, context)

    if spec.validator is not None and not spec.validator(value):
        raise ParameterValidationError(spec.name, value, "failed validation")

    if spec.type is ParamType.SELECT and value not in spec.options:
        raise ParameterValidationError(
            spec.name,
            value,
            f"not one of {sorted(spec.options)}",
        )
    if spec.type is ParamType.INTEGER:
        canonical = _canonical_integer(value)
        if canonical is None:
            raise ParameterValidationError(spec.name, value, "not an integer")
        value = canonical

    return value


def resolve_params(
    endpoint: EndpointSpec,
    raw_params: Mapping[str, Any],
    *,
    context: RequestContext,
) -> dict[str, str]:
    """Resolve all declared params; returns name -> resolved value (omitted skipped)."""
    required = set(endpoint.template_params)
    unknown = sorted(set(raw_params) - {p.name for p in endpoint.params})
    if unknown:
        logger.debug("Ignoring unknown params endpoint=%s params=%s", endpoint.key, unknown)

    resolved: dict[str, str] = {}
    for spec in endpoint.params:
        candidate = raw_params.get(spec.name)
        if candidate is None:
            candidate = spec.default
        if candidate is None:
            if spec.name in required:
                raise ParameterValidationError(spec.name, None, "required")
            continue
        resolved[spec.name] = resolve_param(spec, candidate, context)

    return resolved


def render_template(uri_template: str, values: Mapping[str, str]) -> str:
    """Replace `:name` placeholders with URL-escaped values."""

    def _sub(m) -> str:
        name = m.group(1)
        if name not in values:
            raise TemplateError(f"Unresolved placeholder ':{name}' in '{uri_template}'")
        return quote(str(values[name]), safe="")

    path = PLACEHOLDER_RE.sub(_sub, uri_template)
    leftover = PLACEHOLDER_RE.findall(path)
    if leftover:
        raise TemplateError(f"Unresolved placeholders {leftover} in '{path}'")
    return path


def build_request(
    endpoint: EndpointSpec,
    raw_params: Mapping[str, Any],
    *,
    context: RequestContext | None = None,
) -> BuiltRequest:
    context = context or RequestContext()
    resolved = resolve_params(endpoint, raw_params, context=context)

    path = render_template(endpoint.uri_template, resolved)
    in_path = set(endpoint.template_params)
    query = {k: v for k, v in resolved.items() if k not in in_path}

    logger.debug("Built request endpoint=%s path=%s", endpoint.key, path)
    return BuiltRequest(endpoint=endpoint.key, path=path, query=query)
