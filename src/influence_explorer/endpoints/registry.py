"""
Influence Explorer endpoint catalog.

The catalog is built once per process from the per-family declarations and
held in an append-only `Registry`. Cycle options are computed relative to the
year the registry is built; pass `current_year` to pin them (tests).
"""

from __future__ import annotations

import threading
from typing import Final

from ..mapping.choices import election_cycles_since
from ..mapping.registry import Registry
from ..mapping.spec import EndpointSpec
from .individual import build_individual_endpoints
from .organization import build_organization_endpoints
from .politician import build_politician_endpoints
from .top import build_industry_endpoints, build_top_endpoints

ENTITY_CYCLES_SINCE: Final[int] = 1990
TOP_CYCLES_SINCE: Final[int] = 2000

_DEFAULT_REGISTRY: Registry | None = None
_DEFAULT_LOCK = threading.Lock()


def build_registry(current_year: int | None = None) -> Registry:
    entity_cycles = election_cycles_since(ENTITY_CYCLES_SINCE, current_year=current_year)
    top_cycles = election_cycles_since(TOP_CYCLES_SINCE, current_year=current_year)

    registry = Registry()
    for spec in (
        *build_politician_endpoints(entity_cycles),
        *build_individual_endpoints(entity_cycles),
        *build_organization_endpoints(entity_cycles),
        *build_industry_endpoints(entity_cycles),
        *build_top_endpoints(top_cycles),
    ):
        registry.register(spec)
    return registry


def get_registry() -> Registry:
    """Return the process-wide registry (built on first use)."""
    global _DEFAULT_REGISTRY
    if _DEFAULT_REGISTRY is None:
        with _DEFAULT_LOCK:
            if _DEFAULT_REGISTRY is None:
                _DEFAULT_REGISTRY = build_registry()
    return _DEFAULT_REGISTRY


def get_endpoint_spec(endpoint: str) -> EndpointSpec:
    """Return the spec for a registered endpoint key.

    Raises
    ------
    KeyError
        If the endpoint is unknown.
    """
    return get_registry().get(endpoint)
