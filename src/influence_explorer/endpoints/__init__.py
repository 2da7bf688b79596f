"""Registry exports for the Influence Explorer endpoint catalog."""

from .registry import (
    ENTITY_CYCLES_SINCE,
    TOP_CYCLES_SINCE,
    build_registry,
    get_endpoint_spec,
    get_registry,
)

__all__ = [
    "ENTITY_CYCLES_SINCE",
    "TOP_CYCLES_SINCE",
    "build_registry",
    "get_endpoint_spec",
    "get_registry",
]
