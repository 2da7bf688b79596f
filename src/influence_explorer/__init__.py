"""Influence Explorer API mapping: endpoint catalog, request building and
response normalization for campaign-finance and lobbying aggregates."""

from .endpoints import build_registry, get_endpoint_spec, get_registry
from .errors import (
    FieldCoercionError,
    InfluenceExplorerError,
    MalformedResponseError,
    ParameterValidationError,
    TemplateError,
    UpstreamFetchError,
)
from .mapping.client import InfluenceExplorerClient

__all__ = [
    "FieldCoercionError",
    "InfluenceExplorerClient",
    "InfluenceExplorerError",
    "MalformedResponseError",
    "ParameterValidationError",
    "TemplateError",
    "UpstreamFetchError",
    "build_registry",
    "get_endpoint_spec",
    "get_registry",
]
