"""Declarative request/response mapping engine.

This package holds the generic pieces (descriptors, builder, parameter
pipeline, normalizer, getters, choices, resolver, transport); the concrete
endpoint catalog lives in `influence_explorer.endpoints`.
"""

from .builder import EndpointBuilder
from .normalize import ResolvedRecord, normalize
from .registry import Registry
from .request import BuiltRequest, RequestContext, build_request
from .resolver import resolve_entity_id
from .spec import EndpointSpec, FieldFormat, FieldSpec, ParamSpec, ParamType, ResponseSchema

__all__ = [
    "BuiltRequest",
    "EndpointBuilder",
    "EndpointSpec",
    "FieldFormat",
    "FieldSpec",
    "ParamSpec",
    "ParamType",
    "Registry",
    "RequestContext",
    "ResolvedRecord",
    "ResponseSchema",
    "build_request",
    "normalize",
    "resolve_entity_id",
]
