from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import Any

from .request import BuiltRequest, RequestContext, build_request
from .spec import EndpointSpec

logger = logging.getLogger(__name__)


class Registry:
    """Append-only catalog of endpoint specs keyed by endpoint key.

    Specs are frozen; once registered, a key can neither be replaced nor
    removed.
    """

    def __init__(self, specs: Iterable[EndpointSpec] = ()) -> None:
        self._specs: dict[str, EndpointSpec] = {}
        for spec in specs:
            self.register(spec)

    def register(self, spec: EndpointSpec) -> EndpointSpec:
        if spec.key in self._specs:
            raise ValueError(f"Endpoint '{spec.key}' is already registered")
        self._specs[spec.key] = spec
        logger.debug("Registered endpoint key=%s uri=%s", spec.key, spec.uri_template)
        return spec

    def get(self, key: str) -> EndpointSpec:
        """Return the spec for a registered endpoint key.

        Raises
        ------
        KeyError
            If the endpoint is unknown.
        """
        try:
            return self._specs[key]
        except KeyError as e:
            supported = ", ".join(sorted(self._specs))
            raise KeyError(
                f"Unknown Influence Explorer endpoint '{key}'. Supported: {supported}"
            ) from e

    def __contains__(self, key: object) -> bool:
        return key in self._specs

    def __iter__(self) -> Iterator[EndpointSpec]:
        return iter(self._specs.values())

    def __len__(self) -> int:
        return len(self._specs)

    def keys(self) -> tuple[str, ...]:
        return tuple(self._specs)

    @property
    def specs(self) -> Mapping[str, EndpointSpec]:
        return MappingProxyType(self._specs)

    def catalog(self) -> list[dict[str, Any]]:
        """Host-facing description of every endpoint, in registration order."""
        return [spec.describe() for spec in self._specs.values()]

    def build_request(
        self,
        key: str,
        raw_params: Mapping[str, Any],
        *,
        context: RequestContext | None = None,
    ) -> BuiltRequest:
        return build_request(self.get(key), raw_params, context=context)
