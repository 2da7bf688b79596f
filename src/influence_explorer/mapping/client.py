from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import requests

from ..endpoints import get_registry
from .normalize import ResolvedRecord, normalize
from .registry import Registry
from .request import BuiltRequest, RequestContext, build_request
from .transport import Fetch, params_summary, session_fetch

logger = logging.getLogger(__name__)

IE_BASE_URL = "http://transparencydata.com/api/1.0/"


@dataclass(frozen=True)
class InfluenceExplorerClient:
    """Query client for the Influence Explorer aggregates API.

    One call runs the whole pipeline sequentially:
    - resolve params (entity names go through the contextualize service)
    - build the path + query string (`apikey` appended)
    - GET the URL once (no retries)
    - normalize the body into ordered records

    Session handling:
    - You may pass a shared `requests.Session` to reuse connections across calls.
    - If you do not pass a session, each GET creates and closes its own.
    - A custom `fetch` callable replaces HTTP entirely (tests, caching hosts).

    Exceptions:
    - `ParameterValidationError` before any request to the aggregates API.
    - `UpstreamFetchError` for transport / non-2xx failures.
    - `MalformedResponseError` / `FieldCoercionError` from normalization.
    - `KeyError` for unknown endpoint keys.
    """

    api_key: str
    base_url: str = IE_BASE_URL
    timeout_s: float = 30.0
    registry: Registry | None = None
    fetch: Fetch | None = None

    def _registry(self) -> Registry:
        return self.registry if self.registry is not None else get_registry()

    def _fetch(self, session: requests.Session | None) -> Fetch:
        if self.fetch is not None:
            return self.fetch
        return session_fetch(session, timeout_s=self.timeout_s)

    def build(
        self,
        endpoint: str,
        params: Mapping[str, Any],
        *,
        session: requests.Session | None = None,
    ) -> BuiltRequest:
        spec = self._registry().get(endpoint)
        context = RequestContext(api_key=self.api_key, fetch=self._fetch(session))
        return build_request(spec, params, context=context)

    def url_for(self, built: BuiltRequest) -> str:
        return built.url(self.base_url, self.api_key)

    def query(
        self,
        endpoint: str,
        params: Mapping[str, Any],
        *,
        session: requests.Session | None = None,
    ) -> list[ResolvedRecord]:
        """Fetch one endpoint and return its normalized records.

        Parameters
        ----------
        endpoint:
            Endpoint key from the registry (e.g. `"politician_contributors"`).
        params:
            Raw parameter values as entered by a user; entity parameters may
            be names or hex ids.
        session:
            Optional shared `requests.Session` for connection reuse.
        """
        spec = self._registry().get(endpoint)
        fetch = self._fetch(session)
        built = build_request(
            spec,
            params,
            context=RequestContext(api_key=self.api_key, fetch=fetch),
        )

        logger.info(
            "IE query endpoint=%s path=%s params=[%s]",
            endpoint,
            built.path,
            params_summary(built.query),
        )
        body = fetch(self.url_for(built))
        records = normalize(body, spec.response)
        logger.info("IE query endpoint=%s records=%d", endpoint, len(records))
        return records
