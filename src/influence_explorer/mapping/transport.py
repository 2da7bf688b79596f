from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import requests

from ..errors import UpstreamFetchError

logger = logging.getLogger(__name__)

Fetch = Callable[[str], bytes]

SECRET_PARAMS: frozenset[str] = frozenset({"apikey"})


def redact_url(url: str) -> str:
    """Return `url` with secret query values (the API key) masked."""
    parts = urlsplit(url)
    if not parts.query:
        return url
    pairs = [
        (k, "***" if k in SECRET_PARAMS else v)
        for k, v in parse_qsl(parts.query, keep_blank_values=True)
    ]
    return urlunsplit(parts._replace(query=urlencode(pairs, safe="*")))


def params_summary(wire_params: Mapping[str, object]) -> str:
    """Create a compact params summary for logs (never includes the API key)."""
    keys = sorted(k for k in wire_params if k not in SECRET_PARAMS)
    return ",".join(f"{k}={wire_params[k]}" for k in keys)


def http_get(
    url: str,
    *,
    timeout_s: float = 30.0,
    session: requests.Session | None = None,
) -> bytes:
    """GET `url` and return the raw body.

    There is no retry: any transport error, timeout or non-2xx status is
    raised once as `UpstreamFetchError` with the original exception attached
    as `__cause__`.
    """
    created_session = session is None
    sess = session or requests.Session()
    safe_url = redact_url(url)

    try:
        logger.debug("IE GET url=%s", safe_url)
        resp = sess.get(url, timeout=timeout_s)
        resp.raise_for_status()
        logger.debug("IE GET success status=%s url=%s", resp.status_code, safe_url)
        return resp.content
    except requests.exceptions.HTTPError as e:
        r = getattr(e, "response", None)
        sc = r.status_code if r is not None else None
        logger.error("IE HTTPError status=%s url=%s", sc, safe_url)
        raise UpstreamFetchError(
            f"GET failed with status={sc}: {safe_url}",
            url=safe_url,
            status_code=sc,
        ) from e
    except requests.exceptions.RequestException as e:
        logger.error("IE transport error url=%s err=%s", safe_url, type(e).__name__)
        raise UpstreamFetchError(
            f"GET failed ({type(e).__name__}): {safe_url}",
            url=safe_url,
        ) from e
    finally:
        if created_session:
            sess.close()


def session_fetch(
    session: requests.Session | None = None,
    *,
    timeout_s: float = 30.0,
) -> Fetch:
    """Bind `http_get` to a session/timeout, producing a `Fetch` callable."""

    def _fetch(url: str) -> bytes:
        return http_get(url, timeout_s=timeout_s, session=session)

    return _fetch
