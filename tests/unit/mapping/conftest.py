from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from typing import Any

import pytest

from influence_explorer.mapping.choices import reset_reference_tables


@pytest.fixture(autouse=True)
def _fresh_reference_tables():
    reset_reference_tables()
    yield
    reset_reference_tables()


@pytest.fixture
def fake_fetch():
    """Build a recording `fetch` that answers by URL substring."""

    def _make(routes: Mapping[str, Any]) -> Callable[[str], bytes]:
        calls: list[str] = []

        def _fetch(url: str) -> bytes:
            calls.append(url)
            for needle, payload in routes.items():
                if needle in url:
                    if isinstance(payload, Exception):
                        raise payload
                    if isinstance(payload, bytes):
                        return payload
                    if isinstance(payload, str):
                        return payload.encode("utf-8")
                    return json.dumps(payload).encode("utf-8")
            raise AssertionError(f"unexpected fetch: {url}")

        _fetch.calls = calls  # type: ignore[attr-defined]
        return _fetch

    return _make
