from __future__ import annotations

import logging

import pytest

from influence_explorer.endpoints import build_registry
from influence_explorer.errors import ParameterValidationError, UpstreamFetchError
from influence_explorer.mapping.client import IE_BASE_URL, InfluenceExplorerClient

PELOSI_ID = "85ab2e74589a414495d18cc7a9233981"

CONTRIBUTORS = [
    {
        "name": "Lawyers/Law Firms",
        "type": "industry",
        "employee_count": "12",
        "employee_amount": "2500.00",
        "direct_count": 0,
        "direct_amount": "",
        "total_count": 12,
        "total_amount": 2500,
    }
]


@pytest.fixture
def registry():
    return build_registry(current_year=2012)


def _client(fetch, registry) -> InfluenceExplorerClient:
    return InfluenceExplorerClient(api_key="SECRETKEY", registry=registry, fetch=fetch)


def test_query_resolves_entity_and_normalizes(fake_fetch, registry, caplog) -> None:
    fetch = fake_fetch(
        {
            "contextualize": {"entities": [{"entity_data": {"id": PELOSI_ID}}]},
            "/aggregates/pol/": CONTRIBUTORS,
        }
    )

    with caplog.at_level(logging.DEBUG):
        records = _client(fetch, registry).query(
            "politician_contributors",
            {"entity_id": "Nancy Pelosi", "cycle": "2012"},
        )

    assert fetch.calls[1] == (
        f"{IE_BASE_URL}aggregates/pol/{PELOSI_ID}/contributors.json"
        "?cycle=2012&limit=10&apikey=SECRETKEY"
    )
    assert records == [
        {
            "name": "Lawyers/Law Firms",
            "type": "industry",
            "employee_count": 12,
            "employee_amount": 2500.0,
            "direct_count": 0,
            "direct_amount": 0.0,
            "total_count": 12,
            "total_amount": 2500.0,
        }
    ]
    assert "endpoint=politician_contributors" in caplog.text
    assert "SECRETKEY" not in caplog.text


def test_invalid_select_fails_before_any_aggregates_request(fake_fetch, registry) -> None:
    fetch = fake_fetch({"/aggregates/": CONTRIBUTORS})

    with pytest.raises(ParameterValidationError) as exc:
        _client(fetch, registry).query(
            "politician_contributors",
            {"entity_id": PELOSI_ID, "cycle": "1987"},
        )

    assert exc.value.param == "cycle"
    assert not any("/aggregates/" in url for url in fetch.calls)


def test_unresolvable_name_is_rejected_by_id_validator(fake_fetch, registry) -> None:
    fetch = fake_fetch(
        {
            "contextualize": UpstreamFetchError("down"),
            "/aggregates/": CONTRIBUTORS,
        }
    )

    with pytest.raises(ParameterValidationError) as exc:
        _client(fetch, registry).query("politician_contributors", {"entity_id": "Nobody"})

    assert exc.value.param == "entity_id"
    assert exc.value.value == "Nobody"
    assert len(fetch.calls) == 1


def test_upstream_error_propagates(fake_fetch, registry) -> None:
    fetch = fake_fetch(
        {
            "contextualize": {"entities": []},
            "/aggregates/": UpstreamFetchError("status=500", status_code=500),
        }
    )
    with pytest.raises(UpstreamFetchError) as exc:
        _client(fetch, registry).query("top_organizations", {"limit": "5", "cycle": "-1"})
    assert exc.value.status_code == 500


def test_unknown_endpoint_raises_key_error(fake_fetch, registry) -> None:
    with pytest.raises(KeyError, match="Unknown Influence Explorer endpoint"):
        _client(fake_fetch({}), registry).query("nope", {})


def test_build_and_url_for(fake_fetch, registry) -> None:
    client = InfluenceExplorerClient(
        api_key="K",
        base_url="http://example.test/api/1.0",
        registry=registry,
        fetch=fake_fetch({}),
    )
    built = client.build("top_politicians", {"limit": "3", "cycle": "2010"})

    assert built.path == "/aggregates/pols/top_3.json"
    assert client.url_for(built) == (
        "http://example.test/api/1.0/aggregates/pols/top_3.json?cycle=2010&apikey=K"
    )
