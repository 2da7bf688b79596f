from __future__ import annotations

import pytest

from influence_explorer.errors import ParameterValidationError, TemplateError
from influence_explorer.mapping.builder import EndpointBuilder, is_entity_id
from influence_explorer.mapping.request import (
    BuiltRequest,
    RequestContext,
    build_request,
    render_template,
)
from influence_explorer.mapping.spec import ParamType

CYCLES = {"2010": "2009 - 2010", "2012": "2011 - 2012"}
BASE_URL = "http://transparencydata.com/api/1.0/"


def _contributors(setter=None):
    return (
        EndpointBuilder("politician_contributors", "Politician - Contributors")
        .uri("/aggregates/pol/:entity_id/contributors.json")
        .param("entity_id", label="Politician", validator=is_entity_id, setter=setter)
        .cycle_param(CYCLES)
        .limit_param()
        .field("name")
        .build()
    )


def test_build_request_substitutes_path_and_splits_query() -> None:
    built = build_request(_contributors(), {"entity_id": "abc123", "cycle": "2012"})

    assert built.path == "/aggregates/pol/abc123/contributors.json"
    assert built.query == {"cycle": "2012", "limit": "10"}
    assert built.endpoint == "politician_contributors"


def test_built_request_url_appends_api_key() -> None:
    built = build_request(
        _contributors(), {"entity_id": "abc123", "cycle": "2012", "limit": "5"}
    )
    assert built.url(BASE_URL, "KEY") == (
        "http://transparencydata.com/api/1.0/aggregates/pol/abc123/"
        "contributors.json?cycle=2012&limit=5&apikey=KEY"
    )


def test_built_request_url_without_query() -> None:
    built = BuiltRequest(endpoint="x", path="/aggregates/x.json")
    assert built.url("http://host/api/") == "http://host/api/aggregates/x.json"


def test_select_value_outside_options_is_rejected() -> None:
    with pytest.raises(ParameterValidationError) as exc:
        build_request(_contributors(), {"entity_id": "abc123", "cycle": "1999"})

    assert exc.value.param == "cycle"
    assert exc.value.value == "1999"
    assert "2012" in str(exc.value)


def test_validator_rejects_non_hex_entity() -> None:
    with pytest.raises(ParameterValidationError) as exc:
        build_request(_contributors(), {"entity_id": "Nancy Pelosi"})
    assert exc.value.param == "entity_id"
    assert exc.value.reason == "failed validation"


@pytest.mark.parametrize("limit", ["0", "-3", "ten", "1_000", "\u0661\u0660", "+5"])
def test_limit_must_be_positive_integer(limit: str) -> None:
    with pytest.raises(ParameterValidationError) as exc:
        build_request(_contributors(), {"entity_id": "abc123", "limit": limit})
    assert exc.value.param == "limit"


def test_missing_template_param_is_required() -> None:
    with pytest.raises(ParameterValidationError, match="required"):
        build_request(_contributors(), {"cycle": "2012"})


def test_omitted_optional_params_are_skipped() -> None:
    spec = (
        EndpointBuilder("x", "X")
        .uri("/aggregates/x/:entity_id.json")
        .param("entity_id", label="Entity")
        .cycle_param(CYCLES)
        .field("name")
        .build()
    )
    built = build_request(spec, {"entity_id": "abc", "cycle": None, "extra": "ignored"})
    assert built.query == {}


def test_setter_runs_before_validation() -> None:
    seen: list[tuple[str, str]] = []

    def _setter(value: str, context: RequestContext) -> str:
        seen.append((value, context.api_key))
        return "deadbeef"

    built = build_request(
        _contributors(setter=_setter),
        {"entity_id": "Some Name"},
        context=RequestContext(api_key="KEY"),
    )
    assert seen == [("Some Name", "KEY")]
    assert built.path == "/aggregates/pol/deadbeef/contributors.json"


def test_integer_param_type_check() -> None:
    spec = (
        EndpointBuilder("x", "X")
        .uri("/aggregates/x.json")
        .param("page", label="Page", type=ParamType.INTEGER)
        .field("name")
        .build()
    )
    assert build_request(spec, {"page": " 2 "}).query == {"page": "2"}
    assert build_request(spec, {"page": "007"}).query == {"page": "7"}
    for bad in ("2.5", "1_000", "\u0661\u0660", ""):
        with pytest.raises(ParameterValidationError, match="not an integer"):
            build_request(spec, {"page": bad})


def test_render_template_escapes_values() -> None:
    assert render_template("/a/:x/b.json", {"x": "a b/c"}) == "/a/a%20b%2Fc/b.json"
    assert render_template("/top_:limit.json", {"limit": "10"}) == "/top_10.json"


def test_render_template_unresolved_placeholder_raises() -> None:
    with pytest.raises(TemplateError, match=":entity_id"):
        render_template("/aggregates/pol/:entity_id.json", {})


@pytest.mark.parametrize("entity_id", ["abc123\n", " abc123", "abc123 ", "ABC123"])
def test_entity_id_must_be_exactly_lowercase_hex(entity_id: str) -> None:
    with pytest.raises(ParameterValidationError) as exc:
        build_request(_contributors(), {"entity_id": entity_id})
    assert exc.value.param == "entity_id"


def test_limit_in_path_is_canonical() -> None:
    spec = (
        EndpointBuilder("top_individuals", "Top Individuals")
        .uri("/aggregates/indivs/top_:limit.json")
        .limit_param(default=None)
        .field("name")
        .build()
    )
    assert build_request(spec, {"limit": " 10"}).path == "/aggregates/indivs/top_10.json"
    assert build_request(spec, {"limit": "010"}).path == "/aggregates/indivs/top_10.json"
    with pytest.raises(ParameterValidationError):
        build_request(spec, {"limit": "1_000"})
