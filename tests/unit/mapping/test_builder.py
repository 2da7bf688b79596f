from __future__ import annotations

import pytest

from influence_explorer.errors import TemplateError
from influence_explorer.mapping.builder import (
    EndpointBuilder,
    is_entity_id,
    is_positive_int,
    summary_fields,
)
from influence_explorer.mapping.resolver import entity_setter
from influence_explorer.mapping.spec import (
    FieldFormat,
    FieldSpec,
    ParamSpec,
    ParamType,
    humanize,
    placeholders,
)

CYCLES = {"2012": "2011 - 2012"}


def test_entity_and_limit_validators() -> None:
    assert is_entity_id("85ab2e74589a414495d18cc7a9233981")
    assert not is_entity_id("85AB")
    assert not is_entity_id("Nancy Pelosi")
    assert not is_entity_id("")
    assert not is_entity_id("abc123\n")
    assert is_positive_int("10")
    assert not is_positive_int("0")
    assert not is_positive_int("ten")
    assert not is_positive_int("1_000")
    assert not is_positive_int("\u0661")
    assert is_positive_int(" 10")


def test_humanize_and_placeholders() -> None:
    assert humanize("employee_amount") == "Employee amount"
    assert humanize("entity_id") == "Entity"
    assert humanize("PACs") == "Pacs"
    assert placeholders("/aggregates/:a/x_:b.json") == ("a", "b")


def test_field_spec_defaults() -> None:
    f = FieldSpec("total_raised")
    assert f.name == "total_raised"
    assert f.label == "Total raised"
    assert f.format is FieldFormat.PLAIN
    assert f.strict is True


def test_select_param_requires_options() -> None:
    with pytest.raises(ValueError, match="requires non-empty options"):
        ParamSpec("cycle", "Election Cycle", type=ParamType.SELECT)


def test_builder_produces_ordered_spec() -> None:
    spec = (
        EndpointBuilder("politician_contributors", "Politician - Contributors")
        .uri("/aggregates/pol/:entity_id/contributors.json")
        .help_text("Top contributors")
        .entity_param("Politician")
        .cycle_param(CYCLES)
        .limit_param()
        .field("name", label="Contributor Name")
        .currency_field("total_amount")
        .count_field("total_count")
        .build()
    )

    assert [p.name for p in spec.params] == ["entity_id", "cycle", "limit"]
    assert spec.param("entity_id").setter is entity_setter
    assert spec.param("limit").default == "10"
    assert spec.template_params == ("entity_id",)
    assert spec.response.field_names == ("name", "total_amount", "total_count")
    assert spec.response.fields[1].format is FieldFormat.CURRENCY


def test_top_cycle_param_adds_all_available() -> None:
    spec = (
        EndpointBuilder("top", "Top")
        .uri("/aggregates/orgs/top_:limit.json")
        .top_cycle_param(CYCLES)
        .limit_param(default=None)
        .field("name")
        .build()
    )
    assert spec.param("cycle").options == {"2012": "2011 - 2012", "-1": "All available"}
    assert spec.param("limit").default is None


def test_summary_fields_adds_count_amount_pairs() -> None:
    b = EndpointBuilder("x", "X").uri("/x.json")
    summary_fields(b, ("employee", "direct"), direct_count="Direct Count")
    spec = b.build()

    assert spec.response.field_names == (
        "employee_count",
        "employee_amount",
        "direct_count",
        "direct_amount",
    )
    assert spec.response.fields[2].label == "Direct Count"
    assert spec.response.fields[1].label == "Employee amount"


def test_build_requires_uri_and_fields() -> None:
    with pytest.raises(TemplateError, match="no URI template"):
        EndpointBuilder("x", "X").field("name").build()
    with pytest.raises(ValueError, match="no response fields"):
        EndpointBuilder("x", "X").uri("/x.json").build()


def test_build_rejects_undeclared_placeholder() -> None:
    b = EndpointBuilder("x", "X").uri("/aggregates/pol/:entity_id.json").field("name")
    with pytest.raises(TemplateError, match="undeclared=\\['entity_id'\\]"):
        b.build()


def test_build_rejects_duplicate_placeholder() -> None:
    b = (
        EndpointBuilder("x", "X")
        .uri("/a/:id/b/:id.json")
        .param("id", label="Id")
        .field("name")
    )
    with pytest.raises(TemplateError, match="duplicated"):
        b.build()


def test_duplicate_param_rejected() -> None:
    b = EndpointBuilder("x", "X").param("limit", label="Limit")
    with pytest.raises(ValueError, match="Duplicate param 'limit'"):
        b.limit_param()


def test_describe_has_no_callbacks() -> None:
    spec = (
        EndpointBuilder("x", "X")
        .uri("/aggregates/x/:entity_id.json")
        .entity_param("Organization")
        .cycle_param(CYCLES)
        .currency_field("amount")
        .build()
    )
    described = spec.describe()

    assert described["uri"] == "/aggregates/x/:entity_id.json"
    assert described["params"][1] == {
        "name": "cycle",
        "label": "Election Cycle",
        "type": "select",
        "options": CYCLES,
        "default": None,
    }
    assert described["fields"] == [
        {"name": "amount", "label": "Amount", "format": "currency"}
    ]
