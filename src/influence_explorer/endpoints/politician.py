"""Endpoints keyed on a politician entity (`/aggregates/pol/:entity_id/...`)."""

from __future__ import annotations

from collections.abc import Mapping

from ..mapping.builder import EndpointBuilder, summary_fields
from ..mapping.choices import OFFICES
from ..mapping.filters import wrap_object
from ..mapping.getters import (
    contribution_summary,
    lookup,
    parse_date,
    titleize,
)
from ..mapping.spec import EndpointSpec, FieldFormat


def _pol(key: str, title: str, cycles: Mapping[str, str] | None = None) -> EndpointBuilder:
    b = EndpointBuilder(key, title).entity_param("Politician")
    if cycles is not None:
        b.cycle_param(cycles)
    return b


def build_politician_endpoints(cycles: Mapping[str, str]) -> list[EndpointSpec]:
    contributors = (
        _pol("politician_contributors", "Politician - Contributors", cycles)
        .uri("/aggregates/pol/:entity_id/contributors.json")
        .help_text("Top organizations contributing to a politician")
        .limit_param()
        .field("name", label="Contributor Name")
        .field("type", label="Contributor Type")
    )
    summary_fields(contributors, ("employee", "direct", "total"))

    industries = (
        _pol("politician_industries", "Politician - Industries", cycles)
        .uri("/aggregates/pol/:entity_id/contributors/industries.json")
        .help_text("Top industries contributing to a politician")
        .limit_param()
        .field("name", label="Industry", getter=titleize)
        .count_field("count", label="Contribution Count")
        .currency_field("amount")
    )

    unknown_industries = (
        _pol("politician_unknown_industries", "Politician - Unknown Industries", cycles)
        .uri("/aggregates/pol/:entity_id/contributors/industries_unknown.json")
        .help_text(
            "Contribution count and total for a politician from unknown industries"
        )
        .before_filter(wrap_object)
        .count_field("count", label="Contribution Count")
        .currency_field("amount", label="Contribution Amount")
    )

    local_breakdown = (
        _pol("politician_local_breakdown", "Politician - Local Breakdown", cycles)
        .uri("/aggregates/pol/:entity_id/contributors/local_breakdown.json")
        .help_text(
            "In-state vs out-of-state contributions to a politician. "
            "Display as table only."
        )
        .before_filter(wrap_object)
        .field("in-state", getter=contribution_summary, strict=False)
        .field("out-of-state", getter=contribution_summary, strict=False)
    )

    type_breakdown = (
        _pol("politician_type_breakdown", "Politician - Type Breakdown", cycles)
        .uri("/aggregates/pol/:entity_id/contributors/type_breakdown.json")
        .help_text(
            "Individual vs organization contributions to a politician. "
            "Display as table only."
        )
        .before_filter(wrap_object)
        .field("Individuals", getter=contribution_summary, strict=False)
        .field("PACs", label="PACs", getter=contribution_summary, strict=False)
    )

    fec_summary = (
        _pol("politician_fec_summary", "Politician - FEC Summary")
        .uri("/aggregates/pol/:entity_id/fec_summary.json")
        .help_text("The latest figures from the FEC's summary report.")
        .before_filter(wrap_object)
        .field("office", getter=lookup(OFFICES))
        .currency_field("total_raised")
        .currency_field("contributions_pac", label="PAC Contributions")
        .currency_field("contributions_candidate", label="Candidate Contributions")
        .currency_field("contributions_indiv", label="Individual Contributions")
        .currency_field("contributions_party", label="Party Contributions")
        .currency_field("transfers_in")
        .currency_field("cash_on_hand")
        .currency_field("disbursements")
        .field("total_receipts_rank")
        .field("total_disbursements_rank")
        .field("max_rank", label="Rankings Out Of")
        .field("date", label="Date of report", format=FieldFormat.DATE, getter=parse_date)
    )

    fec_indexp = (
        _pol("politician_fec_indexp", "Politician - FEC Independent Expenditures")
        .uri("/aggregates/pol/:entity_id/fec_indexp.json")
        .help_text("Top independent expenditures for and against a politician.")
        .field("committee_name", getter=titleize)
        .currency_field("amount")
        .field("support_oppose", label="Support/Oppose")
    )

    return [
        b.build()
        for b in (
            contributors,
            industries,
            unknown_industries,
            local_breakdown,
            type_breakdown,
            fec_summary,
            fec_indexp,
        )
    ]


__all__ = ["build_politician_endpoints"]
