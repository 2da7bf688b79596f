"""Endpoints keyed on an individual entity (`/aggregates/indiv/:entity_id/...`)."""

from __future__ import annotations

from collections.abc import Mapping

from ..mapping.builder import EndpointBuilder
from ..mapping.filters import pivot_breakdown
from ..mapping.getters import titleize
from ..mapping.spec import EndpointSpec, FieldFormat

PARTY_BREAKDOWN_KEYS: tuple[str, ...] = ("Democrats", "Republicans", "Other")


def _indiv(key: str, title: str, cycles: Mapping[str, str]) -> EndpointBuilder:
    return EndpointBuilder(key, title).entity_param("Individual").cycle_param(cycles)


def build_individual_endpoints(cycles: Mapping[str, str]) -> list[EndpointSpec]:
    builders = [
        _indiv("individual_org_recipients", "Individual - Top Organization Recipients", cycles)
        .uri("/aggregates/indiv/:entity_id/recipient_orgs.json")
        .help_text("Top organizations receiving contributions from an individual.")
        .limit_param()
        .field("recipient_name", getter=titleize)
        .count_field("count", label="Number of Contributions")
        .currency_field("amount"),
        _indiv("individual_pol_recipients", "Individual - Top Politician Recipients", cycles)
        .uri("/aggregates/indiv/:entity_id/recipient_pols.json")
        .help_text("Top politicians receiving contributions from an individual.")
        .limit_param()
        .field("recipient_name", getter=titleize)
        .field("party")
        .field("state")
        .count_field("count", label="Number of Contributions")
        .currency_field("amount"),
        _indiv("individual_party_breakdown", "Individual - Party Breakdown", cycles)
        .uri("/aggregates/indiv/:entity_id/recipients/party_breakdown.json")
        .help_text("Amounts contributed to each party by an individual.")
        .before_filter(pivot_breakdown(PARTY_BREAKDOWN_KEYS, discriminator="party"))
        .field("party")
        .field("count", label="Number of contributions")
        .field("amount", label="Total", format=FieldFormat.CURRENCY),
        _indiv("individual_registrants", "Individual - Lobbying Registrants", cycles)
        .uri("/aggregates/indiv/:entity_id/registrants.json")
        .help_text("Lobbying firms that employed an individual.")
        .limit_param()
        .field("registrant_name")
        .count_field("count", label="Number of Records"),
        _indiv("individual_clients", "Individual - Clients", cycles)
        .uri("/aggregates/indiv/:entity_id/clients.json")
        .help_text("Clients an individual (lobbyist) was contracted to work for.")
        .limit_param()
        .field("client_name")
        .count_field("count", label="Number of Records"),
        _indiv("individual_issues", "Individual - Issues", cycles)
        .uri("/aggregates/indiv/:entity_id/issues.json")
        .help_text("Issues an individual (lobbyist) has worked on.")
        .limit_param()
        .field("issue")
        .count_field("count", label="Number of Records"),
    ]
    return [b.build() for b in builders]
