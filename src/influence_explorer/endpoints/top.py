"""Industry endpoints and the cycle-wide "top N" rankings.

The top-N endpoints carry `limit` inside the path (`top_:limit.json`), so
`limit` is required there and has no default.
"""

from __future__ import annotations

from collections.abc import Mapping

from ..mapping.builder import EndpointBuilder, summary_fields
from ..mapping.choices import PARTIES, seat_label
from ..mapping.getters import lookup, titleize
from ..mapping.spec import EndpointSpec

_SUMMARY_LABELS: dict[str, str] = {
    "employee_count": "Employee Contribution Count",
    "direct_count": "Direct Contribution Count",
    "total_count": "Total Contribution Count",
}


def build_industry_endpoints(cycles: Mapping[str, str]) -> list[EndpointSpec]:
    orgs = (
        EndpointBuilder("industry_orgs", "Industry - Top Organizations")
        .uri("/aggregates/industry/:entity_id/orgs.json")
        .help_text("Top organizations in an industry by dollars contributed.")
        .entity_param("Industry")
        .cycle_param(cycles)
        .limit_param()
        .field("name", label="Organization Name")
    )
    summary_fields(orgs, ("employee", "direct", "total"), **_SUMMARY_LABELS)
    return [orgs.build()]


def _top(key: str, title: str, path: str, help_text: str, cycles: Mapping[str, str]) -> EndpointBuilder:
    return (
        EndpointBuilder(key, title)
        .uri(f"/aggregates/{path}/top_:limit.json")
        .help_text(help_text)
        .top_cycle_param(cycles)
        .limit_param(default=None)
    )


def build_top_endpoints(cycles: Mapping[str, str]) -> list[EndpointSpec]:
    builders = [
        _top(
            "top_individuals",
            "Top Individual Contributors",
            "indivs",
            "Top n individual contributors in a cycle, without regard to party",
            cycles,
        )
        .field("name", label="Contributor", getter=titleize)
        .count_field("count", label="Contribution Count")
        .currency_field("amount", label="Total"),
        _top(
            "top_organizations",
            "Top Organizations by Contributions",
            "orgs",
            "Top n organizations by contribution dollars in a cycle",
            cycles,
        )
        .field("name", label="Organization", getter=titleize)
        .count_field("count", label="Contribution Count")
        .currency_field("amount", label="Total"),
        _top(
            "top_politicians",
            "Top Politicians by Contributions Received, All Offices",
            "pols",
            "Top n politicians by contribution dollars received in a cycle",
            cycles,
        )
        .field("name", label="Recipient", getter=titleize)
        .field("state")
        .field("seat", label="Office Sought", getter=seat_label)
        .field("party", getter=lookup(PARTIES, fallback="Other"))
        .count_field("count", label="Contribution Count")
        .currency_field("amount", label="Total"),
        _top(
            "top_industries",
            "Top Industries by Amount Contributed",
            "industries",
            "Top n Industries by the amount contributed in a given cycle",
            cycles,
        )
        .field("name", label="Industry", getter=titleize)
        .count_field("count", label="Contribution Count")
        .currency_field("amount", label="Total"),
    ]
    return [b.build() for b in builders]
