"""Endpoints keyed on an organization entity (`/aggregates/org/:entity_id/...`).

Lobbying-firm views live under `/registrant/`; they only return rows when the
organization itself is a registrant.
"""

from __future__ import annotations

from collections.abc import Mapping

from ..mapping.builder import EndpointBuilder, summary_fields
from ..mapping.choices import PARTIES
from ..mapping.filters import pivot_breakdown, wrap_object
from ..mapping.getters import lookup, titleize
from ..mapping.spec import EndpointSpec, FieldFormat
from .individual import PARTY_BREAKDOWN_KEYS

LEVEL_BREAKDOWN_KEYS: tuple[str, ...] = ("Federal", "State")

_SUMMARY_LABELS: dict[str, str] = {
    "employee_count": "Employee Contribution Count",
    "direct_count": "Direct Contribution Count",
    "total_count": "Total Contribution Count",
}

_FEC_SUMMARY_AMOUNTS: tuple[tuple[str, str], ...] = (
    ("contributions_from_indiv", "Contributions from Individuals"),
    ("contributions_from_pacs", "Contributions from PACs"),
    ("loans_received", ""),
    ("nonfederal_transfers_received", ""),
    ("transfers_from_affiliates", ""),
    ("total_raised", ""),
    ("cash_on_hand", ""),
    ("disbursements", ""),
    ("party_coordinated_expenditures_made", ""),
    ("contributions_to_committees", ""),
    ("independent_expenditures_made", ""),
    ("nonfederal_expenditure_share", ""),
    ("debts", ""),
)


def _org(
    key: str,
    title: str,
    cycles: Mapping[str, str] | None,
    *,
    limit: bool = True,
) -> EndpointBuilder:
    b = EndpointBuilder(key, title).entity_param("Organization")
    if cycles is not None:
        b.cycle_param(cycles)
    if limit:
        b.limit_param()
    return b


def _breakdown(b: EndpointBuilder, discriminator: str, label: str) -> EndpointBuilder:
    return (
        b.field(discriminator, label=label)
        .field("count", label="Number of contributions")
        .field("amount", label="Total", format=FieldFormat.CURRENCY)
    )


def _bills(b: EndpointBuilder) -> EndpointBuilder:
    return (
        b.field("bill_name", label="Bill Number")
        .field("title", label="Bill Title")
        .field("congress_no", label="Congress")
        .field("count", label="Number of Records")
    )


def _regulations(b: EndpointBuilder, count_label: str) -> EndpointBuilder:
    return (
        b.field("agency")
        .field("docket")
        .field("title")
        .field("year")
        .field("count", label=count_label)
    )


def build_organization_endpoints(cycles: Mapping[str, str]) -> list[EndpointSpec]:
    recipients = (
        _org("organization_recipients", "Organization - Top Recipients", cycles)
        .uri("/aggregates/org/:entity_id/recipients.json")
        .help_text("Top politicians receiving contributions from an organization.")
        .field("name", label="Recipient Name")
        .field("party", getter=lookup(PARTIES))
    )
    summary_fields(recipients, ("employee", "direct", "total"), **_SUMMARY_LABELS)

    pac_recipients = (
        _org("organization_pac_recipients", "Organization - PAC Recipients", cycles)
        .uri("/aggregates/org/:entity_id/recipient_pacs.json")
        .help_text("Top PACs receiving contributions from an organization.")
        .field("name", label="Organization Name", getter=titleize)
    )
    summary_fields(pac_recipients, ("employee", "direct", "total"), **_SUMMARY_LABELS)

    party_breakdown = _breakdown(
        _org("organization_party_breakdown", "Organization - Party Breakdown", cycles, limit=False)
        .uri("/aggregates/org/:entity_id/recipients/party_breakdown.json")
        .help_text("Amounts contributed to each party by an organization.")
        .before_filter(pivot_breakdown(PARTY_BREAKDOWN_KEYS, discriminator="party")),
        "party",
        "Party",
    )

    level_breakdown = _breakdown(
        _org("organization_level_breakdown", "Organization - Level Breakdown", cycles, limit=False)
        .uri("/aggregates/org/:entity_id/recipients/level_breakdown.json")
        .help_text(
            "Amounts contributed to state vs federal levels by an organization. "
            "Rows carry `level` (Federal or State) in place of `party`."
        )
        .before_filter(pivot_breakdown(LEVEL_BREAKDOWN_KEYS, discriminator="level")),
        "level",
        "Level",
    )

    registrants = (
        _org("organization_registrants", "Organization - Lobbying Registrants", cycles)
        .uri("/aggregates/org/:entity_id/registrants.json")
        .help_text("Lobbying firms hired by an organization")
        .field("registrant_name")
        .count_field("count", label="Number of Records")
    )

    issues = (
        _org("organization_issues", "Organization - Issues", cycles)
        .uri("/aggregates/org/:entity_id/issues.json")
        .help_text("Issues an organization has hired lobbyists for.")
        .field("issue")
        .count_field("count", label="Number of Records")
    )

    bills = _bills(
        _org("organization_bills", "Organization - Bills", cycles)
        .uri("/aggregates/org/:entity_id/bills.json")
        .help_text("Bills an organization has lobbied on.")
    )

    lobbyists = (
        _org("organization_lobbyists", "Organization - Lobbyists", cycles)
        .uri("/aggregates/org/:entity_id/lobbyists.json")
        .help_text("Lobbyists hired by an organization.")
        .field("lobbyist_name", getter=titleize)
        .field("count", label="Number of Records")
    )

    registrant_clients = (
        _org(
            "organization_registrant_clients",
            "Organization - Registrant Clients",
            cycles,
            limit=False,
        )
        .uri("/aggregates/org/:entity_id/registrant/clients.json")
        .help_text(
            "Clients that hired an organization to lobby, if organization is a "
            "lobbying firm."
        )
        .field("client_name", getter=titleize)
        .field("count", label="Number of Records")
        .currency_field("amount")
    )

    registrant_issues = (
        _org("organization_registrant_issues", "Organization - Registrant Issues", cycles)
        .uri("/aggregates/org/:entity_id/registrant/issues.json")
        .help_text(
            "Issues an organization has lobbied on, if organization is a lobbying firm."
        )
        .field("issue")
        .count_field("count", label="Number of Records")
    )

    registrant_bills = _bills(
        _org("organization_registrant_bills", "Organization - Registrant Bills", cycles)
        .uri("/aggregates/org/:entity_id/registrant/bills.json")
        .help_text(
            "Bills an organization has lobbied on, if organization is a lobbying firm."
        )
    )

    registrant_lobbyists = (
        _org(
            "organization_registrant_lobbyists",
            "Organization - Registrant Lobbyists",
            cycles,
        )
        .uri("/aggregates/org/:entity_id/registrant/lobbyists.json")
        .help_text("Lobbyists employed by an organization.")
        .field("lobbyist_name", getter=titleize)
        .field("count", label="Number of Records")
    )

    regs_matches = _regulations(
        _org("organization_regs_matches", "Organization - Mentions in Regulations", cycles)
        .uri("/aggregates/org/:entity_id/regulations_text.json")
        .help_text("Regulatory dockets that most frequently mention an organization."),
        "Mentions",
    )

    regs_submissions = _regulations(
        _org(
            "organization_regs_submissions",
            "Organization - Regulations Submissions",
            cycles,
        )
        .uri("/aggregates/org/:entity_id/regulations_submitter.json")
        .help_text("Regulatory dockets with the most submissions from an organization."),
        "Submissions",
    )

    faca_memberships = (
        _org("organization_faca_memberships", "Organization - FACA Memberships", cycles)
        .uri("/aggregates/org/:entity_id/faca.json")
        .help_text(
            "Employee memberships on federal advisory committees for an organization."
        )
        .field("agency_name")
        .field("member_count", label="Employees on a Committee")
        .field("committee_count", label="Committees Served on")
    )

    fec_summary = (
        _org("organization_fec_summary", "Organization - FEC Summary", None, limit=False)
        .uri("/aggregates/org/:entity_id/fec_summary.json")
        .help_text("Latest figures for an organization from the FEC's summary report.")
        .before_filter(wrap_object)
    )
    for source_key, label in _FEC_SUMMARY_AMOUNTS:
        fec_summary.currency_field(source_key, label=label)

    return [
        b.build()
        for b in (
            recipients,
            pac_recipients,
            party_breakdown,
            level_breakdown,
            registrants,
            issues,
            bills,
            lobbyists,
            registrant_clients,
            registrant_issues,
            registrant_bills,
            registrant_lobbyists,
            regs_matches,
            regs_submissions,
            faca_memberships,
            fec_summary,
        )
    ]
