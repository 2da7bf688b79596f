#!/usr/bin/env python
"""Query one Influence Explorer endpoint and print the normalized records."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Mapping
from typing import Any

import polars as pl

from influence_explorer.apps._cli import (
    add_dry_run_arg,
    add_format_arg,
    add_print_config_arg,
    collect_logging_overrides,
    log_dry_run,
    print_config,
    print_frame,
    print_json,
)
from influence_explorer.cli import (
    DEFAULT_LOGGING,
    add_config_arg,
    add_logging_args,
    build_config,
    parse_param_pairs,
    setup_logging_from_config,
)
from influence_explorer.endpoints import ENTITY_CYCLES_SINCE, get_registry
from influence_explorer.errors import InfluenceExplorerError
from influence_explorer.mapping.choices import (
    STATIC_CHOICES,
    crp_category_choices,
    election_cycles_since,
    ie_transaction_types,
)
from influence_explorer.mapping.client import IE_BASE_URL, InfluenceExplorerClient
from influence_explorer.mapping.frames import display_frame, records_to_frame
from influence_explorer.mapping.spec import EndpointSpec
from influence_explorer.mapping.transport import session_fetch
from influence_explorer.settings import (
    DEFAULT_API_KEY_ENV,
    api_key_available,
    load_settings,
)

DEFAULT_CONFIG: dict[str, Any] = {
    "logging": DEFAULT_LOGGING,
    "dry_run": False,
    "api": {
        "key_env": DEFAULT_API_KEY_ENV,
        "key": None,
        "base_url": IE_BASE_URL,
        "timeout_s": 30.0,
    },
    "endpoint": None,
    "params": {},
    "format": "table",
}

REMOTE_CHOICES: tuple[str, ...] = ("crp_categories", "ie_transaction_types")
CHOICE_NAMES: tuple[str, ...] = (*STATIC_CHOICES, *REMOTE_CHOICES, "cycles")


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Query Influence Explorer aggregates and print records."
    )
    add_config_arg(parser)
    add_logging_args(parser)
    add_print_config_arg(parser)
    add_dry_run_arg(parser)
    add_format_arg(parser)

    parser.add_argument(
        "--list",
        action="store_true",
        help="List registered endpoints and exit.",
    )
    parser.add_argument(
        "--choices",
        type=str,
        choices=CHOICE_NAMES,
        default=None,
        help="Print one choice table (code -> label) and exit.",
    )
    parser.add_argument("--endpoint", type=str, default=None)
    parser.add_argument(
        "--param",
        dest="params",
        action="append",
        default=None,
        metavar="NAME=VALUE",
        help="Endpoint parameter (repeatable).",
    )
    parser.add_argument("--api-key", type=str, default=None)
    parser.add_argument("--api-key-env", type=str, default=None)
    parser.add_argument("--base-url", type=str, default=None)
    parser.add_argument("--timeout", type=float, default=None)
    return parser.parse_args(argv)


def _build_overrides(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    api_cfg: dict[str, Any] = {}

    if args.endpoint is not None:
        overrides["endpoint"] = args.endpoint
    if args.params is not None:
        overrides["params"] = parse_param_pairs(args.params)
    if args.format is not None:
        overrides["format"] = args.format

    if args.api_key is not None:
        api_cfg["key"] = args.api_key
    if args.api_key_env is not None:
        api_cfg["key_env"] = args.api_key_env
    if args.base_url is not None:
        api_cfg["base_url"] = args.base_url
    if args.timeout is not None:
        api_cfg["timeout_s"] = args.timeout
    if api_cfg:
        overrides["api"] = api_cfg

    if args.dry_run:
        overrides["dry_run"] = True

    logging_overrides = collect_logging_overrides(args)
    if logging_overrides:
        overrides["logging"] = logging_overrides

    return overrides


def _string_params(params: Mapping[str, Any] | None) -> dict[str, str]:
    if not params:
        return {}
    if not isinstance(params, Mapping):
        raise ValueError("params must map parameter names to values.")
    return {str(k): str(v) for k, v in params.items() if v is not None}


def _missing_params(spec: EndpointSpec, params: Mapping[str, str]) -> list[str]:
    return [
        name
        for name in spec.template_params
        if name not in params and spec.param(name).default is None
    ]


def _list_endpoints(fmt: str) -> None:
    registry = get_registry()
    if fmt == "json":
        print_json(registry.catalog())
        return

    df = pl.DataFrame(
        {
            "key": list(registry.keys()),
            "title": [spec.title for spec in registry],
            "uri": [spec.uri_template for spec in registry],
        }
    )
    if fmt == "csv":
        print(df.write_csv(), end="")
    else:
        print_frame(df)


def _choice_table(name: str, timeout_s: float) -> dict[str, str]:
    if name in STATIC_CHOICES:
        return dict(STATIC_CHOICES[name])
    if name == "cycles":
        return election_cycles_since(ENTITY_CYCLES_SINCE)

    fetch = session_fetch(timeout_s=timeout_s)
    if name == "crp_categories":
        return crp_category_choices(fetch)
    return ie_transaction_types(fetch)


def _print_choices(choices: Mapping[str, str], fmt: str) -> None:
    if fmt == "json":
        print_json(dict(choices))
        return

    df = pl.DataFrame(
        {"code": list(choices.keys()), "label": list(choices.values())},
        schema={"code": pl.Utf8, "label": pl.Utf8},
    )
    if fmt == "csv":
        print(df.write_csv(), end="")
    else:
        print_frame(df)


def _run_query(
    client: InfluenceExplorerClient,
    spec: EndpointSpec,
    params: Mapping[str, str],
    fmt: str,
) -> int:
    records = client.query(spec.key, params)
    if fmt == "json":
        print_json(records)
    elif fmt == "csv":
        print(records_to_frame(records, spec.response).write_csv(), end="")
    else:
        print_frame(display_frame(records, spec.response))
    return len(records)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    config = build_config(DEFAULT_CONFIG, args.config, _build_overrides(args))
    if args.print_config:
        print_config(config)
        return

    setup_logging_from_config(config.get("logging"))
    logger = logging.getLogger(__name__)

    api_cfg = config.get("api", {})
    fmt = str(config.get("format") or "table")
    timeout_s = float(api_cfg.get("timeout_s", 30.0))

    try:
        if args.list:
            _list_endpoints(fmt)
            return
        if args.choices is not None:
            _print_choices(_choice_table(args.choices, timeout_s), fmt)
            return

        endpoint = config.get("endpoint")
        if not endpoint:
            raise ValueError("endpoint must be set (use --endpoint or config).")

        spec = get_registry().get(str(endpoint))
        params = _string_params(config.get("params"))
        base_url = api_cfg.get("base_url") or IE_BASE_URL
        key_env = api_cfg.get("key_env") or DEFAULT_API_KEY_ENV

        logger.info("Endpoint:   %s (%s)", spec.key, spec.title)
        logger.info("URI:        %s", spec.uri_template)
        logger.info("Base URL:   %s", base_url)
        logger.info("Format:     %s", fmt)

        if config.get("dry_run"):
            log_dry_run(
                logger,
                {
                    "action": "ie_query",
                    "endpoint": spec.key,
                    "uri": spec.uri_template,
                    "params": params,
                    "missing_params": _missing_params(spec, params),
                    "unknown_params": sorted(
                        set(params) - {p.name for p in spec.params}
                    ),
                    "base_url": base_url,
                    "format": fmt,
                    "api_key_env": key_env,
                    "api_key_present": api_key_available(
                        api_key=api_cfg.get("key"), api_key_env=key_env
                    ),
                },
            )
            return

        settings = load_settings(api_key=api_cfg.get("key"), api_key_env=key_env)
        client = InfluenceExplorerClient(
            api_key=settings.api_key,
            base_url=base_url,
            timeout_s=timeout_s,
        )
        count = _run_query(client, spec, params, fmt)
        logger.info("Printed %d records", count)
    except InfluenceExplorerError as e:
        logger.error("Query failed: %s", e)
        raise SystemExit(1) from e


if __name__ == "__main__":
    main()
