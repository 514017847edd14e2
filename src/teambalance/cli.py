"""Command-line interface for generating balanced teams from a signup file."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ValidationError

from teambalance.api.schemas import GenerateTeamsRequest
from teambalance.balancer import AnthropicBalancer, build_balance_request, generate_teams_for_signups
from teambalance.config import EngineSettings
from teambalance.errors import TeamBalanceError
from teambalance.ingest import compile_rules, normalize_roster
from teambalance.metrics import compare_squads


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Split confirmed players into balanced dark/light teams")
    parser.add_argument("input", type=Path, help='JSON file with "signups" and optional "rules"')
    parser.add_argument(
        "--print-request",
        action="store_true",
        help="Print the prompt that would be sent and exit without calling the service",
    )
    parser.add_argument("--output", type=Path, default=None, help="Write the generated teams JSON here")
    parser.add_argument("--verbose", action="store_true", help="Enable INFO logging")
    return parser.parse_args(argv)


def _load_request(path: Path) -> GenerateTeamsRequest:
    try:
        return GenerateTeamsRequest.model_validate_json(path.read_text(encoding="utf-8"))
    except (OSError, ValidationError) as exc:
        raise SystemExit(f"Invalid input file {path}: {exc}") from exc


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    payload = _load_request(args.input)

    if args.print_request:
        try:
            roster = normalize_roster(payload.signups)
        except TeamBalanceError as exc:
            raise SystemExit(str(exc)) from exc
        rule_set = compile_rules(payload.rules, roster)
        print(build_balance_request(roster, rule_set.rules).prompt)
        return

    balancer = AnthropicBalancer(EngineSettings.from_env())
    try:
        roster, teams = asyncio.run(generate_teams_for_signups(payload.signups, payload.rules, balancer))
    except TeamBalanceError as exc:
        raise SystemExit(f"Team generation failed: {exc}") from exc

    report = compare_squads(teams, roster)
    output = teams.model_dump(by_alias=True)
    if args.output:
        args.output.write_text(json.dumps(output, indent=2), encoding="utf-8")
        print(f"Teams written to {args.output}")
    else:
        print(json.dumps(output, indent=2))
    print(
        f"Dark avg {report.dark.average_rating:.2f} vs light avg {report.light.average_rating:.2f} "
        f"(engine score {teams.balance_score:.2f}, estimated {report.estimated_balance:.2f})"
    )
    for warning in teams.warnings:
        print(f"warning: {warning}")


if __name__ == "__main__":
    main()
