"""Lightweight REST client for the teambalance API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the teambalance REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("input", type=Path, nargs="?", help='JSON file with "signups" and "rules"')
    parser.add_argument("--health", action="store_true", help="Check service health and exit")
    parser.add_argument("--timeout", type=float, default=90.0, help="Request timeout in seconds")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url, timeout=args.timeout) as client:
        if args.health:
            resp = client.get("/health")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
            return

        if args.input is None:
            raise SystemExit("input file is required unless using --health")
        try:
            payload = json.loads(args.input.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise SystemExit(f"Invalid input JSON: {exc}") from exc

        resp = client.post("/teams/generate", json=payload)
        if resp.status_code >= 400:
            raise SystemExit(f"HTTP {resp.status_code}: {resp.json().get('detail')}")
        body = resp.json()
        teams = body["teams"]
        print(f"Dark: {len(teams['dark'])} players, light: {len(teams['light'])} players")
        print(f"Balance score: {teams['balanceScore']:.2f}")
        print(json.dumps(body["metrics"], indent=2))
        for warning in teams["warnings"]:
            print(f"warning: {warning}")


if __name__ == "__main__":
    main()
