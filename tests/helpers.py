from __future__ import annotations

import json
from typing import Any, Sequence

from teambalance.balancer.request import BalanceRequest
from teambalance.ingest.roster import GuestRecord, guest_to_player
from teambalance.models import Player


def make_player(player_id: str, name: str, rating: float, **overrides: Any) -> Player:
    data: dict[str, Any] = {
        "id": player_id,
        "display_name": name,
        "main_position": "CM",
        "overall_rating": rating,
    }
    data.update(overrides)
    return Player(**data)


def six_player_roster() -> list[Player]:
    return [
        make_player("p1", "Ana", 4.0, main_position="ST", preferred_positions=("CF",), footedness="left"),
        make_player("p2", "Bruno", 3.5, main_position="CB", preferred_positions=("CB", "RB")),
        make_player("p3", "Carla", 3.0, main_position="GK", goalkeeper_willingness=3),
        guest_to_player(GuestRecord(id="g1", display_name="Guest Gil")),
        make_player("p5", "Eva", 2.0, main_position="LB", footedness="left"),
        make_player("p6", "Fede", 1.5, main_position="CM", fitness_status="limited", footedness="both"),
    ]


def teams_reply(
    dark: Sequence[tuple[str, str]],
    light: Sequence[tuple[str, str]],
    *,
    score: Any = 0.9,
    warnings: Sequence[str] | None = None,
    reasoning: str = "Ratings are spread evenly.",
) -> str:
    payload: dict[str, Any] = {
        "dark": [{"playerId": pid, "position": pos, "reason": "fits"} for pid, pos in dark],
        "light": [{"playerId": pid, "position": pos, "reason": "fits"} for pid, pos in light],
        "reasoning": reasoning,
        "balanceScore": score,
        "warnings": list(warnings or []),
    }
    return json.dumps(payload)


BALANCED_SIX = teams_reply(
    dark=[("p1", "ST"), ("g1", "CM"), ("p5", "LB")],
    light=[("p2", "CB"), ("p3", "GK"), ("p6", "CM")],
)


class StubBalancer:
    """Deterministic stand-in for the reasoning service."""

    def __init__(self, reply: str | Exception):
        self.reply = reply
        self.calls: list[BalanceRequest] = []

    async def __call__(self, request: BalanceRequest) -> str:
        self.calls.append(request)
        if isinstance(self.reply, Exception):
            raise self.reply
        return self.reply
