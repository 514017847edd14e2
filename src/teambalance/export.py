"""Helpers that shape generated teams for the persistence layer."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional, Sequence

from teambalance.models import GeneratedTeams, Player


class AssignmentExportError(RuntimeError):
    """Raised when an assignment cannot be mapped back to a roster player."""


@dataclass(frozen=True)
class AssignmentRow:
    """One squad member row, keyed by either a profile id or a guest id."""

    team: str
    player_id: Optional[str]
    guest_player_id: Optional[str]
    position: str
    order_index: int
    source: str = "ai"


def assignment_rows(teams: GeneratedTeams, roster: Sequence[Player]) -> list[AssignmentRow]:
    """Map each assignment to a row, preserving the order within its squad."""

    players = {player.id: player for player in roster}
    rows: list[AssignmentRow] = []
    for team, squad in (("dark", teams.dark), ("light", teams.light)):
        for index, assignment in enumerate(squad):
            player = players.get(assignment.player_id)
            if player is None:
                raise AssignmentExportError(f"Player {assignment.player_id} is not part of the roster")
            rows.append(
                AssignmentRow(
                    team=team,
                    player_id=None if player.is_guest else player.id,
                    guest_player_id=player.id if player.is_guest else None,
                    position=assignment.position,
                    order_index=index,
                )
            )
    return rows


def build_snapshot(
    roster: Sequence[Player],
    teams: GeneratedTeams,
    *,
    generated_at: Optional[datetime] = None,
) -> dict[str, Any]:
    """Record of what the balancing step saw and answered, stored with the match."""

    timestamp = generated_at or datetime.now(timezone.utc)
    return {
        "players": [
            {"id": player.id, "name": player.display_name, "rating": player.overall_rating}
            for player in roster
        ],
        "reasoning": teams.reasoning,
        "balanceScore": teams.balance_score,
        "warnings": list(teams.warnings),
        "generatedAt": timestamp.isoformat(),
    }


__all__ = ["AssignmentExportError", "AssignmentRow", "assignment_rows", "build_snapshot"]
