"""Descriptive statistics for generated squads."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from statistics import fmean
from typing import Dict, Sequence

from teambalance.models import GeneratedTeams, Player, TeamAssignment

MAX_RATING = 5.0


@dataclass(frozen=True)
class TeamMetrics:
    """Aggregate stats for one squad."""

    average_rating: float
    position_coverage: Dict[str, int]
    left_footed: int
    right_footed: int
    player_count: int


@dataclass(frozen=True)
class BalanceReport:
    dark: TeamMetrics
    light: TeamMetrics
    rating_gap: float
    estimated_balance: float


def calculate_team_metrics(squad: Sequence[TeamAssignment], roster: Sequence[Player]) -> TeamMetrics:
    """Summarize a squad; assignments for players missing from the roster are skipped."""

    players = {player.id: player for player in roster}
    members = [(assignment, players[assignment.player_id]) for assignment in squad if assignment.player_id in players]

    coverage = Counter(assignment.position for assignment, _ in members)
    ratings = [player.overall_rating for _, player in members]
    return TeamMetrics(
        average_rating=fmean(ratings) if ratings else 0.0,
        position_coverage=dict(coverage),
        left_footed=sum(1 for _, player in members if player.footedness == "left"),
        right_footed=sum(1 for _, player in members if player.footedness == "right"),
        player_count=len(members),
    )


def compare_squads(teams: GeneratedTeams, roster: Sequence[Player]) -> BalanceReport:
    """Independent balance estimate to set against the engine's own score."""

    dark = calculate_team_metrics(teams.dark, roster)
    light = calculate_team_metrics(teams.light, roster)
    gap = abs(dark.average_rating - light.average_rating)
    return BalanceReport(
        dark=dark,
        light=light,
        rating_gap=gap,
        estimated_balance=max(0.0, 1.0 - gap / MAX_RATING),
    )


__all__ = ["BalanceReport", "TeamMetrics", "calculate_team_metrics", "compare_squads"]
