"""Deterministic prompt construction for the reasoning service."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Mapping, Sequence, Tuple

from teambalance.config.positions import (
    FOOTEDNESS_LABELS,
    GOALKEEPER_WILLINGNESS_LABELS,
    POSITION_CODES,
    get_formation,
    iter_formations,
)
from teambalance.ingest.rules import AvoidPair, BalanceRating, ForcePair, MinDefenders, MinGoalkeepers, Rule
from teambalance.models import Player


_INTRO = (
    "You are an expert football (soccer) team balancer for amateur small-sided matches. "
    "Your goal is to create two balanced teams that will have a competitive and fun match."
)

_TASK = """Create two balanced teams (Dark and Light) considering:
1. **Overall Rating Balance**: The average rating of both teams should be as close as possible
2. **Position Coverage**: Each team needs players who can play key positions (especially GK and defense)
3. **Complementary Skills**: Mix of attackers, midfielders, and defenders
4. **Footedness Distribution**: Balance left and right-footed players when possible
5. **Fitness Considerations**: Players with "limited" fitness should have lighter roles
6. **Player Preferences**: Respect goalkeeper willingness levels"""

_RESPONSE_FORMAT = """Respond with a single valid JSON object (no markdown, no code blocks, no text before or after it):

{
  "dark": [
    {"playerId": "player-id", "position": "GK", "reason": "Brief reason for this assignment"}
  ],
  "light": [
    {"playerId": "player-id", "position": "ST", "reason": "Brief reason for this assignment"}
  ],
  "reasoning": "2-3 sentences explaining the overall balance strategy",
  "balanceScore": 0.95,
  "warnings": ["Any concerns about the team balance"]
}

The balanceScore must be between 0 and 1, where 1 means perfectly balanced."""


@dataclass(frozen=True)
class BalanceRequest:
    """Everything the reasoning service needs for one balancing attempt."""

    prompt: str
    team_size: int
    roster_size: int
    player_ids: Tuple[str, ...]

    def to_messages(self) -> List[Dict[str, str]]:
        return [{"role": "user", "content": self.prompt}]


def _display_labels(roster: Sequence[Player]) -> Dict[str, str]:
    counts = Counter(player.display_name for player in roster)
    labels: Dict[str, str] = {}
    for index, player in enumerate(roster, start=1):
        if counts[player.display_name] > 1:
            labels[player.id] = f"{player.display_name} (#{index})"
        else:
            labels[player.id] = player.display_name
    return labels


def _describe_player(player: Player, label: str) -> str:
    nickname = f" ({player.nickname})" if player.nickname else ""
    willingness = GOALKEEPER_WILLINGNESS_LABELS[player.goalkeeper_willingness]
    lines = [
        f"- {label}{nickname} [ID: {player.id}]",
        f"  Rating: {player.overall_rating:.1f}/5 | Positions: {', '.join(player.positions())}"
        f" | {FOOTEDNESS_LABELS[player.footedness]}",
        f"  GK willingness: {willingness} | Fitness: {player.fitness_status}",
        f"  Stats: {player.matches_played} matches, {player.goals} goals, {player.assists} assists,"
        f" reliability {player.reliability_score:.0f}",
    ]
    if player.is_guest:
        lines.append("  (Guest player - less known)")
    return "\n".join(lines)


def _describe_rule(rule: Rule, labels: Mapping[str, str]) -> str:
    if isinstance(rule, AvoidPair):
        first, second = (labels[pid] for pid in rule.player_ids)
        return f"- AVOID putting {first} and {second} on the same team"
    if isinstance(rule, ForcePair):
        first, second = (labels[pid] for pid in rule.player_ids)
        return f"- FORCE {first} and {second} to be on the same team"
    if isinstance(rule, MinGoalkeepers):
        return f"- Each team must have at least {rule.min_count} player(s) willing to play goalkeeper"
    if isinstance(rule, MinDefenders):
        return f"- Each team must have at least {rule.min_count} defender(s) (CB, LB or RB)"
    if isinstance(rule, BalanceRating):
        if rule.max_difference is None:
            return "- Treat overall rating balance as the top priority"
        return (
            "- Keep the difference between the two teams' average ratings at or below "
            f"{rule.max_difference:.2f}"
        )
    raise TypeError(f"Unsupported rule {rule!r}")


def _formation_guidance(team_size: int) -> str:
    guide = get_formation(team_size)
    if guide is not None:
        return f"For {team_size}-a-side, use {' or '.join(guide.formations)} (GK + field players)."
    lines = [f"For {team_size} players per side, adapt the closest typical formation:"]
    for known in iter_formations():
        lines.append(f"- {known.players_per_side} players: {' or '.join(known.formations)}")
    return "\n".join(lines)


def _squad_split(roster_size: int, team_size: int) -> str:
    if roster_size % 2 == 0:
        return f"Include ALL {roster_size} players, {team_size} per team."
    return (
        f"Include ALL {roster_size} players. One team gets {team_size} players and the other "
        f"{team_size + 1}; give the extra player to the team with the lower total rating."
    )


def build_balance_request(roster: Sequence[Player], rules: Sequence[Rule] = ()) -> BalanceRequest:
    """Render roster and rules into a prompt; identical inputs give identical output."""

    roster_size = len(roster)
    team_size = roster_size // 2
    labels = _display_labels(roster)

    players_section = "\n".join(_describe_player(player, labels[player.id]) for player in roster)
    # pair rules naming someone outside the roster cannot constrain this split
    active_rules = [
        rule
        for rule in rules
        if not isinstance(rule, (AvoidPair, ForcePair)) or all(pid in labels for pid in rule.player_ids)
    ]
    rules_section = (
        "\n".join(_describe_rule(rule, labels) for rule in active_rules) if active_rules else "No special rules"
    )

    sections = [
        _INTRO,
        f"## Players Available ({roster_size} total, {team_size} per team)",
        players_section,
        "## Rules to Follow",
        rules_section,
        "## Formation Context",
        _formation_guidance(team_size),
        "## Your Task",
        _TASK,
        "## Response Format",
        _RESPONSE_FORMAT,
        _squad_split(roster_size, team_size),
        f"Use only these position codes: {', '.join(POSITION_CODES)}",
    ]
    return BalanceRequest(
        prompt="\n\n".join(sections),
        team_size=team_size,
        roster_size=roster_size,
        player_ids=tuple(player.id for player in roster),
    )
