"""Balancing engine: request the split, then validate and repair the reply."""

from __future__ import annotations

from collections import Counter
import json
import logging
import math
from typing import Iterable, List, Mapping, Optional, Sequence

from pydantic import BaseModel, Field, ValidationError
from pydantic.config import ConfigDict

from teambalance.balancer.client import TeamBalancer
from teambalance.balancer.request import build_balance_request
from teambalance.config.positions import DEFENDER_CODES, is_position_code
from teambalance.errors import InconsistentAssignmentError, MalformedResponseError
from teambalance.ingest.roster import SignupRecord, ensure_playable_roster, normalize_roster
from teambalance.ingest.rules import (
    AvoidPair,
    ForcePair,
    MinDefenders,
    MinGoalkeepers,
    RuleRecord,
    RuleSet,
    compile_rules,
)
from teambalance.models import GeneratedTeams, Player, TeamAssignment


logger = logging.getLogger(__name__)

_RAW_LOG_LIMIT = 500


class _RawAssignment(BaseModel):
    player_id: str = Field(..., alias="playerId")
    position: Optional[str] = None
    reason: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class _RawTeams(BaseModel):
    dark: List[_RawAssignment]
    light: List[_RawAssignment]
    reasoning: Optional[str] = None
    balance_score: float = Field(..., alias="balanceScore")
    warnings: Optional[List[str]] = None

    model_config = ConfigDict(populate_by_name=True)


def _parse_payload(raw_text: str) -> _RawTeams:
    try:
        data = json.loads(raw_text)
    except (TypeError, json.JSONDecodeError) as exc:
        logger.error("Failed to parse reasoning service response: %.*s", _RAW_LOG_LIMIT, raw_text)
        raise MalformedResponseError("Reasoning service reply is not valid JSON", raw_text) from exc
    if not isinstance(data, dict):
        raise MalformedResponseError("Reasoning service reply is not a JSON object", raw_text)
    try:
        return _RawTeams.model_validate(data)
    except ValidationError as exc:
        logger.error("Reasoning service reply has an unexpected shape: %s", exc)
        raise MalformedResponseError(f"Invalid team structure in response: {exc}", raw_text) from exc


def _check_duplicates(payload: _RawTeams) -> None:
    counts = Counter(item.player_id for item in (*payload.dark, *payload.light))
    repeated = tuple(sorted(pid for pid, count in counts.items() if count > 1))
    if repeated:
        raise InconsistentAssignmentError(
            f"Players assigned more than once: {', '.join(repeated)}", player_ids=repeated
        )


def _clean_squad(
    side: str,
    raw: Sequence[_RawAssignment],
    players: Mapping[str, Player],
    warnings: list[str],
) -> list[TeamAssignment]:
    squad: list[TeamAssignment] = []
    for item in raw:
        player = players.get(item.player_id)
        if player is None:
            warnings.append(f"Ignored {side} assignment for unknown player id {item.player_id!r}")
            continue
        position = (item.position or "").strip().upper()
        if not is_position_code(position):
            warnings.append(
                f"{player.display_name} had invalid position {item.position!r}; "
                f"using {player.main_position}"
            )
            position = player.main_position
        squad.append(TeamAssignment(player_id=player.id, position=position, reason=item.reason or ""))
    return squad


def _clamp_score(score: float, warnings: list[str]) -> float:
    if math.isnan(score):
        warnings.append("Balance score is not a number; using 0.0")
        return 0.0
    if score < 0.0 or score > 1.0:
        clamped = min(1.0, max(0.0, score))
        warnings.append(f"Balance score {score} outside [0, 1]; clamped to {clamped}")
        return clamped
    return score


def _rule_warnings(
    rules: RuleSet,
    dark: Sequence[TeamAssignment],
    light: Sequence[TeamAssignment],
    players: Mapping[str, Player],
) -> list[str]:
    side_of = {a.player_id: "dark" for a in dark}
    side_of.update({a.player_id: "light" for a in light})
    warnings: list[str] = []
    for rule in rules.pair_rules():
        first, second = rule.player_ids
        if first not in side_of or second not in side_of:
            continue
        names = f"{players[first].display_name} and {players[second].display_name}"
        same_side = side_of[first] == side_of[second]
        if isinstance(rule, AvoidPair) and same_side:
            warnings.append(f"Rule not respected: {names} were placed on the same team")
        elif isinstance(rule, ForcePair) and not same_side:
            warnings.append(f"Rule not respected: {names} were placed on different teams")

    for rule in rules.rules:
        for side, squad in (("dark", dark), ("light", light)):
            if isinstance(rule, MinGoalkeepers):
                # placed in goal, or willingness of "can do it" or better
                count = sum(
                    1
                    for a in squad
                    if a.position == "GK" or players[a.player_id].goalkeeper_willingness >= 2
                )
                if count < rule.min_count:
                    warnings.append(
                        f"Rule not respected: {side} has {count} willing goalkeeper(s), needs {rule.min_count}"
                    )
            elif isinstance(rule, MinDefenders):
                count = sum(1 for a in squad if a.position in DEFENDER_CODES)
                if count < rule.min_count:
                    warnings.append(
                        f"Rule not respected: {side} has {count} defender(s), needs {rule.min_count}"
                    )
    return warnings


def validate_response(
    raw_text: str,
    roster: Sequence[Player],
    rules: Optional[RuleSet] = None,
) -> GeneratedTeams:
    """Turn the service's raw reply into a GeneratedTeams for ``roster``.

    Unparseable or mis-shaped replies raise MalformedResponseError, players
    placed twice raise InconsistentAssignmentError. Everything else that can be
    repaired (unassigned players, unknown ids, bad position codes, out of range
    scores) is fixed and reported in ``warnings``.
    """

    rule_set = rules or RuleSet()
    payload = _parse_payload(raw_text)
    _check_duplicates(payload)

    players = {player.id: player for player in roster}
    local: list[str] = []
    dark = _clean_squad("dark", payload.dark, players, local)
    light = _clean_squad("light", payload.light, players, local)
    if not dark or not light:
        raise InconsistentAssignmentError(
            f"Both squads must be populated (dark={len(dark)}, light={len(light)})"
        )

    assigned = {a.player_id for a in (*dark, *light)}
    unassigned = [player for player in roster if player.id not in assigned]
    if unassigned:
        local.append(
            f"{len(unassigned)} player(s) were not assigned: "
            + ", ".join(player.display_name for player in unassigned)
        )

    score = _clamp_score(payload.balance_score, local)

    if abs(len(dark) - len(light)) > 1:
        local.append(f"Squads are uneven: dark has {len(dark)} players, light has {len(light)}")
    local.extend(_rule_warnings(rule_set, dark, light, players))

    warnings = [*(payload.warnings or []), *rule_set.warnings, *local]
    return GeneratedTeams(
        dark=dark,
        light=light,
        reasoning=payload.reasoning or "",
        balance_score=score,
        warnings=warnings,
        unassigned_player_ids=[player.id for player in unassigned],
    )


async def generate_teams(
    roster: Sequence[Player],
    rules: Optional[RuleSet],
    balancer: TeamBalancer,
) -> GeneratedTeams:
    """Split ``roster`` into dark and light squads using ``balancer``.

    The roster gate runs before any external call. Errors from the balancer and
    from validation propagate unchanged.
    """

    ensure_playable_roster(roster)
    rule_set = rules or RuleSet()
    request = build_balance_request(roster, rule_set.rules)
    raw_text = await balancer(request)
    result = validate_response(raw_text, roster, rule_set)
    logger.info(
        "Generated teams: dark=%s light=%s score=%.2f warnings=%s",
        len(result.dark),
        len(result.light),
        result.balance_score,
        len(result.warnings),
    )
    return result


async def generate_teams_for_signups(
    signups: Iterable[SignupRecord],
    rule_records: Iterable[RuleRecord],
    balancer: TeamBalancer,
) -> tuple[list[Player], GeneratedTeams]:
    """Normalize signups, compile rules and generate teams in one call."""

    roster = normalize_roster(signups)
    rule_set = compile_rules(rule_records, roster)
    teams = await generate_teams(roster, rule_set, balancer)
    return roster, teams
