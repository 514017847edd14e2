"""Compile persisted rule records into typed balancing constraints."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Dict, Iterable, Mapping, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, Field

from teambalance.models import Player


logger = logging.getLogger(__name__)


class RuleRecord(BaseModel):
    """Rule row scoped to a group and/or a single match."""

    rule_type: str
    data: Dict[str, Any] = Field(default_factory=dict)
    group_id: Optional[str] = None
    match_id: Optional[str] = None
    is_active: bool = True


@dataclass(frozen=True)
class AvoidPair:
    kind: ClassVar[str] = "avoid_pair"
    player_ids: Tuple[str, str]


@dataclass(frozen=True)
class ForcePair:
    kind: ClassVar[str] = "force_pair"
    player_ids: Tuple[str, str]


@dataclass(frozen=True)
class MinGoalkeepers:
    kind: ClassVar[str] = "min_goalkeepers"
    min_count: int


@dataclass(frozen=True)
class MinDefenders:
    kind: ClassVar[str] = "min_defenders"
    min_count: int


@dataclass(frozen=True)
class BalanceRating:
    kind: ClassVar[str] = "balance_rating"
    max_difference: Optional[float] = None


Rule = Union[AvoidPair, ForcePair, MinGoalkeepers, MinDefenders, BalanceRating]
PairRule = Union[AvoidPair, ForcePair]


@dataclass(frozen=True)
class RuleSet:
    rules: Tuple[Rule, ...] = ()
    warnings: Tuple[str, ...] = field(default_factory=tuple)

    def pair_rules(self) -> Tuple[PairRule, ...]:
        return tuple(rule for rule in self.rules if isinstance(rule, (AvoidPair, ForcePair)))


def _pair_ids(data: Mapping[str, Any]) -> Tuple[str, str]:
    if "player_ids" in data:
        raw = data.get("player_ids") or []
        if not isinstance(raw, (list, tuple)):
            raise ValueError("player_ids must be a list")
        ids = list(raw)
    else:
        ids = [data.get("player_id_a"), data.get("player_id_b")]
    if len(ids) != 2 or not all(isinstance(pid, str) and pid for pid in ids):
        raise ValueError("expected exactly two player ids")
    if ids[0] == ids[1]:
        raise ValueError("a player cannot be paired with themselves")
    first, second = sorted(ids)
    return first, second


def _min_count(data: Mapping[str, Any]) -> int:
    raw = data.get("min_count", data.get("value"))
    if isinstance(raw, bool) or raw is None:
        raise ValueError("min_count is required")
    if isinstance(raw, float) and raw.is_integer():
        raw = int(raw)
    if not isinstance(raw, int) or raw < 1:
        raise ValueError(f"min_count must be a positive integer, got {raw!r}")
    return raw


def _max_difference(data: Mapping[str, Any]) -> Optional[float]:
    raw = data.get("max_difference", data.get("value"))
    if raw is None:
        return None
    if isinstance(raw, bool) or not isinstance(raw, (int, float)) or raw < 0:
        raise ValueError(f"max_difference must be a non-negative number, got {raw!r}")
    return float(raw)


_COMPILERS: Dict[str, Callable[[Mapping[str, Any]], Rule]] = {
    AvoidPair.kind: lambda data: AvoidPair(player_ids=_pair_ids(data)),
    ForcePair.kind: lambda data: ForcePair(player_ids=_pair_ids(data)),
    MinGoalkeepers.kind: lambda data: MinGoalkeepers(min_count=_min_count(data)),
    MinDefenders.kind: lambda data: MinDefenders(min_count=_min_count(data)),
    BalanceRating.kind: lambda data: BalanceRating(max_difference=_max_difference(data)),
}

SUPPORTED_RULE_TYPES: Tuple[str, ...] = tuple(_COMPILERS)


def compile_rules(records: Iterable[RuleRecord], roster: Sequence[Player]) -> RuleSet:
    """Return the constraints that apply to ``roster``.

    Group and match scoped records are treated as one flat list. Pair rules that
    mention a player outside the roster are dropped without a warning; unknown
    rule types and malformed payloads are dropped with one.
    """

    roster_ids = {player.id for player in roster}
    rules: list[Rule] = []
    warnings: list[str] = []

    for record in records:
        if not record.is_active:
            continue
        compiler = _COMPILERS.get(record.rule_type)
        if compiler is None:
            message = f"Ignored unsupported rule type {record.rule_type!r}"
            logger.warning(message)
            warnings.append(message)
            continue
        try:
            rule = compiler(record.data)
        except ValueError as exc:
            message = f"Ignored malformed {record.rule_type} rule: {exc}"
            logger.warning(message)
            warnings.append(message)
            continue
        if isinstance(rule, (AvoidPair, ForcePair)):
            missing = [pid for pid in rule.player_ids if pid not in roster_ids]
            if missing:
                logger.info("Skipping %s rule for players not in roster: %s", rule.kind, ", ".join(missing))
                continue
        if rule in rules:
            continue
        rules.append(rule)

    logger.info("Compiled %s rules (%s ignored with warnings)", len(rules), len(warnings))
    return RuleSet(rules=tuple(rules), warnings=tuple(warnings))
