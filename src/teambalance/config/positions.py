"""Position vocabulary and formation guidance for small-sided matches."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Literal, Mapping, Tuple

PositionCode = Literal["GK", "CB", "LB", "RB", "CDM", "CM", "CAM", "LM", "RM", "LW", "RW", "ST", "CF"]

POSITION_CODES: Tuple[str, ...] = (
    "GK", "CB", "LB", "RB", "CDM", "CM", "CAM", "LM", "RM", "LW", "RW", "ST", "CF",
)

POSITION_DESCRIPTIONS: Mapping[str, str] = {
    "GK": "Goalkeeper - last line of defense",
    "CB": "Center Back - central defender",
    "LB": "Left Back - left side defender",
    "RB": "Right Back - right side defender",
    "CDM": "Defensive Midfielder - shields defense",
    "CM": "Central Midfielder - box-to-box player",
    "CAM": "Attacking Midfielder - creative playmaker",
    "LM": "Left Midfielder - left side midfield",
    "RM": "Right Midfielder - right side midfield",
    "LW": "Left Winger - left attacking flank",
    "RW": "Right Winger - right attacking flank",
    "ST": "Striker - main goal scorer",
    "CF": "Center Forward - target man",
}

DEFENDER_CODES = frozenset({"CB", "LB", "RB"})

GOALKEEPER_WILLINGNESS_LABELS: Tuple[str, ...] = ("never", "only if needed", "can do it", "loves it")

FOOTEDNESS_LABELS: Mapping[str, str] = {
    "left": "left-footed",
    "right": "right-footed",
    "both": "ambidextrous",
}


@dataclass(frozen=True)
class FormationGuide:
    players_per_side: int
    formations: Tuple[str, ...]


_FORMATIONS: Dict[int, FormationGuide] = {
    7: FormationGuide(players_per_side=7, formations=("1-2-3-1", "1-3-2-1")),
    6: FormationGuide(players_per_side=6, formations=("1-2-2-1", "1-3-1-1")),
    5: FormationGuide(players_per_side=5, formations=("1-2-1-1", "1-1-2-1")),
}


def iter_formations() -> Iterable[FormationGuide]:
    """Return every configured formation guide, largest side first."""

    return (_FORMATIONS[size] for size in sorted(_FORMATIONS, reverse=True))


def get_formation(players_per_side: int) -> FormationGuide | None:
    """Fetch the formation guide for a side size, or None when unconfigured."""

    return _FORMATIONS.get(players_per_side)


def is_position_code(value: str) -> bool:
    return value in POSITION_DESCRIPTIONS
