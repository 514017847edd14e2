"""Squad assignment models returned by the balancing engine."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict

from teambalance.config.positions import PositionCode


class TeamAssignment(BaseModel):
    player_id: str = Field(..., min_length=1)
    position: PositionCode
    reason: str = ""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class GeneratedTeams(BaseModel):
    """Validated partition of a roster into the dark and light squads."""

    dark: List[TeamAssignment]
    light: List[TeamAssignment]
    reasoning: str = ""
    balance_score: float = Field(..., ge=0.0, le=1.0)
    warnings: List[str] = Field(default_factory=list)
    unassigned_player_ids: List[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    def assigned_ids(self) -> list[str]:
        return [assignment.player_id for assignment in (*self.dark, *self.light)]
