"""Canonical player model shared across ingestion and balancing layers."""

from __future__ import annotations

from typing import Literal, Optional, Tuple

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from teambalance.config.positions import PositionCode

Footedness = Literal["left", "right", "both"]
FitnessStatus = Literal["ok", "limited", "injured"]


class Player(BaseModel):
    """Normalized roster entry for registered and guest players alike."""

    id: str = Field(..., min_length=1)
    display_name: str
    nickname: Optional[str] = None
    main_position: PositionCode
    preferred_positions: Tuple[PositionCode, ...] = ()
    overall_rating: float = Field(..., ge=0.0, le=5.0)
    footedness: Footedness = "right"
    goalkeeper_willingness: int = Field(default=1, ge=0, le=3)
    fitness_status: FitnessStatus = "ok"
    reliability_score: float = Field(default=50.0, ge=0.0)
    matches_played: int = Field(default=0, ge=0)
    goals: int = Field(default=0, ge=0)
    assists: int = Field(default=0, ge=0)
    is_guest: bool = False

    model_config = ConfigDict(frozen=True)

    def positions(self) -> Tuple[str, ...]:
        """Main position first, then preferred positions without repeats."""

        ordered = [self.main_position]
        for code in self.preferred_positions:
            if code not in ordered:
                ordered.append(code)
        return tuple(ordered)
