"""Configuration helpers for positions, formations and engine settings."""

from .positions import (
    DEFENDER_CODES,
    POSITION_CODES,
    POSITION_DESCRIPTIONS,
    FormationGuide,
    PositionCode,
    get_formation,
    is_position_code,
    iter_formations,
)
from .settings import EngineSettings

__all__ = [
    "DEFENDER_CODES",
    "POSITION_CODES",
    "POSITION_DESCRIPTIONS",
    "EngineSettings",
    "FormationGuide",
    "PositionCode",
    "get_formation",
    "is_position_code",
    "iter_formations",
]
