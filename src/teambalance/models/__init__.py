"""Domain models for rosters and generated squads."""

from .player import FitnessStatus, Footedness, Player
from .teams import GeneratedTeams, TeamAssignment

__all__ = ["FitnessStatus", "Footedness", "GeneratedTeams", "Player", "TeamAssignment"]
