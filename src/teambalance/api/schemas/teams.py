from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, Field

from teambalance.ingest import RuleRecord, SignupRecord
from teambalance.models import GeneratedTeams


class GenerateTeamsRequest(BaseModel):
    signups: List[SignupRecord]
    rules: List[RuleRecord] = Field(default_factory=list)


class TeamMetricsResponse(BaseModel):
    average_rating: float
    position_coverage: Dict[str, int]
    left_footed: int
    right_footed: int
    player_count: int


class BalanceReportResponse(BaseModel):
    dark: TeamMetricsResponse
    light: TeamMetricsResponse
    rating_gap: float
    estimated_balance: float


class AssignmentRowResponse(BaseModel):
    team: str
    player_id: str | None
    guest_player_id: str | None
    position: str
    order_index: int
    source: str


class GenerateTeamsResponse(BaseModel):
    teams: GeneratedTeams
    metrics: BalanceReportResponse
    assignments: List[AssignmentRowResponse]
    snapshot: Dict[str, Any]
    excluded_player_ids: List[str] = Field(default_factory=list)
