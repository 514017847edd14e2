"""Pydantic models for API I/O."""

from .teams import (
    AssignmentRowResponse,
    BalanceReportResponse,
    GenerateTeamsRequest,
    GenerateTeamsResponse,
    TeamMetricsResponse,
)

__all__ = [
    "AssignmentRowResponse",
    "BalanceReportResponse",
    "GenerateTeamsRequest",
    "GenerateTeamsResponse",
    "TeamMetricsResponse",
]
