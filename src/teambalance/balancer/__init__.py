"""Balancing step built on top of an external reasoning service."""

from .client import AnthropicBalancer, TeamBalancer
from .request import BalanceRequest, build_balance_request
from .service import generate_teams, generate_teams_for_signups, validate_response

__all__ = [
    "AnthropicBalancer",
    "BalanceRequest",
    "TeamBalancer",
    "build_balance_request",
    "generate_teams",
    "generate_teams_for_signups",
    "validate_response",
]
