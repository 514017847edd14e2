"""REST API exposing team generation."""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Optional

from fastapi import FastAPI, HTTPException

from teambalance.api.schemas import (
    AssignmentRowResponse,
    BalanceReportResponse,
    GenerateTeamsRequest,
    GenerateTeamsResponse,
)
from teambalance.balancer import AnthropicBalancer, TeamBalancer, generate_teams_for_signups
from teambalance.config import EngineSettings
from teambalance.errors import (
    EngineUnavailableError,
    InconsistentAssignmentError,
    InvalidRosterError,
    MalformedResponseError,
)
from teambalance.export import assignment_rows, build_snapshot
from teambalance.ingest import SignupRecord
from teambalance.metrics import compare_squads


logger = logging.getLogger(__name__)


def _split_injured(signups: list[SignupRecord]) -> tuple[list[SignupRecord], list[str]]:
    active: list[SignupRecord] = []
    excluded: list[str] = []
    for signup in signups:
        profile = signup.player_profile
        if profile is not None and profile.fitness_status == "injured":
            excluded.append(profile.id)
            continue
        active.append(signup)
    if excluded:
        logger.info("Excluding %s injured player(s) from balancing", len(excluded))
    return active, excluded


def create_app(balancer: Optional[TeamBalancer] = None) -> FastAPI:
    app = FastAPI(title="teambalance")
    app.state.balancer = balancer or AnthropicBalancer(EngineSettings.from_env())

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/teams/generate", response_model=GenerateTeamsResponse)
    async def generate(payload: GenerateTeamsRequest) -> GenerateTeamsResponse:
        signups, excluded = _split_injured(payload.signups)
        try:
            roster, teams = await generate_teams_for_signups(signups, payload.rules, app.state.balancer)
        except InvalidRosterError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except EngineUnavailableError as exc:
            logger.warning("Team generation unavailable: %s", exc)
            raise HTTPException(status_code=503, detail="Team generation is unavailable, try again") from exc
        except (MalformedResponseError, InconsistentAssignmentError) as exc:
            logger.warning("Team generation produced an unusable result: %s", exc)
            raise HTTPException(status_code=502, detail="Team generation failed, try again") from exc

        report = compare_squads(teams, roster)
        return GenerateTeamsResponse(
            teams=teams,
            metrics=BalanceReportResponse.model_validate(asdict(report)),
            assignments=[AssignmentRowResponse.model_validate(asdict(row)) for row in assignment_rows(teams, roster)],
            snapshot=build_snapshot(roster, teams),
            excluded_player_ids=excluded,
        )

    return app


__all__ = ["create_app"]
