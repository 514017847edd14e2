"""Normalize confirmed match signups into a uniform player roster."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Iterable, List, Optional, Sequence

from pydantic import BaseModel, Field, ValidationError

from teambalance.errors import InvalidRosterError
from teambalance.models import Player


logger = logging.getLogger(__name__)

MIN_ROSTER_SIZE = 4
CONFIRMED_STATUS = "confirmed"

GUEST_MAIN_POSITION = "CM"
GUEST_PREFERRED_POSITIONS = ("CM", "ST", "CB")
GUEST_RATING = 2.5
GUEST_GOALKEEPER_WILLINGNESS = 1
GUEST_RELIABILITY = 50.0


class ProfileRecord(BaseModel):
    """Registered player profile as stored by the surrounding application."""

    id: str
    display_name: str
    nickname: Optional[str] = None
    main_position: str
    preferred_positions: Optional[List[str]] = None
    overall_rating: float
    footedness: str = "right"
    goalkeeper_willingness: int = 1
    fitness_status: str = "ok"
    reliability_score: float = GUEST_RELIABILITY
    matches_played: int = 0
    goals: int = 0
    assists: int = 0


class GuestRecord(BaseModel):
    id: str
    display_name: str
    notes: Optional[str] = None


class SignupRecord(BaseModel):
    """Confirmed signup referencing exactly one of a profile or a guest."""

    id: Optional[str] = None
    player_profile: Optional[ProfileRecord] = None
    guest_player: Optional[GuestRecord] = None
    status: str = Field(default=CONFIRMED_STATUS)

    def label(self) -> str:
        return self.id or "<unnamed signup>"


def guest_to_player(guest: GuestRecord) -> Player:
    """Build a player with the default attribute set used for guests.

    Guest notes are free text and never inspected.
    """

    return Player(
        id=guest.id,
        display_name=guest.display_name,
        nickname=None,
        main_position=GUEST_MAIN_POSITION,
        preferred_positions=GUEST_PREFERRED_POSITIONS,
        overall_rating=GUEST_RATING,
        footedness="right",
        goalkeeper_willingness=GUEST_GOALKEEPER_WILLINGNESS,
        fitness_status="ok",
        reliability_score=GUEST_RELIABILITY,
        matches_played=0,
        goals=0,
        assists=0,
        is_guest=True,
    )


def profile_to_player(profile: ProfileRecord) -> Player:
    return Player(
        id=profile.id,
        display_name=profile.display_name,
        nickname=profile.nickname or None,
        main_position=profile.main_position.strip().upper(),
        preferred_positions=tuple(code.strip().upper() for code in profile.preferred_positions or ()),
        overall_rating=profile.overall_rating,
        footedness=profile.footedness,
        goalkeeper_willingness=profile.goalkeeper_willingness,
        fitness_status=profile.fitness_status,
        reliability_score=profile.reliability_score,
        matches_played=profile.matches_played,
        goals=profile.goals,
        assists=profile.assists,
        is_guest=False,
    )


def signup_to_player(signup: SignupRecord) -> Player:
    if signup.player_profile is not None and signup.guest_player is not None:
        raise InvalidRosterError(f"Signup {signup.label()} references both a profile and a guest")
    try:
        if signup.player_profile is not None:
            return profile_to_player(signup.player_profile)
        if signup.guest_player is not None:
            return guest_to_player(signup.guest_player)
    except ValidationError as exc:
        raise InvalidRosterError(f"Signup {signup.label()} has invalid player data: {exc}") from exc
    raise InvalidRosterError(f"Signup {signup.label()} references neither a profile nor a guest")


def _require_size_and_unique_ids(roster: Sequence[Player]) -> None:
    if len(roster) < MIN_ROSTER_SIZE:
        raise InvalidRosterError(
            f"At least {MIN_ROSTER_SIZE} confirmed players are required, got {len(roster)}"
        )
    counts = Counter(player.id for player in roster)
    duplicates = sorted(player_id for player_id, count in counts.items() if count > 1)
    if duplicates:
        raise InvalidRosterError(f"Duplicate player ids in roster: {', '.join(duplicates)}")


def ensure_playable_roster(roster: Sequence[Player]) -> None:
    """Raise InvalidRosterError unless the roster can be balanced."""

    _require_size_and_unique_ids(roster)
    injured = [player.display_name for player in roster if player.fitness_status == "injured"]
    if injured:
        raise InvalidRosterError(f"Injured players cannot be balanced: {', '.join(injured)}")


def normalize_roster(signups: Iterable[SignupRecord]) -> list[Player]:
    """Convert confirmed signups to players, failing fast on malformed entries."""

    roster: list[Player] = []
    for signup in signups:
        if signup.status != CONFIRMED_STATUS:
            logger.info("Skipping signup %s with status %r", signup.label(), signup.status)
            continue
        roster.append(signup_to_player(signup))
    guests = sum(1 for player in roster if player.is_guest)
    logger.info("Normalized roster of %s players (%s guests)", len(roster), guests)
    _require_size_and_unique_ids(roster)
    return roster
