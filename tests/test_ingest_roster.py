import pytest

from teambalance.errors import InvalidRosterError
from teambalance.ingest import (
    GuestRecord,
    ProfileRecord,
    SignupRecord,
    ensure_playable_roster,
    normalize_roster,
)
from tests.helpers import make_player


def _profile(pid: str, name: str, rating: float = 3.0, **kwargs) -> SignupRecord:
    data = {
        "id": pid,
        "display_name": name,
        "main_position": "cm",
        "preferred_positions": ["st"],
        "overall_rating": rating,
        "footedness": "left",
        "goalkeeper_willingness": 2,
        "fitness_status": "ok",
        "reliability_score": 80,
        "matches_played": 12,
        "goals": 4,
        "assists": 3,
    }
    data.update(kwargs)
    return SignupRecord(id=f"s-{pid}", player_profile=ProfileRecord(**data))


def _guest(gid: str, name: str, notes: str | None = None) -> SignupRecord:
    return SignupRecord(id=f"s-{gid}", guest_player=GuestRecord(id=gid, display_name=name, notes=notes))


def test_normalize_roster_maps_profile_fields():
    roster = normalize_roster([_profile("p1", "Ana"), _profile("p2", "Bruno"), _profile("p3", "Carla"), _guest("g1", "Gil")])

    ana = roster[0]
    assert ana.main_position == "CM"
    assert ana.preferred_positions == ("ST",)
    assert ana.footedness == "left"
    assert ana.matches_played == 12
    assert ana.is_guest is False


def test_guest_defaults_are_synthesized():
    roster = normalize_roster(
        [_profile("p1", "Ana"), _profile("p2", "Bruno"), _profile("p3", "Carla"), _guest("g1", "Gil", notes="GK, tall, 5 stars")]
    )
    guest = roster[-1]

    assert guest.model_dump(include={"main_position", "overall_rating", "goalkeeper_willingness", "fitness_status", "is_guest"}) == {
        "main_position": "CM",
        "overall_rating": 2.5,
        "goalkeeper_willingness": 1,
        "fitness_status": "ok",
        "is_guest": True,
    }
    assert guest.display_name == "Gil"
    assert guest.id == "g1"


def test_signup_without_profile_or_guest_is_rejected():
    signups = [_profile("p1", "Ana"), _profile("p2", "Bruno"), _profile("p3", "Carla"), SignupRecord(id="empty")]
    with pytest.raises(InvalidRosterError, match="neither"):
        normalize_roster(signups)


def test_signup_with_profile_and_guest_is_rejected():
    both = SignupRecord(
        id="both",
        player_profile=ProfileRecord(id="p9", display_name="X", main_position="CM", overall_rating=3.0),
        guest_player=GuestRecord(id="g9", display_name="Y"),
    )
    with pytest.raises(InvalidRosterError, match="both"):
        normalize_roster([_profile("p1", "Ana"), _profile("p2", "Bruno"), _profile("p3", "Carla"), both])


def test_invalid_profile_data_is_rejected():
    signups = [_profile("p1", "Ana"), _profile("p2", "Bruno"), _profile("p3", "Carla"), _profile("p4", "Dani", main_position="QB")]
    with pytest.raises(InvalidRosterError, match="invalid player data"):
        normalize_roster(signups)


def test_roster_of_three_is_rejected():
    with pytest.raises(InvalidRosterError, match="At least 4"):
        normalize_roster([_profile("p1", "Ana"), _profile("p2", "Bruno"), _guest("g1", "Gil")])


def test_duplicate_ids_are_rejected():
    signups = [_profile("p1", "Ana"), _profile("p1", "Ana again"), _profile("p2", "Bruno"), _guest("g1", "Gil")]
    with pytest.raises(InvalidRosterError, match="Duplicate"):
        normalize_roster(signups)


def test_ensure_playable_roster_rejects_injured_players():
    roster = [
        make_player("p1", "Ana", 3.0),
        make_player("p2", "Bruno", 3.0),
        make_player("p3", "Carla", 3.0),
        make_player("p4", "Dani", 3.0, fitness_status="injured"),
    ]
    with pytest.raises(InvalidRosterError, match="Dani"):
        ensure_playable_roster(roster)


def test_ensure_playable_roster_accepts_four_players():
    roster = [make_player(f"p{i}", f"Player {i}", 3.0) for i in range(4)]
    ensure_playable_roster(roster)


def test_signups_that_are_not_confirmed_are_skipped():
    waitlisted = _profile("p5", "Eva").model_copy(update={"status": "waitlist"})
    cancelled = _guest("g2", "Gus").model_copy(update={"status": "cancelled"})
    signups = [_profile("p1", "Ana"), _profile("p2", "Bruno"), waitlisted, _profile("p3", "Carla"), cancelled, _guest("g1", "Gil")]

    roster = normalize_roster(signups)

    assert [player.id for player in roster] == ["p1", "p2", "p3", "g1"]


def test_size_gate_counts_confirmed_signups_only():
    waitlisted = _profile("p4", "Dani").model_copy(update={"status": "waitlist"})
    with pytest.raises(InvalidRosterError, match="got 3"):
        normalize_roster([_profile("p1", "Ana"), _profile("p2", "Bruno"), _guest("g1", "Gil"), waitlisted])
