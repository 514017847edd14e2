import pytest
from pydantic import ValidationError

from teambalance.models import GeneratedTeams, Player, TeamAssignment


def test_player_is_frozen():
    player = Player(id="p1", display_name="Ana", main_position="ST", overall_rating=4.0)

    assert player.id == "p1"
    assert player.is_guest is False

    with pytest.raises((TypeError, ValidationError)):
        player.overall_rating = 1.0  # type: ignore[misc]


def test_player_positions_puts_main_first_without_repeats():
    player = Player(
        id="p1",
        display_name="Ana",
        main_position="CB",
        preferred_positions=("RB", "CB", "CDM"),
        overall_rating=3.0,
    )
    assert player.positions() == ("CB", "RB", "CDM")


def test_player_rejects_rating_outside_scale():
    with pytest.raises(ValidationError):
        Player(id="p1", display_name="Ana", main_position="CM", overall_rating=5.5)


def test_player_rejects_unknown_position_code():
    with pytest.raises(ValidationError):
        Player(id="p1", display_name="Ana", main_position="QB", overall_rating=3.0)


def test_generated_teams_serializes_camel_case():
    teams = GeneratedTeams(
        dark=[TeamAssignment(player_id="p1", position="GK")],
        light=[TeamAssignment(player_id="p2", position="ST", reason="pace")],
        balance_score=0.8,
    )
    dumped = teams.model_dump(by_alias=True)
    assert dumped["balanceScore"] == 0.8
    assert dumped["dark"][0]["playerId"] == "p1"
    assert dumped["unassignedPlayerIds"] == []
    assert teams.assigned_ids() == ["p1", "p2"]
