import json
from pathlib import Path

import pytest

from teambalance import cli


def _write_input(path: Path, players: int) -> Path:
    signups = [
        {
            "id": f"s{i}",
            "player_profile": {
                "id": f"p{i}",
                "display_name": f"Player {i}",
                "main_position": "CM",
                "overall_rating": 3.0,
            },
        }
        for i in range(players)
    ]
    rules = [{"rule_type": "avoid_pair", "data": {"player_ids": ["p0", "p1"]}}]
    path.write_text(json.dumps({"signups": signups, "rules": rules}), encoding="utf-8")
    return path


def test_print_request_outputs_prompt(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    source = _write_input(tmp_path / "match.json", 4)

    cli.main([str(source), "--print-request"])

    out = capsys.readouterr().out
    assert "## Players Available (4 total, 2 per team)" in out
    assert "- AVOID putting Player 0 and Player 1 on the same team" in out


def test_print_request_rejects_small_roster(tmp_path: Path):
    source = _write_input(tmp_path / "match.json", 3)

    with pytest.raises(SystemExit, match="At least 4"):
        cli.main([str(source), "--print-request"])


def test_invalid_input_file(tmp_path: Path):
    source = tmp_path / "broken.json"
    source.write_text("{not json", encoding="utf-8")

    with pytest.raises(SystemExit, match="Invalid input file"):
        cli.main([str(source), "--print-request"])
