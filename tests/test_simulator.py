import json
from datetime import date

import pytest

from ladderpairing.models import InsufficientAthletes, NoValidAllocation
from ladderpairing.testing import GameDaySimulator, ResultPattern, SimulatorConfig
from ladderpairing.testing.simulator import ScoreSimulator
from ladderpairing.utils.validation import validate_game_score


def _run(**kwargs):
    config = SimulatorConfig(**kwargs)
    return GameDaySimulator(config).run(game_date=date(2025, 10, 4))


@pytest.mark.parametrize("num_athletes", [8, 9, 13, 18, 22])
def test_group_simulation_plays_every_round(num_athletes):
    report = _run(num_athletes=num_athletes, num_rounds=3, seed=42)

    assert report.failure is None
    assert report.rounds_played == 3
    assert len(report.movements) == 2
    assert report.game_day.status == "completed"
    assert all(match.is_completed for match in report.matches)
    for movement in report.movements:
        placed = sum(group.size for group in movement.groups) + len(movement.stranded)
        assert placed == num_athletes


def test_simulated_scores_respect_the_rules():
    report = _run(num_athletes=16, points_to_win=15, win_by_margin=2, seed=5, deuce_rate=0.5)

    for match in report.matches:
        assert validate_game_score(
            match.team_a.score, match.team_b.score, points_to_win=15, win_by_margin=2
        )


def test_same_seed_same_results():
    first = _run(num_athletes=12, seed=9)
    second = _run(num_athletes=12, seed=9)

    def scores(report):
        return [(m.team_a.score, m.team_b.score) for m in report.matches]

    assert scores(first) == scores(second)


def test_teams_simulation():
    report = _run(num_athletes=12, format="teams", seed=1)

    assert report.failure is None
    assert len(report.store.list_teams(report.game_day.id)) == 2
    assert len(report.matches) == 24
    assert report.game_day.status == "completed"


def test_pairs_simulation_drops_odd_athlete():
    report = _run(num_athletes=9, format="pairs", seed=3)

    assert report.failure is None
    assert len(report.game_day.athlete_ids) == 8
    pairs = report.store.list_teams(report.game_day.id)
    assert pairs[0].member_ids == ["athlete-001", "athlete-008"]
    assert len(report.matches) == 6
    assert report.rounds_played == 3


@pytest.mark.parametrize("num_athletes, failure", [(5, InsufficientAthletes), (11, NoValidAllocation)])
def test_simulation_stops_on_precondition_failure(num_athletes, failure):
    report = _run(num_athletes=num_athletes, seed=1)

    assert isinstance(report.failure, failure)
    assert report.matches == []
    assert report.to_dict()["failure"]["error"] == failure.__name__


def test_report_exports_json():
    report = _run(num_athletes=10, num_rounds=2, seed=11)

    data = json.loads(report.export_json())

    assert data["simulation_config"]["seed"] == 11
    assert data["game_day"]["status"] == "completed"
    assert len(data["leaderboard"]) == 10
    assert len(data["movements"]) == 1


def test_random_pattern_is_a_coin_flip():
    config = SimulatorConfig(num_athletes=8, result_pattern=ResultPattern.RANDOM, seed=1)

    assert ScoreSimulator(config)._win_probability(None, {}) == 0.5
