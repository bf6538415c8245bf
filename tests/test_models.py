from datetime import date, datetime

import pytest

from ladderpairing.exceptions import InvalidConfigurationException, RankValidationException
from ladderpairing.models import (
    Athlete,
    GameDay,
    GameDaySettings,
    InsufficientAthletes,
    Match,
    MatchSide,
    NoValidAllocation,
    Outcome,
    Team,
    sort_by_rank,
)
from ladderpairing.models.game_day import parse_date
from ladderpairing.models.team import average_rank, team_presentation


def _match():
    return Match(
        game_day_id="gd-1",
        round_number=2,
        group_number=3,
        team_a=MatchSide(players=("a", "b")),
        team_b=MatchSide(players=("c", "d")),
        bye="e",
    )


def test_athlete_rank_must_be_positive():
    with pytest.raises(RankValidationException):
        Athlete(id="x", name="X", rank=0)


def test_sort_by_rank_is_stable():
    athletes = [
        Athlete(id="b", name="B", rank=2),
        Athlete(id="a", name="A", rank=1),
        Athlete(id="c", name="C", rank=2),
    ]

    assert [a.id for a in sort_by_rank(athletes)] == ["a", "b", "c"]


def test_match_winner_follows_scores():
    match = _match()
    match.apply_scores(11, None)
    assert match.winner is None and match.status == "pending"

    match.apply_scores(7, 11)
    assert match.winner == "teamB" and match.status == "completed"
    assert match.side_of("c") == "teamB"
    assert match.side_of("e") is None
    assert match.scores_for("teamB") == (11, 7)


def test_match_serialization():
    match = _match()
    match.apply_scores(11, 9, when=datetime(2025, 2, 1, 9, 15))

    restored = Match.from_dict(match.to_dict())

    assert restored == match
    assert match.to_dict()["winner"] == "teamA"


def test_team_average_rank_rounds_half_up():
    athletes = [Athlete(id=str(r), name=str(r), rank=r) for r in (1, 2, 2, 2)]

    assert average_rank(athletes) == 1.8
    assert average_rank([]) is None
    team = Team(game_day_id="gd", team_number=1, team_name="T", team_color="blue", members=athletes)
    assert Team.from_dict(team.to_dict()) == team


def test_team_presentation_palette():
    assert team_presentation(1) == ("Blue Team", "blue")
    assert team_presentation(4) == ("Yellow Team", "yellow")
    assert team_presentation(6) == ("Team 6", "team-6")


@pytest.mark.parametrize(
    "settings",
    [
        {"format": "knockout"},
        {"movement_rule": "3"},
        {"number_of_rounds": 0},
        {"number_of_teams": 1},
        {"points_to_win": 0},
    ],
)
def test_invalid_settings(settings):
    with pytest.raises(InvalidConfigurationException):
        GameDaySettings(**settings)


def test_settings_movement_override():
    assert GameDaySettings().movement_override is None
    assert GameDaySettings(movement_rule="1").movement_override == 1


def test_game_day_serialization():
    game_day = GameDay(
        date=date(2025, 6, 7),
        venue="North Gym",
        settings=GameDaySettings(format="teams", number_of_teams=3),
        athlete_ids=["a", "b"],
    )

    restored = GameDay.from_dict(game_day.to_dict())

    assert restored == game_day
    assert restored.format == "teams"


def test_settings_from_partial_dict_uses_defaults():
    settings = GameDaySettings.from_dict({"movement_rule": 2})

    assert settings.movement_rule == "2"
    assert settings.points_to_win == 11
    assert settings.number_of_rounds == 3


def test_parse_date_accepts_strings():
    assert parse_date("2025-04-05") == date(2025, 4, 5)
    assert parse_date(datetime(2025, 4, 5, 18, 0)) == date(2025, 4, 5)
    with pytest.raises(InvalidConfigurationException):
        parse_date("not a date")


def test_outcome_truthiness():
    ok = Outcome.success(3)
    failed = Outcome.failed(InsufficientAthletes(needed=1, current_count=7))

    assert ok and ok.unwrap() == 3
    assert not failed
    with pytest.raises(ValueError):
        failed.unwrap()


def test_failure_messages():
    failure = InsufficientAthletes(needed=1, current_count=7)

    assert failure.message == "Need 1 more athlete (currently 7)"
    assert failure.to_dict()["error"] == "InsufficientAthletes"
    assert NoValidAllocation(athlete_count=11).to_dict()["suggestion"]


@pytest.mark.parametrize("key", ["points_to_win", "win_by_margin", "number_of_rounds"])
def test_settings_from_dict_validates_explicit_zero(key):
    with pytest.raises(InvalidConfigurationException):
        GameDaySettings.from_dict({key: 0})
