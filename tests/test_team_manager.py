from datetime import date

import pytest

from ladderpairing.controllers.game_day import GameDayManager, TeamManager
from ladderpairing.exceptions import (
    InvalidPairException,
    TeamException,
    TeamsLockedException,
)
from ladderpairing.models import Athlete, GameDay, GameDaySettings, InsufficientAthletes
from ladderpairing.store import InMemoryStore


def _setup(count, **settings):
    store = InMemoryStore()
    game_day = GameDay(date=date(2025, 9, 13), venue="Club", settings=GameDaySettings(**settings))
    for rank in range(1, count + 1):
        store.add_athlete(Athlete(id=f"a{rank}", name=f"Athlete {rank}", rank=rank))
        game_day.athlete_ids.append(f"a{rank}")
    store.save_game_day(game_day)
    return store, TeamManager(store, store, store, store), game_day.id


def test_generate_teams_snake_drafts_the_roster():
    store, manager, gd = _setup(9, format="teams")

    blue, red = manager.generate_teams(gd).unwrap()

    assert blue.member_ids == ["a1", "a4", "a5", "a8", "a9"]
    assert red.member_ids == ["a2", "a3", "a6", "a7"]
    assert (blue.team_color, red.team_color) == ("blue", "red")
    assert store.list_teams(gd) == [blue, red]


def test_generate_teams_replaces_previous_teams():
    store, manager, gd = _setup(12, format="teams", number_of_teams=3)

    manager.generate_teams(gd)
    teams = manager.generate_teams(gd).unwrap()

    assert len(store.list_teams(gd)) == 3
    assert [t.team_number for t in teams] == [1, 2, 3]
    assert manager.unassigned_athletes(gd) == []


def test_generate_teams_needs_athletes():
    _, manager, gd = _setup(1, format="teams")

    outcome = manager.generate_teams(gd)

    assert isinstance(outcome.failure, InsufficientAthletes)


def test_generate_teams_requires_teams_format():
    _, manager, gd = _setup(8)

    with pytest.raises(TeamException):
        manager.generate_teams(gd)


def test_membership_edits():
    store, manager, gd = _setup(8, format="teams")
    blue, red = manager.generate_teams(gd).unwrap()

    manager.remove_member(blue.id, "a1")
    assert manager.unassigned_athletes(gd) == ["a1"]

    manager.add_member(red.id, "a1")
    assert store.get_team(red.id).member_ids[0] == "a1"

    manager.swap_members(red.id, "a1", blue.id, "a4")
    assert "a1" in store.get_team(blue.id).member_ids
    assert "a4" in store.get_team(red.id).member_ids

    with pytest.raises(TeamException):
        manager.add_member(blue.id, "a2")
    with pytest.raises(TeamException):
        manager.remove_member(blue.id, "a2")


def test_update_team_is_allowed_after_draw():
    store, manager, gd = _setup(8, format="teams")
    blue, _ = manager.generate_teams(gd).unwrap()
    GameDayManager(store).generate_draw(gd)

    manager.update_team(blue.id, team_name="Sharks", team_color="teal")

    assert store.get_team(blue.id).team_name == "Sharks"
    with pytest.raises(TeamsLockedException):
        manager.generate_teams(gd)
    with pytest.raises(TeamsLockedException):
        manager.add_member(blue.id, "a2")


def test_create_pair():
    store, manager, gd = _setup(4, format="pairs")

    pair = manager.create_pair(gd, ["a3", "a1"])

    assert pair.member_ids == ["a1", "a3"]
    assert pair.team_name == "Athlete 1 & Athlete 3"
    assert pair.team_number == 1
    assert manager.create_pair(gd, ["a2", "a4"]).team_number == 2


@pytest.mark.parametrize("athlete_ids", [["a1"], ["a1", "a1"], ["a1", "a2", "a3"]])
def test_pair_needs_two_different_athletes(athlete_ids):
    _, manager, gd = _setup(4, format="pairs")

    with pytest.raises(InvalidPairException):
        manager.create_pair(gd, athlete_ids)


def test_athlete_can_only_be_in_one_pair():
    _, manager, gd = _setup(4, format="pairs")
    manager.create_pair(gd, ["a1", "a2"])

    with pytest.raises(TeamException):
        manager.create_pair(gd, ["a2", "a3"])


def test_pairs_require_pairs_format():
    _, manager, gd = _setup(4, format="teams")

    with pytest.raises(TeamException):
        manager.create_pair(gd, ["a1", "a2"])


def test_swap_within_one_team_is_rejected():
    store, manager, gd = _setup(8, format="teams")
    blue, _ = manager.generate_teams(gd).unwrap()
    before = list(blue.member_ids)

    with pytest.raises(TeamException):
        manager.swap_members(blue.id, "a1", blue.id, "a4")
    assert store.get_team(blue.id).member_ids == before
