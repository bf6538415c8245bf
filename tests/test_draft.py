import pytest

from ladderpairing.draw import DraftAllocator, serpentine_slot
from ladderpairing.exceptions import InvalidTeamCountException
from ladderpairing.models import Athlete, InsufficientAthletes


def _roster(count):
    return [Athlete(id=str(rank), name=f"Athlete {rank}", rank=rank) for rank in range(1, count + 1)]


def _ranks(team):
    return [athlete.rank for athlete in team.members]


def test_snake_draft_into_two_teams():
    teams = DraftAllocator().draft(_roster(9), 2).unwrap()

    assert _ranks(teams[0]) == [1, 4, 5, 8, 9]
    assert _ranks(teams[1]) == [2, 3, 6, 7]
    assert teams[0].average_rank == 5.4
    assert teams[1].average_rank == 4.5


def test_snake_draft_into_three_teams():
    teams = DraftAllocator().draft(_roster(7), 3).unwrap()

    assert _ranks(teams[0]) == [1, 6, 7]
    assert _ranks(teams[1]) == [2, 5]
    assert _ranks(teams[2]) == [3, 4]


def test_serpentine_slot_sequence():
    assert [serpentine_slot(pick, 4) for pick in range(10)] == [0, 1, 2, 3, 3, 2, 1, 0, 0, 1]


@pytest.mark.parametrize("count, team_count", [(2, 2), (12, 2), (13, 4), (30, 5)])
def test_every_athlete_lands_on_exactly_one_team(count, team_count):
    roster = _roster(count)
    teams = DraftAllocator().draft(roster, team_count).unwrap()

    drafted = [athlete for team in teams for athlete in team.members]
    assert sorted(drafted, key=lambda a: a.rank) == roster
    sizes = [len(team.members) for team in teams]
    assert max(sizes) - min(sizes) <= 1


def test_too_few_athletes():
    outcome = DraftAllocator().draft(_roster(1), 2)

    assert not outcome
    assert isinstance(outcome.failure, InsufficientAthletes)
    assert outcome.failure.needed == 1


@pytest.mark.parametrize("team_count", [0, 1])
def test_team_count_below_two_is_rejected(team_count):
    with pytest.raises(InvalidTeamCountException):
        DraftAllocator().draft(_roster(8), team_count)


def test_empty_team_has_no_average():
    teams = DraftAllocator().draft(_roster(2), 3).unwrap()

    assert teams[2].members == []
    assert teams[2].average_rank is None
    assert teams[0].to_dict()["average_rank"] == 1.0
