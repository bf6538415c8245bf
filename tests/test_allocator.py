import pytest

from ladderpairing.draw import GroupAllocator
from ladderpairing.models import Athlete, InsufficientAthletes, NoValidAllocation


def _roster(count):
    return [Athlete(id=str(rank), name=f"Athlete {rank}", rank=rank) for rank in range(1, count + 1)]


@pytest.mark.parametrize("count", range(0, 8))
def test_too_few_athletes_reports_how_many_are_missing(count):
    outcome = GroupAllocator().allocate(_roster(count))

    assert not outcome
    assert isinstance(outcome.failure, InsufficientAthletes)
    assert outcome.failure.needed == 8 - count
    assert outcome.failure.current_count == count


@pytest.mark.parametrize("count", [n for n in range(8, 61) if n != 11])
def test_allocation_covers_roster_with_groups_of_four_and_five(count):
    roster = _roster(count)
    allocation = GroupAllocator().allocate(roster).unwrap()

    assert sum(allocation.group_sizes) == count
    assert all(size in (4, 5) for size in allocation.group_sizes)
    assert allocation.num_groups == count // 4
    assert allocation.num_five_player_groups == count % 4
    # five-athlete groups come first
    assert allocation.group_sizes == sorted(allocation.group_sizes, reverse=True)

    flattened = [athlete for group in allocation.groups for athlete in group.athletes]
    assert flattened == roster
    assert [group.group_number for group in allocation.groups] == list(
        range(1, allocation.num_groups + 1)
    )


def test_eleven_athletes_cannot_be_split():
    outcome = GroupAllocator().allocate(_roster(11))

    assert not outcome
    assert isinstance(outcome.failure, NoValidAllocation)
    assert outcome.failure.athlete_count == 11
    assert outcome.failure.suggestion


def test_allocation_description_and_movement():
    allocation = GroupAllocator().allocate(_roster(18)).unwrap()

    assert allocation.group_sizes == [5, 5, 4, 4]
    assert allocation.description == "2 groups of 5 (1 bye each), 2 groups of 4"
    assert allocation.has_byes
    assert allocation.default_movement == 2
    assert allocation.movement_rule == "2 up, 2 down"
    assert allocation.total_matches == 16


def test_groups_of_four_only_move_one():
    allocation = GroupAllocator().allocation_for(16).unwrap()

    assert allocation.group_sizes == [4, 4, 4, 4]
    assert allocation.groups == []
    assert not allocation.has_byes
    assert allocation.default_movement == 1
    assert allocation.description == "4 groups of 4"


def test_scenario_eight_athletes():
    allocation = GroupAllocator().allocate(_roster(8)).unwrap()

    assert [group.athlete_ids for group in allocation.groups] == [
        ["1", "2", "3", "4"],
        ["5", "6", "7", "8"],
    ]
    assert allocation.to_dict()["total_matches"] == 6


def test_scenario_nine_athletes():
    allocation = GroupAllocator().allocate(_roster(9)).unwrap()

    assert allocation.group_sizes == [5, 4]
    assert allocation.has_five_player_groups
    assert allocation.default_movement == 2
    assert allocation.description == "1 group of 5 (1 bye each), 1 group of 4"
