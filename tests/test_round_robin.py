from collections import Counter
from itertools import combinations

import pytest

from ladderpairing.draw import (
    PairsRoundRobin,
    RoundRobinGenerator,
    circle_rounds,
    partner_rotations,
    verify_group_matches,
)
from ladderpairing.exceptions import (
    DrawException,
    ForeignAthleteException,
    InvalidGroupSizeException,
    InvalidPairException,
)
from ladderpairing.models import Athlete, Group, Match, MatchSide, Team


def _group(size, group_number=1, round_number=1):
    athletes = [Athlete(id=f"a{i}", name=f"A{i}", rank=i) for i in range(1, size + 1)]
    return Group(group_number=group_number, round_number=round_number, athletes=athletes)


def _partnerships(matches):
    pairs = Counter()
    for match in matches:
        pairs[frozenset(match.team_a.players)] += 1
        pairs[frozenset(match.team_b.players)] += 1
    return pairs


@pytest.mark.parametrize("size, expected_matches", [(4, 3), (5, 5)])
def test_every_pair_partners_exactly_once(size, expected_matches):
    group = _group(size)
    matches = RoundRobinGenerator().generate(group, "gd-1")

    assert len(matches) == expected_matches
    pairs = _partnerships(matches)
    assert set(pairs) == {frozenset(pair) for pair in combinations(group.athlete_ids, 2)}
    assert all(count == 1 for count in pairs.values())


def test_five_player_group_gives_each_athlete_one_bye():
    group = _group(5)
    matches = RoundRobinGenerator().generate(group, "gd-1")

    byes = Counter(match.bye for match in matches)
    assert byes == Counter(group.athlete_ids)
    for match in matches:
        assert match.bye not in match.athlete_ids
        assert len(set(match.athlete_ids)) == 4


def test_four_player_group_has_no_byes():
    matches = RoundRobinGenerator().generate(_group(4), "gd-1")

    assert all(match.bye is None for match in matches)


def test_generated_matches_are_pending():
    matches = RoundRobinGenerator().generate(_group(5, group_number=2, round_number=3), "gd-1")

    for match in matches:
        assert match.status == "pending"
        assert match.winner is None
        assert match.team_a.score is None and match.team_b.score is None
        assert match.round_number == 3
        assert match.group_number == 2
        assert match.game_day_id == "gd-1"


def test_first_match_follows_table_order():
    group = _group(5)
    first = RoundRobinGenerator().generate(group, "gd-1")[0]

    assert first.team_a.players == ("a1", "a2")
    assert first.team_b.players == ("a3", "a4")
    assert first.bye == "a5"


@pytest.mark.parametrize("size", [0, 3, 6, 8])
def test_invalid_group_size_is_rejected(size):
    with pytest.raises(InvalidGroupSizeException):
        RoundRobinGenerator().generate(_group(size), "gd-1")


def test_duplicate_athlete_is_rejected():
    group = _group(4)
    group.athletes[3] = group.athletes[0]

    with pytest.raises(DrawException):
        RoundRobinGenerator().generate(group, "gd-1")


def test_generate_round_covers_every_group():
    groups = [_group(5, 1), _group(4, 2)]
    groups[1].athletes = [
        Athlete(id=f"b{i}", name=f"B{i}", rank=5 + i) for i in range(1, 5)
    ]
    matches = RoundRobinGenerator().generate_round(groups, "gd-1")

    assert len(matches) == 8
    assert [m.group_number for m in matches] == [1] * 5 + [2] * 3


def test_foreign_athlete_is_detected():
    group = _group(4)
    intruder = Match(
        game_day_id="gd-1",
        round_number=1,
        group_number=1,
        team_a=MatchSide(players=("a1", "a2")),
        team_b=MatchSide(players=("a3", "zz")),
    )

    with pytest.raises(ForeignAthleteException):
        verify_group_matches(group, [intruder])


@pytest.mark.parametrize("count", [2, 3, 4, 5, 6, 7])
def test_circle_method_meets_everyone_once(count):
    entries = list(range(count))
    rounds = circle_rounds(entries)

    assert len(rounds) == (count - 1 if count % 2 == 0 else count)
    meetings = Counter(
        frozenset(pairing)
        for pairings in rounds
        for pairing in pairings
        if None not in pairing
    )
    assert set(meetings) == {frozenset(p) for p in combinations(entries, 2)}
    assert all(value == 1 for value in meetings.values())


def test_partner_rotations_skip_the_bye_slot():
    rotations = partner_rotations(5)

    assert len(rotations) == 5
    assert all(len(rotation) == 2 for rotation in rotations)


def _pair(number, first, second):
    members = [
        Athlete(id=first, name=first, rank=number * 2 - 1),
        Athlete(id=second, name=second, rank=number * 2),
    ]
    return Team(
        game_day_id="gd-1",
        team_number=number,
        team_name=f"Pair {number}",
        team_color=f"team-{number}",
        members=members,
    )


def test_pairs_round_robin_even_count():
    pairs = [_pair(i, f"p{i}a", f"p{i}b") for i in range(1, 5)]
    matches = PairsRoundRobin().generate(pairs, "gd-1")

    assert len(matches) == 6
    assert sorted({m.round_number for m in matches}) == [1, 2, 3]
    assert all(m.group_number == 1 for m in matches)
    meetings = {frozenset((m.team_a_team_id, m.team_b_team_id)) for m in matches}
    assert len(meetings) == 6


def test_pairs_round_robin_odd_count_has_a_bye_each_round():
    pairs = [_pair(i, f"p{i}a", f"p{i}b") for i in range(1, 4)]
    matches = PairsRoundRobin().generate(pairs, "gd-1")

    assert len(matches) == 3
    assert sorted(m.round_number for m in matches) == [1, 2, 3]


def test_pair_with_wrong_member_count_is_rejected():
    broken = _pair(2, "x", "y")
    broken.members.append(Athlete(id="z", name="z", rank=9))

    with pytest.raises(InvalidPairException):
        PairsRoundRobin().generate([_pair(1, "a", "b"), broken], "gd-1")


def test_pairs_round_robin_needs_two_pairs():
    with pytest.raises(DrawException):
        PairsRoundRobin().generate([_pair(1, "a", "b")], "gd-1")
