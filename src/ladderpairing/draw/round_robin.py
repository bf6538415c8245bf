"""Round-robin generation.

Doubles round-robins inside a ladder group, where every athlete partners every
other group member exactly once, plus the circle-method rotation used to
round-robin fixed pairs and teams.
"""

# Ladder Pairing
# Copyright (C) 2025  Ladder Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from typing import Iterable, List, Optional, Sequence, Tuple, TypeVar

from ladderpairing.constants import MIN_PAIRS, PAIR_SIZE, ROTATIONS_BY_SIZE
from ladderpairing.exceptions import (
    DrawException,
    ForeignAthleteException,
    InvalidGroupSizeException,
    InvalidPairException,
)
from ladderpairing.models.group import Group
from ladderpairing.models.match import Match, MatchSide
from ladderpairing.models.team import Team
from ladderpairing.utils import setup_logger

logger = setup_logger(__name__)

T = TypeVar("T")


class RoundRobinGenerator:
    """Builds the fixed doubles schedule for one group and round.

    A group of 4 plays 3 matches and a group of 5 plays 5, one athlete sitting
    out each match. Indices refer to the group's draw order:

    ====  =========  =========  ===
    size  team A     team B     bye
    ====  =========  =========  ===
    4     0+1        2+3        -
    4     0+2        1+3        -
    4     0+3        1+2        -
    5     0+1        2+3        4
    5     0+2        3+4        1
    5     0+3        1+4        2
    5     0+4        1+2        3
    5     1+3        2+4        0
    ====  =========  =========  ===
    """

    def generate(self, group: Group, game_day_id: str) -> List[Match]:
        """Create the pending matches for a group.

        Args:
            group: Group of 4 or 5 athletes in draw order
            game_day_id: Game day the matches belong to

        Returns:
            List of pending matches with no scores

        Raises:
            InvalidGroupSizeException: If the group is not 4 or 5 athletes
            DrawException: If an athlete appears twice in the group
        """
        rotation = ROTATIONS_BY_SIZE.get(group.size)
        if rotation is None:
            logger.error(
                f"Group {group.group_number} has {group.size} athletes, cannot round-robin"
            )
            raise InvalidGroupSizeException(
                f"Group {group.group_number} has {group.size} athletes; "
                "only groups of 4 or 5 can be drawn"
            )

        ids = group.athlete_ids
        if len(set(ids)) != len(ids):
            raise DrawException(f"Group {group.group_number} lists an athlete twice")

        matches = []
        for team_a, team_b, bye in rotation:
            matches.append(
                Match(
                    game_day_id=game_day_id,
                    round_number=group.round_number,
                    group_number=group.group_number,
                    team_a=MatchSide(players=(ids[team_a[0]], ids[team_a[1]])),
                    team_b=MatchSide(players=(ids[team_b[0]], ids[team_b[1]])),
                    bye=ids[bye] if bye is not None else None,
                )
            )

        logger.debug(
            f"Round {group.round_number} group {group.group_number}: "
            f"{len(matches)} matches for {group.size} athletes"
        )
        return matches

    def generate_round(self, groups: Iterable[Group], game_day_id: str) -> List[Match]:
        """Create the matches of every group in a round, group 1 first."""
        matches = []
        for group in groups:
            matches.extend(self.generate(group, game_day_id))
        return matches


def verify_group_matches(group: Group, matches: Iterable[Match]) -> None:
    """Check that every athlete named by the matches belongs to the group.

    Raises:
        ForeignAthleteException: If a match names an outsider
    """
    members = set(group.athlete_ids)
    for match in matches:
        named = set(match.athlete_ids)
        if match.bye is not None:
            named.add(match.bye)
        outsiders = named - members
        if outsiders:
            raise ForeignAthleteException(
                f"Match {match.id} in group {group.group_number} references "
                f"athletes outside the group: {sorted(outsiders)}"
            )


# ========== Circle method ==========


def circle_rounds(entries: Sequence[T]) -> List[List[Tuple[Optional[T], Optional[T]]]]:
    """Classic circle-method round-robin.

    Entry 0 stays fixed while the others rotate one step per round. An odd
    entry count gets a ``None`` slot, so one entry per round is paired with
    ``None`` (a bye).

    Args:
        entries: Things to round-robin, in seeding order

    Returns:
        One list of pairings per round; ``n - 1`` rounds for even ``n``, ``n``
        rounds for odd ``n``
    """
    circle: List[Optional[T]] = list(entries)
    if len(circle) % 2 == 1:
        circle.append(None)

    count = len(circle)
    rounds = []
    for _ in range(count - 1):
        rounds.append([(circle[i], circle[count - 1 - i]) for i in range(count // 2)])
        # [0, 1, 2, 3, 4, 5] -> [0, 5, 1, 2, 3, 4]
        circle.insert(1, circle.pop())
    return rounds


def partner_rotations(size: int) -> List[List[Tuple[int, int]]]:
    """Index-based partnerships covering a roster, one list per rotation.

    Each rotation splits ``range(size)`` into pairs; across all rotations every
    two indices partner once. With an odd size one index sits out each rotation.
    """
    rotations = []
    for pairing in circle_rounds(list(range(size))):
        rotations.append(
            [(a, b) for a, b in pairing if a is not None and b is not None]
        )
    return rotations


class PairsRoundRobin:
    """Round-robin between fixed pairs: every pair meets every other pair once."""

    def generate(self, pairs: Sequence[Team], game_day_id: str) -> List[Match]:
        """Create the pairs-mode schedule.

        Args:
            pairs: Teams of exactly two athletes, ordered by team number
            game_day_id: Game day the matches belong to

        Returns:
            Pending matches; rounds numbered from 1, all in group 1

        Raises:
            InvalidPairException: If a pair does not have exactly two members
            DrawException: If fewer than two pairs are given
        """
        if len(pairs) < MIN_PAIRS:
            raise DrawException(f"Need at least {MIN_PAIRS} pairs, got {len(pairs)}")
        for pair in pairs:
            if len(pair.members) != PAIR_SIZE:
                raise InvalidPairException(
                    f'Pair "{pair.team_name}" has {len(pair.members)} members instead of 2'
                )

        matches = []
        for round_index, pairing in enumerate(circle_rounds(list(pairs)), start=1):
            for pair_a, pair_b in pairing:
                if pair_a is None or pair_b is None:
                    resting = pair_a or pair_b
                    logger.debug(f"Round {round_index}: bye for {resting.team_name}")
                    continue
                matches.append(
                    Match(
                        game_day_id=game_day_id,
                        round_number=round_index,
                        group_number=1,
                        team_a=MatchSide(players=tuple(pair_a.member_ids)),
                        team_b=MatchSide(players=tuple(pair_b.member_ids)),
                        team_a_team_id=pair_a.id,
                        team_b_team_id=pair_b.id,
                    )
                )

        logger.info(
            f"Pairs round-robin: {len(pairs)} pairs, {len(matches)} matches"
        )
        return matches
