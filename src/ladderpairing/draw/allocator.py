"""Group allocation for the ladder format.

Splits a rank-ordered roster into contiguous groups of 4 and 5 athletes.
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

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

from ladderpairing.constants import (
    MAX_GROUP_SIZE,
    MIN_ATHLETES_FOR_DRAW,
    MIN_GROUP_SIZE,
    MOVEMENT_LABELS,
    ROTATIONS_BY_SIZE,
)
from ladderpairing.models.athlete import Athlete
from ladderpairing.models.group import Group
from ladderpairing.models.outcomes import (
    InsufficientAthletes,
    NoValidAllocation,
    Outcome,
)
from ladderpairing.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class Allocation:
    """How a roster of a given size splits into groups.

    Attributes:
        total_athletes: Roster size the allocation was made for
        group_sizes: Size of each group, group 1 first
        groups: The groups themselves (empty for a size-only allocation)
    """

    total_athletes: int
    group_sizes: List[int]
    groups: List[Group] = field(default_factory=list)

    @property
    def num_groups(self) -> int:
        return len(self.group_sizes)

    @property
    def num_five_player_groups(self) -> int:
        return sum(1 for size in self.group_sizes if size == MAX_GROUP_SIZE)

    @property
    def num_four_player_groups(self) -> int:
        return sum(1 for size in self.group_sizes if size == MIN_GROUP_SIZE)

    @property
    def has_five_player_groups(self) -> bool:
        return self.num_five_player_groups > 0

    @property
    def has_byes(self) -> bool:
        # only five-athlete groups sit someone out
        return self.has_five_player_groups

    @property
    def default_movement(self) -> int:
        """Athletes moved up/down per group when the rule is ``auto``."""
        return 2 if self.has_five_player_groups else 1

    @property
    def movement_rule(self) -> str:
        return MOVEMENT_LABELS[self.default_movement]

    @property
    def total_matches(self) -> int:
        return sum(len(ROTATIONS_BY_SIZE[size]) for size in self.group_sizes)

    @property
    def description(self) -> str:
        """Human readable summary, e.g. ``2 groups of 5 (1 bye each), 1 group of 4``."""
        fives = self.num_five_player_groups
        fours = self.num_four_player_groups
        parts = []
        if fives:
            parts.append(f"{fives} {_plural('group', fives)} of 5 (1 bye each)")
        if fours:
            parts.append(f"{fours} {_plural('group', fours)} of 4")
        return ", ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize allocation (the draw preview) to dictionary."""
        return {
            "allocation": self.description,
            "num_groups": self.num_groups,
            "group_sizes": list(self.group_sizes),
            "total_athletes": self.total_athletes,
            "has_byes": self.has_byes,
            "has_five_player_groups": self.has_five_player_groups,
            "movement_rule": self.movement_rule,
            "total_matches": self.total_matches,
            "groups": [group.to_dict() for group in self.groups],
        }


def _plural(word: str, count: int) -> str:
    return word if count == 1 else f"{word}s"


class GroupAllocator:
    """Partitions a ranked roster into ladder groups.

    ``N // 4`` groups are formed and the first ``N % 4`` of them take a fifth
    athlete. Athletes fill group 1 first, in the order given, so every group is
    a contiguous slice of the roster.
    """

    def allocation_for(self, athlete_count: int) -> Outcome[Allocation]:
        """Compute group sizes for a roster size without assigning athletes.

        Args:
            athlete_count: Number of athletes

        Returns:
            Outcome with an Allocation (no groups), or InsufficientAthletes /
            NoValidAllocation
        """
        if athlete_count < MIN_ATHLETES_FOR_DRAW:
            return Outcome.failed(
                InsufficientAthletes(
                    needed=MIN_ATHLETES_FOR_DRAW - athlete_count,
                    current_count=athlete_count,
                )
            )

        num_groups = athlete_count // MIN_GROUP_SIZE
        remainder = athlete_count % MIN_GROUP_SIZE
        if remainder > num_groups:
            # 11 is the only roster size >= 8 that hits this
            return Outcome.failed(NoValidAllocation(athlete_count=athlete_count))

        group_sizes = [
            MAX_GROUP_SIZE if i < remainder else MIN_GROUP_SIZE
            for i in range(num_groups)
        ]
        return Outcome.success(
            Allocation(total_athletes=athlete_count, group_sizes=group_sizes)
        )

    def allocate(
        self, roster: Sequence[Athlete], round_number: int = 1
    ) -> Outcome[Allocation]:
        """Split a rank-ordered roster into groups.

        Args:
            roster: Athletes, best rank first
            round_number: Round the groups are for

        Returns:
            Outcome with the Allocation and its Groups
        """
        outcome = self.allocation_for(len(roster))
        if not outcome:
            logger.info(f"Cannot allocate {len(roster)} athletes: {outcome.failure.message}")
            return outcome

        allocation = outcome.value
        allocation.groups = split_into_groups(
            roster, allocation.group_sizes, round_number
        )
        logger.info(
            f"Allocated {allocation.total_athletes} athletes: {allocation.description}"
        )
        return outcome


def split_into_groups(
    athletes: Sequence[Athlete], group_sizes: Sequence[int], round_number: int
) -> List[Group]:
    """Slice athletes into consecutive groups of the given sizes."""
    groups = []
    start = 0
    for index, size in enumerate(group_sizes):
        groups.append(
            Group(
                group_number=index + 1,
                round_number=round_number,
                athletes=list(athletes[start : start + size]),
            )
        )
        start += size
    return groups
