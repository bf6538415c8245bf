"""Ladder movement between rounds.

After a round is fully scored, the best athletes of each group move up a group
and the worst move down ("k up, k down"). This module computes the group
compositions of the next round.
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
from typing import Any, Dict, List, Optional, Sequence

from ladderpairing.constants import MAX_GROUP_SIZE, MOVEMENT_LABELS, VALID_GROUP_SIZES
from ladderpairing.draw.allocator import GroupAllocator, split_into_groups
from ladderpairing.draw.round_robin import verify_group_matches
from ladderpairing.draw.standings import StandingsCalculator
from ladderpairing.exceptions import InvalidMovementException
from ladderpairing.models.athlete import Athlete, sort_by_rank
from ladderpairing.models.group import Group
from ladderpairing.models.match import Match, count_incomplete
from ladderpairing.models.outcomes import IncompleteRound, NoPriorRound, Outcome
from ladderpairing.models.standing import Standing
from ladderpairing.type_hints import GroupIds
from ladderpairing.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class GroupMovement:
    """Who leaves and who stays in one group.

    Attributes:
        group_number: Group in the completed round
        standings: Final standings of the group
        staying: Athletes remaining in the group
        moving_up: Athletes promoted to the group above
        moving_down: Athletes relegated to the group below
    """

    group_number: int
    standings: List[Standing] = field(default_factory=list)
    staying: List[str] = field(default_factory=list)
    moving_up: List[str] = field(default_factory=list)
    moving_down: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "group_number": self.group_number,
            "standings": [standing.to_dict() for standing in self.standings],
            "staying": list(self.staying),
            "moving_up": list(self.moving_up),
            "moving_down": list(self.moving_down),
        }


@dataclass
class LadderMovement:
    """Next-round composition produced by :class:`LadderMover`.

    Attributes:
        round_number: The round the new groups are for
        movement: Athletes moved up/down per group boundary
        groups: Playable groups of the next round, group 1 first
        movements: Per-group breakdown of the completed round
        rebalanced: Whether groups had to be re-sliced to stay within 4 or 5
        stranded: Athletes left without a playable group
    """

    round_number: int
    movement: int
    groups: List[Group] = field(default_factory=list)
    movements: List[GroupMovement] = field(default_factory=list)
    rebalanced: bool = False
    stranded: List[Athlete] = field(default_factory=list)

    @property
    def movement_rule(self) -> str:
        return MOVEMENT_LABELS[self.movement]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "round": self.round_number,
            "movement_rule": self.movement_rule,
            "groups": [group.to_dict() for group in self.groups],
            "movements": [movement.to_dict() for movement in self.movements],
            "rebalanced": self.rebalanced,
            "stranded": [athlete.to_dict() for athlete in self.stranded],
        }


def resolve_movement(
    override: Optional[int], has_five_player_groups: bool
) -> int:
    """Pick the movement count: explicit override, else 2 with five-athlete groups.

    Raises:
        InvalidMovementException: If the override is not 1 or 2
    """
    if override is not None:
        if override not in MOVEMENT_LABELS:
            raise InvalidMovementException(
                f"Movement must be one of {sorted(MOVEMENT_LABELS)}, got {override}"
            )
        return override
    return 2 if has_five_player_groups else 1


class LadderMover:
    """Computes promotion and relegation between consecutive rounds."""

    def __init__(self, standings_calculator: Optional[StandingsCalculator] = None):
        self.standings_calculator = standings_calculator or StandingsCalculator()
        self.allocator = GroupAllocator()

    def compute_next_round(
        self,
        groups: Sequence[Group],
        matches: Sequence[Match],
        movement: Optional[int] = None,
        has_five_player_groups: Optional[bool] = None,
    ) -> Outcome[LadderMovement]:
        """Compute the next round's groups from a fully scored round.

        Args:
            groups: Groups of the completed round
            matches: Every match of the completed round
            movement: Explicit movement count (1 or 2), overrides the default
            has_five_player_groups: Whether the game day's allocation had
                five-athlete groups; derived from ``groups`` when omitted

        Returns:
            Outcome with the LadderMovement, or NoPriorRound / IncompleteRound

        Raises:
            InvalidMovementException: If ``movement`` is not 1 or 2
            ForeignAthleteException: If a match names an athlete outside its group
        """
        if not groups or not matches:
            return Outcome.failed(NoPriorRound())

        incomplete = count_incomplete(matches)
        if incomplete:
            logger.info(f"Cannot move athletes yet: {incomplete} matches unfinished")
            return Outcome.failed(IncompleteRound(incomplete_count=incomplete))

        ordered_groups = sorted(groups, key=lambda group: group.group_number)
        if has_five_player_groups is None:
            has_five_player_groups = any(g.size == MAX_GROUP_SIZE for g in ordered_groups)
        k = resolve_movement(movement, has_five_player_groups)

        movements = []
        for index, group in enumerate(ordered_groups):
            group_matches = [m for m in matches if m.group_number == group.group_number]
            verify_group_matches(group, group_matches)
            standings = self.standings_calculator.calculate(
                group_matches, athlete_ids=group.athlete_ids
            )
            movements.append(
                self._split_group(group.group_number, standings, index, len(ordered_groups), k)
            )

        roster = {athlete.id: athlete for group in ordered_groups for athlete in group.athletes}
        recomposed = recompose(movements)
        next_round = ordered_groups[0].round_number + 1
        result = LadderMovement(round_number=next_round, movement=k, movements=movements)

        candidate = [
            sort_by_rank(roster[athlete_id] for athlete_id in ids) for ids in recomposed
        ]
        if all(len(athletes) in VALID_GROUP_SIZES for athletes in candidate):
            result.groups = [
                Group(group_number=i + 1, round_number=next_round, athletes=athletes)
                for i, athletes in enumerate(candidate)
            ]
        else:
            self._rebalance(candidate, result)

        logger.info(
            f"Round {next_round}: {len(result.groups)} groups after "
            f"{result.movement_rule} movement"
        )
        return Outcome.success(result)

    def _split_group(
        self,
        group_number: int,
        standings: List[Standing],
        index: int,
        group_count: int,
        k: int,
    ) -> GroupMovement:
        """Decide who moves up, down or stays within one group."""
        ids = [standing.athlete_id for standing in standings]
        size = len(ids)
        n = min(k, size)
        movement = GroupMovement(group_number=group_number, standings=standings)

        is_top = index == 0
        is_bottom = index == group_count - 1
        if is_top and is_bottom:
            # a lone group has nowhere to move
            movement.staying = ids
        elif is_top:
            movement.moving_down = ids[size - n :]
            movement.staying = ids[: size - n]
        elif is_bottom:
            movement.moving_up = ids[:n]
            movement.staying = ids[n:]
        else:
            # movers never overlap, even when 2k exceeds the group size
            down_start = max(n, size - n)
            movement.moving_up = ids[:n]
            movement.moving_down = ids[down_start:]
            movement.staying = ids[n:down_start]
        return movement

    def _rebalance(self, candidate: List[List[Athlete]], result: LadderMovement) -> None:
        """Re-slice athletes in ladder order when a group fell outside 4-5."""
        sizes = [len(athletes) for athletes in candidate]
        ladder_order = [athlete for athletes in candidate for athlete in athletes]
        allocation = self.allocator.allocation_for(len(ladder_order))

        if allocation:
            logger.warning(
                f"Recomposed group sizes {sizes} are not playable; "
                f"rebalancing into {allocation.value.description}"
            )
            result.rebalanced = True
            result.groups = [
                Group(
                    group_number=group.group_number,
                    round_number=result.round_number,
                    athletes=sort_by_rank(group.athletes),
                )
                for group in split_into_groups(
                    ladder_order, allocation.value.group_sizes, result.round_number
                )
            ]
            return

        # too few athletes left to form valid groups at all
        playable = [athletes for athletes in candidate if len(athletes) in VALID_GROUP_SIZES]
        result.stranded = [
            athlete
            for athletes in candidate
            if len(athletes) not in VALID_GROUP_SIZES
            for athlete in athletes
        ]
        logger.warning(
            f"Recomposed group sizes {sizes} cannot be rebalanced "
            f"({allocation.failure.message}); {len(result.stranded)} athletes stranded"
        )
        result.groups = [
            Group(group_number=i + 1, round_number=result.round_number, athletes=athletes)
            for i, athletes in enumerate(playable)
        ]


def recompose(movements: Sequence[GroupMovement]) -> GroupIds:
    """Combine stayers with the movers arriving from neighbouring groups.

    Group ``i`` of the next round is its own stayers, the athletes moving up
    from group ``i + 1`` and the athletes moving down from group ``i - 1``.
    """
    groups = []
    for i, movement in enumerate(movements):
        athlete_ids = list(movement.staying)
        if i + 1 < len(movements):
            athlete_ids.extend(movements[i + 1].moving_up)
        if i > 0:
            athlete_ids.extend(movements[i - 1].moving_down)
        groups.append(athlete_ids)
    return groups
