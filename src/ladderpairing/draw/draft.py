"""Serpentine draft for the teams format."""

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

from ladderpairing.constants import MIN_ATHLETES_FOR_TEAMS, MIN_TEAMS
from ladderpairing.exceptions import InvalidTeamCountException
from ladderpairing.models.athlete import Athlete
from ladderpairing.models.outcomes import InsufficientAthletes, Outcome
from ladderpairing.models.team import average_rank
from ladderpairing.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class DraftedTeam:
    """Members picked for one team, in pick order.

    Attributes:
        index: 0-based draft slot
        members: Athletes picked by this slot
    """

    index: int
    members: List[Athlete] = field(default_factory=list)

    @property
    def average_rank(self) -> Optional[float]:
        return average_rank(self.members)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "members": [member.to_dict() for member in self.members],
            "average_rank": self.average_rank,
        }


def serpentine_slot(pick: int, team_count: int) -> int:
    """Team slot of the ``pick``-th athlete: 0, 1, .., T-1, T-1, .., 1, 0, 0, 1, .."""
    cycle, position = divmod(pick, team_count)
    if cycle % 2 == 0:
        return position
    return team_count - 1 - position


class DraftAllocator:
    """Balances a ranked roster into teams with a snake draft."""

    def draft(
        self, roster: Sequence[Athlete], team_count: int
    ) -> Outcome[List[DraftedTeam]]:
        """Distribute athletes over ``team_count`` teams.

        Args:
            roster: Athletes, best rank first
            team_count: Number of teams, at least two

        Returns:
            Outcome with one DraftedTeam per slot, or InsufficientAthletes

        Raises:
            InvalidTeamCountException: If fewer than two teams are requested
        """
        if team_count < MIN_TEAMS:
            raise InvalidTeamCountException(
                f"A draft needs at least {MIN_TEAMS} teams, got {team_count}"
            )
        if len(roster) < MIN_ATHLETES_FOR_TEAMS:
            return Outcome.failed(
                InsufficientAthletes(
                    needed=MIN_ATHLETES_FOR_TEAMS - len(roster),
                    current_count=len(roster),
                )
            )

        teams = [DraftedTeam(index=i) for i in range(team_count)]
        for pick, athlete in enumerate(roster):
            teams[serpentine_slot(pick, team_count)].members.append(athlete)

        logger.info(
            f"Drafted {len(roster)} athletes into {team_count} teams, average ranks "
            f"{[team.average_rank for team in teams]}"
        )
        return Outcome.success(teams)
