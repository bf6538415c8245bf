"""Standings calculation for a group and round."""

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

from typing import Dict, Iterable, List, Optional, Sequence

from ladderpairing.constants import TEAM_A, TEAM_B
from ladderpairing.models.match import Match
from ladderpairing.models.standing import Standing, TeamStanding
from ladderpairing.models.team import Team
from ladderpairing.utils import setup_logger

logger = setup_logger(__name__)


class StandingsCalculator:
    """Computes per-athlete records and their order.

    Only matches with a winner are counted. The order is wins, then points
    difference, then points for, all descending; athletes tied on all three
    keep the order in which they were first seen.
    """

    def calculate(
        self,
        matches: Iterable[Match],
        athlete_ids: Optional[Sequence[str]] = None,
    ) -> List[Standing]:
        """Compute standings for one group's matches.

        Args:
            matches: Matches of one (round, group); incomplete ones are ignored
            athlete_ids: Optional group members; members without a completed
                match are listed after everyone with a record

        Returns:
            Standings, best first; empty when nothing has been completed and no
            members were given
        """
        completed = [match for match in matches if match.is_completed]

        records: Dict[str, Standing] = {}
        for match in completed:
            for athlete_id in match.athlete_ids:
                if athlete_id == match.bye:
                    continue
                standing = records.setdefault(athlete_id, Standing(athlete_id=athlete_id))
                side = match.side_of(athlete_id)
                own, opponent = match.scores_for(side)
                standing.add_result(match.winner == side, own, opponent)

        standings = sorted(records.values(), key=Standing.sort_key)

        if athlete_ids is not None:
            unplayed = [aid for aid in athlete_ids if aid not in records]
            if unplayed and completed:
                logger.warning(f"Athletes without completed matches: {unplayed}")
            standings.extend(Standing(athlete_id=aid) for aid in unplayed)

        return standings

    def calculate_for_athlete(
        self, matches: Iterable[Match], athlete_id: str
    ) -> Standing:
        """Record of one athlete over any set of matches (e.g. a whole game day)."""
        relevant = [
            match
            for match in matches
            if match.side_of(athlete_id) is not None and match.bye != athlete_id
        ]
        for standing in self.calculate(relevant):
            if standing.athlete_id == athlete_id:
                return standing
        return Standing(athlete_id=athlete_id)

    def calculate_teams(
        self, teams: Sequence[Team], matches: Iterable[Match]
    ) -> List[TeamStanding]:
        """Aggregate completed team matches into team standings.

        Args:
            teams: Teams of the game day
            matches: Matches tagged with team ids

        Returns:
            Team standings, best first (wins, points difference, points for)
        """
        records = {
            team.id: TeamStanding(team_id=team.id, team_name=team.team_name)
            for team in teams
        }
        for match in matches:
            if not match.is_completed:
                continue
            for side, team_id in ((TEAM_A, match.team_a_team_id), (TEAM_B, match.team_b_team_id)):
                record = records.get(team_id)
                if record is None:
                    continue
                own, opponent = match.scores_for(side)
                record.add_result(match.winner == side, own, opponent)

        return sorted(records.values(), key=TeamStanding.sort_key)
