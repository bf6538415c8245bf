"""Team and pair management for the teams and pairs formats."""

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

from typing import List, Optional, Sequence

from ladderpairing.constants import FORMAT_PAIRS, FORMAT_TEAMS, PAIR_SIZE
from ladderpairing.draw.draft import DraftAllocator
from ladderpairing.exceptions import (
    InvalidPairException,
    TeamException,
    TeamsLockedException,
)
from ladderpairing.models.athlete import sort_by_rank
from ladderpairing.models.outcomes import Outcome
from ladderpairing.models.team import Team, team_presentation
from ladderpairing.store.base import GameDayStore, MatchStore, RosterProvider, TeamStore
from ladderpairing.utils import setup_logger

logger = setup_logger(__name__)


class TeamManager:
    """Creates teams and edits their membership until matches exist.

    Team membership is frozen once a game day has matches: schedules refer to
    the athletes that were on each team when they were generated.
    """

    def __init__(
        self,
        roster: RosterProvider,
        team_store: TeamStore,
        match_store: MatchStore,
        game_day_store: GameDayStore,
        draft_allocator: Optional[DraftAllocator] = None,
    ):
        self.roster = roster
        self.team_store = team_store
        self.match_store = match_store
        self.game_day_store = game_day_store
        self.draft_allocator = draft_allocator or DraftAllocator()

    def generate_teams(self, game_day_id: str) -> Outcome[List[Team]]:
        """Draft the game day's athletes into its configured number of teams.

        Existing teams of the game day are replaced.

        Returns:
            Outcome with the new teams, or InsufficientAthletes

        Raises:
            TeamException: If the game day is not in the teams format
            TeamsLockedException: If matches were already generated
        """
        game_day = self.game_day_store.get_game_day(game_day_id)
        if game_day.format != FORMAT_TEAMS:
            raise TeamException(
                f"Game day {game_day_id} uses the {game_day.format} format, not teams"
            )
        self._ensure_unlocked(game_day_id)

        athletes = self.roster.list_athletes(game_day_id)
        outcome = self.draft_allocator.draft(athletes, game_day.settings.number_of_teams)
        if not outcome:
            return Outcome.failed(outcome.failure)

        removed = self.team_store.delete_teams(game_day_id)
        if removed:
            logger.info(f"Replaced {removed} existing teams of game day {game_day_id}")

        teams = []
        for drafted in outcome.value:
            name, color = team_presentation(drafted.index + 1)
            team = Team(
                game_day_id=game_day_id,
                team_number=drafted.index + 1,
                team_name=name,
                team_color=color,
                members=list(drafted.members),
            )
            self.team_store.save_team(team)
            teams.append(team)
            logger.info(
                f"{name}: {len(team.members)} athletes, average rank {team.average_rank}"
            )
        return Outcome.success(teams)

    def create_pair(self, game_day_id: str, athlete_ids: Sequence[str]) -> Team:
        """Register a fixed pair for a pairs-format game day.

        Raises:
            InvalidPairException: If not exactly two distinct athletes are given
            TeamException: If an athlete is already paired or the format is wrong
        """
        game_day = self.game_day_store.get_game_day(game_day_id)
        if game_day.format != FORMAT_PAIRS:
            raise TeamException(
                f"Game day {game_day_id} uses the {game_day.format} format, not pairs"
            )
        if len(set(athlete_ids)) != PAIR_SIZE:
            raise InvalidPairException(
                f"A pair needs exactly two different athletes, got {list(athlete_ids)}"
            )
        self._ensure_unlocked(game_day_id)
        for athlete_id in athlete_ids:
            self._ensure_unassigned(game_day_id, athlete_id)

        members = sort_by_rank(self.roster.get_athlete(aid) for aid in athlete_ids)
        existing = self.team_store.list_teams(game_day_id)
        team_number = max((team.team_number for team in existing), default=0) + 1
        pair = Team(
            game_day_id=game_day_id,
            team_number=team_number,
            team_name=" & ".join(member.name for member in members),
            team_color=f"team-{team_number}",
            members=members,
        )
        self.team_store.save_team(pair)
        logger.info(f"Created pair {team_number}: {pair.team_name}")
        return pair

    def update_team(
        self,
        team_id: str,
        team_name: Optional[str] = None,
        team_color: Optional[str] = None,
    ) -> Team:
        """Rename or recolor a team; allowed at any time."""
        team = self.team_store.get_team(team_id)
        if team_name:
            team.team_name = team_name
        if team_color:
            team.team_color = team_color
        self.team_store.save_team(team)
        return team

    def add_member(self, team_id: str, athlete_id: str) -> Team:
        """Put an athlete on a team.

        Raises:
            TeamsLockedException: If matches were already generated
            TeamException: If the athlete already plays for a team of the game day
        """
        team = self.team_store.get_team(team_id)
        self._ensure_unlocked(team.game_day_id)
        self._ensure_unassigned(team.game_day_id, athlete_id)

        team.members = sort_by_rank([*team.members, self.roster.get_athlete(athlete_id)])
        self.team_store.save_team(team)
        logger.info(f"Added {athlete_id} to {team.team_name}")
        return team

    def remove_member(self, team_id: str, athlete_id: str) -> Team:
        """Take an athlete off a team.

        Raises:
            TeamsLockedException: If matches were already generated
            TeamException: If the athlete is not on the team
        """
        team = self.team_store.get_team(team_id)
        self._ensure_unlocked(team.game_day_id)
        if athlete_id not in team.member_ids:
            raise TeamException(f"Athlete {athlete_id} is not in {team.team_name}")

        team.members = [m for m in team.members if m.id != athlete_id]
        self.team_store.save_team(team)
        logger.info(f"Removed {athlete_id} from {team.team_name}")
        return team

    def swap_members(
        self, first_team_id: str, first_athlete_id: str, second_team_id: str, second_athlete_id: str
    ) -> None:
        """Exchange two athletes between teams of the same game day."""
        if first_team_id == second_team_id:
            raise TeamException("Cannot swap athletes within the same team")
        first = self.team_store.get_team(first_team_id)
        second = self.team_store.get_team(second_team_id)
        if first.game_day_id != second.game_day_id:
            raise TeamException("Cannot swap athletes between different game days")
        self._ensure_unlocked(first.game_day_id)
        if first_athlete_id not in first.member_ids:
            raise TeamException(f"Athlete {first_athlete_id} is not in {first.team_name}")
        if second_athlete_id not in second.member_ids:
            raise TeamException(f"Athlete {second_athlete_id} is not in {second.team_name}")

        incoming_first = self.roster.get_athlete(second_athlete_id)
        incoming_second = self.roster.get_athlete(first_athlete_id)
        first.members = sort_by_rank(
            [m for m in first.members if m.id != first_athlete_id] + [incoming_first]
        )
        second.members = sort_by_rank(
            [m for m in second.members if m.id != second_athlete_id] + [incoming_second]
        )
        self.team_store.save_team(first)
        self.team_store.save_team(second)
        logger.info(
            f"Swapped {first_athlete_id} ({first.team_name}) with "
            f"{second_athlete_id} ({second.team_name})"
        )

    def unassigned_athletes(self, game_day_id: str) -> List[str]:
        """Registered athletes of the game day who are on no team."""
        assigned = {
            athlete_id
            for team in self.team_store.list_teams(game_day_id)
            for athlete_id in team.member_ids
        }
        return [a.id for a in self.roster.list_athletes(game_day_id) if a.id not in assigned]

    def _ensure_unlocked(self, game_day_id: str) -> None:
        if self.match_store.list_matches(game_day_id):
            raise TeamsLockedException(
                "Teams cannot change after matches have been generated; cancel the draw first"
            )

    def _ensure_unassigned(self, game_day_id: str, athlete_id: str) -> None:
        for team in self.team_store.list_teams(game_day_id):
            if athlete_id in team.member_ids:
                raise TeamException(f"Athlete {athlete_id} is already in {team.team_name}")
