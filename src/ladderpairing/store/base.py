"""Abstract record stores the draw engine's services depend on."""

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

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from ladderpairing.models.athlete import Athlete
from ladderpairing.models.game_day import GameDay
from ladderpairing.models.match import Match
from ladderpairing.models.team import Team


class RosterProvider(ABC):
    """Source of athletes.

    Implementations raise :class:`~ladderpairing.exceptions.AthleteNotFoundException`
    or :class:`~ladderpairing.exceptions.GameDayNotFoundException` for unknown ids.
    """

    @abstractmethod
    def list_athletes(self, game_day_id: str) -> List[Athlete]:
        """Athletes registered for a game day, best rank first."""
        raise NotImplementedError

    @abstractmethod
    def list_all_athletes(self) -> List[Athlete]:
        """Every known athlete, best rank first."""
        raise NotImplementedError

    @abstractmethod
    def get_athlete(self, athlete_id: str) -> Athlete:
        raise NotImplementedError

    @abstractmethod
    def save_athlete(self, athlete: Athlete) -> None:
        """Insert or replace an athlete."""
        raise NotImplementedError


class MatchStore(ABC):
    """Persistence of matches."""

    @abstractmethod
    def save_matches(
        self, game_day_id: str, round_number: int, matches: Sequence[Match]
    ) -> None:
        """Store newly generated matches of one round."""
        raise NotImplementedError

    @abstractmethod
    def list_matches(
        self,
        game_day_id: str,
        round_number: Optional[int] = None,
        group_number: Optional[int] = None,
    ) -> List[Match]:
        """Matches of a game day ordered by round, group and creation."""
        raise NotImplementedError

    @abstractmethod
    def get_match(self, match_id: str) -> Match:
        raise NotImplementedError

    @abstractmethod
    def update_match(self, match: Match) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete_matches(self, game_day_id: str) -> int:
        """Delete every match of a game day and return how many were removed."""
        raise NotImplementedError


class TeamStore(ABC):
    """Persistence of teams and pairs."""

    @abstractmethod
    def list_teams(self, game_day_id: str) -> List[Team]:
        """Teams of a game day ordered by team number."""
        raise NotImplementedError

    @abstractmethod
    def get_team(self, team_id: str) -> Team:
        raise NotImplementedError

    @abstractmethod
    def save_team(self, team: Team) -> None:
        """Insert or replace a team."""
        raise NotImplementedError

    @abstractmethod
    def delete_teams(self, game_day_id: str) -> int:
        raise NotImplementedError


class GameDayStore(ABC):
    """Persistence of game days and their settings."""

    @abstractmethod
    def get_game_day(self, game_day_id: str) -> GameDay:
        raise NotImplementedError

    @abstractmethod
    def save_game_day(self, game_day: GameDay) -> None:
        """Insert or replace a game day."""
        raise NotImplementedError

    @abstractmethod
    def list_game_days(self) -> List[GameDay]:
        raise NotImplementedError


class LadderStore(RosterProvider, MatchStore, TeamStore, GameDayStore):
    """Everything a game day service needs, from a single backend."""
