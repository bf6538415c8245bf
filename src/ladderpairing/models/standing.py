"""Derived standings records.

Standings are never stored; they are recomputed from matches on demand.
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

from dataclasses import dataclass
from typing import Any, Dict, Tuple


@dataclass
class Record:
    """Win/loss and points tally shared by athlete, team and season rows."""

    wins: int = 0
    losses: int = 0
    points_for: int = 0
    points_against: int = 0
    matches_played: int = 0

    @property
    def points_diff(self) -> int:
        return self.points_for - self.points_against

    @property
    def win_rate(self) -> float:
        """Share of matches won, 0.0 with no matches."""
        if self.matches_played == 0:
            return 0.0
        return self.wins / self.matches_played

    def add_result(self, won: bool, own_score: int, opponent_score: int) -> None:
        """Fold one completed match into the tally."""
        self.matches_played += 1
        if won:
            self.wins += 1
        else:
            self.losses += 1
        self.points_for += own_score
        self.points_against += opponent_score

    def sort_key(self) -> Tuple[int, int, int]:
        """Descending ordering key: wins, points difference, points for."""
        return (-self.wins, -self.points_diff, -self.points_for)

    def stats_dict(self) -> Dict[str, Any]:
        return {
            "matches_played": self.matches_played,
            "wins": self.wins,
            "losses": self.losses,
            "points_for": self.points_for,
            "points_against": self.points_against,
            "points_diff": self.points_diff,
        }


@dataclass
class Standing(Record):
    """One athlete's record within a group and round."""

    athlete_id: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Serialize standing to dictionary."""
        return {
            "athlete_id": self.athlete_id,
            **self.stats_dict(),
            "win_rate": self.win_rate,
        }


@dataclass
class TeamStanding(Record):
    """A team's aggregated record over a game day (teams and pairs modes)."""

    team_id: str = ""
    team_name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Serialize team standing to dictionary."""
        return {
            "team_id": self.team_id,
            "team_name": self.team_name,
            **self.stats_dict(),
        }


@dataclass
class LeaderboardEntry(Record):
    """Season-wide record of one athlete across every game day."""

    athlete_id: str = ""
    name: str = ""
    rank: int = 0

    @property
    def win_percentage(self) -> float:
        return self.win_rate * 100

    def to_dict(self) -> Dict[str, Any]:
        """Serialize leaderboard entry to dictionary."""
        return {
            "athlete_id": self.athlete_id,
            "name": self.name,
            "rank": self.rank,
            **self.stats_dict(),
            "win_percentage": self.win_percentage,
        }
