"""Team model used by the teams and pairs formats."""

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
from typing import Any, Dict, List, Optional

from ladderpairing.constants import TEAM_PALETTE
from ladderpairing.models.athlete import Athlete
from ladderpairing.utils import generate_id


@dataclass
class Team:
    """A team of athletes for one game day.

    Attributes:
        game_day_id: Owning game day
        team_number: Stable 1-based number
        team_name: Display name
        team_color: Display color
        members: Athletes on the team, draft order
        id: Unique team identifier
    """

    game_day_id: str
    team_number: int
    team_name: str
    team_color: str
    members: List[Athlete] = field(default_factory=list)
    id: str = field(default_factory=lambda: generate_id("team"))

    @property
    def member_ids(self) -> List[str]:
        return [member.id for member in self.members]

    @property
    def average_rank(self) -> Optional[float]:
        return average_rank(self.members)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize team to dictionary."""
        return {
            "id": self.id,
            "game_day_id": self.game_day_id,
            "team_number": self.team_number,
            "team_name": self.team_name,
            "team_color": self.team_color,
            "members": [member.to_dict() for member in self.members],
            "average_rank": self.average_rank,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Team":
        """Deserialize team from dictionary."""
        return cls(
            id=data["id"],
            game_day_id=data["game_day_id"],
            team_number=data["team_number"],
            team_name=data["team_name"],
            team_color=data["team_color"],
            members=[Athlete.from_dict(m) for m in data.get("members", [])],
        )


def average_rank(athletes: List[Athlete]) -> Optional[float]:
    """Average rank rounded to one decimal, 0.05 rounds up; None when empty."""
    if not athletes:
        return None
    avg = sum(athlete.rank for athlete in athletes) / len(athletes)
    return int(avg * 10 + 0.5) / 10


def team_presentation(team_number: int) -> tuple:
    """Default (name, color) for a 1-based team number."""
    if team_number <= len(TEAM_PALETTE):
        return TEAM_PALETTE[team_number - 1]
    return (f"Team {team_number}", f"team-{team_number}")
