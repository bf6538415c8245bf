"""Group model: a cohort of 4 or 5 athletes playing one round together."""

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
from typing import Any, Dict, List

from ladderpairing.constants import ROTATIONS_BY_SIZE, VALID_GROUP_SIZES
from ladderpairing.models.athlete import Athlete


@dataclass
class Group:
    """An ordered group for one round.

    Attributes:
        group_number: 1-based position, 1 is the top group
        round_number: Round this composition is for
        athletes: Members in draw order
    """

    group_number: int
    round_number: int
    athletes: List[Athlete] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.athletes)

    @property
    def athlete_ids(self) -> List[str]:
        return [athlete.id for athlete in self.athletes]

    @property
    def is_valid_size(self) -> bool:
        return self.size in VALID_GROUP_SIZES

    @property
    def matches_count(self) -> int:
        """Number of round-robin matches this group will play (0 if unplayable)."""
        return len(ROTATIONS_BY_SIZE.get(self.size, ()))

    @property
    def has_bye(self) -> bool:
        return self.size == max(VALID_GROUP_SIZES)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize group to dictionary."""
        return {
            "group_number": self.group_number,
            "round": self.round_number,
            "size": self.size,
            "athletes": [athlete.to_dict() for athlete in self.athletes],
            "matches_count": self.matches_count,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Group":
        """Deserialize group from dictionary."""
        return cls(
            group_number=data["group_number"],
            round_number=data.get("round", 1),
            athletes=[Athlete.from_dict(a) for a in data.get("athletes", [])],
        )
