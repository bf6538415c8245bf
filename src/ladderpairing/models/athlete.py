"""Athlete value object.

Athletes belong to the roster store; the draw engine only reads them.
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

from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, List

from ladderpairing.utils.validation import validate_rank_strict


@dataclass(frozen=True)
class Athlete:
    """A ranked athlete.

    Attributes:
        id: Opaque identifier from the roster store
        name: Display name
        rank: Global rank, 1 is the best
    """

    id: str
    name: str
    rank: int

    def __post_init__(self) -> None:
        validate_rank_strict(self.rank)

    def with_rank(self, rank: int) -> "Athlete":
        """Return a copy of this athlete holding a new rank."""
        return replace(self, rank=rank)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize athlete to dictionary."""
        return {"id": self.id, "name": self.name, "rank": self.rank}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Athlete":
        """Deserialize athlete from dictionary."""
        return cls(id=data["id"], name=data.get("name", data["id"]), rank=data["rank"])


def sort_by_rank(athletes: Iterable[Athlete]) -> List[Athlete]:
    """Order athletes best rank first; equal ranks keep their input order."""
    return sorted(athletes, key=lambda athlete: athlete.rank)
