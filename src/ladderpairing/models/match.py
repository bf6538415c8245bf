"""Doubles match model."""

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
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from dateutil import parser as date_parser

from ladderpairing.constants import (
    STATUS_COMPLETED,
    STATUS_PENDING,
    TEAM_A,
    TEAM_B,
)
from ladderpairing.type_hints import MatchStatus, PairIds, Winner
from ladderpairing.utils import generate_id


@dataclass
class MatchSide:
    """One side of a doubles match.

    Attributes:
        players: The two athlete ids on this side
        score: Points scored, None until entered
    """

    players: PairIds
    score: Optional[int] = None

    def __contains__(self, athlete_id: str) -> bool:
        return athlete_id in self.players

    def to_dict(self) -> Dict[str, Any]:
        """Serialize side to dictionary."""
        return {"players": list(self.players), "score": self.score}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchSide":
        """Deserialize side from dictionary."""
        return cls(players=tuple(data["players"]), score=data.get("score"))


@dataclass
class Match:
    """A doubles match within one (game day, round, group).

    ``winner`` is set if and only if both scores are present and unequal;
    :meth:`apply_scores` is the only place that derives it.

    Attributes:
        game_day_id: Owning game day
        round_number: Round the match belongs to (1-indexed)
        group_number: Group the match belongs to (1 = top group)
        team_a: First side
        team_b: Second side
        bye: Athlete sitting out, only in five-athlete groups
        id: Unique match identifier
        status: ``pending`` until a winner exists, then ``completed``
        winner: ``teamA``, ``teamB`` or None
        court: Optional court assignment
        timestamp: When both scores were last entered
        team_a_team_id: Team of side A (teams and pairs modes)
        team_b_team_id: Team of side B (teams and pairs modes)
    """

    game_day_id: str
    round_number: int
    group_number: int
    team_a: MatchSide
    team_b: MatchSide
    bye: Optional[str] = None
    id: str = field(default_factory=lambda: generate_id("match"))
    status: MatchStatus = STATUS_PENDING
    winner: Winner = None
    court: Optional[int] = None
    timestamp: Optional[datetime] = None
    team_a_team_id: Optional[str] = None
    team_b_team_id: Optional[str] = None

    @property
    def is_completed(self) -> bool:
        """Whether the match has a winner."""
        return self.winner is not None

    @property
    def athlete_ids(self) -> List[str]:
        """All four athletes on court."""
        return [*self.team_a.players, *self.team_b.players]

    def side_of(self, athlete_id: str) -> Optional[str]:
        """Return ``teamA``/``teamB`` for an athlete on court, else None."""
        if athlete_id in self.team_a:
            return TEAM_A
        if athlete_id in self.team_b:
            return TEAM_B
        return None

    def scores_for(self, side: str) -> Tuple[int, int]:
        """Return (own score, opponent score) as seen from ``side``."""
        if side == TEAM_A:
            return self.team_a.score, self.team_b.score
        return self.team_b.score, self.team_a.score

    def apply_scores(
        self,
        team_a_score: Optional[int],
        team_b_score: Optional[int],
        when: Optional[datetime] = None,
    ) -> None:
        """Store scores and derive winner and status.

        Equal scores are rejected by the caller before they get here; if they
        arrive anyway the match simply stays pending.
        """
        self.team_a.score = team_a_score
        self.team_b.score = team_b_score

        self.winner = None
        self.status = STATUS_PENDING
        if team_a_score is None or team_b_score is None:
            return

        self.timestamp = when or datetime.now()
        if team_a_score > team_b_score:
            self.winner = TEAM_A
        elif team_b_score > team_a_score:
            self.winner = TEAM_B
        if self.winner is not None:
            self.status = STATUS_COMPLETED

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        return {
            "id": self.id,
            "game_day_id": self.game_day_id,
            "round": self.round_number,
            "group": self.group_number,
            "court": self.court,
            "team_a": self.team_a.to_dict(),
            "team_b": self.team_b.to_dict(),
            "bye": self.bye,
            "status": self.status,
            "winner": self.winner,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "team_a_team_id": self.team_a_team_id,
            "team_b_team_id": self.team_b_team_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Match":
        """Deserialize match from dictionary."""
        timestamp = data.get("timestamp")
        return cls(
            id=data["id"],
            game_day_id=data["game_day_id"],
            round_number=data["round"],
            group_number=data["group"],
            court=data.get("court"),
            team_a=MatchSide.from_dict(data["team_a"]),
            team_b=MatchSide.from_dict(data["team_b"]),
            bye=data.get("bye"),
            status=data.get("status", STATUS_PENDING),
            winner=data.get("winner"),
            timestamp=date_parser.isoparse(timestamp) if timestamp else None,
            team_a_team_id=data.get("team_a_team_id"),
            team_b_team_id=data.get("team_b_team_id"),
        )


def count_incomplete(matches: List[Match]) -> int:
    """Number of matches still waiting for a winner."""
    return sum(1 for match in matches if not match.is_completed)
