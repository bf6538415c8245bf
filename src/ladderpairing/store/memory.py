"""In-memory implementation of every store, with JSON save files."""

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

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from ladderpairing.constants import SAVE_FILE_EXTENSION
from ladderpairing.exceptions import (
    AthleteNotFoundException,
    DuplicateAthleteException,
    GameDayNotFoundException,
    MatchNotFoundException,
    TeamNotFoundException,
)
from ladderpairing.models.athlete import Athlete, sort_by_rank
from ladderpairing.models.game_day import GameDay
from ladderpairing.models.match import Match
from ladderpairing.models.team import Team
from ladderpairing.store.base import LadderStore
from ladderpairing.utils import setup_logger

logger = setup_logger(__name__)


class InMemoryStore(LadderStore):
    """Dictionary-backed store used by the CLI, the simulator and tests.

    Stored objects are returned as-is, so callers mutate the stored match when
    they change a returned one; :meth:`update_match` is still called to keep
    other store implementations honest.
    """

    def __init__(self):
        self.athletes: Dict[str, Athlete] = {}
        self.game_days: Dict[str, GameDay] = {}
        self.matches: Dict[str, Match] = {}
        self.teams: Dict[str, Team] = {}

    # ========== Athletes ==========

    def add_athlete(self, athlete: Athlete) -> None:
        """Register a new athlete.

        Raises:
            DuplicateAthleteException: If the id is already taken
        """
        if athlete.id in self.athletes:
            raise DuplicateAthleteException(f"Athlete {athlete.id} already exists")
        self.athletes[athlete.id] = athlete

    def save_athlete(self, athlete: Athlete) -> None:
        self.athletes[athlete.id] = athlete

    def get_athlete(self, athlete_id: str) -> Athlete:
        try:
            return self.athletes[athlete_id]
        except KeyError:
            raise AthleteNotFoundException(f"Athlete {athlete_id} not found") from None

    def list_all_athletes(self) -> List[Athlete]:
        return sort_by_rank(self.athletes.values())

    def list_athletes(self, game_day_id: str) -> List[Athlete]:
        game_day = self.get_game_day(game_day_id)
        return sort_by_rank(self.get_athlete(aid) for aid in game_day.athlete_ids)

    # ========== Game days ==========

    def get_game_day(self, game_day_id: str) -> GameDay:
        try:
            return self.game_days[game_day_id]
        except KeyError:
            raise GameDayNotFoundException(f"Game day {game_day_id} not found") from None

    def save_game_day(self, game_day: GameDay) -> None:
        self.game_days[game_day.id] = game_day

    def list_game_days(self) -> List[GameDay]:
        return sorted(self.game_days.values(), key=lambda gd: gd.date, reverse=True)

    # ========== Matches ==========

    def save_matches(
        self, game_day_id: str, round_number: int, matches: Sequence[Match]
    ) -> None:
        self.get_game_day(game_day_id)
        for match in matches:
            self.matches[match.id] = match
        logger.debug(f"Stored {len(matches)} matches for round {round_number}")

    def list_matches(
        self,
        game_day_id: str,
        round_number: Optional[int] = None,
        group_number: Optional[int] = None,
    ) -> List[Match]:
        selected = [
            match
            for match in self.matches.values()
            if match.game_day_id == game_day_id
            and (round_number is None or match.round_number == round_number)
            and (group_number is None or match.group_number == group_number)
        ]
        # dicts keep insertion order, so creation order breaks ties
        return sorted(selected, key=lambda m: (m.round_number, m.group_number))

    def get_match(self, match_id: str) -> Match:
        try:
            return self.matches[match_id]
        except KeyError:
            raise MatchNotFoundException(f"Match {match_id} not found") from None

    def update_match(self, match: Match) -> None:
        if match.id not in self.matches:
            raise MatchNotFoundException(f"Match {match.id} not found")
        self.matches[match.id] = match

    def delete_matches(self, game_day_id: str) -> int:
        doomed = [mid for mid, m in self.matches.items() if m.game_day_id == game_day_id]
        for match_id in doomed:
            del self.matches[match_id]
        return len(doomed)

    # ========== Teams ==========

    def list_teams(self, game_day_id: str) -> List[Team]:
        teams = [team for team in self.teams.values() if team.game_day_id == game_day_id]
        return sorted(teams, key=lambda team: team.team_number)

    def get_team(self, team_id: str) -> Team:
        try:
            return self.teams[team_id]
        except KeyError:
            raise TeamNotFoundException(f"Team {team_id} not found") from None

    def save_team(self, team: Team) -> None:
        self.teams[team.id] = team

    def delete_teams(self, game_day_id: str) -> int:
        doomed = [tid for tid, t in self.teams.items() if t.game_day_id == game_day_id]
        for team_id in doomed:
            del self.teams[team_id]
        return len(doomed)

    # ========== Save files ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the whole store to dictionary."""
        return {
            "athletes": [athlete.to_dict() for athlete in self.list_all_athletes()],
            "game_days": [gd.to_dict() for gd in self.game_days.values()],
            "matches": [match.to_dict() for match in self.matches.values()],
            "teams": [team.to_dict() for team in self.teams.values()],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InMemoryStore":
        """Deserialize a store from dictionary."""
        store = cls()
        for item in data.get("athletes", []):
            store.add_athlete(Athlete.from_dict(item))
        for item in data.get("game_days", []):
            store.save_game_day(GameDay.from_dict(item))
        for item in data.get("matches", []):
            match = Match.from_dict(item)
            store.matches[match.id] = match
        for item in data.get("teams", []):
            store.save_team(Team.from_dict(item))
        return store

    def save(self, path: Union[str, Path]) -> Path:
        """Write the store to a JSON save file and return its path."""
        path = Path(path)
        if path.suffix != SAVE_FILE_EXTENSION:
            path = path.with_suffix(SAVE_FILE_EXTENSION)
        path.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")
        logger.info(f"Saved store to {path}")
        return path

    @classmethod
    def load(cls, path: Union[str, Path]) -> "InMemoryStore":
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_dict(json.load(f))
