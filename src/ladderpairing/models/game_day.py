"""Game day and its settings.

This module defines the configuration layer for a single game day.
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

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, Union

from dateutil import parser as date_parser

from ladderpairing.constants import (
    DEFAULT_FORMAT,
    DEFAULT_MOVEMENT_RULE,
    DEFAULT_NUMBER_OF_ROUNDS,
    DEFAULT_NUMBER_OF_TEAMS,
    DEFAULT_POINTS_TO_WIN,
    DEFAULT_WIN_BY_MARGIN,
    FORMATS,
    GAME_DAY_UPCOMING,
    MIN_TEAMS,
    MOVEMENT_AUTO,
    MOVEMENT_RULES,
)
from ladderpairing.exceptions import InvalidConfigurationException
from ladderpairing.type_hints import GameDayFormat, GameDayStatus, MovementRule
from ladderpairing.utils import generate_id


@dataclass
class GameDaySettings:
    """Configuration settings for a game day.

    Attributes:
        format: ``group`` (ladder), ``teams`` or ``pairs``
        points_to_win: Target score of a game
        win_by_margin: Required winning margin
        number_of_rounds: Rounds played in group format
        movement_rule: ``auto``, ``1`` or ``2`` athletes up/down per group
        number_of_teams: Team count for the teams format
    """

    format: GameDayFormat = DEFAULT_FORMAT
    points_to_win: int = DEFAULT_POINTS_TO_WIN
    win_by_margin: int = DEFAULT_WIN_BY_MARGIN
    number_of_rounds: int = DEFAULT_NUMBER_OF_ROUNDS
    movement_rule: MovementRule = DEFAULT_MOVEMENT_RULE
    number_of_teams: int = DEFAULT_NUMBER_OF_TEAMS

    def __post_init__(self) -> None:
        if self.format not in FORMATS:
            raise InvalidConfigurationException(
                f"Unknown format '{self.format}', expected one of {FORMATS}"
            )
        if self.movement_rule not in MOVEMENT_RULES:
            raise InvalidConfigurationException(
                f"Unknown movement rule '{self.movement_rule}'"
            )
        if self.number_of_rounds < 1:
            raise InvalidConfigurationException("A game day needs at least one round")
        if self.number_of_teams < MIN_TEAMS:
            raise InvalidConfigurationException(
                f"At least {MIN_TEAMS} teams are required"
            )
        if self.points_to_win < 1 or self.win_by_margin < 1:
            raise InvalidConfigurationException(
                "points_to_win and win_by_margin must be positive"
            )

    @property
    def movement_override(self) -> Optional[int]:
        """Explicit movement count, or None when derived from the allocation."""
        if self.movement_rule == MOVEMENT_AUTO:
            return None
        return int(self.movement_rule)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize settings to dictionary."""
        return {
            "format": self.format,
            "points_to_win": self.points_to_win,
            "win_by_margin": self.win_by_margin,
            "number_of_rounds": self.number_of_rounds,
            "movement_rule": self.movement_rule,
            "number_of_teams": self.number_of_teams,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameDaySettings":
        """Deserialize settings from dictionary."""
        return cls(
            format=data.get("format", DEFAULT_FORMAT),
            points_to_win=data.get("points_to_win", DEFAULT_POINTS_TO_WIN),
            win_by_margin=data.get("win_by_margin", DEFAULT_WIN_BY_MARGIN),
            number_of_rounds=data.get("number_of_rounds", DEFAULT_NUMBER_OF_ROUNDS),
            movement_rule=str(data.get("movement_rule", DEFAULT_MOVEMENT_RULE)),
            number_of_teams=data.get("number_of_teams", DEFAULT_NUMBER_OF_TEAMS),
        )


@dataclass
class GameDay:
    """A single tournament day.

    Attributes:
        date: Day of play
        venue: Where it is played
        settings: Format and scoring configuration
        status: ``upcoming``, ``in_progress`` or ``completed``
        athlete_ids: Registered athletes
        id: Unique game day identifier
    """

    date: date
    venue: str
    settings: GameDaySettings = field(default_factory=GameDaySettings)
    status: GameDayStatus = GAME_DAY_UPCOMING
    athlete_ids: List[str] = field(default_factory=list)
    id: str = field(default_factory=lambda: generate_id("gd"))

    @property
    def format(self) -> str:
        return self.settings.format

    def to_dict(self) -> Dict[str, Any]:
        """Serialize game day to dictionary."""
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "venue": self.venue,
            "status": self.status,
            "settings": self.settings.to_dict(),
            "athlete_ids": list(self.athlete_ids),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameDay":
        """Deserialize game day from dictionary."""
        return cls(
            id=data["id"],
            date=parse_date(data["date"]),
            venue=data.get("venue", ""),
            status=data.get("status", GAME_DAY_UPCOMING),
            settings=GameDaySettings.from_dict(data.get("settings", {})),
            athlete_ids=list(data.get("athlete_ids", [])),
        )


def parse_date(value: Union[str, date]) -> date:
    """Accept a date, a datetime or any string dateutil understands."""
    if isinstance(value, date):
        return value if type(value) is date else value.date()
    try:
        return date_parser.parse(value).date()
    except (ValueError, OverflowError) as exc:
        raise InvalidConfigurationException(f"Invalid game day date: {value!r}") from exc
