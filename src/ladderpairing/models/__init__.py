"""Data models for Ladder Pairing."""

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

from ladderpairing.models.athlete import Athlete, sort_by_rank
from ladderpairing.models.game_day import GameDay, GameDaySettings
from ladderpairing.models.group import Group
from ladderpairing.models.match import Match, MatchSide, count_incomplete
from ladderpairing.models.outcomes import (
    Failure,
    IncompleteRound,
    InsufficientAthletes,
    MaxRoundsReached,
    NoPriorRound,
    NoTeams,
    NoValidAllocation,
    Outcome,
    UnpairedAthletes,
)
from ladderpairing.models.standing import (
    LeaderboardEntry,
    Record,
    Standing,
    TeamStanding,
)
from ladderpairing.models.team import Team

__all__ = [
    "Athlete",
    "sort_by_rank",
    "GameDay",
    "GameDaySettings",
    "Group",
    "Match",
    "MatchSide",
    "count_incomplete",
    "Failure",
    "IncompleteRound",
    "InsufficientAthletes",
    "MaxRoundsReached",
    "NoPriorRound",
    "NoTeams",
    "NoValidAllocation",
    "Outcome",
    "UnpairedAthletes",
    "LeaderboardEntry",
    "Record",
    "Standing",
    "TeamStanding",
    "Team",
]
