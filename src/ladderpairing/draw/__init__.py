"""Draw and ladder movement engine."""

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

from ladderpairing.draw.allocator import Allocation, GroupAllocator, split_into_groups
from ladderpairing.draw.draft import DraftAllocator, DraftedTeam, serpentine_slot
from ladderpairing.draw.ladder import (
    GroupMovement,
    LadderMover,
    LadderMovement,
    recompose,
)
from ladderpairing.draw.leaderboard import LeaderboardCalculator
from ladderpairing.draw.round_robin import (
    PairsRoundRobin,
    RoundRobinGenerator,
    circle_rounds,
    partner_rotations,
    verify_group_matches,
)
from ladderpairing.draw.standings import StandingsCalculator
from ladderpairing.draw.team_schedule import TeamMatchScheduler, games_per_athlete

__all__ = [
    "Allocation",
    "GroupAllocator",
    "split_into_groups",
    "DraftAllocator",
    "DraftedTeam",
    "serpentine_slot",
    "GroupMovement",
    "LadderMover",
    "LadderMovement",
    "recompose",
    "LeaderboardCalculator",
    "PairsRoundRobin",
    "RoundRobinGenerator",
    "circle_rounds",
    "partner_rotations",
    "verify_group_matches",
    "StandingsCalculator",
    "TeamMatchScheduler",
    "games_per_athlete",
]
