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

# --- Constants ---
SAVE_FILE_EXTENSION = ".json"

# Group sizes
MIN_GROUP_SIZE = 4
MAX_GROUP_SIZE = 5
VALID_GROUP_SIZES = (MIN_GROUP_SIZE, MAX_GROUP_SIZE)
MIN_ATHLETES_FOR_DRAW = 2 * MIN_GROUP_SIZE
MIN_ATHLETES_FOR_TEAMS = 2
MIN_TEAMS = 2
MIN_PAIRS = 2
PAIR_SIZE = 2

# Canonical doubles round-robin tables, indices into the rank-ordered group.
# Each entry is (team_a, team_b, bye).
FOUR_PLAYER_ROTATION = (
    ((0, 1), (2, 3), None),
    ((0, 2), (1, 3), None),
    ((0, 3), (1, 2), None),
)
FIVE_PLAYER_ROTATION = (
    ((0, 1), (2, 3), 4),
    ((0, 2), (3, 4), 1),
    ((0, 3), (1, 4), 2),
    ((0, 4), (1, 2), 3),
    ((1, 3), (2, 4), 0),
)
ROTATIONS_BY_SIZE = {
    4: FOUR_PLAYER_ROTATION,
    5: FIVE_PLAYER_ROTATION,
}

# Match sides and states
TEAM_A = "teamA"
TEAM_B = "teamB"
STATUS_PENDING = "pending"
STATUS_COMPLETED = "completed"

# Game day states
GAME_DAY_UPCOMING = "upcoming"
GAME_DAY_IN_PROGRESS = "in_progress"
GAME_DAY_COMPLETED = "completed"

# Game day formats
FORMAT_GROUP = "group"
FORMAT_TEAMS = "teams"
FORMAT_PAIRS = "pairs"
FORMATS = (FORMAT_GROUP, FORMAT_TEAMS, FORMAT_PAIRS)

# Movement rules ("k up, k down")
MOVEMENT_AUTO = "auto"
MOVEMENT_ONE = "1"
MOVEMENT_TWO = "2"
MOVEMENT_RULES = (MOVEMENT_AUTO, MOVEMENT_ONE, MOVEMENT_TWO)
MOVEMENT_LABELS = {
    1: "1 up, 1 down",
    2: "2 up, 2 down",
}

# Game day defaults
DEFAULT_FORMAT = FORMAT_GROUP
DEFAULT_POINTS_TO_WIN = 11
DEFAULT_WIN_BY_MARGIN = 2
DEFAULT_NUMBER_OF_ROUNDS = 3
DEFAULT_MOVEMENT_RULE = MOVEMENT_AUTO
DEFAULT_NUMBER_OF_TEAMS = 2

# Teams mode scheduling
DEFAULT_TWO_TEAM_ROUNDS = 8
GAMES_PER_TEAM_MATCHUP = 2
TARGET_GAMES_PER_PLAYER = 8

# Pair selection weights for multi-team scheduling (lower score wins)
VERSUS_COVERAGE_WEIGHT = 100
GAMES_PLAYED_WEIGHT = 10
DUPLICATE_MATCHUP_PENALTY = 50

# Presentation defaults for drafted teams; the draft itself is palette-agnostic
TEAM_PALETTE = (
    ("Blue Team", "blue"),
    ("Red Team", "red"),
    ("Green Team", "green"),
    ("Yellow Team", "yellow"),
)

# Logging
LOG_LEVEL_ENV_VAR = "LADDER_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"
