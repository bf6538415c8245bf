"""Score recording for game day matches.

This module records match scores with validation and keeps the game day's
status in step with its matches.
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

from datetime import datetime
from typing import Any, List, Optional

from ladderpairing.constants import (
    FORMAT_GROUP,
    GAME_DAY_COMPLETED,
    GAME_DAY_IN_PROGRESS,
    GAME_DAY_UPCOMING,
)
from ladderpairing.exceptions import TiedScoreException
from ladderpairing.models.game_day import GameDay
from ladderpairing.models.match import Match, count_incomplete
from ladderpairing.store.base import GameDayStore, MatchStore
from ladderpairing.utils import setup_logger
from ladderpairing.utils.validation import (
    ValidationResult,
    validate_game_score,
    validate_score_strict,
)

logger = setup_logger(__name__)


class ResultRecorder:
    """Records match scores.

    This class is responsible for:
    - Validating entered scores
    - Rejecting tied final scores
    - Deriving each match's winner and status
    - Moving the game day between upcoming, in progress and completed
    """

    def __init__(self, match_store: MatchStore, game_day_store: GameDayStore):
        self.match_store = match_store
        self.game_day_store = game_day_store

    def record_score(
        self,
        match_id: str,
        team_a_score: Any = None,
        team_b_score: Any = None,
        when: Optional[datetime] = None,
    ) -> Match:
        """Enter one or both scores of a match.

        A side given as None keeps the score already stored, so scores can be
        entered one side at a time.

        Args:
            match_id: Match to update
            team_a_score: Points of side A
            team_b_score: Points of side B
            when: Timestamp to stamp when both scores are present

        Returns:
            The updated match

        Raises:
            MatchNotFoundException: If the match does not exist
            InvalidScoreException: If a score is not a non-negative integer
            TiedScoreException: If both final scores are equal
        """
        match = self.match_store.get_match(match_id)

        new_a = validate_score_strict(team_a_score)
        new_b = validate_score_strict(team_b_score)
        final_a = new_a if new_a is not None else match.team_a.score
        final_b = new_b if new_b is not None else match.team_b.score

        if final_a is not None and final_a == final_b:
            logger.warning(f"Match {match_id}: rejected tied score {final_a}-{final_b}")
            raise TiedScoreException(
                f"Scores cannot be tied ({final_a}-{final_b}); a game needs a winner"
            )

        match.apply_scores(final_a, final_b, when=when)
        self.match_store.update_match(match)

        if match.is_completed:
            logger.info(
                f"Match {match_id} (round {match.round_number}, group "
                f"{match.group_number}): {final_a}-{final_b}, {match.winner} wins"
            )
        else:
            logger.debug(f"Match {match_id}: partial score {final_a}-{final_b}")

        self.refresh_status(match.game_day_id)
        return match

    def check_score(self, game_day_id: str, team_a_score: int, team_b_score: int) -> ValidationResult:
        """Validate a final score against the game day's points and margin settings."""
        settings = self.game_day_store.get_game_day(game_day_id).settings
        return validate_game_score(
            team_a_score,
            team_b_score,
            points_to_win=settings.points_to_win,
            win_by_margin=settings.win_by_margin,
        )

    def refresh_status(self, game_day_id: str) -> GameDay:
        """Re-derive the game day status from its matches.

        No matches means upcoming. Every match finished, with every round of a
        ladder game day generated, means completed. Anything else is in progress.
        """
        game_day = self.game_day_store.get_game_day(game_day_id)
        matches = self.match_store.list_matches(game_day_id)
        status = derive_status(game_day, matches)
        if status != game_day.status:
            logger.info(f"Game day {game_day_id}: {game_day.status} -> {status}")
            game_day.status = status
            self.game_day_store.save_game_day(game_day)
        return game_day


def derive_status(game_day: GameDay, matches: List[Match]) -> str:
    if not matches:
        return GAME_DAY_UPCOMING
    if count_incomplete(matches):
        return GAME_DAY_IN_PROGRESS
    if game_day.format == FORMAT_GROUP:
        latest_round = max(match.round_number for match in matches)
        if latest_round < game_day.settings.number_of_rounds:
            return GAME_DAY_IN_PROGRESS
    return GAME_DAY_COMPLETED
