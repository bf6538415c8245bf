"""Season leaderboard across all game days."""

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

from typing import Dict, Iterable, List, Sequence

from ladderpairing.models.athlete import Athlete
from ladderpairing.models.match import Match
from ladderpairing.models.standing import LeaderboardEntry
from ladderpairing.utils import setup_logger

logger = setup_logger(__name__)


class LeaderboardCalculator:
    """Aggregates every completed match of a season per athlete."""

    def calculate(
        self, athletes: Sequence[Athlete], matches: Iterable[Match]
    ) -> List[LeaderboardEntry]:
        """Season records for the given athletes, in the order given.

        Matches naming athletes outside ``athletes`` still count for the ones
        inside.
        """
        entries: Dict[str, LeaderboardEntry] = {
            athlete.id: LeaderboardEntry(
                athlete_id=athlete.id, name=athlete.name, rank=athlete.rank
            )
            for athlete in athletes
        }
        for match in matches:
            if not match.is_completed:
                continue
            for athlete_id in match.athlete_ids:
                entry = entries.get(athlete_id)
                if entry is None:
                    continue
                side = match.side_of(athlete_id)
                own, opponent = match.scores_for(side)
                entry.add_result(match.winner == side, own, opponent)
        return list(entries.values())

    def ranked(
        self, athletes: Sequence[Athlete], matches: Iterable[Match]
    ) -> List[LeaderboardEntry]:
        """Leaderboard ordered by wins, then win percentage, then current rank."""
        return sorted(
            self.calculate(athletes, matches),
            key=lambda entry: (-entry.wins, -entry.win_rate, entry.rank),
        )

    def sync_ranks(
        self, athletes: Sequence[Athlete], matches: Iterable[Match]
    ) -> List[Athlete]:
        """Reassign contiguous ranks 1..N in leaderboard order.

        Returns:
            New Athlete values, best first; the inputs are left untouched
        """
        by_id = {athlete.id: athlete for athlete in athletes}
        updated = []
        for new_rank, entry in enumerate(self.ranked(athletes, matches), start=1):
            athlete = by_id[entry.athlete_id]
            if athlete.rank != new_rank:
                logger.debug(f"{athlete.name}: rank {athlete.rank} -> {new_rank}")
            updated.append(athlete.with_rank(new_rank))
        logger.info(f"Synchronised ranks of {len(updated)} athletes")
        return updated
