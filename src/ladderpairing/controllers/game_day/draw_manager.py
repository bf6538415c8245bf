"""Game day orchestration: draws, rounds and statistics.

The :class:`GameDayManager` wires the draw engine to a store. It is the single
writer of a game day's matches: draw generation, next-round generation and
cancellation of the same game day never run concurrently.
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

import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ladderpairing.constants import (
    FORMAT_GROUP,
    FORMAT_PAIRS,
    FORMAT_TEAMS,
    MIN_GROUP_SIZE,
    MIN_PAIRS,
    MIN_TEAMS,
)
from ladderpairing.controllers.game_day.result_recorder import ResultRecorder
from ladderpairing.draw import (
    GroupAllocator,
    LadderMover,
    LadderMovement,
    PairsRoundRobin,
    RoundRobinGenerator,
    StandingsCalculator,
    TeamMatchScheduler,
    games_per_athlete,
)
from ladderpairing.draw.allocator import Allocation
from ladderpairing.models.athlete import sort_by_rank
from ladderpairing.models.group import Group
from ladderpairing.models.match import Match
from ladderpairing.models.outcomes import (
    MaxRoundsReached,
    NoPriorRound,
    NoTeams,
    Outcome,
    UnpairedAthletes,
)
from ladderpairing.models.standing import Standing, TeamStanding
from ladderpairing.store.base import LadderStore
from ladderpairing.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class DrawSummary:
    """What a draw generation produced.

    Attributes:
        format: Game day format the draw was made for
        matches: Every match created
        rounds: Number of rounds created
        groups: Round 1 groups (group format only)
        allocation: Allocation description (group format only)
    """

    format: str
    matches: List[Match] = field(default_factory=list)
    rounds: int = 1
    groups: List[Group] = field(default_factory=list)
    allocation: Optional[str] = None

    @property
    def matches_generated(self) -> int:
        return len(self.matches)

    def games_per_player(self) -> Dict[str, float]:
        """Min, max and average scheduled games per athlete."""
        counts = list(games_per_athlete(self.matches).values())
        if not counts:
            return {"min": 0, "max": 0, "avg": 0.0}
        return {
            "min": min(counts),
            "max": max(counts),
            "avg": round(sum(counts) / len(counts), 1),
        }

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "format": self.format,
            "matches_generated": self.matches_generated,
            "rounds": self.rounds,
            "games_per_player": self.games_per_player(),
        }
        if self.format == FORMAT_GROUP:
            data["groups"] = len(self.groups)
            data["group_sizes"] = [group.size for group in self.groups]
            data["allocation"] = self.allocation
        return data


class GameDayManager:
    """Runs the draw lifecycle of game days stored in a :class:`LadderStore`."""

    def __init__(self, store: LadderStore):
        self.store = store
        self.allocator = GroupAllocator()
        self.round_robin = RoundRobinGenerator()
        self.standings = StandingsCalculator()
        self.ladder = LadderMover(self.standings)
        self.team_scheduler = TeamMatchScheduler()
        self.pairs_round_robin = PairsRoundRobin()
        self.results = ResultRecorder(store, store)
        self._locks: Dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def _lock_for(self, game_day_id: str) -> threading.Lock:
        with self._locks_guard:
            return self._locks.setdefault(game_day_id, threading.Lock())

    # ========== Draw lifecycle ==========

    def preview_draw(self, game_day_id: str) -> Outcome[Allocation]:
        """Allocation the group draw would use, without creating matches."""
        athletes = self.store.list_athletes(game_day_id)
        return self.allocator.allocate(athletes)

    def generate_draw(self, game_day_id: str) -> Outcome[DrawSummary]:
        """Create the game day's matches according to its format.

        Any existing matches of the game day are deleted first. The group
        format creates round 1 only; teams and pairs create the full schedule.

        Returns:
            Outcome with a DrawSummary, or the failure that prevented the draw
        """
        game_day = self.store.get_game_day(game_day_id)
        with self._lock_for(game_day_id):
            if game_day.format == FORMAT_TEAMS:
                outcome = self._draw_teams(game_day_id)
            elif game_day.format == FORMAT_PAIRS:
                outcome = self._draw_pairs(game_day_id)
            else:
                outcome = self._draw_groups(game_day_id)

            if not outcome:
                logger.info(f"Draw for {game_day_id} not generated: {outcome.failure.message}")
                return outcome

            summary = outcome.value
            deleted = self.store.delete_matches(game_day_id)
            if deleted:
                logger.info(f"Replaced {deleted} existing matches of {game_day_id}")
            for round_number in sorted({m.round_number for m in summary.matches}):
                self.store.save_matches(
                    game_day_id,
                    round_number,
                    [m for m in summary.matches if m.round_number == round_number],
                )
            self.results.refresh_status(game_day_id)

        logger.info(
            f"Draw generated for {game_day_id} ({summary.format}): "
            f"{summary.matches_generated} matches over {summary.rounds} rounds"
        )
        return outcome

    def _draw_groups(self, game_day_id: str) -> Outcome[DrawSummary]:
        outcome = self.allocator.allocate(self.store.list_athletes(game_day_id))
        if not outcome:
            return Outcome.failed(outcome.failure)
        allocation = outcome.value
        matches = self.round_robin.generate_round(allocation.groups, game_day_id)
        return Outcome.success(
            DrawSummary(
                format=FORMAT_GROUP,
                matches=matches,
                rounds=1,
                groups=allocation.groups,
                allocation=allocation.description,
            )
        )

    def _draw_teams(self, game_day_id: str) -> Outcome[DrawSummary]:
        teams = self.store.list_teams(game_day_id)
        if len(teams) < MIN_TEAMS:
            return Outcome.failed(
                NoTeams(needed=MIN_TEAMS, current_count=len(teams))
            )
        matches = self.team_scheduler.schedule(teams, game_day_id)
        return Outcome.success(
            DrawSummary(
                format=FORMAT_TEAMS,
                matches=matches,
                rounds=max(m.round_number for m in matches) if matches else 0,
            )
        )

    def _draw_pairs(self, game_day_id: str) -> Outcome[DrawSummary]:
        pairs = self.store.list_teams(game_day_id)
        if len(pairs) < MIN_PAIRS:
            return Outcome.failed(NoTeams(needed=MIN_PAIRS, current_count=len(pairs)))

        paired = {athlete_id for pair in pairs for athlete_id in pair.member_ids}
        unpaired = [a.id for a in self.store.list_athletes(game_day_id) if a.id not in paired]
        if unpaired:
            return Outcome.failed(UnpairedAthletes(athlete_ids=unpaired))

        matches = self.pairs_round_robin.generate(pairs, game_day_id)
        return Outcome.success(
            DrawSummary(
                format=FORMAT_PAIRS,
                matches=matches,
                rounds=max(m.round_number for m in matches),
            )
        )

    def generate_next_round(self, game_day_id: str) -> Outcome[LadderMovement]:
        """Move athletes between groups and create the next round's matches.

        Returns:
            Outcome with the LadderMovement, or NoPriorRound / MaxRoundsReached /
            IncompleteRound
        """
        game_day = self.store.get_game_day(game_day_id)
        with self._lock_for(game_day_id):
            matches = self.store.list_matches(game_day_id)
            if not matches:
                return Outcome.failed(NoPriorRound())

            latest_round = max(match.round_number for match in matches)
            # teams and pairs schedules are generated whole
            if game_day.format == FORMAT_GROUP:
                maximum = game_day.settings.number_of_rounds
            else:
                maximum = latest_round
            if latest_round >= maximum:
                return Outcome.failed(
                    MaxRoundsReached(current=latest_round, maximum=maximum)
                )

            round_matches = [m for m in matches if m.round_number == latest_round]
            groups = self.groups_of_round(game_day_id, latest_round)
            outcome = self.ladder.compute_next_round(
                groups, round_matches, movement=game_day.settings.movement_override
            )
            if not outcome:
                return outcome

            movement = outcome.value
            new_matches = self.round_robin.generate_round(movement.groups, game_day_id)
            self.store.save_matches(game_day_id, movement.round_number, new_matches)
            self.results.refresh_status(game_day_id)

        logger.info(
            f"Round {movement.round_number} of {game_day_id} generated: "
            f"{len(new_matches)} matches, {movement.movement_rule}"
        )
        return outcome

    def cancel_draw(self, game_day_id: str) -> int:
        """Delete every match of the game day and return how many were removed."""
        self.store.get_game_day(game_day_id)
        with self._lock_for(game_day_id):
            deleted = self.store.delete_matches(game_day_id)
            self.results.refresh_status(game_day_id)
        logger.info(f"Cancelled draw for {game_day_id}: deleted {deleted} matches")
        return deleted

    # ========== Queries ==========

    def groups_of_round(self, game_day_id: str, round_number: int) -> List[Group]:
        """Rebuild a round's groups from its matches, members best rank first."""
        members: Dict[int, List[str]] = {}
        for match in self.store.list_matches(game_day_id, round_number=round_number):
            ids = members.setdefault(match.group_number, [])
            named = match.athlete_ids + ([match.bye] if match.bye else [])
            ids.extend(athlete_id for athlete_id in named if athlete_id not in ids)

        return [
            Group(
                group_number=group_number,
                round_number=round_number,
                athletes=sort_by_rank(self.store.get_athlete(aid) for aid in ids),
            )
            for group_number, ids in sorted(members.items())
        ]

    def game_day_stats(self, game_day_id: str) -> Dict[str, Any]:
        """Headline numbers of a game day."""
        athletes = self.store.list_athletes(game_day_id)
        matches = self.store.list_matches(game_day_id)
        completed = sum(1 for match in matches if match.is_completed)
        return {
            "athletes": len(athletes),
            "matches": len(matches),
            "completed_matches": completed,
            "rounds": max((m.round_number for m in matches), default=0),
            "courts": max(1, len(athletes) // MIN_GROUP_SIZE),
        }

    def athlete_stats(self, game_day_id: str, athlete_id: str) -> Standing:
        """One athlete's record over the whole game day."""
        self.store.get_athlete(athlete_id)
        matches = self.store.list_matches(game_day_id)
        return self.standings.calculate_for_athlete(matches, athlete_id)

    def group_leaderboard(
        self, game_day_id: str, round_number: int, group_number: int
    ) -> List[Standing]:
        """Current standings of one group, every member listed."""
        matches = self.store.list_matches(
            game_day_id, round_number=round_number, group_number=group_number
        )
        members = []
        for match in matches:
            for athlete_id in match.athlete_ids + ([match.bye] if match.bye else []):
                if athlete_id not in members:
                    members.append(athlete_id)
        return self.standings.calculate(matches, athlete_ids=members)

    def team_standings(self, game_day_id: str) -> List[TeamStanding]:
        """Team standings of a teams or pairs game day."""
        teams = self.store.list_teams(game_day_id)
        return self.standings.calculate_teams(teams, self.store.list_matches(game_day_id))
