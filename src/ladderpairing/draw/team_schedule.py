"""Match scheduling for the teams format.

Two teams play a fixed number of rounds of rotating partnerships. Three or more
teams rotate team matchups and pick pairs greedily so that every athlete meets
as many different opponents as possible.
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

import math
from collections import Counter, defaultdict
from itertools import combinations
from typing import Dict, List, Optional, Sequence, Set, Tuple

from ladderpairing.constants import (
    DEFAULT_TWO_TEAM_ROUNDS,
    DUPLICATE_MATCHUP_PENALTY,
    GAMES_PER_TEAM_MATCHUP,
    GAMES_PLAYED_WEIGHT,
    MIN_TEAMS,
    PAIR_SIZE,
    TARGET_GAMES_PER_PLAYER,
    VERSUS_COVERAGE_WEIGHT,
)
from ladderpairing.draw.round_robin import circle_rounds, partner_rotations
from ladderpairing.exceptions import DrawException, InvalidTeamCountException
from ladderpairing.models.athlete import sort_by_rank
from ladderpairing.models.match import Match, MatchSide
from ladderpairing.models.team import Team
from ladderpairing.utils import setup_logger

logger = setup_logger(__name__)

# (team, athlete id, athlete id)
TeamPair = Tuple[Team, str, str]


def pair_key(first: str, second: str) -> Tuple[str, str]:
    return (first, second) if first <= second else (second, first)


class _ScheduleTracker:
    """Running counters used to score candidate multi-team matches."""

    def __init__(self):
        self.games_played: Counter = Counter()
        self.pair_usage: Counter = Counter()
        self.matchups: Set[Tuple[Tuple[str, str], Tuple[str, str]]] = set()
        self.opponents: Dict[str, Set[str]] = defaultdict(set)

    def matchup_key(self, pair_a: TeamPair, pair_b: TeamPair):
        key_a = pair_key(pair_a[1], pair_a[2])
        key_b = pair_key(pair_b[1], pair_b[2])
        return (key_a, key_b) if key_a <= key_b else (key_b, key_a)

    def score(self, pair_a: TeamPair, pair_b: TeamPair) -> int:
        """Lower is better: new opponents first, then fairness, then variety."""
        side_a = pair_a[1:]
        side_b = pair_b[1:]
        new_opponents = sum(
            1 for a in side_a for b in side_b if b not in self.opponents[a]
        )
        games = sum(self.games_played[athlete_id] for athlete_id in side_a + side_b)
        usage = (
            self.pair_usage[pair_key(*side_a)] + self.pair_usage[pair_key(*side_b)]
        )
        duplicate = 1 if self.matchup_key(pair_a, pair_b) in self.matchups else 0
        return (
            (PAIR_SIZE * PAIR_SIZE - new_opponents) * VERSUS_COVERAGE_WEIGHT
            + games * GAMES_PLAYED_WEIGHT
            + usage
            + duplicate * DUPLICATE_MATCHUP_PENALTY
        )

    def record(self, pair_a: TeamPair, pair_b: TeamPair) -> None:
        side_a = pair_a[1:]
        side_b = pair_b[1:]
        for athlete_id in side_a + side_b:
            self.games_played[athlete_id] += 1
        self.pair_usage[pair_key(*side_a)] += 1
        self.pair_usage[pair_key(*side_b)] += 1
        self.matchups.add(self.matchup_key(pair_a, pair_b))
        for a in side_a:
            for b in side_b:
                self.opponents[a].add(b)
                self.opponents[b].add(a)


class TeamMatchScheduler:
    """Creates the matches of a teams-format game day."""

    def schedule(
        self,
        teams: Sequence[Team],
        game_day_id: str,
        rounds: Optional[int] = None,
    ) -> List[Match]:
        """Schedule matches between teams.

        Args:
            teams: Teams of the game day
            game_day_id: Game day the matches belong to
            rounds: Number of rounds; defaults to 8 for two teams and to an
                estimate of eight games per athlete otherwise

        Returns:
            Pending matches tagged with both team ids, all in group 1

        Raises:
            InvalidTeamCountException: If fewer than two teams are given
            DrawException: If a team cannot field a pair
        """
        if len(teams) < MIN_TEAMS:
            raise InvalidTeamCountException(
                f"Need at least {MIN_TEAMS} teams to schedule, got {len(teams)}"
            )
        for team in teams:
            if len(team.members) < PAIR_SIZE:
                raise DrawException(
                    f'{team.team_name} has {len(team.members)} members, '
                    f"at least {PAIR_SIZE} are needed to play doubles"
                )

        ordered = sorted(teams, key=lambda team: team.team_number)
        if len(ordered) == MIN_TEAMS:
            matches = self._schedule_two_teams(ordered, game_day_id, rounds)
        else:
            matches = self._schedule_many_teams(ordered, game_day_id, rounds)

        logger.info(
            f"Scheduled {len(matches)} team matches for {len(ordered)} teams "
            f"over {max((m.round_number for m in matches), default=0)} rounds"
        )
        return matches

    def _schedule_two_teams(
        self, teams: List[Team], game_day_id: str, rounds: Optional[int]
    ) -> List[Match]:
        """Rotating partnerships, first team walking forward and second backward."""
        rounds = rounds or DEFAULT_TWO_TEAM_ROUNDS
        first, second = teams
        first_roster = [athlete.id for athlete in sort_by_rank(first.members)]
        second_roster = [athlete.id for athlete in sort_by_rank(second.members)]
        first_rotations = partner_rotations(len(first_roster))
        second_rotations = partner_rotations(len(second_roster))

        matches = []
        for round_number in range(1, rounds + 1):
            step = round_number - 1
            first_pairs = first_rotations[step % len(first_rotations)]
            second_pairs = second_rotations[
                len(second_rotations) - 1 - step % len(second_rotations)
            ]
            for (a1, a2), (b1, b2) in zip(first_pairs, second_pairs):
                matches.append(
                    Match(
                        game_day_id=game_day_id,
                        round_number=round_number,
                        group_number=1,
                        team_a=MatchSide(players=(first_roster[a1], first_roster[a2])),
                        team_b=MatchSide(players=(second_roster[b1], second_roster[b2])),
                        team_a_team_id=first.id,
                        team_b_team_id=second.id,
                    )
                )
            logger.debug(
                f"Round {round_number}: {min(len(first_pairs), len(second_pairs))} matches"
            )
        return matches

    def _schedule_many_teams(
        self, teams: List[Team], game_day_id: str, rounds: Optional[int]
    ) -> List[Match]:
        """Circle-method team matchups with greedy pair selection."""
        matchup_rounds = [
            [(a, b) for a, b in pairing if a is not None and b is not None]
            for pairing in circle_rounds(teams)
        ]
        games_per_round = len(matchup_rounds[0]) * GAMES_PER_TEAM_MATCHUP
        if rounds is None:
            athletes = sum(len(team.members) for team in teams)
            rounds = math.ceil(
                athletes * TARGET_GAMES_PER_PLAYER / (games_per_round * 2 * PAIR_SIZE)
            )

        team_pairs = {
            team.id: [(team, a.id, b.id) for a, b in combinations(team.members, 2)]
            for team in teams
        }
        tracker = _ScheduleTracker()

        matches = []
        for round_number in range(1, rounds + 1):
            busy: Set[str] = set()
            for team_a, team_b in matchup_rounds[(round_number - 1) % len(matchup_rounds)]:
                for _ in range(GAMES_PER_TEAM_MATCHUP):
                    best = self._best_pair_match(
                        team_pairs[team_a.id], team_pairs[team_b.id], busy, tracker
                    )
                    if best is None:
                        logger.debug(
                            f"Round {round_number}: no free pairs left for "
                            f"{team_a.team_name} vs {team_b.team_name}"
                        )
                        break
                    pair_a, pair_b = best
                    tracker.record(pair_a, pair_b)
                    busy.update(pair_a[1:] + pair_b[1:])
                    matches.append(
                        Match(
                            game_day_id=game_day_id,
                            round_number=round_number,
                            group_number=1,
                            team_a=MatchSide(players=pair_a[1:]),
                            team_b=MatchSide(players=pair_b[1:]),
                            team_a_team_id=team_a.id,
                            team_b_team_id=team_b.id,
                        )
                    )

        games = list(tracker.games_played.values())
        if games:
            logger.debug(f"Games per athlete: min={min(games)}, max={max(games)}")
        return matches

    def _best_pair_match(
        self,
        pairs_a: Sequence[TeamPair],
        pairs_b: Sequence[TeamPair],
        busy: Set[str],
        tracker: _ScheduleTracker,
    ) -> Optional[Tuple[TeamPair, TeamPair]]:
        """Lowest scoring pair-vs-pair among athletes still free this round."""
        best = None
        best_score = math.inf
        for pair_a in pairs_a:
            if pair_a[1] in busy or pair_a[2] in busy:
                continue
            for pair_b in pairs_b:
                if pair_b[1] in busy or pair_b[2] in busy:
                    continue
                score = tracker.score(pair_a, pair_b)
                if score < best_score:
                    best_score = score
                    best = (pair_a, pair_b)
        return best


def games_per_athlete(matches: Sequence[Match]) -> Dict[str, int]:
    """How many matches each athlete is scheduled for."""
    counts: Counter = Counter()
    for match in matches:
        counts.update(match.athlete_ids)
    return dict(counts)
