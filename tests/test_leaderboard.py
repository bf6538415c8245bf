from ladderpairing.draw import LeaderboardCalculator
from ladderpairing.models import Athlete, Match, MatchSide


def _athletes():
    return [Athlete(id=aid, name=aid.upper(), rank=rank) for rank, aid in enumerate("abcd", start=1)]


def _match(team_a, team_b, score_a, score_b, game_day_id="gd-1"):
    match = Match(
        game_day_id=game_day_id,
        round_number=1,
        group_number=1,
        team_a=MatchSide(players=tuple(team_a)),
        team_b=MatchSide(players=tuple(team_b)),
    )
    match.apply_scores(score_a, score_b)
    return match


def _season():
    return [
        _match("cd", "ab", 11, 6),
        _match("cd", "ab", 11, 9, game_day_id="gd-2"),
        _match("ca", "bd", 11, 2, game_day_id="gd-2"),
        _match("ab", "cd", 11, None),
    ]


def test_leaderboard_counts_completed_matches_across_game_days():
    entries = {e.athlete_id: e for e in LeaderboardCalculator().calculate(_athletes(), _season())}

    assert (entries["c"].wins, entries["c"].losses) == (3, 0)
    assert entries["c"].win_percentage == 100.0
    assert entries["a"].matches_played == 3
    assert entries["b"].points_for == 6 + 9 + 2


def test_ranked_orders_by_wins_then_rank():
    ranked = LeaderboardCalculator().ranked(_athletes(), _season())

    assert [entry.athlete_id for entry in ranked] == ["c", "d", "a", "b"]


def test_sync_ranks_returns_new_contiguous_ranks():
    athletes = _athletes()
    updated = LeaderboardCalculator().sync_ranks(athletes, _season())

    assert [(a.id, a.rank) for a in updated] == [("c", 1), ("d", 2), ("a", 3), ("b", 4)]
    assert athletes[0].rank == 1 and athletes[0].id == "a"


def test_athlete_without_matches_keeps_zero_record():
    athletes = _athletes() + [Athlete(id="e", name="E", rank=5)]
    entries = LeaderboardCalculator().calculate(athletes, _season())

    assert entries[-1].athlete_id == "e"
    assert entries[-1].matches_played == 0
    assert entries[-1].win_rate == 0.0
