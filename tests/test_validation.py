import pytest

from ladderpairing.exceptions import InvalidScoreException, RankValidationException
from ladderpairing.utils.validation import (
    validate_game_score,
    validate_rank,
    validate_rank_strict,
    validate_score,
    validate_score_strict,
)


@pytest.mark.parametrize(
    "raw, expected",
    [(0, 0), (11, 11), ("15", 15), (" 7 ", 7), (9.0, 9), (None, None)],
)
def test_valid_scores_are_normalised(raw, expected):
    result = validate_score(raw)

    assert result
    assert result.sanitized_value == expected


@pytest.mark.parametrize("raw", [-3, "-3", "11.5", 2.5, True, [11], "abc"])
def test_invalid_scores(raw):
    result = validate_score(raw)

    assert not result
    assert result.error_message
    with pytest.raises(InvalidScoreException):
        validate_score_strict(raw)


def test_game_score_rules():
    assert validate_game_score(11, 0)
    assert validate_game_score(12, 10)
    assert not validate_game_score(11, 10)
    assert not validate_game_score(10, 8)
    assert not validate_game_score(15, 10)
    assert "Tied" in validate_game_score(7, 7).error_message


def test_rank_validation():
    assert validate_rank(1).sanitized_value == 1
    assert not validate_rank(0)
    assert not validate_rank("1")
    with pytest.raises(RankValidationException):
        validate_rank_strict(-2)
