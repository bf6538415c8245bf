"""Validation utilities for Ladder Pairing.

This module provides reusable validation functions with consistent error handling.
"""

from typing import Any, Optional

from ladderpairing.constants import DEFAULT_POINTS_TO_WIN, DEFAULT_WIN_BY_MARGIN
from ladderpairing.exceptions import InvalidScoreException, RankValidationException


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value: Any = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


# ========== Score Validation ==========


def validate_score(score: Any) -> ValidationResult:
    """Validate a single side's score.

    Scores are whole, non-negative rally points. ``None`` is valid and means
    the side has not been entered yet.

    Example:
        >>> validate_score(11).sanitized_value
        11
        >>> bool(validate_score(-1))
        False
    """
    if score is None:
        return ValidationResult(is_valid=True, sanitized_value=None)

    # bool is an int subclass; True is not a score
    if isinstance(score, bool):
        return ValidationResult(
            is_valid=False, error_message=f"Score must be a whole number, got {score!r}"
        )

    if isinstance(score, str):
        score = score.strip()
        if not score.isdigit():
            return ValidationResult(
                is_valid=False,
                error_message=f"Score must be a whole number, got {score!r}",
            )
        score = int(score)

    if isinstance(score, float):
        if not score.is_integer():
            return ValidationResult(
                is_valid=False,
                error_message=f"Score must be a whole number, got {score!r}",
            )
        score = int(score)

    if not isinstance(score, int):
        return ValidationResult(
            is_valid=False, error_message=f"Score must be a whole number, got {score!r}"
        )

    if score < 0:
        return ValidationResult(
            is_valid=False, error_message=f"Score cannot be negative ({score})"
        )

    return ValidationResult(is_valid=True, sanitized_value=score)


def validate_score_strict(score: Any) -> Optional[int]:
    """Validate a score and raise InvalidScoreException if invalid."""
    result = validate_score(score)
    if not result:
        raise InvalidScoreException(result.error_message)
    return result.sanitized_value


def validate_game_score(
    team_a_score: int,
    team_b_score: int,
    points_to_win: int = DEFAULT_POINTS_TO_WIN,
    win_by_margin: int = DEFAULT_WIN_BY_MARGIN,
) -> ValidationResult:
    """Check a final score against the game day's scoring rules.

    A game ends when the leader has reached ``points_to_win`` and leads by at
    least ``win_by_margin``. Past the target the margin must be exactly the
    required margin, because play stops as soon as it is reached.
    """
    winner, loser = max(team_a_score, team_b_score), min(team_a_score, team_b_score)
    if winner == loser:
        return ValidationResult(
            is_valid=False, error_message=f"Tied score {winner}-{loser} is not final"
        )
    if winner < points_to_win:
        return ValidationResult(
            is_valid=False,
            error_message=f"Winning score {winner} is below {points_to_win}",
        )
    if winner - loser < win_by_margin:
        return ValidationResult(
            is_valid=False,
            error_message=f"Score {winner}-{loser} is not won by {win_by_margin}",
        )
    if winner > points_to_win and winner - loser != win_by_margin:
        return ValidationResult(
            is_valid=False,
            error_message=(
                f"Score {winner}-{loser} went past {points_to_win} "
                f"without ending at a {win_by_margin}-point margin"
            ),
        )
    return ValidationResult(is_valid=True, sanitized_value=(team_a_score, team_b_score))


# ========== Rank Validation ==========


def validate_rank(rank: Any) -> ValidationResult:
    """Validate a global rank (1 = best)."""
    if isinstance(rank, bool) or not isinstance(rank, int):
        return ValidationResult(
            is_valid=False, error_message=f"Rank must be an integer, got {rank!r}"
        )
    if rank < 1:
        return ValidationResult(
            is_valid=False, error_message=f"Rank must be at least 1, got {rank}"
        )
    return ValidationResult(is_valid=True, sanitized_value=rank)


def validate_rank_strict(rank: Any) -> int:
    """Validate a rank and raise RankValidationException if invalid."""
    result = validate_rank(rank)
    if not result:
        raise RankValidationException(result.error_message)
    return result.sanitized_value
