"""Exceptions for use in Ladder Pairing"""

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


# ========== Base Application Exception ==========


class LadderPairingException(Exception):
    """Base exception for all Ladder Pairing errors.

    All custom exceptions in the application should inherit from this class.
    This enables catching all application-specific errors with a single except clause.

    Expected, user-facing conditions (too few athletes, unfinished round) are
    not raised; they are returned as failures on an Outcome.
    """

    pass


# ========== Draw Exceptions ==========


class DrawException(LadderPairingException):
    """Base exception for draw-related programming errors."""

    pass


class InvalidGroupSizeException(DrawException):
    """Raised when a group outside the 4/5 sizes reaches the round-robin generator."""

    pass


class ForeignAthleteException(DrawException):
    """Raised when a match references an athlete outside its group."""

    pass


class InvalidMovementException(DrawException):
    """Raised when a movement count other than 1 or 2 is requested."""

    pass


class InvalidPairException(DrawException):
    """Raised when a pairs-mode pair does not have exactly two members."""

    pass


class InvalidTeamCountException(DrawException):
    """Raised when fewer than two teams are requested."""

    pass


# ========== Result Exceptions ==========


class ResultException(LadderPairingException):
    """Base exception for score recording errors."""

    pass


class InvalidScoreException(ResultException):
    """Raised when a score is not a non-negative integer."""

    pass


class TiedScoreException(ResultException):
    """Raised when both sides are given the same final score."""

    pass


# ========== Store Exceptions ==========


class StoreException(LadderPairingException):
    """Base exception for record store lookups."""

    pass


class GameDayNotFoundException(StoreException):
    """Raised when a requested game day does not exist."""

    pass


class MatchNotFoundException(StoreException):
    """Raised when a requested match does not exist."""

    pass


class TeamNotFoundException(StoreException):
    """Raised when a requested team does not exist."""

    pass


class AthleteNotFoundException(StoreException):
    """Raised when a requested athlete does not exist."""

    pass


class DuplicateAthleteException(StoreException):
    """Raised when attempting to add an athlete that already exists."""

    pass


# ========== Team Exceptions ==========


class TeamException(LadderPairingException):
    """Base exception for team management errors."""

    pass


class TeamsLockedException(TeamException):
    """Raised when team membership is edited after matches were generated."""

    pass


# ========== Validation Exceptions ==========


class ValidationException(LadderPairingException):
    """Base exception for validation errors."""

    pass


class RankValidationException(ValidationException):
    """Raised when a rank value is invalid."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(LadderPairingException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass
