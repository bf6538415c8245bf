"""Typed outcomes for draw operations.

Expected, user-facing conditions are returned rather than raised: an
:class:`Outcome` either carries a value or a :class:`Failure` describing why
the operation could not run. Programming errors still raise (see
:mod:`ladderpairing.exceptions`).
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

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Failure:
    """Base class for precondition failures."""

    @property
    def code(self) -> str:
        return type(self).__name__

    @property
    def message(self) -> str:
        return self.code

    @property
    def suggestion(self) -> Optional[str]:
        return None

    def to_dict(self) -> Dict[str, Any]:
        data = {"error": self.code, "message": self.message, **asdict(self)}
        if self.suggestion:
            data["suggestion"] = self.suggestion
        return data


@dataclass(frozen=True)
class InsufficientAthletes(Failure):
    """Not enough athletes to run the requested draw."""

    needed: int
    current_count: int = 0

    @property
    def message(self) -> str:
        plural = "athlete" if self.needed == 1 else "athletes"
        return f"Need {self.needed} more {plural} (currently {self.current_count})"


@dataclass(frozen=True)
class NoValidAllocation(Failure):
    """The roster cannot be split into groups of 4 and 5."""

    athlete_count: int

    @property
    def message(self) -> str:
        return f"{self.athlete_count} athletes cannot be split into groups of 4 or 5"

    @property
    def suggestion(self) -> Optional[str]:
        return "Add or remove athletes to reach a valid group size"


@dataclass(frozen=True)
class IncompleteRound(Failure):
    """The previous round still has matches without a winner."""

    incomplete_count: int

    @property
    def message(self) -> str:
        return f"Not all matches completed ({self.incomplete_count} remaining)"


@dataclass(frozen=True)
class MaxRoundsReached(Failure):
    """Every configured round has already been generated."""

    current: int
    maximum: int

    @property
    def message(self) -> str:
        return f"All rounds have been generated ({self.current} of {self.maximum})"


@dataclass(frozen=True)
class NoPriorRound(Failure):
    """There is no round to move athletes from."""

    @property
    def message(self) -> str:
        return "No previous round found. Generate initial draw first."


@dataclass(frozen=True)
class NoTeams(Failure):
    """Teams or pairs mode has too few teams to schedule."""

    needed: int
    current_count: int = 0

    @property
    def message(self) -> str:
        return f"Need at least {self.needed} teams (currently {self.current_count})"

    @property
    def suggestion(self) -> Optional[str]:
        return "Generate teams or create pairs first"


@dataclass(frozen=True)
class UnpairedAthletes(Failure):
    """Pairs mode has registered athletes that are not in any pair."""

    athlete_ids: List[str] = field(default_factory=list)

    @property
    def message(self) -> str:
        return (
            f"Cannot generate draw: {len(self.athlete_ids)} athlete(s) "
            "not yet assigned to pairs"
        )


class Outcome(Generic[T]):
    """Result of a draw operation.

    Attributes:
        value: Result payload when successful
        failure: Why the operation did not run, when unsuccessful

    Example:
        >>> outcome = allocator.allocate(roster)
        >>> if not outcome:
        ...     print(outcome.failure.message)
    """

    def __init__(self, value: Optional[T] = None, failure: Optional[Failure] = None):
        self.value = value
        self.failure = failure

    @classmethod
    def success(cls, value: T) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def failed(cls, failure: Failure) -> "Outcome[T]":
        return cls(failure=failure)

    @property
    def is_success(self) -> bool:
        return self.failure is None

    def __bool__(self) -> bool:
        """Allow using outcome in boolean context: if outcome: ..."""
        return self.is_success

    def unwrap(self) -> T:
        """Return the value, raising ValueError if this outcome failed."""
        if self.failure is not None:
            raise ValueError(self.failure.message)
        return self.value

    def __repr__(self) -> str:
        if self.is_success:
            return f"Outcome(OK, {self.value!r})"
        return f"Outcome(FAILED, {self.failure!r})"
