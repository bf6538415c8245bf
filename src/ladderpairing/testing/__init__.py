"""Testing module for Ladder Pairing.

This module provides simulation tooling:
- Game day simulator with seeded random scores
- Allocation preview and team draft helpers

Use the CLI: ladder-sim
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

from ladderpairing.testing.simulator import (
    GameDaySimulator,
    ResultPattern,
    SimulationReport,
    SimulatorConfig,
)

__all__ = [
    "GameDaySimulator",
    "ResultPattern",
    "SimulationReport",
    "SimulatorConfig",
]
