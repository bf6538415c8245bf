"""Shared helpers for Ladder Pairing: logging setup and id generation."""

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

import logging
import os
import uuid

from ladderpairing.constants import DEFAULT_LOG_LEVEL, LOG_LEVEL_ENV_VAR

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
ROOT_LOGGER_NAME = "ladderpairing"


def _configure_root_logger() -> logging.Logger:
    """Attach a single stream handler to the package logger."""
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        level_name = os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).upper()
        root.setLevel(getattr(logging, level_name, logging.INFO))
    return root


def setup_logger(name: str) -> logging.Logger:
    """Return a module logger under the package logger.

    Args:
        name: Usually ``__name__`` of the calling module

    Returns:
        A configured Logger
    """
    _configure_root_logger()
    return logging.getLogger(name)


def set_log_level(level: int) -> None:
    """Change the level of every Ladder Pairing logger at once."""
    _configure_root_logger().setLevel(level)


def generate_id(prefix: str) -> str:
    """Generate a unique id such as ``match-6f1c...``."""
    return f"{prefix.lower()}-{uuid.uuid4()}"
