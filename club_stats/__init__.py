"""Sports club scoring and ranking.

Derives team standings, player performance rankings and participation
rankings for a club from its games, events, participations and members.

Example:
    >>> from club_stats.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.db_path)
"""

from __future__ import annotations

__version__ = "0.1.0"
__author__ = "Club Stats Team"

# Public API exports
from club_stats.config import Settings, get_settings

__all__ = [
    "Settings",
    "__author__",
    "__version__",
    "get_settings",
]
