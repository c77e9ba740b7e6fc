"""Frequency counts and rate statistics per participant and team side."""

from .frequency import frequency_table, frequency_tables, join_frequency_tables, volume_table
from .stats import (
    batting_stats,
    participant_table,
    pitching_stats,
    team_game_stats,
    team_side_means,
)

__all__ = [
    "frequency_table",
    "frequency_tables",
    "join_frequency_tables",
    "volume_table",
    "participant_table",
    "pitching_stats",
    "batting_stats",
    "team_side_means",
    "team_game_stats",
]
