# bigten_pred/pipeline.py
"""Build the model-ready game table from per-team event logs."""

from __future__ import annotations

from typing import Iterable, Mapping, Union
from pathlib import Path

import numpy as np
import pandas as pd

from bigten_pred.config import DataConfig, LogConfig, StatConfig
from bigten_pred.data.load import filter_team_logs, load_schedule
from bigten_pred.data.merge import (
    attach_results,
    drop_misdated_games,
    merge_team_tables,
    transform_iso,
)
from bigten_pred.exceptions import MissingTeamLogError
from bigten_pred.features.stats import team_game_stats
from bigten_pred.utils import log_nan_counts, setup_logger

logger = setup_logger("pipeline", LogConfig.LOG_DIR / "pipeline.log")


def build_team_tables(
    logs: Mapping[str, pd.DataFrame],
    roster: Iterable[str] = DataConfig.ROSTER,
    *,
    require_all_teams: bool = True,
) -> dict[str, pd.DataFrame]:
    """Filter each team's log and compute its per-game statistics.

    Raises :class:`MissingTeamLogError` when a roster team has no log or no
    conference events, unless ``require_all_teams`` is False.
    """
    roster = list(roster)
    filtered = filter_team_logs(logs, roster)

    missing = [team for team in roster if team not in filtered or filtered[team].empty]
    if missing:
        if require_all_teams:
            raise MissingTeamLogError(missing)
        logger.warning("No conference events for %d roster teams: %s", len(missing), missing)

    tables = {}
    for team, events in filtered.items():
        if events.empty:
            continue
        logger.info("Computing game statistics for %s", team)
        tables[team] = team_game_stats(events)
    if not tables:
        raise MissingTeamLogError(roster)
    return tables


def build_game_table(
    logs: Mapping[str, pd.DataFrame],
    schedule: Union[str, Path, pd.DataFrame],
    roster: Iterable[str] = DataConfig.ROSTER,
    *,
    require_all_teams: bool = True,
    transform: bool = True,
    keep_game_id: bool = False,
) -> pd.DataFrame:
    """Run the full pipeline: filter, aggregate, merge, clean, label and transform.

    Args:
        logs: mapping of team code to that team's raw event log.
        schedule: authoritative schedule/results table or a CSV path to one.
        roster: conference team codes.
        require_all_teams: raise if any roster team contributes no games.
        transform: apply the pooled Yeo-Johnson transform to the ISO columns.
        keep_game_id: keep ``GameID`` as the first column of the output.

    Returns:
        pandas.DataFrame: one row per game with the columns in
        ``StatConfig.OUTPUT_COLUMNS``.
    """
    roster = list(roster)
    schedule = load_schedule(schedule)

    tables = build_team_tables(logs, roster, require_all_teams=require_all_teams)
    games = merge_team_tables(tables)
    games = drop_misdated_games(games, schedule)
    games = attach_results(games, schedule)

    if transform:
        if games[StatConfig.ISO_COLUMNS].notna().any().any():
            games, _ = transform_iso(games)
        else:
            logger.warning("No ISO values present, skipping power transform")

    games = games.sort_values(["Date", "GameID"]).reset_index(drop=True)
    log_nan_counts(games, "game table", logger=logger)
    for issue in validate_game_table(games, roster):
        logger.warning(issue)

    columns = (["GameID"] if keep_game_id else []) + StatConfig.OUTPUT_COLUMNS
    logger.info("Built game table with %d games", len(games))
    return games[columns]


def validate_game_table(
    df: pd.DataFrame, roster: Iterable[str] = DataConfig.ROSTER
) -> list[str]:
    """Return a list of data quality issues found in a game table."""
    issues: list[str] = []
    roster = set(roster)

    if "GameID" in df.columns and df["GameID"].duplicated().any():
        issues.append(f"Duplicate games: {df.loc[df['GameID'].duplicated(), 'GameID'].tolist()}")

    if "Result" not in df.columns:
        issues.append("Missing Result column")
    else:
        if df["Result"].isna().any():
            issues.append(f"{int(df['Result'].isna().sum())} games without a result")
        labels = set(df["Result"].dropna().unique())
        if not labels <= {0, 1}:
            issues.append(f"Unexpected Result values: {sorted(labels - {0, 1})}")

    stat_cols = [c for c in df.columns if c.startswith(("Home_", "Away_"))]
    if stat_cols:
        values = df[stat_cols].to_numpy(dtype=float)
        if np.isinf(values).any():
            issues.append("Infinite values in statistic columns")

    for col in ["HomeTeam", "AwayTeam"]:
        if col in df.columns:
            outside = set(df[col].dropna()) - roster
            if outside:
                issues.append(f"{col} values outside the roster: {sorted(outside)}")

    if "Date" in df.columns and df["Date"].isna().any():
        issues.append("Missing game dates detected")
    return issues
