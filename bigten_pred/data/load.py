# bigten_pred/data/load.py
"""Load TrackMan event logs and the game schedule, and keep conference games."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Mapping, Union

import numpy as np
import pandas as pd

from bigten_pred.config import DataConfig, LogConfig
from bigten_pred.exceptions import SchemaError
from bigten_pred.utils import setup_logger

logger = setup_logger("load", LogConfig.LOG_DIR / "load.log")


def _check_columns(df: pd.DataFrame, required: Iterable[str], table: str) -> None:
    missing = [col for col in required if col not in df.columns]
    if missing:
        raise SchemaError(table, missing)


def read_event_log(path: Union[str, Path]) -> pd.DataFrame:
    """Read one team's event log CSV and coerce the key columns."""
    path = Path(path)
    df = pd.read_csv(path, low_memory=False)
    _check_columns(df, DataConfig.REQUIRED_COLUMNS, path.name)
    df["Date"] = pd.to_datetime(df["Date"], errors="coerce")
    for col in ["Inning", "PAofInning"]:
        df[col] = pd.to_numeric(df[col], errors="coerce")
    logger.info("Loaded %d events from %s", len(df), path.name)
    return df


def load_event_logs(
    directory: Union[str, Path] = DataConfig.DATA_DIR,
    roster: Iterable[str] = DataConfig.ROSTER,
    pattern: str = DataConfig.EVENT_LOG_GLOB,
) -> dict[str, pd.DataFrame]:
    """Return ``{team code: event log}`` for every roster team found in ``directory``.

    Files are matched to teams by stem, so ``NEB.csv`` holds Nebraska's log.
    Files for teams outside the roster are skipped.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise FileNotFoundError(f"Event log directory not found: {directory}")

    roster = set(roster)
    logs: dict[str, pd.DataFrame] = {}
    for path in sorted(directory.glob(pattern)):
        team = path.stem
        if team not in roster:
            logger.info("Skipping %s: %s is not a roster team", path.name, team)
            continue
        logs[team] = read_event_log(path)
    logger.info("Loaded event logs for %d of %d roster teams", len(logs), len(roster))
    return logs


def normalize_sentinels(
    events: pd.DataFrame,
    columns: Iterable[str] = DataConfig.SENTINEL_COLUMNS,
    sentinel: str = DataConfig.SENTINEL,
) -> pd.DataFrame:
    """Return a copy of ``events`` with ``sentinel`` replaced by NaN in ``columns``."""
    df = events.copy()
    for col in columns:
        if col in df.columns:
            df[col] = df[col].replace(sentinel, np.nan)
    return df


def filter_conference_games(
    events: pd.DataFrame, roster: Iterable[str] = DataConfig.ROSTER
) -> pd.DataFrame:
    """Keep events whose home and away teams are both roster members.

    Running it again on its own output returns the same table.
    """
    roster = list(roster)
    mask = events["HomeTeam"].isin(roster) & events["AwayTeam"].isin(roster)
    filtered = normalize_sentinels(events.loc[mask])
    return filtered.reset_index(drop=True)


def filter_team_logs(
    logs: Mapping[str, pd.DataFrame], roster: Iterable[str] = DataConfig.ROSTER
) -> dict[str, pd.DataFrame]:
    """Apply :func:`filter_conference_games` to every roster team in ``logs``."""
    roster = list(roster)
    filtered: dict[str, pd.DataFrame] = {}
    for team, events in logs.items():
        if team not in roster:
            logger.info("Excluding %s: not in roster", team)
            continue
        filtered[team] = filter_conference_games(events, roster)
        logger.info(
            "%s: kept %d of %d events (%d conference games)",
            team,
            len(filtered[team]),
            len(events),
            filtered[team]["GameID"].nunique(),
        )
    return filtered


def load_schedule(source: Union[str, Path, pd.DataFrame]) -> pd.DataFrame:
    """Return the authoritative schedule/results table, one row per GameID.

    ``source`` is a CSV path or a DataFrame. It must carry ``GameID, Date,
    HomeTeam, AwayTeam`` and either ``Result`` or ``HomeScore``/``AwayScore``.
    """
    if isinstance(source, pd.DataFrame):
        schedule = source.copy()
        name = "schedule"
    else:
        schedule = pd.read_csv(source)
        name = Path(source).name

    _check_columns(schedule, DataConfig.SCHEDULE_COLUMNS, name)
    if "Result" not in schedule.columns:
        _check_columns(schedule, ["HomeScore", "AwayScore"], name)
        scored = schedule["HomeScore"].notna() & schedule["AwayScore"].notna()
        schedule["Result"] = np.where(
            scored, (schedule["HomeScore"] > schedule["AwayScore"]).astype(float), np.nan
        )
    schedule["Result"] = pd.to_numeric(schedule["Result"], errors="coerce").astype("Int64")
    schedule["Date"] = pd.to_datetime(schedule["Date"], errors="coerce")

    dupes = schedule["GameID"].duplicated(keep=False)
    if dupes.any():
        raise SchemaError(
            name,
            message=f"{name} lists GameIDs more than once: {sorted(schedule.loc[dupes, 'GameID'].unique())}",
        )
    logger.info("Loaded schedule with %d games", len(schedule))
    return schedule
