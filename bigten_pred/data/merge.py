# bigten_pred/data/merge.py
"""Combine per-team game tables into one row per game and attach outcomes."""

from __future__ import annotations

from typing import Iterable, Mapping, Optional, Tuple, Union

import numpy as np
import pandas as pd
from sklearn.preprocessing import PowerTransformer

from bigten_pred.config import DataConfig, LogConfig, StatConfig
from bigten_pred.utils import setup_logger

logger = setup_logger("merge", LogConfig.LOG_DIR / "merge.log")

DESCRIPTIVE_COLS = ["Date", "HomeTeam", "AwayTeam"]


def merge_team_tables(
    tables: Union[Mapping[str, pd.DataFrame], Iterable[pd.DataFrame]]
) -> pd.DataFrame:
    """Union per-team game tables into exactly one row per GameID.

    Every game is computed once from each participating team's log. Date,
    HomeTeam and AwayTeam take the first non-missing value seen for the game,
    then identical rows are dropped. Rows that still disagree are collapsed
    column by column to the first non-missing value.
    """
    frames = list(tables.values()) if isinstance(tables, Mapping) else list(tables)
    frames = [f for f in frames if not f.empty]
    if not frames:
        raise ValueError("No team game tables to merge")

    combined = pd.concat(frames, ignore_index=True)
    for col in DESCRIPTIVE_COLS:
        combined[col] = combined.groupby("GameID")[col].transform("first")

    n_rows = len(combined)
    combined = combined.drop_duplicates().reset_index(drop=True)
    logger.info("Dropped %d duplicate rows from %d team-game rows", n_rows - len(combined), n_rows)

    dup_mask = combined["GameID"].duplicated(keep=False)
    if dup_mask.any():
        stat_cols = [c for c in combined.columns if c not in DataConfig.GAME_KEYS]
        grouped = combined.loc[dup_mask].groupby("GameID")[stat_cols]
        spread = grouped.max() - grouped.min()
        conflicting = spread.index[(spread.abs() > 1e-9).any(axis=1)].tolist()
        if conflicting:
            logger.warning(
                "Team logs disagree on statistics for %d games, keeping first values: %s",
                len(conflicting),
                conflicting,
            )
        combined = combined.groupby("GameID", sort=False).first().reset_index()

    logger.info("Merged %d team tables into %d games", len(frames), len(combined))
    return combined


def find_date_mismatches(games: pd.DataFrame, schedule: pd.DataFrame) -> pd.DataFrame:
    """Return rows of ``games`` whose Date disagrees with the schedule.

    The result carries an extra ``ScheduleDate`` column. Games missing from
    the schedule or without a recorded date are not reported.
    """
    lookup = schedule[["GameID", "Date"]].rename(columns={"Date": "ScheduleDate"})
    checked = games.merge(lookup, on="GameID", how="left")
    recorded = pd.to_datetime(checked["Date"], errors="coerce").dt.normalize()
    expected = pd.to_datetime(checked["ScheduleDate"], errors="coerce").dt.normalize()
    mismatch = recorded.notna() & expected.notna() & (recorded != expected)
    return checked.loc[mismatch.to_numpy()].reset_index(drop=True)


def drop_misdated_games(games: pd.DataFrame, schedule: pd.DataFrame) -> pd.DataFrame:
    """Remove games whose recorded date contradicts the schedule."""
    bad = find_date_mismatches(games, schedule)
    for row in bad.itertuples(index=False):
        logger.warning(
            "Dropping game %s: recorded date %s, schedule says %s",
            row.GameID,
            pd.Timestamp(row.Date).date(),
            pd.Timestamp(row.ScheduleDate).date(),
        )
    return games.loc[~games["GameID"].isin(bad["GameID"])].reset_index(drop=True)


def attach_results(games: pd.DataFrame, schedule: pd.DataFrame) -> pd.DataFrame:
    """Join the home-win label on GameID.

    A missing Date is filled from the schedule. Games without a known result
    are dropped.
    """
    lookup = schedule[["GameID", "Date", "Result"]].rename(columns={"Date": "ScheduleDate"})
    df = games.drop(columns=["Result"], errors="ignore").merge(lookup, on="GameID", how="left")
    df["Date"] = df["Date"].fillna(df["ScheduleDate"])
    df = df.drop(columns=["ScheduleDate"])

    unlabeled = df["Result"].isna()
    if unlabeled.any():
        logger.warning(
            "Dropping %d games without a result: %s",
            int(unlabeled.sum()),
            df.loc[unlabeled, "GameID"].tolist(),
        )
        df = df.loc[~unlabeled]
    df["Result"] = df["Result"].astype(int)
    return df.reset_index(drop=True)


def _pooled_iso(games: pd.DataFrame) -> np.ndarray:
    pooled = pd.concat([games[col] for col in StatConfig.ISO_COLUMNS], ignore_index=True)
    return pooled.dropna().to_numpy(dtype=float).reshape(-1, 1)


def fit_iso_transform(games: pd.DataFrame) -> PowerTransformer:
    """Fit one Yeo-Johnson transform on home and away ISO values pooled together."""
    values = _pooled_iso(games)
    if len(values) == 0:
        raise ValueError("No ISO values to fit a power transform on")
    transformer = PowerTransformer(method="yeo-johnson", standardize=False)
    transformer.fit(values)
    logger.info("Fitted Yeo-Johnson lambda %.4f on %d ISO values", transformer.lambdas_[0], len(values))
    return transformer


def transform_iso(
    games: pd.DataFrame, transformer: Optional[PowerTransformer] = None
) -> Tuple[pd.DataFrame, PowerTransformer]:
    """Apply a single fitted ISO transform to both ISO columns.

    Must run on the fully merged table so the fit sees every game.
    """
    df = games.copy()
    if transformer is None:
        transformer = fit_iso_transform(df)
    for col in StatConfig.ISO_COLUMNS:
        present = df[col].notna()
        if present.any():
            values = df.loc[present, col].to_numpy(dtype=float).reshape(-1, 1)
            df.loc[present, col] = transformer.transform(values).ravel()
    return df, transformer
