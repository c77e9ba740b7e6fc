# bigten_pred/features/stats.py
"""Pitching and batting rate statistics per participant, averaged per team side."""

from __future__ import annotations

from typing import Sequence

import numpy as np
import pandas as pd

from bigten_pred.config import DataConfig, LogConfig, StatConfig
from bigten_pred.features.frequency import (
    frequency_tables,
    join_frequency_tables,
    role_columns,
    volume_table,
)
from bigten_pred.utils import deduplicate_columns, setup_logger

logger = setup_logger("stats", LogConfig.LOG_DIR / "stats.log")

GAME_INFO_COLS = ["HomeTeam", "AwayTeam"]


def count(frame: pd.DataFrame, category: str) -> pd.Series:
    """Return the ``category`` count column, or zeros if it was never observed."""
    if category in frame.columns:
        return frame[category]
    return pd.Series(0, index=frame.index, dtype=int)


def safe_rate(numerator: pd.Series, denominator: pd.Series) -> pd.Series:
    """Divide, leaving NaN wherever ``denominator`` is 0 or missing."""
    denom = pd.to_numeric(denominator, errors="coerce").astype(float)
    return numerator.astype(float) / denom.where(denom > 0)


def participant_table(events: pd.DataFrame, role: str) -> pd.DataFrame:
    """Join category counts with innings pitched / plate appearances.

    One row per (GameID, participant).
    """
    participant, _ = role_columns(role)
    volume = volume_table(events, role)
    counts = join_frequency_tables(frequency_tables(events, role))
    if counts.empty:
        return volume

    count_cols = list(counts.columns)
    table = volume.merge(counts.reset_index(), on=["GameID", participant], how="left")
    table[count_cols] = table[count_cols].fillna(0).astype(int)
    return table


def pitching_stats(table: pd.DataFrame) -> pd.DataFrame:
    """Add FIP, WHIP, K9 and BB9 computed from ``InningsPitched``."""
    df = table.copy()
    ip = df["InningsPitched"]
    hr = count(df, "HomeRun")
    bb = count(df, "Walk")
    hbp = count(df, "HitByPitch")
    k = count(df, "Strikeout")
    hits = count(df, "Single") + count(df, "Double") + count(df, "Triple") + hr

    df["FIP"] = safe_rate(13 * hr + 3 * (bb + hbp) - 2 * k, ip) + StatConfig.FIP_CONSTANT
    df["WHIP"] = safe_rate(bb + hits, ip)
    df["K9"] = safe_rate(k, ip) * 9
    df["BB9"] = safe_rate(bb, ip) * 9
    return df


def batting_stats(table: pd.DataFrame) -> pd.DataFrame:
    """Add wOBA, ISO, K% and BB% computed from ``PlateAppearances``.

    At-bats are approximated by plate appearances for ISO. Every rate is NaN
    for a batter without a recorded plate appearance.
    """
    df = table.copy()
    pa = df["PlateAppearances"]
    has_pa = pa > 0

    weights = StatConfig.WOBA_WEIGHTS
    woba_num = sum(weight * count(df, category) for category, weight in weights.items())
    woba_den = pa + count(df, "Walk") + count(df, "Sacrifice") + count(df, "HitByPitch")
    extra_bases = count(df, "Double") + 2 * count(df, "Triple") + 3 * count(df, "HomeRun")

    df["wOBA"] = safe_rate(woba_num, woba_den).where(has_pa)
    df["ISO"] = safe_rate(extra_bases, pa)
    df["K%"] = safe_rate(count(df, "Strikeout"), pa)
    df["BB%"] = safe_rate(count(df, "Walk"), pa)
    return df


def team_side_means(
    participants: pd.DataFrame, stats: Sequence[str], team_col: str
) -> pd.DataFrame:
    """Average ``stats`` over each game's home-side and away-side participants.

    Participants with an undefined statistic are left out of that mean. A side
    with no defined value stays NaN.
    """
    stats = list(stats)
    out = participants.groupby("GameID", sort=True)[["Date"] + GAME_INFO_COLS].first()

    undefined = participants[stats].isna().all(axis=1)
    if undefined.any():
        logger.debug(
            "Excluding %d participant rows without volume from %s averages",
            int(undefined.sum()),
            team_col,
        )

    for side, side_col in (("Home", "HomeTeam"), ("Away", "AwayTeam")):
        on_side = participants[participants[team_col] == participants[side_col]]
        means = on_side.groupby("GameID")[stats].mean()
        means.columns = [f"{side}_{stat}" for stat in stats]
        out = out.join(means, how="left")

    return out.reset_index()


def _empty_team_game_frame() -> pd.DataFrame:
    cols = DataConfig.GAME_KEYS + [
        f"{side}_{stat}" for stat in StatConfig.ALL_STATS for side in ("Home", "Away")
    ]
    return pd.DataFrame(columns=cols)


def team_game_stats(events: pd.DataFrame) -> pd.DataFrame:
    """Return one row per game in ``events`` with both sides' eight statistics.

    ``events`` is a single team's filtered event log. The pitching and batting
    views each carry Date/HomeTeam/AwayTeam; when they are merged the first
    non-missing value of each is kept.
    """
    if events.empty:
        return _empty_team_game_frame()

    games = events.groupby("GameID")[GAME_INFO_COLS].first().reset_index()

    pitchers = pitching_stats(participant_table(events, "pitcher")).merge(games, on="GameID", how="left")
    batters = batting_stats(participant_table(events, "batter")).merge(games, on="GameID", how="left")

    pitching = team_side_means(pitchers, StatConfig.PITCHING_STATS, "PitcherTeam")
    batting = team_side_means(batters, StatConfig.BATTING_STATS, "BatterTeam")

    merged = pitching.merge(batting, on="GameID", how="outer")
    merged = deduplicate_columns(merged)

    stat_cols = [c for c in merged.columns if c not in DataConfig.GAME_KEYS]
    merged[stat_cols] = merged[stat_cols].replace([np.inf, -np.inf], np.nan)
    logger.info(
        "Aggregated %d games from %d pitcher and %d batter rows",
        len(merged),
        len(pitchers),
        len(batters),
    )
    return merged[DataConfig.GAME_KEYS + stat_cols]
