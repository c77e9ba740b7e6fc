"""Per-game, per-participant counts of categorical play outcomes."""

from __future__ import annotations

from typing import Iterable, Mapping

import pandas as pd

from bigten_pred.config import DataConfig, LogConfig
from bigten_pred.utils import setup_logger

logger = setup_logger("frequency", LogConfig.LOG_DIR / "frequency.log")


def role_columns(role: str) -> tuple[str, str]:
    """Return ``(participant column, team column)`` for ``role``."""
    try:
        return DataConfig.ROLES[role]
    except KeyError:
        raise ValueError(f"Unknown role '{role}', expected one of {list(DataConfig.ROLES)}") from None


def _category_labels(values: pd.Series, factor: str) -> pd.Series:
    prefix = DataConfig.FACTOR_PREFIXES.get(factor)
    if prefix is None:
        return values.astype(str)
    # 1.0 -> "Runs_1"; values that aren't numbers become NaN
    numeric = pd.to_numeric(values, errors="coerce")
    return numeric.map(
        lambda v: f"{prefix}{int(v)}" if float(v).is_integer() else f"{prefix}{v}",
        na_action="ignore",
    )


def frequency_table(events: pd.DataFrame, role: str, factor: str) -> pd.DataFrame:
    """Count ``factor`` categories per (GameID, participant).

    Each observed category becomes its own column. Combinations that never
    occur are 0. Missing values of ``factor`` are not counted.
    """
    participant, _ = role_columns(role)
    keys = ["GameID", participant]
    df = events.loc[events[factor].notna(), keys + [factor]].copy()
    df[factor] = _category_labels(df[factor], factor)
    df = df.dropna(subset=keys + [factor])
    if df.empty:
        return pd.DataFrame()

    counts = df.groupby(keys + [factor]).size().rename("n").reset_index()
    wide = counts.pivot_table(
        index=keys, columns=factor, values="n", aggfunc="sum", fill_value=0
    )
    wide.columns = [str(c) for c in wide.columns]
    return wide.astype(int)


def frequency_tables(
    events: pd.DataFrame, role: str, factors: Iterable[str] = DataConfig.FACTORS
) -> dict[str, pd.DataFrame]:
    """Return one :func:`frequency_table` per factor."""
    return {factor: frequency_table(events, role, factor) for factor in factors}


def join_frequency_tables(tables: Mapping[str, pd.DataFrame]) -> pd.DataFrame:
    """Outer join frequency tables on their (GameID, participant) index.

    Returns an empty frame when no factor had any observations.
    """
    frames = [t for t in tables.values() if not t.empty]
    if not frames:
        return pd.DataFrame()
    joined = pd.concat(frames, axis=1, join="outer").fillna(0)
    if joined.columns.duplicated().any():
        # same category name under two factors, e.g. PitchCall and PlayResult
        joined = joined.T.groupby(level=0, sort=False).sum().T
    return joined.astype(int)


def volume_table(events: pd.DataFrame, role: str) -> pd.DataFrame:
    """Return innings pitched or plate appearances per participant and game.

    Pitchers get ``InningsPitched`` (distinct innings with an event).
    Batters get ``PlateAppearances`` (distinct ``(Inning, PAofInning)`` pairs).
    One row per (GameID, participant); team and Date are the first non-missing
    values recorded for that participant in the game.
    """
    participant, team = role_columns(role)
    df = events.dropna(subset=["GameID", participant]).copy()

    if role == "pitcher":
        name, source = "InningsPitched", "Inning"
    else:
        name, source = "PlateAppearances", "_pa_key"
        valid = df["Inning"].notna() & df["PAofInning"].notna()
        df["_pa_key"] = (
            df["Inning"].astype("string") + "-" + df["PAofInning"].astype("string")
        ).where(valid)

    volume = (
        df.groupby(["GameID", participant], sort=True)
        .agg(**{
            team: (team, "first"),
            "Date": ("Date", "first"),
            name: (source, "nunique"),
        })
        .reset_index()
    )
    zero = volume[name] == 0
    if zero.any():
        logger.debug("%d %s rows have no recorded %s", int(zero.sum()), role, name)
    return volume
