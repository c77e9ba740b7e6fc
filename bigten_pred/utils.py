from __future__ import annotations

import logging
import os
import sqlite3
from pathlib import Path
from typing import Optional, Sequence, Union

import pandas as pd

from bigten_pred.config import DBConfig

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
MERGE_SUFFIXES = ("_x", "_y")


class DBConnection:
    """SQLite connection that commits on success and rolls back on error."""

    def __init__(self, db_path: Optional[Union[str, Path]] = None):
        self.db_path = Path(db_path or DBConfig.PATH)
        self.conn: Optional[sqlite3.Connection] = None

    def __enter__(self) -> sqlite3.Connection:
        ensure_dir(self.db_path.parent)
        self.conn = sqlite3.connect(str(self.db_path))
        return self.conn

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self.conn is None:
            return
        try:
            if exc_type is None:
                self.conn.commit()
            else:
                self.conn.rollback()
        finally:
            self.conn.close()
            self.conn = None


def ensure_dir(path: Union[str, Path]) -> Path:
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def setup_logger(
    name: str, log_file: Optional[Union[str, Path]] = None,
    level: int = logging.WARNING,
) -> logging.Logger:
    """Return the ``name`` logger with a console handler and optional log file.

    ``LOG_LEVEL`` in the environment overrides ``level``. Calling it again for
    the same logger does not add handlers twice.
    """
    level = getattr(logging, os.getenv("LOG_LEVEL", "").upper(), level)
    logger = logging.getLogger(name)
    logger.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT)

    # FileHandler subclasses StreamHandler, so check the exact type
    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        logger.addHandler(console)

    if log_file:
        log_path = os.path.abspath(log_file)
        files = {h.baseFilename for h in logger.handlers if isinstance(h, logging.FileHandler)}
        if log_path not in files:
            ensure_dir(Path(log_path).parent)
            handler = logging.FileHandler(log_path)
            handler.setFormatter(formatter)
            logger.addHandler(handler)

    return logger


def deduplicate_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Collapse ``_x``/``_y`` merge columns into their base name.

    Merging the pitching and batting views of a game yields ``Date_x`` and
    ``Date_y``; the result keeps ``Date`` holding the first non-missing value.
    """
    def base_name(col: str) -> str:
        while col.endswith(MERGE_SUFFIXES):
            col = col[:-2]
        return col

    out = pd.DataFrame(index=df.index)
    for col in df.columns:
        base = base_name(col)
        if base in out.columns:
            out[base] = out[base].combine_first(df[col])
        else:
            out[base] = df[col]
    return out


def log_nan_counts(
    df: pd.DataFrame,
    df_name: str = "DataFrame",
    columns: Optional[Sequence[str]] = None,
    logger: Optional[logging.Logger] = None,
) -> pd.Series:
    """Log NaN counts for ``columns`` (default all) and return them."""
    log = logger or logging.getLogger(__name__)
    if columns is None:
        columns = list(df.columns)

    nan_info = df[list(columns)].isna().sum()
    nan_info = nan_info[nan_info > 0]  # Only report columns with NaNs

    if df.empty:
        log.info("%s is empty.", df_name)
    elif nan_info.empty:
        log.info("%s: no NaNs found in %d columns.", df_name, len(columns))
    else:
        nan_percentage = (nan_info / len(df) * 100).round(2)
        nan_summary = pd.DataFrame({"NaN Count": nan_info, "NaN Percentage": nan_percentage})
        log.info("%s: %d rows\nNaN Summary:\n%s", df_name, len(df), nan_summary.to_string())
    return nan_info
