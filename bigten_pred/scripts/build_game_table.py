from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

import pandas as pd

from bigten_pred.config import DataConfig, DBConfig, FileConfig, LogConfig
from bigten_pred.data.load import load_event_logs
from bigten_pred.pipeline import build_game_table
from bigten_pred.utils import DBConnection, ensure_dir, setup_logger

logger = setup_logger("build_game_table", LogConfig.LOG_DIR / "build_game_table.log")


def store_game_table(df: pd.DataFrame, db_path: Path, table: str = DBConfig.GAME_TABLE) -> None:
    """Replace ``table`` in ``db_path`` with ``df``."""
    out = df.copy()
    out["Date"] = pd.to_datetime(out["Date"]).dt.strftime("%Y-%m-%d")
    with DBConnection(db_path) as conn:
        existing = conn.execute(
            "SELECT 1 FROM sqlite_master WHERE type='table' AND name=?", (table,)
        ).fetchone()
        if existing:
            logger.info("Replacing existing table %s", table)
        out.to_sql(table, conn, if_exists="replace", index=False)
    logger.info("Stored %d games to %s:%s", len(out), db_path, table)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build the Big Ten game feature table from TrackMan logs")
    parser.add_argument("--data-dir", type=Path, default=DataConfig.DATA_DIR, help="Directory of <TEAM>.csv event logs")
    parser.add_argument("--schedule", type=Path, required=True, help="CSV with GameID, Date, HomeTeam, AwayTeam and Result or scores")
    parser.add_argument("--output", type=Path, default=FileConfig.GAME_TABLE_FILE, help="Where to write the game table CSV")
    parser.add_argument("--db-path", type=Path, default=None, help="Optionally also store the table in this SQLite database")
    parser.add_argument("--roster", nargs="+", default=None, help="Team codes to treat as the conference (defaults to DataConfig.ROSTER)")
    parser.add_argument("--keep-game-id", action="store_true", help="Keep the GameID column in the output")
    parser.add_argument("--no-transform", action="store_true", help="Skip the Yeo-Johnson transform of the ISO columns")
    parser.add_argument(
        "--allow-missing-teams",
        action="store_true",
        help="Continue when a roster team has no event log",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    roster = args.roster or list(DataConfig.ROSTER)
    logs = load_event_logs(args.data_dir, roster)
    games = build_game_table(
        logs,
        args.schedule,
        roster,
        require_all_teams=not args.allow_missing_teams,
        transform=not args.no_transform,
        keep_game_id=args.keep_game_id,
    )
    ensure_dir(args.output.parent)
    games.to_csv(args.output, index=False)
    logger.info("Wrote %d games to %s", len(games), args.output)
    if args.db_path:
        store_game_table(games, args.db_path)


if __name__ == "__main__":  # pragma: no cover
    main()
