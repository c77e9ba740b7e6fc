# config.py
from pathlib import Path
import os

PROJECT_ROOT = Path(__file__).resolve().parent.parent


class DBConfig:
    # Use an absolute path so scripts work from any CWD
    PATH = PROJECT_ROOT / "data" / "bigten_games.db"
    GAME_TABLE = "game_features"


class DataConfig:
    # Big Ten baseball programs, keyed by their TrackMan team codes
    ROSTER = (
        "ILL_ILL",
        "IND_HOO",
        "IOW_HAW",
        "MAR_TER",
        "MIC_SPA",
        "MIC_WOL",
        "MIN_GOL",
        "NEB",
        "NOR_CAT",
        "OSU_BUC",
        "PEN_NIT",
        "PUR_BOI",
        "RUT_SCA",
    )
    DATA_DIR = Path(os.getenv("BIGTEN_DATA_DIR", PROJECT_ROOT / "data" / "raw"))
    EVENT_LOG_GLOB = "*.csv"

    SENTINEL = "Undefined"
    SENTINEL_COLUMNS = ("PlayResult", "KorBB")
    FACTORS = ("PlayResult", "KorBB", "PitchCall", "RunsScored")
    # RunsScored values are numbers, prefix them so they can't clash with other factors
    FACTOR_PREFIXES = {"RunsScored": "Runs_"}

    GAME_KEYS = ["GameID", "Date", "HomeTeam", "AwayTeam"]
    REQUIRED_COLUMNS = [
        "GameID",
        "HomeTeam",
        "AwayTeam",
        "Date",
        "Inning",
        "Pitcher",
        "PitcherTeam",
        "Batter",
        "BatterTeam",
        "PAofInning",
        "PlayResult",
        "KorBB",
        "PitchCall",
        "RunsScored",
    ]
    SCHEDULE_COLUMNS = ["GameID", "Date", "HomeTeam", "AwayTeam"]
    # role -> (participant column, team column)
    ROLES = {
        "pitcher": ("Pitcher", "PitcherTeam"),
        "batter": ("Batter", "BatterTeam"),
    }


class StatConfig:
    FIP_CONSTANT = 4.22
    WOBA_WEIGHTS = {
        "Walk": 0.812,
        "HitByPitch": 0.838,
        "Single": 0.943,
        "Double": 1.245,
        "Triple": 1.537,
        "HomeRun": 1.764,
    }
    PITCHING_STATS = ["FIP", "WHIP", "K9", "BB9"]
    BATTING_STATS = ["wOBA", "ISO", "K%", "BB%"]
    ALL_STATS = PITCHING_STATS + BATTING_STATS
    ISO_COLUMNS = ["Home_ISO", "Away_ISO"]
    OUTPUT_COLUMNS = (
        ["Date", "HomeTeam", "AwayTeam"]
        + [f"{side}_{stat}" for stat in ALL_STATS for side in ("Home", "Away")]
        + ["Result"]
    )


class ModelConfig:
    RANDOM_STATE = 3
    TEST_SIZE = 0.25
    TARGET_VARIABLE = "Result"
    DEFAULT_MODEL_TYPE = "logistic"

    LOGISTIC_PARAMS = {
        "C": 1.0,
        "max_iter": 1000,
        "random_state": RANDOM_STATE,
    }
    RF_PARAMS = {
        "n_estimators": 300,
        "max_depth": 4,
        "min_samples_leaf": 2,
        "random_state": RANDOM_STATE,
    }
    LGBM_PARAMS = {
        "objective": "binary",
        "learning_rate": 0.05,
        "n_estimators": 200,
        "num_leaves": 8,
        "min_child_samples": 5,
        "random_state": RANDOM_STATE,
        "verbose": -1,
    }


class LogConfig:
    # Define Log directory relative to project root
    LOG_DIR = PROJECT_ROOT / "logs"


class FileConfig:
    DATA_DIR = PROJECT_ROOT / "data"
    MODELS_DIR = PROJECT_ROOT / "models"
    GAME_TABLE_FILE = DATA_DIR / "game_features.csv"
    MODEL_FILE = MODELS_DIR / "outcome_model.pkl"
