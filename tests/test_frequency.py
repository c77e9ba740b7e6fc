import pandas as pd
import pytest

from bigten_pred.data.load import filter_conference_games
from bigten_pred.features.frequency import (
    frequency_table,
    frequency_tables,
    join_frequency_tables,
    volume_table,
)


@pytest.fixture
def events(make_game, roster):
    return filter_conference_games(make_game("G1", "AAA", "BBB", "2024-03-01"), roster)


def test_frequency_table_pivots_categories(events) -> None:
    table = frequency_table(events, "pitcher", "PlayResult")
    assert set(table.columns) == {"Single", "HomeRun", "Double", "Out"}
    home = table.loc[("G1", "AAA_P")]
    assert home["Single"] == 1
    assert home["HomeRun"] == 1
    # combinations that never happened are zero, not missing
    assert home["Double"] == 0
    assert home["Out"] == 0
    assert not table.isna().any().any()


def test_frequency_table_skips_missing_categories(events) -> None:
    table = frequency_table(events, "batter", "KorBB")
    assert set(table.columns) == {"Strikeout", "Walk"}
    # batters without a strikeout or walk have no KorBB rows at all
    assert ("G1", "AAA_h2") not in table.index


def test_runs_scored_columns_are_prefixed(events) -> None:
    table = frequency_table(events, "pitcher", "RunsScored")
    assert set(table.columns) == {"Runs_0", "Runs_1"}
    assert table.loc[("G1", "AAA_P"), "Runs_1"] == 1


def test_frequency_counts_sum_to_event_counts(events) -> None:
    table = frequency_table(events, "pitcher", "PitchCall")
    totals = table.sum(axis=1)
    expected = events.groupby(["GameID", "Pitcher"]).size()
    pd.testing.assert_series_equal(
        totals.sort_index(), expected.sort_index(), check_names=False
    )


def test_join_frequency_tables_fills_zero(events) -> None:
    joined = join_frequency_tables(frequency_tables(events, "batter"))
    assert {"Single", "Strikeout", "Walk", "StrikeSwinging", "Runs_0"} <= set(joined.columns)
    assert joined.loc[("G1", "AAA_h2"), "Strikeout"] == 0
    assert (joined.dtypes == int).all()


def test_join_frequency_tables_empty() -> None:
    assert join_frequency_tables({"PlayResult": pd.DataFrame()}).empty


def test_volume_table_innings_and_plate_appearances(events) -> None:
    pitchers = volume_table(events, "pitcher").set_index("Pitcher")
    assert pitchers.loc["AAA_P", "InningsPitched"] == 2
    assert pitchers.loc["AAA_P", "PitcherTeam"] == "AAA"

    batters = volume_table(events, "batter").set_index("Batter")
    assert batters.loc["BBB_a1", "PlateAppearances"] == 2
    assert batters.loc["AAA_h2", "PlateAppearances"] == 2


def test_volume_table_counts_missing_innings_as_zero(events) -> None:
    events = events.copy()
    events.loc[events["Pitcher"] == "BBB_P", "Inning"] = float("nan")
    pitchers = volume_table(events, "pitcher").set_index("Pitcher")
    assert pitchers.loc["BBB_P", "InningsPitched"] == 0


def test_unknown_role_rejected(events) -> None:
    with pytest.raises(ValueError):
        volume_table(events, "catcher")


def test_volume_table_one_row_per_participant_with_blank_cells(events) -> None:
    events = events.copy()
    assert events.loc[0, "Pitcher"] == events.loc[4, "Pitcher"] == "AAA_P"
    events.loc[0, "Date"] = pd.NaT
    events.loc[4, "PitcherTeam"] = None

    pitchers = volume_table(events, "pitcher")
    assert not pitchers.duplicated(["GameID", "Pitcher"]).any()
    row = pitchers.set_index("Pitcher").loc["AAA_P"]
    assert row["InningsPitched"] == 2
    assert row["PitcherTeam"] == "AAA"
    assert row["Date"] == pd.Timestamp("2024-03-01")

    batters = volume_table(events, "batter")
    assert not batters.duplicated(["GameID", "Batter"]).any()
    assert batters.set_index("Batter").loc["BBB_a1", "Date"] == pd.Timestamp("2024-03-01")
