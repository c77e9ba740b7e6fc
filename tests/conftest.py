import pandas as pd
import pytest

ROSTER = ["AAA", "BBB", "CCC"]


def event(
    game,
    home,
    away,
    date,
    inning,
    pitcher,
    pitcher_team,
    batter,
    batter_team,
    pa,
    play="Undefined",
    korbb="Undefined",
    call="BallCalled",
    runs=0,
):
    return {
        "GameID": game,
        "HomeTeam": home,
        "AwayTeam": away,
        "Date": pd.Timestamp(date),
        "Inning": inning,
        "Pitcher": pitcher,
        "PitcherTeam": pitcher_team,
        "Batter": batter,
        "BatterTeam": batter_team,
        "PAofInning": pa,
        "PlayResult": play,
        "KorBB": korbb,
        "PitchCall": call,
        "RunsScored": runs,
    }


def game_events(game, home, away, date):
    """Two innings: the away side goes single/K, HR/walk; the home side double/out, K/out."""
    hp, ap = f"{home}_P", f"{away}_P"
    h1, h2 = f"{home}_h1", f"{home}_h2"
    a1, a2 = f"{away}_a1", f"{away}_a2"
    rows = [
        event(game, home, away, date, 1, hp, home, a1, away, 1, play="Single", call="InPlay"),
        event(game, home, away, date, 1, hp, home, a2, away, 2, korbb="Strikeout", call="StrikeSwinging"),
        event(game, home, away, date, 1, ap, away, h1, home, 1, play="Double", call="InPlay"),
        event(game, home, away, date, 1, ap, away, h2, home, 2, play="Out", call="InPlay"),
        event(game, home, away, date, 2, hp, home, a1, away, 1, play="HomeRun", call="InPlay", runs=1),
        event(game, home, away, date, 2, hp, home, a2, away, 2, korbb="Walk", call="BallCalled"),
        event(game, home, away, date, 2, ap, away, h1, home, 1, korbb="Strikeout", call="StrikeCalled"),
        event(game, home, away, date, 2, ap, away, h2, home, 2, play="Out", call="InPlay"),
    ]
    return pd.DataFrame(rows)


@pytest.fixture
def roster():
    return list(ROSTER)


@pytest.fixture
def season():
    """Team logs and schedule for a small conference season.

    G1 and G2 are clean conference games, G3 is recorded a day late in both
    logs and G4 is against a non-conference opponent.
    """
    g1 = game_events("G1", "AAA", "BBB", "2024-03-01")
    g2 = game_events("G2", "BBB", "CCC", "2024-03-08")
    g3 = game_events("G3", "CCC", "AAA", "2024-03-16")
    g4 = game_events("G4", "AAA", "ZZZ", "2024-03-20")
    logs = {
        "AAA": pd.concat([g1, g3, g4], ignore_index=True),
        "BBB": pd.concat([g1, g2], ignore_index=True),
        "CCC": pd.concat([g2, g3], ignore_index=True),
        "ZZZ": g4.copy(),
    }
    schedule = pd.DataFrame(
        {
            "GameID": ["G1", "G2", "G3", "G4"],
            "Date": ["2024-03-01", "2024-03-08", "2024-03-15", "2024-03-20"],
            "HomeTeam": ["AAA", "BBB", "CCC", "AAA"],
            "AwayTeam": ["BBB", "CCC", "AAA", "ZZZ"],
            "HomeScore": [5, 2, 1, 7],
            "AwayScore": [3, 4, 0, 0],
        }
    )
    return logs, schedule


@pytest.fixture
def make_event():
    return event


@pytest.fixture
def make_game():
    return game_events
