"""Errors raised by the game table pipeline.

Per-game data problems (zero innings, unseen categories, empty sides) are
recovered where they happen and only logged. These exceptions cover input
problems that would make the final table materially incomplete.
"""


class SchemaError(ValueError):
    """An input table is missing required columns or has duplicate keys."""

    def __init__(self, table: str, missing=(), message: str | None = None):
        self.table = table
        self.missing = list(missing)
        if message is None:
            message = f"{table} is missing required columns: {self.missing}"
        super().__init__(message)


class MissingTeamLogError(RuntimeError):
    """A roster team has no event log, or nothing left after filtering."""

    def __init__(self, teams):
        self.teams = sorted(teams)
        super().__init__(f"No in-conference events for roster teams: {self.teams}")
