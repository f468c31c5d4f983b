"""
Configuration for the demo seed generator and validator.

Everything tunable lives here as module-level knobs, plus the two schema
variants the demo database has gone through:

- "games":   players / games / game_players, with join and leave times and
             the full match lifecycle (pending, running, finished, cancelled).
- "history": players / matches / game_history, every match finished and no
             per-player join/leave columns.

If you need more or fewer rows, tweak the knobs below.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple

# ---------------------------------------
# Global config / knobs
# ---------------------------------------

OUT_PATH = Path("demo_data.sql")
DATABASE_NAME = "quickmath"

PLAYER_COUNT = 10
MATCH_COUNT = 5

# Number of players sampled into each match (inclusive range,
# capped by the number of players available)
PLAYERS_PER_MATCH = (2, 4)

# Everybody gets the same demo password
DEFAULT_PASSWORD = "123"
BCRYPT_ROUNDS = 10

# None -> a different dataset on every run
RANDOM_SEED: Optional[int] = None

SCHEMA_VARIANT = "games"

# Record kinds, in the order they are written to the SQL file
PLAYERS = "players"
MATCHES = "matches"
PARTICIPATIONS = "participations"
RECORD_KINDS = (PLAYERS, MATCHES, PARTICIPATIONS)


# ---------------------------------------
# Schema column mappings
# ---------------------------------------

@dataclass(frozen=True)
class SchemaMapping:
    """
    Table names and (record field, column name) pairs for one schema variant.

    Column order in the generated INSERT statements follows the order of the
    pairs. A record field missing from a mapping is simply not written.
    """
    name: str
    players_table: str
    matches_table: str
    participations_table: str
    player_columns: Tuple[Tuple[str, str], ...]
    match_columns: Tuple[Tuple[str, str], ...]
    participation_columns: Tuple[Tuple[str, str], ...]
    matches_heading: str = "Matches"
    participations_heading: str = "Game history"

    def table_for(self, kind: str) -> str:
        return {
            PLAYERS: self.players_table,
            MATCHES: self.matches_table,
            PARTICIPATIONS: self.participations_table,
        }[kind]

    def columns_for(self, kind: str) -> Tuple[Tuple[str, str], ...]:
        return {
            PLAYERS: self.player_columns,
            MATCHES: self.match_columns,
            PARTICIPATIONS: self.participation_columns,
        }[kind]

    def field_for_column(self, kind: str, column: str) -> Optional[str]:
        for field_name, column_name in self.columns_for(kind):
            if column_name == column:
                return field_name
        return None

    @property
    def has_join_times(self) -> bool:
        return any(f == "joined_at" for f, _ in self.participation_columns)


_MATCH_COLUMNS = (
    ("id", "id"),
    ("created_at", "created_at"),
    ("started_at", "started_at"),
    ("ended_at", "ended_at"),
    ("total_rounds", "total_rounds"),
    ("status", "status"),
)

GAMES_SCHEMA = SchemaMapping(
    name="games",
    players_table="players",
    matches_table="games",
    participations_table="game_players",
    player_columns=(
        ("id", "id"),
        ("username", "username"),
        ("display_name", "display_name"),
        ("password_hash", "password_hash"),
        ("gender", "gender"),
        ("avatar_url", "avatar_url"),
        ("country_code", "country_code"),
        ("created_at", "created_at"),
    ),
    match_columns=_MATCH_COLUMNS,
    participation_columns=(
        ("match_id", "game_id"),
        ("player_id", "player_id"),
        ("joined_at", "joined_at"),
        ("left_at", "left_at"),
        ("final_score", "final_score"),
        ("total_time", "total_time"),
        ("result", "result"),
    ),
    matches_heading="Games",
    participations_heading="Game players",
)

HISTORY_SCHEMA = SchemaMapping(
    name="history",
    players_table="players",
    matches_table="matches",
    participations_table="game_history",
    player_columns=(
        ("id", "id"),
        ("username", "username"),
        ("display_name", "display_name"),
        ("password_hash", "password_hash"),
        ("gender", "gender"),
        ("avatar_url", "avatar_url"),
        ("country_code", "country_code"),
        ("created_at", "created_at"),
        ("status", "status"),
        ("last_active_at", "last_active_at"),
    ),
    match_columns=_MATCH_COLUMNS,
    participation_columns=(
        ("match_id", "match_id"),
        ("player_id", "player_id"),
        ("final_score", "final_score"),
        ("total_time", "total_time"),
        ("result", "result"),
    ),
)

SCHEMAS: Dict[str, SchemaMapping] = {
    GAMES_SCHEMA.name: GAMES_SCHEMA,
    HISTORY_SCHEMA.name: HISTORY_SCHEMA,
}


# ---------------------------------------
# Weights
# ---------------------------------------

# The games variant leans on the home market
GAMES_COUNTRY_GROUP_WEIGHTS = {
    "vietnam": 24,
    "english": 14,
    "spanish": 6,
    "portuguese": 3,
    "french": 3,
    "german": 2,
    "russian": 2,
    "japanese": 3,
    "chinese": 3,
    "korean": 3,
    "arabic": 2,
    "default": 1,
}

HISTORY_COUNTRY_GROUP_WEIGHTS = {
    "vietnam": 4,
    "english": 20,
    "spanish": 12,
    "portuguese": 6,
    "french": 5,
    "german": 3,
    "russian": 2,
    "japanese": 2,
    "chinese": 2,
    "korean": 2,
    "arabic": 3,
    "default": 1,
}

GAMES_STATUS_WEIGHTS = {
    "pending": 0.1,
    "running": 0.15,
    "finished": 0.65,
    "cancelled": 0.1,
}

HISTORY_STATUS_WEIGHTS = {"finished": 1.0}


@dataclass(frozen=True)
class GeneratorConfig:
    """The recognised generator options."""
    player_count: int = PLAYER_COUNT
    match_count: int = MATCH_COUNT
    schema: SchemaMapping = GAMES_SCHEMA
    country_group_weights: Mapping[str, float] = field(
        default_factory=lambda: dict(GAMES_COUNTRY_GROUP_WEIGHTS)
    )
    status_weights: Mapping[str, float] = field(
        default_factory=lambda: dict(GAMES_STATUS_WEIGHTS)
    )


VARIANTS: Dict[str, GeneratorConfig] = {
    "games": GeneratorConfig(),
    "history": GeneratorConfig(
        schema=HISTORY_SCHEMA,
        country_group_weights=dict(HISTORY_COUNTRY_GROUP_WEIGHTS),
        status_weights=dict(HISTORY_STATUS_WEIGHTS),
    ),
}
