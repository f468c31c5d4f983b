"""
In-memory records for the demo seed data.

The generator builds these once per run and the validator rebuilds them
from the SQL text. They are frozen: nothing mutates a record after it has
been created.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from seed_config import SchemaMapping

# Closed value sets
MATCH_STATUSES = ("pending", "running", "finished", "cancelled")
RESULT_VALUES = ("win", "lose", "draw")

FINISHED = "finished"

# MySQL DATETIME layout used in the generated SQL
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_timestamp(value: datetime) -> str:
    return value.strftime(TIMESTAMP_FORMAT)


def parse_timestamp(text: str) -> datetime:
    """Parse a 'YYYY-MM-DD HH:MM:SS' string. Raises ValueError on anything else."""
    return datetime.strptime(text, TIMESTAMP_FORMAT)


def millis_between(start: datetime, end: datetime) -> int:
    """Signed number of whole milliseconds from start to end."""
    delta = end - start
    return (delta.days * 86_400 + delta.seconds) * 1000 + delta.microseconds // 1000


@dataclass(frozen=True)
class Player:
    id: str
    username: str
    display_name: str
    country_code: str
    created_at: datetime
    password_hash: str = ""
    gender: str = ""
    avatar_url: str = ""
    status: Optional[str] = None
    last_active_at: Optional[datetime] = None


@dataclass(frozen=True)
class Match:
    id: str
    created_at: datetime
    started_at: Optional[datetime]
    ended_at: Optional[datetime]
    total_rounds: int
    status: str

    @property
    def is_finished(self) -> bool:
        return self.status == FINISHED


@dataclass(frozen=True)
class Participation:
    """One player's row in one match.

    total_time is in milliseconds. joined_at/left_at are None when the
    schema does not carry them (or, for left_at, when the match has not
    ended yet).
    """
    match_id: str
    player_id: str
    joined_at: Optional[datetime]
    left_at: Optional[datetime]
    final_score: int
    total_time: int
    result: Optional[str] = None


@dataclass
class SeedData:
    """Everything read back from (or about to be written to) one SQL file."""
    schema: SchemaMapping
    players: List[Player] = field(default_factory=list)
    matches: List[Match] = field(default_factory=list)
    participations: List[Participation] = field(default_factory=list)
