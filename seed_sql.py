"""
Writing seed records as SQL INSERT statements and reading them back.

The generated file is plain text, one statement per line:

    USE quickmath;

    -- Players
    INSERT INTO players (id, username, ...) VALUES ('...', 'liam.o.brien', ...);

    -- Games
    INSERT INTO games (id, created_at, ...) VALUES (...);

    -- Game players
    INSERT INTO game_players (game_id, player_id, ...) VALUES (...);

Values are rendered as:
- None      -> NULL
- int       -> bare number
- datetime  -> 'YYYY-MM-DD HH:MM:SS'
- anything else -> single-quoted text with \\ and ' escaped by a backslash

The reader only trusts what it can parse completely: a statement it does
not understand raises SqlParseError with the line number instead of
producing a half-filled record.
"""

import re
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from seed_config import (
    DATABASE_NAME,
    MATCHES,
    PARTICIPATIONS,
    PLAYERS,
    RECORD_KINDS,
    SCHEMAS,
    SchemaMapping,
)
from seed_records import (
    Match,
    Participation,
    Player,
    SeedData,
    format_timestamp,
    parse_timestamp,
)

_INSERT_RE = re.compile(
    r"^INSERT INTO\s+`?(\w+)`?\s*\(([^)]*)\)\s*VALUES\s*\((.*)\)\s*;\s*$",
    re.DOTALL,
)
_INT_RE = re.compile(r"^-?\d+$")

_RECORD_TYPES = {PLAYERS: Player, MATCHES: Match, PARTICIPATIONS: Participation}

# Fields holding timestamps, per record kind
_TIMESTAMP_FIELDS = {
    PLAYERS: ("created_at", "last_active_at"),
    MATCHES: ("created_at", "started_at", "ended_at"),
    PARTICIPATIONS: ("joined_at", "left_at"),
}

# Fields a record cannot be built without
_REQUIRED_FIELDS = {
    PLAYERS: ("id", "username", "display_name", "country_code", "created_at"),
    MATCHES: ("id", "created_at", "total_rounds", "status"),
    PARTICIPATIONS: ("match_id", "player_id", "final_score", "total_time"),
}

# Fields that may be NULL in the file but have no default on the record
_NULLABLE_FIELDS = {
    PLAYERS: (),
    MATCHES: ("started_at", "ended_at"),
    PARTICIPATIONS: ("joined_at", "left_at", "result"),
}


class SqlParseError(ValueError):
    """A statement in a seed SQL file could not be parsed."""

    def __init__(self, message: str, lineno: Optional[int] = None):
        self.lineno = lineno
        if lineno is not None:
            message = f"line {lineno}: {message}"
        super().__init__(message)


# ---------------------------------------
# Serializer
# ---------------------------------------

def escape_text(value: str) -> str:
    return value.replace("\\", "\\\\").replace("'", "\\'")


def sql_literal(value: Any) -> str:
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, datetime):
        return f"'{format_timestamp(value)}'"
    return f"'{escape_text(str(value))}'"


def render_insert(table: str, columns: Sequence[Tuple[str, str]], record: object) -> str:
    """Render one record as an INSERT statement using (field, column) pairs."""
    names = ", ".join(column for _, column in columns)
    values = ", ".join(sql_literal(getattr(record, field)) for field, _ in columns)
    return f"INSERT INTO {table} ({names}) VALUES ({values});"


def render_seed_sql(data: SeedData, database: Optional[str] = DATABASE_NAME) -> str:
    """Render the whole seed file: players, then matches, then participations."""
    schema = data.schema
    sections = [
        ("Players", PLAYERS, data.players),
        (schema.matches_heading, MATCHES, data.matches),
        (schema.participations_heading, PARTICIPATIONS, data.participations),
    ]

    lines: List[str] = []
    if database:
        lines.append(f"USE {database};")
        lines.append("")
    for heading, kind, records in sections:
        lines.append(f"-- {heading}")
        table = schema.table_for(kind)
        columns = schema.columns_for(kind)
        lines.extend(render_insert(table, columns, r) for r in records)
        lines.append("")
    return "\n".join(lines)


def write_seed_sql(path: Path, data: SeedData, database: Optional[str] = DATABASE_NAME) -> None:
    with path.open("w", encoding="utf-8") as f:
        f.write(render_seed_sql(data, database))


# ---------------------------------------
# Value parser
# ---------------------------------------

def _read_quoted(text: str, i: int) -> Tuple[str, int]:
    """Read a quoted string starting at the opening quote; return (value, next index)."""
    start = i
    i += 1
    chars: List[str] = []
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "\\":
            if i + 1 >= n:
                break
            chars.append(text[i + 1])
            i += 2
            continue
        if ch == "'":
            if i + 1 < n and text[i + 1] == "'":
                # doubled quote, standard SQL escaping
                chars.append("'")
                i += 2
                continue
            return "".join(chars), i + 1
        chars.append(ch)
        i += 1
    raise SqlParseError(f"unterminated string literal starting at column {start + 1}")


def _bare_value(token: str) -> Any:
    if token == "NULL":
        return None
    if _INT_RE.match(token):
        return int(token)
    return token


def parse_values_list(text: str) -> List[Any]:
    """
    Parse the inside of a VALUES (...) clause into Python values.

    NULL -> None, quoted text -> str (escapes decoded), integers -> int,
    any other bare token -> str as written.
    """
    values: List[Any] = []
    i = 0
    n = len(text)

    while i < n and text[i].isspace():
        i += 1
    if i >= n:
        return values

    while True:
        if i >= n:
            raise SqlParseError("missing value after ','")
        if text[i] == "'":
            value, i = _read_quoted(text, i)
        elif text[i] == ",":
            raise SqlParseError(f"empty value at column {i + 1}")
        else:
            j = i
            while j < n and text[j] != "," and not text[j].isspace():
                j += 1
            value = _bare_value(text[i:j])
            i = j
        values.append(value)

        while i < n and text[i].isspace():
            i += 1
        if i >= n:
            return values
        if text[i] != ",":
            raise SqlParseError(f"expected ',' at column {i + 1}, found {text[i]!r}")
        i += 1
        while i < n and text[i].isspace():
            i += 1


def parse_insert(line: str, lineno: Optional[int] = None) -> Tuple[str, List[str], List[Any]]:
    """Split one INSERT statement into (table, column names, values)."""
    m = _INSERT_RE.match(line.strip())
    if not m:
        raise SqlParseError("malformed INSERT statement", lineno)
    table, column_text, value_text = m.groups()
    columns = [c.strip().strip("`") for c in column_text.split(",") if c.strip()]
    try:
        values = parse_values_list(value_text)
    except SqlParseError as exc:
        raise SqlParseError(str(exc), lineno) from exc
    if len(columns) != len(values):
        raise SqlParseError(
            f"{len(columns)} column(s) but {len(values)} value(s) for table {table}", lineno
        )
    return table, columns, values


# ---------------------------------------
# Record reconstruction
# ---------------------------------------

def _table_lookup() -> Dict[str, List[Tuple[SchemaMapping, str]]]:
    lookup: Dict[str, List[Tuple[SchemaMapping, str]]] = {}
    for schema in SCHEMAS.values():
        for kind in RECORD_KINDS:
            lookup.setdefault(schema.table_for(kind), []).append((schema, kind))
    return lookup


def build_record(
    kind: str,
    schema: SchemaMapping,
    columns: Sequence[str],
    values: Sequence[Any],
    lineno: Optional[int] = None,
) -> object:
    """Turn parsed columns/values into a Player, Match or Participation."""
    fields: Dict[str, Any] = {}
    for column, value in zip(columns, values):
        name = schema.field_for_column(kind, column)
        if name is not None:
            fields[name] = value

    missing = [f for f in _REQUIRED_FIELDS[kind] if fields.get(f) is None]
    if missing:
        raise SqlParseError(
            f"{schema.table_for(kind)} row is missing {', '.join(missing)}", lineno
        )

    for name in _TIMESTAMP_FIELDS[kind]:
        raw = fields.get(name)
        if raw is None:
            continue
        if not isinstance(raw, str):
            raise SqlParseError(f"{name} is not a timestamp: {raw!r}", lineno)
        try:
            fields[name] = parse_timestamp(raw)
        except ValueError as exc:
            raise SqlParseError(f"{name} is not a timestamp: {raw!r}", lineno) from exc

    for name in _NULLABLE_FIELDS[kind]:
        fields.setdefault(name, None)

    return _RECORD_TYPES[kind](**fields)


def parse_seed_lines(lines: Iterable[str]) -> SeedData:
    """
    Rebuild SeedData from the lines of a seed SQL file.

    Non-INSERT lines and INSERTs into tables neither schema knows about are
    skipped. The schema is taken from the matches/participations tables
    seen (defaulting to the games schema).
    """
    lookup = _table_lookup()
    parsed: List[Tuple[int, str, List[str], List[Any]]] = []
    schema: Optional[SchemaMapping] = None

    for lineno, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line.startswith("INSERT INTO"):
            continue
        table, columns, values = parse_insert(line, lineno)
        for candidate, kind in lookup.get(table, []):
            if kind != PLAYERS and schema is None:
                schema = candidate
        parsed.append((lineno, table, columns, values))

    if schema is None:
        schema = SCHEMAS["games"]

    data = SeedData(schema=schema)
    targets = {PLAYERS: data.players, MATCHES: data.matches, PARTICIPATIONS: data.participations}
    for lineno, table, columns, values in parsed:
        for kind in RECORD_KINDS:
            if schema.table_for(kind) == table:
                targets[kind].append(build_record(kind, schema, columns, values, lineno))
                break
    return data


def read_seed_sql(path: Path) -> SeedData:
    if not path.exists():
        raise FileNotFoundError(f"Seed SQL file not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        return parse_seed_lines(f.read().splitlines())
