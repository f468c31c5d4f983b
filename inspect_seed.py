#!/usr/bin/env python3
"""
Quick look at a generated seed file.

Loads the INSERT statements into an in-memory SQLite database and prints,
for every table, its columns, row count and one sample row, plus how many
matches are in each status.

Usage:
    python inspect_seed.py [path_to_sql]

If no path is given, defaults to "demo_data.sql".
"""

import sqlite3
import sys
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from seed_config import MATCHES, OUT_PATH, PARTICIPATIONS, PLAYERS, RECORD_KINDS
from seed_records import SeedData, format_timestamp
from seed_sql import read_seed_sql

INTEGER_FIELDS = {"total_rounds", "final_score", "total_time"}


def _column_type(field_name: str) -> str:
    return "INTEGER" if field_name in INTEGER_FIELDS else "TEXT"


def _db_value(value):
    if isinstance(value, datetime):
        return format_timestamp(value)
    return value


def load_into_sqlite(data: SeedData, conn: Optional[sqlite3.Connection] = None) -> sqlite3.Connection:
    """
    Create the seed tables (named and laid out as in the detected schema)
    and insert every record. Returns the connection, rows accessible by name.
    """
    if conn is None:
        conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row

    schema = data.schema
    records = {
        PLAYERS: data.players,
        MATCHES: data.matches,
        PARTICIPATIONS: data.participations,
    }
    for kind in RECORD_KINDS:
        table = schema.table_for(kind)
        columns = schema.columns_for(kind)
        column_defs = ", ".join(f"{col} {_column_type(f)}" for f, col in columns)
        conn.execute(f"CREATE TABLE {table} ({column_defs});")

        placeholders = ", ".join("?" for _ in columns)
        names = ", ".join(col for _, col in columns)
        rows = [
            tuple(_db_value(getattr(r, f)) for f, _ in columns)
            for r in records[kind]
        ]
        conn.executemany(f"INSERT INTO {table} ({names}) VALUES ({placeholders});", rows)
    conn.commit()
    return conn


def describe_table(conn: sqlite3.Connection, table_name: str) -> Dict[str, object]:
    """Columns, row count and first row of one table."""
    columns = [
        (row["name"], row["type"])
        for row in conn.execute(f"PRAGMA table_info({table_name});").fetchall()
    ]
    count = conn.execute(f"SELECT COUNT(*) AS cnt FROM {table_name};").fetchone()["cnt"]
    sample = conn.execute(f"SELECT * FROM {table_name} LIMIT 1;").fetchone()
    return {"columns": columns, "count": count, "sample": sample}


def status_breakdown(conn: sqlite3.Connection, matches_table: str) -> List[sqlite3.Row]:
    return conn.execute(
        f"""
        SELECT status, COUNT(*) AS cnt
        FROM {matches_table}
        GROUP BY status
        ORDER BY cnt DESC, status;
        """
    ).fetchall()


def print_table_summary(conn: sqlite3.Connection, table_name: str) -> None:
    info = describe_table(conn, table_name)

    print("=" * 80)
    print(f"Table: {table_name}")
    print("-" * 80)
    print("Columns:")
    for name, col_type in info["columns"]:
        print(f"  - {name}: {col_type}")
    print()
    print(f"Row count: {info['count']}")
    print()

    sample = info["sample"]
    if sample is None:
        print("Sample row: (table is empty)")
    else:
        print("Sample row:")
        for col in sample.keys():
            print(f"  {col}: {sample[col]}")
    print()


def main():
    sql_path = Path(sys.argv[1]) if len(sys.argv) > 1 else OUT_PATH

    print(f"Inspecting seed file: {sql_path}")
    data = read_seed_sql(sql_path)
    conn = load_into_sqlite(data)

    schema = data.schema
    print(f"Schema: {schema.name}\n")
    for kind in RECORD_KINDS:
        print_table_summary(conn, schema.table_for(kind))

    print(f"{schema.matches_table} by status:")
    for row in status_breakdown(conn, schema.table_for(MATCHES)):
        print(f"  {row['status']}: {row['cnt']}")

    conn.close()


if __name__ == "__main__":
    main()
