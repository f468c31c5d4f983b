"""
Leaderboard and match KPIs from a seed SQL file, exported to Excel.

Sheets:
- Leaderboard:        wins / draws / losses / games played per player,
                      best first (wins, then games played)
- Matches_daily:      matches created per day and status
- Results_by_country: results per player country

Usage:
    python export_leaderboard.py [path_to_sql] [output_xlsx]
"""

import sqlite3
import sys
from pathlib import Path
from typing import Dict

import pandas as pd

from inspect_seed import load_into_sqlite
from seed_config import MATCHES, OUT_PATH, PARTICIPATIONS, PLAYERS, SchemaMapping
from seed_sql import read_seed_sql

OUTPUT_XLSX = Path("leaderboard_data.xlsx")


def _column(schema: SchemaMapping, kind: str, field_name: str) -> str:
    return dict(schema.columns_for(kind))[field_name]


def _query(conn: sqlite3.Connection, sql: str) -> pd.DataFrame:
    # plain tuples for pandas
    conn.row_factory = None
    return pd.read_sql_query(sql, conn)


# -----------------------------
#    Leaderboard per player
#    (players without any game still show up with zeros)
# -----------------------------
def leaderboard(conn: sqlite3.Connection, schema: SchemaMapping) -> pd.DataFrame:
    gp_match = _column(schema, PARTICIPATIONS, "match_id")
    gp_player = _column(schema, PARTICIPATIONS, "player_id")
    sql = f"""
    SELECT
        p.id AS player_id,
        p.username,
        p.display_name,
        p.country_code,
        SUM(CASE WHEN gp.result = 'win'  THEN 1 ELSE 0 END) AS wins,
        SUM(CASE WHEN gp.result = 'draw' THEN 1 ELSE 0 END) AS draws,
        SUM(CASE WHEN gp.result = 'lose' THEN 1 ELSE 0 END) AS losses,
        COUNT(gp.{gp_match}) AS games_played,
        COALESCE(SUM(gp.final_score), 0) AS total_score
    FROM {schema.table_for(PLAYERS)} p
    LEFT JOIN {schema.table_for(PARTICIPATIONS)} gp
      ON p.id = gp.{gp_player}
    GROUP BY p.id, p.username, p.display_name, p.country_code
    ORDER BY wins DESC, games_played DESC, p.username;
    """
    return _query(conn, sql)


# -----------------------------
#    Matches per creation day and status
# -----------------------------
def matches_daily(conn: sqlite3.Connection, schema: SchemaMapping) -> pd.DataFrame:
    sql = f"""
    SELECT
        substr(created_at, 1, 10) AS day,   -- YYYY-MM-DD
        status,
        COUNT(*) AS matches
    FROM {schema.table_for(MATCHES)}
    GROUP BY day, status
    ORDER BY day, status;
    """
    return _query(conn, sql)


# -----------------------------
#    Results per player country (finished matches only)
# -----------------------------
def results_by_country(conn: sqlite3.Connection, schema: SchemaMapping) -> pd.DataFrame:
    gp_player = _column(schema, PARTICIPATIONS, "player_id")
    sql = f"""
    SELECT
        p.country_code,
        SUM(CASE WHEN gp.result = 'win'  THEN 1 ELSE 0 END) AS wins,
        SUM(CASE WHEN gp.result = 'draw' THEN 1 ELSE 0 END) AS draws,
        SUM(CASE WHEN gp.result = 'lose' THEN 1 ELSE 0 END) AS losses
    FROM {schema.table_for(PARTICIPATIONS)} gp
    JOIN {schema.table_for(PLAYERS)} p
      ON p.id = gp.{gp_player}
    WHERE gp.result IS NOT NULL
    GROUP BY p.country_code
    ORDER BY wins DESC, p.country_code;
    """
    return _query(conn, sql)


def export_leaderboard(sql_path: Path, xlsx_path: Path) -> Dict[str, pd.DataFrame]:
    """Build all sheets from `sql_path` and write them to one workbook."""
    data = read_seed_sql(sql_path)
    conn = load_into_sqlite(data)
    try:
        sheets = {
            "Leaderboard": leaderboard(conn, data.schema),
            "Matches_daily": matches_daily(conn, data.schema),
            "Results_by_country": results_by_country(conn, data.schema),
        }
    finally:
        conn.close()

    # Write everything to a single excel file but to different sheets
    with pd.ExcelWriter(xlsx_path, engine="xlsxwriter") as writer:
        for name, df in sheets.items():
            df.to_excel(writer, sheet_name=name, index=False)
    return sheets


def main() -> None:
    sql_path = Path(sys.argv[1]) if len(sys.argv) > 1 else OUT_PATH
    xlsx_path = Path(sys.argv[2]) if len(sys.argv) > 2 else OUTPUT_XLSX

    sheets = export_leaderboard(sql_path, xlsx_path)
    top = sheets["Leaderboard"].head(1)
    if not top.empty:
        print(f"Top player: {top.iloc[0]['display_name']} ({int(top.iloc[0]['wins'])} wins)")
    print(f"Leaderboard Excel generated: {xlsx_path}")


if __name__ == "__main__":
    main()
