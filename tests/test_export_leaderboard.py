"""Tests for the SQLite loader, the leaderboard export and the dashboard."""

import pandas as pd
import pytest
from openpyxl import load_workbook

from export_leaderboard import export_leaderboard, leaderboard, results_by_country
from inspect_seed import describe_table, load_into_sqlite, status_breakdown
from leaderboard_dashboard import build_dashboard
from seed_sql import write_seed_sql


@pytest.fixture
def small_seed(make_match, make_entry, make_seed):
    """Two finished matches and one running one between p1..p3."""
    g1 = make_match("g1")
    g2 = make_match("g2")
    g3 = make_match("g3", status="running", ended_at=None)
    rows = [
        make_entry(g1, "p1", final_score=900, result="win"),
        make_entry(g1, "p2", final_score=100, result="lose"),
        make_entry(g2, "p1", final_score=400, total_time=8_000, result="win"),
        make_entry(g2, "p3", final_score=400, total_time=9_000, result="lose"),
        make_entry(g3, "p2", final_score=50),
        make_entry(g3, "p3", final_score=60),
    ]
    return make_seed([g1, g2, g3], rows)


class TestSqliteLoader:

    def test_tables_and_counts(self, small_seed):
        conn = load_into_sqlite(small_seed)
        try:
            games = describe_table(conn, "games")
            assert games["count"] == 3
            assert ("total_rounds", "INTEGER") in games["columns"]
            assert describe_table(conn, "game_players")["count"] == 6
            assert describe_table(conn, "players")["sample"]["id"] == "p1"

            statuses = {row["status"]: row["cnt"] for row in status_breakdown(conn, "games")}
            assert statuses == {"finished": 2, "running": 1}
        finally:
            conn.close()

    def test_timestamps_stored_as_text(self, small_seed):
        conn = load_into_sqlite(small_seed)
        try:
            row = conn.execute("SELECT ended_at FROM games WHERE id = 'g3'").fetchone()
            assert row["ended_at"] is None
            row = conn.execute("SELECT created_at FROM games WHERE id = 'g1'").fetchone()
            assert len(row["created_at"]) == len("2025-05-30 12:00:00")
        finally:
            conn.close()


class TestLeaderboard:

    def test_ordering_and_totals(self, small_seed):
        conn = load_into_sqlite(small_seed)
        try:
            df = leaderboard(conn, small_seed.schema)
        finally:
            conn.close()

        assert list(df["player_id"]) == ["p1", "p2", "p3"]
        top = df.iloc[0]
        assert (top["wins"], top["losses"], top["games_played"], top["total_score"]) == (2, 0, 2, 1300)
        # the running match counts as played but has no result
        p2 = df[df["player_id"] == "p2"].iloc[0]
        assert (p2["wins"], p2["losses"], p2["games_played"]) == (0, 1, 2)

    def test_player_without_games(self, small_seed, make_player):
        small_seed.players.append(make_player("p4"))
        conn = load_into_sqlite(small_seed)
        try:
            df = leaderboard(conn, small_seed.schema)
        finally:
            conn.close()
        last = df.iloc[-1]
        assert last["player_id"] == "p4"
        assert (last["games_played"], last["total_score"]) == (0, 0)

    def test_results_by_country(self, small_seed):
        conn = load_into_sqlite(small_seed)
        try:
            df = results_by_country(conn, small_seed.schema)
        finally:
            conn.close()
        assert df.to_dict("records") == [{"country_code": "vn", "wins": 2, "draws": 0, "losses": 2}]


class TestExport:

    @pytest.mark.parametrize("data_fixture", ["games_data", "history_data"])
    def test_workbook_and_dashboard(self, data_fixture, request, tmp_path):
        data = request.getfixturevalue(data_fixture)
        sql_path = tmp_path / "demo_data.sql"
        xlsx_path = tmp_path / "leaderboard_data.xlsx"
        dash_path = tmp_path / "leaderboard_dashboard.xlsx"
        write_seed_sql(sql_path, data)

        sheets = export_leaderboard(sql_path, xlsx_path)
        assert set(sheets) == {"Leaderboard", "Matches_daily", "Results_by_country"}
        assert int(sheets["Leaderboard"]["games_played"].sum()) == len(data.participations)
        assert int(sheets["Matches_daily"]["matches"].sum()) == len(data.matches)

        back = pd.read_excel(xlsx_path, sheet_name="Leaderboard")
        assert len(back) == len(data.players)

        build_dashboard(xlsx_path, dash_path)
        wb = load_workbook(dash_path)
        assert "Dashboard" in wb.sheetnames
        assert wb["Dashboard"]["A1"].value == "Leaderboard Dashboard"
        daily = wb["Matches_daily"]
        assert daily["E1"].value == "day"
        assert daily["F2"].value == "=SUMIF($A:$A,E2,$C:$C)"
