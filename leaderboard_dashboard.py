"""
Adds a chart dashboard to the workbook written by export_leaderboard.py.

Usage:
    python leaderboard_dashboard.py [leaderboard_xlsx] [output_xlsx]
"""

import sys
from pathlib import Path

from openpyxl import load_workbook
from openpyxl.chart import BarChart, Reference

from export_leaderboard import OUTPUT_XLSX

DASHBOARD_XLSX = Path("leaderboard_dashboard.xlsx")

# Leaderboard sheet layout as exported (1-based columns)
LB_USERNAME_COL = 2
LB_WINS_COL = 5
LB_GAMES_COL = 8

# Matches_daily: A day, B status, C matches; per-day totals go to E/F
DAILY_DAY_COL = 5
DAILY_TOTAL_COL = 6


def add_bar_chart(
    sheet,
    title,
    data_sheet,
    cat_col,
    val_col,
    pos,
    max_row=None,
    color="4472C4",
):
    """
    Create a single-series bar chart:

    - Categories from column `cat_col` (rows 2..max_row).
    - Values from column `val_col` (header in row 1, data rows 2..max_row).
    - Axis tick labels forced visible, no legend.
    """
    max_row = max_row or data_sheet.max_row

    data_ref = Reference(data_sheet, min_col=val_col, min_row=1, max_row=max_row)
    cat_ref = Reference(data_sheet, min_col=cat_col, min_row=2, max_row=max_row)

    chart = BarChart()
    chart.title = title
    chart.add_data(data_ref, titles_from_data=True)
    chart.set_categories(cat_ref)

    chart.legend = None
    chart.varyColors = False

    chart.x_axis.tickLblPos = "nextTo"
    chart.y_axis.tickLblPos = "nextTo"
    chart.x_axis.delete = False
    chart.y_axis.delete = False
    chart.x_axis.majorTickMark = "out"
    chart.y_axis.majorTickMark = "out"

    if chart.series:
        s = chart.series[0]
        s.graphicalProperties.solidFill = color
        s.graphicalProperties.line.solidFill = color

    sheet.add_chart(chart, pos)
    return chart


def add_daily_totals(daily_ws) -> int:
    """
    Write one row per distinct day next to the Matches_daily data, with a
    SUMIF over all statuses. Returns the last row written.
    """
    daily_ws.cell(row=1, column=DAILY_DAY_COL, value="day")
    daily_ws.cell(row=1, column=DAILY_TOTAL_COL, value="total_matches")

    days = []
    for row in range(2, daily_ws.max_row + 1):
        day = daily_ws.cell(row=row, column=1).value
        if day is not None and day not in days:
            days.append(day)

    for i, day in enumerate(days, start=2):
        daily_ws.cell(row=i, column=DAILY_DAY_COL, value=day)
        daily_ws.cell(row=i, column=DAILY_TOTAL_COL, value=f"=SUMIF($A:$A,E{i},$C:$C)")
    return 1 + len(days)


def build_dashboard(src_path: Path, out_path: Path) -> None:
    wb = load_workbook(src_path)
    lb_ws = wb["Leaderboard"]
    daily_ws = wb["Matches_daily"]

    last_day_row = add_daily_totals(daily_ws)

    if "Dashboard" in wb.sheetnames:
        dash = wb["Dashboard"]
    else:
        dash = wb.create_sheet("Dashboard")
    dash["A1"] = "Leaderboard Dashboard"

    add_bar_chart(dash, "Wins per player", lb_ws, LB_USERNAME_COL, LB_WINS_COL, "A3")
    add_bar_chart(
        dash, "Games played per player", lb_ws, LB_USERNAME_COL, LB_GAMES_COL, "M3",
        color="9E480E",
    )
    if last_day_row >= 2:
        add_bar_chart(
            dash, "Matches per day", daily_ws, DAILY_DAY_COL, DAILY_TOTAL_COL, "A18",
            max_row=last_day_row,
        )

    wb.save(out_path)


def main() -> None:
    src_path = Path(sys.argv[1]) if len(sys.argv) > 1 else OUTPUT_XLSX
    out_path = Path(sys.argv[2]) if len(sys.argv) > 2 else DASHBOARD_XLSX
    build_dashboard(src_path, out_path)
    print("Saved:", out_path)


if __name__ == "__main__":
    main()
