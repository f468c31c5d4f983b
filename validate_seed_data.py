#!/usr/bin/env python3
"""
Consistency check for a generated seed SQL file.

Re-reads the INSERT statements, rebuilds players, matches and per-player
rows, and checks that they still make sense together:

- every row points at an existing match and player
- match timestamps are in order (created <= started <= ended)
- nobody appears twice in the same match
- join/leave times fit inside the match, and play time matches them
- finished matches have a valid result for everybody, other matches none
- results are the ones the scores and play times call for

All problems are collected and printed; the exit status is 1 if any were
found.

Usage:
    python validate_seed_data.py [path_to_sql]

If no path is given, defaults to "demo_data.sql".
"""

import sys
from collections import defaultdict
from pathlib import Path
from typing import Dict, List, Sequence

from match_outcomes import derive_results
from match_timing import MAX_OPEN_PLAY_TIME_MS, PLAY_TIME_TOLERANCE_MS
from seed_config import OUT_PATH, SchemaMapping
from seed_records import (
    MATCH_STATUSES,
    RESULT_VALUES,
    Match,
    Participation,
    Player,
    SeedData,
    format_timestamp,
    millis_between,
)
from seed_sql import read_seed_sql

MAX_REPORTED_ISSUES = 200
SCORE_RANGE = (0, 1000)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _ts(value) -> str:
    return format_timestamp(value) if value is not None else "NULL"


# ---------------------------------------
# Individual checks
# ---------------------------------------

def check_players(players: Sequence[Player]) -> List[str]:
    """Player ids, usernames and display names must be unique."""
    issues: List[str] = []
    for attr, label in (("id", "player id"), ("username", "username"), ("display_name", "display name")):
        seen = set()
        for p in players:
            value = getattr(p, attr)
            if value in seen:
                issues.append(f"duplicate {label} {value}")
            seen.add(value)
    return issues


def check_references(
    participations: Sequence[Participation],
    match_ids: set,
    player_ids: set,
    schema: SchemaMapping,
) -> List[str]:
    table = schema.participations_table
    issues: List[str] = []
    for gp in participations:
        if gp.match_id not in match_ids:
            issues.append(f"{table} references missing game {gp.match_id}")
        if gp.player_id not in player_ids:
            issues.append(f"{table} references missing player {gp.player_id}")
    return issues


def check_match(match: Match) -> List[str]:
    """Status, round count and created/started/ended ordering of one match."""
    gid = match.id
    issues: List[str] = []
    if match.status not in MATCH_STATUSES:
        issues.append(f"game {gid} has invalid status {match.status}")
    if not _is_int(match.total_rounds) or match.total_rounds < 1:
        issues.append(f"game {gid} has invalid total_rounds {match.total_rounds}")

    created, started, ended = match.created_at, match.started_at, match.ended_at
    if started is not None and started < created:
        issues.append(f"game {gid} started_at before created_at")
    if ended is not None:
        if started is not None and ended < started:
            issues.append(f"game {gid} ended_at before started_at")
        elif started is None and ended < created:
            issues.append(f"game {gid} ended_at before created_at")
    return issues


def check_participation_times(match: Match, gp: Participation, require_join: bool) -> List[str]:
    """Join/leave bounds and play-time consistency for one player of one match."""
    gid, pid = match.id, gp.player_id
    issues: List[str] = []

    if not _is_int(gp.total_time):
        return [f"game {gid} player {pid} has non-numeric total_time {gp.total_time!r}"]

    joined, left = gp.joined_at, gp.left_at
    if joined is None:
        if require_join:
            return [f"game_player in game {gid} player {pid} has no joined_at"]
        if left is not None:
            return [f"game {gid} player {pid} has left_at but no joined_at"]
    else:
        if joined < match.created_at:
            issues.append(
                f"joined_at {_ts(joined)} < game.created_at {_ts(match.created_at)} "
                f"for game {gid} player {pid}"
            )

    if left is not None:
        if match.ended_at is not None and left > match.ended_at:
            issues.append(
                f"left_at {_ts(left)} > game.ended_at {_ts(match.ended_at)} for game {gid} player {pid}"
            )
        if left < joined:
            issues.append(
                f"left_at {_ts(left)} < joined_at {_ts(joined)} for game {gid} player {pid}"
            )
        dt = millis_between(joined, left)
        diff = abs(dt - gp.total_time)
        if diff > PLAY_TIME_TOLERANCE_MS:
            issues.append(
                f"total_time {gp.total_time} differs from left-joined delta {dt} by {diff}ms "
                f"for {gid}/{pid}"
            )
    elif gp.total_time < 0 or gp.total_time > MAX_OPEN_PLAY_TIME_MS:
        issues.append(f"implausible total_time {gp.total_time} for player {pid} game {gid}")
    return issues


def check_results(match: Match, entries: Sequence[Participation]) -> List[str]:
    """Result presence per status, closed value set, and agreement with the scores."""
    gid = match.id
    issues: List[str] = []

    if not match.is_finished:
        for e in entries:
            if e.result is not None:
                issues.append(f"game {gid} status {match.status} but player {e.player_id} has result {e.result}")
        return issues

    for e in entries:
        if e.result is None:
            issues.append(f"game {gid} finished but player {e.player_id} has null result")
        elif e.result not in RESULT_VALUES:
            issues.append(f"game {gid} has invalid result value {e.result}")

    # Only recompute when the inputs are usable; bad values were reported already
    if entries and all(_is_int(e.final_score) and _is_int(e.total_time) for e in entries):
        for e, expected in zip(entries, derive_results(entries)):
            if e.result is not None and e.result in RESULT_VALUES and e.result != expected:
                issues.append(
                    f"game {gid} player {e.player_id} result {e.result} "
                    f"but scores and times call for {expected}"
                )
    return issues


# ---------------------------------------
# Full check
# ---------------------------------------

def check_consistency(data: SeedData) -> List[str]:
    """
    Run every check over a rebuilt dataset and return the issues found,
    in a stable order (players, references, then match by match).

    Nothing here raises for bad data; an empty list means the data is
    consistent.
    """
    issues: List[str] = []
    issues.extend(check_players(data.players))

    match_ids = {m.id for m in data.matches}
    player_ids = {p.id for p in data.players}
    issues.extend(check_references(data.participations, match_ids, player_ids, data.schema))

    by_match: Dict[str, List[Participation]] = defaultdict(list)
    for gp in data.participations:
        by_match[gp.match_id].append(gp)

    require_join = data.schema.has_join_times
    for match in data.matches:
        issues.extend(check_match(match))
        entries = by_match.get(match.id, [])

        seen_players = set()
        for gp in entries:
            if gp.player_id in seen_players:
                issues.append(f"duplicate player {gp.player_id} in game {match.id}")
            seen_players.add(gp.player_id)

            if not _is_int(gp.final_score) or not SCORE_RANGE[0] <= gp.final_score <= SCORE_RANGE[1]:
                issues.append(f"game {match.id} player {gp.player_id} has invalid final_score {gp.final_score}")
            issues.extend(check_participation_times(match, gp, require_join))

        issues.extend(check_results(match, entries))
    return issues


def print_report(data: SeedData, issues: Sequence[str], limit: int = MAX_REPORTED_ISSUES) -> None:
    print(
        f"Parsed {len(data.players)} player(s), {len(data.matches)} {data.schema.matches_table} "
        f"and {len(data.participations)} {data.schema.participations_table} row(s)"
    )
    if not issues:
        print("VALIDATION PASSED")
        return
    print(f"VALIDATION FAILED: {len(issues)} issue(s)")
    for issue in issues[:limit]:
        print("- " + issue)
    if len(issues) > limit:
        print(f"... {len(issues) - limit} more not shown")


def main() -> int:
    sql_path = Path(sys.argv[1]) if len(sys.argv) > 1 else OUT_PATH

    print(f"Validating seed file: {sql_path}")
    data = read_seed_sql(sql_path)
    issues = check_consistency(data)
    print_report(data, issues)
    return 1 if issues else 0


if __name__ == "__main__":
    sys.exit(main())
