"""
Timestamps and play time for generated matches and their players.

All timestamps are whole seconds (the SQL DATETIME columns cannot hold
more) and `now` is the generation time; nothing generated here lies after
it. Play time is in milliseconds.
"""

import random
from datetime import datetime, timedelta
from typing import Optional, Tuple

from seed_records import Match, millis_between

ONE_SECOND = timedelta(seconds=1)

# Matches are created somewhere in the last 10 days, but at least a couple
# of minutes ago so that start/end clamping always has room.
CREATED_WINDOW_SEC = (120, 10 * 24 * 3600)
START_DELAY_SEC = (5, 2 * 3600)
MATCH_LENGTH_SEC = (10, 3 * 3600)
MATCH_LENGTH_EXTRA_SEC = (0, 60)

# Players of a match that has not started join shortly after creation
JOIN_GRACE_SEC = (1, 300)

# Measured play time drifts a little from the wall-clock delta
PLAY_TIME_JITTER_MS = 500
# Players still in an open match have accumulated some time already
OPEN_PLAY_TIME_MS = (1_000, 30 * 60 * 1000)

# Checks used by the validator
PLAY_TIME_TOLERANCE_MS = 2000
MAX_OPEN_PLAY_TIME_MS = 24 * 3600 * 1000


def _seconds(start: datetime, end: datetime) -> int:
    return max(0, int((end - start).total_seconds()))


def _random_between(start: datetime, end: datetime) -> datetime:
    """Uniform whole-second timestamp in [start, end] (start if end < start)."""
    return start + timedelta(seconds=random.randint(0, _seconds(start, end)))


def _clamp_after(candidate: datetime, base: datetime, now: datetime, back_off_sec: int) -> datetime:
    """
    Keep `candidate` strictly after `base` and not after `now`.

    When the candidate lands in the future it is pulled back to a random
    point up to `back_off_sec` before now.
    """
    candidate = max(candidate, base + ONE_SECOND)
    if candidate >= now:
        candidate = max(base + ONE_SECOND, now - timedelta(seconds=random.randint(1, back_off_sec)))
    return candidate


def derive_match_times(
    status: str,
    now: datetime,
) -> Tuple[datetime, Optional[datetime], Optional[datetime]]:
    """
    Return (created_at, started_at, ended_at) for a match with `status`.

    - pending:   not started, not ended
    - running:   started, not ended
    - finished:  started and ended
    - cancelled: ended, and started about half of the time
    """
    now = now.replace(microsecond=0)
    created = now - timedelta(seconds=random.randint(*CREATED_WINDOW_SEC))

    started = None
    if status in ("running", "finished") or (status == "cancelled" and random.random() < 0.5):
        started = created + timedelta(seconds=random.randint(*START_DELAY_SEC))
        started = _clamp_after(started, created, now, back_off_sec=3600)

    ended = None
    if status in ("finished", "cancelled"):
        base = started or created
        ended = base + timedelta(
            seconds=random.randint(*MATCH_LENGTH_SEC) + random.randint(*MATCH_LENGTH_EXTRA_SEC)
        )
        ended = _clamp_after(ended, base, now, back_off_sec=60)

    return created, started, ended


def derive_participation_times(
    match: Match,
    now: datetime,
) -> Tuple[datetime, Optional[datetime], int]:
    """
    Return (joined_at, left_at, total_time_ms) for one player of `match`.

    - joined_at lies in [created, started] (or a short grace period after
      creation when the match never started).
    - left_at only exists once the match has ended; it lies between the
      later of join/start and the end, at least a second after joining.
    - total_time is the join/leave delta plus a little jitter, or a
      plausible running total when the player has not left yet.
    """
    now = now.replace(microsecond=0)
    created = match.created_at

    if match.started_at is not None:
        upper = match.started_at
    else:
        upper = created + timedelta(seconds=random.randint(*JOIN_GRACE_SEC))
        if match.ended_at is not None:
            upper = min(upper, match.ended_at - ONE_SECOND)
        upper = min(upper, now)
    joined = max(created, _random_between(created, upper))

    if match.ended_at is None:
        return joined, None, random.randint(*OPEN_PLAY_TIME_MS)

    lower = joined
    if match.started_at is not None and match.started_at > lower:
        lower = match.started_at
    left = max(_random_between(lower, match.ended_at), joined + ONE_SECOND)

    jitter = random.randint(-PLAY_TIME_JITTER_MS, PLAY_TIME_JITTER_MS)
    total_time = max(0, millis_between(joined, left) + jitter)
    return joined, left, total_time
