#!/usr/bin/env python3
"""
Demo seed data generator for the quickmath database.

This script will:

1. Generate a handful of players with plausible names, usernames and
   countries (weighted by country group).
2. Generate matches with a consistent lifecycle (created -> started -> ended,
   depending on status).
3. Put 2-4 players into every match, with join/leave times, scores, play
   time, and a win/lose/draw result for finished matches.
4. Write everything as SQL INSERT statements to demo_data.sql.

The output is meant to be loaded into a fresh demo database and can be
checked with validate_seed_data.py.

Usage:
    python generate_seed_data.py [output_path]

Which schema is written (games / history) and how many rows are generated
is controlled by the knobs in seed_config.py.
"""

import random
import re
import sys
import unicodedata
import uuid
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import FrozenSet, List, Mapping, NamedTuple, Optional, Tuple, TypeVar

import bcrypt

from match_outcomes import results_for_status
from match_timing import derive_match_times, derive_participation_times
from name_pools import countries_in_group, name_pool_for_country
from seed_config import (
    BCRYPT_ROUNDS,
    DEFAULT_PASSWORD,
    OUT_PATH,
    PLAYERS_PER_MATCH,
    RANDOM_SEED,
    SCHEMA_VARIANT,
    VARIANTS,
    GeneratorConfig,
)
from seed_records import Match, Participation, Player, SeedData
from seed_sql import write_seed_sql

T = TypeVar("T")

GENDERS = ["male", "female", "other"]
PLAYER_CREATED_WINDOW_SEC = 30 * 24 * 3600
AVATAR_URL = "https://i.pravatar.cc/150?img={}"
TOTAL_ROUNDS = (1, 10)
SCORE_RANGE = (0, 1000)

# Display names are re-drawn this many times before a numeric suffix is used
DISPLAY_NAME_ATTEMPTS = 10

# Letters NFD does not decompose into base + accent
_TRANSLITERATE = str.maketrans({
    "đ": "d", "Đ": "D", "ß": "ss", "ø": "o", "Ø": "O", "ł": "l", "Ł": "L",
})


# ---------------------------------------
# Utility functions
# ---------------------------------------

def choose_weighted(weights: Mapping[T, float]) -> T:
    """
    Randomly choose one label from a {label: weight} mapping.
    We assume weights are non-negative. If all weights are zero, choose uniformly.
    """
    choices = list(weights.items())
    if not choices:
        raise ValueError("choose_weighted() needs at least one label")
    total = sum(w for _, w in choices)
    if total <= 0:
        # all weights zero -> fallback to uniform
        return random.choice([v for v, _ in choices])
    r = random.random() * total
    upto = 0.0
    for value, weight in choices:
        upto += weight
        if r < upto:
            return value
    # Fallback
    return choices[-1][0]


def slugify_name(name: str) -> str:
    """
    ASCII username slug: accents stripped, lower case, runs of anything
    non-alphanumeric collapsed to a single dot.

    "Nguyễn Văn An" -> "nguyen.van.an", "Liam O'Brien" -> "liam.o.brien"
    """
    if not name:
        return ""
    decomposed = unicodedata.normalize("NFD", name.translate(_TRANSLITERATE))
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return re.sub(r"[^a-z0-9]+", ".", stripped.lower()).strip(".")


def new_uuid() -> str:
    """Version 4 UUID drawn from `random`, so seeded runs are reproducible."""
    return str(uuid.UUID(int=random.getrandbits(128), version=4))


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("ascii")


def random_instant(start: datetime, end: datetime) -> datetime:
    span = max(0, int((end - start).total_seconds()))
    return start + timedelta(seconds=random.randint(0, span))


# ---------------------------------------
# Players
# ---------------------------------------

class NameRegistry(NamedTuple):
    """Display names and usernames already handed out in this run."""
    display_names: FrozenSet[str] = frozenset()
    usernames: FrozenSet[str] = frozenset()

    def register(self, display_name: str, username: str) -> "NameRegistry":
        return NameRegistry(
            self.display_names | {display_name},
            self.usernames | {username},
        )


def pick_country(group_weights: Mapping[str, float]) -> str:
    """Pick a country group by weight, then a country uniformly inside it."""
    group = choose_weighted(group_weights)
    return random.choice(countries_in_group(group))


def pick_display_name(country_code: str, index: int, taken: FrozenSet[str]) -> str:
    pool = name_pool_for_country(country_code)
    name = random.choice(pool) if pool else f"Player {index}"
    attempts = 0
    while name in taken and attempts < DISPLAY_NAME_ATTEMPTS:
        name = random.choice(pool) if pool else f"Player {index}"
        attempts += 1
    if name in taken:
        base = name
        suffix = 2
        while name in taken:
            name = f"{base} {suffix}"
            suffix += 1
    return name


def pick_username(display_name: str, index: int, taken: FrozenSet[str]) -> str:
    base = slugify_name(display_name) or f"user{index:02d}"
    username = base
    suffix = 1
    while username in taken:
        username = f"{base}{suffix}"
        suffix += 1
    return username


def generate_player(
    index: int,
    config: GeneratorConfig,
    registry: NameRegistry,
    now: datetime,
) -> Tuple[Player, NameRegistry]:
    """
    Generate the `index`-th player (1-based).

    Returns the player together with the registry extended by its display
    name and username.
    """
    country_code = pick_country(config.country_group_weights)
    display_name = pick_display_name(country_code, index, registry.display_names)
    username = pick_username(display_name, index, registry.usernames)

    created_at = now - timedelta(seconds=random.randint(0, PLAYER_CREATED_WINDOW_SEC))
    player = Player(
        id=new_uuid(),
        username=username,
        display_name=display_name,
        country_code=country_code,
        created_at=created_at,
        password_hash=hash_password(DEFAULT_PASSWORD),
        gender=random.choice(GENDERS),
        avatar_url=AVATAR_URL.format((index % 70) + 1),
        status="offline",
        last_active_at=random_instant(created_at, now),
    )
    return player, registry.register(display_name, username)


def generate_players(
    config: GeneratorConfig,
    now: datetime,
    registry: Optional[NameRegistry] = None,
) -> Tuple[List[Player], NameRegistry]:
    registry = registry or NameRegistry()
    players: List[Player] = []
    for index in range(1, config.player_count + 1):
        player, registry = generate_player(index, config, registry, now)
        players.append(player)
    return players, registry


# ---------------------------------------
# Matches and participations
# ---------------------------------------

def generate_matches(config: GeneratorConfig, now: datetime) -> List[Match]:
    matches: List[Match] = []
    for _ in range(config.match_count):
        status = choose_weighted(config.status_weights)
        created_at, started_at, ended_at = derive_match_times(status, now)
        matches.append(Match(
            id=new_uuid(),
            created_at=created_at,
            started_at=started_at,
            ended_at=ended_at,
            total_rounds=random.randint(*TOTAL_ROUNDS),
            status=status,
        ))
    return matches


def generate_match_participations(
    match: Match,
    players: List[Player],
    now: datetime,
) -> List[Participation]:
    """
    Pick 2-4 distinct players for one match and derive their rows.

    Results are filled in last, once all scores and play times are known.
    """
    lo, hi = PLAYERS_PER_MATCH
    k = min(len(players), random.randint(lo, hi))
    selected = random.sample(players, k)

    entries: List[Participation] = []
    for p in selected:
        joined_at, left_at, total_time = derive_participation_times(match, now)
        entries.append(Participation(
            match_id=match.id,
            player_id=p.id,
            joined_at=joined_at,
            left_at=left_at,
            final_score=random.randint(*SCORE_RANGE),
            total_time=total_time,
        ))

    results = results_for_status(match.status, entries)
    return [replace(e, result=r) for e, r in zip(entries, results)]


def build_seed_data(config: GeneratorConfig, now: Optional[datetime] = None) -> SeedData:
    """Generate one complete, internally consistent dataset."""
    now = (now or datetime.now(timezone.utc).replace(tzinfo=None)).replace(microsecond=0)

    players, _ = generate_players(config, now)
    matches = generate_matches(config, now)
    participations: List[Participation] = []
    for match in matches:
        participations.extend(generate_match_participations(match, players, now))

    return SeedData(
        schema=config.schema,
        players=players,
        matches=matches,
        participations=participations,
    )


# ---------------------------------------
# Main
# ---------------------------------------

def main() -> None:
    random.seed(RANDOM_SEED)

    out_path = Path(sys.argv[1]) if len(sys.argv) > 1 else OUT_PATH
    config = VARIANTS[SCHEMA_VARIANT]

    print(f"Generating {config.player_count} players and {config.match_count} "
          f"matches ({config.schema.name} schema)...")
    data = build_seed_data(config)

    print(f"Writing {len(data.participations)} participation rows...")
    write_seed_sql(out_path, data)

    print("Done. Seed SQL written to:", out_path)


if __name__ == "__main__":
    main()
