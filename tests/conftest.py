"""Pytest configuration and fixtures for the seed generator tests.

This module provides:
- A fixed generation time and a seeded `random` for every test
- Cheap bcrypt hashing so player generation stays fast
- Factories for hand-built matches and participation rows
- Generated datasets for both schema variants

Usage:
    pytest tests/
"""

import random
from datetime import datetime, timedelta
from typing import Callable, Optional

import pytest

import generate_seed_data
from seed_config import GAMES_SCHEMA, VARIANTS
from seed_records import Match, Participation, Player, SeedData


# =============================================================================
# ENVIRONMENT
# =============================================================================

@pytest.fixture
def now() -> datetime:
    """Fixed generation time."""
    return datetime(2025, 6, 1, 12, 0, 0)


@pytest.fixture(autouse=True)
def seeded_random():
    """Every test starts from the same random state."""
    random.seed(20250601)
    yield


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    """Use the cheapest bcrypt cost; the hash itself is cosmetic."""
    monkeypatch.setattr(generate_seed_data, "BCRYPT_ROUNDS", 4)


# =============================================================================
# RECORD FACTORIES
# =============================================================================

@pytest.fixture
def make_player(now) -> Callable[..., Player]:
    def _make(pid: str, username: Optional[str] = None, display_name: Optional[str] = None) -> Player:
        return Player(
            id=pid,
            username=username or f"user.{pid}",
            display_name=display_name or f"User {pid}",
            country_code="vn",
            created_at=now - timedelta(days=20),
        )
    return _make


@pytest.fixture
def make_match(now) -> Callable[..., Match]:
    """A finished match created 2 days ago that ran for one hour."""
    def _make(mid: str = "g1", status: str = "finished", **overrides) -> Match:
        created = now - timedelta(days=2)
        fields = dict(
            id=mid,
            created_at=created,
            started_at=created + timedelta(minutes=5),
            ended_at=created + timedelta(minutes=65),
            total_rounds=5,
            status=status,
        )
        fields.update(overrides)
        return Match(**fields)
    return _make


@pytest.fixture
def make_entry() -> Callable[..., Participation]:
    """
    A participation row for `match` that joined at start and stayed
    `total_time` ms (so the join/leave delta matches exactly).
    """
    def _make(
        match: Match,
        player_id: str,
        final_score: int = 0,
        total_time: int = 10_000,
        result: Optional[str] = None,
        **overrides,
    ) -> Participation:
        joined = match.started_at or match.created_at
        left = joined + timedelta(milliseconds=total_time) if match.ended_at else None
        fields = dict(
            match_id=match.id,
            player_id=player_id,
            joined_at=joined,
            left_at=left,
            final_score=final_score,
            total_time=total_time,
            result=result,
        )
        fields.update(overrides)
        return Participation(**fields)
    return _make


@pytest.fixture
def make_seed(make_player) -> Callable[..., SeedData]:
    """Wrap matches and rows into SeedData, creating players p1..pN."""
    def _make(matches, participations, player_ids=("p1", "p2", "p3"), schema=GAMES_SCHEMA) -> SeedData:
        return SeedData(
            schema=schema,
            players=[make_player(pid) for pid in player_ids],
            matches=list(matches),
            participations=list(participations),
        )
    return _make


# =============================================================================
# GENERATED DATASETS
# =============================================================================

@pytest.fixture
def games_data(now) -> SeedData:
    return generate_seed_data.build_seed_data(VARIANTS["games"], now)


@pytest.fixture
def history_data(now) -> SeedData:
    return generate_seed_data.build_seed_data(VARIANTS["history"], now)


# =============================================================================
# MARKERS AND CONFIGURATION
# =============================================================================

def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
