"""Tests for the seed generator: players, matches, participations, output file."""

import random
from collections import Counter, defaultdict

import bcrypt
import pytest

import generate_seed_data
from generate_seed_data import (
    NameRegistry,
    build_seed_data,
    choose_weighted,
    generate_players,
    new_uuid,
    pick_username,
    slugify_name,
)
from seed_config import HISTORY_SCHEMA, VARIANTS, GeneratorConfig
from seed_records import MATCH_STATUSES, RESULT_VALUES
from seed_sql import read_seed_sql, write_seed_sql
from validate_seed_data import check_consistency


class TestUtilities:

    @pytest.mark.parametrize("name,slug", [
        ("Nguyễn Văn An", "nguyen.van.an"),
        ("Đoàn Văn Sơn", "doan.van.son"),
        ("Liam O'Brien", "liam.o.brien"),
        ("Lee Ji-eun", "lee.ji.eun"),
        ("Jürgen Weiß", "jurgen.weiss"),
        ("  Sofía González ", "sofia.gonzalez"),
        ("", ""),
    ])
    def test_slugify_name(self, name, slug):
        assert slugify_name(name) == slug

    def test_choose_weighted_skips_zero_weights(self):
        picks = {choose_weighted({"a": 0, "b": 1, "c": 0}) for _ in range(200)}
        assert picks == {"b"}

    def test_choose_weighted_all_zero_is_uniform(self):
        picks = Counter(choose_weighted({"a": 0, "b": 0}) for _ in range(400))
        assert set(picks) == {"a", "b"}

    def test_choose_weighted_follows_weights(self):
        picks = Counter(choose_weighted({"heavy": 9, "light": 1}) for _ in range(2000))
        assert picks["heavy"] > picks["light"] * 4

    def test_choose_weighted_needs_labels(self):
        with pytest.raises(ValueError):
            choose_weighted({})

    def test_uuid_is_reproducible_with_seed(self):
        random.seed(7)
        first = new_uuid()
        random.seed(7)
        assert new_uuid() == first
        assert first[14] == "4"

    def test_pick_username_appends_suffix(self):
        taken = frozenset({"john.smith", "john.smith1"})
        assert pick_username("John Smith", 3, taken) == "john.smith2"

    def test_pick_username_fallback_for_unsluggable_name(self):
        assert pick_username("李伟", 7, frozenset()) == "user07"


class TestPlayers:

    def test_names_unique_even_with_tiny_pool(self, now):
        # Only Japanese names: 3 in the pool, so suffixes are needed
        config = GeneratorConfig(player_count=12, country_group_weights={"japanese": 1})
        players, registry = generate_players(config, now)

        assert len(players) == 12
        assert len({p.display_name for p in players}) == 12
        assert len({p.username for p in players}) == 12
        assert registry.display_names == frozenset(p.display_name for p in players)
        assert registry.usernames == frozenset(p.username for p in players)
        assert all(p.country_code == "jp" for p in players)

    def test_registry_is_threaded_through(self, now):
        config = GeneratorConfig(player_count=4, country_group_weights={"korean": 1})
        taken = NameRegistry(
            display_names=frozenset({"Kim Minsoo", "Lee Ji-eun", "Park Joon"}),
            usernames=frozenset({"kim.minsoo", "lee.ji.eun", "park.joon"}),
        )
        players, registry = generate_players(config, now, taken)

        assert not {p.display_name for p in players} & taken.display_names
        assert not {p.username for p in players} & taken.usernames
        assert taken.display_names < registry.display_names
        # the registry passed in is left alone
        assert len(taken.display_names) == 3

    def test_player_fields(self, now):
        players, _ = generate_players(GeneratorConfig(player_count=5), now)
        for p in players:
            assert p.username.isascii()
            assert p.created_at <= now
            assert p.created_at <= p.last_active_at <= now
            assert p.gender in generate_seed_data.GENDERS
            assert p.avatar_url.startswith("https://i.pravatar.cc/150?img=")
            assert bcrypt.checkpw(b"123", p.password_hash.encode("ascii"))


class TestBuildSeedData:

    def test_counts_and_participants(self, games_data):
        assert len(games_data.players) == VARIANTS["games"].player_count
        assert len(games_data.matches) == VARIANTS["games"].match_count

        per_match = defaultdict(list)
        for gp in games_data.participations:
            per_match[gp.match_id].append(gp.player_id)
        assert set(per_match) == {m.id for m in games_data.matches}
        for player_ids in per_match.values():
            assert 2 <= len(player_ids) <= 4
            assert len(set(player_ids)) == len(player_ids)

    def test_results_only_for_finished_matches(self, now):
        config = GeneratorConfig(match_count=60)
        data = build_seed_data(config, now)
        status_by_match = {m.id: m.status for m in data.matches}

        assert set(status_by_match.values()) <= set(MATCH_STATUSES)
        assert len(set(status_by_match.values())) > 1
        for gp in data.participations:
            if status_by_match[gp.match_id] == "finished":
                assert gp.result in RESULT_VALUES
            else:
                assert gp.result is None

    def test_history_variant_is_all_finished(self, history_data):
        assert history_data.schema is HISTORY_SCHEMA
        assert {m.status for m in history_data.matches} == {"finished"}
        assert all(gp.result in RESULT_VALUES for gp in history_data.participations)

    def test_fewer_players_than_match_size(self, now):
        data = build_seed_data(GeneratorConfig(player_count=1, match_count=3), now)
        assert len(data.participations) == 3

    def test_no_players(self, now):
        data = build_seed_data(GeneratorConfig(player_count=0, match_count=2), now)
        assert data.participations == []


class TestGeneratedFileValidates:

    @pytest.mark.parametrize("variant", ["games", "history"])
    @pytest.mark.parametrize("seed", [1, 2, 3, 4, 5])
    def test_generated_file_passes_validation(self, variant, seed, now, tmp_path):
        random.seed(seed)
        config = VARIANTS[variant]
        data = build_seed_data(
            GeneratorConfig(
                player_count=config.player_count,
                match_count=25,
                schema=config.schema,
                country_group_weights=config.country_group_weights,
                status_weights=config.status_weights,
            ),
            now,
        )
        path = tmp_path / f"{variant}.sql"
        write_seed_sql(path, data)

        assert check_consistency(read_seed_sql(path)) == []

    def test_main_writes_file(self, monkeypatch, tmp_path, capsys):
        out = tmp_path / "demo_data.sql"
        monkeypatch.setattr("sys.argv", ["generate_seed_data.py", str(out)])
        generate_seed_data.main()

        assert out.exists()
        assert "Done. Seed SQL written to:" in capsys.readouterr().out
        assert check_consistency(read_seed_sql(out)) == []
