"""
Tests for the sample-count tunables, JSON payload loaders and executors.
"""

import json
import threading

import pytest

from outcome_core.executor import (
    BackgroundExecutor,
    InlineExecutor,
    get_background_executor,
    shutdown_background_executor,
)
from outcome_core.loaders import (
    load_adventurer,
    load_beast,
    load_game_settings,
    parse_adventurer,
    parse_beast,
    parse_game_settings,
)
from outcome_core.models import GameSettings, Item
from outcome_core.settings import (
    get_default_sample_count,
    get_exploration_sample_count,
    reset_sample_counts,
    set_default_sample_count,
    set_exploration_sample_count,
)


ADVENTURER_PAYLOAD = {
    "health": 120,
    "xp": 400,
    "stats": {"strength": 3, "luck": 12, "wisdom": 2},
    "equipment": {
        "weapon": {"id": 42, "xp": 225},
        "chest": {"id": 51, "xp": 16},
        "neck": None,
    },
    "itemSpecialsSeed": 99,
    "beastHealth": 15,
}


class TestSampleCounts:

    def test_defaults(self):
        assert get_default_sample_count() == 10_000
        assert get_exploration_sample_count() == 2_000

    def test_set_and_reset(self):
        set_default_sample_count(250)
        set_exploration_sample_count(50)
        assert get_default_sample_count() == 250
        assert get_exploration_sample_count() == 50
        reset_sample_counts()
        assert get_default_sample_count() == 10_000

    @pytest.mark.parametrize("bad", [0, -5, 2_000_000, 1.5, "100", True])
    def test_invalid_counts_rejected(self, bad):
        with pytest.raises(ValueError):
            set_default_sample_count(bad)
        assert get_default_sample_count() == 10_000


class TestParsers:

    def test_parse_adventurer(self):
        adventurer = parse_adventurer(ADVENTURER_PAYLOAD)
        assert adventurer.health == 120
        assert adventurer.level == 20
        assert adventurer.stats.luck == 12
        assert adventurer.equipment.weapon == Item(42, 225)
        assert adventurer.equipment.chest.level == 4
        assert adventurer.equipment.neck.is_empty
        assert adventurer.item_specials_seed == 99
        assert adventurer.beast_health == 15

    def test_adventurer_requires_health(self):
        with pytest.raises(ValueError):
            parse_adventurer({"xp": 4})

    def test_adventurer_rejects_bad_numbers(self):
        with pytest.raises(ValueError):
            parse_adventurer({"health": "lots"})
        with pytest.raises(ValueError):
            parse_adventurer({"health": 10, "equipment": {"weapon": {"id": -1}}})

    def test_parse_beast(self):
        beast = parse_beast(
            {"id": 29, "level": 22, "tier": 1, "health": 90, "specialPrefix": "Agony", "specialSuffix": ""}
        )
        assert beast.name == "Dragon"
        assert beast.special_prefix == "Agony"
        assert beast.special_suffix is None
        assert beast.specials_unlocked

    def test_beast_requires_core_fields(self):
        with pytest.raises(ValueError):
            parse_beast({"id": 1, "level": 2})

    def test_parse_game_settings(self):
        settings = parse_game_settings({"statsMode": "Reduction", "baseDamageReduction": 12.5})
        assert settings == GameSettings(stats_mode="Reduction", base_damage_reduction=12.5)
        with pytest.raises(ValueError):
            parse_game_settings({"statsMode": "Block"})


class TestFileLoaders:

    def test_load_adventurer(self, tmp_path):
        path = tmp_path / "adventurer.json"
        path.write_text(json.dumps(ADVENTURER_PAYLOAD), encoding="utf-8")
        assert load_adventurer(path).health == 120

    def test_missing_and_broken_files(self, tmp_path):
        broken = tmp_path / "broken.json"
        broken.write_text("{not json", encoding="utf-8")
        assert load_adventurer(tmp_path / "absent.json") is None
        assert load_adventurer(broken) is None
        assert load_beast(broken) is None
        assert load_adventurer(None) is None

    def test_unreadable_path_is_ignored(self, tmp_path):
        # a directory raises IsADirectoryError or PermissionError, both OSError
        assert load_adventurer(tmp_path) is None
        assert load_beast(tmp_path) is None
        assert load_game_settings(tmp_path) == GameSettings()

    def test_loaders_exported_from_package(self, tmp_path):
        import outcome_core

        path = tmp_path / "adventurer.json"
        path.write_text(json.dumps(ADVENTURER_PAYLOAD), encoding="utf-8")
        assert outcome_core.load_adventurer is load_adventurer
        assert outcome_core.load_beast is load_beast
        assert outcome_core.load_game_settings is load_game_settings
        assert outcome_core.load_adventurer(path).equipment.weapon == Item(42, 225)

    def test_invalid_payload_is_ignored(self, tmp_path):
        path = tmp_path / "beast.json"
        path.write_text(json.dumps([1, 2, 3]), encoding="utf-8")
        assert load_beast(path) is None

    def test_settings_fall_back_to_defaults(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"statsMode": "Block"}), encoding="utf-8")
        assert load_game_settings(path) == GameSettings()
        assert load_game_settings(tmp_path / "absent.json") == GameSettings()


class TestExecutors:

    def test_inline_runs_on_calling_thread(self):
        future = InlineExecutor().submit(threading.get_ident)
        assert future.result() == threading.get_ident()

    def test_background_runs_on_worker_thread(self):
        executor = BackgroundExecutor()
        try:
            assert executor.submit(threading.get_ident).result(timeout=10) != threading.get_ident()
        finally:
            executor.shutdown()

    def test_background_executor_restarts_after_shutdown(self):
        executor = BackgroundExecutor()
        executor.submit(int).result(timeout=10)
        executor.shutdown()
        assert executor.submit(lambda: 5).result(timeout=10) == 5
        executor.shutdown()

    def test_shared_executor_is_reused(self):
        try:
            assert get_background_executor() is get_background_executor()
        finally:
            shutdown_background_executor()
