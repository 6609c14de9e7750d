"""Tests for seedlab.config module."""

from __future__ import annotations

import pytest

from seedlab.config import (
    CONFIG_FILENAME,
    LOCAL_CONFIG_FILENAME,
    RandomSettings,
    SeedlabConfig,
    find_config_file,
    merge_random_tables,
)
from seedlab.entropy import FixedSeedSource, SystemSeedSource
from seedlab.errors import InvalidSeedError


# ---------------------------------------------------------------------------
# merge_random_tables
# ---------------------------------------------------------------------------


class TestMergeRandomTables:
    def test_local_wins(self):
        base = {"random": {"default_seed": 1, "seed_source": "fixed"}}
        local = {"random": {"default_seed": 2}}
        merged = merge_random_tables(base, local)
        assert merged["random"] == {"default_seed": 2, "seed_source": "fixed"}

    def test_does_not_mutate_inputs(self):
        base = {"random": {"default_seed": 1}}
        local = {"random": {"default_seed": 2}}
        merge_random_tables(base, local)
        assert base == {"random": {"default_seed": 1}}
        assert local == {"random": {"default_seed": 2}}

    def test_missing_tables(self):
        assert merge_random_tables({}, {})["random"] == {}
        assert merge_random_tables({"project": "x"}, {})["project"] == "x"


# ---------------------------------------------------------------------------
# find_config_file
# ---------------------------------------------------------------------------


class TestFindConfigFile:
    def test_found_in_start_dir(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text("")
        assert find_config_file(tmp_path) == (tmp_path / CONFIG_FILENAME).resolve()

    def test_walks_up(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text("")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config_file(nested) == (tmp_path / CONFIG_FILENAME).resolve()


# ---------------------------------------------------------------------------
# RandomSettings / SeedlabConfig
# ---------------------------------------------------------------------------


class TestRandomSettings:
    def test_defaults(self):
        settings = RandomSettings()
        assert settings.default_seed == 7
        assert settings.seed_source == "fixed"

    def test_unknown_source(self):
        with pytest.raises(ValueError, match="seed_source"):
            RandomSettings(seed_source="hardware")

    @pytest.mark.parametrize("seed", [0, -3, 2**64, "7", True])
    def test_invalid_default_seed(self, seed):
        with pytest.raises(InvalidSeedError):
            RandomSettings(default_seed=seed)


class TestSeedlabConfig:
    def test_from_dict_defaults(self):
        config = SeedlabConfig.from_dict({})
        assert config.random == RandomSettings()
        assert config.path is None

    def test_from_dict(self):
        config = SeedlabConfig.from_dict(
            {"random": {"default_seed": 1234, "seed_source": "system"}}
        )
        assert config.random.default_seed == 1234
        assert config.random.seed_source == "system"

    def test_fixed_seed_source(self):
        config = SeedlabConfig.from_dict({"random": {"default_seed": 11}})
        assert config.seed_source() == FixedSeedSource(11)

    def test_system_seed_source(self):
        config = SeedlabConfig.from_dict({"random": {"seed_source": "system"}})
        assert isinstance(config.seed_source(), SystemSeedSource)

    def test_load(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text("[random]\ndefault_seed = 99\n")
        config = SeedlabConfig.load(tmp_path)
        assert config.random.default_seed == 99
        assert config.path == (tmp_path / CONFIG_FILENAME).resolve()

    def test_local_overrides(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text(
            '[random]\ndefault_seed = 99\nseed_source = "fixed"\n'
        )
        (tmp_path / LOCAL_CONFIG_FILENAME).write_text("[random]\ndefault_seed = 5\n")
        config = SeedlabConfig.load(tmp_path)
        assert config.random.default_seed == 5
        assert config.random.seed_source == "fixed"

    def test_load_missing(self, tmp_path, monkeypatch):
        monkeypatch.setattr("seedlab.config.find_config_file", lambda start_dir=None: None)
        with pytest.raises(FileNotFoundError):
            SeedlabConfig.load(tmp_path)

    def test_load_or_default(self, tmp_path, monkeypatch):
        monkeypatch.setattr("seedlab.config.find_config_file", lambda start_dir=None: None)
        assert SeedlabConfig.load_or_default(tmp_path) == SeedlabConfig()
