"""
SeedlabConfig: project-level configuration loader for seedlab.

This module provides:

- find_config_file: Walk up directories to locate .seedlab.toml
- merge_random_tables: Layer local ``[random]`` overrides onto the base file
- RandomSettings: Typed ``[random]`` table
- SeedlabConfig: Main config object with load/seed_source interface

Configuration is loaded from `.seedlab.toml` with optional `.seedlab.local.toml`
overrides from the same directory:

    [random]
    default_seed = 7
    seed_source = "fixed"   # or "system"

Example:
    >>> config = SeedlabConfig.load_or_default()
    >>> rng = SeededGenerator(0, seed_source=config.seed_source())
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from seedlab.distributions import MAX64
from seedlab.entropy import DEFAULT_SEED, FixedSeedSource, SeedSource, SystemSeedSource
from seedlab.errors import InvalidSeedError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".seedlab.toml"
LOCAL_CONFIG_FILENAME = ".seedlab.local.toml"

SEED_SOURCES = ("fixed", "system")


# ---------------------------------------------------------------------------
# Utility helpers
# ---------------------------------------------------------------------------


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """
    Return the nearest `.seedlab.toml` at or above *start_dir* (default: cwd),
    or ``None`` if no ancestor directory has one.
    """
    start = (start_dir or Path.cwd()).resolve()
    for directory in (start, *start.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def merge_random_tables(base: dict[str, Any], local: dict[str, Any]) -> dict[str, Any]:
    """
    Return *base* with the ``[random]`` keys of *local* laid over it.

    Only the ``[random]`` table is configurable, so keys are merged one level
    deep. Neither input is mutated.
    """
    merged = dict(base)
    merged["random"] = {**base.get("random", {}), **local.get("random", {})}
    return merged


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RandomSettings:
    """
    Typed settings from the ``[random]`` table.

    Attributes:
        default_seed: Seed used for the zero sentinel in "fixed" mode.
        seed_source: "fixed" for reproducible runs, "system" for OS entropy.
    """

    default_seed: int = DEFAULT_SEED
    seed_source: str = "fixed"

    def __post_init__(self) -> None:
        if self.seed_source not in SEED_SOURCES:
            raise ValueError(
                f"Unknown seed_source {self.seed_source!r}. "
                f"Expected one of: {', '.join(SEED_SOURCES)}"
            )
        if isinstance(self.default_seed, bool) or not isinstance(self.default_seed, int):
            raise InvalidSeedError(self.default_seed, "default_seed must be an integer")
        if not 0 < self.default_seed <= MAX64:
            raise InvalidSeedError(
                self.default_seed, "default_seed must be in [1, 2**64 - 1]"
            )


@dataclass(frozen=True)
class SeedlabConfig:
    """
    Project configuration loaded from ``.seedlab.toml``.

    Typical usage::

        config = SeedlabConfig.load_or_default()
        source = config.seed_source()
    """

    random: RandomSettings = field(default_factory=RandomSettings)
    path: Path | None = None

    @classmethod
    def load(cls, start_dir: Path | None = None) -> SeedlabConfig:
        """
        Find and load project configuration.

        Raises:
            FileNotFoundError: If no ``.seedlab.toml`` is found.
        """
        config_path = find_config_file(start_dir)
        if config_path is None:
            raise FileNotFoundError(
                f"Could not find {CONFIG_FILENAME} in {start_dir or Path.cwd()} "
                f"or any parent directory"
            )

        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        local_path = config_path.parent / LOCAL_CONFIG_FILENAME
        if local_path.is_file():
            with open(local_path, "rb") as f:
                data = merge_random_tables(data, tomllib.load(f))
            logger.debug(f"Applied local overrides from {local_path}")

        return cls.from_dict(data, path=config_path)

    @classmethod
    def load_or_default(cls, start_dir: Path | None = None) -> SeedlabConfig:
        """Like :meth:`load`, but fall back to defaults when no file exists."""
        try:
            return cls.load(start_dir)
        except FileNotFoundError:
            logger.debug("No seedlab config found, using defaults")
            return cls()

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: Path | None = None) -> SeedlabConfig:
        """Create a config from a parsed TOML dict."""
        random_raw = data.get("random", {})
        random = RandomSettings(
            default_seed=random_raw.get("default_seed", DEFAULT_SEED),
            seed_source=random_raw.get("seed_source", "fixed"),
        )
        return cls(random=random, path=path)

    def seed_source(self) -> SeedSource:
        """Build the configured seed source."""
        if self.random.seed_source == "system":
            return SystemSeedSource()
        return FixedSeedSource(self.random.default_seed)
