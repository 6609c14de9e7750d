"""Tests for seed derivation."""

from __future__ import annotations

import itertools

import pytest

from seedlab import MAX64, SeedDeriver, SeededGenerator, derive_seed


class TestDeriveSeed:
    """Tests for derive_seed()."""

    def test_no_root_uses_default_generator(self):
        """Without a root, the seed comes from a fresh sentinel generator."""
        assert derive_seed() == SeededGenerator(0).draw_uint64()

    def test_no_root_is_constant(self):
        assert derive_seed() == derive_seed()

    def test_int_root_deterministic(self):
        assert derive_seed(42) == derive_seed(42)
        assert derive_seed(42) != derive_seed(43)

    def test_generator_root_advances(self):
        """Drawing from a root generator should hand out distinct seeds."""
        root = SeededGenerator(42)
        seeds = [derive_seed(root) for _ in range(5)]
        assert len(set(seeds)) == 5
        assert all(0 <= s <= MAX64 for s in seeds)
        assert root != SeededGenerator(42)

    def test_generator_root_reproducible(self):
        assert derive_seed(SeededGenerator(7)) == derive_seed(SeededGenerator(7))


class TestSeedDeriver:
    """Tests for SeedDeriver."""

    def test_same_root_same_seeds(self):
        a = SeedDeriver(root=42)
        b = SeedDeriver(root=42)
        assert [a.derive() for _ in range(5)] == [b.derive() for _ in range(5)]

    def test_different_roots_different_seeds(self):
        assert SeedDeriver(root=42).derive() != SeedDeriver(root=43).derive()

    def test_five_seeds_pairwise_distinct(self):
        deriver = SeedDeriver(root=2024)
        seeds = [deriver.derive() for _ in range(5)]
        assert len(set(seeds)) == 5
        assert all(s != 0 for s in seeds)

    def test_zero_root_uses_default(self):
        assert SeedDeriver().root.seed == SeededGenerator(0).seed

    def test_takes_existing_generator(self):
        root = SeededGenerator(5)
        deriver = SeedDeriver(root)
        assert deriver.root is root
        deriver.derive()
        assert root != SeededGenerator(5)

    def test_spawn_independent_generators(self):
        """Spawned generators should not share state."""
        deriver = SeedDeriver(root=1)
        a, b = deriver.spawn(), deriver.spawn()
        assert a.seed != b.seed
        before = b.engine.get_state()
        a.draw_uint64()
        assert b.engine.get_state() == before

    def test_spawn_reproducible(self):
        a = SeedDeriver(root=1).spawn_many(3)
        b = SeedDeriver(root=1).spawn_many(3)
        assert a == b

    def test_spawn_many_negative(self):
        with pytest.raises(ValueError):
            SeedDeriver(root=1).spawn_many(-1)

    def test_issued_counter(self):
        deriver = SeedDeriver(root=1)
        deriver.spawn_many(4)
        assert deriver.issued == 4

    def test_iteration(self):
        a = list(itertools.islice(SeedDeriver(root=3), 4))
        b = SeedDeriver(root=3)
        assert a == [b.derive() for _ in range(4)]

    def test_skips_zero(self, monkeypatch):
        """Zero is the sentinel and must never be handed out."""
        import seedlab.derive as derive_module

        values = iter([0, 0, 17])
        monkeypatch.setattr(derive_module, "derive_seed", lambda root: next(values))
        assert SeedDeriver(root=1).derive() == 17

    def test_repr(self):
        assert repr(SeedDeriver(root=9)) == "SeedDeriver(root_seed=9, issued=0)"
