"""Tests for the PCG64 engine and its state token."""

from __future__ import annotations

import pytest

from seedlab.engine import PCG64Engine
from seedlab.errors import MalformedTokenError


class TestPCG64Engine:
    """Tests for PCG64Engine."""

    def test_same_seed_same_state(self):
        assert PCG64Engine(42) == PCG64Engine(42)

    def test_different_seed_different_state(self):
        assert PCG64Engine(42) != PCG64Engine(43)

    def test_seed_resets_state(self):
        engine = PCG64Engine(1)
        engine.generator.random()
        engine.seed(1)
        assert engine == PCG64Engine(1)

    def test_state_shape(self):
        state, inc, has_uint32, uinteger = PCG64Engine(5).get_state()
        assert 0 <= state < 2**128
        assert inc % 2 == 1
        assert has_uint32 in (0, 1)
        assert 0 <= uinteger < 2**32

    def test_set_state_round_trip(self):
        a = PCG64Engine(5)
        a.generator.integers(0, 10)
        b = PCG64Engine(6)
        b.set_state(*a.get_state())
        assert a == b
        assert a.generator.random() == b.generator.random()

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(PCG64Engine(1))


class TestEngineToken:
    """Tests for the engine's text encoding."""

    def test_token_format(self):
        token = PCG64Engine(5).to_token()
        parts = token.split(":")
        assert parts[0] == "pcg64"
        assert len(parts) == 5
        assert all(p.isdigit() for p in parts[1:])

    def test_token_round_trip_after_draws(self):
        engine = PCG64Engine(77)
        for _ in range(3):
            engine.generator.integers(0, 2**32 - 1, endpoint=True, dtype="uint32")
        restored = PCG64Engine.from_token(engine.to_token())
        assert restored == engine
        assert restored.generator.random() == engine.generator.random()

    @pytest.mark.parametrize(
        "token",
        [
            "mt19937:1:1:0:0",
            "pcg64:1:1:0",
            "pcg64:1:1:0:0:0",
            "pcg64:x:1:0:0",
            "pcg64:1:2:0:0",
            "pcg64:1:1:2:0",
            "pcg64:1:1:0:4294967296",
            f"pcg64:{2**128}:1:0:0",
            "pcg64:-1:1:0:0",
        ],
    )
    def test_malformed_tokens(self, token):
        with pytest.raises(MalformedTokenError) as exc_info:
            PCG64Engine.from_token(token, position=3)
        assert exc_info.value.field == "engine"
        assert exc_info.value.position == 3
        assert exc_info.value.token == token
