"""
Minimal Working Example: resumable Monte Carlo π estimation.

Usage:
    python examples/pi_mc/run.py

This demonstrates the core seedlab workflow:
- Derive one independent generator per worker from a single root seed
- Checkpoint every generator to disk part-way through
- Resume from the checkpoint and get exactly the same estimate
"""

from pathlib import Path

import seedlab

ROOT_SEED = 42
WORKERS = 4
SAMPLES_PER_PHASE = 50_000
CHECKPOINT_DIR = Path("./checkpoints/pi_mc")


def sample(rng: seedlab.SeededGenerator, n: int) -> int:
    """Count points of the unit square that fall inside the quarter circle."""
    hits = 0
    for _ in range(n):
        x, y = rng.draw_real64(), rng.draw_real64()
        if x * x + y * y <= 1.0:
            hits += 1
    return hits


def estimate(rngs: list[seedlab.SeededGenerator], phases: int) -> float:
    hits = sum(sample(rng, SAMPLES_PER_PHASE * phases) for rng in rngs)
    return 4.0 * hits / (len(rngs) * SAMPLES_PER_PHASE * phases)


if __name__ == "__main__":
    # One root seed -> one generator per worker, never shared
    deriver = seedlab.SeedDeriver(root=ROOT_SEED)

    # Uninterrupted run: two phases back to back
    straight = deriver.spawn_many(WORKERS)
    pi_straight = estimate(straight, phases=2)

    # Interrupted run: phase one, checkpoint, restore, phase two
    deriver = seedlab.SeedDeriver(root=ROOT_SEED)
    workers = deriver.spawn_many(WORKERS)
    first_hits = sum(sample(rng, SAMPLES_PER_PHASE) for rng in workers)

    CHECKPOINT_DIR.mkdir(parents=True, exist_ok=True)
    for i, rng in enumerate(workers):
        rng.save(CHECKPOINT_DIR / f"worker{i}.state")

    resumed = [
        seedlab.SeededGenerator.from_file(CHECKPOINT_DIR / f"worker{i}.state")
        for i in range(WORKERS)
    ]
    second_hits = sum(sample(rng, SAMPLES_PER_PHASE) for rng in resumed)
    pi_resumed = 4.0 * (first_hits + second_hits) / (WORKERS * SAMPLES_PER_PHASE * 2)

    print(f"π (uninterrupted): {pi_straight}")
    print(f"π (resumed):       {pi_resumed}")
    assert pi_straight == pi_resumed, "checkpoint/restore changed the draw sequence"
