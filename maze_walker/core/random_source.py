import random
from typing import MutableSequence, Optional, Sequence, TypeVar

T = TypeVar("T")

SEED_MASK = (1 << 64) - 1


class RandomSource:
    """
    Seedable random stream handed explicitly to the generators.

    With an explicit seed two sources produce identical draws. Without one,
    a 64-bit seed is drawn from OS entropy and kept in `seed` so the run can
    be reproduced later.
    """

    __slots__ = ('seed', '_rng')

    def __init__(self, seed: Optional[int] = None):
        if seed is None:
            seed = random.SystemRandom().getrandbits(64)
        elif not isinstance(seed, int):
            raise TypeError(f"Seed must be an integer, got {type(seed).__name__}")
        self.seed = seed & SEED_MASK
        self._rng = random.Random(self.seed)

    def __repr__(self):
        return f"RandomSource(seed={self.seed})"

    def next_in_range(self, lo: int, hi: int) -> int:
        """Uniform integer in [lo, hi)."""
        return self._rng.randrange(lo, hi)

    def shuffle(self, sequence: MutableSequence) -> None:
        self._rng.shuffle(sequence)

    def choice(self, sequence: Sequence[T]) -> T:
        return sequence[self._rng.randrange(len(sequence))]

    def chance(self, probability: float) -> bool:
        return self._rng.random() < probability
