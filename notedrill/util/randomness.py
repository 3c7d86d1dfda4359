from __future__ import annotations

"""Randomness helpers: seeding and bounded generate/validate/fallback loops."""

import os
import random
from dataclasses import dataclass
from typing import Callable, Generic, Literal, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Sampled(Generic[T]):
    """Result of a bounded sampling loop, tagged with where the value came from."""

    value: T
    source: Literal["generated", "fallback"]
    attempts: int

    @property
    def is_fallback(self) -> bool:
        return self.source == "fallback"


def seed_if_needed() -> None:
    """Seed the global RNG if the SEED env var is set."""
    seed = os.environ.get("SEED")
    if seed is not None:
        try:
            s = int(seed)
        except ValueError:
            return
        random.seed(s)


def make_rng(seed: Optional[int] = None) -> random.Random:
    return random.Random(seed)


def sample_with_fallback(
    generate: Callable[[], Optional[T]],
    accept: Callable[[T], bool],
    attempts: int,
    fallback: Callable[[], T],
) -> Sampled[T]:
    """Draw up to ``attempts`` candidates and return the first accepted one.

    ``generate`` may return None to reject a draw early. When every attempt
    fails, ``fallback()`` supplies the value.
    """
    for i in range(1, attempts + 1):
        candidate = generate()
        if candidate is not None and accept(candidate):
            return Sampled(candidate, "generated", i)
    return Sampled(fallback(), "fallback", attempts)
