# road_gen/sim/rng.py
from __future__ import annotations

from dataclasses import dataclass
from functools import cache
from zlib import crc32

import numpy as np


def _u32(x: int) -> int:
    return int(x & 0xFFFFFFFF)


def _crc32_u32(s: str) -> int:
    return _u32(crc32(s.encode("utf-8")))


def fresh_master_seed() -> int:
    """Draw a master seed from OS entropy (for runs without a configured seed)."""
    return _u32(np.random.SeedSequence().entropy)


@dataclass(frozen=True)
class RNGKey:
    """Stream name, hashed to u32 for seed derivation."""

    stream: str
    parts: tuple[int, ...]

    @classmethod
    def named(cls, stream: str) -> RNGKey:
        return cls(stream=stream, parts=(_crc32_u32(stream),))


class RNGRegistry:
    """
    Deterministic registry of numpy.random.Generator streams.
    Derivation path: [master_seed, scenario, *key.parts]
    """

    def __init__(self, master_seed: int, *, scenario: str | int = 0):
        self.master_seed = _u32(master_seed)
        self.scenario_tag = _crc32_u32(str(scenario))

    @cache
    def generator(self, key: RNGKey) -> np.random.Generator:
        """
        Get (and cache) a named generator.
        Example: gen = reg.generator(RNGKey.named("branch"))
        """
        ss = np.random.SeedSequence(entropy=[self.master_seed, self.scenario_tag, *key.parts])
        return np.random.Generator(np.random.PCG64(ss))

    def stream(self, name: str) -> np.random.Generator:
        return self.generator(RNGKey.named(name))


@dataclass(frozen=True)
class GrowthStreams:
    """The named streams one growth run draws from.

    Each decision kind has its own stream, so e.g. changing child_chance does
    not shift the branch draws of an otherwise identical run.
    """

    seed: np.random.Generator  # seed road placement
    branch: np.random.Generator  # grid candidate survival
    jitter: np.random.Generator  # organic angle variation
    child: np.random.Generator  # finer-class sibling spawn
    fuel: np.random.Generator  # fuel for freshly branched roads

    @classmethod
    def from_registry(cls, reg: RNGRegistry) -> GrowthStreams:
        return cls(
            seed=reg.stream("seed"),
            branch=reg.stream("branch"),
            jitter=reg.stream("jitter"),
            child=reg.stream("child"),
            fuel=reg.stream("fuel"),
        )
