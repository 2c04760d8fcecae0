"""Deterministic 2D value noise.

Lattice corners get a hashed value in ``[0, 1)``; points between corners are
blended with a smoothstep-weighted bilinear interpolation, so nearby inputs give
nearby outputs and the result never leaves ``[0, 1)``. There is no internal state:
the same coordinates, scale and seed offset always produce the same value.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

_MASK = 0xFFFFFFFF


def _lattice(ix: int, iy: int, salt: int) -> float:
    h = (ix * 374761393 + iy * 668265263 + salt * 1664525) & _MASK
    h = ((h ^ (h >> 13)) * 1274126177) & _MASK
    h ^= h >> 16
    return h / 4294967296.0


def _smooth(t: float) -> float:
    return t * t * (3.0 - 2.0 * t)


def value_noise(x: float, y: float, salt: int = 0) -> float:
    """Raw lattice value noise at ``(x, y)``; integer lattice spacing of 1."""
    x0 = math.floor(x)
    y0 = math.floor(y)
    u = _smooth(x - x0)
    v = _smooth(y - y0)
    c00 = _lattice(x0, y0, salt)
    c10 = _lattice(x0 + 1, y0, salt)
    c01 = _lattice(x0, y0 + 1, salt)
    c11 = _lattice(x0 + 1, y0 + 1, salt)
    top = c00 + u * (c10 - c00)
    bottom = c01 + u * (c11 - c01)
    return top + v * (bottom - top)


def sample(x: float, y: float, scale: float = 1.0, seed_offset: int = 0) -> float:
    """Sample the noise field at ``(x * scale, y * scale)``.

    ``seed_offset`` salts the lattice hash, giving an independent field per offset.
    The generator shifts the coordinates by its run seed before calling this, so
    the default offset of 0 is what the pipeline uses.
    """
    return value_noise(x * scale, y * scale, seed_offset)


@dataclass(frozen=True)
class NoiseField:
    """A noise field bound to one scale and seed offset."""

    scale: float = 0.1
    seed_offset: int = 0

    def __call__(self, x: float, y: float) -> float:
        return sample(x, y, self.scale, self.seed_offset)


__all__ = ["NoiseField", "sample", "value_noise"]
