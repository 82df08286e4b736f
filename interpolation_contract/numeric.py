"""Numeric helpers: tolerance comparison, seeds and linear test vectors."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

from . import constants as C

__all__ = [
    "Deviation",
    "deviations",
    "resolve_seed",
    "LinearVectors",
    "linear_vectors",
]


@dataclass(frozen=True)
class Deviation:
    """A single comparison that exceeded the tolerance."""

    index: int
    x: float
    expected: float
    actual: float

    @property
    def error(self) -> float:
        return abs(self.actual - self.expected)

    def describe(self) -> str:
        return (
            f"x={self.x!r}: expected {self.expected!r}, got {self.actual!r} "
            f"(|error|={self.error:.3e})"
        )


def deviations(
    xs: Sequence[float],
    expected: Iterable[float],
    actual: Iterable[float],
    *,
    tolerance: float = C.DEFAULT_TOLERANCE,
) -> list[Deviation]:
    """Return every position where ``actual`` is not within ``tolerance`` of ``expected``.

    Only the absolute error counts.  Non‑finite actual values never match.
    """
    exp = np.asarray(list(expected), dtype=float)
    act = np.asarray(list(actual), dtype=float)
    if exp.shape != act.shape:
        raise ValueError(f"shape mismatch: expected {exp.shape}, actual {act.shape}")
    ok = np.isfinite(act) & (np.abs(act - exp) <= tolerance)
    return [
        Deviation(int(i), float(xs[i]), float(exp[i]), float(act[i]))
        for i in np.flatnonzero(~ok)
    ]


def resolve_seed(seed: int | None = None) -> int:
    """Return ``seed``, else the value of ``INTERP_CONTRACT_SEED``, else fresh entropy."""
    if seed is not None:
        return int(seed)
    raw = os.environ.get(C.SEED_ENV_VAR, "").strip()
    if raw:
        try:
            return int(raw)
        except ValueError as exc:
            raise ValueError(f"{C.SEED_ENV_VAR} must be an integer, got {raw!r}") from exc
    return int(np.random.SeedSequence().entropy)


@dataclass(frozen=True)
class LinearVectors:
    """Linear samples of a given order plus probes with their expected values."""

    order: int
    points: tuple[float, ...]
    values: tuple[float, ...]
    probes: tuple[float, ...]
    expected: tuple[float, ...]


def linear_vectors(
    order: int,
    rng: np.random.Generator,
    *,
    x_offset: float = C.LINEAR_X_OFFSET,
    y_offset: float = C.LINEAR_Y_OFFSET,
) -> LinearVectors:
    """Build ``order`` samples of ``y = y_offset + (x - x_offset)`` and ``order + 1`` probes.

    With a single sample the probes straddle it and expect ``y_offset``
    (a constant is the only sensible reproduction).  Otherwise probe ``i``
    sits at ``x_offset + (i - 1) + r`` with ``r`` drawn from ``[0, 1)``, so the
    first probe lies just below the span and the rest cover its interior.
    """
    if order < 1:
        raise ValueError(f"order must be positive, got {order}")
    steps = np.arange(order, dtype=float)
    points = x_offset + steps
    values = y_offset + steps

    r = rng.random(order + 1)
    if order == 1:
        probes = np.array([x_offset - r[0], x_offset + r[1]])
        expected = np.full(2, y_offset)
    else:
        z = np.arange(order + 1, dtype=float) - 1.0 + r
        probes = x_offset + z
        expected = y_offset + z

    return LinearVectors(
        order=order,
        points=tuple(points.tolist()),
        values=tuple(values.tolist()),
        probes=tuple(probes.tolist()),
        expected=tuple(expected.tolist()),
    )
