"""Geometry utilities: bounding-volume unions and footprint extents."""

from __future__ import annotations

import logging
from typing import Iterable

import numpy as np

from plansync.core.contracts import LinearExtent

logger = logging.getLogger(__name__)

# Metres per international foot
FOOT_IN_METRES = 0.3048


def bounds_from_points(vertices: np.ndarray) -> tuple[np.ndarray, np.ndarray] | None:
    """Axis-aligned (min, max) corners of an (N, 3) vertex array."""
    pts = np.asarray(vertices, dtype=np.float64)
    if pts.ndim != 2 or pts.shape[0] == 0 or pts.shape[1] != 3:
        return None
    return pts.min(axis=0), pts.max(axis=0)


def union_extent(extents: Iterable[LinearExtent]) -> tuple[np.ndarray, np.ndarray] | None:
    """Combine bounding volumes into one envelope.

    Returns (min_xyz, max_xyz) as arrays, or None when there are no extents.
    """
    mins = []
    maxs = []
    for ext in extents:
        mins.append(ext.min_xyz)
        maxs.append(ext.max_xyz)
    if not mins:
        return None
    return np.min(np.asarray(mins, dtype=np.float64), axis=0), np.max(
        np.asarray(maxs, dtype=np.float64), axis=0
    )


def plan_size(extents: Iterable[LinearExtent]) -> tuple[float, float]:
    """Plan-view size (x span, y span) of the combined envelope; (0, 0) if empty."""
    bounds = union_extent(extents)
    if bounds is None:
        return 0.0, 0.0
    lo, hi = bounds
    span = hi - lo
    return float(span[0]), float(span[1])
