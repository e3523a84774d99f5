"""Elevation/height reconciliation.

Both derivations are pure: they return new lists and never touch their
inputs. Heights round-trip through elevations for every story except the
topmost one, whose height can't be recovered from elevations alone.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from tower_stories.defaults import NOMINAL_STORY_HEIGHT
from tower_stories.errors import InvalidArgument

logger = logging.getLogger(__name__)


def derive_elevations(base_elevation: float, heights: Sequence[float]) -> list[float]:
    """Stack heights on top of a base elevation.

    Args:
        base_elevation: Elevation of the lowest story.
        heights: Story heights, bottom to top. All must be positive.

    Returns:
        One elevation per height; the first equals ``base_elevation``.

    Raises:
        InvalidArgument: If heights is empty or holds a non-positive value.
    """
    h = np.asarray(heights, dtype=float)
    if h.size == 0:
        raise InvalidArgument("Cannot derive elevations from an empty height list")
    bad = np.flatnonzero(~(h > 0))
    if bad.size:
        i = int(bad[0])
        raise InvalidArgument(
            f"Story height at index {i} must be positive, got {h[i]}"
        )

    # Running sum of [base, h0, h1, ...] is previous elevation + previous height
    steps = np.concatenate(([float(base_elevation)], h[:-1]))
    elevations = np.cumsum(steps).tolist()
    logger.debug(
        "Derived %d elevations from base %.3f", len(elevations), base_elevation
    )
    return elevations


def derive_heights(
    elevations: Sequence[float],
    fallback_last_height: float = NOMINAL_STORY_HEIGHT,
) -> list[float]:
    """Heights as the gaps between successive elevations.

    The topmost story has nothing above it, so it takes the height of the
    story below it, or ``fallback_last_height`` for a single-story stack.

    Raises:
        InvalidArgument: If elevations is empty or not strictly increasing.
    """
    e = np.asarray(elevations, dtype=float)
    if e.size == 0:
        raise InvalidArgument("Cannot derive heights from an empty elevation list")

    gaps = np.diff(e)
    bad = np.flatnonzero(~(gaps > 0))
    if bad.size:
        i = int(bad[0]) + 1
        raise InvalidArgument(
            f"Elevations must be strictly increasing: index {i} "
            f"({e[i]}) is not above index {i - 1} ({e[i - 1]})"
        )

    heights = gaps.tolist()
    heights.append(heights[-1] if heights else float(fallback_last_height))
    logger.debug("Derived %d heights from elevations", len(heights))
    return heights
