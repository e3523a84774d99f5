"""Story stack generators.

Builders for common stacks. Every generator returns a topology that
already passes ``validate()``; callers only need to re-validate after
they change it.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from tower_stories.defaults import (
    AUTO_COLOR,
    BASEMENT_PREFIX,
    DEFAULT_STORY_PREFIX,
    GROUND_STORY_NAME,
    LEVEL_PREFIX,
)
from tower_stories.errors import InvalidArgument
from tower_stories.models.story import StoryRecord
from tower_stories.models.topology import StoryTopology

logger = logging.getLogger(__name__)


def from_heights(
    base_elevation: float,
    names: Sequence[str],
    heights: Sequence[float],
) -> StoryTopology:
    """Build a stack from names and heights with default story metadata.

    Stories are plain (not master, no similar-to, no splice, automatic
    color). Elevations are derived from the base and the heights.

    Raises:
        InvalidArgument: If names and heights differ in length, or a height
            is not positive.
    """
    if len(names) != len(heights):
        raise InvalidArgument(
            f"Story names and heights must have same length "
            f"({len(names)} names, {len(heights)} heights)"
        )

    topology = StoryTopology(
        base_elevation=base_elevation,
        stories=[
            StoryRecord(name=name, height=height, color=AUTO_COLOR)
            for name, height in zip(names, heights)
        ],
    )
    topology.calculate_elevations()
    return topology


def uniform(
    base_elevation: float,
    count: int,
    typical_height: float,
    first_story_height: float | None = None,
    name_prefix: str = DEFAULT_STORY_PREFIX,
) -> StoryTopology:
    """Generate a stack of equal-height stories.

    Stories are named ``{prefix}1`` .. ``{prefix}{count}`` bottom to top.

    Args:
        base_elevation: Elevation of the bottom story.
        count: Number of stories.
        typical_height: Height of every story but the first.
        first_story_height: Height of the bottom story. None or 0 means
            ``typical_height``.
        name_prefix: Prefix for story names.

    Returns:
        Validated StoryTopology.

    Raises:
        InvalidArgument: If count <= 0, typical_height <= 0 or
            first_story_height < 0.
    """
    if count <= 0:
        raise InvalidArgument(f"Number of stories must be positive, got {count}")
    if not typical_height > 0:
        raise InvalidArgument(f"Story height must be positive, got {typical_height}")
    if first_story_height is not None and first_story_height < 0:
        raise InvalidArgument(
            f"First story height cannot be negative, got {first_story_height}"
        )
    if not first_story_height:
        first_story_height = typical_height

    names = [f"{name_prefix}{i + 1}" for i in range(count)]
    heights = [first_story_height] + [typical_height] * (count - 1)

    topology = from_heights(base_elevation, names, heights)
    logger.debug(
        "Built uniform stack: %d stories of %.3f (first %.3f) from %.3f",
        count, typical_height, first_story_height, base_elevation,
    )
    return topology


def with_basement(
    basement_levels: int,
    above_ground_levels: int,
    basement_height: float,
    typical_height: float,
    ground_height: float | None = None,
) -> StoryTopology:
    """Generate basement levels under a ground story and typical levels.

    Produces ``B{n}`` .. ``B1`` (lowest first), then ``GROUND``, then
    ``LEVEL1`` .. ``LEVEL{above_ground_levels - 1}``. The base elevation
    is ``-basement_levels * basement_height``, which puts GROUND at 0.

    Args:
        basement_levels: Number of stories below ground.
        above_ground_levels: Number of stories from GROUND up, GROUND included.
        basement_height: Height of each basement story.
        typical_height: Height of each LEVEL story.
        ground_height: Height of GROUND. None or 0 means ``typical_height``.

    Returns:
        Validated StoryTopology.

    Raises:
        InvalidArgument: If a level count is negative, both are zero, or a
            height is not positive.
    """
    if basement_levels < 0:
        raise InvalidArgument(
            f"Basement levels cannot be negative, got {basement_levels}"
        )
    if above_ground_levels < 0:
        raise InvalidArgument(
            f"Above-ground levels cannot be negative, got {above_ground_levels}"
        )
    if basement_levels + above_ground_levels == 0:
        raise InvalidArgument("Building needs at least one story")
    if not basement_height > 0:
        raise InvalidArgument(f"Basement height must be positive, got {basement_height}")
    if not typical_height > 0:
        raise InvalidArgument(f"Story height must be positive, got {typical_height}")
    if ground_height is not None and ground_height < 0:
        raise InvalidArgument(f"Ground height cannot be negative, got {ground_height}")
    if not ground_height:
        ground_height = typical_height

    names: list[str] = []
    heights: list[float] = []

    for level in range(basement_levels, 0, -1):
        names.append(f"{BASEMENT_PREFIX}{level}")
        heights.append(basement_height)

    for i in range(above_ground_levels):
        if i == 0:
            names.append(GROUND_STORY_NAME)
            heights.append(ground_height)
        else:
            names.append(f"{LEVEL_PREFIX}{i}")
            heights.append(typical_height)

    # Bottom of the lowest basement
    base_elevation = -basement_levels * basement_height

    topology = from_heights(base_elevation, names, heights)
    logger.debug(
        "Built stack with %d basement and %d above-ground stories, base %.3f",
        basement_levels, above_ground_levels, base_elevation,
    )
    return topology
