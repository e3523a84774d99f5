"""Story stack generators.

Pure functions returning ready-to-use, validated StoryTopology models:
- from_heights: named stories from a list of heights
- uniform: equal-height stories with an optional taller first story
- with_basement: basement levels under GROUND and typical levels
"""

from tower_stories.generators.stacks import from_heights, uniform, with_basement

__all__ = [
    "from_heights",
    "uniform",
    "with_basement",
]
