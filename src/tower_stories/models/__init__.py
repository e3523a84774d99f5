"""Story data models."""

from tower_stories.models.story import StoryRecord
from tower_stories.models.topology import StoryTopology

__all__ = [
    "StoryRecord",
    "StoryTopology",
]
