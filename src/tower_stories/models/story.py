"""A single story (floor level) of a building stack."""

from __future__ import annotations

from pydantic import BaseModel, Field

from tower_stories.defaults import AUTO_COLOR


class StoryRecord(BaseModel):
    """A named floor level with elevation, height and engine metadata.

    Values are not constrained here. A topology may pass through
    inconsistent states while it is being assembled, so bad values are
    reported by topology validation instead of being rejected on construction.
    """

    name: str = Field(description="Story name, unique within a topology, e.g. 'STORY1'")
    elevation: float = Field(
        default=0.0, description="Absolute elevation of the story bottom"
    )
    height: float = Field(description="Story height (floor to floor)")
    is_master_story: bool = False
    similar_to_story: str = Field(
        default="",
        description="Master story this story is similar to; empty for none",
    )
    splice_above: bool = False
    splice_height: float = Field(
        default=0.0, description="Splice height above the story, used when splice_above"
    )
    color: int = Field(default=AUTO_COLOR, description="Display color, -1 = automatic")

    @property
    def top(self) -> float:
        """Elevation of the story top face."""
        return self.elevation + self.height

    @property
    def has_similar_to(self) -> bool:
        return bool(self.similar_to_story)
