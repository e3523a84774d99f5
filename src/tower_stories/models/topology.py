"""The story stack: ordered stories plus the base elevation.

Stories are kept bottom to top. Order is meaningful: adjacent stories
define each other's heights and elevations. The topology is a plain
mutable aggregate; consistency is checked on demand with ``validate()``
rather than enforced on every change.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from tower_stories.defaults import AUTO_COLOR, NOMINAL_STORY_HEIGHT
from tower_stories.errors import InvalidArgument
from tower_stories.models.story import StoryRecord
from tower_stories.queries import relationships
from tower_stories.queries.elevations import derive_elevations, derive_heights

if TYPE_CHECKING:
    from tower_stories.validators.topology import ValidationResult


class StoryTopology(BaseModel):
    """Ordered set of stories handed to the analysis engine."""

    base_elevation: float = Field(
        default=0.0, description="Elevation of the bottom face of the lowest story"
    )
    stories: list[StoryRecord] = Field(
        default_factory=list, description="Stories, bottom to top"
    )

    # ── Derivation ────────────────────────────────────────────────────

    def calculate_elevations(self) -> None:
        """Overwrite elevations by stacking heights on the base elevation."""
        if not self.stories:
            return
        elevations = derive_elevations(
            self.base_elevation, [s.height for s in self.stories]
        )
        for story, elevation in zip(self.stories, elevations):
            story.elevation = elevation

    def calculate_heights(
        self, fallback_last_height: float = NOMINAL_STORY_HEIGHT
    ) -> None:
        """Overwrite heights from the gaps between elevations.

        The top story copies the height below it (or the fallback when it is
        the only story). Don't use this when heights are known independently.
        """
        if not self.stories:
            return
        heights = derive_heights(
            [s.elevation for s in self.stories], fallback_last_height
        )
        for story, height in zip(self.stories, heights):
            story.height = height

    def total_height(self) -> float:
        """Distance from the base elevation to the top of the top story."""
        if not self.stories:
            return 0.0
        top = self.stories[-1]
        return top.elevation + top.height - self.base_elevation

    # ── Lookups ───────────────────────────────────────────────────────

    def story_count(self) -> int:
        return len(self.stories)

    def story_names(self) -> list[str]:
        return [s.name for s in self.stories]

    def get_story_index(self, name: str) -> int:
        """Index of a story by name, or -1 when it doesn't exist."""
        return relationships.index_of(self, name)

    def get_story(self, name: str) -> StoryRecord | None:
        """Find a story by name (exact match)."""
        index = self.get_story_index(name)
        return self.stories[index] if index >= 0 else None

    def get_elevation(self, name: str) -> float:
        """Elevation of a story, or NaN when it doesn't exist."""
        story = self.get_story(name)
        return story.elevation if story is not None else math.nan

    def get_height(self, name: str) -> float:
        """Height of a story, or NaN when it doesn't exist."""
        story = self.get_story(name)
        return story.height if story is not None else math.nan

    def is_master(self, name: str) -> bool:
        story = self.get_story(name)
        return story is not None and story.is_master_story

    def masters(self) -> list[str]:
        """Names of master stories, bottom to top."""
        return relationships.masters_of(self)

    def similar_stories(self, master_name: str) -> list[str]:
        """Names of stories similar to ``master_name``, bottom to top."""
        return relationships.similar_to(self, master_name)

    # ── Editing ───────────────────────────────────────────────────────

    def add_story(
        self,
        name: str,
        height: float,
        elevation: float | None = None,
        is_master_story: bool = False,
        similar_to_story: str = "",
        splice_above: bool = False,
        splice_height: float = 0.0,
        color: int = AUTO_COLOR,
    ) -> StoryRecord:
        """Append a story on top of the stack.

        If elevation is not provided it is the top of the current stack, or
        the base elevation for the first story. Nothing is checked here; run
        ``validate()`` once the stack is assembled.
        """
        if elevation is None:
            elevation = self.stories[-1].top if self.stories else self.base_elevation
        story = StoryRecord(
            name=name,
            elevation=elevation,
            height=height,
            is_master_story=is_master_story,
            similar_to_story=similar_to_story,
            splice_above=splice_above,
            splice_height=splice_height,
            color=color,
        )
        self.stories.append(story)
        return story

    def rename_story(self, old_name: str, new_name: str) -> StoryRecord:
        """Rename a story and repoint similar-to links that referenced it."""
        story = self.get_story(old_name)
        if story is None:
            raise InvalidArgument(
                f"Story '{old_name}' not found. Available: {self.story_names()}"
            )
        if not new_name:
            raise InvalidArgument("New story name cannot be empty")
        for other in self.stories:
            if other.similar_to_story == old_name:
                other.similar_to_story = new_name
        story.name = new_name
        return story

    # ── Consistency ───────────────────────────────────────────────────

    def validate(self) -> ValidationResult:
        """Check the topology invariants; returns the first violation, if any."""
        from tower_stories.validators.topology import validate_topology

        return validate_topology(self)

    def clone(self) -> StoryTopology:
        """Deep copy; no story is shared with the original."""
        return self.model_copy(deep=True)

    def describe(self) -> str:
        """Human-readable summary, one line per story."""
        if not self.stories:
            return "Empty StoryTopology"
        lines = [
            f"Stories: {len(self.stories)}, Base Elevation: {self.base_elevation:.2f}, "
            f"Total Height: {self.total_height():.2f}"
        ]
        for s in self.stories:
            master = " [Master]" if s.is_master_story else ""
            similar = f" (→ {s.similar_to_story})" if s.similar_to_story else ""
            lines.append(
                f"  {s.name}: Elev={s.elevation:.2f}, H={s.height:.2f}{master}{similar}"
            )
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.describe()
