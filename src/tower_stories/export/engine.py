"""Story table exchanged with the analysis engine.

The engine defines all stories in one call taking parallel arrays, and
returns the same shape when the stories of an existing model are read.
``StoryTable`` mirrors that shape field for field and in order; arrays
run bottom to top and hold one entry per story.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Protocol, Sequence

from pydantic import BaseModel, Field

from tower_stories.defaults import AUTO_COLOR
from tower_stories.errors import EngineError, InvalidArgument
from tower_stories.models.story import StoryRecord
from tower_stories.models.topology import StoryTopology
from tower_stories.validators.topology import (
    Rule,
    ValidationResult,
    Violation,
    validate_topology,
)

logger = logging.getLogger(__name__)

_REQUIRED_ARRAYS = (
    "story_names",
    "story_elevations",
    "story_heights",
    "is_master_story",
    "similar_to_story",
)
_OPTIONAL_ARRAYS = ("splice_above", "splice_height", "color")


class StoryTable(BaseModel):
    """Flattened parallel-array form of a story topology.

    ``splice_above``, ``splice_height`` and ``color`` may be missing; they
    default to no splice, zero splice height and automatic color.
    """

    base_elevation: float = 0.0
    number_stories: int = 0
    story_names: list[str] = Field(default_factory=list)
    story_elevations: list[float] = Field(default_factory=list)
    story_heights: list[float] = Field(default_factory=list)
    is_master_story: list[bool] = Field(default_factory=list)
    similar_to_story: list[str] = Field(
        default_factory=list, description="Empty string for none"
    )
    splice_above: list[bool] | None = None
    splice_height: list[float] | None = None
    color: list[int] | None = Field(default=None, description="-1 = automatic")

    @classmethod
    def load(cls, path: str | Path) -> StoryTable:
        """Load a story table from a JSON file."""
        path = Path(path)
        return cls.model_validate_json(path.read_text())

    def save(self, path: str | Path) -> Path:
        """Save the table to a JSON file. Creates parent dirs if needed."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.model_dump_json(indent=2))
        return path

    def shape_errors(self) -> list[str]:
        """Arrays whose length doesn't match the story count."""
        if self.number_stories < 0:
            return [f"number_stories is negative ({self.number_stories})"]
        errors = []
        for name in _REQUIRED_ARRAYS + _OPTIONAL_ARRAYS:
            values = getattr(self, name)
            if values is None:
                continue
            if len(values) != self.number_stories:
                errors.append(
                    f"{name} has {len(values)} entries, expected {self.number_stories}"
                )
        return errors

    def as_args(self) -> tuple:
        """Arguments for the engine's story-definition call, in order."""
        n = self.number_stories
        return (
            self.base_elevation,
            n,
            list(self.story_names),
            list(self.story_elevations),
            list(self.story_heights),
            list(self.is_master_story),
            list(self.similar_to_story),
            list(self.splice_above) if self.splice_above is not None else [False] * n,
            list(self.splice_height) if self.splice_height is not None else [0.0] * n,
            list(self.color) if self.color is not None else [AUTO_COLOR] * n,
        )


def to_table(topology: StoryTopology) -> StoryTable:
    """Flatten a topology into the engine's parallel-array shape."""
    stories = topology.stories
    return StoryTable(
        base_elevation=topology.base_elevation,
        number_stories=len(stories),
        story_names=[s.name for s in stories],
        story_elevations=[s.elevation for s in stories],
        story_heights=[s.height for s in stories],
        is_master_story=[s.is_master_story for s in stories],
        similar_to_story=[s.similar_to_story for s in stories],
        splice_above=[s.splice_above for s in stories],
        splice_height=[s.splice_height for s in stories],
        color=[s.color for s in stories],
    )


def from_table(table: StoryTable) -> StoryTopology:
    """Rebuild a topology from the engine's parallel arrays.

    Raises:
        InvalidArgument: If an array length doesn't match the story count.
    """
    errors = table.shape_errors()
    if errors:
        raise InvalidArgument("Malformed story table: " + "; ".join(errors))

    _, n, names, elevations, heights, masters, similar, splice_above, splice_height, color = (
        table.as_args()
    )
    if table.splice_above is None and table.splice_height is not None:
        # Engine reads only report splice heights; a positive one means a splice
        splice_above = [h > 0 for h in splice_height]

    stories = [
        StoryRecord(
            name=names[i],
            elevation=elevations[i],
            height=heights[i],
            is_master_story=masters[i],
            similar_to_story=similar[i] or "",
            splice_above=splice_above[i],
            splice_height=splice_height[i],
            color=color[i],
        )
        for i in range(n)
    ]
    return StoryTopology(base_elevation=table.base_elevation, stories=stories)


def validate_table(table: StoryTable) -> ValidationResult:
    """Check array shape first, then the topology invariants."""
    errors = table.shape_errors()
    if errors:
        return ValidationResult(
            Violation(rule=Rule.STRUCTURE, message="; ".join(errors))
        )
    return validate_topology(from_table(table))


# ── Engine handoff ────────────────────────────────────────────────────


class StoryEngine(Protocol):
    """The part of the analysis engine's automation interface used here.

    ``set_stories`` takes the ten ``StoryTable`` fields in order and returns
    a status code (0 on success). ``get_stories`` returns the same ten
    fields followed by a status code.
    """

    def set_stories(self, *args: Any) -> int: ...

    def get_stories(self) -> Sequence[Any]: ...


def push_topology(engine: StoryEngine, topology: StoryTopology) -> StoryTable:
    """Validate a topology and define it as the engine's stories.

    Raises:
        InvalidArgument: If the topology fails validation.
        EngineError: If the engine returns a non-zero status.
    """
    result = validate_topology(topology)
    if not result.ok:
        logger.warning("Refusing to send invalid stories: %s", result.violation.message)
        result.raise_for_violation()

    table = to_table(topology)
    logger.info(
        "Setting %d stories, base elevation %.3f",
        table.number_stories, table.base_elevation,
    )
    status = engine.set_stories(*table.as_args())
    if status != 0:
        logger.error("Engine rejected story definition, status %s", status)
        raise EngineError(
            status,
            "set_stories",
            "Failed to set stories. Ensure no objects exist in the model first.",
        )
    return table


def pull_topology(engine: StoryEngine) -> StoryTopology:
    """Read the engine's current stories into a topology.

    Raises:
        EngineError: If the engine returns a non-zero status.
        InvalidArgument: If the returned arrays are malformed.
    """
    reply = list(engine.get_stories())
    expected = len(StoryTable.model_fields) + 1
    if len(reply) != expected:
        raise InvalidArgument(
            f"Engine returned {len(reply)} values, expected {expected} "
            f"(story fields and a status code)"
        )
    *values, status = reply
    if status != 0:
        logger.error("Engine failed to return stories, status %s", status)
        raise EngineError(status, "get_stories", "Failed to retrieve story data.")

    fields = dict(zip(StoryTable.model_fields, values))
    for name in _REQUIRED_ARRAYS:
        if fields[name] is None:
            fields[name] = []
    table = StoryTable(**fields)
    topology = from_table(table)
    logger.info(
        "Retrieved %d stories, base elevation %.3f",
        table.number_stories, table.base_elevation,
    )
    return topology
