"""Story topology invariants.

Rules are checked in a fixed order, and ``validate_topology`` reports the
first violation:

1. structure: every entry is a StoryRecord with numeric lengths and text names
2. at least one story exists
3. names are non-empty and unique
4. heights are positive
5. elevations strictly increase bottom to top
6. similar-to targets exist and are master stories
7. master stories are not similar to anything
8. splice heights are non-negative

A violation is a value, not an exception: topologies are routinely
inconsistent while being assembled, and only need to be valid when handed
to the engine.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum

from tower_stories.errors import InvalidArgument
from tower_stories.models.story import StoryRecord
from tower_stories.models.topology import StoryTopology


class Rule(str, Enum):
    """Which invariant a violation breaks, in evaluation order."""

    STRUCTURE = "structure"
    NOT_EMPTY = "not_empty"
    NAMES = "names"
    HEIGHTS = "heights"
    ELEVATIONS = "elevations"
    SIMILAR_TO = "similar_to"
    MASTER_SIMILAR_TO = "master_similar_to"
    SPLICE = "splice"


@dataclass
class Violation:
    """A single broken invariant."""

    rule: Rule
    message: str
    stories: list[str] = field(default_factory=list)  # implicated names
    index: int | None = None


@dataclass
class ValidationResult:
    """Outcome of validating a topology: ok, or the first violation."""

    violation: Violation | None = None

    @property
    def ok(self) -> bool:
        return self.violation is None

    def __bool__(self) -> bool:
        return self.ok

    def raise_for_violation(self) -> None:
        """Raise InvalidArgument describing the violation, if there is one."""
        if self.violation is not None:
            raise InvalidArgument(
                f"Invalid story topology ({self.violation.rule.value}): "
                f"{self.violation.message}"
            )


def validate_topology(topology: StoryTopology) -> ValidationResult:
    """Validate a topology, returning the first violated invariant."""
    violations = collect_violations(topology)
    return ValidationResult(violations[0] if violations else None)


def collect_violations(topology: StoryTopology) -> list[Violation]:
    """Run every rule and return all violations, in rule order.

    A structural problem stops evaluation, since the remaining rules can't
    read a malformed stack.
    """
    structure = check_structure(topology)
    if structure:
        return structure

    errors: list[Violation] = []
    errors.extend(check_not_empty(topology))
    errors.extend(check_names(topology))
    errors.extend(check_heights(topology))
    errors.extend(check_elevations(topology))
    errors.extend(check_similar_to(topology))
    errors.extend(check_master_similar_to(topology))
    errors.extend(check_splices(topology))
    return errors


_NUMERIC_FIELDS = ("elevation", "height", "splice_height")
_TEXT_FIELDS = ("name", "similar_to_story")


def check_structure(topology: StoryTopology) -> list[Violation]:
    """Every entry must be a StoryRecord with well-typed fields.

    Lists accept anything on append and records don't validate assignment,
    so both are checked here before any rule reads them.
    """
    if not isinstance(topology.stories, list):
        return [
            Violation(
                rule=Rule.STRUCTURE,
                message=f"Stories must be a list, got {type(topology.stories).__name__}",
            )
        ]
    errors: list[Violation] = []
    for i, story in enumerate(topology.stories):
        if not isinstance(story, StoryRecord):
            errors.append(
                Violation(
                    rule=Rule.STRUCTURE,
                    message=(
                        f"Entry {i} is a {type(story).__name__}, not a StoryRecord"
                    ),
                    index=i,
                )
            )
            continue
        for name in _NUMERIC_FIELDS:
            value = getattr(story, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                errors.append(_field_type_error(story, i, name, value, "a number"))
        for name in _TEXT_FIELDS:
            value = getattr(story, name)
            if not isinstance(value, str):
                errors.append(_field_type_error(story, i, name, value, "a string"))
    return errors


def _field_type_error(
    story: StoryRecord, index: int, field_name: str, value, expected: str
) -> Violation:
    label = story.name if isinstance(story.name, str) else f"#{index}"
    return Violation(
        rule=Rule.STRUCTURE,
        message=(
            f"Story '{label}' at index {index} has {field_name} "
            f"{value!r} ({type(value).__name__}), expected {expected}"
        ),
        stories=[label],
        index=index,
    )


def check_not_empty(topology: StoryTopology) -> list[Violation]:
    if topology.stories:
        return []
    return [Violation(rule=Rule.NOT_EMPTY, message="Topology has no stories")]


def check_names(topology: StoryTopology) -> list[Violation]:
    """Names must be non-blank and pairwise unique."""
    errors: list[Violation] = []
    for i, story in enumerate(topology.stories):
        if not story.name or not story.name.strip():
            errors.append(
                Violation(
                    rule=Rule.NAMES,
                    message=f"Story at index {i} has an empty name",
                    stories=[story.name],
                    index=i,
                )
            )

    counts = Counter(s.name for s in topology.stories if s.name and s.name.strip())
    reported: set[str] = set()
    for i, story in enumerate(topology.stories):
        if counts.get(story.name, 0) > 1 and story.name not in reported:
            reported.add(story.name)
            # Report at the second occurrence
            dup = next(
                j for j in range(i + 1, len(topology.stories))
                if topology.stories[j].name == story.name
            )
            errors.append(
                Violation(
                    rule=Rule.NAMES,
                    message=(
                        f"Story name '{story.name}' is used {counts[story.name]} times "
                        f"(indices {i} and {dup})"
                    ),
                    stories=[story.name],
                    index=dup,
                )
            )
    return errors


def check_heights(topology: StoryTopology) -> list[Violation]:
    errors: list[Violation] = []
    for i, story in enumerate(topology.stories):
        if not story.height > 0:
            errors.append(
                Violation(
                    rule=Rule.HEIGHTS,
                    message=f"Story '{story.name}' has non-positive height {story.height}",
                    stories=[story.name],
                    index=i,
                )
            )
    return errors


def check_elevations(topology: StoryTopology) -> list[Violation]:
    """Elevations must strictly increase; reports the index that fails to."""
    errors: list[Violation] = []
    stories = topology.stories
    for i in range(1, len(stories)):
        lower, upper = stories[i - 1], stories[i]
        if not upper.elevation > lower.elevation:
            errors.append(
                Violation(
                    rule=Rule.ELEVATIONS,
                    message=(
                        f"Story '{upper.name}' at index {i} has elevation "
                        f"{upper.elevation}, not above '{lower.name}' "
                        f"({lower.elevation})"
                    ),
                    stories=[lower.name, upper.name],
                    index=i,
                )
            )
    return errors


def check_similar_to(topology: StoryTopology) -> list[Violation]:
    """Non-master stories may only point at existing master stories."""
    errors: list[Violation] = []
    by_name = {s.name: s for s in topology.stories}
    for i, story in enumerate(topology.stories):
        if story.is_master_story or not story.similar_to_story:
            continue
        target_name = story.similar_to_story
        target = by_name.get(target_name)
        if target_name == story.name:
            message = f"Story '{story.name}' is similar to itself"
        elif target is None:
            message = (
                f"Story '{story.name}' is similar to '{target_name}', "
                f"which does not exist"
            )
        elif not target.is_master_story:
            message = (
                f"Story '{story.name}' is similar to '{target_name}', "
                f"which is not a master story"
            )
        else:
            continue
        errors.append(
            Violation(
                rule=Rule.SIMILAR_TO,
                message=message,
                stories=[story.name, target_name],
                index=i,
            )
        )
    return errors


def check_master_similar_to(topology: StoryTopology) -> list[Violation]:
    errors: list[Violation] = []
    for i, story in enumerate(topology.stories):
        if story.is_master_story and story.similar_to_story:
            errors.append(
                Violation(
                    rule=Rule.MASTER_SIMILAR_TO,
                    message=(
                        f"Master story '{story.name}' cannot be similar to "
                        f"'{story.similar_to_story}'"
                    ),
                    stories=[story.name, story.similar_to_story],
                    index=i,
                )
            )
    return errors


def check_splices(topology: StoryTopology) -> list[Violation]:
    errors: list[Violation] = []
    for i, story in enumerate(topology.stories):
        if story.splice_above and not story.splice_height >= 0:
            errors.append(
                Violation(
                    rule=Rule.SPLICE,
                    message=(
                        f"Story '{story.name}' has negative splice height "
                        f"{story.splice_height}"
                    ),
                    stories=[story.name],
                    index=i,
                )
            )
    return errors
