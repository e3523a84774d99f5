"""Name lookups and master/similar-to resolution.

Similar-to links are flat references by name, resolved with a linear scan
(story stacks hold tens of stories, not thousands).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tower_stories.defaults import NOT_FOUND

if TYPE_CHECKING:
    from tower_stories.models.topology import StoryTopology


def index_of(topology: StoryTopology, name: str) -> int:
    """Index of the story called ``name``, or NOT_FOUND (-1)."""
    return next(
        (i for i, s in enumerate(topology.stories) if s.name == name), NOT_FOUND
    )


def masters_of(topology: StoryTopology) -> list[str]:
    """Names of all master stories, bottom to top."""
    return [s.name for s in topology.stories if s.is_master_story]


def similar_to(topology: StoryTopology, master_name: str) -> list[str]:
    """Names of stories that point at ``master_name``, bottom to top.

    Unknown masters give an empty list; whether the master exists is a
    validation concern. An empty name also gives an empty list, not every
    story that lacks a similar-to link: "" names no master.
    """
    if not master_name:
        return []
    return [s.name for s in topology.stories if s.similar_to_story == master_name]
