"""Pure queries and derivations over story data.

- elevations: elevations from heights, heights from elevations
- relationships: name lookup and master/similar-to resolution
"""

from tower_stories.queries.elevations import derive_elevations, derive_heights
from tower_stories.queries.relationships import index_of, masters_of, similar_to

__all__ = [
    "derive_elevations",
    "derive_heights",
    "index_of",
    "masters_of",
    "similar_to",
]
