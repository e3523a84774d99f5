"""Default values shared across the story model.

Lengths are in model units (the engine's current length unit).
"""

# Height used for the topmost story when it can't be derived from elevations
NOMINAL_STORY_HEIGHT = 3.5

DEFAULT_STORY_PREFIX = "STORY"
BASEMENT_PREFIX = "B"
GROUND_STORY_NAME = "GROUND"
LEVEL_PREFIX = "LEVEL"

# Engine display color meaning "pick automatically"
AUTO_COLOR = -1

# Index returned by name lookups that find nothing
NOT_FOUND = -1
