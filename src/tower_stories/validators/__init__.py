"""Consistency validation for story topologies.

- topology: ordered invariant checks (names, heights, elevations,
  similar-to links, splices) returning violations as values
"""
