"""Output for story topologies.

- engine: parallel-array story table for the analysis engine, JSON files
- section: elevation drawing of the story stack (matplotlib)
"""
