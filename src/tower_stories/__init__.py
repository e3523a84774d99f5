"""Story topology model for handing building story stacks to an analysis engine."""

__version__ = "0.1.0"
