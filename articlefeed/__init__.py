"""articlefeed - an unbounded synthetic article feed served in linked pages."""

__version__ = "0.1.0"
