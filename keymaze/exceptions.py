"""Exceptions raised by keymaze.

No-path and invalid-candidate outcomes are ordinary return values, not
exceptions; only malformed input and engine misuse raise.
"""


class MazeFormatError(ValueError):
    """Raised when a maze layout cannot be turned into a grid model."""


class SearchStateError(RuntimeError):
    """Raised when the search engine is handed a session from an earlier run."""
