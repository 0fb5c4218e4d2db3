from __future__ import annotations


class IllegalMoveError(ValueError):
    pass


class MoveLimitError(ValueError):
    pass


class BoardInvariantError(AssertionError):
    pass
