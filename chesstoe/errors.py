from __future__ import annotations


class ChesstoeError(ValueError):
    """Base class for errors raised by the session and wire layers."""


class IllegalMoveError(ChesstoeError):
    def __init__(self, message: str, reason: str | None = None) -> None:
        super().__init__(message)
        self.reason = reason


class MoveFormatError(ChesstoeError):
    pass


class GameOverError(ChesstoeError):
    pass
