"""Exceptions raised by the tile-matching core."""


class TileMatchError(Exception):
    """Base class for all engine errors."""


class ConfigurationError(TileMatchError, ValueError):
    """Raised when engine configuration values cannot produce a playable board."""


class GenerationFailure(ConfigurationError):
    """Kind sampling exhausted its retry limit during initial fill or refill.

    Usually the palette is too small for the board; reconfigure and retry.
    """

    def __init__(self, message: str, *, row: int | None = None, col: int | None = None, attempts: int = 0):
        super().__init__(message)
        self.row = row
        self.col = col
        self.attempts = attempts


class StaleTileError(TileMatchError, LookupError):
    """A tile reference is no longer owned by the board.

    Only reachable when a caller mutates the world behind the engine's back.
    """
