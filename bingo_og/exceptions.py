"""
Error types raised along the OG image path.
"""


class BingoOGError(Exception):
    """Base class for all service errors."""


class InvalidBoardIdError(BingoOGError):
    """The ``g`` parameter is missing or is not exactly 12 characters."""


class UnknownThemeError(BingoOGError):
    """The requested visual theme does not exist."""


class BoardDecodeError(BingoOGError):
    """The board codec rejected an id or produced an invalid board state."""


class RenderError(BingoOGError):
    """Layout or rasterization of a board image failed."""
