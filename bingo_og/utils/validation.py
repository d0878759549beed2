"""
Request validation utilities: board id checks and origin construction.
"""
from typing import Optional

from starlette.datastructures import URL

from ..exceptions import InvalidBoardIdError

BOARD_ID_LENGTH = 12


def is_valid_board_id(board_id: Optional[str]) -> bool:
    """
    Check the shape of a board id without decoding it.

    Only presence and length are checked here; alphabet and content are
    the codec's concern.
    """
    return board_id is not None and len(board_id) == BOARD_ID_LENGTH


def require_board_id(board_id: Optional[str]) -> str:
    """
    Return the board id or raise if it is missing or has the wrong length.

    Raises:
        InvalidBoardIdError: If the id is absent or not 12 characters long
    """
    if not is_valid_board_id(board_id):
        raise InvalidBoardIdError("Missing or invalid board ID")
    return board_id


def request_origin(url: URL, public_origin: Optional[str] = None) -> str:
    """
    Build the origin (scheme + host + non-default port) for a request URL.

    Args:
        url: The incoming request URL
        public_origin: Configured origin that overrides the request's own

    Returns:
        Origin string without a trailing slash, path or query
    """
    if public_origin:
        return public_origin.rstrip("/")

    scheme = url.scheme or "http"
    host = url.hostname or ""
    if ":" in host:
        host = f"[{host}]"
    origin = f"{scheme}://{host}"

    port = url.port
    if port is not None:
        if (scheme in ("http", "ws") and port != 80) or (scheme in ("https", "wss") and port != 443):
            origin = f"{origin}:{port}"

    return origin
