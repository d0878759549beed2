"""
Step logging helpers shared by routes, services and middleware.
"""
import json
import logging
import sys
from typing import Any, Optional

logger = logging.getLogger("bingo_og")

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s | %(message)s"

# Step logs go out at INFO instead of DEBUG while set.
_verbose_steps = False


def configure_logging(level: Optional[str] = None, debug: bool = False) -> None:
    """
    Configure the ``bingo_og`` logger.

    The handler is attached once; level and step verbosity follow the
    latest call.

    Args:
        level: Level name such as ``DEBUG`` or ``INFO``, INFO when unset
        debug: Emit ``print_step`` input/output steps at INFO
    """
    global _verbose_steps

    resolved = logging.getLevelName((level or "INFO").upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO
    logger.setLevel(resolved)
    _verbose_steps = debug

    if getattr(logger, "_bingo_configured", False):
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    logger._bingo_configured = True  # type: ignore[attr-defined]


def _format_data(data: Any) -> str:
    if isinstance(data, str):
        return data
    try:
        return json.dumps(data, default=str, ensure_ascii=False, sort_keys=True)
    except (TypeError, ValueError):
        return repr(data)


def print_step(step: str, data: Any = None, kind: str = "output") -> None:
    """
    Log a single processing step.

    Args:
        step: Short human-readable name of the step
        data: Payload to attach (string or JSON-serialisable structure)
        kind: ``input``, ``output`` or ``error``
    """
    message = f"[{kind.upper()}] {step}"
    if data is not None:
        message = f"{message}: {_format_data(data)}"

    if kind == "error":
        logger.error(message)
    elif _verbose_steps:
        logger.info(message)
    else:
        logger.debug(message)
