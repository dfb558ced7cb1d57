"""Logging configuration for divirpc.

All modules log through ``logging.getLogger(__name__)`` under the ``divirpc``
namespace. configure_logging() attaches handlers to that namespace according
to one of three presets:

    none    - nothing is emitted
    normal  - INFO and above to stderr
    debug   - DEBUG and above to stderr (request/response tracing)
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Literal

LogPreset = Literal["none", "normal", "debug"]

ROOT_LOGGER_NAME = "divirpc"

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_PRESET_LEVELS: dict[str, int] = {
    "normal": logging.INFO,
    "debug": logging.DEBUG,
}


def configure_logging(preset: LogPreset = "normal", log_file: Path | None = None) -> logging.Logger:
    """Configure the divirpc namespace logger.

    Existing handlers on the namespace are removed, so calling this twice
    reconfigures rather than duplicating output.

    Args:
        preset: One of "none", "normal" or "debug".
        log_file: Optional path for a rotating log file (5MB per file, 3 backups).
            Ignored for the "none" preset.

    Returns:
        The configured ``divirpc`` logger.

    Raises:
        ValueError: If preset is not a known preset name.
    """
    if preset != "none" and preset not in _PRESET_LEVELS:
        raise ValueError(f"Unknown log preset: {preset!r}")

    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.propagate = False

    if preset == "none":
        root.addHandler(logging.NullHandler())
        root.setLevel(logging.CRITICAL + 1)
        return root

    level = _PRESET_LEVELS[preset]
    root.setLevel(level)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%H:%M:%S"))
    root.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=5 * 1024 * 1024,  # 5MB
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(file_handler)

    root.debug("Logging configured: preset=%s, file=%s", preset, log_file)
    return root
