from __future__ import annotations

import logging
import sys

_HANDLER_NAME = "task-board-console"


def setup_logging(level: str | int = logging.INFO) -> None:
    """
    Install a single console handler on the root logger.

    Safe to call more than once: the handler is only added the first time,
    later calls just adjust the level.
    """
    root = logging.getLogger()
    root.setLevel(level)

    if any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(handler)
    logging.captureWarnings(True)
