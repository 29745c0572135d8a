from __future__ import annotations

import logging
import sys

LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'


def configure_logging(level_name: str = 'info') -> logging.Logger:
    # stdout is reserved for the MCP stdio protocol
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)

    level = logging.getLevelName((level_name or '').upper())
    if not isinstance(level, int):
        root.setLevel(logging.INFO)
        root.warning('Unknown log level %r, falling back to INFO', level_name)
    else:
        root.setLevel(level)
    return root
