from __future__ import annotations

import os
from datetime import datetime, timezone
from pathlib import Path

SIZE_UNITS = ('Bytes', 'KB', 'MB', 'GB', 'TB')


def relative_path(root: Path, full: Path) -> str:
    """Display form of ``full`` relative to the drive root; the root itself is ``/``."""
    if full == root:
        return '/'
    return str(full.relative_to(root)) or '/'


def format_bytes(size: int) -> str:
    if size == 0:
        return '0 Bytes'

    value = float(size)
    unit = 0
    while value >= 1024 and unit < len(SIZE_UNITS) - 1:
        value /= 1024
        unit += 1

    number = f'{value:.2f}'.rstrip('0').rstrip('.')
    return f'{number} {SIZE_UNITS[unit]}'


def isoformat(timestamp: float) -> str:
    moment = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    return moment.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def created_time(stat: os.stat_result) -> float:
    return getattr(stat, 'st_birthtime', None) or stat.st_ctime


def entry_type(is_dir: bool) -> str:
    return 'folder' if is_dir else 'file'
