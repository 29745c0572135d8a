from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

CLOUD_STORAGE_PREFIX = 'ProtonDrive-'


def _windows_candidates(home: Path) -> list[Path]:
    return [
        home / 'Proton Drive',
        home / 'ProtonDrive',
        Path('C:/Proton Drive'),
        home / 'Documents' / 'Proton Drive',
    ]


def _linux_candidates(home: Path) -> list[Path]:
    return [
        home / 'ProtonDrive',
        home / 'Proton Drive',
        home / 'Documents' / 'ProtonDrive',
        Path('/media/proton'),
    ]


def _scan_cloud_storage(home: Path) -> Optional[Path]:
    cloud_storage = home / 'Library' / 'CloudStorage'
    if not cloud_storage.is_dir():
        return None
    try:
        names = sorted(entry.name for entry in cloud_storage.iterdir())
    except OSError as exc:
        logger.debug('Cannot scan %s: %s', cloud_storage, exc)
        return None
    for name in names:
        if name.startswith(CLOUD_STORAGE_PREFIX):
            return cloud_storage / name
    return None


def _first_existing(candidates: list[Path]) -> Path:
    for candidate in candidates:
        try:
            if candidate.exists():
                return candidate
        except OSError as exc:
            logger.debug('Cannot probe %s: %s', candidate, exc)
    return candidates[0]


def discover_root(system: str, home: Path) -> Path:
    if system == 'darwin':
        return _scan_cloud_storage(home) or home / 'Proton Drive'
    if system == 'win32':
        return _first_existing(_windows_candidates(home))
    return _first_existing(_linux_candidates(home))


def resolve_root(
    override: Optional[str] = None,
    system: str = sys.platform,
    home: Optional[Path] = None,
) -> str:
    """Pick the directory every operation is confined to.

    An explicit override wins; otherwise the platform's usual Proton Drive
    locations are probed, falling back to the platform default. Only reads
    the filesystem, never creates the directory.
    """
    if override and override.strip():
        root = os.path.abspath(os.path.expanduser(override.strip()))
        logger.debug('Using configured drive root %s', root)
        return root

    if home is None:
        try:
            home = Path.home()
        except RuntimeError:
            home = Path(os.path.expanduser('~'))
    root = os.path.abspath(discover_root(system, home))
    logger.debug('Discovered drive root %s for platform %s', root, system)
    return root
