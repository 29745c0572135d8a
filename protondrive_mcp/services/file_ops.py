from __future__ import annotations

import os
import re
import shutil
import stat
import sys
from pathlib import Path
from typing import Optional, Union

from ..errors import AccessDenied, FilesystemError, NotFound
from .formatting import created_time, entry_type, format_bytes, isoformat, relative_path

_SEPARATORS = re.compile(r'[/\\]+')


def validate_path(requested_path: Optional[str], root: Union[str, Path]) -> Path:
    base = Path(root)
    if not requested_path:
        return base

    # '..' segments are kept here; normpath collapses them against the root below
    cleaned = os.sep.join(part for part in _SEPARATORS.split(requested_path) if part)
    candidate = Path(os.path.normpath(os.path.join(base, cleaned)))
    if base != candidate and base not in candidate.parents:
        raise AccessDenied('Invalid path: Access denied outside Proton Drive')
    return candidate


class FileOps:
    def __init__(self, root: Union[str, Path], platform: str = sys.platform):
        self.root = Path(os.path.abspath(root))
        self.platform = platform

    def safe_path(self, rel: Optional[str]) -> Path:
        return validate_path(rel, self.root)

    def display(self, full: Path) -> str:
        return relative_path(self.root, full)

    def _require_root(self, prefix: str) -> None:
        # parents are only ever created below an existing root
        if not self.root.is_dir():
            raise NotFound(f'{prefix}: Proton Drive root is not available: {self.root}')

    def check_mount(self) -> dict:
        exists = self.root.exists()
        info: dict = {
            'mounted': exists,
            'path': str(self.root),
            'platform': self.platform,
        }
        if not exists:
            info['accessible'] = False
            info['suggestion'] = 'Please ensure Proton Drive is installed and running'
            return info

        try:
            st = self.root.stat()
        except OSError:
            info['accessible'] = False
            info['error'] = 'Cannot access Proton Drive directory'
            return info

        info['accessible'] = True
        info['isDirectory'] = stat.S_ISDIR(st.st_mode)
        return info

    def list_dir(self, rel: Optional[str] = '') -> list[dict]:
        target = self.safe_path(rel)

        items: list[dict] = []
        try:
            with os.scandir(target) as entries:
                for entry in entries:
                    if entry.name.startswith('.'):
                        continue
                    st = entry.stat()
                    items.append(
                        {
                            'name': entry.name,
                            'path': self.display(target / entry.name),
                            'type': entry_type(entry.is_dir(follow_symlinks=False)),
                            'size': st.st_size,
                            'modified': isoformat(st.st_mtime),
                        }
                    )
        except OSError as exc:
            raise FilesystemError.wrap('Cannot list directory', exc) from exc

        items.sort(key=lambda i: (i['type'] != 'folder', i['name'].lower(), i['name']))
        return items

    def read_text(self, rel: str) -> str:
        target = self.safe_path(rel)
        try:
            if stat.S_ISDIR(target.stat().st_mode):
                raise FilesystemError('Cannot read file: Cannot read a directory')
            with target.open('r', encoding='utf-8', newline='') as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise FilesystemError.wrap('Cannot read file', exc) from exc

    def write_text(self, rel: str, content: str) -> Path:
        target = self.safe_path(rel)
        if target == self.root:
            raise AccessDenied('Invalid path: Cannot write over the Proton Drive root')
        self._require_root('Cannot write file')
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with target.open('w', encoding='utf-8', newline='') as f:
                f.write(content)
        except OSError as exc:
            raise FilesystemError.wrap('Cannot write file', exc) from exc
        return target

    def delete(self, rel: str) -> Path:
        target = self.safe_path(rel)
        if target == self.root:
            raise AccessDenied('Invalid path: Refusing to delete the Proton Drive root')

        try:
            # lstat so a symlinked folder is unlinked, not emptied
            st = target.lstat()
            if stat.S_ISDIR(st.st_mode):
                shutil.rmtree(target)
            else:
                target.unlink()
        except OSError as exc:
            raise FilesystemError.wrap('Cannot delete', exc) from exc
        return target

    def mkdir(self, rel: str) -> Path:
        target = self.safe_path(rel)
        self._require_root('Cannot create folder')
        try:
            target.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FilesystemError.wrap('Cannot create folder', exc) from exc
        return target

    def info(self, rel: str) -> dict:
        target = self.safe_path(rel)
        try:
            st = target.stat()
        except OSError as exc:
            raise FilesystemError.wrap('Cannot get file info', exc) from exc

        return {
            'path': self.display(target),
            'name': target.name,
            'type': entry_type(stat.S_ISDIR(st.st_mode)),
            'size': st.st_size,
            'sizeFormatted': format_bytes(st.st_size),
            'created': isoformat(created_time(st)),
            'modified': isoformat(st.st_mtime),
            'accessed': isoformat(st.st_atime),
        }
