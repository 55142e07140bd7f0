import os
import logging
import tempfile
from pathlib import Path
from typing import Iterator, Union

from .. import config
from ..exceptions import PathError, NotWritableError


def validate_directory(path: Union[str, Path]) -> Path:
    """
    Checks that `path` is an existing, writable directory.

    The writability probe creates a temporary file inside the directory;
    the file is removed when the context manager exits, whatever happens.

    Returns the absolute path without a trailing separator.
    """
    path = Path(path)
    if not path.is_dir():
        raise PathError(f'"{path}" does not exist or is not a directory.')

    try:
        with tempfile.NamedTemporaryFile(dir=path, suffix='.tmp'):
            pass
    except OSError as e:
        raise NotWritableError(f'Directory "{path}" is not writable.') from e

    # abspath also drops the trailing separator (but keeps "/" as is)
    return Path(os.path.abspath(path))


def ensure_outside(dest_root: Path, src_root: Path):
    """Refuses a destination that the walk over src_root would reach."""
    if dest_root == src_root or src_root in dest_root.parents:
        raise PathError(f'Destination "{dest_root}" must not be inside source "{src_root}".')


def is_media_file(path: Path) -> bool:
    return path.suffix.lower() in config.MEDIA_EXTS


class MediaWalker:
    def iter_media(self, root: Path) -> Iterator[Path]:
        """
        Generator that yields every media file under root.

        Symlinks are never followed and never yielded, whether they point
        at files or directories.
        """
        for path in self._iter_files(root):
            if is_media_file(path):
                yield path
            else:
                logging.debug(f"Ignoring non-media file: {path}")

    def _iter_files(self, root: Path) -> Iterator[Path]:
        """Depth-first walker using os.scandir for speed."""
        stack = [root]
        while stack:
            current = stack.pop()

            try:
                with os.scandir(current) as it:
                    entries = list(it)
            except OSError:
                logging.warning(f"Permission denied: {current}")
                continue

            # Sort for stable traversal order
            entries.sort(key=lambda e: e.name.lower())

            dirs = []
            files = []
            for e in entries:
                if e.is_symlink():
                    continue
                if e.is_dir(follow_symlinks=False):
                    dirs.append(Path(e.path))
                elif e.is_file(follow_symlinks=False):
                    files.append(Path(e.path))

            # Push dirs to stack (reversed so we process A before Z)
            for d in reversed(dirs):
                stack.append(d)

            for f in files:
                yield f
