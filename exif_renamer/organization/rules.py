import hashlib
import re
from pathlib import Path
from typing import Set

from .. import config
from ..models import RunConfig
from .mover import FileOperations


def iso_basename(timestamp: str) -> str:
    """
    "2021:05:03 14:22:09" -> "2021-05-03T142209"
    """
    date, time = timestamp.split()[:2]
    return config.ISO_NAME_PATTERN.format(date=date.replace(':', '-'), time=time.replace(':', ''))


def collision_suffix(name: str) -> str:
    """
    Disambiguator for a taken target name.

    Derived from the original file name (stem + extension), not from the
    file's bytes, so it is the same on every run.
    """
    return hashlib.md5(name.encode('utf-8')).hexdigest()


class TargetPlanner:
    def __init__(self, run_config: RunConfig, file_ops: FileOperations):
        self.config = run_config
        self.fs = file_ops
        # Targets handed out during this run
        self.issued: Set[Path] = set()

    def plan(self, path: Path, timestamp: str) -> Path:
        """
        Calculates the ISO-8601 named target for `path`.

        Destination folders are created here (only in destination mode),
        so a DirectoryCreateError surfaces before any copy is attempted.
        """
        base = iso_basename(timestamp)
        ext = path.suffix.lower()
        folder = self.target_folder(path)

        # Re-runs: the file already is a renamed copy
        if folder == path.parent and self._has_iso_name(path, base, ext):
            return path

        candidate = folder / f"{base}{ext}"
        hashed = folder / f"{base}_{collision_suffix(path.name)}{ext}"

        # A previous run already gave this file the hashed name
        if self.fs.exists(hashed):
            return hashed

        # An older copy of this very file counts as its target, but never one
        # made earlier in this run for another file
        if candidate not in self.issued:
            if not self.fs.exists(candidate) or self.fs.is_copy(path, candidate):
                self.issued.add(candidate)
                return candidate

        self.issued.add(hashed)
        return hashed

    def target_folder(self, path: Path) -> Path:
        if self.config.in_place:
            return path.parent

        subpath = path.parent.relative_to(self.config.source_root)
        folder = self.config.destination_root / subpath
        if not self.fs.exists(folder):
            self.fs.make_dirs(folder)
        return folder

    def _has_iso_name(self, path: Path, base: str, ext: str) -> bool:
        if path.suffix != ext:
            return False
        return re.fullmatch(re.escape(base) + r'(_[0-9a-f]{32})?', path.stem) is not None
