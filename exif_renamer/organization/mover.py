import filecmp
import shutil
import logging
from pathlib import Path

from .. import config
from ..exceptions import CopyError, DirectoryCreateError, RenameError
from ..models import RunConfig


class FileOperations:
    """
    Every filesystem call the planner and mover make goes through here,
    so tests can swap in a fake and dry runs can log instead of act.
    """

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_copy(self, src: Path, dest: Path) -> bool:
        """True if dest already holds the same bytes as src (always reads both)."""
        try:
            return filecmp.cmp(src, dest, shallow=False)
        except OSError:
            return False

    def make_dirs(self, path: Path):
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DirectoryCreateError(f'Unable to create "{path}": {e}') from e

    def copy(self, src: Path, dest: Path):
        try:
            shutil.copy2(str(src), str(dest))
        except OSError as e:
            raise CopyError(f"Copy failed: {src} -> {dest}: {e}") from e

    def rename(self, src: Path, dest: Path):
        if dest.exists():
            raise RenameError(f"Rename failed: {dest} already exists")
        try:
            shutil.move(str(src), str(dest))
        except OSError as e:
            raise RenameError(f"Rename failed: {src} -> {dest}: {e}") from e


class DryRunFileOperations(FileOperations):
    """Reads the disk as usual but only logs what it would change."""

    def make_dirs(self, path: Path):
        logging.info(f"[DRY RUN] Create directory {path}")

    def copy(self, src: Path, dest: Path):
        logging.info(f"[DRY RUN] Copy {src} -> {dest}")

    def rename(self, src: Path, dest: Path):
        logging.info(f"[DRY RUN] Rename {src} -> {dest}")


class FileMover:
    def __init__(self, run_config: RunConfig, file_ops: FileOperations):
        self.config = run_config
        self.fs = file_ops

    def execute(self, src: Path, dest: Path) -> bool:
        """
        Copies src to dest unless dest already exists.

        In in-place mode the original is then renamed to <name>.BAK, so the
        ISO-named copy takes its place in the folder. Returns True if a copy
        was made.
        """
        # Idempotency: if dest exists, it's either done already or was
        # created by someone else; never overwrite.
        if self.fs.exists(dest):
            logging.debug(f"Already present, skipping: '{dest}'")
            return False

        backup = src.with_name(src.name + config.BACKUP_EXT)
        if self.config.in_place and self.fs.exists(backup):
            raise RenameError(f"Rename failed: {backup} already exists, {src} left as is")

        logging.debug(f"Creating file: '{dest}'")
        self.fs.copy(src, dest)

        if self.config.in_place:
            logging.debug(f"Backing up original: '{backup}'")
            self.fs.rename(src, backup)

        return True
