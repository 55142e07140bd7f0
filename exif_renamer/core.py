import logging
from datetime import datetime
from typing import Optional

from tqdm import tqdm

from .exceptions import MetadataWarning
from .metadata.extract import MetadataExtractor
from .models import RunConfig, RunStats
from .organization.mover import DryRunFileOperations, FileMover, FileOperations
from .organization.rules import TargetPlanner
from .scanning.filesystem import MediaWalker

class ExifRenamerApp:
    def __init__(self,
                 run_config: RunConfig,
                 extractor: Optional[MetadataExtractor] = None,
                 file_ops: Optional[FileOperations] = None):
        self.config = run_config
        self.walker = MediaWalker()
        self.extractor = extractor or MetadataExtractor()
        if file_ops is None:
            file_ops = DryRunFileOperations() if run_config.dry_run else FileOperations()
        self.planner = TargetPlanner(run_config, file_ops)
        self.mover = FileMover(run_config, file_ops)

    def run(self) -> RunStats:
        """
        Executes the renaming pass over the source tree.
        1. Walk (media files only, no symlinks)
        2. Extract capture timestamp
        3. Plan the ISO-8601 target
        4. Execute (Copy, then back up the original in in-place mode)

        Files without a usable timestamp are reported and skipped; any other
        error aborts the run.
        """
        stats = RunStats()
        logging.debug(f"=== Start: {datetime.now():%c} ===")
        logging.debug(f'Processing files in source folder "{self.config.source_root}"')

        files = self.walker.iter_media(self.config.source_root)
        for path in tqdm(files, desc="Renaming", unit="file", disable=not self.config.progress):
            stats.examined += 1
            try:
                timestamp = self.extractor.get_capture_timestamp(path)
            except MetadataWarning as e:
                logging.info(str(e))
                stats.no_metadata += 1
                continue

            target = self.planner.plan(path, timestamp)
            if self.mover.execute(path, target):
                stats.created += 1
            else:
                stats.already_present += 1

        logging.info(
            f"Done. Examined {stats.examined} files: {stats.created} created, "
            f"{stats.already_present} already present, {stats.no_metadata} without date."
        )
        logging.debug(f"=== End: {datetime.now():%c} ===")
        return stats
