import argparse
import logging
import sys

from .core import ExifRenamerApp
from .exceptions import ExifRenamerError
from .models import RunConfig
from .scanning.filesystem import ensure_outside, validate_directory

__version__ = "2.0.0"

PROG = "exif-renamer"

DESCRIPTION = (
    "Copy image files from the SOURCE_DIRECTORY to the DESTINATION_DIRECTORY using the "
    "EXIF Date/Time to rename the files. If the DESTINATION_DIRECTORY is not given, the "
    "files will be created in the SOURCE_DIRECTORY and the originals kept as <name>.BAK."
)

EPILOG = f"""
Examples:
 Create renamed image files in the same source folder.
\t{PROG} -i /path/to/source/folder

 Create renamed image files in the destination folder.
\t{PROG} -i /path/to/source/folder -o /path/to/destination/folder
"""

def setup_logging(verbose: bool):
    """Sets up console logging: progress on stdout, problems on stderr."""
    log_level = logging.DEBUG if verbose else logging.INFO

    out_handler = logging.StreamHandler(sys.stdout)
    out_handler.addFilter(lambda record: record.levelno < logging.WARNING)
    err_handler = logging.StreamHandler(sys.stderr)
    err_handler.setLevel(logging.WARNING)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[out_handler, err_handler],
        force=True,
    )

    # Silence chatty libraries
    logging.getLogger("exifread").setLevel(logging.ERROR)

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog=PROG,
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    p.add_argument("-i", "--input", default="", metavar="SOURCE_DIRECTORY",
                   help="Directory tree to scan for media files")
    p.add_argument("-o", "--output", default="", metavar="DESTINATION_DIRECTORY",
                   help="Mirror the source tree here instead of renaming in place")
    p.add_argument("-v", "--verbose", action="store_true", help="Explain what is being done")
    p.add_argument("-n", "--dry-run", action="store_true", help="Simulate actions without modifying disk")
    p.add_argument("-p", "--progress", action="store_true", help="Show a progress bar")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    return p

def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.input:
        parser.print_help()
        return

    setup_logging(args.verbose)

    try:
        logging.debug(f'Checking source folder "{args.input}"')
        src_root = validate_directory(args.input)

        dest_root = None
        if args.output:
            logging.debug(f'Checking destination folder "{args.output}"')
            dest_root = validate_directory(args.output)
            ensure_outside(dest_root, src_root)

        run_config = RunConfig(
            source_root=src_root,
            destination_root=dest_root,
            dry_run=args.dry_run,
            progress=args.progress,
        )
        ExifRenamerApp(run_config).run()
    except KeyboardInterrupt:
        logging.warning("Operation cancelled by user.")
        sys.exit(1)
    except ExifRenamerError as e:
        logging.error(f"Error: {e}")
        sys.exit(1)

if __name__ == "__main__":
    main()
