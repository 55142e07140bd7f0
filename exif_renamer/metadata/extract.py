import json
import logging
import re
import subprocess
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, Optional

import exifread
from pymediainfo import MediaInfo

from .. import config
from ..exceptions import MetadataWarning


class MetadataExtractor:
    """
    Reads capture timestamps from media files.

    Strategies:
      - Preferred: 'exiftool' (robust, covers images and containers alike).
      - If exiftool is not installed: 'exifread' for images,
        'pymediainfo' for video/audio containers.

    Every backend reports tags under their exiftool names, with values in
    the "YYYY:MM:DD HH:MM:SS" form.
    """

    def __init__(self, exiftool: str = config.EXIFTOOL):
        self.exiftool = exiftool

    def get_capture_timestamp(self, path: Path) -> str:
        """
        Returns the first usable timestamp from config.DATE_TAGS.

        Raises MetadataWarning if the file has none; the caller is expected
        to skip the file and carry on.
        """
        logging.debug(f'Reading EXIF information from file "{path}"')
        fields = self.read_fields(path, config.DATE_TAGS)

        value = None
        for tag in config.DATE_TAGS:
            if fields.get(tag):
                value = str(fields[tag]).strip()
                logging.debug(f"{tag}: {value}")
                break

        if not value:
            raise MetadataWarning(f'No EXIF data in file "{path}"')

        # Drop sub-seconds and time zone offsets ("14:22:09.50+02:00")
        match = re.match(config.TIMESTAMP_PATTERN, value)
        if not match:
            raise MetadataWarning(f'Unrecognised Date/Time "{value}" in file "{path}"')
        timestamp = f"{match.group(1)} {match.group(2)}"

        if timestamp == config.SENTINEL_TIMESTAMP:
            raise MetadataWarning(f'No Date/Time information in EXIF data in file "{path}"')
        return timestamp

    def read_fields(self, path: Path, fields: Iterable[str]) -> Dict[str, str]:
        """
        Returns {tag: value} for those of `fields` present in the file.
        Absent tags are simply missing from the result.
        """
        fields = list(fields)
        try:
            return self._extract_exiftool(path, fields)
        except FileNotFoundError:
            # exiftool is not on PATH
            logging.debug(f"{self.exiftool} not found, using Python readers for {path}")

        if path.suffix.lower() in config.IMAGE_EXTS:
            found = self._extract_exifread(path)
        else:
            found = self._extract_mediainfo(path)
        return {tag: value for tag, value in found.items() if tag in fields}

    # --- Internal Extraction Helpers ---

    def _extract_exiftool(self, path: Path, fields: list) -> Dict[str, str]:
        """
        Wraps the 'exiftool' command line utility.
        Must be installed and on the system PATH.
        """
        # -j = JSON output; only the requested tags are printed
        cmd = [self.exiftool, "-j"] + [f"-{tag}" for tag in fields] + [str(path)]

        try:
            out = subprocess.check_output(cmd, stderr=subprocess.DEVNULL, text=True)
            data_list = json.loads(out)
        except (subprocess.CalledProcessError, json.JSONDecodeError) as e:
            raise MetadataWarning(f'Could not read metadata from file "{path}": {e}') from e

        if not data_list:
            return {}

        tags = data_list[0]
        return {tag: str(tags[tag]) for tag in fields if tags.get(tag) not in (None, "")}

    def _extract_exifread(self, path: Path) -> Dict[str, str]:
        """Parses EXIF tags from image files using exifread."""
        try:
            with path.open('rb') as f:
                # details=False speeds up processing significantly
                tags = exifread.process_file(f, details=False)
        except Exception as e:
            raise MetadataWarning(f'ExifRead failed for "{path}": {e}') from e

        data = {}
        for exif_tag, tag in config.EXIFREAD_TAGS.items():
            if exif_tag in tags:
                value = str(tags[exif_tag]).strip()
                if value:
                    data[tag] = value
        return data

    def _extract_mediainfo(self, path: Path) -> Dict[str, str]:
        """Parses video/audio containers using pymediainfo."""
        try:
            mi = MediaInfo.parse(str(path))
        except Exception as e:
            raise MetadataWarning(f'MediaInfo failed for "{path}": {e}') from e

        data: Dict[str, str] = {}
        for track in mi.tracks:
            kind = "General" if track.track_type == "General" else "Stream"
            for (track_kind, attr), tag in config.MEDIAINFO_TAGS.items():
                # First track wins, mirroring exiftool's first-match behaviour
                if track_kind != kind or tag in data:
                    continue
                val = getattr(track, attr, None)
                if not val:
                    continue
                dt = self._parse_flexible_date(str(val))
                if dt:
                    data[tag] = dt.strftime(config.EXIF_DATE_FORMAT)
        return data

    def _parse_flexible_date(self, dt_str: str) -> Optional[datetime]:
        """
        Handles the date formats MediaInfo produces
        ("UTC 2020-01-01 12:00:00", "2020-01-01 12:00:00 UTC", ISO).
        Returns a naive datetime object.
        """
        if not dt_str:
            return None

        # Clean up common suffixes/prefixes
        clean = dt_str.replace("UTC", "").strip()

        # 1. Try ISO format (e.g. 2020-01-01T12:00:00)
        try:
            return datetime.fromisoformat(clean).replace(tzinfo=None)
        except ValueError:
            pass

        # 2. Try Standard EXIF style "YYYY:MM:DD HH:MM:SS"
        try:
            clean_exif = clean.replace(":", "-", 2)
            # Handle potential sub-second precision which strptime hates
            if "." in clean_exif:
                clean_exif = clean_exif.split(".")[0]
            return datetime.strptime(clean_exif, "%Y-%m-%d %H:%M:%S")
        except ValueError:
            pass

        return None
