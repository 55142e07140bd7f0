"""
Configuration constants for the EXIF renamer.
"""

# --- File Type Definitions ---
IMAGE_EXTS = {'.png', '.gif', '.jpg', '.jpeg'}
MEDIA_CONTAINER_EXTS = {'.mpg', '.mp4', '.mov', '.wav', '.wma'}

# Only files with one of these (lower-cased) suffixes are ever looked at
MEDIA_EXTS = IMAGE_EXTS | MEDIA_CONTAINER_EXTS

# --- Metadata Parsing ---
# Precedence order: the first tag present and non-empty wins.
DATE_TAGS = [
    'CreateDate',
    'DateTimeOriginal',
    'MediaCreateDate',
    'TrackCreateDate',
]

# Written by cameras (and QuickTime muxers) when no clock was set
SENTINEL_TIMESTAMP = '0000:00:00 00:00:00'
TIMESTAMP_PATTERN = r'^(\d{4}:\d{2}:\d{2}) (\d{2}:\d{2}:\d{2})'
EXIF_DATE_FORMAT = '%Y:%m:%d %H:%M:%S'

EXIFTOOL = 'exiftool'

# Fallback readers used when exiftool is not installed.
# exifread tag name -> exiftool tag name
EXIFREAD_TAGS = {
    'EXIF DateTimeDigitized': 'CreateDate',
    'EXIF DateTimeOriginal': 'DateTimeOriginal',
}
# (track kind, MediaInfo attribute) -> exiftool tag name
MEDIAINFO_TAGS = {
    ('General', 'encoded_date'): 'CreateDate',
    ('General', 'recorded_date'): 'DateTimeOriginal',
    ('Stream', 'encoded_date'): 'MediaCreateDate',
    ('Stream', 'tagged_date'): 'TrackCreateDate',
}

# --- Organization ---
BACKUP_EXT = '.BAK'
ISO_NAME_PATTERN = "{date}T{time}"
