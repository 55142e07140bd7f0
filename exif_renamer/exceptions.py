"""
Custom exception hierarchy for the EXIF renamer.

Everything except MetadataWarning aborts the run; MetadataWarning only
skips the file it was raised for.
"""


class ExifRenamerError(Exception):
    """Base exception for all EXIF renamer errors."""
    pass


class PathError(ExifRenamerError):
    """Raised when a configured directory is missing or not a directory."""
    pass


class NotWritableError(ExifRenamerError, PermissionError):
    """Raised when a configured directory cannot be written to."""
    pass


class MetadataWarning(ExifRenamerError):
    """Raised when a file has no usable capture timestamp."""
    pass


class DirectoryCreateError(ExifRenamerError):
    """Raised when a mirrored destination directory cannot be created."""
    pass


class FileOperationError(ExifRenamerError):
    """Raised when file copy/rename operations fail."""
    pass


class CopyError(FileOperationError):
    pass


class RenameError(FileOperationError):
    pass
