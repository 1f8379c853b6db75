# ==============================================================================
# FLAG VIEWER - ERROR TYPES
# ==============================================================================
# Every failure the core can report to a presentation shell.
#
# All errors derive from CoreError and carry a `kind` string (the class
# name) so a shell can map them to status messages without importing
# every class:
#
#   ResourceNotFound      - no embedded payload for the resource id
#   ResourceReadError     - payload exists but is unreadable or empty
#   WorkspaceCreateError  - temporary directory could not be made
#   ArchiveCorrupt        - payload is not a readable ZIP archive
#   UnsafeEntryPath       - entry would be written outside the workspace
#   ExtractionIOError     - writing an extracted entry failed
#   ScanIOError           - catalog root could not be walked
#   EmptyPopulation       - nothing to pick from
#   ControllerShutDown    - controller used after shutdown()
#   InvalidControllerState - operation not valid in the current state
# ==============================================================================

from typing import Optional


class CoreError(Exception):
    """Base class for all recoverable flag viewer errors."""

    def __init__(self, message: str = ""):
        super().__init__(message or self.__class__.__name__)
        self.message = message or self.__class__.__name__

    @property
    def kind(self) -> str:
        """Stable name of the error kind, e.g. 'ArchiveCorrupt'."""
        return self.__class__.__name__


class ResourceNotFound(CoreError):
    pass


class ResourceReadError(CoreError):
    pass


class WorkspaceCreateError(CoreError):
    pass


class ArchiveCorrupt(CoreError):
    pass


class UnsafeEntryPath(CoreError):
    """
    An archive entry would escape the destination directory.

    Attributes:
        entry_path: The offending path as stored in the archive
    """

    def __init__(self, entry_path: str, message: Optional[str] = None):
        super().__init__(message or f"Unsafe archive entry path: {entry_path!r}")
        self.entry_path = entry_path


class ExtractionIOError(CoreError):
    pass


class ScanIOError(CoreError):
    pass


class EmptyPopulation(CoreError):
    pass


class ControllerShutDown(CoreError):
    pass


class InvalidControllerState(CoreError):
    pass
