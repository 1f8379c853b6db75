# ==============================================================================
# FLAG VIEWER - EMBEDDED RESOURCE LOCATOR
# ==============================================================================
# Reads the flag archive that ships inside the application.
#
# A resource is identified by a build-time integer id. Two places are
# searched, in order:
#
#   1. Bundled data file
#      PyInstaller's --add-data copies resources/flags.zip into the bundle
#      (sys._MEIPASS when frozen, the project root when run as a script).
#
#   2. Payload appended to the host executable
#      A ZIP concatenated onto the exe (copy /b viewer.exe + flags.zip).
#      The archive is located from its End Of Central Directory record,
#      which sits in the last 64 KiB of the file:
#
#        Offset  Size  Field
#        0       4     Signature "PK\x05\x06"
#        4       2     Number of this disk
#        6       2     Disk where central directory starts
#        8       2     Central directory records on this disk
#        10      2     Total central directory records
#        12      4     Size of central directory
#        16      4     Offset of central directory (relative to archive start)
#        20      2     Comment length
#
# Usage:
#   locator = ResourceLocator()
#   data = locator.read(FLAGS_RESOURCE_ID)
# ==============================================================================

import os
import struct
from dataclasses import dataclass
from typing import Dict, Optional

from .errors import ResourceNotFound, ResourceReadError
from .paths import Paths


# ==============================================================================
# RESOURCE TABLE
# ==============================================================================

# Id of the flag image archive
FLAGS_RESOURCE_ID = 1

# Build-time mapping of resource id -> bundled file (relative to bundle dir)
RESOURCE_TABLE: Dict[int, str] = {
    FLAGS_RESOURCE_ID: os.path.join("resources", "flags.zip"),
}

# ZIP End Of Central Directory record
EOCD_SIGNATURE = b"PK\x05\x06"
EOCD_SIZE = 22
EOCD_MAX_COMMENT = 0xFFFF
LOCAL_HEADER_SIGNATURE = b"PK\x03\x04"


# ==============================================================================
# EMBEDDED RESOURCE DATA CLASS
# ==============================================================================
@dataclass
class EmbeddedResource:
    """
    A resource blob read from the application.

    Attributes:
        resource_id (int): Build-time resource id
        data (bytes):      Raw resource bytes
        source (str):      Where it was found (file path or "exe+offset")
    """
    resource_id: int
    data: bytes
    source: str = ""

    @property
    def length(self) -> int:
        return len(self.data)


# ==============================================================================
# RESOURCE LOCATOR
# ==============================================================================
class ResourceLocator:
    """
    Finds and reads embedded resources.

    Attributes:
        base_dir (str):     Directory bundled resources are resolved against
        host_binary (str):  Executable searched for an appended payload,
                            or None to skip that source
    """

    def __init__(self, base_dir: Optional[str] = None,
                 host_binary: Optional[str] = None):
        self.base_dir = base_dir or Paths.get_bundle_dir()
        self.host_binary = host_binary if host_binary is not None else Paths.get_host_executable()

    def read(self, resource_id: int) -> bytes:
        """
        Read a resource into memory.

        Args:
            resource_id: Build-time resource id (see RESOURCE_TABLE)

        Returns:
            The raw resource bytes

        Raises:
            ResourceNotFound: Unknown id, or no payload in the application
            ResourceReadError: Payload is unreadable or empty
        """
        return self.load(resource_id).data

    def load(self, resource_id: int) -> EmbeddedResource:
        """Same as read() but returns the EmbeddedResource with its source."""
        relative = RESOURCE_TABLE.get(resource_id)
        if relative is None:
            raise ResourceNotFound(f"No resource with id {resource_id!r}")

        bundled = os.path.join(self.base_dir, relative)
        if os.path.isfile(bundled):
            data = self._read_file(bundled)
            source = bundled
        else:
            found = self._read_appended(resource_id)
            if found is None:
                raise ResourceNotFound(
                    f"Resource {resource_id} not found in {bundled}"
                    + (f" or appended to {self.host_binary}" if self.host_binary else "")
                )
            data, source = found

        if not data:
            raise ResourceReadError(f"Resource {resource_id} is empty ({source})")

        print(f"[INFO] Read resource {resource_id}: {len(data)} bytes from {source}")
        return EmbeddedResource(resource_id=resource_id, data=data, source=source)

    # -------------------------------------------------------------------------
    # SOURCES
    # -------------------------------------------------------------------------

    def _read_file(self, path: str) -> bytes:
        try:
            with open(path, 'rb') as f:
                return f.read()
        except OSError as e:
            raise ResourceReadError(f"Unable to read resource file {path}: {e}") from e

    def _read_appended(self, resource_id: int):
        """
        Read a ZIP appended to the host executable.

        Only the flags resource can be appended; there is a single
        payload slot at the end of the file.

        Returns:
            (data, source) tuple, or None if there is no payload
        """
        if resource_id != FLAGS_RESOURCE_ID or not self.host_binary:
            return None
        if not os.path.isfile(self.host_binary):
            return None

        try:
            with open(self.host_binary, 'rb') as f:
                f.seek(0, os.SEEK_END)
                file_size = f.tell()

                bounds = find_appended_zip(f, file_size)
                if bounds is None:
                    return None
                start, end = bounds

                f.seek(start)
                data = f.read(end - start)
        except OSError as e:
            raise ResourceReadError(f"Unable to read {self.host_binary}: {e}") from e

        return data, f"{self.host_binary}+{start}"


# ==============================================================================
# APPENDED ZIP DETECTION
# ==============================================================================

def find_appended_zip(f, file_size: int):
    """
    Locate a ZIP archive at the end of an open binary file.

    Args:
        f: File object opened in binary mode
        file_size: Total size of the file

    Returns:
        (start, end) byte offsets of the archive, or None if the file
        does not end with a ZIP archive
    """
    tail_size = min(file_size, EOCD_SIZE + EOCD_MAX_COMMENT)
    f.seek(file_size - tail_size)
    tail = f.read(tail_size)

    # Search backwards; the last signature whose comment reaches EOF wins
    pos = tail.rfind(EOCD_SIGNATURE)
    while pos >= 0:
        if pos + EOCD_SIZE <= len(tail):
            (_sig, _disk, _cd_disk, _n_disk, _n_total,
             cd_size, cd_offset, comment_len) = struct.unpack(
                "<4sHHHHIIH", tail[pos:pos + EOCD_SIZE])

            eocd_offset = file_size - tail_size + pos
            end = eocd_offset + EOCD_SIZE + comment_len
            start = eocd_offset - cd_size - cd_offset

            if end == file_size and start >= 0 and cd_offset != 0xFFFFFFFF:
                f.seek(start)
                head = f.read(4)
                if head == LOCAL_HEADER_SIGNATURE or (cd_size == 0 and start == eocd_offset):
                    return start, end

        pos = tail.rfind(EOCD_SIGNATURE, 0, pos)

    return None
