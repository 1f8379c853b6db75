# ==============================================================================
# FLAG VIEWER - ASSET CATALOG
# ==============================================================================
# Discovers the image files inside the extracted workspace.
#
# The walk is recursive and sorted at every level, so the same extraction
# always yields the same catalog order. Combined with a fixed seed this
# makes a run's picks reproducible.
#
# Usage:
#   catalog = AssetCatalog().scan(workspace_path)
#   print(len(catalog), catalog[0])
# ==============================================================================

import os
from dataclasses import dataclass
from typing import FrozenSet, Iterable, Iterator, Optional, Tuple

from .errors import ScanIOError


# ==============================================================================
# EXTENSIONS
# ==============================================================================
# Formats the viewer can display. Matching is case-insensitive.

IMAGE_EXTENSIONS = ("png", "jpg", "jpeg", "bmp", "gif")


def normalize_extensions(extensions: Iterable[str]) -> FrozenSet[str]:
    """
    Normalize extension spellings to lowercase with a leading dot.

    'png', '.PNG' and '*.png' all become '.png'.
    """
    result = set()
    for ext in extensions:
        ext = ext.strip().lower().lstrip('*')
        if not ext:
            continue
        if not ext.startswith('.'):
            ext = '.' + ext
        result.add(ext)
    return frozenset(result)


# ==============================================================================
# CATALOG DATA CLASS
# ==============================================================================
@dataclass(frozen=True)
class Catalog:
    """
    Ordered, immutable list of absolute image paths.

    Attributes:
        paths (tuple): Absolute file paths, indexed 0..N-1
        root (str):    Directory the catalog was built from
    """
    paths: Tuple[str, ...] = ()
    root: str = ""

    def __len__(self) -> int:
        return len(self.paths)

    def __getitem__(self, index: int) -> str:
        return self.paths[index]

    def __iter__(self) -> Iterator[str]:
        return iter(self.paths)

    @property
    def is_empty(self) -> bool:
        return not self.paths


# ==============================================================================
# ASSET CATALOG CLASS
# ==============================================================================
class AssetCatalog:
    """
    Builds a Catalog by walking a directory tree.

    Attributes:
        extensions (frozenset): Normalized extensions to include
    """

    def __init__(self, extensions: Optional[Iterable[str]] = None):
        self.extensions = normalize_extensions(
            IMAGE_EXTENSIONS if extensions is None else extensions)

    def matches(self, file_path: str) -> bool:
        """Check whether a file name has one of the catalog extensions."""
        return os.path.splitext(file_path)[1].lower() in self.extensions

    def scan(self, root_dir: str, extensions: Optional[Iterable[str]] = None) -> Catalog:
        """
        Walk root_dir and collect matching files.

        Args:
            root_dir: Directory to walk
            extensions: Override the extensions given at construction

        Returns:
            Catalog of absolute paths (empty if nothing matches)

        Raises:
            ScanIOError: root_dir is missing, not a directory or unreadable
        """
        wanted = self.extensions if extensions is None else normalize_extensions(extensions)
        root = os.path.abspath(root_dir)

        if not os.path.isdir(root):
            raise ScanIOError(f"Catalog root is not a directory: {root}")
        try:
            os.listdir(root)
        except OSError as e:
            raise ScanIOError(f"Unable to read catalog root {root}: {e}") from e

        def on_error(error: OSError):
            print(f"[WARN] Skipping unreadable directory {error.filename}: {error.strerror}")

        paths = []
        for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
            dirnames.sort()
            for name in sorted(filenames):
                if os.path.splitext(name)[1].lower() not in wanted:
                    continue
                full_path = os.path.join(dirpath, name)
                if os.path.isfile(full_path):
                    paths.append(full_path)

        print(f"[INFO] Catalogued {len(paths)} image file(s) in {root}")
        return Catalog(paths=tuple(paths), root=root)
