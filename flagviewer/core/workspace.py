# ==============================================================================
# FLAG VIEWER - TEMPORARY WORKSPACE
# ==============================================================================
# Owns the one temporary directory the archive is extracted into.
#
# The directory is named <temp root>/FlagImages_<nanoseconds>_<random>, so
# two instances of the application started in the same tick still get
# different directories. destroy() never raises: it runs while the
# application is closing and there is nobody left to tell.
#
# Usage:
#   workspace = TempWorkspace()
#   path = workspace.create()
#   ...
#   workspace.destroy()
#
#   with TempWorkspace() as path:
#       ...
# ==============================================================================

import os
import shutil
import tempfile
import time
from dataclasses import dataclass
from typing import Optional

from .errors import WorkspaceCreateError


# Fixed directory name prefix
WORKSPACE_PREFIX = "FlagImages_"


# ==============================================================================
# WORKSPACE DATA CLASS
# ==============================================================================
@dataclass
class Workspace:
    """
    A live temporary directory.

    Attributes:
        path (str):       Absolute directory path
        created_at (int): Creation time in nanoseconds since the epoch
        nonce (str):      Random part of the directory name
    """
    path: str
    created_at: int
    nonce: str

    @property
    def exists(self) -> bool:
        return os.path.isdir(self.path)


# ==============================================================================
# TEMP WORKSPACE CLASS
# ==============================================================================
class TempWorkspace:
    """
    Creates and destroys a process-private temporary directory.

    Attributes:
        root (str):   Parent directory (system temp dir by default)
        prefix (str): Directory name prefix
    """

    def __init__(self, root: Optional[str] = None, prefix: str = WORKSPACE_PREFIX):
        self.root = root
        self.prefix = prefix
        self._workspace: Optional[Workspace] = None

    @property
    def workspace(self) -> Optional[Workspace]:
        return self._workspace

    @property
    def path(self) -> Optional[str]:
        return self._workspace.path if self._workspace else None

    @property
    def is_live(self) -> bool:
        return self._workspace is not None

    def create(self) -> str:
        """
        Create the workspace directory.

        Returns:
            Absolute path of the new directory

        Raises:
            WorkspaceCreateError: A workspace is already live, or the
                                  directory could not be made
        """
        if self._workspace is not None:
            raise WorkspaceCreateError(
                f"Workspace already exists: {self._workspace.path}")

        root = self.root or tempfile.gettempdir()
        created_at = time.time_ns()

        try:
            os.makedirs(root, exist_ok=True)
            # mkdtemp appends a random suffix and creates the dir atomically
            path = tempfile.mkdtemp(prefix=f"{self.prefix}{created_at}_", dir=root)
        except OSError as e:
            raise WorkspaceCreateError(
                f"Unable to create temporary directory in {root}: {e}") from e

        path = os.path.abspath(path)
        nonce = os.path.basename(path)[len(f"{self.prefix}{created_at}_"):]
        self._workspace = Workspace(path=path, created_at=created_at, nonce=nonce)

        print(f"[INFO] Created workspace: {path}")
        return path

    def destroy(self):
        """
        Remove the workspace directory and everything in it.

        Safe to call when nothing was created and safe to call twice.
        Errors are logged and swallowed.
        """
        workspace = self._workspace
        if workspace is None:
            return
        self._workspace = None

        if not os.path.isdir(workspace.path):
            return

        try:
            shutil.rmtree(workspace.path)
            print(f"[INFO] Removed workspace: {workspace.path}")
        except OSError as e:
            print(f"[WARN] Failed to remove workspace {workspace.path}: {e}")

    # -------------------------------------------------------------------------
    # CONTEXT MANAGER SUPPORT
    # -------------------------------------------------------------------------

    def __enter__(self):
        return self.create()

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.destroy()
        return False
