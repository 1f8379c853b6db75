# ==============================================================================
# CORE MODULE INIT
# ==============================================================================
# Core engine modules for Flag Viewer.
#
# This package contains the fundamental building blocks:
#   - ResourceLocator: Reads the archive embedded in the application
#   - TempWorkspace: Owns the temporary extraction directory
#   - AssetCatalog: Finds image files in the workspace
#   - Selector: Uniform random index selection
#   - CoreController: initialize() / pick_random() / shutdown()
#   - Config, Paths: Application configuration and locations
#
# Usage:
#   from flagviewer.core import CoreController
#   from flagviewer.core.config import get_config
# ==============================================================================

from .errors import (
    CoreError, ResourceNotFound, ResourceReadError, WorkspaceCreateError,
    ArchiveCorrupt, UnsafeEntryPath, ExtractionIOError, ScanIOError,
    EmptyPopulation, ControllerShutDown, InvalidControllerState,
)
from .resources import ResourceLocator, EmbeddedResource, FLAGS_RESOURCE_ID
from .workspace import TempWorkspace, Workspace
from .catalog import AssetCatalog, Catalog, IMAGE_EXTENSIONS
from .selector import Selector
from .controller import CoreController, ControllerState, SelectionResult
from .config import Config, get_config
from .paths import Paths

__all__ = [
    # Errors
    'CoreError',
    'ResourceNotFound',
    'ResourceReadError',
    'WorkspaceCreateError',
    'ArchiveCorrupt',
    'UnsafeEntryPath',
    'ExtractionIOError',
    'ScanIOError',
    'EmptyPopulation',
    'ControllerShutDown',
    'InvalidControllerState',

    # Resources
    'ResourceLocator',
    'EmbeddedResource',
    'FLAGS_RESOURCE_ID',

    # Workspace
    'TempWorkspace',
    'Workspace',

    # Cataloging
    'AssetCatalog',
    'Catalog',
    'IMAGE_EXTENSIONS',

    # Selection
    'Selector',

    # Controller
    'CoreController',
    'ControllerState',
    'SelectionResult',

    # Configuration
    'Config',
    'get_config',

    # Paths
    'Paths',
]
