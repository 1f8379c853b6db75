# ==============================================================================
# FLAG VIEWER - CORE CONTROLLER
# ==============================================================================
# Drives the extract -> catalog -> pick lifecycle for a presentation shell.
#
# State machine:
#
#   UNINITIALIZED --initialize()--> INITIALIZING --ok--> READY
#                                                \--error--> FAILED
#   READY --pick_random()--> READY
#   any state --shutdown()--> SHUT_DOWN (terminal)
#
# initialize() never raises a CoreError: the failure is recorded in
# `error` and the shell decides how to show it. pick_random() raises
# typed errors. An empty catalog is not a failure; the controller is
# READY with is_empty set.
#
# Usage:
#   controller = CoreController()
#   if controller.initialize():
#       result = controller.pick_random()
#       print(result.path, result.position, result.total)
#   print(controller.status_message)
#   controller.shutdown()
# ==============================================================================

import os
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from .catalog import AssetCatalog, Catalog
from .config import Config, get_config
from .errors import (
    CoreError, ControllerShutDown, EmptyPopulation, InvalidControllerState,
)
from .resources import FLAGS_RESOURCE_ID, ResourceLocator
from .selector import Selector
from .workspace import TempWorkspace
from ..extractors.zip_extractor import ZipExtractor


# ==============================================================================
# STATE AND RESULT TYPES
# ==============================================================================

class ControllerState(Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    FAILED = "failed"
    SHUT_DOWN = "shut_down"


@dataclass(frozen=True)
class SelectionResult:
    """
    One random pick from the catalog.

    Attributes:
        path (str):   Absolute path of the picked image
        index (int):  0-based catalog index
        total (int):  Catalog size at the time of the pick
    """
    path: str
    index: int
    total: int

    @property
    def position(self) -> int:
        """1-based position, for "3/120" style display."""
        return self.index + 1

    @property
    def display_name(self) -> str:
        """File name without directory or extension."""
        return os.path.splitext(os.path.basename(self.path))[0]


# ==============================================================================
# CORE CONTROLLER
# ==============================================================================
class CoreController:
    """
    Owns the workspace, catalog and selector for one run.

    Collaborators can be injected for testing; by default they are
    built from the global config.

    Attributes:
        resource_id (int): Build-time id of the archive resource
    """

    def __init__(self,
                 config: Optional[Config] = None,
                 locator: Optional[ResourceLocator] = None,
                 workspace: Optional[TempWorkspace] = None,
                 extractor: Optional[ZipExtractor] = None,
                 cataloger: Optional[AssetCatalog] = None,
                 selector: Optional[Selector] = None,
                 resource_id: int = FLAGS_RESOURCE_ID):
        self.config = config or get_config()
        self.resource_id = resource_id

        self._locator = locator or ResourceLocator()
        self._workspace = workspace or TempWorkspace(root=self.config.temp_root)
        self._extractor = extractor or ZipExtractor()
        self._cataloger = cataloger or AssetCatalog()
        self._selector = selector or Selector()

        self._state = ControllerState.UNINITIALIZED
        self._catalog = Catalog()
        self._error: Optional[CoreError] = None
        self._lock = threading.RLock()
        self._executor: Optional[ThreadPoolExecutor] = None

    # ==========================================================================
    # READ-ONLY STATE
    # ==========================================================================

    @property
    def state(self) -> ControllerState:
        return self._state

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def workspace_path(self) -> Optional[str]:
        return self._workspace.path

    @property
    def error(self) -> Optional[CoreError]:
        """The error that sent the controller to FAILED, if any."""
        return self._error

    @property
    def error_kind(self) -> Optional[str]:
        return self._error.kind if self._error else None

    @property
    def is_ready(self) -> bool:
        return self._state is ControllerState.READY

    @property
    def is_empty(self) -> bool:
        return self._catalog.is_empty

    @property
    def status_message(self) -> str:
        """Status line for the shell."""
        state = self._state
        if state is ControllerState.UNINITIALIZED:
            return "Status: Not loaded"
        if state is ControllerState.INITIALIZING:
            return "Status: Extracting resource..."
        if state is ControllerState.FAILED:
            if self._error is None:
                return "Status: Resource extraction failed"
            return f"Status: Resource extraction failed ({self.error_kind}: {self._error.message})"
        if state is ControllerState.SHUT_DOWN:
            return "Status: Shut down"
        if self.is_empty:
            return "Status: No image files found"
        return f"Status: Successfully loaded {len(self._catalog)} flag images"

    # ==========================================================================
    # LIFECYCLE
    # ==========================================================================

    def initialize(self) -> bool:
        """
        Extract the embedded archive and build the catalog.

        Blocks for the whole extraction. Use initialize_async() from an
        event-driven shell.

        Returns:
            True if the controller is READY (possibly with an empty
            catalog), False if it FAILED

        Raises:
            ControllerShutDown: shutdown() was already called
            InvalidControllerState: initialize() was already called
        """
        with self._lock:
            self._check_not_shut_down()
            if self._state is not ControllerState.UNINITIALIZED:
                raise InvalidControllerState(
                    f"initialize() is not valid in state {self._state.value}")

            self._state = ControllerState.INITIALIZING
            completed = False
            try:
                self._run_pipeline()
                completed = True
            except CoreError as e:
                print(f"[ERROR] Initialization failed: {e.kind}: {e.message}")
                self._error = e
            finally:
                if not completed:
                    self._catalog = Catalog()
                    self._workspace.destroy()
                    self._state = ControllerState.FAILED

            if completed:
                self._state = ControllerState.READY
                print(f"[INFO] {self.status_message}")
            return completed

    def initialize_async(self, callback: Optional[Callable[['CoreController'], None]] = None) -> Future:
        """
        Run initialize() on a background thread.

        Args:
            callback: Called with this controller once initialization
                      has finished (on the worker thread)

        Returns:
            Future resolving to initialize()'s return value
        """
        with self._lock:
            self._check_not_shut_down()
            if self._executor is None:
                self._executor = ThreadPoolExecutor(max_workers=1,
                                                    thread_name_prefix="flagviewer-init")
            future = self._executor.submit(self.initialize)

        if callback is not None:
            future.add_done_callback(lambda _f: callback(self))
        return future

    def pick_random(self) -> SelectionResult:
        """
        Pick a random image from the catalog.

        Raises:
            ControllerShutDown: shutdown() was already called
            EmptyPopulation: The catalog is empty (including after FAILED)
            InvalidControllerState: initialize() has not completed
        """
        self._check_not_shut_down()
        state = self._state
        if state is ControllerState.FAILED:
            raise EmptyPopulation("No catalog: initialization failed")
        if state is not ControllerState.READY:
            raise InvalidControllerState(
                f"pick_random() is not valid in state {state.value}")

        catalog = self._catalog
        index = self._selector.next(len(catalog))
        result = SelectionResult(path=catalog[index], index=index, total=len(catalog))

        if self.config.debug_mode:
            print(f"[DEBUG] Picked {result.position}/{result.total}: {result.path}")
        return result

    def shutdown(self):
        """
        Remove all extracted files. Always legal; repeat calls are no-ops.

        Waits for an in-flight initialize() to finish first.
        """
        executor = None
        with self._lock:
            if self._state is ControllerState.SHUT_DOWN:
                return
            self._workspace.destroy()
            self._catalog = Catalog()
            self._state = ControllerState.SHUT_DOWN
            executor, self._executor = self._executor, None

        if executor is not None:
            # Called from the worker's own done-callback this must not join
            executor.shutdown(wait=False, cancel_futures=True)

    # ==========================================================================
    # HELPERS
    # ==========================================================================

    def _run_pipeline(self):
        data = self._locator.read(self.resource_id)
        path = self._workspace.create()

        self._extractor.extract(data, path)

        self._catalog = self._cataloger.scan(path)
        if not self._selector.is_seeded:
            self._selector.seed(self.config.random_seed)

        if self.config.debug_mode:
            print(f"[DEBUG] Selector seed: {self._selector.seed_value}")

    def _check_not_shut_down(self):
        if self._state is ControllerState.SHUT_DOWN:
            raise ControllerShutDown("Controller has been shut down")

    # ==========================================================================
    # CONTEXT MANAGER SUPPORT
    # ==========================================================================

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.shutdown()
        return False
