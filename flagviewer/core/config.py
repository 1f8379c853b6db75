# ==============================================================================
# FLAG VIEWER - CONFIGURATION MODULE
# ==============================================================================
# Centralized configuration management for the application.
#
# This module handles:
#   - Loading/saving configuration from JSON file
#   - Default values for all settings
#
# Configuration is stored in the user data directory (see Paths).
#
# Build-time constants are NOT configuration and live with the code that
# uses them: the embedded resource id (core/resources.py), the image
# extension set (core/catalog.py) and the workspace prefix
# (core/workspace.py).
#
# Usage:
#   from flagviewer.core.config import get_config
#   config = get_config()
#   print(config.random_seed)
#   config.debug_mode = True
#   config.save()
# ==============================================================================

import os
import json
from typing import Optional, Dict, Any

from .paths import Paths


# ==============================================================================
# DEFAULT CONFIGURATION VALUES
# ==============================================================================
# These are used when no config file exists or when values are missing.

DEFAULT_CONFIG = {
    # -------------------------------------------------------------------------
    # WORKSPACE
    # -------------------------------------------------------------------------
    # Where to create the extraction workspace ("" = system temp directory)
    "temp_root": "",

    # -------------------------------------------------------------------------
    # SELECTION
    # -------------------------------------------------------------------------
    # Fixed seed for reproducible picks (None = seed from time and entropy)
    "random_seed": None,

    # Show a random flag as soon as loading finishes
    "show_on_start": True,

    # -------------------------------------------------------------------------
    # GUI SETTINGS
    # -------------------------------------------------------------------------
    "window_width": 640,
    "window_height": 520,

    # -------------------------------------------------------------------------
    # ADVANCED
    # -------------------------------------------------------------------------
    # Enable [DEBUG] console output
    "debug_mode": False,
}


# ==============================================================================
# CONFIGURATION CLASS
# ==============================================================================
class Config:
    """
    Configuration manager for Flag Viewer.

    Settings are stored in a JSON file and can be accessed as
    properties on this object.

    Attributes:
        config_path: Path to the configuration file
        data: Dictionary containing all settings
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to config file. If None, uses default location.
        """
        self.config_path = config_path or Paths.get_config_path()
        self.data: Dict[str, Any] = DEFAULT_CONFIG.copy()
        self._modified = False

    # -------------------------------------------------------------------------
    # LOADING AND SAVING
    # -------------------------------------------------------------------------

    def load(self) -> bool:
        """
        Load configuration from file.

        If the file doesn't exist, defaults are used.
        Unknown keys are ignored, missing keys keep their defaults.

        Returns:
            True if file was loaded, False if using defaults
        """
        if not os.path.isfile(self.config_path):
            return False

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                loaded = json.load(f)
        except json.JSONDecodeError as e:
            print(f"[ERROR] Invalid config file: {e}")
            return False
        except OSError as e:
            print(f"[ERROR] Failed to load config: {e}")
            return False

        if not isinstance(loaded, dict):
            print(f"[ERROR] Invalid config file: expected a JSON object")
            return False

        for key, value in loaded.items():
            if key in self.data:
                self.data[key] = value

        if self.data.get('random_seed') is not None and self.random_seed is None:
            self.data['random_seed'] = None

        print(f"[INFO] Loaded config from {self.config_path}")
        self._modified = False
        return True

    def save(self) -> bool:
        """
        Save configuration to file.

        Creates the directory if it doesn't exist.

        Returns:
            True if saved successfully
        """
        try:
            os.makedirs(os.path.dirname(self.config_path), exist_ok=True)

            with open(self.config_path, 'w', encoding='utf-8') as f:
                json.dump(self.data, f, indent=4, sort_keys=True)

            print(f"[INFO] Saved config to {self.config_path}")
            self._modified = False
            return True

        except OSError as e:
            print(f"[ERROR] Failed to save config: {e}")
            return False

    def reset_to_defaults(self):
        """Reset all settings to their default values."""
        self.data = DEFAULT_CONFIG.copy()
        self._modified = True

    @property
    def is_modified(self) -> bool:
        return self._modified

    # -------------------------------------------------------------------------
    # PROPERTY ACCESS
    # -------------------------------------------------------------------------

    @property
    def temp_root(self) -> Optional[str]:
        """Get the workspace root, or None for the system temp directory."""
        return self.data.get('temp_root') or None

    @temp_root.setter
    def temp_root(self, value: Optional[str]):
        self.data['temp_root'] = value or ""
        self._modified = True

    @property
    def random_seed(self) -> Optional[int]:
        """Get the fixed random seed, or None to seed from entropy."""
        value = self.data.get('random_seed')
        if value is None:
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            print(f"[WARN] Ignoring invalid random_seed {value!r}")
            return None

    @random_seed.setter
    def random_seed(self, value: Optional[int]):
        self.data['random_seed'] = None if value is None else int(value)
        self._modified = True

    @property
    def show_on_start(self) -> bool:
        return bool(self.data.get('show_on_start', True))

    @show_on_start.setter
    def show_on_start(self, value: bool):
        self.data['show_on_start'] = bool(value)
        self._modified = True

    @property
    def window_width(self) -> int:
        return self.data.get('window_width', 640)

    @window_width.setter
    def window_width(self, value: int):
        self.data['window_width'] = max(320, min(4096, int(value)))
        self._modified = True

    @property
    def window_height(self) -> int:
        return self.data.get('window_height', 520)

    @window_height.setter
    def window_height(self, value: int):
        self.data['window_height'] = max(240, min(4096, int(value)))
        self._modified = True

    @property
    def debug_mode(self) -> bool:
        """Check if debug mode is enabled."""
        return bool(self.data.get('debug_mode', False))

    @debug_mode.setter
    def debug_mode(self, value: bool):
        self.data['debug_mode'] = bool(value)
        self._modified = True

    # -------------------------------------------------------------------------
    # GENERIC ACCESS
    # -------------------------------------------------------------------------

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def set(self, key: str, value: Any):
        self.data[key] = value
        self._modified = True


# ==============================================================================
# GLOBAL CONFIG INSTANCE
# ==============================================================================

_global_config: Optional[Config] = None


def get_config() -> Config:
    """
    Get the global configuration instance.

    Creates and loads config on first call.

    Returns:
        The global Config instance
    """
    global _global_config

    if _global_config is None:
        _global_config = Config()
        _global_config.load()

    return _global_config
