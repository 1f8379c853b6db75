"""Shared fixtures for the flag viewer tests.

Archives are built in memory with real PNG/JPEG bytes from Pillow, so the
extracted files are images the viewer could actually display.
"""

import io
import os
import sys
import zipfile

import pytest
from PIL import Image

# Project root = parent directory of this tests/ folder
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from flagviewer.core import config as config_module
from flagviewer.core.config import Config


def image_bytes(fmt="PNG", size=(6, 4), color=(200, 16, 46)):
    """Encode a small solid-colour image."""
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, fmt)
    return buf.getvalue()


def build_zip(entries, compression=zipfile.ZIP_DEFLATED):
    """
    Build a ZIP archive in memory.

    entries is a list of (name, data) pairs; names are stored verbatim so
    tests can create backslash, '..' and absolute entry names. A data of
    None makes a directory entry.
    """
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        for name, data in entries:
            info = zipfile.ZipInfo(name)
            info.compress_type = compression
            if data is None:
                info.compress_type = zipfile.ZIP_STORED
                info.external_attr = 0o40755 << 16 | 0x10
                data = b""
            zf.writestr(info, data)
    return buf.getvalue()


@pytest.fixture
def make_zip():
    return build_zip


@pytest.fixture
def make_image():
    return image_bytes


@pytest.fixture
def png_bytes():
    return image_bytes("PNG")


@pytest.fixture
def jpeg_bytes():
    return image_bytes("JPEG", color=(0, 57, 166))


@pytest.fixture
def flags_zip(png_bytes, jpeg_bytes):
    """The two-entry archive: flag1.png and sub/flag2.jpg."""
    return build_zip([("flag1.png", png_bytes), ("sub/flag2.jpg", jpeg_bytes)])


@pytest.fixture
def resource_dir(tmp_path):
    """Directory laid out like the app bundle (resources/ inside)."""
    path = tmp_path / "bundle"
    (path / "resources").mkdir(parents=True)
    return path


@pytest.fixture
def install_archive(resource_dir):
    """Write archive bytes where ResourceLocator(base_dir=resource_dir) finds them."""
    def _install(data):
        (resource_dir / "resources" / "flags.zip").write_bytes(data)
        return resource_dir
    return _install


@pytest.fixture
def temp_root(tmp_path):
    path = tmp_path / "tmp"
    path.mkdir()
    return path


@pytest.fixture(autouse=True)
def app_config(tmp_path, temp_root, monkeypatch):
    """Isolated global config: workspaces go under tmp_path, never $TMPDIR."""
    config = Config(str(tmp_path / "config" / "config.json"))
    config.temp_root = str(temp_root)
    monkeypatch.setattr(config_module, "_global_config", config)
    return config
