import os
import sys

import pytest

from flagviewer.core.paths import Paths
from flagviewer.core.resources import ResourceLocator


@pytest.fixture(autouse=True)
def fresh_paths():
    Paths.reset()
    yield
    Paths.reset()


def test_script_mode_resolves_from_project_root():
    project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

    assert not Paths.is_frozen()
    assert Paths.get_app_dir() == project_root
    assert Paths.get_bundle_dir() == project_root
    assert Paths.get_host_executable() is None
    assert Paths.get_resource_path("resources/flags.zip") == \
        os.path.join(project_root, "resources/flags.zip")


def test_frozen_mode_uses_bundle_and_executable(tmp_path, monkeypatch):
    exe = tmp_path / "FlagViewer.exe"
    monkeypatch.setattr(sys, "frozen", True, raising=False)
    monkeypatch.setattr(sys, "_MEIPASS", str(tmp_path / "_MEI123"), raising=False)
    monkeypatch.setattr(sys, "executable", str(exe))

    assert Paths.is_frozen()
    assert Paths.get_app_dir() == str(tmp_path)
    assert Paths.get_bundle_dir() == str(tmp_path / "_MEI123")
    assert Paths.get_host_executable() == str(exe)

    locator = ResourceLocator()
    assert locator.base_dir == str(tmp_path / "_MEI123")
    assert locator.host_binary == str(exe)


def test_user_data_dir_follows_xdg(tmp_path, monkeypatch):
    if sys.platform in ("win32", "darwin"):
        pytest.skip("XDG_CONFIG_HOME only applies on Linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

    assert Paths.get_config_path() == str(tmp_path / "FlagViewer" / "config.json")
