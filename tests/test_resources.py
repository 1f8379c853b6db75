import io
import zipfile

import pytest

from flagviewer.core.errors import ResourceNotFound, ResourceReadError
from flagviewer.core.resources import FLAGS_RESOURCE_ID, ResourceLocator, find_appended_zip


def test_read_bundled_archive(install_archive, flags_zip):
    base_dir = install_archive(flags_zip)
    locator = ResourceLocator(base_dir=str(base_dir), host_binary="")

    resource = locator.load(FLAGS_RESOURCE_ID)

    assert resource.data == flags_zip
    assert resource.length == len(flags_zip)
    assert resource.source.endswith("flags.zip")
    assert locator.read(FLAGS_RESOURCE_ID) == flags_zip


def test_unknown_id_is_not_found(resource_dir):
    with pytest.raises(ResourceNotFound):
        ResourceLocator(base_dir=str(resource_dir), host_binary="").read(99)


def test_missing_archive_is_not_found(resource_dir):
    with pytest.raises(ResourceNotFound):
        ResourceLocator(base_dir=str(resource_dir), host_binary="").read(FLAGS_RESOURCE_ID)


def test_empty_archive_is_read_error(install_archive):
    base_dir = install_archive(b"")

    with pytest.raises(ResourceReadError):
        ResourceLocator(base_dir=str(base_dir), host_binary="").read(FLAGS_RESOURCE_ID)


def test_archive_appended_to_executable(tmp_path, resource_dir, flags_zip):
    exe = tmp_path / "viewer.exe"
    stub = b"MZ" + b"\x00\x90" * 4000
    exe.write_bytes(stub + flags_zip)

    locator = ResourceLocator(base_dir=str(resource_dir), host_binary=str(exe))
    resource = locator.load(FLAGS_RESOURCE_ID)

    assert resource.data == flags_zip
    assert resource.source == f"{exe}+{len(stub)}"


def test_bundled_file_wins_over_appended_payload(tmp_path, install_archive, flags_zip, make_zip, png_bytes):
    other = make_zip([("other.png", png_bytes)])
    exe = tmp_path / "viewer.exe"
    exe.write_bytes(b"MZ" + other)
    base_dir = install_archive(flags_zip)

    locator = ResourceLocator(base_dir=str(base_dir), host_binary=str(exe))

    assert locator.read(FLAGS_RESOURCE_ID) == flags_zip


def test_executable_without_payload_is_not_found(tmp_path, resource_dir):
    exe = tmp_path / "viewer.exe"
    exe.write_bytes(b"MZ" + b"\x00" * 1024)

    with pytest.raises(ResourceNotFound):
        ResourceLocator(base_dir=str(resource_dir), host_binary=str(exe)).read(FLAGS_RESOURCE_ID)


def test_find_appended_zip_with_comment(png_bytes):
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        zf.writestr("flag.png", png_bytes)
        zf.comment = b"flags PK\x05\x06 inside the comment"
    archive = buf.getvalue()
    blob = b"prefix-bytes" * 10 + archive

    bounds = find_appended_zip(io.BytesIO(blob), len(blob))

    assert bounds == (120, len(blob))


def test_find_appended_zip_without_archive():
    blob = b"just an executable" * 50

    assert find_appended_zip(io.BytesIO(blob), len(blob)) is None


def test_find_appended_zip_ignores_archive_not_at_end(flags_zip):
    blob = b"MZ" + flags_zip + b"trailing"

    assert find_appended_zip(io.BytesIO(blob), len(blob)) is None
