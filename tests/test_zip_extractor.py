import zipfile

import pytest

from flagviewer.core.errors import ArchiveCorrupt, ExtractionIOError, UnsafeEntryPath
from flagviewer.extractors import ZipExtractor, normalize_entry_path, safe_join


@pytest.fixture
def dest(tmp_path):
    path = tmp_path / "dest"
    path.mkdir()
    return path


def test_extract_writes_every_entry(make_zip, png_bytes, jpeg_bytes, dest):
    data = make_zip([
        ("flag1.png", png_bytes),
        ("europe/", None),
        ("europe/fr.jpg", jpeg_bytes),
        ("asia/jp/jp.png", png_bytes),
    ])

    count = ZipExtractor().extract(data, str(dest))

    assert count == 4
    assert (dest / "flag1.png").read_bytes() == png_bytes
    assert (dest / "europe").is_dir()
    assert (dest / "europe" / "fr.jpg").read_bytes() == jpeg_bytes
    assert (dest / "asia" / "jp" / "jp.png").read_bytes() == png_bytes

    written = sorted(p.relative_to(dest).as_posix() for p in dest.rglob("*"))
    assert written == [
        "asia", "asia/jp", "asia/jp/jp.png", "europe", "europe/fr.jpg", "flag1.png",
    ]


def test_extract_writes_nothing_beyond_the_entries(flags_zip, dest):
    count = ZipExtractor().extract(flags_zip, str(dest))

    files = sorted(p.relative_to(dest).as_posix() for p in dest.rglob("*") if p.is_file())
    assert files == ["flag1.png", "sub/flag2.jpg"]
    assert len(files) == count


def test_extract_stored_entries(make_zip, dest):
    data = make_zip([("a.gif", b"GIF89a..."), ("b.bmp", b"BM....")],
                    compression=zipfile.ZIP_STORED)

    assert ZipExtractor().extract(data, str(dest)) == 2
    assert (dest / "a.gif").read_bytes() == b"GIF89a..."


def test_backslash_separators_are_normalized(make_zip, png_bytes, dest):
    data = make_zip([("americas\\br.png", png_bytes)])

    ZipExtractor().extract(data, str(dest))

    assert (dest / "americas" / "br.png").read_bytes() == png_bytes


def test_progress_callback_sees_each_entry(make_zip, png_bytes, dest):
    data = make_zip([("a.png", png_bytes), ("b.png", png_bytes)])
    calls = []

    ZipExtractor().extract(data, str(dest), lambda cur, total, name: calls.append((cur, total, name)))

    assert calls == [(1, 2, "a.png"), (2, 2, "b.png")]


@pytest.mark.parametrize("name", [
    "../evil.png",
    "sub/../../evil.png",
    "..\\evil.png",
    "/etc/evil.png",
    "\\\\server\\share\\evil.png",
    "C:/evil.png",
    "c:evil.png",
])
def test_unsafe_entry_is_rejected_before_writing(make_zip, png_bytes, tmp_path, dest, name):
    data = make_zip([("ok.png", png_bytes), (name, png_bytes)])

    with pytest.raises(UnsafeEntryPath) as excinfo:
        ZipExtractor().extract(data, str(dest))

    assert excinfo.value.entry_path.replace("\\", "/") == name.replace("\\", "/")
    assert not (tmp_path / "evil.png").exists()
    assert list(dest.iterdir()) == []


def test_open_without_validation_collects_unsafe_entries(make_zip, png_bytes):
    data = make_zip([("ok.png", png_bytes), ("../evil.png", png_bytes)])

    with ZipExtractor() as extractor:
        extractor.open(data, validate=False)
        assert [e.path for e in extractor.list_files()] == ["ok.png"]
        assert extractor.unsafe_entries == ["../evil.png"]


@pytest.mark.parametrize("name, expected", [
    ("flag.png", "flag.png"),
    ("./flags//fr.png", "flags/fr.png"),
    ("flags\\de.png", "flags/de.png"),
    ("flags/", "flags/"),
])
def test_normalize_entry_path(name, expected):
    assert normalize_entry_path(name) == expected


def test_normalize_entry_path_rejects_empty_name():
    with pytest.raises(UnsafeEntryPath):
        normalize_entry_path("./")


def test_safe_join_stays_inside(tmp_path):
    target = safe_join(str(tmp_path), "a/b.png")
    assert target.startswith(str(tmp_path))


def test_not_a_zip_is_corrupt(dest):
    with pytest.raises(ArchiveCorrupt):
        ZipExtractor().extract(b"this is not an archive", str(dest))


def test_empty_buffer_is_corrupt(dest):
    with pytest.raises(ArchiveCorrupt):
        ZipExtractor().extract(b"", str(dest))


def test_truncated_archive_is_corrupt(flags_zip, dest):
    with pytest.raises(ArchiveCorrupt):
        ZipExtractor().extract(flags_zip[:-30], str(dest))


def test_bad_crc_is_corrupt(make_zip, dest):
    payload = b"pretend this is a flag image"
    data = bytearray(make_zip([("flag.png", payload)], compression=zipfile.ZIP_STORED))
    pos = data.find(payload)
    data[pos] ^= 0xFF

    with pytest.raises(ArchiveCorrupt):
        ZipExtractor().extract(bytes(data), str(dest))


def test_unsupported_compression_is_corrupt(make_zip, png_bytes, dest):
    data = make_zip([("flag.png", png_bytes)], compression=zipfile.ZIP_BZIP2)

    with pytest.raises(ArchiveCorrupt):
        ZipExtractor().extract(data, str(dest))


def test_missing_destination_is_io_error(flags_zip, tmp_path):
    with pytest.raises(ExtractionIOError):
        ZipExtractor().extract(flags_zip, str(tmp_path / "missing"))


def test_file_in_place_of_directory_is_io_error(make_zip, png_bytes, dest):
    data = make_zip([("flags", b"plain file"), ("flags/fr.png", png_bytes)])

    with pytest.raises(ExtractionIOError):
        ZipExtractor().extract(data, str(dest))


def test_listing_and_reading_entries(flags_zip, png_bytes):
    with ZipExtractor(flags_zip) as extractor:
        entries = extractor.list_files()

        assert [e.path for e in entries] == ["flag1.png", "sub/flag2.jpg"]
        assert entries[0].size == len(png_bytes)
        assert not entries[0].is_dir
        assert extractor.get_file_count() == 2
        assert extractor.get_file_data("flag1.png") == png_bytes
        assert extractor.get_file_data("missing.png") is None


def test_detect(flags_zip):
    extractor = ZipExtractor()
    assert extractor.detect(flags_zip)
    assert not extractor.detect(b"\x89PNG\r\n")


@pytest.mark.filterwarnings("ignore:Duplicate name")
@pytest.mark.parametrize("first, second", [
    ("a.png", "a.png"),
    ("a.png", "./a.png"),
    ("flags/a.png", "flags\\a.png"),
])
def test_duplicate_entries_are_corrupt(make_zip, png_bytes, dest, first, second):
    data = make_zip([(first, png_bytes), (second, b"other bytes")])

    with pytest.raises(ArchiveCorrupt):
        ZipExtractor().extract(data, str(dest))
    assert list(dest.iterdir()) == []
