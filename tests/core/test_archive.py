"""Tests for zip archive listing and extraction.

This test suite covers:
- Filtering of directory entries and non-image names
- Ordinal ordering on the original-case entry names
- Extraction payloads: MIME inference and byte-exact base64
- Error handling: unreadable files, corrupt archives, missing entries
"""

import base64
import zipfile
from pathlib import Path

import pytest

from picshelf.core.archive import list_images_in_zip, read_zip_image
from picshelf.errors import (
    ArchiveFormatError,
    EntryNotFoundError,
    ErrorKind,
    ReadError,
)
from picshelf.models.core import ExtractedImage

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32
JPEG_BYTES = b"\xff\xd8\xff\xe0" + bytes(range(256)) * 4


class TestListImagesInZip:
    """Tests for list_images_in_zip."""

    def test_filters_and_sorts_on_original_case(self, make_zip) -> None:
        archive = make_zip(
            {"img/Photo.PNG": PNG_BYTES, "readme.md": "hello", "a.jpg": JPEG_BYTES}
        )

        assert list_images_in_zip(archive) == ["a.jpg", "img/Photo.PNG"]

    def test_uppercase_sorts_before_lowercase(self, make_zip) -> None:
        """No case folding: 'Z' (0x5A) comes before 'a' (0x61)."""
        archive = make_zip({"b.png": b"1", "Z.png": b"2", "a.png": b"3"})

        assert list_images_in_zip(archive) == ["Z.png", "a.png", "b.png"]

    def test_directory_entries_excluded(self, make_zip) -> None:
        archive = make_zip({"covers.png/": b"", "covers.png/front.png": PNG_BYTES})

        assert list_images_in_zip(archive) == ["covers.png/front.png"]

    def test_names_without_extension_excluded(self, make_zip) -> None:
        archive = make_zip(
            {"png": b"x", "pages/jpg": b"x", "dir.png/file": b"x", "ok.Avif": b"x"}
        )

        assert list_images_in_zip(archive) == ["ok.Avif"]

    def test_empty_archive(self, make_zip) -> None:
        assert list_images_in_zip(make_zip({})) == []

    def test_stored_entries(self, make_zip) -> None:
        archive = make_zip({"x.bmp": b"BM"}, compression=zipfile.ZIP_STORED)

        assert list_images_in_zip(archive) == ["x.bmp"]

    def test_accepts_string_path(self, make_zip) -> None:
        archive = make_zip({"a.gif": b"GIF89a"})

        assert list_images_in_zip(str(archive)) == ["a.gif"]

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ReadError) as excinfo:
            list_images_in_zip(tmp_path / "missing.zip")

        assert excinfo.value.kind == ErrorKind.IO
        assert isinstance(excinfo.value.__cause__, FileNotFoundError)

    def test_directory_instead_of_file(self, tmp_path: Path) -> None:
        with pytest.raises(ReadError):
            list_images_in_zip(tmp_path)

    def test_not_a_zip(self, tmp_path: Path) -> None:
        bogus = tmp_path / "bogus.zip"
        bogus.write_bytes(b"this is not a zip archive at all")

        with pytest.raises(ArchiveFormatError) as excinfo:
            list_images_in_zip(bogus)

        assert excinfo.value.kind == ErrorKind.ARCHIVE_FORMAT
        assert excinfo.value.path == str(bogus)

    def test_empty_file(self, tmp_path: Path) -> None:
        empty = tmp_path / "empty.zip"
        empty.write_bytes(b"")

        with pytest.raises(ArchiveFormatError):
            list_images_in_zip(empty)


class TestReadZipImage:
    """Tests for read_zip_image."""

    def test_extracts_listed_entry(self, make_zip) -> None:
        archive = make_zip(
            {"img/Photo.PNG": PNG_BYTES, "readme.md": "hello", "a.jpg": JPEG_BYTES}
        )

        image = read_zip_image(archive, "a.jpg")

        assert isinstance(image, ExtractedImage)
        assert image.mime_type == "image/jpeg"
        assert base64.b64decode(image.data) == JPEG_BYTES

    def test_every_listed_entry_round_trips(self, make_zip) -> None:
        contents = {
            "img/Photo.PNG": PNG_BYTES,
            "a.jpg": JPEG_BYTES,
            "b.JPEG": JPEG_BYTES[::-1],
            "c.webp": b"RIFF....WEBP",
        }
        archive = make_zip(contents)
        expected_mime = {
            "img/Photo.PNG": "image/png",
            "a.jpg": "image/jpeg",
            "b.JPEG": "image/jpeg",
            "c.webp": "image/webp",
        }

        with zipfile.ZipFile(archive) as zf:
            for name in list_images_in_zip(archive):
                image = read_zip_image(archive, name)
                assert image.mime_type == expected_mime[name]
                assert image.decode() == zf.read(name)

    def test_base64_is_standard_padded_unwrapped(self, make_zip) -> None:
        content = bytes(range(256)) * 40
        archive = make_zip({"big.bmp": content})

        image = read_zip_image(archive, "big.bmp")

        assert image.data == base64.b64encode(content).decode("ascii")
        assert "\n" not in image.data
        assert len(image.data) % 4 == 0

    def test_mime_from_name_not_content(self, make_zip) -> None:
        """A PNG stored under a .gif name is reported as GIF."""
        archive = make_zip({"fake.gif": PNG_BYTES, "notes.txt": "hi"})

        assert read_zip_image(archive, "fake.gif").mime_type == "image/gif"
        assert read_zip_image(archive, "notes.txt").mime_type == (
            "application/octet-stream"
        )

    def test_empty_entry(self, make_zip) -> None:
        archive = make_zip({"blank.png": b""})

        image = read_zip_image(archive, "blank.png")

        assert image.as_tuple() == ("image/png", "")

    def test_entry_name_is_case_sensitive(self, make_zip) -> None:
        archive = make_zip({"img/Photo.PNG": PNG_BYTES})

        with pytest.raises(EntryNotFoundError) as excinfo:
            read_zip_image(archive, "img/photo.png")

        assert excinfo.value.kind == ErrorKind.ENTRY_NOT_FOUND
        assert excinfo.value.entry == "img/photo.png"
        assert "img/photo.png" in str(excinfo.value)

    def test_basename_does_not_match_full_name(self, make_zip) -> None:
        archive = make_zip({"img/Photo.PNG": PNG_BYTES})

        with pytest.raises(EntryNotFoundError):
            read_zip_image(archive, "Photo.PNG")

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ReadError):
            read_zip_image(tmp_path / "missing.zip", "a.jpg")

    def test_not_a_zip(self, tmp_path: Path) -> None:
        bogus = tmp_path / "bogus.zip"
        bogus.write_bytes(b"PK but not really")

        with pytest.raises(ArchiveFormatError):
            read_zip_image(bogus, "a.jpg")

    def test_corrupt_entry_data(self, make_zip) -> None:
        """Damaged compressed data fails as a format error."""
        content = b"A" * 4096
        archive = make_zip({"page.png": content}, compression=zipfile.ZIP_STORED)
        raw = bytearray(archive.read_bytes())
        offset = raw.index(content)
        raw[offset : offset + 16] = b"B" * 16
        archive.write_bytes(bytes(raw))

        # Listing only reads the central directory and still works
        assert list_images_in_zip(archive) == ["page.png"]
        with pytest.raises(ArchiveFormatError):
            read_zip_image(archive, "page.png")

    @pytest.mark.parametrize(
        "compression", [zipfile.ZIP_BZIP2, zipfile.ZIP_LZMA], ids=["bzip2", "lzma"]
    )
    def test_corrupt_compressed_stream(self, make_zip, compression: int) -> None:
        """Decompressor failures of every supported method are format errors."""
        archive = make_zip({"page.png": b"A" * 4096}, compression=compression)
        with zipfile.ZipFile(archive) as zf:
            info = zf.getinfo("page.png")
        raw = bytearray(archive.read_bytes())
        # Local header is 30 bytes plus the name; skip the stream's first bytes
        start = info.header_offset + 30 + len(info.filename.encode()) + 4
        raw[start : start + 16] = bytes(16)
        archive.write_bytes(bytes(raw))

        with pytest.raises(ArchiveFormatError) as excinfo:
            read_zip_image(archive, "page.png")

        assert excinfo.value.kind == ErrorKind.ARCHIVE_FORMAT

    def test_archive_reopened_each_call(self, make_zip) -> None:
        """Nothing is cached between calls."""
        archive = make_zip({"a.png": b"first"})
        assert read_zip_image(archive, "a.png").decode() == b"first"

        make_zip({"a.png": b"second", "b.png": b"new"})

        assert list_images_in_zip(archive) == ["a.png", "b.png"]
        assert read_zip_image(archive, "a.png").decode() == b"second"
