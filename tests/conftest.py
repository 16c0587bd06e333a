import piexif
import pytest
from PIL import Image

# piexif writes big-endian TIFF: ExifIFD pointer tag 0x8769, type LONG, count 1
_EXIF_POINTER_ENTRY = b"\x87\x69\x00\x04\x00\x00\x00\x01"
_EXIF_POINTER_BAD_COUNT = b"\x87\x69\x00\x04\xc0\x00\x00\x01"


def _exif_with_date(date_time):
    exif = {"0th": {}, "Exif": {}, "GPS": {}, "1st": {}, "thumbnail": None}
    if date_time is not None:
        exif["Exif"][piexif.ExifIFD.DateTimeOriginal] = date_time.encode("ascii")
    return piexif.dump(exif)


@pytest.fixture
def make_photo():
    """Write a solid-color image (format from the extension), optionally carrying an EXIF DateTimeOriginal."""

    def _make(path, date_time=None, size=(400, 200), color=(0, 0, 0)):
        img = Image.new("RGB", size, color)
        if date_time is None:
            img.save(path)
        else:
            img.save(path, exif=_exif_with_date(date_time))
        return path

    return _make


@pytest.fixture
def make_corrupt_exif_photo(make_photo):
    """A decodable JPEG whose ExifIFD pointer entry claims ~3 billion values."""

    def _make(path, size=(400, 200)):
        make_photo(path, "2023:06:15 10:20:30", size=size)
        data = path.read_bytes()
        assert data.count(_EXIF_POINTER_ENTRY) == 1
        path.write_bytes(data.replace(_EXIF_POINTER_ENTRY, _EXIF_POINTER_BAD_COUNT))
        return path

    return _make
