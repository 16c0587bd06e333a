import pytest
from PIL import Image

from photo_watermarker.core.errors import UnknownFormatError
from photo_watermarker.core.exporter import export_batch, export_one, resolve_output_format
from photo_watermarker.core.settings import JobConfig, Position


@pytest.mark.parametrize(
    "name, fmt",
    [("a.jpg", "JPEG"), ("a.JPEG", "JPEG"), ("holiday.2023.png", "PNG"), ("x.tif", "TIFF"), ("x.webp", "WEBP")],
)
def test_resolve_output_format(name, fmt):
    assert resolve_output_format(name) == fmt


@pytest.mark.parametrize("name", ["noextension", "photo.xyz", "photo."])
def test_resolve_output_format_unknown(name):
    with pytest.raises(UnknownFormatError):
        resolve_output_format(name)


@pytest.fixture
def out_dir(tmp_path):
    d = tmp_path / "out"
    d.mkdir()
    return d


def test_export_one_writes_same_name(tmp_path, out_dir, make_photo):
    src = make_photo(tmp_path / "a.jpg", "2023:06:15 08:00:00")
    text = export_one(src, out_dir, JobConfig(input_dir=tmp_path))
    assert text == "2023-06-15"
    with Image.open(out_dir / "a.jpg") as out:
        assert out.format == "JPEG"
        assert out.size == (400, 200)
        # white text near the bottom-right corner, untouched elsewhere
        assert out.crop((150, 120, 400, 190)).convert("L").getextrema()[1] > 150
        assert out.crop((0, 0, 100, 100)).convert("L").getextrema()[1] < 40


def test_export_one_top_left(tmp_path, out_dir, make_photo):
    src = make_photo(tmp_path / "a.jpg", "2023:06:15 08:00:00")
    export_one(src, out_dir, JobConfig(input_dir=tmp_path, position=Position.TOP_LEFT))
    with Image.open(out_dir / "a.jpg") as out:
        assert out.crop((15, 15, 200, 70)).convert("L").getextrema()[1] > 150
        assert out.crop((300, 130, 400, 200)).convert("L").getextrema()[1] < 40


def test_batch_reports_each_file_once(tmp_path, out_dir, make_photo, capsys):
    a = make_photo(tmp_path / "a.jpg", "2023:06:15 08:00:00")
    b = tmp_path / "b.txt"
    b.write_text("not an image")
    c = make_photo(tmp_path / "c.jpg")
    # dated and decodable, but without an extension to pick the output format
    d = tmp_path / "d"
    d.write_bytes(a.read_bytes())

    report = export_batch([a, b, c, d], out_dir, JobConfig(input_dir=tmp_path))

    assert report.watermarked == ["a.jpg"]
    assert report.skipped == ["b.txt", "c.jpg"]
    assert report.failed == ["d"]
    assert report.total == 4
    assert sorted(p.name for p in out_dir.iterdir()) == ["a.jpg"]

    captured = capsys.readouterr()
    assert captured.out.splitlines() == [
        "Watermarked: a.jpg",
        "Skipping (no date info): b.txt",
        "Skipping (no date info): c.jpg",
    ]
    assert captured.err.startswith("Error processing file d: Cannot determine output format")


def test_unidentified_image_with_date_is_skipped(tmp_path, out_dir, capsys, monkeypatch):
    src = tmp_path / "scan.jpg"
    src.write_bytes(b"not really a jpeg")
    monkeypatch.setattr("photo_watermarker.core.exporter.watermark_text_for", lambda path: "2020-01-01")

    report = export_batch([src], out_dir, JobConfig(input_dir=tmp_path))

    assert report.skipped == ["scan.jpg"]
    assert capsys.readouterr().out == "Skipping (not a supported image): scan.jpg\n"


def test_invalid_color_fails_every_file_but_not_the_batch(tmp_path, out_dir, make_photo, capsys):
    paths = [make_photo(tmp_path / f"{n}.jpg", "2023:06:15 08:00:00") for n in ("a", "b")]

    report = export_batch(paths, out_dir, JobConfig(input_dir=tmp_path, color="notacolor"))

    assert report.failed == ["a.jpg", "b.jpg"]
    assert list(out_dir.iterdir()) == []
    err = capsys.readouterr().err.splitlines()
    assert len(err) == 2
    assert err[0].startswith("Error processing file a.jpg: Invalid color")


def test_palette_png_keeps_its_format(tmp_path, out_dir, monkeypatch):
    src = tmp_path / "icon.png"
    Image.new("P", (300, 120)).save(src)
    monkeypatch.setattr("photo_watermarker.core.exporter.watermark_text_for", lambda path: "2021-12-31")

    export_batch([src], out_dir, JobConfig(input_dir=tmp_path, font_size=20))

    with Image.open(out_dir / "icon.png") as out:
        assert out.format == "PNG"
        assert out.size == (300, 120)


def test_png_with_exif_date_is_watermarked(tmp_path, out_dir, make_photo, capsys):
    src = make_photo(tmp_path / "a.png", "2023:06:15 10:00:00")

    report = export_batch([src], out_dir, JobConfig(input_dir=tmp_path))

    assert report.watermarked == ["a.png"]
    assert capsys.readouterr().out == "Watermarked: a.png\n"
    with Image.open(out_dir / "a.png") as out:
        assert out.format == "PNG"
        assert out.crop((150, 120, 400, 190)).convert("L").getextrema()[1] > 200


def test_corrupt_exif_is_skipped_and_batch_continues(tmp_path, out_dir, make_photo, make_corrupt_exif_photo, capsys):
    bad = make_corrupt_exif_photo(tmp_path / "a_corrupt.jpg")
    good = make_photo(tmp_path / "z_good.jpg", "2023:06:15 10:00:00")

    report = export_batch([bad, good], out_dir, JobConfig(input_dir=tmp_path))

    assert report.skipped == ["a_corrupt.jpg"]
    assert report.watermarked == ["z_good.jpg"]
    assert capsys.readouterr().out.splitlines() == [
        "Skipping (no date info): a_corrupt.jpg",
        "Watermarked: z_good.jpg",
    ]
