from io import BytesIO
from pathlib import Path

import pytest
from PIL import Image

from framefit.imaging.pipeline import effective_background, process
from framefit.models.enums import FitMode, OutputFormat, ResolutionPreset
from framefit.models.errors import DecodeFailed, EncodeFailed, InvalidCustomDimensions
from framefit.models.settings import Background, CustomTarget, PresetTarget, ProcessingSettings


def _source(tmp_path: Path, name="photo.png", size=(400, 200), color=(255, 0, 0)) -> Path:
    src = tmp_path / name
    Image.new("RGB", size, color).save(src)
    return src


def test_process_preset_jpeg(tmp_path: Path):
    src = _source(tmp_path)
    settings = ProcessingSettings(target=PresetTarget(ResolutionPreset.HD_720), format=OutputFormat.JPEG)
    result = process(src, settings)
    assert (result.width, result.height) == (1280, 720)
    assert result.filename == "photo_1280x720_720pHD.jpg"
    assert result.mime_type == "image/jpeg"
    with Image.open(BytesIO(result.data)) as im:
        assert im.format == "JPEG"
        assert im.size == (1280, 720)
    result.release()


def test_process_from_bytes_uses_given_filename(tmp_path: Path):
    data = _source(tmp_path).read_bytes()
    settings = ProcessingSettings(target=PresetTarget(ResolutionPreset.FHD_1080), format=OutputFormat.JPEG)
    with process(data, settings, "photo.png") as result:
        assert result.filename == "photo_1920x1080_1080pFHD.jpg"


def test_transparent_jpeg_gets_black_bars(tmp_path: Path):
    src = _source(tmp_path)
    settings = ProcessingSettings(
        target=CustomTarget(300, 300),
        format=OutputFormat.JPEG,
        background=Background.parse("transparent"),
    )
    assert not effective_background(settings).is_transparent
    with process(src, settings) as result, Image.open(BytesIO(result.data)) as im:
        assert im.mode == "RGB"
        r, g, b = im.getpixel((150, 10))
        assert max(r, g, b) < 16
        r, g, b = im.getpixel((150, 150))
        assert r > 230 and g < 30 and b < 30


@pytest.mark.parametrize("fmt", [OutputFormat.PNG, OutputFormat.WEBP])
def test_transparent_alpha_formats_keep_transparency(tmp_path: Path, fmt):
    src = _source(tmp_path)
    settings = ProcessingSettings(
        target=CustomTarget(300, 300),
        format=fmt,
        background=Background.parse("transparent"),
    )
    with process(src, settings) as result, Image.open(BytesIO(result.data)) as im:
        rgba = im.convert("RGBA")
        assert rgba.getpixel((150, 10))[3] == 0
        assert rgba.getpixel((150, 150))[3] == 255


def test_png_ignores_quality(tmp_path: Path):
    src = _source(tmp_path)
    calls = []

    class RecordingEncoder:
        def encode(self, frame, fmt, quality=None):
            calls.append((fmt, quality))
            return b"png-bytes"

    settings = ProcessingSettings(target=CustomTarget(10, 10), format=OutputFormat.PNG, quality=0.2)
    process(src, settings, encoder=RecordingEncoder()).release()
    settings = settings.replace(format=OutputFormat.WEBP)
    process(src, settings, encoder=RecordingEncoder()).release()
    assert calls == [(OutputFormat.PNG, None), (OutputFormat.WEBP, 0.2)]


def test_invalid_custom_size_fails_before_decoding(tmp_path: Path):
    src = _source(tmp_path)

    class FailingDecoder:
        def decode(self, source):
            raise AssertionError("decoder must not run")

    for width, height in [(0, 100), (100, -5)]:
        settings = ProcessingSettings(target=CustomTarget(width, height))
        with pytest.raises(InvalidCustomDimensions):
            process(src, settings, decoder=FailingDecoder())


def test_decode_failure_propagates(tmp_path: Path):
    bad = tmp_path / "notes.png"
    bad.write_text("hello")
    with pytest.raises(DecodeFailed):
        process(bad, ProcessingSettings())


def test_empty_encoder_output_fails(tmp_path: Path):
    src = _source(tmp_path)

    class EmptyEncoder:
        def encode(self, frame, fmt, quality=None):
            return b""

    with pytest.raises(EncodeFailed):
        process(src, ProcessingSettings(target=CustomTarget(10, 10)), encoder=EmptyEncoder())


def test_rasterizer_receives_resolved_geometry(tmp_path: Path):
    src = _source(tmp_path, size=(4000, 2000))
    seen = {}

    class RecordingRasterizer:
        def render(self, image, target, placement, background):
            seen["target"] = target
            seen["placement"] = placement
            return Image.new("RGB", target)

    settings = ProcessingSettings(fit_mode=FitMode.COVER, format=OutputFormat.PNG)
    process(src, settings, rasterizer=RecordingRasterizer()).release()
    assert seen["target"] == (3840, 2160)
    assert tuple(seen["placement"]) == (-240.0, 0.0, 4320.0, 2160.0)


def test_each_call_allocates_its_own_locator(tmp_path: Path):
    src = _source(tmp_path)
    settings = ProcessingSettings(target=CustomTarget(20, 20), format=OutputFormat.PNG)
    first = process(src, settings)
    second = process(src, settings)
    assert first.locator is not second.locator
    assert first.locator.read() == first.data
    first.release()
    assert first.released and not second.released
    second.release()


def test_settings_edit_does_not_touch_previous_result(tmp_path: Path):
    src = _source(tmp_path)
    settings = ProcessingSettings(target=CustomTarget(20, 20), format=OutputFormat.PNG)
    with process(src, settings) as a, process(src, settings.replace(target=CustomTarget(40, 10))) as b:
        assert (a.width, a.height) == (20, 20)
        assert (b.width, b.height) == (40, 10)
        assert a.filename == "photo_20x20_Custom.png"
