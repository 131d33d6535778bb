# framefit/imaging/codecs.py
# Pillow-backed decode / rasterize / encode collaborators for the pipeline.
# Anything with the same method signature can be injected instead.

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from typing import BinaryIO, Optional, Protocol, Tuple, Union

from PIL import Image, ImageOps, UnidentifiedImageError

from framefit.imaging.geometry import Placement
from framefit.imaging.sizes import Dimensions
from framefit.models.enums import OutputFormat
from framefit.models.errors import DecodeFailed, EncodeFailed
from framefit.models.settings import Background

RESAMPLE_LANCZOS = Image.Resampling.LANCZOS

log = logging.getLogger("framefit-pipeline")

Source = Union[bytes, bytearray, str, Path, BinaryIO, Image.Image]


class Decoder(Protocol):
    def decode(self, source: Source) -> Image.Image: ...


class Rasterizer(Protocol):
    def render(
        self,
        image: Image.Image,
        target: Dimensions,
        placement: Placement,
        background: Background,
    ) -> Image.Image: ...


class Encoder(Protocol):
    def encode(
        self, frame: Image.Image, fmt: OutputFormat, quality: Optional[float] = None
    ) -> bytes: ...


def to_pil_quality(quality: float) -> int:
    """Map a 0..1 quality onto Pillow's 0..100 scale."""
    return max(0, min(100, int(round(quality * 100))))


class PillowDecoder:
    """
    Reads raw bytes, a path or a binary file object into a loaded image.

    Only the first frame of multi-frame files is kept, and EXIF orientation
    is applied so the natural size matches what a viewer displays.
    """

    def decode(self, source: Source) -> Image.Image:
        if isinstance(source, Image.Image):
            return source
        if isinstance(source, (bytes, bytearray)):
            if not source:
                raise DecodeFailed("No image data")
            source = BytesIO(source)
        try:
            with Image.open(source) as im:
                im.load()
                upright = ImageOps.exif_transpose(im)
                if upright is im:
                    upright = im.copy()
        except UnidentifiedImageError as e:
            raise DecodeFailed("Input is not a recognised image") from e
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            raise DecodeFailed(f"Could not decode image: {e}") from e
        log.debug("Decoded %s image %dx%d", upright.mode, upright.width, upright.height)
        return upright


def _drawable(image: Image.Image) -> Image.Image:
    if image.mode in ("RGB", "RGBA"):
        return image
    if "A" in image.getbands() or "transparency" in image.info:
        return image.convert("RGBA")
    return image.convert("RGB")


def _span(start: float, length: float, limit: int) -> Tuple[int, int]:
    """Whole-pixel [a, b) covering [start, start + length) clipped to [0, limit).

    A sliver that overlaps the frame still gets one pixel.
    """
    lo = max(0.0, start)
    hi = min(float(limit), start + length)
    if hi <= lo:
        return 0, 0
    a, b = round(lo), round(hi)
    if b <= a:
        a = min(int(lo), limit - 1)
        b = a + 1
    return a, b


class PillowRasterizer:
    """Draws the source scaled into its placement on a freshly prepared frame."""

    def __init__(self, resample: Image.Resampling = RESAMPLE_LANCZOS):
        self.resample = resample

    def render(
        self,
        image: Image.Image,
        target: Dimensions,
        placement: Placement,
        background: Background,
    ) -> Image.Image:
        tw, th = target
        if background.is_transparent:
            frame = Image.new("RGBA", (tw, th), (0, 0, 0, 0))
        else:
            frame = Image.new("RGBA", (tw, th), background.rgba)

        # Visible part of the placement, snapped to whole frame pixels.
        # Anything outside the frame (COVER overflow) is never resampled.
        left, right = _span(placement.x, placement.width, tw)
        top, bottom = _span(placement.y, placement.height, th)

        if right > left and bottom > top:
            src = _drawable(image)
            sx = src.width / placement.width
            sy = src.height / placement.height
            box = (
                max(0.0, (left - placement.x) * sx),
                max(0.0, (top - placement.y) * sy),
                min(float(src.width), (right - placement.x) * sx),
                min(float(src.height), (bottom - placement.y) * sy),
            )
            tile = src.resize((right - left, bottom - top), resample=self.resample, box=box)
            if tile.mode == "RGBA" and not background.is_transparent:
                frame.alpha_composite(tile, (left, top))
            else:
                frame.paste(tile, (left, top))

        if not background.is_transparent and background.rgba[3] == 255:
            frame = frame.convert("RGB")
        return frame


class PillowEncoder:
    def encode(
        self, frame: Image.Image, fmt: OutputFormat, quality: Optional[float] = None
    ) -> bytes:
        if not fmt.supports_alpha and frame.mode != "RGB":
            if "A" in frame.getbands():
                # flatten over opaque black, as an alpha-less canvas would
                base = Image.new("RGBA", frame.size, (0, 0, 0, 255))
                base.alpha_composite(frame.convert("RGBA"))
                frame = base
            frame = frame.convert("RGB")

        params = {}
        if fmt.supports_quality and quality is not None:
            params["quality"] = to_pil_quality(quality)

        buffer = BytesIO()
        try:
            frame.save(buffer, format=fmt.pil_format, **params)
        except (OSError, ValueError, KeyError) as e:
            raise EncodeFailed(f"{fmt.pil_format} encoder failed: {e}") from e

        data = buffer.getvalue()
        if not data:
            raise EncodeFailed(f"{fmt.pil_format} encoder produced no output")
        return data
