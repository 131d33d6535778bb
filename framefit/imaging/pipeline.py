# framefit/imaging/pipeline.py
# Resize a single image onto an exact output frame:
# - resolve target size (preset catalog or validated custom size)
# - place the source by fit mode (contain / cover / stretch)
# - fill or clear the background, draw, encode, name the result
#
# No state survives between calls. Errors are raised to the caller and
# never logged here.

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from framefit.imaging.codecs import (
    Decoder,
    Encoder,
    PillowDecoder,
    PillowEncoder,
    PillowRasterizer,
    Rasterizer,
    Source,
)
from framefit.imaging.geometry import resolve_placement
from framefit.imaging.naming import derive_filename
from framefit.imaging.sizes import Dimensions, resolve_target_dimensions
from framefit.models.errors import EncodeFailed
from framefit.models.result import ProcessedResult
from framefit.models.settings import Background, ProcessingSettings

log = logging.getLogger("framefit-pipeline")


def effective_background(settings: ProcessingSettings) -> Background:
    return settings.background.effective_for(settings.format)


def _source_name(source: Source) -> Optional[str]:
    if isinstance(source, (str, Path)):
        return Path(source).name
    name = getattr(source, "name", None)
    if isinstance(name, str):
        return Path(name).name
    filename = getattr(source, "filename", None)
    if isinstance(filename, str) and filename:
        return Path(filename).name
    return None


def process(
    source: Source,
    settings: ProcessingSettings,
    filename: Optional[str] = None,
    *,
    decoder: Optional[Decoder] = None,
    rasterizer: Optional[Rasterizer] = None,
    encoder: Optional[Encoder] = None,
) -> ProcessedResult:
    """
    Composite ``source`` onto the frame described by ``settings`` and encode it.

    ``source`` may be raw bytes, a path, a binary file object or an already
    decoded PIL image. ``filename`` names the original for the derived output
    name; when omitted it is taken from the source where possible.

    Raises InvalidCustomDimensions, InvalidDimensions, DecodeFailed or
    EncodeFailed. On failure nothing partial is returned.

    The returned result owns one releasable locator; the caller must call
    ``release()`` on it when done.
    """
    decoder = decoder or PillowDecoder()
    rasterizer = rasterizer or PillowRasterizer()
    encoder = encoder or PillowEncoder()

    if filename is None:
        filename = _source_name(source)

    # Validate the requested size before touching any pixels
    target = resolve_target_dimensions(settings)

    image = decoder.decode(source)
    source_dims = Dimensions(image.width, image.height)

    placement = resolve_placement(source_dims, target, settings.fit_mode)
    log.info(
        "Target: %s (%s, %s), Source: %s",
        target, settings.preset.label, settings.fit_mode.value, source_dims,
    )
    log.debug(
        "Placement: x=%.2f y=%.2f w=%.2f h=%.2f",
        placement.x, placement.y, placement.width, placement.height,
    )

    background = effective_background(settings)
    frame = rasterizer.render(image, target, placement, background)

    data = encoder.encode(frame, settings.format, settings.encoder_quality)
    if not data:
        raise EncodeFailed(f"{settings.format.pil_format} encoder produced no output")

    name = derive_filename(filename, target, settings.preset, settings.format)
    log.info("Encoded %s: %d bytes", name, len(data))
    return ProcessedResult(
        data=data,
        width=target.width,
        height=target.height,
        filename=name,
        format=settings.format,
    )
