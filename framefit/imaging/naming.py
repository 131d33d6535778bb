from __future__ import annotations
import re
from typing import Optional, Tuple

from framefit.models.enums import OutputFormat, ResolutionPreset

DEFAULT_STEM = "image"


def strip_extension(filename: str) -> str:
    """Drop the last ``.ext`` from a bare file name (``a.tar.gz`` -> ``a.tar``)."""
    return filename.rsplit(".", 1)[0] if "." in filename else filename


def derive_filename(
    original: Optional[str],
    target: Tuple[int, int],
    preset: ResolutionPreset,
    fmt: OutputFormat,
) -> str:
    base = strip_extension(original) if original else DEFAULT_STEM
    tw, th = target
    label = re.sub(r"\s", "", preset.label)
    return f"{base}_{tw}x{th}_{label}.{fmt.extension}"
