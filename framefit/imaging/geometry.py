# framefit/imaging/geometry.py
# Where the source lands inside the output frame for each fit mode.

from __future__ import annotations

from typing import NamedTuple, Tuple

from framefit.models.enums import FitMode
from framefit.models.errors import InvalidDimensions


class Placement(NamedTuple):
    """Offset and drawn size of the source inside the target frame (floats)."""
    x: float
    y: float
    width: float
    height: float


def _check(dims: Tuple[int, int], what: str) -> Tuple[int, int]:
    w, h = dims
    if not (w > 0 and h > 0):
        raise InvalidDimensions(w, h, what)
    return w, h


def resolve_placement(
    source: Tuple[int, int],
    target: Tuple[int, int],
    fit_mode: FitMode,
) -> Placement:
    """
    Compute the placement rectangle of a source image within a target frame.

    CONTAIN keeps the whole source visible (bars on two sides), COVER fills
    the frame and lets the excess fall outside it, STRETCH ignores the aspect
    ratio. CONTAIN and COVER are centered; equal ratios take the
    height-bound branch.
    """
    src_w, src_h = _check(source, "source")
    dst_w, dst_h = _check(target, "target")

    if fit_mode is FitMode.STRETCH:
        return Placement(0.0, 0.0, float(dst_w), float(dst_h))

    src_ratio = src_w / src_h
    dst_ratio = dst_w / dst_h
    wider = src_ratio > dst_ratio

    if fit_mode is FitMode.CONTAIN:
        width_bound = wider
    elif fit_mode is FitMode.COVER:
        width_bound = not wider
    else:
        raise ValueError(f"Unsupported fit mode: {fit_mode}")

    if width_bound:
        draw_w = float(dst_w)
        draw_h = dst_w / src_ratio
        return Placement(0.0, (dst_h - draw_h) / 2, draw_w, draw_h)

    draw_h = float(dst_h)
    draw_w = dst_h * src_ratio
    return Placement((dst_w - draw_w) / 2, 0.0, draw_w, draw_h)
