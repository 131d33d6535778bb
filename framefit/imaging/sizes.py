from __future__ import annotations
from typing import NamedTuple, Union

from framefit.imaging.presets import preset_size
from framefit.models.errors import InvalidCustomDimensions
from framefit.models.settings import CustomTarget, PresetTarget, ProcessingSettings, Target


class Dimensions(NamedTuple):
    width: int
    height: int

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


def _is_pixel_count(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def resolve_target_dimensions(settings: Union[ProcessingSettings, Target]) -> Dimensions:
    """
    Pixel size of the output frame.

    Preset targets always use the catalog size. Custom targets must carry
    positive whole-pixel width and height, otherwise InvalidCustomDimensions.
    """
    target = settings.target if isinstance(settings, ProcessingSettings) else settings
    if isinstance(target, PresetTarget):
        return Dimensions(*preset_size(target.preset))
    if isinstance(target, CustomTarget):
        if not (_is_pixel_count(target.width) and _is_pixel_count(target.height)):
            raise InvalidCustomDimensions(target.width, target.height)
        return Dimensions(target.width, target.height)
    raise TypeError(f"Unsupported target: {target!r}")
