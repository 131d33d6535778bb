from __future__ import annotations
from dataclasses import dataclass, replace as _replace
from typing import Optional, Tuple, Union

from PIL import ImageColor

from .enums import FitMode, OutputFormat, ResolutionPreset
from .errors import InvalidQuality

TRANSPARENT = "transparent"

RGBA = Tuple[int, int, int, int]


@dataclass(frozen=True)
class Background:
    """Solid RGBA fill, or transparent when ``rgba`` is None."""
    rgba: Optional[RGBA] = (0, 0, 0, 255)

    @property
    def is_transparent(self) -> bool:
        return self.rgba is None

    @classmethod
    def parse(cls, value: str) -> "Background":
        text = value.strip()
        if text.lower() == TRANSPARENT:
            return cls(None)
        return cls(tuple(ImageColor.getcolor(text, "RGBA")))

    def effective_for(self, fmt: OutputFormat) -> "Background":
        # formats without an alpha channel render transparency as black
        if self.is_transparent and not fmt.supports_alpha:
            return BLACK
        return self

    def to_string(self) -> str:
        if self.rgba is None:
            return TRANSPARENT
        r, g, b, a = self.rgba
        if a == 255:
            return f"#{r:02x}{g:02x}{b:02x}"
        return f"#{r:02x}{g:02x}{b:02x}{a:02x}"


BLACK = Background((0, 0, 0, 255))
CLEAR = Background(None)


@dataclass(frozen=True)
class PresetTarget:
    preset: ResolutionPreset

    def __post_init__(self):
        if self.preset is ResolutionPreset.CUSTOM:
            raise ValueError("Use CustomTarget for caller-supplied sizes")

    @property
    def label(self) -> str:
        return self.preset.label


@dataclass(frozen=True)
class CustomTarget:
    width: int
    height: int

    preset = ResolutionPreset.CUSTOM

    @property
    def label(self) -> str:
        return self.preset.label


Target = Union[PresetTarget, CustomTarget]


@dataclass(frozen=True)
class ProcessingSettings:
    target: Target = PresetTarget(ResolutionPreset.UHD_4K)
    format: OutputFormat = OutputFormat.JPEG
    quality: float = 0.9
    fit_mode: FitMode = FitMode.CONTAIN
    background: Background = BLACK

    def __post_init__(self):
        if isinstance(self.quality, bool) or not 0.0 <= self.quality <= 1.0:
            raise InvalidQuality(self.quality)

    @property
    def preset(self) -> ResolutionPreset:
        return self.target.preset

    @property
    def encoder_quality(self) -> Optional[float]:
        """Quality handed to the encoder; None where the format ignores it."""
        return self.quality if self.format.supports_quality else None

    def replace(self, **changes) -> "ProcessingSettings":
        return _replace(self, **changes)

    @classmethod
    def from_fields(
        cls,
        preset: ResolutionPreset,
        width: int = 0,
        height: int = 0,
        format: OutputFormat = OutputFormat.JPEG,
        quality: float = 0.9,
        fit_mode: FitMode = FitMode.CONTAIN,
        background: Union[Background, str] = BLACK,
    ) -> "ProcessingSettings":
        """Build settings from a flat record; width/height only count for CUSTOM."""
        if preset is ResolutionPreset.CUSTOM:
            target: Target = CustomTarget(width, height)
        else:
            target = PresetTarget(preset)
        if isinstance(background, str):
            background = Background.parse(background)
        return cls(
            target=target,
            format=format,
            quality=quality,
            fit_mode=fit_mode,
            background=background,
        )
