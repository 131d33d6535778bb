from __future__ import annotations
from enum import Enum

class FitMode(Enum):
    CONTAIN = "Contain"  # keep aspect ratio, pad to size
    COVER = "Cover"      # fill then crop center
    STRETCH = "Stretch"  # direct resize

    @classmethod
    def parse(cls, value: str) -> "FitMode":
        for mode in cls:
            if value.strip().lower() in (mode.name.lower(), mode.value.lower()):
                return mode
        raise ValueError(f"Unknown fit mode: {value}")

class ResolutionPreset(Enum):
    UHD_4K = "4K UHD"
    QHD_2K = "2K QHD"
    FHD_1080 = "1080p FHD"
    HD_720 = "720p HD"
    CUSTOM = "Custom"

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str) -> "ResolutionPreset":
        key = "".join(value.split()).lower()
        for preset in cls:
            if key in (preset.name.lower(), "".join(preset.value.split()).lower()):
                return preset
        raise ValueError(f"Unknown resolution preset: {value}")

class OutputFormat(Enum):
    PNG = "image/png"
    JPEG = "image/jpeg"
    WEBP = "image/webp"

    @property
    def mime_type(self) -> str:
        return self.value

    @property
    def pil_format(self) -> str:
        return self.name

    @property
    def extension(self) -> str:
        return "jpg" if self is OutputFormat.JPEG else self.name.lower()

    @property
    def supports_alpha(self) -> bool:
        return self is not OutputFormat.JPEG

    @property
    def supports_quality(self) -> bool:
        return self is not OutputFormat.PNG

    @classmethod
    def parse(cls, value: str) -> "OutputFormat":
        key = value.strip().lower().lstrip(".")
        for fmt in cls:
            if key in (fmt.value, fmt.name.lower(), fmt.extension):
                return fmt
        raise ValueError(f"Unsupported output format: {value}")
