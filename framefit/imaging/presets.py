from __future__ import annotations
from typing import Dict, List, Tuple
from framefit.models.enums import ResolutionPreset

RESOLUTIONS: Dict[ResolutionPreset, Tuple[int, int]] = {
    ResolutionPreset.UHD_4K: (3840, 2160),
    ResolutionPreset.QHD_2K: (2560, 1440),
    ResolutionPreset.FHD_1080: (1920, 1080),
    ResolutionPreset.HD_720: (1280, 720),
}

PRESET_CHOICES: List[Tuple[ResolutionPreset, str]] = [
    (ResolutionPreset.UHD_4K, "Ultra HD displays and large wallpapers"),
    (ResolutionPreset.QHD_2K, "1440p monitors"),
    (ResolutionPreset.FHD_1080, "Full HD, the common desktop size"),
    (ResolutionPreset.HD_720, "Small screens, fast to share"),
    (ResolutionPreset.CUSTOM, "Any width and height in pixels"),
]

def preset_size(preset: ResolutionPreset) -> Tuple[int, int]:
    return RESOLUTIONS[preset]
