# framefit/config.py
# Saved default settings (JSON in the user's home directory).

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from framefit.imaging.presets import preset_size
from framefit.models.enums import FitMode, OutputFormat, ResolutionPreset
from framefit.models.settings import Background, CustomTarget, ProcessingSettings

CONFIG_PATH = Path.home() / ".framefit_config.json"

log = logging.getLogger("framefit-pipeline")


def settings_to_dict(settings: ProcessingSettings) -> Dict[str, Any]:
    target = settings.target
    if isinstance(target, CustomTarget):
        width, height = target.width, target.height
    else:
        width, height = preset_size(target.preset)
    return {
        "preset": settings.preset.name,
        "width": width,
        "height": height,
        "format": settings.format.name,
        "quality": settings.quality,
        "fit_mode": settings.fit_mode.name,
        "background": settings.background.to_string(),
    }


def _text(cfg: Dict[str, Any], key: str) -> str:
    value = cfg[key]
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string, got {value!r}")
    return value


def settings_from_dict(cfg: Dict[str, Any]) -> ProcessingSettings:
    """Missing keys fall back to the defaults; bad values raise ValueError."""
    defaults = ProcessingSettings()
    preset = ResolutionPreset.parse(_text(cfg, "preset")) if "preset" in cfg else defaults.preset
    return ProcessingSettings.from_fields(
        preset=preset,
        width=cfg.get("width", 0),
        height=cfg.get("height", 0),
        format=OutputFormat.parse(_text(cfg, "format")) if "format" in cfg else defaults.format,
        quality=float(cfg.get("quality", defaults.quality)),
        fit_mode=FitMode.parse(_text(cfg, "fit_mode")) if "fit_mode" in cfg else defaults.fit_mode,
        background=Background.parse(_text(cfg, "background")) if "background" in cfg else defaults.background,
    )


def load_settings(path: Optional[Path] = None) -> ProcessingSettings:
    """Load saved settings, or the defaults when there are none usable."""
    path = Path(path) if path is not None else CONFIG_PATH
    if not path.exists():
        return ProcessingSettings()

    try:
        with open(path, "r", encoding="utf-8") as f:
            cfg = json.load(f)
        if not isinstance(cfg, dict):
            raise ValueError("top level must be an object")
        settings = settings_from_dict(cfg)
    except (OSError, ValueError, TypeError) as e:
        log.warning("Could not load config %s: %s", path, e)
        return ProcessingSettings()

    log.info("Configuration loaded from %s", path)
    return settings


def save_settings(settings: ProcessingSettings, path: Optional[Path] = None) -> Path:
    path = Path(path) if path is not None else CONFIG_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(settings_to_dict(settings), f, indent=2)
    log.info("Configuration saved to %s", path)
    return path
