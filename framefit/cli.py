# framefit/cli.py
# Command line front-end: read one image, resize it onto an exact frame,
# write the result next to the others in the output directory.

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from framefit.config import CONFIG_PATH, load_settings, save_settings
from framefit.controllers.job_controller import JobController
from framefit.imaging.presets import PRESET_CHOICES, RESOLUTIONS
from framefit.models.enums import FitMode, OutputFormat, ResolutionPreset
from framefit.models.errors import FrameFitError
from framefit.models.settings import Background, CustomTarget, PresetTarget, ProcessingSettings
from framefit.utils.logging_utils import build_logger, log_section


def _preset_help() -> str:
    lines = []
    for preset, note in PRESET_CHOICES:
        size = "x".join(map(str, RESOLUTIONS[preset])) if preset in RESOLUTIONS else "--width/--height"
        lines.append(f"{preset.name} ({preset.label}, {size}): {note}")
    return "; ".join(lines)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="framefit", description="Resize an image onto an exact output frame.")
    ap.add_argument("-i", "--input", required=True, help="Path to source image")
    ap.add_argument("-o", "--outdir", required=True, help="Output directory")
    ap.add_argument("--preset", type=ResolutionPreset.parse, help=_preset_help())
    ap.add_argument("--width", type=int, help="Custom width in pixels (used unless a fixed --preset is given)")
    ap.add_argument("--height", type=int, help="Custom height in pixels (used unless a fixed --preset is given)")
    ap.add_argument("--format", type=OutputFormat.parse, help="png, jpeg or webp")
    ap.add_argument("--quality", type=float, help="0..1, ignored for PNG")
    ap.add_argument("--fit", type=FitMode.parse, help="contain, cover or stretch")
    ap.add_argument("--background", type=Background.parse, help="Colour such as #000000, white, or 'transparent'")
    ap.add_argument("--config", type=Path, default=CONFIG_PATH, help="Settings file with defaults")
    ap.add_argument("--save-config", action="store_true", help="Store the effective settings as new defaults")
    ap.add_argument("--log-dir", type=Path, default=None, help="Also write a rotating log file here")
    ap.add_argument("-v", "--verbose", action="store_true")
    return ap


def settings_from_args(args: argparse.Namespace, base: ProcessingSettings) -> ProcessingSettings:
    changes = {}
    # an explicit fixed preset wins over --width/--height
    custom = args.preset is None and (args.width is not None or args.height is not None)
    if custom or args.preset is ResolutionPreset.CUSTOM:
        prev = base.target if isinstance(base.target, CustomTarget) else CustomTarget(0, 0)
        changes["target"] = CustomTarget(
            args.width if args.width is not None else prev.width,
            args.height if args.height is not None else prev.height,
        )
    elif args.preset is not None:
        changes["target"] = PresetTarget(args.preset)
    if args.format is not None:
        changes["format"] = args.format
    if args.quality is not None:
        changes["quality"] = args.quality
    if args.fit is not None:
        changes["fit_mode"] = args.fit
    if args.background is not None:
        changes["background"] = args.background
    return base.replace(**changes)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    log = build_logger(level=logging.DEBUG if args.verbose else logging.INFO, log_dir=args.log_dir)

    src = Path(args.input)
    if not src.exists():
        log.error("Input image not found: %s", src)
        return 1

    controller = JobController(log)
    try:
        settings = settings_from_args(args, load_settings(args.config))
        with log_section(f"RESIZE {src.name}", log):
            result = controller.run(src, settings)
            out_path = controller.save(Path(args.outdir))
        log.info("Output: %s (%dx%d, %d bytes)", out_path, result.width, result.height, result.size_bytes)
        if args.save_config:
            save_settings(settings, args.config)
    except (FrameFitError, OSError) as e:
        log.error(str(e))
        return 1
    finally:
        controller.clear()
    return 0


if __name__ == "__main__":
    sys.exit(main())
