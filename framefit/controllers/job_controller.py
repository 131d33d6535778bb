from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional
from framefit.imaging.codecs import Source
from framefit.imaging.pipeline import process
from framefit.models.result import ProcessedResult
from framefit.models.settings import ProcessingSettings

def unique_output_path(out_dir: Path, filename: str) -> Path:
    out = out_dir / filename
    stem, suffix = out.stem, out.suffix
    i = 1
    while out.exists():
        out = out_dir / f"{stem}_{i}{suffix}"
        i += 1
    return out

class JobController:
    """
    Keeps the latest result for a caller and releases the one it replaces.

    The pipeline allocates one locator per successful call; holding results
    here means at most one is alive at a time.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger("framefit-pipeline")
        self.result: Optional[ProcessedResult] = None

    def run(self, source: Source, settings: ProcessingSettings, filename: Optional[str] = None) -> ProcessedResult:
        result = process(source, settings, filename)
        self.clear()
        self.result = result
        return result

    def clear(self) -> None:
        if self.result is not None:
            self.result.release()
            self.result = None

    def save(self, out_dir: Path) -> Path:
        if self.result is None:
            raise RuntimeError("Nothing to save; run a job first")
        out_dir = Path(out_dir)
        out_dir.mkdir(parents=True, exist_ok=True)
        out_path = unique_output_path(out_dir, self.result.filename)
        out_path.write_bytes(self.result.data)
        self.logger.info("Saved %s (%d bytes)", out_path, self.result.size_bytes)
        return out_path
