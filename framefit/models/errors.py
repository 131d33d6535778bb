from __future__ import annotations


class FrameFitError(Exception):
    """Base class for every failure a processing call can end with."""


class InvalidDimensions(FrameFitError, ValueError):
    """Source or target dimensions are not strictly positive."""

    def __init__(self, width, height, what: str = "image"):
        super().__init__(f"Invalid {what} dimensions: {width}x{height}")
        self.width = width
        self.height = height


class InvalidCustomDimensions(FrameFitError, ValueError):
    """Custom target with a non-positive (or non-integer) width or height."""

    def __init__(self, width, height):
        super().__init__(
            f"Custom size must be positive whole pixels, got {width}x{height}"
        )
        self.width = width
        self.height = height


class InvalidQuality(FrameFitError, ValueError):
    def __init__(self, quality):
        super().__init__(f"Quality must be between 0 and 1, got {quality}")
        self.quality = quality


class DecodeFailed(FrameFitError):
    """The input could not be read as an image."""


class EncodeFailed(FrameFitError, RuntimeError):
    """The encoder produced no output."""
