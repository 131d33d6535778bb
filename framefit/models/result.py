"""Output of one processing call."""

from __future__ import annotations

from dataclasses import dataclass, field
from io import BytesIO

from .enums import OutputFormat


@dataclass
class ProcessedResult:
    """
    Encoded image plus the metadata a caller needs to show or save it.

    Attributes:
        data: Encoded bytes in ``format``
        width: Output width in pixels
        height: Output height in pixels
        filename: Derived save-as name
        format: Output format used for ``data``
        locator: In-memory stream over ``data`` for display. Every
            successful call allocates exactly one; the caller releases it
            with ``release()`` (or by using the result as a context manager)
            before dropping the result.
    """
    data: bytes
    width: int
    height: int
    filename: str
    format: OutputFormat
    locator: BytesIO = field(init=False, repr=False)

    def __post_init__(self):
        self.locator = BytesIO(self.data)

    @property
    def size_bytes(self) -> int:
        return len(self.data)

    @property
    def mime_type(self) -> str:
        return self.format.mime_type

    @property
    def released(self) -> bool:
        return self.locator.closed

    def release(self) -> None:
        self.locator.close()

    def __enter__(self) -> "ProcessedResult":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.release()
        return False
