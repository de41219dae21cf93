from dataclasses import dataclass


@dataclass(frozen=True)
class OcrResult:
    """Text read from one document plus a [0, 1] read-quality estimate."""

    text: str
    quality: float
    engine: str = ""
