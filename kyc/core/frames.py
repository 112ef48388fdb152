"""
Frames capturées et sorties brutes des moteurs de reconnaissance (boîtes noires).
"""
from dataclasses import dataclass, field
from typing import Optional, Tuple

SYMBOLOGY_PDF417 = "PDF417"


@dataclass(frozen=True)
class PixelBuffer:
    width: int
    height: int
    bytes_per_row: int
    bytes_per_pixel: int
    data: bytes


@dataclass(frozen=True)
class TextCandidate:
    text: str
    confidence: float  # 0..1


@dataclass(frozen=True)
class BarcodeCandidate:
    payload: str
    symbology: str  # "PDF417" | "QR" | "CODE128" ...
    confidence: float


@dataclass(frozen=True)
class FaceBox:
    # coordonnées normalisées 0..1
    x: float
    y: float
    width: float
    height: float

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def center(self) -> Tuple[float, float]:
        return self.x + self.width / 2.0, self.y + self.height / 2.0


@dataclass(frozen=True)
class FaceDetection:
    box: FaceBox
    confidence: float


@dataclass(frozen=True)
class Frame:
    """
    Une frame émise par la capture. Les candidats peuvent être déjà renseignés
    quand la reconnaissance a tourné côté client (SDK mobile).
    """
    index: int
    pixels: Optional[PixelBuffer] = None
    text_candidates: Tuple[TextCandidate, ...] = field(default_factory=tuple)
    barcode_candidates: Tuple[BarcodeCandidate, ...] = field(default_factory=tuple)
    face_detections: Tuple[FaceDetection, ...] = field(default_factory=tuple)
