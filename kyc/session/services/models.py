"""
Objets immuables échangés entre le pipeline frame, la session et l'appelant.
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Tuple

from kyc.quality.services.analyzer import FrameQuality


@dataclass(frozen=True)
class FrameObservation:
    index: int
    side: str
    fields: Dict[str, str]
    confidence: float  # 0..1
    quality: FrameQuality
    text: str = ""
    barcode_detected: bool = False


@dataclass(frozen=True)
class FrameAnalysis:
    index: int
    confidence: float
    quality: str
    barcode_detected: bool
    text_length: int

    @classmethod
    def of(cls, obs: FrameObservation) -> "FrameAnalysis":
        return cls(
            index=obs.index,
            confidence=obs.confidence,
            quality=obs.quality.tier.value,
            barcode_detected=obs.barcode_detected,
            text_length=len(obs.text),
        )

    def as_dict(self) -> dict:
        return {
            "index": self.index,
            "confidence": round(self.confidence, 4),
            "quality": self.quality,
            "barcode_detected": self.barcode_detected,
            "text_length": self.text_length,
        }


@dataclass(frozen=True)
class AggregateResult:
    side: str
    fields: Mapping[str, str]
    field_status: Mapping[str, str]
    required: Tuple[str, ...]
    missing: Tuple[str, ...]
    percentage: float
    tier: str
    is_complete: bool
    overall_quality: float
    frame_count: int
    average_confidence: float
    elapsed_s: float
    frames: Tuple[FrameAnalysis, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # copies en lecture seule : le résultat ne partage rien avec la session
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))
        object.__setattr__(self, "field_status", MappingProxyType(dict(self.field_status)))
        object.__setattr__(self, "required", tuple(self.required))
        object.__setattr__(self, "missing", tuple(self.missing))

    def as_dict(self) -> dict:
        return {
            "side": self.side,
            "fields": dict(self.fields),
            "field_status": dict(self.field_status),
            "required": list(self.required),
            "missing": list(self.missing),
            "percentage": round(self.percentage, 2),
            "tier": self.tier,
            "is_complete": self.is_complete,
            "overall_quality": round(self.overall_quality, 4),
            "frame_count": self.frame_count,
            "average_confidence": round(self.average_confidence, 4),
            "elapsed_s": round(self.elapsed_s, 3),
            "frames": [f.as_dict() for f in self.frames],
        }
