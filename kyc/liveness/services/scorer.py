"""
Score de liveness sur une session de durée fixe (une détection retenue par frame).
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional

from kyc.core.frames import FaceDetection

EXPECTED_DETECTIONS = 50


class FaceQualityTier(str, Enum):
    POOR = "Poor"
    FAIR = "Fair"
    GOOD = "Good"
    EXCELLENT = "Excellent"


TIER_SCORES: Dict[FaceQualityTier, float] = {
    FaceQualityTier.EXCELLENT: 1.0,
    FaceQualityTier.GOOD: 0.8,
    FaceQualityTier.FAIR: 0.6,
    FaceQualityTier.POOR: 0.4,
}


def _clamp(x: float, lo: float = 0.0, hi: float = 1.0) -> float:
    return max(lo, min(hi, x))


def face_quality(detection: FaceDetection) -> FaceQualityTier:
    """Moyenne de (confiance, taille = aire*4 plafonnée à 1, centrage)."""
    size = min(detection.box.area * 4.0, 1.0)
    cx, cy = detection.box.center
    centering = max(0.0, 1.0 - (abs(cx - 0.5) + abs(cy - 0.5)))
    q = (detection.confidence + size + centering) / 3.0
    if q > 0.8:
        return FaceQualityTier.EXCELLENT
    if q > 0.6:
        return FaceQualityTier.GOOD
    if q > 0.4:
        return FaceQualityTier.FAIR
    return FaceQualityTier.POOR


@dataclass(frozen=True)
class FaceObservation:
    frame_index: int
    detection: FaceDetection
    quality: FaceQualityTier

    @property
    def confidence(self) -> float:
        return self.detection.confidence


@dataclass(frozen=True)
class LivenessResult:
    score: float
    detections: int
    average_confidence: float
    quality: FaceQualityTier
    elapsed_s: float = 0.0

    def as_dict(self) -> dict:
        return {
            "score": round(self.score, 4),
            "detections": self.detections,
            "average_confidence": round(self.average_confidence, 4),
            "quality": self.quality.value,
            "elapsed_s": round(self.elapsed_s, 3),
        }


def overall_tier(count: int, mean_conf: float) -> FaceQualityTier:
    if count >= 30 and mean_conf > 0.8:
        return FaceQualityTier.EXCELLENT
    if count >= 20 and mean_conf > 0.6:
        return FaceQualityTier.GOOD
    if count >= 10 and mean_conf > 0.4:
        return FaceQualityTier.FAIR
    return FaceQualityTier.POOR


class LivenessScorer:

    def __init__(self, expected_detections: int = EXPECTED_DETECTIONS) -> None:
        self.expected_detections = max(1, expected_detections)
        self.observations: List[FaceObservation] = []

    def observe(self, frame_index: int, detection: Optional[FaceDetection]) -> Optional[FaceObservation]:
        if detection is None:
            return None
        obs = FaceObservation(frame_index=frame_index, detection=detection, quality=face_quality(detection))
        self.observations.append(obs)
        return obs

    def score(self, observations: Optional[Iterable[FaceObservation]] = None, elapsed_s: float = 0.0) -> LivenessResult:
        obs = list(self.observations if observations is None else observations)
        if not obs:
            return LivenessResult(score=0.0, detections=0, average_confidence=0.0,
                                  quality=FaceQualityTier.POOR, elapsed_s=elapsed_s)
        n = len(obs)
        mean_conf = sum(o.confidence for o in obs) / n
        mean_quality = sum(TIER_SCORES[o.quality] for o in obs) / n
        frequency = min(n / self.expected_detections, 1.0)
        raw = 0.4 * mean_conf + 0.3 * frequency + 0.3 * mean_quality
        return LivenessResult(
            score=_clamp(raw),
            detections=n,
            average_confidence=mean_conf,
            quality=overall_tier(n, mean_conf),
            elapsed_s=elapsed_s,
        )
