"""
Qualité optique d'une frame (luminosité, contraste, netteté) à partir des pixels bruts.
Sans état, aucune dépendance inter-frames.
"""
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Dict

import numpy as np

from kyc.core.frames import PixelBuffer
from .pixels import gather_rgb, grid_offsets, in_bounds, is_degenerate, pixel_array, sample_rgb

SAMPLE_STEP = 10
SHARPNESS_STEP = 20


class QualityTier(str, Enum):
    POOR = "Poor"
    FAIR = "Fair"
    GOOD = "Good"
    EXCELLENT = "Excellent"


TIER_SCORES: Dict[QualityTier, float] = {
    QualityTier.EXCELLENT: 1.0,
    QualityTier.GOOD: 0.8,
    QualityTier.FAIR: 0.6,
    QualityTier.POOR: 0.4,
}


@dataclass(frozen=True)
class FrameQuality:
    brightness: float
    contrast: float
    sharpness: float
    tier: QualityTier

    @property
    def score(self) -> float:
        return TIER_SCORES[self.tier]

    def as_dict(self) -> dict:
        d = asdict(self)
        d["tier"] = self.tier.value
        return d


POOR_QUALITY = FrameQuality(brightness=0.0, contrast=0.0, sharpness=0.0, tier=QualityTier.POOR)


def classify(brightness: float, contrast: float, sharpness: float) -> QualityTier:
    score = 0
    if 50 < brightness < 200:
        score += 1
    if contrast > 30:
        score += 1
    if sharpness > 20:
        score += 1
    return [QualityTier.POOR, QualityTier.FAIR, QualityTier.GOOD, QualityTier.EXCELLENT][score]


class QualityAnalyzer:
    """
    Échantillonne un pixel sur 10 (luminosité = moyenne RGB, contraste = max - min),
    puis un sur 20 hors bordure pour la netteté (écarts avec voisins droite/bas).
    Tout accès hors buffer est ignoré.
    """

    def analyze(self, buf: PixelBuffer) -> FrameQuality:
        if is_degenerate(buf):
            return POOR_QUALITY

        rgb = sample_rgb(buf, SAMPLE_STEP)
        if len(rgb):
            brightness = float(rgb.mean(axis=1).mean())
            contrast = float((rgb.max(axis=1) - rgb.min(axis=1)).mean())
        else:
            brightness = contrast = 0.0
        sharpness = self._sharpness(buf)
        return FrameQuality(
            brightness=brightness,
            contrast=contrast,
            sharpness=sharpness,
            tier=classify(brightness, contrast, sharpness),
        )

    def _sharpness(self, buf: PixelBuffer) -> float:
        arr = pixel_array(buf)
        total = min(arr.size, buf.height * buf.bytes_per_row)
        step = SHARPNESS_STEP

        cur = grid_offsets(buf, step, start=step, margin=step)
        right = cur + step * buf.bytes_per_pixel
        bottom = cur + step * buf.bytes_per_row
        ok = in_bounds(cur, total) & in_bounds(right, total) & in_bounds(bottom, total)
        if not ok.any():
            return 0.0

        def lum(offsets):
            return gather_rgb(arr, offsets[ok]).mean(axis=1)

        c = lum(cur)
        return float((np.abs(c - lum(right)) + np.abs(c - lum(bottom))).mean())


def overall_quality_score(qualities) -> float:
    """Moyenne des scores de palier (Excellent 1.0 ... Poor 0.4) ; 0.0 sans frame."""
    scores = [q.score for q in qualities]
    return sum(scores) / len(scores) if scores else 0.0
