"""
Authenticité heuristique d'un permis à partir des pixels recto (et verso).

Huit composantes 0..100 pondérées : manipulation numérique, artefacts
d'impression, hologramme, éléments de sécurité, cohérence recto/verso,
format, motifs de sécurité, support. Le score global donne un niveau
(Authentic ... Fake Detected) et une confiance.
"""
import logging
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

import numpy as np

from kyc.core.frames import PixelBuffer
from .analyzer import QualityAnalyzer
from .pixels import gather_rgb, grid_offsets, in_bounds, is_degenerate, pixel_array

log = logging.getLogger("checkid.quality")

WEIGHTS: Dict[str, float] = {
    "digital_manipulation": 0.15,
    "printing_artifacts": 0.15,
    "holographic": 0.20,
    "security_features": 0.25,
    "consistency": 0.10,
    "format_validation": 0.10,
    "security_pattern": 0.03,
    "material": 0.02,
}

# sans verso
NEUTRAL_CONSISTENCY = 50.0

CARD_ASPECT_MIN = 1.5
CARD_ASPECT_MAX = 2.0
CARD_ASPECT_TOLERANCE = 0.1


class AuthenticityLevel(str, Enum):
    AUTHENTIC = "Authentic"
    LIKELY_AUTHENTIC = "Likely Authentic"
    SUSPICIOUS = "Suspicious"
    LIKELY_FAKE = "Likely Fake"
    FAKE_DETECTED = "Fake Detected"


# (seuil bas inclus, niveau, confiance), du plus haut au plus bas
LEVELS = (
    (85.0, AuthenticityLevel.AUTHENTIC, "Very High"),
    (70.0, AuthenticityLevel.LIKELY_AUTHENTIC, "High"),
    (55.0, AuthenticityLevel.SUSPICIOUS, "Medium"),
    (40.0, AuthenticityLevel.LIKELY_FAKE, "Low"),
)


def authenticity_level(score: float) -> Tuple[AuthenticityLevel, str]:
    for floor, level, confidence in LEVELS:
        if score >= floor:
            return level, confidence
    return AuthenticityLevel.FAKE_DETECTED, "Very Low"


@dataclass(frozen=True)
class AuthenticityReport:
    digital_manipulation: float
    printing_artifacts: float
    holographic: float
    security_features: float
    consistency: float
    format_validation: float
    security_pattern: float
    material: float
    score: float
    level: AuthenticityLevel
    confidence: str

    def as_dict(self) -> dict:
        d = asdict(self)
        d["level"] = self.level.value
        return d


def weighted_score(components: Dict[str, float]) -> float:
    return sum(components[name] * weight for name, weight in WEIGHTS.items())


def _clamp(value: float) -> float:
    return float(max(0.0, min(100.0, value)))


class _Sampler:
    """Grille d'échantillonnage sur un buffer ; bornes = height * bytes_per_row."""

    def __init__(self, buf: PixelBuffer) -> None:
        self.buf = buf
        self.arr = pixel_array(buf)
        self.total = min(self.arr.size, buf.height * buf.bytes_per_row)

    def cells(self, step: int) -> int:
        return (self.buf.width // step) * (self.buf.height // step)

    def rgb(self, step: int) -> np.ndarray:
        offsets = grid_offsets(self.buf, step)
        return gather_rgb(self.arr, offsets[in_bounds(offsets, self.total)])

    def ratio(self, step: int, predicate: Callable[[np.ndarray], np.ndarray]) -> float:
        """Part des cellules dont l'échantillon vérifie `predicate`."""
        cells = self.cells(step)
        if cells == 0:
            return 0.0
        rgb = self.rgb(step)
        return float(np.count_nonzero(predicate(rgb))) / cells

    def per_cell(self, step: int, values: Callable[[np.ndarray], np.ndarray]) -> float:
        """Somme des valeurs échantillonnées rapportée au nombre de cellules."""
        cells = self.cells(step)
        if cells == 0:
            return 0.0
        return float(values(self.rgb(step)).sum()) / cells


def _brightness(rgb: np.ndarray) -> np.ndarray:
    # division entière
    return rgb.sum(axis=1) // 3


def _color_range(rgb: np.ndarray) -> np.ndarray:
    return rgb.max(axis=1) - rgb.min(axis=1)


def _color_variation(rgb: np.ndarray) -> np.ndarray:
    r, g, b = rgb[:, 0], rgb[:, 1], rgb[:, 2]
    return np.abs(r - g) + np.abs(g - b) + np.abs(b - r)


def _between(lo, hi):
    return lambda rgb: (_brightness(rgb) > lo) & (_brightness(rgb) < hi)


def _outside(lo, hi):
    return lambda rgb: (_brightness(rgb) < lo) | (_brightness(rgb) > hi)


def _variation_between(lo, hi):
    return lambda rgb: (_color_variation(rgb) > lo) & (_color_variation(rgb) < hi)


def _variation_above(lo):
    return lambda rgb: _color_variation(rgb) > lo


def _range_above(lo):
    return lambda rgb: _color_range(rgb) > lo


# (pas, prédicat, multiplicateur) ; chaque contrôle vaut min(100, ratio * mult)
SECURITY_CHECKS = (
    (8, _between(150, 250), 200),           # étoile REAL ID
    (6, _variation_between(30, 100), 180),  # motifs d'État
    (2, _outside(30, 225), 250),            # micro-texte
    (3, _between(80, 220), 200),            # guilloches
    (4, _between(120, 180), 160),           # fil de sécurité
    (5, _range_above(80), 140),             # encre à couleur variable
    (6, _between(140, 220), 120),           # éléments UV
    (2, _outside(50, 200), 180),            # lignes fines
    (4, _between(90, 210), 150),            # anti-copie
    (5, _range_above(60), 130),             # surimpression holographique
)


class AuthenticityAnalyzer:

    def __init__(self, quality: Optional[QualityAnalyzer] = None) -> None:
        self.quality = quality or QualityAnalyzer()

    def analyze(self, front: PixelBuffer, back: Optional[PixelBuffer] = None) -> AuthenticityReport:
        if is_degenerate(front):
            raise ValueError("EMPTY_IMAGE")
        if back is not None and is_degenerate(back):
            back = None

        f = _Sampler(front)
        components = {
            "digital_manipulation": self.digital_manipulation(f),
            "printing_artifacts": self.printing_artifacts(f),
            "holographic": self.holographic(f),
            "security_features": self.security_features(f),
            "consistency": self.consistency(front, back),
            "format_validation": self.format_validation(front, back),
            "security_pattern": _clamp(f.per_cell(8, _brightness) / 2.5),
            "material": _clamp(f.per_cell(10, _brightness) / 2.8),
        }
        score = weighted_score(components)
        level, confidence = authenticity_level(score)
        log.debug("authenticity score=%.1f level=%s", score, level.value)
        return AuthenticityReport(score=score, level=level, confidence=confidence, **components)

    # ------------------------------------------------------------------
    # Composantes
    # ------------------------------------------------------------------
    def digital_manipulation(self, f: _Sampler) -> float:
        compression = _clamp(100 - f.ratio(8, _variation_above(50)) * 100)

        def local_noise(rgb):
            mean = rgb.mean(axis=1, keepdims=True)
            return np.sqrt(((rgb - mean) ** 2).sum(axis=1) / 3.0)

        noise = _clamp(100 - f.per_cell(4, local_noise) / 2)
        edges = _clamp(self._edge_strength(f) / 2)
        return _clamp(100 - (100 - compression) * 0.3 - (100 - noise) * 0.3 - (100 - edges) * 0.4)

    def _edge_strength(self, f: _Sampler) -> float:
        # canal rouge : |c - gauche| + |c - droite|, un pixel sur 4 hors bord
        cells = f.cells(4)
        if cells == 0:
            return 0.0
        buf = f.buf
        cur = grid_offsets(buf, 4, start=1, margin=1)
        left = cur - buf.bytes_per_pixel
        right = cur + buf.bytes_per_pixel
        ok = in_bounds(cur, f.total) & in_bounds(left, f.total) & in_bounds(right, f.total)
        c = f.arr[cur[ok]].astype(np.float64)
        l_ = f.arr[left[ok]].astype(np.float64)
        r = f.arr[right[ok]].astype(np.float64)
        return float((np.abs(c - l_) + np.abs(c - r)).sum()) / cells

    def printing_artifacts(self, f: _Sampler) -> float:
        moire = _clamp(100 - f.ratio(
            8, lambda rgb: (np.abs(rgb[:, 0] - rgb[:, 1]) > 30) & (np.abs(rgb[:, 1] - rgb[:, 2]) > 30),
        ) * 100)
        halftone = _clamp(100 - f.ratio(4, _outside(50, 200)) * 50)
        return _clamp(100 - (100 - moire) * 0.5 - (100 - halftone) * 0.5)

    def holographic(self, f: _Sampler) -> float:
        iridescent = min(100.0, f.ratio(8, _range_above(100)) * 100)
        return _clamp(50 + iridescent * 0.5)

    def security_features(self, f: _Sampler) -> float:
        scores = [min(100.0, f.ratio(step, predicate) * mult) for step, predicate, mult in SECURITY_CHECKS]
        return _clamp(sum(scores) / len(scores))

    def consistency(self, front: PixelBuffer, back: Optional[PixelBuffer]) -> float:
        if back is None:
            return NEUTRAL_CONSISTENCY
        fq = self.quality.analyze(front)
        bq = self.quality.analyze(back)
        drift = (abs(fq.brightness - bq.brightness) + abs(fq.contrast - bq.contrast)
                 + abs(fq.sharpness - bq.sharpness))
        return _clamp(100 - drift / 10 + color_consistency(front, back) * 0.3)

    def format_validation(self, front: PixelBuffer, back: Optional[PixelBuffer]) -> float:
        score = 100.0
        ratios = [front.width / front.height]
        if back is not None:
            ratios.append(back.width / back.height)
        for ratio in ratios:
            if ratio < CARD_ASPECT_MIN or ratio > CARD_ASPECT_MAX:
                score -= 20
        if len(ratios) == 2 and abs(ratios[0] - ratios[1]) > CARD_ASPECT_TOLERANCE:
            score -= 15
        return _clamp(score)


def color_consistency(a: PixelBuffer, b: PixelBuffer) -> float:
    """
    Écart RGB moyen sur le coin haut-gauche commun (un dixième du plus petit côté,
    un pixel sur 4) ; 100 = couleurs identiques.
    """
    size = min(a.width, b.width, a.height, b.height) // 10
    cells = (size // 4) ** 2
    if cells == 0:
        return NEUTRAL_CONSISTENCY
    sa, sb = _Sampler(a), _Sampler(b)
    ys = np.arange(0, size, 4, dtype=np.int64)
    xs = np.arange(0, size, 4, dtype=np.int64)
    oa = (ys[:, None] * a.bytes_per_row + xs[None, :] * a.bytes_per_pixel).ravel()
    ob = (ys[:, None] * b.bytes_per_row + xs[None, :] * b.bytes_per_pixel).ravel()
    ok = in_bounds(oa, sa.total) & in_bounds(ob, sb.total)
    diff = np.abs(gather_rgb(sa.arr, oa[ok]) - gather_rgb(sb.arr, ob[ok])).sum()
    return _clamp(100 - float(diff) / cells / 3)
