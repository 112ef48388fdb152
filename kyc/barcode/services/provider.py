"""
Contrat provider-agnostic pour la lecture de codes-barres.
"""
from typing import List, Optional, Sequence

from kyc.core.frames import Frame, BarcodeCandidate, SYMBOLOGY_PDF417

MIN_FALLBACK_CONFIDENCE = 0.5


class BaseBarcodeRecognizer:
    def recognize(self, *, frame: Frame) -> List[BarcodeCandidate]:
        raise NotImplementedError


def select_candidate(candidates: Sequence[BarcodeCandidate]) -> Optional[BarcodeCandidate]:
    """PDF417 de plus forte confiance, sinon le payload le plus long avec confiance > 0.5."""
    pdf417 = [c for c in candidates if (c.symbology or "").upper() == SYMBOLOGY_PDF417 and c.payload]
    if pdf417:
        return max(pdf417, key=lambda c: c.confidence)
    others = [c for c in candidates if c.payload and c.confidence > MIN_FALLBACK_CONFIDENCE]
    if not others:
        return None
    return max(others, key=lambda c: len(c.payload))
