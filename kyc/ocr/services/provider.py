"""
Contrat provider-agnostic pour la reconnaissance de texte.
On pourra brancher un vrai moteur (Vision, Tesseract, ML Kit...).
"""
from typing import List, Sequence, Tuple

from kyc.core.frames import Frame, TextCandidate


class BaseTextRecognizer:
    def recognize(self, *, frame: Frame) -> List[TextCandidate]:
        raise NotImplementedError


def join_candidates(candidates: Sequence[TextCandidate]) -> Tuple[str, float]:
    """Texte de la frame (chaînes jointes par un espace) et confiance moyenne."""
    texts = [c.text.strip() for c in candidates if c.text and c.text.strip()]
    if not candidates:
        return "", 0.0
    conf = sum(float(c.confidence) for c in candidates) / len(candidates)
    return " ".join(texts), conf
