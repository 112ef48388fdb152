"""
Contrat provider-agnostic pour la détection de visage.
On pourra brancher un vrai provider (Vision, MediaPipe, SDK cloud).
"""
from typing import List, Optional, Sequence

from kyc.core.frames import Frame, FaceDetection


class BaseFaceDetector:
    def detect(self, *, frame: Frame) -> List[FaceDetection]:
        raise NotImplementedError


def select_detection(detections: Sequence[FaceDetection]) -> Optional[FaceDetection]:
    """Détection de plus forte confiance (la première en cas d'égalité)."""
    best = None
    for d in detections:
        if best is None or d.confidence > best.confidence:
            best = d
    return best
