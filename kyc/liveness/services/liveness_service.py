import logging
from typing import Iterable, Optional, Tuple

from kyc.core.frames import Frame
from .provider import BaseFaceDetector, select_detection
from .provider_mock import PrecomputedFaceDetector
from .scorer import LivenessScorer, LivenessResult, EXPECTED_DETECTIONS

log = logging.getLogger("checkid.liveness")


class LivenessService:
    """
    Orchestrateur : détection par frame, une observation par frame avec visage,
    frames hors fenêtre ignorées.
    """
    def __init__(self, detector: Optional[BaseFaceDetector] = None,
                 expected_detections: int = EXPECTED_DETECTIONS) -> None:
        self.detector = detector or PrecomputedFaceDetector()
        self.expected_detections = expected_detections

    def run(self, *, frames: Iterable[Tuple[float, Frame]], duration_s: float) -> LivenessResult:
        """frames : (décalage en secondes depuis le début, frame)."""
        scorer = LivenessScorer(expected_detections=self.expected_detections)
        elapsed = 0.0
        for offset, frame in frames:
            if duration_s <= 0 or offset >= duration_s:
                continue
            elapsed = max(elapsed, offset)
            try:
                detections = self.detector.detect(frame=frame)
            except Exception:
                log.warning("face detector failed on frame %s", frame.index, exc_info=True)
                continue
            scorer.observe(frame.index, select_detection(detections))
        return scorer.score(elapsed_s=elapsed)
