from typing import List

from kyc.core.frames import Frame, FaceDetection
from .provider import BaseFaceDetector


class PrecomputedFaceDetector(BaseFaceDetector):
    """
    Provider déterministe : renvoie les détections déjà attachées à la frame.
    À remplacer par le moteur réel.
    """
    def detect(self, *, frame: Frame) -> List[FaceDetection]:
        return list(frame.face_detections)
