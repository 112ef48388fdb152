from typing import List

from kyc.core.frames import Frame, BarcodeCandidate
from .provider import BaseBarcodeRecognizer


class PrecomputedBarcodeRecognizer(BaseBarcodeRecognizer):
    """
    Provider déterministe : renvoie les payloads déjà lus côté client.
    À remplacer par un lecteur PDF417 réel (zxing, pyzbar...).
    """
    def recognize(self, *, frame: Frame) -> List[BarcodeCandidate]:
        return list(frame.barcode_candidates)
