"""
Analyse d'une frame : qualité optique + décodage selon la face scannée.
Recto : texte reconnu -> TextFieldExtractor. Verso : code-barres -> BarcodeFieldDecoder.
Une défaillance moteur donne une observation vide, jamais une erreur de session.
"""
import logging
from typing import Dict, Optional, Tuple

from kyc.core.frames import Frame
from kyc.core.vocabulary import SIDE_BACK, required_fields
from kyc.barcode.services.decoder import BarcodeFieldDecoder
from kyc.barcode.services.provider import BaseBarcodeRecognizer, select_candidate
from kyc.barcode.services.provider_mock import PrecomputedBarcodeRecognizer
from kyc.ocr.services.extractor import TextFieldExtractor
from kyc.ocr.services.provider import BaseTextRecognizer, join_candidates
from kyc.ocr.services.provider_mock import PrecomputedTextRecognizer
from kyc.quality.services.analyzer import QualityAnalyzer, POOR_QUALITY
from .models import FrameObservation

log = logging.getLogger("checkid.scan")


class FramePipeline:

    def __init__(self, side: str, *,
                 text_recognizer: Optional[BaseTextRecognizer] = None,
                 barcode_recognizer: Optional[BaseBarcodeRecognizer] = None,
                 analyzer: Optional[QualityAnalyzer] = None,
                 extractor: Optional[TextFieldExtractor] = None,
                 decoder: Optional[BarcodeFieldDecoder] = None) -> None:
        required_fields(side)  # INVALID_SIDE
        self.side = side
        self.text_recognizer = text_recognizer or PrecomputedTextRecognizer()
        self.barcode_recognizer = barcode_recognizer or PrecomputedBarcodeRecognizer()
        self.analyzer = analyzer or QualityAnalyzer()
        self.extractor = extractor or TextFieldExtractor()
        self.decoder = decoder or BarcodeFieldDecoder(extractor=self.extractor)

    def process(self, frame: Frame) -> FrameObservation:
        quality = self.analyzer.analyze(frame.pixels) if frame.pixels is not None else POOR_QUALITY
        text = ""
        barcode = False
        if self.side == SIDE_BACK:
            fields, confidence, barcode = self._back(frame)
        else:
            fields, confidence, text = self._front(frame)
        return FrameObservation(
            index=frame.index,
            side=self.side,
            fields=fields,
            confidence=confidence,
            quality=quality,
            text=text,
            barcode_detected=barcode,
        )

    def _back(self, frame: Frame) -> Tuple[Dict[str, str], float, bool]:
        try:
            candidates = self.barcode_recognizer.recognize(frame=frame)
        except Exception:
            log.warning("barcode recognizer failed on frame %s", frame.index, exc_info=True)
            return {}, 0.0, False
        chosen = select_candidate(candidates)
        if chosen is None:
            return {}, 0.0, False
        return self.decoder.decode(chosen.payload), float(chosen.confidence), True

    def _front(self, frame: Frame) -> Tuple[Dict[str, str], float, str]:
        try:
            candidates = self.text_recognizer.recognize(frame=frame)
        except Exception:
            log.warning("text recognizer failed on frame %s", frame.index, exc_info=True)
            return {}, 0.0, ""
        text, confidence = join_candidates(candidates)
        if not text:
            return {}, confidence, ""
        return self.extractor.extract(text), confidence, text
