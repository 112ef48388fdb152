"""
Session de scan d'une face de document.

La session possède l'historique des FrameObservation et la table FieldEvidence.
Les mises à jour passent par un verrou : un seul écrivain à la fois, même si
l'analyse de la frame suivante tourne en parallèle. La finalisation s'exécute
au plus une fois ; les appels suivants renvoient le même AggregateResult.
"""
import logging
import threading
import time
from collections import OrderedDict
from dataclasses import replace
from typing import Callable, Iterable, List, Optional, Tuple

from kyc.aggregation.services.aggregator import FrameAggregator
from kyc.core.frames import Frame
from kyc.core.vocabulary import SIDE_FRONT
from kyc.ocr.services.extractor import TextFieldExtractor
from kyc.quality.services.analyzer import overall_quality_score
from kyc.validation.services.validator import (
    CompletenessValidator, ProgressSnapshot, QualityFeedback, DEFAULT_COMPLETE_THRESHOLD,
)
from .models import AggregateResult, FrameAnalysis, FrameObservation
from .pipeline import FramePipeline

log = logging.getLogger("checkid.scan")

FEEDBACK_EVERY = 5
TOP_WORDS = 50


def aggregate_text(texts: Iterable[Tuple[str, float]], limit: int = TOP_WORDS) -> str:
    """
    Mots de toutes les frames classés par fréquence, puis par confiance cumulée ;
    à égalité, ordre de première apparition.
    """
    stats: "OrderedDict[str, List[float]]" = OrderedDict()
    for text, confidence in texts:
        for word in text.split():
            s = stats.setdefault(word, [0, 0.0])
            s[0] += 1
            s[1] += confidence
    ranked = sorted(stats.items(), key=lambda kv: (-kv[1][0], -kv[1][1]))
    return " ".join(word for word, _ in ranked[:limit])


class ScanSession:

    def __init__(self, side: str, *,
                 pipeline: Optional[FramePipeline] = None,
                 validator: Optional[CompletenessValidator] = None,
                 complete_threshold: float = DEFAULT_COMPLETE_THRESHOLD,
                 feedback_every: int = FEEDBACK_EVERY,
                 clock: Callable[[], float] = time.monotonic) -> None:
        self.pipeline = pipeline or FramePipeline(side)
        self.side = side
        self.validator = validator or CompletenessValidator(complete_threshold=complete_threshold)
        self.feedback_every = max(1, feedback_every)
        self.clock = clock
        self.started_at = clock()

        self._lock = threading.Lock()
        self._aggregator = FrameAggregator()
        self._observations: List[FrameObservation] = []
        self._feedback = QualityFeedback.POOR
        self._result: Optional[AggregateResult] = None
        log.info("scan session started side=%s", side)

    @property
    def frame_count(self) -> int:
        return len(self._observations)

    @property
    def finalized(self) -> bool:
        return self._result is not None

    def elapsed(self) -> float:
        return max(0.0, self.clock() - self.started_at)

    # ------------------------------------------------------------------
    # Frames
    # ------------------------------------------------------------------
    def ingest(self, frame: Frame) -> ProgressSnapshot:
        return self.add(self.pipeline.process(frame))

    def add(self, obs: FrameObservation) -> ProgressSnapshot:
        with self._lock:
            if self._result is not None:
                log.debug("frame %s ignored: session already finalized", obs.index)
                return self._snapshot()
            self._observations.append(obs)
            self._aggregator.observe_fields(obs.fields, obs.confidence)
            snap = self.validator.evaluate(self._aggregator.best_estimate(), self.side)
            if len(self._observations) % self.feedback_every == 0:
                self._feedback = snap.feedback
            return replace(snap, feedback=self._feedback)

    def progress(self) -> ProgressSnapshot:
        with self._lock:
            return self._snapshot()

    def best_estimate(self):
        with self._lock:
            return self._aggregator.best_estimate()

    def _snapshot(self) -> ProgressSnapshot:
        snap = self.validator.evaluate(self._aggregator.best_estimate(), self.side)
        return replace(snap, feedback=self._feedback)

    # ------------------------------------------------------------------
    # Finalisation
    # ------------------------------------------------------------------
    def finalize(self, elapsed_s: Optional[float] = None) -> AggregateResult:
        with self._lock:
            if self._result is not None:
                return self._result
            self._result = self._build(self.elapsed() if elapsed_s is None else elapsed_s)
        log.info(
            "scan session finalized side=%s frames=%d completeness=%.1f%% tier=%s",
            self.side, self._result.frame_count, self._result.percentage, self._result.tier,
        )
        return self._result

    def _build(self, elapsed_s: float) -> AggregateResult:
        fields = self._aggregator.best_estimate()
        if self.side == SIDE_FRONT:
            self._fill_from_aggregated_text(fields)

        snap = self.validator.evaluate(fields, self.side)
        obs = self._observations
        avg_conf = sum(o.confidence for o in obs) / len(obs) if obs else 0.0
        return AggregateResult(
            side=self.side,
            fields=fields,
            field_status={k: s.value for k, s in snap.field_status.items()},
            required=snap.required,
            missing=snap.missing,
            percentage=snap.percentage,
            tier=snap.tier.value,
            is_complete=snap.is_complete,
            overall_quality=overall_quality_score(o.quality for o in obs),
            frame_count=len(obs),
            average_confidence=avg_conf,
            elapsed_s=elapsed_s,
            frames=tuple(FrameAnalysis.of(o) for o in obs),
        )

    def _fill_from_aggregated_text(self, fields) -> None:
        # Complète uniquement les champs sans évidence
        text = aggregate_text((o.text, o.confidence) for o in self._observations if o.text)
        if not text:
            return
        extractor = getattr(self.pipeline, "extractor", None) or TextFieldExtractor()
        for key, value in extractor.extract(text).items():
            if value and not fields.get(key):
                fields[key] = value
