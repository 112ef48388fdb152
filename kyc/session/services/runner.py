"""
Exécution temporisée d'une session de scan.

Un producteur (la source de capture) pousse des frames dans un anneau borné ;
le consommateur se réveille tous les TICK_S, analyse la frame la plus récente
et abandonne les autres. Fin de session : échéance wall-clock, seuil de
complétude atteint ou stop() explicite. La finalisation a lieu une seule fois.
"""
import logging
import queue
import threading
import time
from collections import deque
from typing import Callable, Iterable, Optional

from kyc.core.frames import Frame
from .conf import scan_conf
from .models import AggregateResult
from .provider import BaseCaptureSource, ScanNotStarted
from .session import ScanSession

log = logging.getLogger("checkid.scan")


class FrameRing:
    """Anneau borné de frames récentes ; une lecture ne bloque jamais le producteur."""

    def __init__(self, size: int = 10) -> None:
        self._frames = deque(maxlen=max(1, size))
        self._lock = threading.Lock()
        self.dropped = 0

    def push(self, frame: Frame) -> None:
        with self._lock:
            self._frames.append(frame)

    def take_latest(self) -> Optional[Frame]:
        with self._lock:
            if not self._frames:
                return None
            frame = self._frames.pop()
            self.dropped += len(self._frames)
            self._frames.clear()
            return frame

    def __len__(self) -> int:
        with self._lock:
            return len(self._frames)


def progress_fraction(elapsed_s: float, duration_s: float) -> float:
    if duration_s <= 0:
        return 1.0
    return max(0.0, min(1.0, elapsed_s / duration_s))


class ScanRunner:

    def __init__(self, session: ScanSession, source: BaseCaptureSource, *,
                 duration_s: Optional[float] = None,
                 tick_s: Optional[float] = None,
                 ring_size: Optional[int] = None,
                 stop_when_complete: bool = True,
                 updates: Optional[queue.Queue] = None,
                 clock: Callable[[], float] = time.monotonic) -> None:
        conf = scan_conf()
        self.session = session
        self.source = source
        self.duration_s = conf["DURATION_S"] if duration_s is None else duration_s
        self.tick_s = conf["TICK_S"] if tick_s is None else tick_s
        self.ring = FrameRing(conf["RING_SIZE"] if ring_size is None else ring_size)
        self.stop_when_complete = stop_when_complete
        self.updates = updates if updates is not None else queue.Queue()
        self.clock = clock

        self.started_at: Optional[float] = None
        self._stop = threading.Event()
        self._finish_lock = threading.Lock()
        self._source_stopped = False
        self._thread: Optional[threading.Thread] = None
        self._result: Optional[AggregateResult] = None

    # ------------------------------------------------------------------
    # Cycle de vie
    # ------------------------------------------------------------------
    def start(self) -> None:
        try:
            self.source.start(self.ring.push)
        except Exception as e:
            log.warning("capture source did not start: %s", e)
            raise ScanNotStarted(str(e)) from e
        self.started_at = self.clock()

        if self.duration_s <= 0:
            self._finish()
            return
        self._thread = threading.Thread(target=self._loop, name="checkid-scan", daemon=True)
        self._thread.start()

    def stop(self) -> AggregateResult:
        """Arrêt coopératif ; renvoie le résultat (même objet à chaque appel)."""
        self._stop.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join()
        return self._finish()

    def wait(self, timeout: Optional[float] = None) -> Optional[AggregateResult]:
        if self._thread is not None:
            self._thread.join(timeout)
        return self._result

    @property
    def result(self) -> Optional[AggregateResult]:
        return self._result

    def elapsed(self) -> float:
        if self.started_at is None:
            return 0.0
        return max(0.0, self.clock() - self.started_at)

    def progress(self) -> float:
        return progress_fraction(self.elapsed(), self.duration_s)

    # ------------------------------------------------------------------
    # Consommateur
    # ------------------------------------------------------------------
    def _loop(self) -> None:
        try:
            while not self._stop.is_set():
                if self.elapsed() >= self.duration_s:
                    log.debug("scan deadline reached after %.2fs", self.elapsed())
                    break
                frame = self.ring.take_latest()
                if frame is not None:
                    snap = self.session.ingest(frame)
                    self.updates.put(snap)
                    if self.stop_when_complete and snap.is_complete:
                        log.debug("scan complete at frame %s", frame.index)
                        break
                self._stop.wait(self.tick_s)
        finally:
            self._finish()

    def _finish(self) -> AggregateResult:
        with self._finish_lock:
            if not self._source_stopped:
                self._source_stopped = True
                try:
                    self.source.stop()
                except Exception:
                    log.warning("capture source failed to stop", exc_info=True)
            if self._result is None:
                elapsed = min(self.elapsed(), max(self.duration_s, 0.0))
                self._result = self.session.finalize(elapsed_s=elapsed)
                self.updates.put(self._result)
            return self._result


def run_batch(frames: Iterable[Frame], side: str, *,
              duration_s: Optional[float] = None,
              tick_s: Optional[float] = None,
              stop_when_complete: bool = True,
              session: Optional[ScanSession] = None) -> AggregateResult:
    """
    Rejoue une séquence de frames enregistrée, une par tick : mêmes règles
    d'échéance et d'arrêt que ScanRunner, sans horloge réelle.
    """
    conf = scan_conf()
    duration_s = conf["DURATION_S"] if duration_s is None else duration_s
    tick_s = conf["TICK_S"] if tick_s is None else tick_s
    frames = list(frames)
    if len(frames) > conf["MAX_FRAMES_PER_REQUEST"]:
        raise ValueError("TOO_MANY_FRAMES")

    session = session or ScanSession(
        side,
        complete_threshold=conf["COMPLETE_THRESHOLD"],
        feedback_every=conf["FEEDBACK_EVERY"],
    )
    elapsed = 0.0
    for i, frame in enumerate(frames):
        offset = i * tick_s
        if offset >= duration_s:
            break
        elapsed = offset
        snap = session.ingest(frame)
        if stop_when_complete and snap.is_complete:
            break
    return session.finalize(elapsed_s=elapsed)
