import threading
from typing import Callable, Optional, Sequence

from kyc.core.frames import Frame
from .provider import BaseCaptureSource


class ReplayCaptureSource(BaseCaptureSource):
    """
    Source déterministe : rejoue une liste de frames dans un thread producteur,
    une toutes les interval_s secondes. loop=True rejoue indéfiniment jusqu'à stop().
    """
    def __init__(self, frames: Sequence[Frame], interval_s: float = 0.01, loop: bool = False) -> None:
        self.frames = list(frames)
        self.interval_s = interval_s
        self.loop = loop
        self.produced = 0
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self, on_frame: Callable[[Frame], None]) -> None:
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, args=(on_frame,), daemon=True)
        self._thread.start()

    def _run(self, on_frame: Callable[[Frame], None]) -> None:
        i = 0
        while self.frames and not self._stop.is_set():
            if i >= len(self.frames) and not self.loop:
                break
            src = self.frames[i % len(self.frames)]
            on_frame(Frame(
                index=i,
                pixels=src.pixels,
                text_candidates=src.text_candidates,
                barcode_candidates=src.barcode_candidates,
                face_detections=src.face_detections,
            ))
            self.produced += 1
            i += 1
            self._stop.wait(self.interval_s)

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout=1.0)


class UnavailableCaptureSource(BaseCaptureSource):
    """Source qui refuse de démarrer (permission caméra refusée)."""
    def start(self, on_frame: Callable[[Frame], None]) -> None:
        raise PermissionError("camera access denied")

    def stop(self) -> None:
        pass
