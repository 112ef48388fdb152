"""
Contrat provider-agnostic pour la source de capture (caméra, flux vidéo, SDK mobile).
"""
from typing import Callable

from kyc.core.frames import Frame


class ScanNotStarted(Exception):
    """La capture n'a pas pu démarrer (permission, périphérique indisponible)."""


class BaseCaptureSource:
    def start(self, on_frame: Callable[[Frame], None]) -> None:
        """Démarre la production de frames ; lève une exception si impossible."""
        raise NotImplementedError

    def stop(self) -> None:
        raise NotImplementedError
