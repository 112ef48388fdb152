from typing import List

from kyc.core.frames import Frame, TextCandidate
from .provider import BaseTextRecognizer


class PrecomputedTextRecognizer(BaseTextRecognizer):
    """
    Provider déterministe : renvoie les candidats déjà attachés à la frame
    (reconnaissance faite côté client, ou jeu de test).
    À remplacer par le connecteur moteur réel.
    """
    def recognize(self, *, frame: Frame) -> List[TextCandidate]:
        return list(frame.text_candidates)
