"""
Fusion des FieldMaps d'une session, frame après frame.

Pour chaque observation (clé, valeur, confiance) :
- clé inconnue : insertion (valeur, confiance, 1) ;
- sinon la valeur est remplacée si la confiance est strictement supérieure,
  ou égale avec une valeur strictement plus longue ; le compteur est toujours incrémenté.
À confiance et longueur égales, la première valeur vue est conservée.
"""
from dataclasses import dataclass
from typing import Dict, Iterable, Mapping


@dataclass
class FieldEvidence:
    value: str
    confidence: float
    count: int = 1

    def observe(self, value: str, confidence: float) -> bool:
        self.count += 1
        if confidence > self.confidence or (confidence == self.confidence and len(value) > len(self.value)):
            self.value = value
            self.confidence = confidence
            return True
        return False


class FrameAggregator:
    """Table FieldEvidence d'une session. Non thread-safe : un seul écrivain."""

    def __init__(self) -> None:
        self._evidence: Dict[str, FieldEvidence] = {}

    def observe(self, key: str, value: str, confidence: float) -> None:
        if not key or value is None:
            return
        value = str(value).strip()
        if not value:
            return
        confidence = float(confidence)
        ev = self._evidence.get(key)
        if ev is None:
            self._evidence[key] = FieldEvidence(value=value, confidence=confidence)
        else:
            ev.observe(value, confidence)

    def observe_fields(self, fields: Mapping[str, str], confidence: float) -> None:
        for key, value in fields.items():
            self.observe(key, value, confidence)

    def observe_all(self, observations: Iterable) -> None:
        """observations : itérable de (clé, valeur, confiance)."""
        for key, value, confidence in observations:
            self.observe(key, value, confidence)

    def best_estimate(self) -> Dict[str, str]:
        return {k: ev.value for k, ev in self._evidence.items()}

    def evidence(self, key: str):
        return self._evidence.get(key)

    def __len__(self) -> int:
        return len(self._evidence)
