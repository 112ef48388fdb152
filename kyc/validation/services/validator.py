"""
Complétude d'un FieldMap par rapport aux champs requis d'une face du document.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping

from kyc.core.vocabulary import SIDE_BACK, required_fields

DEFAULT_COMPLETE_THRESHOLD = 85.0


class ValidationTier(str, Enum):
    EXCELLENT = "Excellent"
    COMPLETE = "Complete"
    PARTIAL = "Partial"
    INCOMPLETE = "Incomplete"


class FieldStatus(str, Enum):
    EXCELLENT = "Excellent"
    COMPLETE = "Complete"
    PARTIAL = "Partial"
    NOT_FOUND = "Not Found"


class QualityFeedback(str, Enum):
    POOR = "Poor"
    GOOD = "Good"
    EXCELLENT = "Excellent"


def completeness_percentage(required_count: int, missing_count: int) -> float:
    if required_count <= 0:
        return 0.0
    return 100.0 * (required_count - missing_count) / required_count


def validation_tier(percentage: float) -> ValidationTier:
    if percentage >= 90:
        return ValidationTier.EXCELLENT
    if percentage >= 75:
        return ValidationTier.COMPLETE
    if percentage >= 50:
        return ValidationTier.PARTIAL
    return ValidationTier.INCOMPLETE


def field_status(value) -> FieldStatus:
    # Heuristique de longueur, pas un contrôle d'exactitude
    n = len(value or "")
    if n > 10:
        return FieldStatus.EXCELLENT
    if n > 5:
        return FieldStatus.COMPLETE
    if n > 2:
        return FieldStatus.PARTIAL
    return FieldStatus.NOT_FOUND


def quality_feedback(percentage: float, side: str) -> QualityFeedback:
    """Retour temps réel : le verso (code-barres) tolère des champs manquants."""
    if side == SIDE_BACK:
        if percentage >= 80:
            return QualityFeedback.EXCELLENT
        if percentage >= 50:
            return QualityFeedback.GOOD
        return QualityFeedback.POOR
    if percentage >= 100:
        return QualityFeedback.EXCELLENT
    if percentage >= 70:
        return QualityFeedback.GOOD
    return QualityFeedback.POOR


@dataclass(frozen=True)
class ProgressSnapshot:
    side: str
    required: List[str]
    missing: List[str]
    percentage: float
    tier: ValidationTier
    is_complete: bool
    feedback: QualityFeedback
    field_status: Dict[str, FieldStatus] = field(default_factory=dict)

    def as_dict(self) -> dict:
        return {
            "side": self.side,
            "required": list(self.required),
            "missing": list(self.missing),
            "percentage": round(self.percentage, 2),
            "tier": self.tier.value,
            "is_complete": self.is_complete,
            "feedback": self.feedback.value,
            "field_status": {k: s.value for k, s in self.field_status.items()},
        }


class CompletenessValidator:

    def __init__(self, complete_threshold: float = DEFAULT_COMPLETE_THRESHOLD) -> None:
        self.complete_threshold = complete_threshold

    def evaluate(self, fields: Mapping[str, str], side: str) -> ProgressSnapshot:
        required = required_fields(side)
        missing = [name for name in required if not fields.get(name)]
        pct = completeness_percentage(len(required), len(missing))
        return ProgressSnapshot(
            side=side,
            required=required,
            missing=missing,
            percentage=pct,
            tier=validation_tier(pct),
            is_complete=not missing or pct >= self.complete_threshold,
            feedback=quality_feedback(pct, side),
            field_status={name: field_status(value) for name, value in fields.items()},
        )
