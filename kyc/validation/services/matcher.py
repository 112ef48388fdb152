"""
Cohérence recto (OCR) / verso (code-barres) : score pondéré par champ
+ bonus de mots communs entre textes bruts.
"""
import re
from dataclasses import dataclass, field
from typing import List, Mapping, Tuple

WORD_MATCH_POINTS = 2
WORD_MATCH_CAP = 30

# (clé recto, clé verso, poids)
FIELD_MAPPINGS: List[Tuple[str, str, int]] = [
    ("Name", "First Name", 15),
    ("Name", "Last Name", 15),
    ("Date of Birth", "Date of Birth", 20),
    ("Driver License Number", "License Number", 25),
    ("State", "State", 10),
    ("Address", "Street Address", 8),
    ("Address", "City", 8),
    ("Height", "Height", 12),
    ("Weight", "Weight", 8),
    ("Eye Color", "Eye Color", 8),
    ("Sex", "Sex", 10),
    ("Class", "Class", 5),
    ("Expiration Date", "Expiration Date", 15),
    ("Issue Date", "Issue Date", 10),
]

_NON_ALNUM = re.compile(r"[^a-z0-9]")
_PUNCT = ".,;:!?'\"()[]{}-/"


def normalize(text: str) -> str:
    return _NON_ALNUM.sub("", (text or "").strip().lower())


def levenshtein(a: str, b: str) -> int:
    last = list(range(len(b) + 1))
    for i, ca in enumerate(a):
        cur = [i + 1] + [0] * len(b)
        for j, cb in enumerate(b):
            cur[j + 1] = last[j] if ca == cb else min(last[j], last[j + 1], cur[j]) + 1
        last = cur
    return last[len(b)]


def similarity(a: str, b: str) -> float:
    longer = max(len(a), len(b))
    if longer == 0:
        return 1.0
    return (longer - levenshtein(a, b)) / longer


def significant_words(text: str) -> set:
    return {w.lower() for w in (text or "").split() if len(w.strip(_PUNCT)) >= 3}


def confidence_level(percentage: int) -> str:
    if percentage >= 90:
        return "Very High"
    if percentage >= 75:
        return "High"
    if percentage >= 60:
        return "Medium"
    if percentage >= 40:
        return "Low"
    return "Very Low"


@dataclass
class FieldComparison:
    front_key: str
    back_key: str
    weight: int
    front_value: str
    back_value: str
    similarity: float
    points: int


@dataclass
class MatchResult:
    percentage: int
    score: int
    max_score: int
    word_matches: List[str] = field(default_factory=list)
    comparisons: List[FieldComparison] = field(default_factory=list)

    @property
    def confidence_level(self) -> str:
        return confidence_level(self.percentage)


class DocumentMatcher:

    def match(self, *, front: Mapping[str, str], back: Mapping[str, str],
              front_text: str = "", back_text: str = "") -> MatchResult:
        words = sorted(significant_words(front_text) & significant_words(back_text))
        word_score = min(len(words) * WORD_MATCH_POINTS, WORD_MATCH_CAP)

        total = 0
        max_score = 0
        comparisons: List[FieldComparison] = []
        for front_key, back_key, weight in FIELD_MAPPINGS:
            max_score += weight
            fv = front.get(front_key) or ""
            bv = back.get(back_key) or ""
            if not fv or not bv:
                continue
            nf, nb = normalize(fv), normalize(bv)
            sim = 1.0 if nf == nb else similarity(nf, nb)
            points = weight if nf == nb else int(weight * sim)
            total += points
            comparisons.append(FieldComparison(front_key, back_key, weight, fv, bv, sim, points))

        total += word_score
        max_score += WORD_MATCH_CAP
        pct = int(total / max_score * 100) if max_score else 0
        return MatchResult(percentage=pct, score=total, max_score=max_score,
                           word_matches=words, comparisons=comparisons)
