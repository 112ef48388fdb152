"""
Extraction de champs depuis du texte OCR libre (une frame, ou texte agrégé).
Pour chaque champ : motifs "primaires" ancrés sur un libellé (DOB, EXP, CLASS...),
puis motifs de repli sans libellé. Un champ n'est écrit qu'une fois par appel.
"""
import re
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from kyc.core import vocabulary as v
from kyc.core.normalize import proper_case, format_height, format_sex_letter, format_weight

DATE = r"(\d{1,2}/\d{1,2}/\d{4})"
EYE_COLORS = (
    "BLU|BLUE|BRN|BROWN|GRN|GREEN|GRY|GRAY|HAZ|HAZEL|BLK|BLACK|AMB|AMBER|MUL|MULTI|"
    "PNK|PINK|PUR|PURPLE|MAR|MAROON|DIC|DICHROMATIC"
)
STREET_SUFFIX = r"(?:ST|STREET|AVE|AVENUE|RD|ROAD|DR|DRIVE|BLVD|BOULEVARD|LN|LANE|CT|COURT|WAY|PL|PLACE)"


def _same(value: str) -> str:
    return value.strip()


def _yes(_value: str) -> str:
    return "Yes"


def _not_none(value: str) -> Optional[str]:
    value = value.strip()
    if not value or value in v.SENTINEL_VALUES:
        return None
    return proper_case(value)


@dataclass(frozen=True)
class Rule:
    regex: "re.Pattern"
    fmt: Callable[[str], Optional[str]] = _same
    group: int = 1


@dataclass(frozen=True)
class FieldRules:
    field: str
    primary: Tuple[Rule, ...]
    fallback: Tuple[Rule, ...] = ()


def _r(pattern: str, fmt=_same, group: int = 1, flags: int = 0) -> Rule:
    return Rule(regex=re.compile(pattern, flags), fmt=fmt, group=group)


FIELD_RULES: List[FieldRules] = [
    FieldRules(
        v.NAME,
        primary=(_r(r"\d+\s+([A-Z]+\s+[A-Z]+\s+[A-Z]+)\b", proper_case),),
        fallback=(_r(r"\b([A-Z]+\s+[A-Z]+\s+[A-Z]+)\b", proper_case),),
    ),
    FieldRules(
        v.DATE_OF_BIRTH,
        primary=(_r(r"\bDOB\s*:?\s*" + DATE),),
        fallback=(_r(r"\b" + DATE),),
    ),
    FieldRules(
        v.DRIVER_LICENSE_NUMBER,
        primary=(_r(r"\b(?:DLN|DL|LIC|NO)\.?\s*#?\s*:?\s*([A-Z]\d{6,8})\b"),),
        fallback=(_r(r"\b([A-Z]\d{6,8})\b"),),
    ),
    FieldRules(
        v.STATE,
        primary=(_r(r"\b((?:NEW|NORTH|SOUTH|WEST|RHODE)\s+[A-Z]+|[A-Z]+)\s+DRIVER'?S?\s+LICENSE", proper_case),),
        fallback=(_r(r"\b[A-Z]+,?\s+([A-Z]{2})\s+\d{5}(?:-\d{4})?\b"),),
    ),
    FieldRules(
        v.CLASS,
        primary=(_r(r"\bCLASS\s*:?\s*([A-Z]{1,2})\b"),),
        fallback=(_r(r"\bCLS?\.?\s+([A-Z])\b"),),
    ),
    FieldRules(
        v.ISSUE_DATE,
        primary=(_r(r"\bISS(?:UED)?\s*:?\s*" + DATE),),
        fallback=(_r(r"\b4a\s*:?\s*" + DATE),),
    ),
    FieldRules(
        v.EXPIRATION_DATE,
        primary=(_r(r"\bEXP(?:IRES)?\s*:?\s*" + DATE),),
        fallback=(_r(r"\b4b\s*:?\s*" + DATE),),
    ),
    FieldRules(
        v.SEX,
        primary=(
            _r(r"\bSEX\s*:?\s*([MF])\b", format_sex_letter),
            _r(r"\b([MF])\s+SEX\b", format_sex_letter),
        ),
        fallback=(_r(r"\b([MF])\d", format_sex_letter),),
    ),
    FieldRules(
        v.HEIGHT,
        primary=(_r(r"\bHGT\s*:?\s*(\d{1,2}(?:['\"]\s*\.?\s*-?\s*\d{0,2}\"?|-\d{1,2})?)", format_height),),
        fallback=(_r(r"(\d{1,2}['\"]\s*\.?\s*-?\s*\d{1,2}\")", format_height),),
    ),
    FieldRules(
        v.WEIGHT,
        primary=(_r(r"\bWGT\s*:?\s*(\d{2,3})\b", format_weight),),
        fallback=(_r(r"\b(\d{3})\s?LBS?\b", format_weight, flags=re.IGNORECASE),),
    ),
    FieldRules(
        v.EYE_COLOR,
        primary=(
            _r(r"\bEYES?\.?\s*:?\s*([A-Z]{3,})\b", proper_case),
            _r(r"\b([A-Z]{3,})\s+EYES\b", proper_case),
        ),
        fallback=(_r(r"\b(" + EYE_COLORS + r")\b", proper_case),),
    ),
    FieldRules(v.HAIR_COLOR, primary=(_r(r"\bHAIR\s*:?\s*([A-Z]{3,})\b", proper_case),)),
    FieldRules(v.RESTRICTIONS, primary=(_r(r"\bREST(?:R|RICTIONS)?\s*:?\s*([A-Z0-9]+)\b", _not_none),)),
    FieldRules(v.ENDORSEMENTS, primary=(_r(r"\bEND(?:ORSEMENTS)?\s*:?\s*([A-Z0-9]+)\b", _not_none),)),
    FieldRules("Document Discriminator", primary=(_r(r"\bDD\s*:?\s*(\d+)\b"),)),
    FieldRules("License Type", primary=(_r(r"\bTYPE\s+([A-Z]+)\b"),)),
    FieldRules("Veteran Status", primary=(_r(r"(\bVETERAN\b)", _yes),)),
    FieldRules("Organ Donor", primary=(_r(r"(\bDONOR\b)", _yes),)),
    FieldRules("REAL ID", primary=(_r(r"(\bREAL\s+ID\b)", _yes),)),
]

_STREET = re.compile(r"\b(\d+\s+(?:[A-Z]+\s+){1,4}?" + STREET_SUFFIX + r")\b")
_CITY_STATE_ZIP = re.compile(r"\b([A-Z]+),?\s+([A-Z]{2})\s+(\d{5}(?:-\d{4})?)\b")
_AUDIT = re.compile(r"\b(\d{10})\b")


def _apply(rules: Iterable[Rule], text: str) -> Optional[str]:
    for rule in rules:
        m = rule.regex.search(text)
        if not m:
            continue
        value = rule.fmt(m.group(rule.group))
        if value:
            return value
    return None


class TextFieldExtractor:
    """
    extract(text) -> FieldMap ; extract(text, fields=[...]) restreint aux champs demandés
    (utilisé par le décodeur pour les payloads non étiquetés).
    """

    def __init__(self, rules: Optional[List[FieldRules]] = None) -> None:
        self.rules = rules or FIELD_RULES

    def extract(self, text: str, fields: Optional[Iterable[str]] = None) -> Dict[str, str]:
        wanted = set(fields) if fields is not None else None
        out: Dict[str, str] = {}
        if not text or not text.strip():
            return out

        for fr in self.rules:
            if wanted is not None and fr.field not in wanted:
                continue
            value = _apply(fr.primary, text)
            if value is None:
                value = _apply(fr.fallback, text)
            if value:
                out[fr.field] = value

        if wanted is None or wanted & {v.ADDRESS, v.CITY, v.ZIP_CODE}:
            self._address(text, out, wanted)

        if wanted is None:
            m = _AUDIT.search(text)
            if m and m.group(1) not in out.values():
                out["Audit Number"] = m.group(1)
        return out

    def _address(self, text: str, out: Dict[str, str], wanted) -> None:
        parts: List[str] = []
        street = _STREET.search(text)
        if street:
            parts.append(proper_case(street.group(1)))
        csz = _CITY_STATE_ZIP.search(text)
        if csz:
            city, state, zip_code = csz.groups()
            parts.append(proper_case(city))
            parts.append(f"{state} {zip_code}")
            if wanted is None or v.CITY in wanted:
                out.setdefault(v.CITY, proper_case(city))
            if wanted is None or v.ZIP_CODE in wanted:
                out.setdefault(v.ZIP_CODE, zip_code)
        if parts and (wanted is None or v.ADDRESS in wanted):
            out.setdefault(v.ADDRESS, ", ".join(parts))
