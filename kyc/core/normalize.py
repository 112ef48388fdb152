"""
Normalisation des valeurs extraites (casse, dates, taille, poids, sexe).
Partagée par le décodeur code-barres et l'extracteur OCR.
"""
import re
from typing import Optional

_DIGITS = re.compile(r"^\d+$")
_UPPER_WORD = re.compile(r"^[A-Z]{2,}$")
_MMDDYYYY = re.compile(r"^\d{8}$")
# 5'9"  5'. -09"  5-8  5'
_FEET_INCHES = re.compile(r"""^\s*(\d{1,2})\s*(?:['"]\s*\.?\s*-?|-)\s*(\d{1,2})?\s*"?\s*$""")
_PUNCT = ".,;:!?'\"()[]{}-/"


def _looks_all_caps(word: str) -> bool:
    clean = word.strip(_PUNCT)
    return (
        not clean
        or len(clean) <= 2
        or bool(_DIGITS.match(clean))
        or bool(_UPPER_WORD.match(clean))
    )


def proper_case(text: str) -> str:
    """
    "NEW YORK" -> "New York". Une valeur déjà en casse mixte est rendue telle quelle ;
    les jetons courts (<= 2) et numériques ne sont pas modifiés.
    """
    if not text:
        return text
    words = text.split(" ")
    if not all(_looks_all_caps(w) for w in words):
        return text
    out = []
    for w in words:
        clean = w.strip(_PUNCT)
        if len(clean) <= 2 or _DIGITS.match(clean):
            out.append(w)
        else:
            out.append(w.capitalize())
    return " ".join(out)


def format_date(value: str) -> str:
    """MMDDYYYY -> MM/DD/YYYY ; toute autre forme est conservée."""
    if _MMDDYYYY.match(value or ""):
        return f"{value[:2]}/{value[2:4]}/{value[4:]}"
    return value


def format_sex_code(value: str) -> str:
    # Code AAMVA : 1 = masculin, toute autre valeur = féminin
    return "Male" if value.strip() == "1" else "Female"


def format_sex_letter(letter: str) -> Optional[str]:
    return {"M": "Male", "F": "Female"}.get(letter.upper())


def format_weight(value: str) -> str:
    return f"{value.strip()} lbs"


def inches_to_feet(total: int) -> str:
    return f"{total // 12}'{total % 12}\""


def format_barcode_height(value: str) -> str:
    """DAU : "069 in" / "69" -> 5'9\" ; valeur non numérique conservée."""
    raw = value.replace("in", "").strip()
    if not _DIGITS.match(raw):
        return value
    return inches_to_feet(int(raw))


def format_height(text: str) -> str:
    """
    Hauteur lue sur le recto -> F'I" (N").
    "5'09\"" / "5-8" -> 5'8" (68") ; "68" -> 5'8" (68") ; "5" -> 5'0" (60").
    """
    m = _FEET_INCHES.match(text)
    if m:
        feet, inches = int(m.group(1)), int(m.group(2) or 0)
        return f"{feet}'{inches}\" ({feet * 12 + inches}\")"
    clean = re.sub(r"['\"\s]", "", text)
    if _DIGITS.match(clean):
        n = int(clean)
        if n > 12:
            return f"{inches_to_feet(n)} ({n}\")"
        return f"{n}'0\" ({n * 12}\")"
    return text
