"""
Décodage d'un payload code-barres (PDF417 de permis) en FieldMap.

Trois formes, tentées dans cet ordre :
1. ANSI multi-lignes (marqueur "ANSI") : une ligne par élément, dernier gagnant.
2. AAMVA préfixé "^" : éléments séparés par "$", dernier gagnant.
3. Brut / non étiqueté : motifs OCR, puis recherche des codes par délimiteur,
   puis segmentation sans délimiteur ; premier gagnant sur l'ensemble des passes.
Une forme qui ne produit aucun champ laisse la main à la suivante.
"""
import logging
import re
from typing import Dict, List, Optional, Tuple

from kyc.core import vocabulary as v
from kyc.ocr.services.extractor import TextFieldExtractor
from .element_codes import ELEMENTS, KNOWN_CODES, is_sentinel, plausible_value, unknown_code_name

log = logging.getLogger("checkid.barcode")

SHAPE_ANSI = "ansi"
SHAPE_AAMVA = "aamva"
SHAPE_RAW = "raw"

RAW_DELIMITERS = ("\n", "\r", " ", "$", "^", "|")
RAW_PATTERN_FIELDS = (
    v.NAME, v.DATE_OF_BIRTH, v.DRIVER_LICENSE_NUMBER, v.STATE, v.HEIGHT, v.WEIGHT, v.EYE_COLOR,
)

_HEADER_LICENSE = re.compile(r"DAQ([A-Z]?\d+)")
_HEADER_ELEMENTS = re.compile(r"DL(?=(?:" + "|".join(KNOWN_CODES) + r"))")
_AAMVA_LICENSE = re.compile(r"([A-Z]?\d{7})$")
_CODE = re.compile(r"^[A-Z]{3}$")
_ALNUM_RUN = re.compile(r"[A-Za-z0-9]+")


def segment_elements(run: str) -> List[Tuple[str, str]]:
    """
    Découpe une suite alphanumérique sans délimiteur en (code, valeur).

    Chaque position où commence un code connu est une frontière possible ;
    on retient la segmentation qui maximise le nombre de valeurs
    vraisemblables moins le nombre de valeurs invraisemblables, à score égal
    la moins fragmentée. Seules les valeurs vraisemblables sont renvoyées.
    """
    n = len(run)
    starts = [i for i in range(n - 2) if run[i:i + 3] in ELEMENTS]
    best: Dict[int, Tuple[int, int, List[Tuple[str, str]]]] = {n: (0, 0, [])}
    for i in reversed(starts):
        code = run[i:i + 3]
        chosen = None
        for j in [s for s in starts if s >= i + 4] + [n]:
            value = run[i + 3:j]
            ok = plausible_value(code, value)
            score, count, pairs = best[j]
            cand = (score + (1 if ok else -1), count - 1, ([(code, value)] if ok else []) + pairs)
            if chosen is None or cand[:2] > chosen[:2]:
                chosen = cand
        best[i] = chosen
    top = max((best[i] for i in starts), key=lambda c: c[:2], default=(0, 0, []))
    return top[2] if top[0] > 0 else []


def put(fields: Dict[str, str], name: str, value: Optional[str], *, overwrite: bool) -> None:
    """Écrit une valeur non vide ; overwrite=False => premier gagnant."""
    if not value:
        return
    if not overwrite and fields.get(name):
        return
    fields[name] = value


def aamva_license(value: str) -> str:
    # Numéro de permis : suffixe [A-Z]?\d{7}, sinon 7 derniers caractères
    value = value.strip()
    m = _AAMVA_LICENSE.search(value)
    if m:
        return m.group(1)
    return value[-7:] if len(value) >= 7 else value


class BarcodeFieldDecoder:

    def __init__(self, extractor: Optional[TextFieldExtractor] = None) -> None:
        self.extractor = extractor or TextFieldExtractor()

    # ------------------------------------------------------------------
    # API
    # ------------------------------------------------------------------
    def decode(self, payload: str) -> Dict[str, str]:
        """FieldMap canonique (clés natives conservées)."""
        native, _shape = self.decode_native(payload)
        return to_canonical(native)

    def decode_native(self, payload: str):
        """(FieldMap natif du décodeur, forme retenue)."""
        if not payload or not payload.strip():
            return {}, None

        if "ANSI" in payload:
            fields = self._decode_ansi(payload)
            if fields:
                log.debug("barcode decoded as ANSI (%d fields)", len(fields))
                return fields, SHAPE_ANSI

        if payload.lstrip().startswith("^"):
            fields = self._decode_aamva(payload.lstrip())
            if fields:
                log.debug("barcode decoded as AAMVA (%d fields)", len(fields))
                return fields, SHAPE_AAMVA

        fields = self._decode_raw(payload)
        log.debug("barcode decoded as raw (%d fields)", len(fields))
        return fields, SHAPE_RAW

    # ------------------------------------------------------------------
    # Éléments
    # ------------------------------------------------------------------
    def _element(self, fields: Dict[str, str], code: str, value: str, *,
                 overwrite: bool, capture_unknown: bool) -> None:
        el = ELEMENTS.get(code)
        if el is None:
            if capture_unknown and _CODE.match(code) and len(value.strip()) > 2 and not is_sentinel(value):
                put(fields, unknown_code_name(code), value.strip(), overwrite=overwrite)
            return
        if not value.strip() or is_sentinel(value):
            return
        put(fields, el.field, el.transform(value), overwrite=overwrite)

    def _decode_ansi(self, payload: str) -> Dict[str, str]:
        fields: Dict[str, str] = {}
        header_license = None
        for line in re.split(r"\r\n|\n|\r", payload):
            line = line.strip()
            if "ANSI" in line:
                # En-tête : "ANSI 6360...DL...DAQ<lettre?><chiffres>[<éléments>]"
                if "DL" in line:
                    m = _HEADER_LICENSE.search(line)
                    if m:
                        header_license = m.group(1)
                        put(fields, v.LICENSE_NUMBER, header_license, overwrite=True)
                    tails = list(_HEADER_ELEMENTS.finditer(line))
                    if tails:
                        for run in _ALNUM_RUN.findall(line[tails[-1].end():]):
                            for code, value in segment_elements(run):
                                if code in ("DCA", "DAQ") and header_license:
                                    continue
                                self._element(fields, code, value, overwrite=True, capture_unknown=False)
                continue
            if len(line) < 3:
                continue
            code, value = line[:3], line[3:]
            if code in ("DCA", "DAQ") and header_license:
                continue
            self._element(fields, code, value, overwrite=True, capture_unknown=True)
        return fields

    def _decode_aamva(self, payload: str) -> Dict[str, str]:
        fields: Dict[str, str] = {}
        for comp in payload.lstrip("^").split("$"):
            comp = comp.strip()
            if len(comp) < 3:
                continue
            code, value = comp[:3], comp[3:]
            if code == "DCA":
                put(fields, v.LICENSE_NUMBER, aamva_license(value), overwrite=True)
                continue
            self._element(fields, code, value, overwrite=True, capture_unknown=True)
        return fields

    def _decode_raw(self, payload: str) -> Dict[str, str]:
        fields: Dict[str, str] = {}

        # (a) motifs type OCR : payload entier puis ligne par ligne
        for name, value in self.extractor.extract(payload, fields=RAW_PATTERN_FIELDS).items():
            put(fields, name, value, overwrite=False)
        for line in re.split(r"[\r\n]+", payload):
            if not line.strip():
                continue
            for name, value in self.extractor.extract(line, fields=RAW_PATTERN_FIELDS).items():
                put(fields, name, value, overwrite=False)

        # (b) codes d'éléments connus, découpage par délimiteur
        for delim in RAW_DELIMITERS:
            if delim not in payload:
                continue
            for part in payload.split(delim):
                part = part.strip()
                if len(part) >= 3 and part[:3] in ELEMENTS:
                    self._element(fields, part[:3], part[3:], overwrite=False, capture_unknown=False)

        # (c) sans délimiteur : segmentation des suites alphanumériques
        for run in _ALNUM_RUN.findall(payload):
            for code, value in segment_elements(run):
                self._element(fields, code, value, overwrite=False, capture_unknown=False)

        return fields


def to_canonical(native: Dict[str, str]) -> Dict[str, str]:
    """
    Clés natives -> vocabulaire canonique (Name, Driver License Number, Address),
    puis recopie de toutes les clés natives hors sentinelles.
    """
    out: Dict[str, str] = {}

    name = native.get(v.FULL_NAME)
    if not name:
        first = native.get(v.FIRST_NAME) or native.get("Given Names")
        parts = [p for p in (first, native.get(v.MIDDLE_NAME), native.get(v.LAST_NAME)) if p]
        name = " ".join(parts) if parts else native.get(v.NAME)
    put(out, v.NAME, name, overwrite=True)

    put(out, v.DRIVER_LICENSE_NUMBER,
        native.get(v.DRIVER_LICENSE_NUMBER) or native.get(v.LICENSE_NUMBER), overwrite=True)

    if not native.get(v.ADDRESS):
        for key in (v.STREET_ADDRESS, v.MAILING_ADDRESS, v.RESIDENCE_ADDRESS):
            if native.get(key):
                put(out, v.ADDRESS, native[key], overwrite=True)
                break

    for key, value in native.items():
        if not value or is_sentinel(value):
            continue
        put(out, key, value, overwrite=False)
    return out
