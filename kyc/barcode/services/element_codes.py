"""
Table unique des codes d'éléments AAMVA/ANSI : code -> (nom de champ, transformation).
Construite une fois ; partagée par les trois formes de payload.
"""
from typing import Callable, Dict, NamedTuple

from kyc.core import vocabulary as v
from kyc.core.normalize import (
    proper_case, format_date, format_sex_code, format_weight, format_barcode_height,
)


def _raw(value: str) -> str:
    return value.strip()


def _text(value: str) -> str:
    return proper_case(value.strip())


def _date(value: str) -> str:
    return format_date(value.strip())


def _sex(value: str) -> str:
    return format_sex_code(value)


def _height(value: str) -> str:
    return format_barcode_height(value.strip())


def _weight(value: str) -> str:
    return format_weight(value)


class Element(NamedTuple):
    field: str
    transform: Callable[[str], str]


ELEMENTS: Dict[str, Element] = {
    # Identité
    "DAA": Element(v.FULL_NAME, _text),
    "DAB": Element(v.LAST_NAME, _text),
    "DAC": Element(v.FIRST_NAME, _text),
    "DAD": Element(v.MIDDLE_NAME, _text),
    "DAE": Element("Name Suffix", _text),
    "DAF": Element("Name Prefix", _text),
    "DCS": Element(v.LAST_NAME, _text),
    "DCT": Element("Given Names", _text),
    "DCU": Element("Name Suffix", _text),
    "DBB": Element(v.DATE_OF_BIRTH, _date),
    "DBL": Element(v.DATE_OF_BIRTH, _date),
    "DBC": Element(v.SEX, _sex),
    "DAU": Element(v.HEIGHT, _height),
    "DAV": Element(v.WEIGHT, _weight),
    "DAW": Element(v.WEIGHT, _weight),
    "DAY": Element(v.EYE_COLOR, _text),
    "DAZ": Element(v.HAIR_COLOR, _text),
    # Adresse
    "DAG": Element(v.STREET_ADDRESS, _text),
    "DAH": Element("Street Address 2", _text),
    "DAI": Element(v.CITY, _text),
    "DAJ": Element(v.STATE, _text),
    "DAK": Element(v.ZIP_CODE, _raw),
    "DAL": Element(v.RESIDENCE_ADDRESS, _text),
    "DAM": Element("Residence Street Address 2", _text),
    "DAN": Element("Residence City", _text),
    "DAO": Element("Residence State", _text),
    "DAP": Element("Residence ZIP Code", _raw),
    "DCJ": Element(v.ADDRESS, _text),
    "DCK": Element(v.CITY, _text),
    "DCI": Element(v.STATE, _text),
    "DCL": Element(v.STATE, _text),
    "DCM": Element(v.ZIP_CODE, _raw),
    # Permis
    "DAQ": Element(v.LICENSE_NUMBER, _raw),
    "DCA": Element(v.LICENSE_NUMBER, _raw),
    "DAR": Element("License Classification", _raw),
    "DAS": Element("License Restriction Code", _raw),
    "DAT": Element("License Endorsements Code", _raw),
    "DCD": Element(v.CLASS, _raw),
    "DCB": Element("Restriction Codes", _raw),
    "DCE": Element(v.RESTRICTIONS, _raw),
    "DCF": Element(v.RESTRICTIONS, _raw),
    "DCQ": Element(v.RESTRICTIONS, _raw),
    "DCG": Element(v.ENDORSEMENTS, _raw),
    "DCR": Element(v.ENDORSEMENTS, _raw),
    "DCN": Element("Inventory Control Number", _raw),
    "DCO": Element("Vehicle Classification", _raw),
    "DCP": Element("Class Description", _text),
    # Dates de document
    "DBA": Element(v.EXPIRATION_DATE, _date),
    "DBD": Element(v.ISSUE_DATE, _date),
    "DCH": Element(v.ISSUE_DATE, _date),
    "DBE": Element("Issue Timestamp", _raw),
    "DBF": Element("Number of Duplicates", _raw),
    "DDB": Element("Card Revision Date", _date),
    "DDC": Element("HAZMAT Expiration Date", _date),
    "DDH": Element("Under 18 Until", _date),
    "DDI": Element("Under 19 Until", _date),
    "DDJ": Element("Under 21 Until", _date),
    # Indicateurs / audit
    "DBG": Element("Medical Indicator", _raw),
    "DBH": Element("Organ Donor", _raw),
    "DBI": Element("Non-Resident Indicator", _raw),
    "DBJ": Element("Unique Customer Identifier", _raw),
    "DBK": Element("Social Security Number", _raw),
    "DBN": Element("Alias Full Name", _text),
    "DBO": Element("Alias Last Name", _text),
    "DBP": Element("Alias Given Name", _text),
    "DBQ": Element("Alias Middle Name", _text),
    "DBR": Element("Alias Suffix", _text),
    "DBS": Element("Alias Prefix", _text),
    "DDA": Element("Compliance Type", _raw),
    "DDD": Element("Limited Duration Indicator", _raw),
    "DDE": Element("Family Name Truncation", _raw),
    "DDF": Element("First Name Truncation", _raw),
    "DDG": Element("Middle Name Truncation", _raw),
    "DDK": Element("Organ Donor Indicator", _raw),
    "DDL": Element("Veteran Indicator", _raw),
}

KNOWN_CODES = tuple(sorted(ELEMENTS))


def unknown_code_name(code: str) -> str:
    return code.replace("_", " ").capitalize()


def is_sentinel(value: str) -> bool:
    return value.strip().upper() in v.SENTINEL_VALUES


def plausible_value(code: str, value: str) -> bool:
    """Valeur vraisemblable pour un code connu (découpage sans délimiteur)."""
    el = ELEMENTS.get(code)
    if el is None or not value:
        return False
    if value[:3] in ELEMENTS:
        return False
    if el.transform is _date:
        return len(value) == 8 and value.isdigit()
    if el.transform in (_raw, _sex):
        return True
    return len(value) >= 2
