"""
Vocabulaire canonique des champs d'identité et champs requis par face.
"""
from typing import Dict, List

SIDE_FRONT = "front"
SIDE_BACK = "back"
SIDES = [SIDE_FRONT, SIDE_BACK]

NAME = "Name"
FULL_NAME = "Full Name"
FIRST_NAME = "First Name"
MIDDLE_NAME = "Middle Name"
LAST_NAME = "Last Name"
DATE_OF_BIRTH = "Date of Birth"
DRIVER_LICENSE_NUMBER = "Driver License Number"
LICENSE_NUMBER = "License Number"
STATE = "State"
CLASS = "Class"
EXPIRATION_DATE = "Expiration Date"
ISSUE_DATE = "Issue Date"
SEX = "Sex"
HEIGHT = "Height"
WEIGHT = "Weight"
EYE_COLOR = "Eye Color"
HAIR_COLOR = "Hair Color"
ADDRESS = "Address"
STREET_ADDRESS = "Street Address"
MAILING_ADDRESS = "Mailing Address"
RESIDENCE_ADDRESS = "Residence Street Address"
CITY = "City"
ZIP_CODE = "ZIP Code"
RESTRICTIONS = "Restrictions"
ENDORSEMENTS = "Endorsements"

# Valeurs "vides" émises par les émetteurs de permis
SENTINEL_VALUES = frozenset({"NONE", "UNK", "N"})

REQUIRED_FIELDS: Dict[str, List[str]] = {
    SIDE_FRONT: [
        NAME, DATE_OF_BIRTH, DRIVER_LICENSE_NUMBER, STATE, CLASS,
        EXPIRATION_DATE, ISSUE_DATE, SEX, HEIGHT, WEIGHT, EYE_COLOR,
    ],
    SIDE_BACK: [
        NAME, DATE_OF_BIRTH, DRIVER_LICENSE_NUMBER, STATE, CLASS,
        EXPIRATION_DATE, ISSUE_DATE, SEX, HEIGHT, EYE_COLOR,
        ADDRESS, CITY, ZIP_CODE,
    ],
}

def required_fields(side: str) -> List[str]:
    try:
        return list(REQUIRED_FIELDS[side])
    except KeyError:
        raise ValueError("INVALID_SIDE")
