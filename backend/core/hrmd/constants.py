# backend/core/hrmd/constants.py
"""
Nombres de segmentos y campos del IDoc HRMD_A usados por los filtros.
"""

# Last day on earth according to SAP: ENDDA of a currently valid time slice
ACTIVE_END_DATE = "99991231"

# Dynamic Configuration namespace holding 'R<BUKRS>' -> receiver system pairs
OWNERSHIP_NAMESPACE = "urn:rn:COMMON:HR:EmployeeDataDistribution:10"
OWNERSHIP_KEY_PREFIX = "R"

PERSON_TAG = "E1PLOGI"
INFOTYPE_TAG = "E1PITYP"

TIME_SLICE_PREFIX = "E1P"
EXTENSION_SLICE_PREFIX = "E1Q"

ORG_ASSIGNMENT_INFOTYPE = "0001"
PERSONAL_DATA_INFOTYPE = "0002"


class Fields:
    """Tags de campos dentro de E1PITYP y sus segmentos dependientes del tiempo."""
    INFOTYPE = "INFTY"
    OBJECT_ID = "OBJID"
    END_DATE = "ENDDA"
    COMPANY_CODE = "BUKRS"
    PERSONNEL_NUMBER = "PERNR"
    COST_CENTER = "KOSTL"

    SURNAME = "NACHN"
    FIRST_NAME = "VORNA"
    MIDDLE_NAME = "MIDNM"

    DISPLAY_NAME = "ENAME"
    SHORT_NAME = "SNAME"


# Long, phonetic and romanized name fields of E1P0002 that never leave the system
PERSONAL_DATA_REMOVED_FIELDS = (
    "NACHN_40",
    "VORNA_40",
    "NCHMC",
    "VNAMC",
    "INITS",
    "FNAMR",
    "LNAMR",
)

# Same idea for the nested E1Q0002 extension segment
PERSONAL_DATA_EXTENSION_REMOVED_FIELDS = (
    "FNAMR_45",
    "LNAMR_45",
)


def time_slice_tag(infotype_code: str, prefix: str = TIME_SLICE_PREFIX) -> str:
    """
    Devuelve el tag del segmento dependiente del tiempo para un infotipo.

    '0001' -> 'E1P0001', ('0002', 'E1Q') -> 'E1Q0002'.
    """
    return f"{prefix}{infotype_code}"


def is_active(end_date: str) -> bool:
    return end_date == ACTIVE_END_DATE


def ownership_key(company_code: str) -> str:
    return f"{OWNERSHIP_KEY_PREFIX}{company_code}"
