# Profile value resolution

from .resolver import (
    DATE_FIELD_IDS,
    FIELD_PATHS,
    NA_VALUE,
    ProfileResolver,
    format_date,
    resolve,
    stringify,
)

__all__ = [
    "DATE_FIELD_IDS",
    "FIELD_PATHS",
    "NA_VALUE",
    "ProfileResolver",
    "format_date",
    "resolve",
    "stringify",
]
