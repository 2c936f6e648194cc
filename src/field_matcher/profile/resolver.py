"""
Profile value resolution.

Turns a predicted FieldId plus a read-only profile snapshot into the string
that should be written into the form.

Profile snapshot layout (plain mappings, owned by the profile store):
    personal, address, academic, technical, placement, documents, social,
    additional  -> {fieldName: value}
Custom fields:
    {key: {"value": ..., "label": ..., "type": ..., "category": ...}}

Resolution order for a FieldId:
1. Composition rules (fullName, role, diplomaPercentage)
2. Lookup table paths, first non-empty wins
3. Generic section scan (ids without a table entry)
4. Custom fields matched by key or label
Then: date reformatting for date controls, NA substitution for labels that
accept it. No default value is ever invented.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

import structlog

from ..models.fields import FieldKind
from ..version import RESOLVER_VERSION


logger = structlog.get_logger(__name__)

NA_VALUE = "NA"


# ============================================================================
# LOOKUP TABLE
# ============================================================================

# FieldId -> ordered (section, key) paths; section None means top level.
# Must cover every FieldId in the training corpus.
FIELD_PATHS: Dict[str, Tuple[Tuple[Optional[str], str], ...]] = {
    # Personal
    "firstName": (("personal", "firstName"),),
    "middleName": (("personal", "middleName"),),
    "lastName": (("personal", "lastName"),),
    "gender": (("personal", "gender"),),
    "dateOfBirth": (("personal", "dateOfBirth"),),
    "email": (("personal", "email"), ("personal", "collegeEmail")),
    "phone": (("personal", "phone"),),
    "whatsapp": (("social", "whatsapp"),),
    "aadhaarNumber": (("personal", "aadhaarNumber"),),
    "pan": (("personal", "pan"),),
    # Address
    "house": (("address", "house"),),
    "street": (("address", "street"), ("address", "currentAddress")),
    "city": (("address", "city"),),
    "state": (("address", "state"),),
    "pin": (("address", "pin"),),
    "country": (("address", "country"),),
    # School
    "tenthPercentage": (("academic", "tenthPercentage"),),
    "tenthBoard": (("academic", "tenthBoard"),),
    "tenthYear": (("academic", "tenthYear"),),
    "twelfthPercentage": (("academic", "twelfthPercentage"),),
    "twelfthBoard": (("academic", "twelfthBoard"),),
    "twelfthYear": (("academic", "twelfthYear"),),
    "twelfthStream": (("academic", "twelfthStream"),),
    "diplomaPercentage": (("academic", "diplomaPercentage"),),
    # College
    "cgpa": (("academic", "cgpa"), ("academic", "sgpa")),
    "percentage": (
        ("academic", "percentage"),
        ("academic", "aggregatePercentage"),
        ("academic", "graduationPercentage"),
    ),
    "collegeName": (("academic", "collegeName"),),
    "universityName": (("academic", "universityName"), ("academic", "collegeName")),
    "course": (("academic", "course"),),
    "branch": (("academic", "branch"), ("academic", "specialization")),
    "semester": (("academic", "semester"),),
    "yearOfStudy": (("academic", "yearOfStudy"), ("academic", "year")),
    "yearOfGraduation": (
        ("academic", "yearOfGraduation"),
        ("academic", "year"),
        ("academic", "yearOfStudy"),
    ),
    "rollNumber": (("academic", "rollNumber"), ("personal", "studentId")),
    "prnNumber": (("academic", "registrationNumber"), ("academic", "prnNumber")),
    "role": (("academic", "role"), ("placement", "jobRolePreference")),
    # Technical / placement
    "technicalSkills": (("technical", "technicalSkills"), (None, "technicalSkills")),
    "resumeLink": (("placement", "resumeLink"), ("documents", "resumeLink")),
    # Social
    "linkedin": (("placement", "linkedin"), ("social", "linkedin")),
    "github": (("technical", "github"), ("social", "github")),
    "portfolio": (("social", "portfolio"),),
    "behance": (("social", "behance"),),
    "instagram": (("social", "instagram"),),
    "twitter": (("social", "twitter"),),
    "telegram": (("social", "telegram"),),
}

# Section scan order for ids without a table entry
SECTION_ORDER = (
    "personal",
    "address",
    "academic",
    "technical",
    "placement",
    "social",
    "additional",
)

# FieldIds whose stored value is a date
DATE_FIELD_IDS = frozenset({"dateOfBirth"})

# Stored date representations, tried in order
DATE_INPUT_FORMATS = (
    "%Y-%m-%d",
    "%d/%m/%Y",
    "%d-%m-%Y",
    "%d.%m.%Y",
    "%Y/%m/%d",
    "%d %b %Y",
    "%d %B %Y",
)

_ISO_PREFIX = re.compile(r"^(\d{4}-\d{2}-\d{2})[T ]")


# ============================================================================
# VALUE HELPERS
# ============================================================================

def stringify(value: Any) -> Optional[str]:
    """
    Render a stored profile value as form text.

    Lists are joined with ", ", booleans become Yes/No, empty values None.

    Examples:
        >>> stringify(["Python", "SQL"])
        'Python, SQL'
        >>> stringify(True)
        'Yes'
        >>> stringify("") is None
        True
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, (list, tuple)):
        joined = ", ".join(str(v).strip() for v in value if v is not None and str(v).strip())
        return joined or None
    text = str(value).strip()
    return text or None


def format_date(value: str) -> str:
    """
    Reformat a stored date as YYYY-MM-DD.

    Args:
        value: Date in one of DATE_INPUT_FORMATS or an ISO timestamp

    Returns:
        YYYY-MM-DD string; the input unchanged if it cannot be parsed

    Examples:
        >>> format_date("14/05/2003")
        '2003-05-14'
        >>> format_date("2003-05-14T00:00:00.000Z")
        '2003-05-14'
    """
    text = value.strip()
    iso = _ISO_PREFIX.match(text)
    if iso:
        text = iso.group(1)

    for fmt in DATE_INPUT_FORMATS:
        try:
            return datetime.strptime(text, fmt).strftime("%Y-%m-%d")
        except ValueError:
            continue

    logger.debug("date_not_reformatted", value=value)
    return value


def _section(profile: Mapping[str, Any], name: Optional[str]) -> Mapping[str, Any]:
    if name is None:
        return profile
    section = profile.get(name)
    return section if isinstance(section, Mapping) else {}


def _custom_value(entry: Any) -> Any:
    if isinstance(entry, Mapping):
        return entry.get("value")
    return entry


def _custom_label(entry: Any) -> str:
    if isinstance(entry, Mapping):
        return str(entry.get("label") or "")
    return ""


# ============================================================================
# RESOLVER
# ============================================================================

@dataclass
class ProfileResolver:
    """
    FieldId -> profile value resolver.

    The lookup table is injectable so region-specific profile layouts can be
    used without touching the composition rules.
    """
    field_paths: Dict[str, Tuple[Tuple[Optional[str], str], ...]] = field(
        default_factory=lambda: dict(FIELD_PATHS)
    )
    section_order: Sequence[str] = SECTION_ORDER
    date_field_ids: frozenset = DATE_FIELD_IDS

    def resolve(
        self,
        field_id: str,
        profile: Optional[Mapping[str, Any]],
        custom_fields: Optional[Mapping[str, Any]] = None,
        has_na_instruction: bool = False,
        field_kind: Optional[FieldKind] = None,
    ) -> Optional[str]:
        """
        Resolve the value to write for a field.

        Args:
            field_id: Predicted FieldId
            profile: Profile snapshot (read-only)
            custom_fields: User-defined fields keyed by id
            has_na_instruction: Label accepts a literal "NA"
            field_kind: Kind of the target control; date controls get
                YYYY-MM-DD for date-typed fields

        Returns:
            Value string, "NA" for an empty NA-accepting field, or None
        """
        if not isinstance(profile, Mapping):
            if profile is not None:
                logger.warning("profile_not_a_mapping", profile_type=type(profile).__name__)
            profile = {}
        custom_fields = custom_fields if isinstance(custom_fields, Mapping) else {}

        value = self._lookup(field_id, profile, custom_fields)

        if value is not None and field_id in self.date_field_ids and field_kind == FieldKind.DATE:
            value = format_date(value)

        if value is None and has_na_instruction:
            logger.debug("na_value_substituted", field_id=field_id)
            return NA_VALUE

        return value

    def _lookup(
        self,
        field_id: str,
        profile: Mapping[str, Any],
        custom_fields: Mapping[str, Any],
    ) -> Optional[str]:
        if field_id == "fullName":
            return self._full_name(profile)

        if field_id == "role":
            # Custom role answers take precedence over the stored profile role
            value = self._custom_match(custom_fields, key="role", label_contains="role")
            if value is not None:
                return value

        paths = self.field_paths.get(field_id)
        if paths is not None:
            for section_name, key in paths:
                value = stringify(_section(profile, section_name).get(key))
                if value is not None:
                    return value
        else:
            value = self._scan_sections(field_id, profile)
            if value is not None:
                return value

        if field_id == "diplomaPercentage":
            return self._custom_match(
                custom_fields, key="diplomaPercentage", label_contains="diploma"
            )

        return self._custom_match(custom_fields, key=field_id, label_equals=field_id)

    def _full_name(self, profile: Mapping[str, Any]) -> Optional[str]:
        personal = _section(profile, "personal")
        parts = [
            stringify(personal.get(key))
            for key in ("firstName", "middleName", "lastName")
        ]
        joined = " ".join(p for p in parts if p).strip()
        if joined:
            return joined
        return stringify(personal.get("fullName"))

    def _scan_sections(self, field_id: str, profile: Mapping[str, Any]) -> Optional[str]:
        for section_name in self.section_order:
            value = stringify(_section(profile, section_name).get(field_id))
            if value is not None:
                return value
        return stringify(profile.get(field_id))

    @staticmethod
    def _custom_match(
        custom_fields: Mapping[str, Any],
        key: str,
        label_contains: Optional[str] = None,
        label_equals: Optional[str] = None,
    ) -> Optional[str]:
        for custom_key, entry in custom_fields.items():
            label = _custom_label(entry).lower()
            matched = (
                custom_key == key
                or (label_contains is not None and label_contains.lower() in label)
                or (label_equals is not None and label == label_equals.lower())
            )
            if matched:
                return stringify(_custom_value(entry))
        return None


# ============================================================================
# CONVENIENCE FUNCTIONS
# ============================================================================

_default_resolver = ProfileResolver()


def resolve(
    field_id: str,
    profile: Optional[Mapping[str, Any]],
    custom_fields: Optional[Mapping[str, Any]] = None,
    has_na_instruction: bool = False,
    field_kind: Optional[FieldKind] = None,
) -> Optional[str]:
    """
    Resolve a field value with the default lookup table.

    Examples:
        >>> resolve("fullName", {"personal": {"firstName": "John", "middleName": "", "lastName": "Doe"}})
        'John Doe'
    """
    return _default_resolver.resolve(
        field_id,
        profile,
        custom_fields,
        has_na_instruction=has_na_instruction,
        field_kind=field_kind,
    )


__all__ = [
    "FIELD_PATHS",
    "DATE_FIELD_IDS",
    "NA_VALUE",
    "RESOLVER_VERSION",
    "ProfileResolver",
    "format_date",
    "resolve",
    "stringify",
]
