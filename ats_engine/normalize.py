"""Normalization & classification heuristics.

This module maps provider free text onto the closed enumerations in
``models.py``:
- department labels (exact-phrase synonym table)
- employment type / commitment labels
- location type (exact table plus a substring fallback)

The lookup tables are module-level and read-only, so the classifiers are safe
to call from parallel workers. Nothing here raises on unknown input; it
resolves to the UNKNOWN member and, where a record is involved, the raw text
is kept as metadata.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Iterable, List, Mapping, Tuple

from .models import Department, EmploymentType, JobRecord, LocationType

logger = logging.getLogger(__name__)

ALTERNATE_COMMITMENTS_KEY = "alternate_commitments"
ALTERNATE_LOCATIONS_KEY = "alternate_locations"


def _invert(groups: Mapping[object, Tuple[str, ...]]) -> Mapping[str, object]:
    table = {}
    for member, phrases in groups.items():
        for phrase in phrases:
            table[phrase] = member
    return MappingProxyType(table)


DEPARTMENT_SYNONYMS: Mapping[str, Department] = _invert(
    {
        Department.AI: ("ai",),
        Department.CUSTOMER_SUCCESS_SUPPORT: (
            "customer success",
            "customer support",
            "customer success & support",
            "community",
        ),
        Department.DATA: ("data", "data science", "data engineering"),
        Department.DESIGN: ("design", "ux", "ui", "product design"),
        Department.MARKETING: ("marketing", "growth"),
        Department.PRODUCT_MANAGEMENT: ("product management", "product"),
        Department.SALES: ("sales", "business development"),
        Department.SECURITY: ("security", "information security", "infosec"),
        Department.SOFTWARE_ENGINEERING: (
            "software engineering",
            "engineering",
            "dev",
            "development",
            "hardware",
            "hardware engineering",
            "corporate it",
            "corporate",
        ),
    }
)

EMPLOYMENT_TYPE_SYNONYMS: Mapping[str, EmploymentType] = _invert(
    {
        EmploymentType.FULL_TIME: ("full_time", "full time", "full-time", "fulltime", "hourly_ft", "salaried_ft"),
        EmploymentType.PART_TIME: ("part_time", "part time", "part-time", "parttime", "hourly_pt"),
        EmploymentType.CONTRACT: ("contract", "contractor"),
        EmploymentType.INTERNSHIP: ("internship", "intern"),
        EmploymentType.TEMPORARY: ("temporary", "temp"),
    }
)

LOCATION_TYPE_SYNONYMS: Mapping[str, LocationType] = _invert(
    {
        LocationType.REMOTE: ("remote", "telecommute"),
        LocationType.ONSITE: ("onsite", "on-site", "on_site", "in_office", "in-office", "office"),
        LocationType.HYBRID: ("hybrid",),
    }
)

# Checked in order; the first substring found wins.
LOCATION_TYPE_SUBSTRINGS: Tuple[Tuple[str, LocationType], ...] = (
    ("remote", LocationType.REMOTE),
    ("anywhere", LocationType.REMOTE),
    ("onsite", LocationType.ONSITE),
    ("on-site", LocationType.ONSITE),
    ("hybrid", LocationType.HYBRID),
)

PART_TIME_MARKERS = ("part-time", "part time")
CONTRACT_MARKERS = ("contract", "contractor", "term")


def _key(text: str) -> str:
    return (text or "").strip().lower()


def _clean_labels(labels: Iterable[str]) -> List[str]:
    out: List[str] = []
    for label in labels or []:
        if not isinstance(label, str):
            continue
        value = label.strip().lower()
        if value:
            out.append(value)
    return out


def classify_department(text: str) -> Department:
    """Map a department label to a Department, or UNKNOWN."""
    dept = DEPARTMENT_SYNONYMS.get(_key(text))
    if dept is None:
        logger.debug("Unknown department encountered: %r", text)
        return Department.UNKNOWN
    return dept


def apply_department(record: JobRecord, raw: str) -> Department:
    """Classify ``raw`` onto ``record``, keeping the raw label next to the enum."""
    record.department_raw = raw or ""
    record.department = classify_department(raw)
    return record.department


def classify_employment_type(text: str) -> EmploymentType:
    """Map a single employment-type label to an EmploymentType, or UNKNOWN."""
    return EMPLOYMENT_TYPE_SYNONYMS.get(_key(text), EmploymentType.UNKNOWN)


def process_commitments(record: JobRecord, commitments: Iterable[str]) -> None:
    """Derive the employment type from a list of commitment labels.

    Write-once: if the record already has an employment type, every label is
    kept as ``alternate_commitments`` metadata instead. Otherwise the first
    part-time or contract-looking label decides, and anything else counts as
    full time.
    """
    labels = _clean_labels(commitments)

    if record.employment_type != EmploymentType.UNKNOWN:
        logger.debug("Employment type already set to %s, keeping labels as metadata", record.employment_type.value)
        for label in labels:
            record.add_metadata(ALTERNATE_COMMITMENTS_KEY, label)
        return

    for label in labels:
        if any(marker in label for marker in PART_TIME_MARKERS):
            record.employment_type = EmploymentType.PART_TIME
            return
        if any(marker in label for marker in CONTRACT_MARKERS):
            record.employment_type = EmploymentType.CONTRACT
            return

    record.employment_type = EmploymentType.FULL_TIME


def apply_employment_type(record: JobRecord, label: str) -> EmploymentType:
    """Set the employment type from one provider label.

    Known vocabulary is mapped directly; free-text commitment labels fall
    back to the commitment rules in ``process_commitments``.
    """
    if not (label or "").strip():
        return record.employment_type
    employment_type = classify_employment_type(label)
    if employment_type != EmploymentType.UNKNOWN:
        record.employment_type = employment_type
    else:
        process_commitments(record, [label])
    return record.employment_type


def classify_location_type(text: str) -> LocationType:
    """Map a workplace label or free-text location name to a LocationType."""
    value = _key(text)
    if not value:
        return LocationType.UNKNOWN

    exact = LOCATION_TYPE_SYNONYMS.get(value)
    if exact is not None:
        return exact

    for needle, location_type in LOCATION_TYPE_SUBSTRINGS:
        if needle in value:
            return location_type
    return LocationType.UNKNOWN


def process_location_types(record: JobRecord, locations: Iterable[str]) -> None:
    """Derive the location type from a list of location strings.

    Write-once: once the record's location type is known, further strings go
    to ``alternate_locations`` metadata. While it is still unknown, strings
    are tried in order; the first classifiable one wins, and the ones before
    it are kept as metadata.
    """
    values = _clean_labels(locations)

    if record.location_type != LocationType.UNKNOWN:
        logger.debug("Location type already set to %s, keeping locations as metadata", record.location_type.value)
        for value in values:
            record.add_metadata(ALTERNATE_LOCATIONS_KEY, value)
        return

    for value in values:
        location_type = classify_location_type(value)
        if location_type != LocationType.UNKNOWN:
            record.set_location_type(location_type)
            return
        logger.debug("Unknown job location type: %r", value)
        record.add_metadata(ALTERNATE_LOCATIONS_KEY, value)
