"""Data models for the ATS engine.

The key idea: every provider is reduced to one *stable* record shape. Fields
the classifiers can map become structured values; everything else lands in
``tags`` so nothing a provider sent is silently dropped. We also keep the
``raw`` payload so a record can be re-parsed later without re-fetching.

Enum members serialize to their explicit string values, never to their
declaration position, so reordering members can't change stored data.

This file uses Pydantic v2.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .dates import normalize_date
from .tags import MetadataTagStore


class Department(str, Enum):
    AI = "ai"
    CUSTOMER_SUCCESS_SUPPORT = "customer_success_support"
    DATA = "data"
    DESIGN = "design"
    MARKETING = "marketing"
    PRODUCT_MANAGEMENT = "product_management"
    SALES = "sales"
    SECURITY = "security"
    SOFTWARE_ENGINEERING = "software_engineering"
    UNKNOWN = "unknown"


class EmploymentType(str, Enum):
    FULL_TIME = "full_time"
    PART_TIME = "part_time"
    CONTRACT = "contract"
    INTERNSHIP = "internship"
    TEMPORARY = "temporary"
    UNKNOWN = "unknown"


class LocationType(str, Enum):
    REMOTE = "remote"
    ONSITE = "onsite"
    HYBRID = "hybrid"
    UNKNOWN = "unknown"


class Equity(str, Enum):
    OFFERED = "offered"
    NOT_OFFERED = "not_offered"
    UNKNOWN = "unknown"


class Company(BaseModel):
    """Hiring company, filled from whichever provider field exposes it."""

    name: str = ""
    homepage_url: Optional[str] = None
    logo_url: Optional[str] = None
    description: Optional[str] = None


class Location(BaseModel):
    """A structured postal location as some providers supply it."""

    city: str = ""
    state: str = ""
    postal_code: str = ""
    country: str = ""

    @classmethod
    def from_payload(cls, data: Any) -> "Location":
        """Build a Location from a provider object.

        Accepts ``state``/``region``, ``postalCode``/``postal_code`` and
        ``addressCountry``/``country``. A JSON-LD ``Place`` is followed into
        its ``address``. Anything that isn't an object yields an empty Location.
        """
        if not isinstance(data, dict):
            return cls()
        if isinstance(data.get("address"), dict):
            data = data["address"]

        def pick(*keys: str) -> str:
            for k in keys:
                v = data.get(k)
                if isinstance(v, str) and v.strip():
                    return v.strip()
            return ""

        return cls(
            city=pick("city", "addressLocality"),
            state=pick("state", "region", "province", "addressRegion"),
            postal_code=pick("postalCode", "postal_code"),
            country=pick("addressCountry", "country", "countryCode"),
        )

    def __str__(self) -> str:
        result = self.city
        if self.state:
            if result:
                result += ", "
            result += self.state
        if self.postal_code:
            if result:
                result += " "
            result += self.postal_code
        if self.country:
            if result:
                result += ", "
            result += self.country
        return result


class JobRecord(BaseModel):
    """The canonical job record every provider is normalized into.

    A record is built and mutated by exactly one adapter during one parse
    call, then handed back as output and not changed again.
    """

    source: str = Field(..., description="Adapter name, e.g. 'greenhouse'.")
    source_id: str = Field(default="", description="Provider-native job identifier.")

    title: str = ""
    url: str = ""
    description: str = ""

    department: Department = Department.UNKNOWN
    department_raw: str = Field(default="", description="Department label exactly as the provider sent it.")
    employment_type: EmploymentType = EmploymentType.UNKNOWN
    equity: Equity = Equity.UNKNOWN

    is_remote: bool = False
    location: str = ""
    location_type: LocationType = LocationType.UNKNOWN

    min_compensation: float = 0.0
    max_compensation: float = 0.0
    compensation_unit: Optional[str] = Field(default=None, description="Currency symbol/code or pay unit when known.")

    date_posted: Optional[datetime] = Field(default=None, description="UTC publication instant; None when unknown.")

    company: Company = Field(default_factory=Company)
    tags: MetadataTagStore = Field(default_factory=MetadataTagStore)

    raw: Dict[str, Any] = Field(default_factory=dict, description="Original payload.")

    def add_metadata(self, key: str, value: str) -> None:
        self.tags.add(key, value)

    def get_metadata(self, key: str) -> List[str]:
        return self.tags.get(key)

    def add_metadata_value(self, key: str, value: Any) -> None:
        """Tag an arbitrary JSON value under ``key``.

        Lists tag each element under the same key, objects are flattened to
        ``key_subkey`` and scalars are rendered as text. ``None`` is skipped.
        """
        if value is None:
            return
        if isinstance(value, bool):
            self.add_metadata(key, "true" if value else "false")
        elif isinstance(value, (int, float)):
            self.add_metadata(key, str(value))
        elif isinstance(value, str):
            self.add_metadata(key, value)
        elif isinstance(value, list):
            for item in value:
                self.add_metadata_value(key, item)
        elif isinstance(value, dict):
            for sub_key, sub_value in value.items():
                self.add_metadata_value(f"{key}_{sub_key}", sub_value)
        else:
            self.add_metadata(key, str(value))

    def set_location_type(self, location_type: LocationType) -> None:
        self.location_type = location_type
        if location_type == LocationType.REMOTE:
            self.is_remote = True

    def process_date_posted(self, value: Any) -> None:
        """Set ``date_posted`` if ``value`` normalizes; leave it untouched otherwise."""
        posted = normalize_date(value)
        if posted is not None:
            self.date_posted = posted


def new_job_record(source: str, raw_payload: Optional[Dict[str, Any]] = None) -> JobRecord:
    """Start an empty record for one parse of ``raw_payload`` from ``source``."""
    return JobRecord(source=source, raw=dict(raw_payload or {}))
