"""Lever postings connector.

Docs: https://github.com/lever/postings-api

Postings don't carry the company name, so after parsing we look it up in the
JSON-LD of the hosted job page. That lookup is best-effort.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

import httpx

from .. import http
from ..models import JobRecord, LocationType, new_job_record
from ..normalize import apply_department, apply_employment_type, classify_location_type, process_location_types
from ..tags import VERBATIM_KEY
from ..utils import as_text, clean_str
from .base import SourceAdapter, as_list, load_payload

logger = logging.getLogger(__name__)


class LeverSource(SourceAdapter):
    """Normalize Lever postings."""

    name = "lever"
    company_url = "https://api.lever.co/v0/postings/{company}?mode=json"
    job_url = "https://api.lever.co/v0/postings/{company}/{job_id}?mode=json"

    def __init__(self, client: Optional[httpx.Client] = None, lookup_company: bool = True) -> None:
        self._client = client
        self._lookup_company = lookup_company

    def fetch_company(self, company: str, limit: Optional[int] = None) -> List[JobRecord]:
        logger.debug("Scraping %s company %s", self.name, company)
        jobs = self._parse_many(http.get_json(self.company_url.format(company=company), client=self._client), limit=limit)
        for job in jobs:
            self._fill_company(job)
        return jobs

    def fetch_job(self, company: str, job_id: str) -> JobRecord:
        logger.debug("Scraping %s job %s/%s", self.name, company, job_id)
        job = self.parse_job(http.get_json(self.job_url.format(company=company, job_id=job_id), client=self._client))
        self._fill_company(job)
        return job

    def _fill_company(self, job: JobRecord) -> None:
        if not self._lookup_company or job.company.name or not job.url:
            return
        try:
            ld = http.get_ld_json(job.url, client=self._client)
        except httpx.HTTPError as exc:
            logger.error("Error getting LD+JSON from %s: %s", job.url, exc)
            return
        org = ld.get("hiringOrganization")
        if isinstance(org, dict):
            job.company.name = clean_str(org.get("name"))
            logo = clean_str(org.get("logo"))
            if logo:
                job.company.logo_url = logo

    def parse_job(self, payload: Union[Dict[str, Any], str, bytes]) -> JobRecord:
        data = load_payload(payload)
        job = new_job_record(self.name, data)

        for key, value in data.items():
            if key == "id":
                job.source_id = as_text(value)
            elif key == "text":
                job.title = clean_str(value)
            elif key == "hostedUrl":
                job.url = clean_str(value)
            elif key == "descriptionPlain":
                job.description = clean_str(value)
            elif key in ("description", "additional", "additionalPlain", "openingPlain", "descriptionBodyPlain"):
                job.add_metadata(VERBATIM_KEY, clean_str(value))
            elif key == "createdAt":
                job.process_date_posted(value)
            elif key == "categories":
                self._parse_categories(job, value)
            elif key == "lists":
                self._parse_lists(job, value)
            elif key == "salaryRange":
                self._parse_salary_range(job, value)
            elif key == "country":
                job.add_metadata("country", clean_str(value))
            elif key == "workplaceType":
                # unspecified, on-site, remote or hybrid
                location_type = classify_location_type(clean_str(value))
                if location_type != LocationType.UNKNOWN:
                    job.set_location_type(location_type)
            else:
                job.add_metadata_value(key, value)

        # workplaceType is authoritative; location names only fill the gap
        categories = data.get("categories")
        if isinstance(categories, dict):
            all_locations = as_list(job, "allLocations", categories.get("allLocations"))
            process_location_types(job, [clean_str(loc) for loc in all_locations])

        return job

    @staticmethod
    def _parse_categories(job: JobRecord, value: Any) -> None:
        if not isinstance(value, dict):
            logger.warning("lever job %s: categories is not an object", job.source_id)
            return

        commitment = clean_str(value.get("commitment"))
        apply_employment_type(job, commitment)
        job.add_metadata("commitment_raw", commitment)

        location = clean_str(value.get("location"))
        if location:
            job.location = location
            job.add_metadata("location_raw", location)

        department = clean_str(value.get("department"))
        if department:
            apply_department(job, department)

        job.add_metadata("team", clean_str(value.get("team")))

        all_locations = [clean_str(loc) for loc in as_list(job, "allLocations", value.get("allLocations"))]
        for loc in all_locations:
            job.add_metadata("secondary_location", loc)

    @staticmethod
    def _parse_lists(job: JobRecord, value: Any) -> None:
        # [{"text": "Requirements", "content": "<li>...</li>"}]
        for item in as_list(job, "lists", value):
            if not isinstance(item, dict):
                continue
            name = clean_str(item.get("text"))
            content = clean_str(item.get("content"))
            if not name or not content:
                continue
            job.add_metadata("lists", name)
            job.add_metadata(VERBATIM_KEY, f"{name}\n{content}")

    @staticmethod
    def _parse_salary_range(job: JobRecord, value: Any) -> None:
        if not isinstance(value, dict):
            return
        if isinstance(value.get("min"), (int, float)):
            job.min_compensation = float(value["min"])
        if isinstance(value.get("max"), (int, float)):
            job.max_compensation = float(value["max"])
        currency = clean_str(value.get("currency"))
        if currency:
            job.compensation_unit = currency
        job.add_metadata("compensation_interval", clean_str(value.get("interval")))
