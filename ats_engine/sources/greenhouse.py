"""Greenhouse job board connector.

Docs: https://developers.greenhouse.io/job-board.html

The board API returns complete job objects (with ``content=true``) from the
list endpoint, so a company scrape needs a single request.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

import httpx

from .. import http
from ..models import Department, EmploymentType, JobRecord, new_job_record
from ..normalize import apply_department, classify_department, classify_employment_type, process_location_types
from ..utils import as_text, clean_str
from .base import SourceAdapter, as_list, load_payload

logger = logging.getLogger(__name__)


class GreenhouseSource(SourceAdapter):
    """Normalize Greenhouse board jobs."""

    name = "greenhouse"
    company_url = "https://boards-api.greenhouse.io/v1/boards/{company}/jobs?content=true&pay_transparency=true"
    job_url = "https://boards-api.greenhouse.io/v1/boards/{company}/jobs/{job_id}?content=true&pay_transparency=true"

    def __init__(self, client: Optional[httpx.Client] = None) -> None:
        self._client = client

    def fetch_company(self, company: str, limit: Optional[int] = None) -> List[JobRecord]:
        logger.debug("Scraping %s company %s", self.name, company)
        payload = load_payload(http.get_json(self.company_url.format(company=company), client=self._client))
        return self._parse_many(payload.get("jobs"), limit=limit)

    def fetch_job(self, company: str, job_id: str) -> JobRecord:
        logger.debug("Scraping %s job %s/%s", self.name, company, job_id)
        return self.parse_job(http.get_json(self.job_url.format(company=company, job_id=job_id), client=self._client))

    def parse_job(self, payload: Union[Dict[str, Any], str, bytes]) -> JobRecord:
        data = load_payload(payload)
        job = new_job_record(self.name, data)

        for key, value in data.items():
            if key == "id":
                job.source_id = as_text(value)
            elif key == "title":
                job.title = clean_str(value)
            elif key == "absolute_url":
                job.url = clean_str(value)
            elif key == "content":
                job.description = clean_str(value)
            elif key == "company_name":
                job.company.name = clean_str(value)
                job.add_metadata("company_name", clean_str(value))
            elif key == "first_published":
                job.process_date_posted(value)
            elif key == "updated_at":
                job.add_metadata("updated_at", clean_str(value))
            elif key == "location":
                name = clean_str(value.get("name")) if isinstance(value, dict) else ""
                if name:
                    job.location = name
                    process_location_types(job, [name])
            elif key == "departments":
                self._parse_departments(job, value)
            elif key == "offices":
                self._parse_offices(job, value)
            elif key == "metadata":
                self._parse_metadata(job, value)
            elif key == "pay_input_ranges":
                self._parse_pay_ranges(job, value)
            else:
                job.add_metadata_value(key, value)

        return job

    @staticmethod
    def _parse_departments(job: JobRecord, value: Any) -> None:
        for dept in as_list(job, "departments", value):
            name = clean_str(dept.get("name")) if isinstance(dept, dict) else ""
            if not name:
                continue
            if not job.department_raw:
                apply_department(job, name)
            elif job.department == Department.UNKNOWN:
                job.department = classify_department(name)
            job.add_metadata("department", name)

    @staticmethod
    def _parse_offices(job: JobRecord, value: Any) -> None:
        for office in as_list(job, "offices", value):
            if not isinstance(office, dict):
                continue
            job.add_metadata("offices", clean_str(office.get("name")))
            job.add_metadata("office_location", clean_str(office.get("location")))

    @staticmethod
    def _parse_metadata(job: JobRecord, value: Any) -> None:
        # [{"id": 123, "name": "Employment Type", "value": "Full-time", "value_type": "single_select"}]
        for entry in as_list(job, "metadata", value):
            if not isinstance(entry, dict):
                continue
            meta_key = clean_str(entry.get("name")) or as_text(entry.get("id"))
            if not meta_key:
                continue
            meta_value = entry.get("value")
            job.add_metadata_value(meta_key, meta_value)

            if "employment type" in meta_key.lower() and isinstance(meta_value, str):
                if job.employment_type == EmploymentType.UNKNOWN:
                    job.employment_type = classify_employment_type(meta_value)

    @staticmethod
    def _parse_pay_ranges(job: JobRecord, value: Any) -> None:
        ranges = as_list(job, "pay_input_ranges", value)
        if not ranges or not isinstance(ranges[0], dict):
            return
        first = ranges[0]
        # amounts are in cents
        if isinstance(first.get("min_cents"), (int, float)):
            job.min_compensation = first["min_cents"] / 100
        if isinstance(first.get("max_cents"), (int, float)):
            job.max_compensation = first["max_cents"] / 100
        currency = clean_str(first.get("currency_type"))
        if currency:
            job.compensation_unit = currency
        job.add_metadata_value("pay_input_ranges", ranges)
