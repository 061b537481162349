"""Workable careers-page connector.

The v3 accounts endpoint lists jobs (it wants a POST with an empty filter),
and the v2 endpoint returns one job by its shortcode.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Dict, List, Optional, Union

import httpx

from .. import http
from ..errors import PayloadError
from ..models import Department, EmploymentType, JobRecord, Location, LocationType, new_job_record
from ..normalize import apply_department, classify_employment_type, classify_location_type
from ..tags import VERBATIM_KEY
from ..utils import as_text, clean_str
from .base import SourceAdapter, as_list, load_payload

logger = logging.getLogger(__name__)

EMPTY_FILTER = {"query": "", "department": [], "location": [], "remote": [], "workplace": [], "worktype": []}

# Workable's own "type" vocabulary
EMPLOYMENT_TYPE_CODES = MappingProxyType(
    {
        "full": EmploymentType.FULL_TIME,
        "part": EmploymentType.PART_TIME,
        "contract": EmploymentType.CONTRACT,
        "temporary": EmploymentType.TEMPORARY,
        "internship": EmploymentType.INTERNSHIP,
    }
)


class WorkableSource(SourceAdapter):
    """Normalize Workable jobs."""

    name = "workable"
    company_url = "https://apply.workable.com/api/v3/accounts/{company}/jobs"
    job_url = "https://apply.workable.com/api/v2/accounts/{company}/jobs/{job_id}"

    def __init__(self, client: Optional[httpx.Client] = None) -> None:
        self._client = client

    def fetch_company(self, company: str, limit: Optional[int] = None) -> List[JobRecord]:
        logger.debug("Scraping %s company %s", self.name, company)
        listing = load_payload(http.post_json(self.company_url.format(company=company), EMPTY_FILTER, client=self._client))
        items = listing.get("results")
        if items is None:
            items = listing.get("jobs")

        jobs: List[JobRecord] = []
        for item in items or []:
            if limit is not None and len(jobs) >= limit:
                break
            shortcode = as_text(item.get("shortcode")) if isinstance(item, dict) else ""
            if not shortcode:
                logger.error("%s: job without a shortcode for %s", self.name, company)
                continue
            try:
                jobs.append(self.fetch_job(company, shortcode))
            except (PayloadError, httpx.HTTPError) as exc:
                logger.error("%s: error scraping job %s: %s", self.name, shortcode, exc)
        return jobs

    def fetch_job(self, company: str, job_id: str) -> JobRecord:
        logger.debug("Scraping %s job %s/%s", self.name, company, job_id)
        return self.parse_job(http.get_json(self.job_url.format(company=company, job_id=job_id), client=self._client))

    def parse_job(self, payload: Union[Dict[str, Any], str, bytes]) -> JobRecord:
        data = load_payload(payload)
        job = new_job_record(self.name, data)

        for key, value in data.items():
            if key == "id":
                job.add_metadata("workable_id", as_text(value))
            elif key == "shortcode":
                job.source_id = as_text(value)
            elif key == "title":
                job.title = clean_str(value)
            elif key == "remote":
                # a remote workplace keeps the flag set
                if value is True and job.location_type == LocationType.UNKNOWN:
                    job.set_location_type(LocationType.REMOTE)
                elif isinstance(value, bool) and job.location_type != LocationType.REMOTE:
                    job.is_remote = value
            elif key == "location":
                self._add_location(job, value)
            elif key == "locations":
                for loc in as_list(job, key, value):
                    self._add_location(job, loc)
            elif key == "published":
                job.process_date_posted(value)
            elif key == "type":
                label = clean_str(value)
                job.employment_type = EMPLOYMENT_TYPE_CODES.get(label.lower()) or classify_employment_type(label)
            elif key == "department":
                departments = value if isinstance(value, list) else [value]
                for dept in departments:
                    name = clean_str(dept)
                    if not name:
                        continue
                    if job.department == Department.UNKNOWN:
                        apply_department(job, name)
                    job.add_metadata("department", name)
            elif key == "workplace":
                # on_site, remote or hybrid
                location_type = classify_location_type(clean_str(value))
                if location_type != LocationType.UNKNOWN:
                    job.set_location_type(location_type)
            elif key == "description":
                job.description = clean_str(value)
            elif key in ("requirements", "benefits"):
                job.add_metadata(VERBATIM_KEY, clean_str(value))
            else:
                job.add_metadata_value(key, value)

        return job

    @staticmethod
    def _add_location(job: JobRecord, value: Any) -> None:
        if not isinstance(value, dict):
            return
        location = str(Location.from_payload(value))
        if not location:
            return
        if not job.location:
            job.location = location
        job.add_metadata("parsed_location", location)
