"""Rippling ATS connector.

The board endpoint lists job summaries under ``items``; each job is then
fetched from its own endpoint.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

import httpx

from .. import http
from ..errors import PayloadError
from ..models import JobRecord, new_job_record
from ..normalize import apply_department, apply_employment_type, process_location_types
from ..utils import as_text, clean_str
from .base import SourceAdapter, as_list, dig, load_payload

logger = logging.getLogger(__name__)


class RipplingSource(SourceAdapter):
    """Normalize Rippling board jobs."""

    name = "rippling"
    company_url = "https://ats.rippling.com/api/v2/board/{company}/jobs"
    job_url = "https://ats.rippling.com/api/v2/board/{company}/jobs/{job_id}"

    def __init__(self, client: Optional[httpx.Client] = None) -> None:
        self._client = client

    def fetch_company(self, company: str, limit: Optional[int] = None) -> List[JobRecord]:
        logger.debug("Scraping %s company %s", self.name, company)
        board = load_payload(http.get_json(self.company_url.format(company=company), client=self._client))

        jobs: List[JobRecord] = []
        for item in board.get("items") or []:
            if limit is not None and len(jobs) >= limit:
                break
            job_id = clean_str(item.get("id")) if isinstance(item, dict) else ""
            if not job_id:
                logger.error("%s: job without an id in board for %s", self.name, company)
                continue
            try:
                jobs.append(self.fetch_job(company, job_id))
            except (PayloadError, httpx.HTTPError) as exc:
                logger.error("%s: error scraping job %s: %s", self.name, job_id, exc)
        return jobs

    def fetch_job(self, company: str, job_id: str) -> JobRecord:
        logger.debug("Scraping %s job %s/%s", self.name, company, job_id)
        return self.parse_job(http.get_json(self.job_url.format(company=company, job_id=job_id), client=self._client))

    def parse_job(self, payload: Union[Dict[str, Any], str, bytes]) -> JobRecord:
        data = load_payload(payload)
        job = new_job_record(self.name, data)

        for key, value in data.items():
            if key == "uuid":
                job.source_id = as_text(value)
            elif key == "name":
                job.title = clean_str(value)
            elif key == "description":
                # {"role": "<p>...</p>", "company": "<p>About us</p>"}
                if isinstance(value, dict):
                    job.description = clean_str(value.get("role"))
                    job.company.description = clean_str(value.get("company")) or None
                else:
                    job.description = clean_str(value)
            elif key == "workLocations":
                locations = [clean_str(loc) for loc in as_list(job, key, value)]
                for location in locations:
                    if not job.location:
                        job.location = location
                    job.add_metadata("work_location", location)
                process_location_types(job, locations)
            elif key == "department":
                name = clean_str(dig(value, "name")) if isinstance(value, dict) else clean_str(value)
                if name:
                    apply_department(job, name)
            elif key == "employmentType":
                label = clean_str(dig(value, "label")) if isinstance(value, dict) else clean_str(value)
                apply_employment_type(job, label)
            elif key == "createdOn":
                job.process_date_posted(value)
            elif key == "url":
                job.url = clean_str(value)
            elif key == "board":
                if isinstance(value, dict):
                    job.company.homepage_url = clean_str(value.get("boardURL")) or None
                    job.company.logo_url = clean_str(value.get("logo")) or None
            elif key == "companyName":
                job.company.name = clean_str(value)
            else:
                job.add_metadata_value(key, value)

        return job
