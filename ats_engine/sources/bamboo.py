"""BambooHR careers-site connector.

Each company has its own ``<company>.bamboohr.com`` host with a job list, a
per-job detail endpoint and a company-info endpoint.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Dict, List, Optional, Union

import httpx

from .. import http
from ..compensation import apply_compensation
from ..errors import PayloadError
from ..models import Company, JobRecord, Location, LocationType, new_job_record
from ..normalize import apply_department, classify_employment_type
from ..utils import as_text, clean_str
from .base import SourceAdapter, dig, load_payload

logger = logging.getLogger(__name__)

# BambooHR encodes the workplace as a numeric code.
LOCATION_TYPE_CODES = MappingProxyType(
    {
        "0": LocationType.ONSITE,
        "1": LocationType.REMOTE,
        "2": LocationType.HYBRID,
    }
)


class BambooSource(SourceAdapter):
    """Normalize BambooHR job openings."""

    name = "bamboo"
    list_url = "https://{company}.bamboohr.com/careers/list"
    job_url = "https://{company}.bamboohr.com/careers/{job_id}/detail"
    company_info_url = "https://{company}.bamboohr.com/careers/company-info"

    def __init__(self, client: Optional[httpx.Client] = None) -> None:
        self._client = client

    def fetch_company_info(self, company: str) -> Company:
        return self.parse_company(http.get_json(self.company_info_url.format(company=company), client=self._client))

    def fetch_company(self, company: str, limit: Optional[int] = None) -> List[JobRecord]:
        logger.debug("Scraping %s company %s", self.name, company)
        listing = load_payload(http.get_json(self.list_url.format(company=company), client=self._client))

        info: Optional[Company] = None
        try:
            info = self.fetch_company_info(company)
        except (PayloadError, httpx.HTTPError) as exc:
            logger.error("%s: error scraping company info for %s: %s", self.name, company, exc)

        jobs: List[JobRecord] = []
        for item in listing.get("result") or []:
            if limit is not None and len(jobs) >= limit:
                break
            job_id = as_text(item.get("id")) if isinstance(item, dict) else ""
            if not job_id:
                continue
            try:
                job = self._fetch_job_detail(company, job_id)
            except (PayloadError, httpx.HTTPError) as exc:
                logger.error("%s: error scraping job %s: %s", self.name, job_id, exc)
                continue
            if info is not None:
                job.company = info.model_copy()
            jobs.append(job)
        return jobs

    def _fetch_job_detail(self, company: str, job_id: str) -> JobRecord:
        return self.parse_job(http.get_json(self.job_url.format(company=company, job_id=job_id), client=self._client))

    def fetch_job(self, company: str, job_id: str) -> JobRecord:
        logger.debug("Scraping %s job %s/%s", self.name, company, job_id)
        job = self._fetch_job_detail(company, job_id)
        try:
            job.company = self.fetch_company_info(company)
        except (PayloadError, httpx.HTTPError) as exc:
            logger.error("%s: error scraping company info for %s: %s", self.name, company, exc)
        return job

    @staticmethod
    def parse_company(payload: Union[Dict[str, Any], str, bytes]) -> Company:
        result = load_payload(payload).get("result")
        if not isinstance(result, dict):
            raise PayloadError("bamboo: company info has no result object")
        return Company(
            name=clean_str(result.get("name")),
            homepage_url=clean_str(result.get("careerShareUrl")) or None,
            logo_url=clean_str(result.get("logoUrl")) or None,
        )

    def parse_job(self, payload: Union[Dict[str, Any], str, bytes]) -> JobRecord:
        data = load_payload(payload)
        opening = dig(data, "result", "jobOpening")
        if not isinstance(opening, dict):
            raise PayloadError("bamboo: response has no result.jobOpening object")

        job = new_job_record(self.name, opening)

        for key, value in opening.items():
            if key == "jobOpeningShareUrl":
                # sometimes over-escaped, like https:\/\/acme.bamboohr.com\/careers\/25
                url = clean_str(value).replace("\\/", "/")
                job.url = url
                job.source_id = url.rstrip("/").rsplit("/", 1)[-1]
            elif key == "id":
                job.add_metadata("bamboo_id", as_text(value))
                if not job.source_id:
                    job.source_id = as_text(value)
            elif key == "jobOpeningName":
                job.title = clean_str(value)
            elif key == "departmentLabel":
                apply_department(job, clean_str(value))
            elif key == "employmentStatusLabel":
                job.employment_type = classify_employment_type(clean_str(value))
            elif key == "description":
                job.description = clean_str(value)
            elif key == "datePosted":
                job.process_date_posted(value)
            elif key == "compensation":
                text = clean_str(value)
                if text:
                    apply_compensation(job, text)
                    job.add_metadata("compensation", text)
            elif key == "locationType":
                location_type = LOCATION_TYPE_CODES.get(as_text(value))
                if location_type is not None:
                    job.set_location_type(location_type)
                else:
                    job.add_metadata("location_type_code", as_text(value))
            elif key in ("location", "atsLocation"):
                location = str(Location.from_payload(value))
                if not job.location:
                    job.location = location
                job.add_metadata(key, location)
            else:
                job.add_metadata_value(key, value)

        return job
