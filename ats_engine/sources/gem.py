"""Gem job board connector.

Gem has two shapes for the same job:
- the public job-board API (``job_posts``), Greenhouse-like and snake_case;
- the hosted-board GraphQL API (``oatsExternalJobPosting``), camelCase with a
  nested ``job`` object.

``parse_job`` accepts either and dispatches on its shape.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

import httpx

from .. import http
from ..errors import PayloadError
from ..models import Department, JobRecord, LocationType, new_job_record
from ..normalize import apply_department, classify_employment_type, classify_location_type
from ..utils import as_text, clean_str
from .base import SourceAdapter, as_list, dig, load_payload

logger = logging.getLogger(__name__)

OATS_JOB_QUERY = """
query ExternalJobPostingQuery($boardId: String!, $extId: String!) {
  oatsExternalJobPosting(boardId: $boardId, extId: $extId) {
    id
    title
    descriptionHtml
    extId
    firstPublishedTsSec
    companyLogo
    companyUrl
    locations { id name city isoCountry isRemote extId }
    job {
      id
      locationType
      employmentType
      requisitionId
      teamDisplayName
      department { id name extId }
      locations { id name city isoCountry isRemote extId }
    }
  }
}
"""


def _bool_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return ""


class GemSource(SourceAdapter):
    """Normalize Gem job posts."""

    name = "gem"
    board_url = "https://api.gem.com/job_board/v0/{company}/job_posts/"
    graphql_url = "https://jobs.gem.com/api/public/graphql/batch"
    hosted_url = "https://jobs.gem.com/{company}/{job_id}"

    def __init__(self, client: Optional[httpx.Client] = None) -> None:
        self._client = client

    def fetch_company(self, company: str, limit: Optional[int] = None) -> List[JobRecord]:
        logger.debug("Scraping %s company %s", self.name, company)
        return self._parse_many(http.get_json(self.board_url.format(company=company), client=self._client), limit=limit)

    def fetch_job(self, company: str, job_id: str) -> JobRecord:
        logger.debug("Scraping %s job %s/%s", self.name, company, job_id)
        body = http.post_json(
            self.graphql_url,
            [
                {
                    "operationName": "ExternalJobPostingQuery",
                    "variables": {"boardId": company, "extId": job_id},
                    "query": OATS_JOB_QUERY,
                }
            ],
            client=self._client,
        )
        # batch endpoint: one response per operation
        if isinstance(body, list) and body:
            body = body[0]
        job = self.parse_job(body)
        job.url = self.hosted_url.format(company=company, job_id=job_id)
        return job

    def parse_job(self, payload: Union[Dict[str, Any], str, bytes]) -> JobRecord:
        data = load_payload(payload)
        posting = dig(data, "data", "oatsExternalJobPosting")
        if isinstance(posting, dict):
            return self.parse_oats_job(posting)
        if "extId" in data or "firstPublishedTsSec" in data:
            return self.parse_oats_job(data)
        if "data" in data:
            raise PayloadError("gem: response has no data.oatsExternalJobPosting object")
        return self.parse_board_job(data)

    def parse_board_job(self, data: Dict[str, Any]) -> JobRecord:
        job = new_job_record(self.name, data)

        for key, value in data.items():
            if key == "internal_job_id":
                job.source_id = as_text(value)
            elif key == "id":
                job.add_metadata("gem_id", as_text(value))
            elif key == "title":
                job.title = clean_str(value)
            elif key == "absolute_url":
                job.url = clean_str(value)
            elif key == "content":
                job.description = clean_str(value)
            elif key == "first_published_at":
                job.process_date_posted(value)
            elif key in ("created_at", "updated_at", "requisition_id"):
                job.add_metadata(key, as_text(value))
            elif key == "departments":
                for dept in as_list(job, key, value):
                    name = clean_str(dept.get("name")) if isinstance(dept, dict) else ""
                    if not name:
                        continue
                    if not job.department_raw or job.department == Department.UNKNOWN:
                        apply_department(job, name)
                    job.add_metadata("department", name)
            elif key == "employment_type":
                job.employment_type = classify_employment_type(clean_str(value))
            elif key == "location":
                name = clean_str(value.get("name")) if isinstance(value, dict) else ""
                if name:
                    job.location = name
            elif key == "location_type":
                job.set_location_type(classify_location_type(clean_str(value)))
            elif key == "offices":
                for office in as_list(job, key, value):
                    if not isinstance(office, dict):
                        continue
                    job.add_metadata("office_location", clean_str(office.get("name")))
                    job.add_metadata("office_location_name", clean_str(dig(office, "location", "name")))
            else:
                job.add_metadata_value(key, value)

        return job

    def parse_oats_job(self, data: Dict[str, Any]) -> JobRecord:
        job = new_job_record(self.name, data)

        for key, value in data.items():
            if key == "extId":
                job.source_id = as_text(value)
            elif key == "id":
                job.add_metadata("gem_id", as_text(value))
            elif key == "title":
                job.title = clean_str(value)
            elif key == "descriptionHtml":
                job.description = clean_str(value)
            elif key == "firstPublishedTsSec":
                job.process_date_posted(value)
            elif key == "companyUrl":
                job.company.homepage_url = clean_str(value) or None
            elif key == "companyLogo":
                job.company.logo_url = clean_str(value) or None
            elif key == "locations":
                self._parse_locations(job, value, prefix="location")
                for loc in as_list(job, key, value):
                    name = clean_str(loc.get("name")) if isinstance(loc, dict) else ""
                    if name and not job.location:
                        job.location = name
            elif key == "job":
                self._parse_job_details(job, value)
            else:
                job.add_metadata_value(key, value)

        return job

    def _parse_job_details(self, job: JobRecord, value: Any) -> None:
        if not isinstance(value, dict):
            logger.warning("gem job %s: job is not an object", job.source_id)
            return

        location_type = classify_location_type(clean_str(value.get("locationType")))
        if location_type != LocationType.UNKNOWN:
            job.set_location_type(location_type)

        employment_type = clean_str(value.get("employmentType"))
        if employment_type:
            job.employment_type = classify_employment_type(employment_type)

        dept_name = clean_str(dig(value, "department", "name"))
        if dept_name:
            apply_department(job, dept_name)

        job.add_metadata("team_display_name", clean_str(value.get("teamDisplayName")))
        job.add_metadata("requisition_id", clean_str(value.get("requisitionId")))
        self._parse_locations(job, value.get("locations"), prefix="job_location")

    @staticmethod
    def _parse_locations(job: JobRecord, value: Any, prefix: str) -> None:
        for loc in as_list(job, prefix, value):
            if not isinstance(loc, dict):
                continue
            if prefix != "location":
                job.add_metadata(f"{prefix}_name", clean_str(loc.get("name")))
            job.add_metadata(f"{prefix}_city", clean_str(loc.get("city")))
            job.add_metadata(f"{prefix}_country", clean_str(loc.get("isoCountry")))
            job.add_metadata(f"{prefix}_is_remote", _bool_text(loc.get("isRemote")))
