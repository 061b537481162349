"""Ashby job board connector.

The public posting API lists job ids; each job's details (including the
compensation summary and JSON-LD) come from the hosted-page GraphQL endpoint.
Company info is a separate GraphQL query.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

import httpx

from .. import http
from ..compensation import apply_compensation
from ..errors import PayloadError
from ..models import Company, JobRecord, Location, LocationType, new_job_record
from ..normalize import apply_department, classify_employment_type, classify_location_type
from ..tags import VERBATIM_KEY
from ..utils import as_text, clean_str
from .base import SourceAdapter, as_list, dig, load_payload

logger = logging.getLogger(__name__)

JOB_POSTING_FIELDS = """
compensationPhilosophyHtml
compensationTiers { id title tierSummary }
compensationTierSummary
departmentName
descriptionHtml
employmentType
id
isConfidential
isListed
linkedData
locationAddress
locationName
publishedDate
scrapeableCompensationSalarySummary
secondaryLocationNames
teamNames
title
workplaceType
"""

JOB_POSTING_QUERY = (
    "query ApiJobPosting($organizationHostedJobsPageName: String!, $jobPostingId: String!) {"
    " jobPosting(organizationHostedJobsPageName: $organizationHostedJobsPageName, jobPostingId: $jobPostingId) {"
    + JOB_POSTING_FIELDS
    + "} }"
)

ORGANIZATION_QUERY = (
    "query ApiOrganizationFromHostedJobsPageName($organizationHostedJobsPageName: String!) {"
    " organization: organizationFromHostedJobsPageName("
    " organizationHostedJobsPageName: $organizationHostedJobsPageName, searchContext: JobBoard) {"
    " name publicWebsite timezone theme { logoSquareImageUrl } } }"
)


class AshbySource(SourceAdapter):
    """Normalize Ashby job postings."""

    name = "ashby"
    company_url = "https://api.ashbyhq.com/posting-api/job-board/{company}?includeCompensation=true"
    graphql_url = "https://jobs.ashbyhq.com/api/non-user-graphql?op={op}"
    hosted_url = "https://jobs.ashbyhq.com/{company}/{job_id}"

    def __init__(self, client: Optional[httpx.Client] = None) -> None:
        self._client = client

    def fetch_company_info(self, company: str) -> Company:
        body = http.post_json(
            self.graphql_url.format(op="ApiOrganizationFromHostedJobsPageName"),
            {
                "operationName": "ApiOrganizationFromHostedJobsPageName",
                "variables": {"organizationHostedJobsPageName": company},
                "query": ORGANIZATION_QUERY,
            },
            client=self._client,
        )
        return self.parse_company(body)

    def fetch_company(self, company: str, limit: Optional[int] = None) -> List[JobRecord]:
        logger.debug("Scraping %s company %s", self.name, company)
        info = self.fetch_company_info(company)
        board = load_payload(http.get_json(self.company_url.format(company=company), client=self._client))

        jobs: List[JobRecord] = []
        for item in board.get("jobs") or []:
            if limit is not None and len(jobs) >= limit:
                break
            job_id = clean_str(item.get("id")) if isinstance(item, dict) else ""
            if not job_id:
                logger.error("%s: job without an id in board for %s", self.name, company)
                continue
            try:
                job = self.fetch_job(company, job_id)
            except (PayloadError, httpx.HTTPError) as exc:
                logger.error("%s: error scraping job %s: %s", self.name, job_id, exc)
                continue
            if not job.company.name:
                job.company = info.model_copy()
            jobs.append(job)
        return jobs

    def fetch_job(self, company: str, job_id: str) -> JobRecord:
        logger.debug("Scraping %s job %s/%s", self.name, company, job_id)
        body = http.post_json(
            self.graphql_url.format(op="ApiJobPosting"),
            {
                "operationName": "ApiJobPosting",
                "variables": {"organizationHostedJobsPageName": company, "jobPostingId": job_id},
                "query": JOB_POSTING_QUERY,
            },
            client=self._client,
        )
        job = self.parse_job(body)
        job.url = self.hosted_url.format(company=company, job_id=job_id)
        return job

    @staticmethod
    def parse_company(payload: Union[Dict[str, Any], str, bytes]) -> Company:
        org = dig(load_payload(payload), "data", "organization")
        if not isinstance(org, dict):
            raise PayloadError("ashby: response has no data.organization object")
        company = Company(name=clean_str(org.get("name")))
        company.homepage_url = clean_str(org.get("publicWebsite")) or None
        company.logo_url = clean_str(dig(org, "theme", "logoSquareImageUrl")) or None
        return company

    def parse_job(self, payload: Union[Dict[str, Any], str, bytes]) -> JobRecord:
        data = load_payload(payload)
        posting = dig(data, "data", "jobPosting")
        if posting is None and "id" in data:
            posting = data
        if not isinstance(posting, dict):
            raise PayloadError("ashby: response has no data.jobPosting object")

        job = new_job_record(self.name, posting)

        for key, value in posting.items():
            if key == "id":
                job.source_id = as_text(value)
            elif key == "title":
                job.title = clean_str(value)
            elif key == "descriptionHtml":
                job.description = clean_str(value)
            elif key == "compensationTierSummary":
                # "$155K - $190K" or "€185K - €317K • Offers Equity"
                summary = clean_str(value)
                if summary:
                    apply_compensation(job, summary)
                    job.add_metadata("compensation_summary", summary)
            elif key == "departmentName":
                apply_department(job, clean_str(value))
            elif key == "employmentType":
                job.employment_type = classify_employment_type(clean_str(value))
            elif key == "linkedData":
                self._parse_linked_data(job, value)
            elif key == "locationName":
                job.location = clean_str(value)
            elif key == "publishedDate":
                job.process_date_posted(value)
            elif key == "secondaryLocationNames":
                for name in as_list(job, key, value):
                    job.add_metadata("secondary_location", clean_str(name))
            elif key == "teamNames":
                for name in as_list(job, key, value):
                    job.add_metadata("team", clean_str(name))
            elif key == "workplaceType":
                # Remote, Hybrid or OnSite
                location_type = classify_location_type(clean_str(value))
                if location_type != LocationType.UNKNOWN:
                    job.set_location_type(location_type)
                else:
                    job.is_remote = False
            else:
                job.add_metadata_value(key, value)

        return job

    @staticmethod
    def _parse_linked_data(job: JobRecord, value: Any) -> None:
        if not isinstance(value, dict):
            logger.warning("ashby job %s: linkedData is not an object", job.source_id)
            return

        for ld_key, ld_value in value.items():
            if ld_key == "title":
                if not job.title:
                    logger.debug("Setting job title from linkedData: %r", ld_value)
                    job.title = clean_str(ld_value)
            elif ld_key == "hiringOrganization" and isinstance(ld_value, dict):
                job.company.name = clean_str(ld_value.get("name")) or job.company.name
                job.company.homepage_url = clean_str(ld_value.get("sameAs")) or job.company.homepage_url
                job.company.logo_url = clean_str(ld_value.get("logo")) or job.company.logo_url
            elif ld_key == "jobLocation":
                places = ld_value if isinstance(ld_value, list) else [ld_value]
                for place in places:
                    location = str(Location.from_payload(place))
                    if not job.location:
                        job.location = location
                    job.add_metadata("linked_data_location", location)
            elif ld_key == "description":
                job.add_metadata(VERBATIM_KEY, clean_str(ld_value))
            else:
                job.add_metadata_value(f"linked_data_{ld_key}", ld_value)
