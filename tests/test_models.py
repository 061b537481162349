from __future__ import annotations

import json
from datetime import datetime, timezone

from ats_engine.models import Department, EmploymentType, JobRecord, LocationType
from ats_engine.sources.greenhouse import GreenhouseSource


GREENHOUSE_JOB = {
    "id": 4012345,
    "title": "Staff Data Engineer",
    "absolute_url": "https://boards.greenhouse.io/acme/jobs/4012345",
    "company_name": "Acme",
    "first_published": "2024-02-01T09:00:00-05:00",
    "location": {"name": "Remote - Canada"},
    "departments": [{"id": 1, "name": "Data"}],
    "requisition_id": "REQ-77",
    "internal_job_id": 998877,
    "data_compliance": [{"type": "gdpr", "requires_consent": False}],
}


def test_json_round_trip_preserves_tags():
    job = GreenhouseSource().parse_job(GREENHOUSE_JOB)
    assert job.get_metadata("requisition_id") == ["REQ-77"]
    assert job.get_metadata("data_compliance_type") == ["gdpr"]

    dumped = json.loads(job.model_dump_json())
    again = JobRecord.model_validate(dumped)

    assert again.tags.to_dict() == job.tags.to_dict()
    assert again.date_posted == datetime(2024, 2, 1, 14, 0, tzinfo=timezone.utc)
    assert again.raw == GREENHOUSE_JOB
    assert again.model_dump() == job.model_dump()


def test_enums_serialize_as_strings():
    job = GreenhouseSource().parse_job(GREENHOUSE_JOB)
    data = job.model_dump(mode="json")

    assert data["department"] == "data"
    assert data["location_type"] == "remote"
    assert data["employment_type"] == "unknown"
    assert data["equity"] == "unknown"
    assert data["tags"]["department"] == ["Data"]


def test_load_from_stored_strings():
    job = JobRecord.model_validate(
        {
            "source": "lever",
            "department": "software_engineering",
            "employment_type": "full_time",
            "location_type": "hybrid",
            "tags": {"team": ["Core"]},
        }
    )

    assert job.department == Department.SOFTWARE_ENGINEERING
    assert job.employment_type == EmploymentType.FULL_TIME
    assert job.location_type == LocationType.HYBRID
    assert job.get_metadata("team") == ["Core"]
