from __future__ import annotations

from ats_engine.models import Department, EmploymentType, Location, LocationType, new_job_record
from ats_engine.normalize import (
    ALTERNATE_COMMITMENTS_KEY,
    ALTERNATE_LOCATIONS_KEY,
    apply_department,
    apply_employment_type,
    classify_department,
    classify_employment_type,
    classify_location_type,
    process_commitments,
    process_location_types,
)


def test_classify_department():
    assert classify_department("Engineering") == Department.SOFTWARE_ENGINEERING
    assert classify_department("  Data Science ") == Department.DATA
    assert classify_department("Customer Success & Support") == Department.CUSTOMER_SUCCESS_SUPPORT
    assert classify_department("") == Department.UNKNOWN
    assert classify_department("Legal") == Department.UNKNOWN


def test_apply_department_keeps_raw_label():
    job = new_job_record("rippling")
    apply_department(job, "Product")

    assert job.department == Department.PRODUCT_MANAGEMENT
    assert job.department_raw == "Product"


def test_classify_employment_type():
    assert classify_employment_type("Full-time") == EmploymentType.FULL_TIME
    assert classify_employment_type("PART_TIME") == EmploymentType.PART_TIME
    assert classify_employment_type("Intern") == EmploymentType.INTERNSHIP
    assert classify_employment_type("whenever") == EmploymentType.UNKNOWN


def test_process_commitments_rules():
    part = new_job_record("lever")
    process_commitments(part, ["Regular Part Time"])
    assert part.employment_type == EmploymentType.PART_TIME

    contract = new_job_record("lever")
    process_commitments(contract, ["Fixed Term"])
    assert contract.employment_type == EmploymentType.CONTRACT

    full = new_job_record("lever")
    process_commitments(full, ["Permanent"])
    assert full.employment_type == EmploymentType.FULL_TIME


def test_process_commitments_is_write_once():
    job = new_job_record("lever")
    job.employment_type = EmploymentType.FULL_TIME
    process_commitments(job, ["Part-time"])

    assert job.employment_type == EmploymentType.FULL_TIME
    assert job.get_metadata(ALTERNATE_COMMITMENTS_KEY) == ["part-time"]


def test_apply_employment_type_falls_back_to_commitments():
    job = new_job_record("rippling")
    apply_employment_type(job, "Salaried, part-time")

    assert job.employment_type == EmploymentType.PART_TIME


def test_classify_location_type():
    assert classify_location_type("Remote") == LocationType.REMOTE
    assert classify_location_type("OnSite") == LocationType.ONSITE
    assert classify_location_type("on_site") == LocationType.ONSITE
    assert classify_location_type("Remote - US") == LocationType.REMOTE
    assert classify_location_type("Hybrid (London)") == LocationType.HYBRID
    assert classify_location_type("Work from anywhere") == LocationType.REMOTE
    assert classify_location_type("New York, NY") == LocationType.UNKNOWN


def test_process_location_types_first_match_wins():
    job = new_job_record("greenhouse")
    process_location_types(job, ["New York", "Remote - US", "Hybrid"])

    assert job.location_type == LocationType.REMOTE
    assert job.is_remote is True
    assert job.get_metadata(ALTERNATE_LOCATIONS_KEY) == ["new york"]


def test_process_location_types_is_write_once():
    job = new_job_record("greenhouse")
    job.set_location_type(LocationType.REMOTE)
    process_location_types(job, ["Onsite - NY"])

    assert job.location_type == LocationType.REMOTE
    assert "onsite - ny" in job.get_metadata(ALTERNATE_LOCATIONS_KEY)


def test_empty_lists_do_not_reset():
    job = new_job_record("lever")
    job.set_location_type(LocationType.HYBRID)
    job.employment_type = EmploymentType.CONTRACT
    process_location_types(job, [])
    process_commitments(job, [])

    assert job.location_type == LocationType.HYBRID
    assert job.employment_type == EmploymentType.CONTRACT


def test_location_from_payload_and_str():
    loc = Location.from_payload({"city": "Athens", "region": "Attica", "postalCode": "105 57", "country": "Greece"})
    assert str(loc) == "Athens, Attica 105 57, Greece"

    place = Location.from_payload(
        {"@type": "Place", "address": {"addressLocality": "Berlin", "addressCountry": "DE"}}
    )
    assert str(place) == "Berlin, DE"

    assert str(Location.from_payload("somewhere")) == ""
