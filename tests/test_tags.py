from __future__ import annotations

from ats_engine.models import new_job_record
from ats_engine.tags import VERBATIM_KEY, MetadataTagStore


def test_add_metadata_is_idempotent():
    job = new_job_record("greenhouse")
    job.add_metadata("team", "Platform")
    job.add_metadata("team", "Platform")

    assert job.get_metadata("team") == ["Platform"]


def test_add_metadata_splits_on_commas():
    job = new_job_record("ashby")
    job.add_metadata("secondary_location", "Paris, Berlin")
    job.add_metadata("secondary_location", "Berlin")

    assert job.get_metadata("secondary_location") == ["Paris", "Berlin"]


def test_empty_key_or_value_is_ignored():
    store = MetadataTagStore()
    store.add("", "x")
    store.add("team", "")
    store.add("team", " , ")

    assert len(store) == 0
    assert "team" not in store


def test_verbatim_key_keeps_commas():
    store = MetadataTagStore()
    text = "Requirements\nPython, SQL, and a love of data"
    store.add(VERBATIM_KEY, text)

    assert store.get(VERBATIM_KEY) == [text]


def test_get_returns_a_copy():
    store = MetadataTagStore()
    store.add("team", "Core")
    store.get("team").append("Other")

    assert store.get("team") == ["Core"]
    assert store.get("missing") == []


def test_add_metadata_value_flattens_json():
    job = new_job_record("lever")
    job.add_metadata_value("remote", True)
    job.add_metadata_value("headcount", 3)
    job.add_metadata_value("skills", ["go", "python"])
    job.add_metadata_value("pay", {"min": 10, "interval": "per-year-salary"})
    job.add_metadata_value("nothing", None)

    assert job.get_metadata("remote") == ["true"]
    assert job.get_metadata("headcount") == ["3"]
    assert job.get_metadata("skills") == ["go", "python"]
    assert job.get_metadata("pay_min") == ["10"]
    assert job.get_metadata("pay_interval") == ["per-year-salary"]
    assert "nothing" not in job.tags


def test_to_dict_is_a_detached_copy():
    store = MetadataTagStore()
    store.add("team", "Core")
    store.add("office", "Paris")

    snapshot = store.to_dict()
    snapshot["team"].append("Other")

    assert snapshot == {"team": ["Core", "Other"], "office": ["Paris"]}
    assert store.get("team") == ["Core"]
    assert [key for key, _ in store.items()] == ["team", "office"]
