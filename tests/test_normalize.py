from __future__ import annotations

from datetime import datetime, timezone

import pytest

from jobpilot.models import JobSource
from jobpilot.normalize import (
    check_keywords,
    extract_requirements,
    is_location_admissible,
    normalize_job,
    normalize_records,
)


@pytest.mark.parametrize(
    "location, remote, admitted",
    [
        ("Berlin", False, True),
        ("München, Bayern", False, True),
        ("Paris", False, False),
        ("Remote", True, True),
        ("Remote (Europe)", True, True),
        ("Remote (USA only)", True, False),
        ("Remote (USA only)", False, False),
        ("Remote - London", False, False),
        ("Amsterdam", True, False),
        ("Anywhere", True, True),
        ("Anywhere", False, False),
    ],
)
def test_location_admission(location, remote, admitted):
    assert is_location_admissible(location, remote) is admitted


def test_keyword_matching_is_plain_substring():
    assert check_keywords("Senior Interpreter", ["erp"])
    assert check_keywords("JUNIOR Admin", ["junior"])
    assert not check_keywords("Senior Admin", ["junior"])
    assert not check_keywords("", ["junior"])


def test_extract_requirements_lists_each_key_once():
    reqs = extract_requirements("Linux (Debian, Ubuntu) und LINUX-Server; Active Directory Pflege")
    assert reqs.count("Linux") == 1
    assert "Active Directory" in reqs
    assert extract_requirements("") == []


def test_normalize_arbeitnow(arbeitnow_raw):
    job = normalize_job(arbeitnow_raw(), JobSource.ARBEITNOW)

    assert job is not None
    assert job.id == "Arbeitnow-it-systemadministrator-mwd-1"
    assert job.source is JobSource.ARBEITNOW
    assert job.created_at == datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    assert job.exact_match is True
    assert job.career_switch is False
    assert job.tags == ["IT", "Systemadministration", "Windows"]
    assert job.job_types == ["full_time"]
    for key in ("Active Directory", "Exchange", "VMware", "PowerShell", "Ticketsystem"):
        assert key in job.requirements


def test_active_directory_alias_is_case_insensitive(arbeitnow_raw):
    job = normalize_job(arbeitnow_raw(description="Erfahrung mit ACTIVE DIRECTORY."), JobSource.ARBEITNOW)
    assert job is not None
    assert job.requirements == ["Active Directory"]


def test_junior_career_switch_title(arbeitnow_raw):
    raw = arbeitnow_raw(
        slug="junior-linux-admin-2",
        title="Junior Linux Administrator (Quereinsteiger willkommen)",
        location="München",
        remote=True,
        description="",
    )
    job = normalize_job(raw, JobSource.ARBEITNOW)

    assert job is not None
    assert job.career_switch is True
    assert job.is_junior is True
    assert job.exact_match is True
    assert job.remote is True
    assert job.description == ""


@pytest.mark.parametrize("missing", ["slug", "title", "company_name", "location", "created_at"])
def test_missing_required_field_is_dropped(arbeitnow_raw, missing):
    raw = arbeitnow_raw()
    raw[missing] = None
    assert normalize_job(raw, JobSource.ARBEITNOW) is None


def test_unparseable_timestamp_is_dropped(arbeitnow_raw):
    assert normalize_job(arbeitnow_raw(created_at="not a date"), JobSource.ARBEITNOW) is None


def test_malformed_record_is_dropped_not_raised():
    assert normalize_job(["not", "a", "dict"], JobSource.ARBEITNOW) is None  # type: ignore[arg-type]
    assert normalize_job({"company": "not-a-dict", "title": "x"}, JobSource.ADZUNA) is None


def test_unknown_source_tag_is_fatal():
    with pytest.raises(KeyError):
        normalize_job({}, "Monster")  # type: ignore[arg-type]


def test_normalization_is_idempotent(arbeitnow_raw):
    raw = arbeitnow_raw()
    assert normalize_job(raw, JobSource.ARBEITNOW) == normalize_job(raw, JobSource.ARBEITNOW)

    rejected = arbeitnow_raw(location="Paris")
    assert normalize_job(rejected, JobSource.ARBEITNOW) is None
    assert normalize_job(rejected, JobSource.ARBEITNOW) is None


def test_normalize_adzuna():
    raw = {
        "id": 4711,
        "title": "IT Support Engineer (m/w/d) - Remote",
        "company": {"display_name": "Connectify AG"},
        "location": {"display_name": "Hamburg"},
        "created": "2024-04-23T07:20:13Z",
        "redirect_url": "https://adzuna.com/jobs/1",
        "description": "Ticketsystem, M365-Konten und Onboarding. ITIL ist ein Plus.",
        "category": {"label": "IT Jobs"},
    }
    job = normalize_job(raw, JobSource.ADZUNA)

    assert job is not None
    assert job.id == "Adzuna-4711"
    assert job.company == "Connectify AG"
    assert job.location == "Hamburg"
    assert job.remote is True
    assert job.url == "https://adzuna.com/jobs/1"
    assert job.created_at == datetime(2024, 4, 23, 7, 20, 13, tzinfo=timezone.utc)
    assert job.tags == ["IT Jobs"]
    assert {"Ticketsystem", "Microsoft 365", "ITIL"} <= set(job.requirements)


def test_normalize_jooble_remote_from_snippet():
    raw = {
        "id": -123,
        "title": "Systemadministrator",
        "company": "Nordlicht IT",
        "location": "Remote",
        "snippet": "100% remote möglich, Linux und Bash.",
        "link": "https://jooble.org/desc/-123",
        "updated": "2024-05-02T00:00:00.000",
        "type": "Vollzeit",
    }
    job = normalize_job(raw, JobSource.JOOBLE)

    assert job is not None
    assert job.id == "Jooble--123"
    assert job.remote is True
    assert job.description == raw["snippet"]
    assert job.tags == ["Vollzeit"]
    assert job.created_at == datetime(2024, 5, 2, tzinfo=timezone.utc)


def test_normalize_germantechjobs_office_is_not_remote():
    raw = {
        "id": "gtj-1",
        "title": "DevOps Engineer",
        "company": "Cloudy GmbH",
        "location": "Wien",
        "remote": "Office",
        "url": "https://germantechjobs.de/jobs/gtj-1",
        "epoch": 1714564800,
        "description": "Kubernetes",
    }
    # not German, not remote
    assert normalize_job(raw, JobSource.GERMANTECHJOBS) is None

    job = normalize_job({**raw, "remote": "Full Remote"}, JobSource.GERMANTECHJOBS)
    # remote, but tied to a named non-German city
    assert job is None

    job = normalize_job({**raw, "location": "Remote", "remote": "partial"}, JobSource.GERMANTECHJOBS)
    assert job is not None
    assert job.remote is True


def test_normalize_jobicy_defaults_to_remote():
    raw = {
        "id": 99,
        "jobTitle": "Linux System Administrator",
        "companyName": "Remote First Ltd",
        "url": "https://jobicy.com/jobs/99",
        "pubDate": "2024-05-03 10:00:00",
        "jobDescription": "Ansible and Terraform",
        "jobTag": "linux",
        "jobType": "full-time",
    }
    job = normalize_job(raw, JobSource.JOBICY)

    assert job is not None
    assert job.location == "Remote"
    assert job.remote is True
    assert job.tags == ["linux"]
    assert job.job_types == ["full-time"]
    assert job.requirements == ["Ansible", "Terraform"]

    assert normalize_job({**raw, "jobGeo": "USA"}, JobSource.JOBICY) is not None
    assert normalize_job({**raw, "jobGeo": "North America"}, JobSource.JOBICY) is None


def test_normalize_arbeitsagentur():
    raw = {
        "hashId": "abc123",
        "titel": "Fachinformatiker Systemintegration (m/w/d)",
        "arbeitgeber": "Stadtwerke Leipzig",
        "arbeitsort": {"ort": "Leipzig", "plz": "04109"},
        "aktuelleVeroeffentlichungsdatum": "2024-05-06",
        "arbeitszeit": ["vz", "ho"],
    }
    job = normalize_job(raw, JobSource.ARBEITSAGENTUR)

    assert job is not None
    assert job.id == "Arbeitsagentur-abc123"
    assert job.location == "Leipzig, 04109"
    assert job.remote is True
    assert job.url == "https://www.arbeitsagentur.de/jobsuche/jobdetail/abc123"
    assert job.description == ""

    no_place = {**raw, "arbeitsort": None, "arbeitszeit": ["vz"]}
    assert normalize_job(no_place, JobSource.ARBEITSAGENTUR) is None


def test_normalize_records_discards_rejected(arbeitnow_raw):
    records = [arbeitnow_raw("a"), arbeitnow_raw("b", location="Paris"), arbeitnow_raw("c", title="")]
    jobs = normalize_records(records, JobSource.ARBEITNOW)
    assert [j.id for j in jobs] == ["Arbeitnow-a"]
