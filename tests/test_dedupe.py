from __future__ import annotations

from jobpilot.dedupe import dedupe_jobs, dedupe_key
from jobpilot.models import JobSource


def test_cross_listed_posting_keeps_first_copy(make_job):
    first = make_job(id="Arbeitnow-1")
    dup = make_job(
        id="Adzuna-9",
        source=JobSource.ADZUNA,
        title="  it systemadministrator (M/W/D) ",
        company="TECH SOLUTIONS GMBH",
        location="berlin",
    )
    other_city = make_job(id="Arbeitnow-2", location="Hamburg")

    out = dedupe_jobs([first, dup, other_city])

    assert [j.id for j in out] == ["Arbeitnow-1", "Arbeitnow-2"]
    assert dedupe_key(first) == dedupe_key(dup)


def test_dedupe_is_idempotent(make_job):
    jobs = [make_job(id=f"Arbeitnow-{i}", company=f"Firma {i % 2}") for i in range(4)]
    once = dedupe_jobs(jobs)
    assert len(once) == 2
    assert dedupe_jobs(once) == once


def test_empty_input():
    assert dedupe_jobs([]) == []
