"""Normalization & heuristics.

This module turns one raw provider record into a canonical `Job`:
- per-source field mapping (one mapper per source tag)
- required-field checks
- the German locale admission filter
- keyword classification (target role, career switch, junior level)
- skill requirement extraction against the taxonomy

Everything here is deterministic: the same raw record and source tag always
produce the same Job or always produce None.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, NamedTuple, Optional

from pydantic import ValidationError

from .keywords import (
    CAREER_SWITCH_KEYWORDS,
    FORBIDDEN_REMOTE_LOCATIONS,
    GERMAN_LOCATION_KEYWORDS,
    IT_SYSADMIN_KEYWORDS,
    JUNIOR_LEVEL_KEYWORDS,
    NON_GERMAN_CITIES,
    SKILL_TAXONOMY,
    Skill,
)
from .models import Job, JobSource
from .utils import parse_timestamp, uniq_preserve_order

logger = logging.getLogger(__name__)

ARBEITSAGENTUR_DETAIL_URL = "https://www.arbeitsagentur.de/jobsuche/jobdetail/{hash_id}"


def normalize_text(text: str) -> str:
    return (text or "").lower().strip()


def check_keywords(text: str, keywords: Iterable[str]) -> bool:
    """True if any keyword occurs in the text (case-insensitive substring)."""
    t = normalize_text(text)
    return any(kw.lower() in t for kw in keywords)


def extract_requirements(description: str, taxonomy: Iterable[Skill] = SKILL_TAXONOMY) -> List[str]:
    """Return the taxonomy keys whose aliases occur in the description."""
    t = normalize_text(description)
    found: List[str] = []
    for skill in taxonomy:
        if skill.key in found:
            continue
        if any(alias in t for alias in skill.aliases):
            found.append(skill.key)
    return found


def is_location_admissible(location: str, remote: bool) -> bool:
    """Admit German locations, and remote postings not tied to another country.

    "Remote" and "Remote (Europe)" pass; "Remote (USA only)" or a remote
    posting in a named non-German city does not.
    """
    loc = normalize_text(location)
    if any(kw in loc for kw in GERMAN_LOCATION_KEYWORDS):
        return True

    if remote or "remote" in loc:
        if any(kw in loc for kw in FORBIDDEN_REMOTE_LOCATIONS):
            return False
        if any(kw in loc for kw in NON_GERMAN_CITIES):
            return False
        return True

    return False


# --- Per-source field mapping ------------------------------------------------


class MappedFields(NamedTuple):
    source_id: str
    title: str
    company: str
    location: str
    remote: bool
    url: str
    created_at: Optional[datetime]
    description: str
    tags: List[str]
    job_types: List[str]


def _s(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return uniq_preserve_order(_s(v) for v in value)
    return uniq_preserve_order([_s(value)])


def _map_arbeitnow(raw: Dict[str, Any]) -> MappedFields:
    return MappedFields(
        source_id=_s(raw.get("slug")),
        title=_s(raw.get("title")),
        company=_s(raw.get("company_name")),
        location=_s(raw.get("location")),
        remote=bool(raw.get("remote", False)),
        url=_s(raw.get("url")),
        created_at=parse_timestamp(raw.get("created_at")),
        description=_s(raw.get("description")),
        tags=_str_list(raw.get("tags")),
        job_types=_str_list(raw.get("job_types")),
    )


def _map_adzuna(raw: Dict[str, Any]) -> MappedFields:
    title = _s(raw.get("title"))
    category = raw.get("category") or {}
    return MappedFields(
        source_id=_s(raw.get("id")),
        title=title,
        company=_s((raw.get("company") or {}).get("display_name")),
        location=_s((raw.get("location") or {}).get("display_name")),
        remote="remote" in title.lower(),
        url=_s(raw.get("redirect_url")),
        created_at=parse_timestamp(raw.get("created")),
        description=_s(raw.get("description")),
        tags=_str_list(category.get("label")),
        job_types=[],
    )


def _map_jooble(raw: Dict[str, Any]) -> MappedFields:
    title = _s(raw.get("title"))
    snippet = _s(raw.get("snippet"))
    return MappedFields(
        source_id=_s(raw.get("id")),
        title=title,
        company=_s(raw.get("company")),
        location=_s(raw.get("location")),
        remote="remote" in title.lower() or "remote" in snippet.lower(),
        url=_s(raw.get("link")),
        created_at=parse_timestamp(raw.get("updated")),
        description=snippet,
        tags=_str_list(raw.get("type")),
        job_types=[],
    )


def _map_germantechjobs(raw: Dict[str, Any]) -> MappedFields:
    return MappedFields(
        source_id=_s(raw.get("id")),
        title=_s(raw.get("title")),
        company=_s(raw.get("company")),
        location=_s(raw.get("location")),
        remote=_s(raw.get("remote")).lower() != "office",
        url=_s(raw.get("url")),
        created_at=parse_timestamp(raw.get("epoch")),
        description=_s(raw.get("description")),
        tags=_str_list(raw.get("tags")),
        job_types=[],
    )


def _map_jobicy(raw: Dict[str, Any]) -> MappedFields:
    # Every Jobicy posting is remote.
    return MappedFields(
        source_id=_s(raw.get("id")),
        title=_s(raw.get("jobTitle")),
        company=_s(raw.get("companyName")),
        location=_s(raw.get("jobGeo")) or "Remote",
        remote=True,
        url=_s(raw.get("url")),
        created_at=parse_timestamp(raw.get("pubDate")),
        description=_s(raw.get("jobDescription")),
        tags=_str_list(raw.get("jobTag")),
        job_types=_str_list(raw.get("jobType")),
    )


def _map_arbeitsagentur(raw: Dict[str, Any]) -> MappedFields:
    hash_id = _s(raw.get("hashId"))
    place = raw.get("arbeitsort") or {}
    town = _s(place.get("ort"))
    location = ", ".join(p for p in (town, _s(place.get("plz"))) if p) if town else "N/A"
    working_time = raw.get("arbeitszeit")
    return MappedFields(
        source_id=hash_id,
        title=_s(raw.get("titel")),
        company=_s(raw.get("arbeitgeber")),
        location=location,
        remote=isinstance(working_time, list) and "ho" in working_time,
        url=ARBEITSAGENTUR_DETAIL_URL.format(hash_id=hash_id),
        created_at=parse_timestamp(raw.get("aktuelleVeroeffentlichungsdatum")),
        description=_s(raw.get("stellenbeschreibung")),
        tags=[],
        job_types=[],
    )


FIELD_MAPPERS: Dict[JobSource, Callable[[Dict[str, Any]], MappedFields]] = {
    JobSource.ARBEITNOW: _map_arbeitnow,
    JobSource.ADZUNA: _map_adzuna,
    JobSource.JOOBLE: _map_jooble,
    JobSource.GERMANTECHJOBS: _map_germantechjobs,
    JobSource.JOBICY: _map_jobicy,
    JobSource.ARBEITSAGENTUR: _map_arbeitsagentur,
}


def normalize_job(raw: Dict[str, Any], source: JobSource) -> Optional[Job]:
    """Map one raw record into a Job, or return None if it is unusable.

    Raises KeyError only for a source tag without a registered mapper.
    """
    mapper = FIELD_MAPPERS[source]

    try:
        fields = mapper(raw)
    except (AttributeError, KeyError, OverflowError, TypeError, ValueError) as exc:
        logger.warning("Failed to normalize job from %s: %s", source.value, exc)
        return None

    if not (fields.title and fields.company and fields.location and fields.created_at and fields.source_id):
        logger.debug("Dropping %s record with missing required fields: %r", source.value, fields.source_id)
        return None

    if not is_location_admissible(fields.location, fields.remote):
        return None

    full_text = f"{fields.title} {fields.description}"
    try:
        return Job(
            id=f"{source.value}-{fields.source_id}",
            source=source,
            title=fields.title,
            company=fields.company,
            location=fields.location,
            remote=fields.remote,
            url=fields.url,
            created_at=fields.created_at,
            description=fields.description or "",
            tags=fields.tags,
            job_types=fields.job_types,
            exact_match=check_keywords(fields.title, IT_SYSADMIN_KEYWORDS),
            career_switch=check_keywords(full_text, CAREER_SWITCH_KEYWORDS),
            is_junior=check_keywords(full_text, JUNIOR_LEVEL_KEYWORDS),
            requirements=extract_requirements(fields.description),
            raw=raw,
        )
    except ValidationError as exc:
        logger.warning("Failed to normalize job from %s: %s", source.value, exc)
        return None


def normalize_records(records: Iterable[Dict[str, Any]], source: JobSource) -> List[Job]:
    """Normalize a batch, discarding records that map to None."""
    out: List[Job] = []
    for raw in records:
        job = normalize_job(raw, source)
        if job is not None:
            out.append(job)
    return out
