"""CLI entry point.

This script fetches jobs through the weekly cache and writes them (or the
requirement statistics) as JSON to disk.

Examples:
    python run_fetch.py --out jobs.json
    python run_fetch.py --out jobs.json --refresh
    python run_fetch.py --stats --out stats.json --career-change-only
    python run_fetch.py --cover-letter Arbeitnow-some-slug --skills "Linux, Python"

Configuration (API keys, enabled sources, page limits) comes from the
environment or a .env file, see jobpilot/config.py.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

import httpx

from jobpilot.aggregate import fetch_jobs
from jobpilot.cache import JobCache, JsonFileStore
from jobpilot.config import Settings, build_sources
from jobpilot.errors import AllSourcesFailedError
from jobpilot.letters import UserContext, default_generator, generate_cover_letter
from jobpilot.ranking import count_new_jobs
from jobpilot.stats import compute_statistics

logger = logging.getLogger("jobpilot")

ALL_FAILED_MESSAGE = "Alle Job-Quellen sind momentan nicht erreichbar. Bitte versuchen Sie es später erneut."


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Fetch, normalize and cache jobs from multiple sources.")
    p.add_argument("--out", type=str, default="jobs.json", help="Output JSON file path.")
    p.add_argument("--refresh", action="store_true", help="Ignore the weekly cache and fetch fresh data.")
    p.add_argument("--stats", action="store_true", help="Write requirement statistics instead of the job list.")
    p.add_argument(
        "--career-change-only",
        action="store_true",
        help="Restrict statistics to career-switch friendly postings.",
    )
    p.add_argument("--cache-dir", type=str, default=None, help="Override JOBPILOT_CACHE_DIR.")
    p.add_argument("--cover-letter", type=str, default=None, metavar="JOB_ID", help="Generate a cover letter.")
    p.add_argument("--skills", type=str, default="", help="Applicant skills for the cover letter.")
    p.add_argument("--knowledge", type=str, default="", help="Applicant prior knowledge for the cover letter.")
    p.add_argument("--background", type=str, default="", help="Applicant background for the cover letter.")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    return p.parse_args()


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def write_json(path_str: str, data: object) -> Path:
    out_path = Path(path_str).expanduser().resolve()
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    return out_path


async def run(args: argparse.Namespace, settings: Settings) -> int:
    async with httpx.AsyncClient(timeout=settings.http_timeout, follow_redirects=True) as client:
        sources = build_sources(settings, client)
        cache = JobCache(lambda: fetch_jobs(sources), JsonFileStore(settings.cache_dir))
        previous_ids = cache.previous_job_ids()

        try:
            result = await cache.get(force_refresh=args.refresh)
        except AllSourcesFailedError as exc:
            logger.error("%s", exc)
            print(ALL_FAILED_MESSAGE, file=sys.stderr)
            return 1

    if args.cover_letter:
        job = next((j for j in result.jobs if j.id == args.cover_letter), None)
        if job is None:
            print(f"No cached job with id {args.cover_letter!r}.", file=sys.stderr)
            return 1
        generator = default_generator(settings.gemini_api_key, settings.gemini_model)
        if generator is None:
            print("Set GEMINI_API_KEY to generate letters.", file=sys.stderr)
            return 1
        user = UserContext(skills=args.skills, knowledge=args.knowledge, background=args.background)
        print(generate_cover_letter(job, user, generator))
        return 0

    if args.stats:
        stats = compute_statistics(result.jobs, args.career_change_only)
        out_path = write_json(args.out, stats.model_dump(mode="json"))
        print(f"Wrote statistics over {stats.total_jobs} jobs to: {out_path}")
    else:
        # json mode serializes enums and datetimes to strings for json.dumps
        data = [j.model_dump(mode="json") for j in result.jobs]
        out_path = write_json(args.out, data)
        print(f"Wrote {len(data)} jobs to: {out_path}")

    if previous_ids:
        print(f"{count_new_jobs(previous_ids, result.jobs)} new jobs since the last weekly sync.")
    if result.failed_sources:
        print("Failed sources: " + ", ".join(s.value for s in result.failed_sources))
    return 0


def main() -> None:
    args = parse_args()
    configure_logging(args.verbose)
    try:
        settings = Settings.from_env()
    except ValueError as exc:
        logger.error("Configuration error: %s", exc)
        sys.exit(2)
    if args.cache_dir:
        settings.cache_dir = Path(args.cache_dir)
    sys.exit(asyncio.run(run(args, settings)))


if __name__ == "__main__":
    main()
