"""CLI entry point.

This script fetches jobs from one ATS, normalizes them, and writes a JSON list to disk.

Examples:
    python run_fetch.py --ats greenhouse --company stripe --out jobs.json
    python run_fetch.py --ats lever --company netflix --limit 10
    python run_fetch.py --ats ashby --company linear --job-id 1a2b3c --out job.json

The output is a list of dicts (serialized Pydantic models).
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from ats_engine.config import settings
from ats_engine.sources import SOURCES, get_source

logger = logging.getLogger(__name__)


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Fetch and normalize jobs from an applicant tracking system.")
    p.add_argument("--ats", type=str, required=True, choices=sorted(SOURCES), help="ATS provider to scrape.")
    p.add_argument("--company", type=str, required=True, help="Company slug/board name on the ATS.")
    p.add_argument("--job-id", type=str, default=None, help="Fetch a single job instead of the whole board.")
    p.add_argument("--out", type=str, default="jobs.json", help="Output JSON file path.")
    p.add_argument("--limit", type=int, default=None, help="Max jobs to output.")
    p.add_argument("--log-level", type=str, default=settings.log_level, help="Logging level (DEBUG, INFO, ...).")
    return p.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    source = get_source(args.ats)
    if args.job_id:
        jobs = [source.fetch_job(args.company, args.job_id)]
    else:
        jobs = source.fetch_company(args.company, limit=args.limit)

    out_path = Path(args.out).expanduser().resolve()
    out_path.parent.mkdir(parents=True, exist_ok=True)

    # json mode renders enums and datetimes as strings
    data = [j.model_dump(mode="json") for j in jobs]
    out_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")

    logger.info("Wrote %d %s jobs for %s", len(data), args.ats, args.company)
    print(f"Wrote {len(data)} jobs to: {out_path}")


if __name__ == "__main__":
    main()
