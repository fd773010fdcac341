from __future__ import annotations
import argparse

from job_aggregator.core.config import settings
from job_aggregator.core.logging_setup import setup_logging
from job_aggregator.crawlers.registry import ALL_SOURCES, AVAILABLE_SOURCES
from job_aggregator.schemas import AggregateOut, JobOut, StatsOut
from job_aggregator.services.aggregator import aggregate
from job_aggregator.services.stats import compute_stats


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Scrape Georgian job boards and print the merged listing as JSON.")
    parser.add_argument("--query", "-q", default=None, help="free-text search passed to every board")
    parser.add_argument(
        "--source",
        "-s",
        default=ALL_SOURCES,
        choices=[ALL_SOURCES, *AVAILABLE_SOURCES],
        help="scrape a single board instead of all of them",
    )
    parser.add_argument("--only-new", action="store_true", help="keep only jobs posted in the last day")
    parser.add_argument("--stats", action="store_true", help="include aggregate counters")
    return parser


def run(argv: list[str] | None = None) -> AggregateOut:
    args = build_parser().parse_args(argv)
    result = aggregate(args.query, args.source)

    jobs = [job for job in result.jobs if job.is_new] if args.only_new else result.jobs
    stats = StatsOut.model_validate(compute_stats(result.jobs)) if args.stats else None
    return AggregateOut(
        jobs=[JobOut.model_validate(job) for job in jobs],
        errors=result.errors,
        stats=stats,
    )


def main() -> None:
    setup_logging(settings.log_level)
    print(run().model_dump_json(indent=2))


if __name__ == "__main__":
    main()
