"""
Command line entry point.

Usage:
    hifld download [--out DIR] [--batch-size N] [--delay SECONDS]
    hifld sitemap [--data DIR] [--web DIR] [--site-url URL] [--max-urls N]
    hifld sample [--out DIR] [--seed N]

Exit codes:
    0  success (including partial downloads)
    1  no endpoint resolved, or the dataset is empty
"""

import argparse
import asyncio
import sys
from pathlib import Path

import structlog

from hifld.core.config import get_settings
from hifld.core.exceptions import EmptyDatasetError, NoEndpointAvailableError
from hifld.core.logging import configure_logging

logger = structlog.get_logger()


def positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def non_negative_float(value: str) -> float:
    number = float(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hifld",
        description="Download HIFLD fire station data and generate sitemaps",
    )
    parser.add_argument("--debug", action="store_true", help="Console logs at DEBUG level")
    sub = parser.add_subparsers(dest="cmd", required=True)

    download_p = sub.add_parser("download", help="Download fire stations from the feature service")
    download_p.add_argument("--out", type=Path, default=None, help="Output directory for data files")
    download_p.add_argument("--batch-size", type=positive_int, default=None, help="Records per page request")
    download_p.add_argument("--delay", type=non_negative_float, default=None, help="Seconds between page requests")

    sitemap_p = sub.add_parser("sitemap", help="Generate sitemaps and robots.txt")
    sitemap_p.add_argument("--data", type=Path, default=None, help="Directory containing fire-stations.json")
    sitemap_p.add_argument("--web", type=Path, default=None, help="Web root to write sitemaps into")
    sitemap_p.add_argument("--site-url", default=None, help="Public site URL")
    sitemap_p.add_argument("--max-urls", type=positive_int, default=None, help="Max URLs per sitemap document")

    sample_p = sub.add_parser("sample", help="Write a sample dataset for offline testing")
    sample_p.add_argument("--out", type=Path, default=None, help="Output directory for data files")
    sample_p.add_argument("--seed", type=int, default=None, help="Random seed for reproducible output")

    return parser


def _cmd_download(args: argparse.Namespace) -> int:
    from hifld.pipeline.download import run_download

    settings = get_settings()
    overrides = {}
    if args.batch_size is not None:
        overrides["batch_size"] = args.batch_size
    if args.delay is not None:
        overrides["batch_delay"] = args.delay
    if overrides:
        settings = settings.model_copy(update=overrides)

    try:
        report = asyncio.run(run_download(settings, output_dir=args.out))
    except NoEndpointAvailableError as e:
        logger.error(
            "Could not find a working fire stations service",
            tried=e.tried,
            hint="HIFLD services may be temporarily unavailable; try again later",
        )
        return 1
    except EmptyDatasetError as e:
        logger.error("No records found, service may be experiencing issues", error=e.message)
        return 1

    logger.info(
        "Download complete",
        total=report.retrieved,
        declared=report.declared_total,
        states=len(report.summary.states),
        top_states=[f"{s.state}: {s.count}" for s in report.summary.top(5)],
    )
    return 0


def _cmd_sitemap(args: argparse.Namespace) -> int:
    from hifld.pipeline.sitemap_job import generate_sitemaps

    settings = get_settings()
    report = generate_sitemaps(
        data_dir=args.data or Path(settings.output_dir),
        web_dir=args.web or Path(settings.web_dir),
        site_url=args.site_url or settings.site_url,
        basename=settings.sitemap_basename,
        max_per_document=args.max_urls if args.max_urls is not None else settings.sitemap_max_urls,
        crawl_delay=settings.crawl_delay,
    )
    logger.info(
        "Sitemap generation complete",
        main_pages=report.main_urls,
        station_pages=report.station_urls,
        total_urls=report.main_urls + report.station_urls,
    )
    return 0


def _cmd_sample(args: argparse.Namespace) -> int:
    from hifld.pipeline.sample_data import write_sample_data

    settings = get_settings()
    stations, paths = write_sample_data(args.out or Path(settings.output_dir), seed=args.seed)
    logger.info(
        "Sample data generated",
        stations=len(stations),
        json=str(paths.stations_json),
        csv=str(paths.stations_csv),
    )
    return 0


COMMANDS = {
    "download": _cmd_download,
    "sitemap": _cmd_sitemap,
    "sample": _cmd_sample,
}


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    debug = args.debug or settings.debug
    configure_logging(
        json_logs=not debug,  # JSON for scheduled runs, console when debugging
        log_level="DEBUG" if debug else settings.log_level,
    )
    return COMMANDS[args.cmd](args)


if __name__ == "__main__":
    sys.exit(main())
