"""Command line tools for the Amsterdam job catalog."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Sequence

from .catalog import Catalog, default_catalog
from .export import write_csv, write_json
from .linkcheck import DEFAULT_USER_AGENT, check_links
from .models import JobPosting
from .summary import html_to_text

DEFAULT_CONCURRENCY = 5
DEFAULT_TIMEOUT = 15.0

logger = logging.getLogger(__name__)


def main(argv: Sequence[str] | None = None, *, catalog: Catalog | None = None) -> int:
    """Execute the CLI and return the process exit code."""

    args = _parse_args(argv)
    _configure_logging(args.log_level)

    catalog = catalog if catalog is not None else default_catalog()

    if args.command == "list":
        return _cmd_list(catalog, featured=args.featured)
    if args.command == "show":
        return _cmd_show(catalog, args.slug)
    if args.command == "export":
        return _cmd_export(catalog, args)
    if args.command == "check-links":
        return _cmd_check_links(catalog, args)
    raise SystemExit(f"Unknown command: {args.command}")  # pragma: no cover


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="job-catalog", description=__doc__)
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (e.g. INFO, DEBUG)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="Print one line per posting")
    list_parser.add_argument("--featured", action="store_true", help="Only featured postings")

    show_parser = subparsers.add_parser("show", help="Print a single posting")
    show_parser.add_argument("slug", help="Posting slug")

    export_parser = subparsers.add_parser("export", help="Write postings to CSV or JSON")
    export_parser.add_argument("--format", choices=("csv", "json"), default="csv")
    export_parser.add_argument("--output", required=True, help="Destination file path")
    export_parser.add_argument("--featured", action="store_true", help="Only featured postings")

    check_parser = subparsers.add_parser("check-links", help="Verify outbound posting links")
    check_parser.add_argument(
        "--concurrency",
        type=int,
        default=_env_int("JOB_CATALOG_CONCURRENCY", DEFAULT_CONCURRENCY),
        help="Maximum concurrent HTTP requests",
    )
    check_parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help="Per-request timeout in seconds",
    )
    check_parser.add_argument(
        "--user-agent",
        default=os.getenv("JOB_CATALOG_USER_AGENT", DEFAULT_USER_AGENT),
        help="User-Agent header to send with HTTP requests",
    )

    return parser.parse_args(argv)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(levelname)s %(message)s",
    )


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r", name, raw)
        return default


def _select(catalog: Catalog, featured: bool) -> Sequence[JobPosting]:
    return catalog.list_featured() if featured else catalog.list_all()


def _cmd_list(catalog: Catalog, *, featured: bool) -> int:
    for posting in _select(catalog, featured):
        marker = "*" if posting.featured else " "
        print(f"{marker} {posting.slug}\t{posting.title}\t{posting.summary}")
    return 0


def _cmd_show(catalog: Catalog, slug: str) -> int:
    posting = catalog.get_by_slug(slug)
    if posting is None:
        print(f"No posting with slug {slug!r}", file=sys.stderr)
        return 1

    lines = [
        f"{posting.title} at {posting.org_name}",
        f"Slug: {posting.slug}",
        f"Type: {posting.employment_type.value}",
        f"Categories: {', '.join(c.value for c in posting.categories)}",
        f"Summary: {posting.summary}",
    ]
    pay = posting.pay_range()
    if pay:
        lines.append(f"Pay: {pay}")
    if posting.work_hours:
        lines.append(f"Hours: {posting.work_hours}")
    if posting.area:
        lines.append(f"Area: {posting.area}")
    flags = [
        label
        for label, enabled in (
            ("English friendly", posting.english_friendly),
            ("DUO eligible", posting.duo),
            ("Featured", posting.featured),
        )
        if enabled
    ]
    if flags:
        lines.append(f"Flags: {', '.join(flags)}")
    lines.append(f"Posted: {posting.date_posted.isoformat()}")
    if posting.valid_through:
        lines.append(f"Valid through: {posting.valid_through.isoformat()}")
    lines.append(f"Link: {posting.link_target()}")
    lines.append("")
    lines.append(html_to_text(posting.description_html))
    print("\n".join(lines))
    return 0


def _cmd_export(catalog: Catalog, args: argparse.Namespace) -> int:
    postings = _select(catalog, args.featured)
    output_path = Path(args.output)
    if args.format == "json":
        count = write_json(output_path, postings)
    else:
        count = write_csv(output_path, postings)
    logger.info("Wrote %d postings to %s", count, output_path)
    return 0


def _cmd_check_links(catalog: Catalog, args: argparse.Namespace) -> int:
    if args.concurrency < 1:
        raise SystemExit("--concurrency must be >= 1")

    results = check_links(
        catalog.list_all(),
        user_agent=args.user_agent,
        concurrency=args.concurrency,
        timeout=args.timeout,
    )
    broken = [result for result in results if not result.ok]
    for result in results:
        state = "ok" if result.ok else (result.error or "broken")
        print(f"{state}\t{result.slug}\t{result.url}")
    logger.info("Checked %d links, %d broken", len(results), len(broken))
    return 1 if broken else 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
