"""CLI commands for skill search and retrieval."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from .models import MAX_SKILL_IDS


def _log(msg: str):
    sys.stderr.write(f"[skill-fetch] {msg}\n")
    sys.stderr.flush()


def _dump(data, output: Path | None = None):
    if output is None:
        json.dump(data, sys.stdout, indent=2)
        sys.stdout.write("\n")
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, "w") as f:
        json.dump(data, f, indent=2)
    _log(f"Wrote {output}")


def _configure_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    for name in ("httpx", "httpcore", "github", "urllib3"):
        logging.getLogger(name).setLevel(logging.ERROR)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="skill-fetch",
        description="Search skills.sh and fetch skill folders from GitHub",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Debug logging to stderr",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # search subcommand
    search_parser = subparsers.add_parser(
        "search",
        help="Search skills.sh by keyword",
    )
    search_parser.add_argument(
        "query",
        help="Search keyword",
    )
    search_parser.add_argument(
        "--limit",
        type=int,
        default=100,
        help="Maximum number of results (1-500, default: 100)",
    )

    # details subcommand
    details_parser = subparsers.add_parser(
        "details",
        help="Fetch all files of one or more skills",
    )
    details_parser.add_argument(
        "skill_ids",
        nargs="+",
        metavar="ID",
        help=f"Skill ID in owner/repo/skillId format (up to {MAX_SKILL_IDS})",
    )
    details_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output JSON file (default: stdout)",
    )

    # rate-limits subcommand
    subparsers.add_parser(
        "rate-limits",
        help="Show remaining GitHub quota for each configured token",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.command == "search":
        import httpx

        from .search import SkillsSearchError, search_skills

        try:
            results = asyncio.run(search_skills(args.query, limit=args.limit))
        except (SkillsSearchError, httpx.HTTPError, ValueError) as e:
            _log(f"Search failed: {e}")
            return 1
        _dump(results.to_dict())
    elif args.command == "details":
        from .fetch_skill_details import fetch_skill_details_batch

        if len(args.skill_ids) > MAX_SKILL_IDS:
            parser.error(f"at most {MAX_SKILL_IDS} skill IDs per request")

        def progress(completed, total, message):
            _log(message)

        results = asyncio.run(fetch_skill_details_batch(args.skill_ids, on_progress=progress))
        failed = sum(1 for r in results if r.error)
        files = sum(len(r.files) for r in results)
        _log(f"Done: {len(results) - failed} fetched ({files} files), {failed} errors")
        _dump({"skills": [r.to_dict() for r in results]}, args.output)
    elif args.command == "rate-limits":
        from .rate_limits import rate_limit_report

        _dump([r.to_dict() for r in rate_limit_report()])
    else:
        parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
