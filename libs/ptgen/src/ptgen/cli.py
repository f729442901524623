"""Command line entry point for one-off generation and search."""

import argparse
import asyncio
import json
import logging
import sys

from ptgen.exceptions import RequestError
from ptgen.service import generate, search

logger = logging.getLogger(__name__)


async def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Generate a PT description for a subject")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--url", type=str, help="Resource URL to resolve")
    group.add_argument("--sid", type=str, help="Subject id, used with --site")
    group.add_argument("--search", type=str, help="Search query")
    parser.add_argument("--site", type=str, help="Site tag for --sid")
    parser.add_argument("--source", type=str, default="douban", help="Site tag for --search")
    parser.add_argument("--json", action="store_true", help="Print the full JSON record")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    try:
        if args.search:
            results = await search(args.search, args.source)
            print(
                json.dumps(
                    [item.to_dict() for item in results], indent=2, ensure_ascii=False
                )
            )
            return 0

        record = await generate(url=args.url, site=args.site, sid=args.sid)
    except RequestError as e:
        logger.error(str(e))
        return 2

    if args.json:
        print(json.dumps(record.to_dict(), indent=2, ensure_ascii=False))
    elif record.success:
        print(record.format)
    else:
        logger.error(record.error)
    return 0 if record.success else 1


def run() -> None:
    """Synchronous entrypoint for the console script."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
