#!/usr/bin/env python
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from pmadmin.infrastructure.link_probe import check_url_exists, normalize_url


def main() -> None:
    parser = argparse.ArgumentParser(description="Check whether links answer a HEAD request")
    parser.add_argument("urls", nargs="+", help="links to probe; https:// is added when no scheme is given")
    parser.add_argument("--timeout", type=float, default=5.0, help="seconds to wait for each probe")
    parser.add_argument("--verbose", action="store_true", help="log probe details")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    missing = 0
    for url in args.urls:
        exists = asyncio.run(check_url_exists(url, timeout=args.timeout))
        print(f"{'ok     ' if exists else 'missing'} {normalize_url(url)}")
        if not exists:
            missing += 1
    sys.exit(1 if missing else 0)


if __name__ == "__main__":
    main()
