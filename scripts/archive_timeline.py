#!/usr/bin/env python3
"""Archive one account's timeline to a local directory or an upload service.

Credentials come from a signed-in browser session and are read from the
environment:

    XARCHIVE_BEARER_TOKEN   bearer token sent in the authorization header
    XARCHIVE_CSRF_TOKEN     value of the ct0 cookie (x-csrf-token header)
    XARCHIVE_UPLOAD_TOKEN   credential for the upload service (--upload only)
    XARCHIVE_API_BASE       upload service base URL (--upload only)

Usage:
    # Archive 200 posts from the recent end of @alice's timeline into ./output
    # (the run may collect a few more; the newest surplus is dropped)
    python scripts/archive_timeline.py alice --count 200

    # Upload instead of writing locally
    python scripts/archive_timeline.py alice --count 200 --upload
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys

from xarchive.clients import StaticHostSession, TimelineArchiver
from xarchive.core import ArchiveError
from xarchive.export import FileUploader, HTTPUploader
from xarchive.processing import newest, oldest
from xarchive.runtime.pagination import PaginationPolicy

DEFAULT_API_BASE = "https://extractor.aayushman.dev"


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Archive an X account's timeline")
    p.add_argument("screen_name", help="Handle of the account to archive")
    p.add_argument("--count", type=int, default=100, help="Number of posts to archive")
    p.add_argument("--page-size", type=int, default=40, help="Posts requested per page")
    p.add_argument("--max-pages", type=int, default=150, help="Hard ceiling on pages")
    p.add_argument("--timeout", type=float, default=None, help="Wall-clock bound in seconds")
    p.add_argument("--output-dir", default="output", help="Directory for local archives")
    p.add_argument("--upload", action="store_true", help="Upload instead of writing locally")
    p.add_argument("--verbose", "-v", action="store_true", help="Log every page")
    return p.parse_args()


async def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    host = StaticHostSession.from_tokens(
        os.environ.get("XARCHIVE_BEARER_TOKEN"),
        os.environ.get("XARCHIVE_CSRF_TOKEN"),
    )
    if args.upload:
        uploader = HTTPUploader(os.environ.get("XARCHIVE_API_BASE", DEFAULT_API_BASE))
    else:
        uploader = FileUploader(args.output_dir)

    archiver = TimelineArchiver(
        host,
        uploader=uploader,
        policy=PaginationPolicy(page_size=args.page_size, max_pages=args.max_pages),
    )
    try:
        result = await archiver.archive(
            args.count,
            screen_name=args.screen_name,
            upload_credential=os.environ.get("XARCHIVE_UPLOAD_TOKEN"),
            timeout=args.timeout,
        )
    except ArchiveError as e:
        print(f"Could not start: {e}", file=sys.stderr)
        return 1
    finally:
        if isinstance(uploader, HTTPUploader):
            await uploader.close()

    pagination = result.pagination
    print(
        f"Collected {len(result.items)} posts for @{args.screen_name} "
        f"({pagination.pages_issued} pages, {pagination.retries} retries, "
        f"stopped: {pagination.stop_reason.value})"
    )
    if result.items:
        print(f"Oldest: {oldest(result.items, 1)[0].created_at.isoformat()}")
        print(f"Newest: {newest(result.items, 1)[0].created_at.isoformat()}")
    if result.delivered:
        print(f"Archive: {result.receipt.url}")
    else:
        print(f"Delivery failed: {result.delivery_error}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
