#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import os

from xarchive.clients import StaticHostSession, TimelineArchiver
from xarchive.processing import newest, search


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Fetch recent posts of an account and search them")
    p.add_argument("screen_name", nargs="?", default="XDevelopers")
    p.add_argument("count", nargs="?", type=int, default=50)
    p.add_argument("--term", default=None, help="Only show posts containing this text")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    host = StaticHostSession.from_tokens(
        os.environ.get("XARCHIVE_BEARER_TOKEN"),
        os.environ.get("XARCHIVE_CSRF_TOKEN"),
    )
    archiver = TimelineArchiver(host)

    result = await archiver.archive(args.count, screen_name=args.screen_name, timeout=300)
    items = search(result.items, args.term) if args.term else result.items

    print(f"@{args.screen_name}: {len(items)} posts ({result.pagination.stop_reason.value})")
    print(f"{'Created':25} | {'Likes':>7} | {'Views':>9} | Text")
    print("-" * 80)
    for item in newest(items, 20):
        text = item.text.replace("\n", " ")[:40]
        print(f"{item.created_at.isoformat():25} | {item.like_count:>7} | {item.view_count:>9} | {text}")


if __name__ == "__main__":
    asyncio.run(main())
