#!/usr/bin/env python3
"""
Ticket sales report (CLI)

Fetches the participants dataset once, aggregates it and prints the same
numbers the dashboard shows.

Usage:
  ticketdash-report --url http://localhost:8001/participants \
                    --token mock-token

  ticketdash-report --file participants.json --json

--url/--token default to API_URL/API_TOKEN.
"""

import argparse
import asyncio
import json
import os
import sys
from typing import Any, List, Optional

import httpx
import orjson

from .errors import DashboardError, UpstreamError
from .helpers import format_count, format_idr
from .model import Summary, aggregate
from .participants import UpstreamParticipants, load_records
from .participants import records_from_payload


async def fetch_remote(url: Optional[str], token: Optional[str],
                       timeout: float) -> List[Any]:
    async with httpx.AsyncClient(timeout=timeout) as client:
        return await load_records(UpstreamParticipants(client, url, token))


def read_file(path: str) -> List[Any]:
    try:
        with open(path, "rb") as f:
            payload = json.load(f)
    except (OSError, ValueError) as e:
        raise UpstreamError(f"cannot read {path}: {e}") from e
    return records_from_payload(payload)


def render_text(summary: Summary) -> str:
    lines = [
        "=== Ticket Sales ===",
        f"Tickets sold:    {format_count(summary.sold_ticket_count)}",
        f"Total revenue:   {format_idr(summary.total_revenue)}",
        f"Unpaid tickets:  {format_count(summary.unpaid_count)}",
        f"Checked in:      {format_count(summary.checked_in_count)}",
        f"Conversion rate: {summary.conversion_rate:.1f}%",
    ]
    if summary.by_type:
        lines.append("")
        lines.append("--- by type ---")
        for label, stat in summary.by_type.items():
            lines.append(
                f"{label:<20} {format_count(stat.count):>8}  "
                f"{format_idr(stat.total_paid)}"
            )
    if summary.by_date:
        lines.append("")
        lines.append("--- by date ---")
        for p in summary.by_date:
            lines.append(
                f"{p.date:<20} {format_count(p.count):>8}  "
                f"{format_idr(p.total_paid)}"
            )
    lines.append("")
    lines.append("--- status ---")
    for s in summary.status_breakdown:
        lines.append(f"{s.label:<20} {format_count(s.value):>8}")
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Ticket sales report")
    ap.add_argument("--url", default=os.environ.get("API_URL"),
                    help="Participants endpoint (default: $API_URL)")
    ap.add_argument("--token", default=os.environ.get("API_TOKEN"),
                    help="Bearer token (default: $API_TOKEN)")
    ap.add_argument("--file",
                    help="Read a saved {\"data\": [...]} JSON file instead")
    ap.add_argument("--timeout", type=float, default=10.0,
                    help="HTTP timeout in seconds")
    ap.add_argument("--json", action="store_true",
                    help="Print the summary as JSON")
    args = ap.parse_args(argv)

    try:
        if args.file:
            records = read_file(args.file)
        else:
            records = asyncio.run(
                fetch_remote(args.url, args.token, args.timeout)
            )
    except DashboardError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    summary = aggregate(records)
    if args.json:
        print(orjson.dumps(summary.to_dict(),
                           option=orjson.OPT_INDENT_2).decode())
    else:
        print(render_text(summary))
    return 0


if __name__ == "__main__":
    sys.exit(main())
