#!/usr/bin/env python3
"""
Annotation Report Exporter

Reads every stored entry, recomputes the user/day summaries and writes the
performance report to disk. Intended for end-of-day cron runs.

Example cron entry (run daily at 7 PM):
0 19 * * * /path/to/python /path/to/export_report.py --format csv --output /reports
"""

import argparse
import asyncio
import logging
import os
import sys

# Make sure we can import from the package directory
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from annotation_tracker.shared.database import async_client, entries_collection, init_db
from annotation_tracker.shared.models import TIME_SLOTS
from annotation_tracker.features.entries.store import EntryStore
from annotation_tracker.features.reports.aggregation import summarize
from annotation_tracker.features.reports.export import (
    export_table,
    export_filename,
    render_csv,
    render_html
)

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)

def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Export the annotation performance report")
    parser.add_argument("--format", choices=["xls", "csv"], default="xls")
    parser.add_argument("--date", help="Only include entries for this date (YYYY-MM-DD)")
    parser.add_argument("--output", default=".", help="Directory to write the report into")
    return parser.parse_args(argv)

async def export(args) -> str:
    if not await init_db():
        raise RuntimeError("Could not connect to MongoDB")

    store = EntryStore(entries_collection)
    entries = await store.find_for_report(args.date)
    table = export_table(summarize(entries), entries, TIME_SLOTS)
    content = render_csv(table) if args.format == "csv" else render_html(table)

    os.makedirs(args.output, exist_ok=True)
    path = os.path.join(args.output, export_filename(args.format))
    with open(path, "w", encoding="utf-8") as report_file:
        report_file.write(content)
    logger.info(f"Wrote {len(table.rows)} rows from {len(entries)} entries to {path}")
    return path

async def main(argv=None):
    args = parse_args(argv)
    try:
        await export(args)
    finally:
        async_client.close()

if __name__ == "__main__":
    asyncio.run(main())
