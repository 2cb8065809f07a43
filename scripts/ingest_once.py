import argparse
import asyncio
import json
from pathlib import Path
import sys


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from gbfs_exporter.config import Settings
from gbfs_exporter.ingest.poller import ingest_once


async def main() -> None:
    parser = argparse.ArgumentParser(description="Run a single ingestion cycle")
    parser.add_argument("--json", action="store_true", help="Print the summary as JSON")
    parser.add_argument("--quiet", action="store_true", help="Disable event logging")
    args = parser.parse_args()
    if args.quiet:
        Settings.ingest_log = False
    summary = await ingest_once()
    if args.json:
        print(json.dumps(summary.as_dict(), indent=2))
        return
    print(f"providers: {summary.provider_count}")
    print(f"failed: {summary.failed}")
    print(f"total vehicles: {summary.total_vehicles}")


if __name__ == "__main__":
    asyncio.run(main())
