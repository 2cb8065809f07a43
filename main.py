import argparse
import asyncio

from gbfs_exporter.config import NoProvidersError, Settings, load_providers
from gbfs_exporter.ingest.poller import ingest_once, run_poller
from gbfs_exporter.monitoring.metrics_server import run_metrics_server


def main() -> None:
    parser = argparse.ArgumentParser(description="GBFS Exporter CLI")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("ingest", help="Run one ingestion cycle")
    poll = sub.add_parser("poll", help="Run the ingestion loop without HTTP")
    poll.add_argument(
        "--interval",
        type=float,
        default=None,
        help="Seconds between cycles (default: INGEST_INTERVAL_S)",
    )
    sub.add_parser("metrics", help="Run Prometheus metrics server and poller")
    sub.add_parser("serve", help="Run the HTTP API with background ingestion")
    sub.add_parser("providers", help="List configured providers")

    args = parser.parse_args()

    if args.command == "ingest":
        summary = asyncio.run(ingest_once())
        for result in summary.results:
            if result.ok:
                print(f"{result.provider.location}: {result.vehicles}")
            else:
                print(f"{result.provider.location}: error ({result.stage}) {result.error}")
        print(f"Total available bikes: {summary.total_vehicles}")
        return
    if args.command == "poll":
        asyncio.run(run_poller(interval_s=args.interval))
        return
    if args.command == "metrics":
        run_metrics_server()
        return
    if args.command == "serve":
        import uvicorn

        uvicorn.run("api.app:app", host=Settings.api_host, port=Settings.api_port)
        return
    if args.command == "providers":
        try:
            providers = load_providers()
        except NoProvidersError as exc:
            parser.exit(1, f"{exc}\n")
        for provider in providers:
            print(f"{provider.location}\t{provider.url}")
        return


if __name__ == "__main__":
    main()
