"""
CLI helper to trace a poultry asset and print its provenance narrative.

Examples:
    python scripts/trace_asset.py --id BATCH-001
    python scripts/trace_asset.py --batch-id BATCH-001 --json
    python scripts/trace_asset.py --id BATCH-001 --history-file history.json
"""
import argparse
import sys
from pathlib import Path

# Add parent directory to Python path
ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT))

from src.chicktrace.clients.trace_client import TraceClient
from src.chicktrace.exceptions import TraceError
from src.chicktrace.models.timeline import TraceResult
from src.chicktrace.services.trace_service import TraceService, resolve_asset_id
from src.chicktrace.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)

TIME_FORMAT = "%b %d, %Y %H:%M"


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Trace a poultry batch through the supply-chain ledger.")
    parser.add_argument("--id", dest="id", help="Serial ID printed on the pack.")
    parser.add_argument("--batch-id", dest="batchId", help="Batch identifier.")
    parser.add_argument("--product-id", dest="productId", help="Product identifier.")
    parser.add_argument("--api-url", help="Override the ledger history endpoint.")
    parser.add_argument("--history-file", help="Reconcile a saved bridge response or history list instead of querying the ledger.")
    parser.add_argument("--json", action="store_true", help="Print the raw result as JSON.")
    return parser.parse_args()


def display_trace(result: TraceResult):
    """Print the snapshot header and the timeline."""
    snapshot = result.snapshot

    print(f"\n{'='*80}")
    print(f"{snapshot.product_name.upper()}  [{snapshot.asset_id}]")
    print(f"{'='*80}")
    print(f"  Producer:    {snapshot.producer_display_name}")
    print(f"  Weight:      {snapshot.weight_display}")
    print(f"  About:       {snapshot.product_description}")
    for link in snapshot.certificate_links:
        print(f"  {link.label + ':':<13}{link.uri}")

    print(f"\n{'-'*80}")
    print(f"JOURNEY - {len(result.timeline)} events")
    print(f"{'-'*80}\n")

    for event in result.timeline:
        print(f"[{event.heading}]  {event.timestamp.strftime(TIME_FORMAT)}")
        print(f"  {event.display_name}")
        for line in event.metadata:
            print(f"  {line}")
        for link in event.certificate_links:
            print(f"  {link.label}: {link.uri}")
        print()

    print(f"{'='*80}\n")


def main():
    args = parse_args()
    setup_logging()

    try:
        asset_id = resolve_asset_id(vars(args))
        service = TraceService(client=TraceClient(base_url=args.api_url))

        if args.history_file:
            raw_history = service.client.load_history_file(args.history_file, asset_id)
            result = service.build(asset_id, raw_history)
        else:
            result = service.trace(asset_id)
    except TraceError as e:
        logger.error("trace_failed", error_type=type(e).__name__, error=str(e))
        print(f"\n{e.user_message}\n", file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(result.model_dump_json(indent=2))
    else:
        display_trace(result)


if __name__ == "__main__":
    main()
