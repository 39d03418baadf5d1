"""Simple CLI entry to exercise the itinerary planner."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from itinerary_planner import ItineraryError, generate_itinerary


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate a day-by-day itinerary.")
    parser.add_argument("destination", help="City or region to visit")
    parser.add_argument("start_date", help="First day of the trip (YYYY-MM-DD)")
    parser.add_argument("end_date", help="Last day of the trip (YYYY-MM-DD)")
    parser.add_argument("--model", help="Completion model identifier")
    parser.add_argument("--markdown", action="store_true", help="Print the Markdown rendering instead of JSON")
    parser.add_argument("--output", type=Path, help="Optional path to save the result")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log pipeline progress")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        result = asyncio.run(generate_itinerary(args.destination, args.start_date, args.end_date, args.model))
    except ItineraryError as exc:
        print(json.dumps({"classification": exc.classification, **exc.to_dict()}, indent=2), file=sys.stderr)
        sys.exit(1)

    output = result.itinerary_markdown if args.markdown else json.dumps(result.to_dict(), indent=2, ensure_ascii=False)

    if args.output:
        args.output.write_text(output)
        print(f"Itinerary saved to {args.output}")
    else:
        print(output)


if __name__ == "__main__":
    main()
