#!/usr/bin/env python3
"""
Replay a typed query against a running ShowSearch proxy.

Each keystroke goes through a SearchSession exactly as an interactive client
would send it; after every step the resolution tier, loading flag and genre
index are printed, followed by the final state once all fetches settle.

    python scripts/search_probe.py --query batman --pause 0.05
    python scripts/search_probe.py --steps "bat,batm,ba" --delay 300
"""
import argparse
import json
import os
import sys
import time
from typing import Any, Dict, List

from dotenv import load_dotenv


def keystrokes(query: str) -> List[str]:
    return [query[:i] for i in range(1, len(query) + 1)]


def describe(view) -> Dict[str, Any]:
    from showsearch_app.search import genre_label  # pylint: disable=import-outside-toplevel

    results = view.resolution.results or ()
    return {
        "query": view.query,
        "tier": view.resolution.type.value,
        "loading": view.loading,
        "result_count": len(results),
        "genres": {genre_label(key): len(shows) for key, shows in view.genres.items()},
        "interactive": view.genres_interactive,
    }


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Replay typed queries through the search session.")
    parser.add_argument("--query", default="batman", help="Query to type one character at a time.")
    parser.add_argument("--steps", default="", help="Comma-separated query values to submit instead.")
    parser.add_argument("--api-root", default=None, help="Proxy root URL (default: API_ROOT_URL).")
    parser.add_argument("--delay", type=int, default=None, help="Debounce delay in ms (default: SEARCH_DELAY).")
    parser.add_argument("--pause", type=float, default=0.1, help="Seconds between keystrokes.")
    parser.add_argument("--timeout", type=float, default=30.0, help="Seconds to wait for fetches to settle.")
    parser.add_argument("--output", default="", help="Optional JSON report path.")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    load_dotenv()

    sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

    from showsearch_app.search import ProxyClient, SearchSession  # pylint: disable=import-outside-toplevel

    steps = [item.strip() for item in args.steps.split(",") if item.strip()] or keystrokes(args.query)
    delay = args.delay / 1000.0 if args.delay is not None else None
    session = SearchSession(ProxyClient(args.api_root), delay=delay)

    trace = []
    try:
        for value in steps:
            session.set_query(value)
            time.sleep(args.pause)
            step = describe(session.view())
            trace.append(step)
            print(f"{step['query']!r:>16}  {step['tier']:<17} loading={step['loading']!s:<5} "
                  f"results={step['result_count']}")

        session.wait_idle(timeout=args.timeout)
        final = describe(session.view())
    finally:
        session.close()

    print("\nFinal:", json.dumps(final, indent=2))

    if args.output:
        report = {
            "generated_at": time.strftime("%Y-%m-%dT%H:%M:%S%z"),
            "steps": trace,
            "final": final,
            "cached_queries": session.cache.keys(),
        }
        output_dir = os.path.dirname(args.output)
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)
        with open(args.output, "w", encoding="utf-8") as handle:
            json.dump(report, handle, indent=2, sort_keys=True)

    return 0 if final["tier"] == "exact_match" else 1


if __name__ == "__main__":
    sys.exit(main())
