from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from .calculator import calculate
from .errors import DayRangeError
from .formatting import fmt_dt, fmt_duration_dhm, fmt_interval
from .io_json import load_availability_request


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(
        description="Resource availability: available windows minus blocked windows, grouped per day."
    )
    ap.add_argument("--input", required=True, help="Path to input JSON.")
    ap.add_argument("--explain", action="store_true", help="Print explain/evidence JSON.")
    ap.add_argument("--slots", action="store_true", help="Print fixed-width slots.")
    ap.add_argument("-v", "--verbose", action="count", default=0, help="Verbose logging (repeat for more).")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.WARNING - 10 * args.verbose)

    try:
        request = load_availability_request(args.input)
        res = calculate(request)
    except (DayRangeError, KeyError, ValueError) as e:
        sys.stderr.write(f"error: {e}\n")
        return 1

    print("=== Availability ===")
    print(f"Range: {fmt_dt(request.start_day)} .. {fmt_dt(request.end_day)}")
    print(f"Free (total): {fmt_duration_dhm(res.free_seconds)}")

    for d in res.days:
        print(f"[{d.index_since_first:3d}] {d.date:%Y-%m-%d}  {fmt_duration_dhm(d.free_seconds)}")
        for iv in d.intervals:
            print(f"        {fmt_interval(iv, with_ms=True)}")

    if args.slots and request.slot_minutes is not None:
        print(f"\n=== Slots ({request.slot_minutes} min) ===")
        for iv in res.slots:
            print(fmt_interval(iv))

    if args.explain:
        print("\n=== Explain / Evidence ===")
        print(json.dumps(res.explain, ensure_ascii=False, indent=2))

    return 0


if __name__ == "__main__":
    sys.exit(main())
