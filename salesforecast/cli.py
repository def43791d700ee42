"""
Command-line front end: CSV sales history in, forecast + reorder plan (JSON) out.

Usage:
    salesforecast sales.csv                              # 3-month basic forecast
    salesforecast sales.csv --horizon 6 --mode advanced  # ARIMA-style diagnostics
    salesforecast --example --output plan.json           # Run on synthetic data
    salesforecast sales.csv --settings settings.json     # Override forecast policy
"""

import argparse
import csv
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .config import (
    DEFAULT_HORIZON_STEPS,
    DEFAULT_SAFETY_STOCK_PCT,
    DEFAULT_STARTING_INVENTORY,
    DEFAULT_WINDOW_SIZE,
    load_policy,
)
from .domain.errors import ForecastError
from .domain.models import ForecastMode, RunConfig
from .example_data import create_example_data
from .pipeline import run_forecast
from .utils.error_formatting import ErrorFormatter
from .utils.logging_config import setup_logging


logger = logging.getLogger(__name__)


def read_csv_rows(path: Path) -> List[Dict[str, Any]]:
    """Read a CSV file into row dicts (header row = keys)."""
    with open(path, 'r', encoding='utf-8-sig', newline='') as f:
        return list(csv.DictReader(f))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="salesforecast",
        description="Forecast monthly sales and recommend reorder quantities",
    )
    parser.add_argument("csv", nargs="?", type=Path, help="CSV file with a date and a sales column")
    parser.add_argument("--example", action="store_true", help="Use generated example data instead of a CSV")
    parser.add_argument("--horizon", type=int, default=DEFAULT_HORIZON_STEPS, help="Months to forecast (1-12)")
    parser.add_argument("--window-size", type=int, default=DEFAULT_WINDOW_SIZE, help="Baseline window (1-6)")
    parser.add_argument("--safety-stock", type=float, default=DEFAULT_SAFETY_STOCK_PCT, help="Safety stock percent (0-100)")
    parser.add_argument("--inventory", type=float, default=DEFAULT_STARTING_INVENTORY, help="Starting inventory units")
    parser.add_argument(
        "--mode",
        choices=[m.value for m in ForecastMode],
        default=ForecastMode.BASIC.value,
        help="basic or advanced (adds stationarity and ARIMA order diagnostics)",
    )
    parser.add_argument("--settings", type=Path, help="JSON settings file with a 'forecast_policy' section")
    parser.add_argument("--output", type=Path, help="Write JSON here instead of stdout")
    parser.add_argument("--log-dir", type=Path, help="Directory for rotating log files")
    parser.add_argument("-v", "--verbose", action="store_true", help="Print progress to stderr")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.example and args.csv is None:
        parser.error("a CSV file is required unless --example is given")

    setup_logging(args.log_dir, console_level=logging.INFO if args.verbose else logging.WARNING)

    context = {"Input": "example data" if args.example else str(args.csv)}
    try:
        config = RunConfig(
            horizon_steps=args.horizon,
            window_size=args.window_size,
            safety_stock_pct=args.safety_stock,
            starting_inventory=args.inventory,
            mode=args.mode,
        )
        policy = load_policy(args.settings)
        rows = create_example_data() if args.example else read_csv_rows(args.csv)
        result = run_forecast(rows, config, policy)
    except (ForecastError, OSError, UnicodeDecodeError, csv.Error) as exc:
        error = ErrorFormatter.format_forecast_error(exc, "run_forecast", context)
        logger.error(error.format_for_log())
        print(error.format_for_display(include_technical=args.verbose), file=sys.stderr)
        return 1

    payload = json.dumps(result.to_dict(), indent=2)
    if args.output:
        args.output.write_text(payload + "\n", encoding='utf-8')
        logger.info(f"Wrote forecast to {args.output}")
    else:
        print(payload)

    return 0


if __name__ == "__main__":
    sys.exit(main())
