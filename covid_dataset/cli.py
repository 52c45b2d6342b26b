#!/usr/bin/env python3
"""
COVID Dataset CLI: parse time-series CSVs and export per-place JSON.

USAGE:
  python -m covid_dataset.cli classify dataset/global_confirmed.csv   # Show header classification
  python -m covid_dataset.cli parse                                   # Case counts -> public/data/
  python -m covid_dataset.cli parse --dataset-dir ./dataset --output ./public --workers 4
  python -m covid_dataset.cli population                              # Population history
  python -m covid_dataset.cli all                                     # Both
"""
from __future__ import annotations

import argparse
import sys
from datetime import datetime
from pathlib import Path

from covid_dataset.config import DATASET_FOLDER, OUTPUT_DATE_FORMAT, OUTPUT_FOLDER, WORKERS
from covid_dataset.data.errors import DatasetError
from covid_dataset.data.loader import read_raw_table
from covid_dataset.data.normalize import plan_columns
from covid_dataset.data.session import DatasetSession
from covid_dataset.export import export_items, export_population, export_summary


def _banner(title: str) -> None:
    print("\n" + "=" * 70)
    print(f"  COVID DATASET: {title}")
    print("=" * 70)
    print(f"  Started: {datetime.now():%Y-%m-%d %H:%M:%S}")


def _session(args) -> DatasetSession:
    return DatasetSession(
        dataset_dir=args.dataset_dir,
        date_format=args.date_format,
        workers=args.workers,
    )


def cmd_classify(args):
    """Print how each header of a CSV is classified and renamed."""
    table = read_raw_table(args.csv)
    plans = plan_columns([str(c) for c in table.columns], args.date_format)
    print(f"\n{Path(args.csv).name}: {len(plans)} columns, {len(table):,} rows\n")
    for plan in plans:
        cast = plan.cast or "-"
        print(f"  {plan.source[:30]:<32}{plan.kind.value:<10}{plan.name:<24}{cast}")


def cmd_parse(args):
    """Parse confirmed/deaths/recovered and export items + summary."""
    _banner("CASE COUNTS")
    out = Path(args.output)
    with _session(args) as session:
        items = session.parse_datasets()

    count = export_items(items, out)
    summary = export_summary(items, out)
    print(f"\n  {count:,} place files written")
    for status, totals in summary["statuses"].items():
        print(f"    {status:<10} {totals['places']:>5,} places  latest {totals['latest_date']}  total {totals['latest_total']:,}")
    print(f"  Output: {out.resolve()}\n")


def cmd_population(args):
    """Parse population history and export it."""
    _banner("POPULATION")
    out = Path(args.output)
    with _session(args) as session:
        histories = session.parse_population()

    path = export_population(histories, out)
    print(f"\n  {len(histories):,} countries written to {path}\n")


def cmd_all(args):
    """Parse everything and export one combined summary."""
    _banner("FULL RUN")
    out = Path(args.output)
    with _session(args) as session:
        items = session.parse_datasets()
        histories = session.parse_population()

    count = export_items(items, out)
    export_population(histories, out)
    export_summary(items, out, histories)
    print(f"\n  {count:,} place files, {len(histories):,} population histories")
    print(f"  Output: {out.resolve()}\n")


def _add_run_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--dataset-dir", default=str(DATASET_FOLDER), help=f"CSV folder (default: {DATASET_FOLDER})")
    p.add_argument("--output", default=str(OUTPUT_FOLDER), help=f"Output folder (default: {OUTPUT_FOLDER})")
    p.add_argument("--workers", type=int, default=WORKERS, help="Projection threads (default 1)")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="COVID Dataset: normalize wide time-series CSVs into per-place JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    date_help = f"strftime pattern for date columns (default: {OUTPUT_DATE_FORMAT})".replace("%", "%%")
    parser.add_argument("--date-format", default=OUTPUT_DATE_FORMAT, help=date_help)

    # Also accepted after the subcommand; when omitted there the top-level value stands.
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--date-format", default=argparse.SUPPRESS, help=date_help)

    subparsers = parser.add_subparsers(dest="command", help="Command")

    classify_parser = subparsers.add_parser("classify", parents=[common], help="Show header classification for a CSV")
    classify_parser.add_argument("csv", help="CSV file")
    classify_parser.set_defaults(func=cmd_classify)

    parse_parser = subparsers.add_parser("parse", parents=[common], help="Parse case-count datasets")
    _add_run_args(parse_parser)
    parse_parser.set_defaults(func=cmd_parse)

    pop_parser = subparsers.add_parser("population", parents=[common], help="Parse population dataset")
    _add_run_args(pop_parser)
    pop_parser.set_defaults(func=cmd_population)

    all_parser = subparsers.add_parser("all", parents=[common], help="Parse everything")
    _add_run_args(all_parser)
    all_parser.set_defaults(func=cmd_all)

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 0

    try:
        args.func(args)
    except (DatasetError, FileNotFoundError) as exc:
        print(f"  ERROR: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
