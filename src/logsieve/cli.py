"""CLI entry point for logsieve.

Parses arguments, loads the labelled CSV, runs the parallel rule-based
classification, prints/saves the statistics, and dispatches a run summary
when faults were predicted and a notification channel is configured.
With ``--sweep`` it instead repeats the batch once per thread count and
prints a throughput table.
"""

from __future__ import annotations

import argparse
import copy
import json
import logging
import os
import sys
from pathlib import Path
from typing import List, Tuple

from .core import analyze_batch
from .models import LogRecord
from .notify.dispatch import dispatch_notifications, notify_configured
from .notify.summary import build_summary
from .report import (
    print_label_distribution,
    print_sweep_summary,
    print_text_report,
    save_detailed_results,
    save_stats_json,
    stats_to_json,
)
from .runner import DEFAULT_CHUNK_SIZE, DEFAULT_PROGRESS_EVERY
from .sources import read_records
from .stats import PerformanceStats

PERFORMANCE_FILE = "logsieve_performance.json"
RESULTS_FILE = "logsieve_results.csv"

_RULE = "=" * 80


def _positive_int(value: str) -> int:
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {n}")
    return n


def _thread_list(value: str) -> List[int]:
    try:
        counts = [_positive_int(part) for part in value.split(",") if part.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected comma-separated positive integers, got {value!r}")
    if not counts:
        raise argparse.ArgumentTypeError("at least one thread count is required")
    return counts


def parse_args(argv=None) -> argparse.Namespace:
    """Build the argument parser and return parsed arguments."""
    parser = argparse.ArgumentParser(
        prog="logsieve",
        description="Classify labelled log lines with keyword rules on a thread pool and report throughput/accuracy.",
    )

    parser.add_argument("input", nargs="?", default="data/subset_500.csv", help="Labelled log CSV")
    parser.add_argument("output_dir", nargs="?", default="output/", help="Directory for result files")
    parser.add_argument(
        "threads",
        nargs="?",
        type=_positive_int,
        default=os.getenv("LOGSIEVE_THREADS", "32"),
        help="Worker threads (default: $LOGSIEVE_THREADS or 32)",
    )

    parser.add_argument("--chunk-size", type=_positive_int, default=DEFAULT_CHUNK_SIZE, help="Records per work claim")
    parser.add_argument(
        "--progress-every", type=int, default=DEFAULT_PROGRESS_EVERY, help="Progress line every N records (0 disables)"
    )
    parser.add_argument(
        "--sweep",
        type=_thread_list,
        default=None,
        metavar="N,N,...",
        help="Scalability sweep: run once per thread count (e.g. 1,2,4,8,16,32) into <output_dir>/<N>threads/",
    )
    parser.add_argument("--json", action="store_true", help="Print the stats as JSON instead of the text summary")
    parser.add_argument("--no-save", action="store_true", help="Do not write result files")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=os.getenv("LOGSIEVE_LOG_LEVEL", "WARNING"),
        help="Diagnostic log level (stderr)",
    )

    notify = parser.add_argument_group("Notifications")
    notify.add_argument("--notify-ntfy-topic", default=os.getenv("LOGSIEVE_NTFY_TOPIC", ""), help="ntfy topic")
    notify.add_argument("--notify-ntfy-server", default=os.getenv("LOGSIEVE_NTFY_SERVER", "https://ntfy.sh"), help="ntfy server")
    notify.add_argument("--notify-telegram-token", default=os.getenv("LOGSIEVE_TELEGRAM_TOKEN", ""), help="Telegram bot token")
    notify.add_argument("--notify-telegram-chat-id", default=os.getenv("LOGSIEVE_TELEGRAM_CHAT_ID", ""), help="Telegram chat id")

    return parser.parse_args(argv)


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s | %(levelname)-8s | %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def run_sweep(args, records: List[LogRecord], say) -> List[Tuple[int, PerformanceStats]]:
    """Run the batch once per thread count in ``args.sweep``.

    Every run classifies a fresh deep copy of *records*. Unless
    ``--no-save`` is given, each run's files go to
    ``<output_dir>/<N>threads/``. Returns ``(threads, stats)`` pairs in
    sweep order.
    """
    results: List[Tuple[int, PerformanceStats]] = []
    for threads in args.sweep:
        say("\n" + "-" * 40)
        say(f"Testing with {threads} threads")
        say("-" * 40)

        batch = copy.deepcopy(records)
        outcome = analyze_batch(
            batch,
            num_threads=threads,
            chunk_size=args.chunk_size,
            progress_every=args.progress_every,
            on_progress=lambda i, total: say(f"  Processed: {i}/{total}"),
        )
        if outcome.failures:
            print(f"Warning: {outcome.failures} records failed to process ({threads} threads)", file=sys.stderr)

        if not args.no_save:
            run_dir = Path(args.output_dir) / f"{threads}threads"
            save_stats_json(outcome.stats, run_dir / PERFORMANCE_FILE)
            save_detailed_results(batch, run_dir / RESULTS_FILE)
            say(f"Results saved to: {run_dir}")

        results.append((threads, outcome.stats))
    return results


def main(argv=None) -> None:
    """Entry point: load, classify in parallel, report, save, notify."""
    args = parse_args(argv)
    setup_logging(args.log_level)

    # Keep stdout clean for machine-readable output
    say = (lambda *a, **k: None) if args.json else print

    say(_RULE)
    say("LOGSIEVE: RULE-BASED LOG ANALYSIS")
    say(_RULE)
    say(f"Input: {args.input}")
    say(f"Output: {args.output_dir}")
    if args.sweep:
        say(f"Sweep: {','.join(str(n) for n in args.sweep)} threads")
    else:
        say(f"Threads: {args.threads}")
    say(_RULE)

    say("\n[1/4] Loading dataset...")
    try:
        loaded, src_desc = read_records(args)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    records = loaded.records
    if loaded.skipped:
        print(f"Warning: skipped {loaded.skipped} malformed lines", file=sys.stderr)
    say(f"Loaded {len(records)} logs from {args.input}")

    if not records:
        print("No logs loaded. Exiting.", file=sys.stderr)
        sys.exit(1)

    if args.sweep:
        results = run_sweep(args, records, say)
        if args.json:
            print(json.dumps([stats.to_dict() for _, stats in results], indent=2))
        else:
            print_sweep_summary(results)
        say("\n" + _RULE)
        say("SCALABILITY SWEEP COMPLETED")
        say(_RULE)
        return

    say("\n[2/4] Initializing engines...")
    say(f"Worker threads: {args.threads} (chunk size {args.chunk_size})")

    say("\n[3/4] Processing logs...")
    outcome = analyze_batch(
        records,
        num_threads=args.threads,
        chunk_size=args.chunk_size,
        progress_every=args.progress_every,
        on_progress=lambda i, total: say(f"  Processed: {i}/{total}"),
    )
    stats = outcome.stats
    if outcome.failures:
        print(f"Warning: {outcome.failures} records failed to process", file=sys.stderr)
    say("Processing completed!")

    say("\n[4/4] Calculating statistics...")
    if args.json:
        print(stats_to_json(stats))
    else:
        print_text_report(stats)
        print_label_distribution(records)

    if not args.no_save:
        out_dir = Path(args.output_dir)
        say("\n--- Saving Results ---")
        save_stats_json(stats, out_dir / PERFORMANCE_FILE)
        say(f"Performance stats saved to: {out_dir / PERFORMANCE_FILE}")
        save_detailed_results(records, out_dir / RESULTS_FILE)
        say(f"Detailed results saved to: {out_dir / RESULTS_FILE}")

    summary = build_summary(stats, records, src_desc)
    if summary.fault_count and notify_configured(args):
        failures = dispatch_notifications(args, summary)
        if failures:
            print("Notification failures:", file=sys.stderr)
            for f in failures:
                print(f" - {f}", file=sys.stderr)

    say("\n" + _RULE)
    say("EXPERIMENT COMPLETED")
    say(_RULE)


if __name__ == "__main__":
    main()
