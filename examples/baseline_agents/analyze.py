"""
Optimal-path analysis over archived reports

Loads every report written by run.py (or by any other harness using
JsonArchive) and re-derives optimal path lengths from the stored grids.

Output modes:
- stats: print reachability and per-model efficiency (default)
- enhance: write optimal_path_length / efficiency_score back into each report
- json: export the optimal-path entries, to --out FILE or stdout
- filter: rewrite each report down to --seeds, with stats recomputed

Run: python examples/baseline_agents/analyze.py --filter random --seeds 12345 12346
     python examples/baseline_agents/analyze.py --output enhance
     python examples/baseline_agents/analyze.py --output json --out optimal-paths.json
"""

import argparse
import asyncio
import json
from pathlib import Path

from mazebench import JsonArchive, compute_stats
from mazebench.analysis import (
    compute_optimal_paths,
    enhance_report,
    enhance_results,
    extract_unique_mazes,
    filter_report,
    filter_results_by_seeds,
    format_optimal_path_stats,
    optimal_path_stats,
    optimal_paths_document,
)
from mazebench.config import Config
from mazebench.logging_utils import log_error, log_info, log_success


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Analyze archived benchmark reports")
    parser.add_argument(
        "--filter",
        dest="name_filter",
        default=None,
        help="Only load reports whose name contains this text"
    )
    parser.add_argument(
        "--seeds",
        type=int,
        nargs="+",
        default=None,
        help="Restrict the analysis to these maze seeds"
    )
    parser.add_argument(
        "--output",
        choices=["stats", "enhance", "json", "filter"],
        default="stats",
        help="What to do with the computed optimal paths (default: stats)"
    )
    parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="File for --output json (default: print to stdout)"
    )
    args = parser.parse_args()
    if args.output == "filter" and not args.seeds:
        parser.error("--output filter requires --seeds")
    return args


async def main():
    args = parse_args()
    seeds = args.seeds

    archive = JsonArchive(Config.RESULTS_DIR)
    reports = await archive.load_reports(args.name_filter)
    if not reports:
        log_error(f"No reports found under {archive.reports_dir}")
        return

    all_results = [r for report in reports.values() for r in report.results]
    entries = compute_optimal_paths(
        extract_unique_mazes(all_results), seeds, verbose=args.output == "stats"
    )

    if args.output == "json":
        text = json.dumps(optimal_paths_document(entries), indent=2)
        if args.out:
            args.out.write_text(text, "utf-8")
            log_success(f"Saved {len(entries)} optimal paths to {args.out}")
        else:
            print(text)
        return

    if args.output == "enhance":
        for name, report in reports.items():
            await archive.save_report(name, enhance_report(report, entries))
            log_success(f"Enhanced: {name}")
        return

    if args.output == "filter":
        for name, report in reports.items():
            filtered = filter_report(report, seeds)
            await archive.save_report(name, filtered)
            log_success(f"Filtered {name}: {len(report.results)} -> {len(filtered.results)} results")
        return

    print()
    print(format_optimal_path_stats(optimal_path_stats(entries)))
    print()

    for name, report in reports.items():
        results = report.results
        if seeds is not None:
            results = filter_results_by_seeds(results, seeds)
        stats = compute_stats(enhance_results(results, entries))
        log_info(
            f"{name}: {len(results)} runs, success {stats.overall.success_rate * 100:.1f}%, "
            f"avg efficiency {stats.overall.avg_efficiency:.2f}"
        )


if __name__ == "__main__":
    asyncio.run(main())
