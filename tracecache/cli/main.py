from __future__ import annotations
import argparse
import sys
from ..config import SimConfig, ConfigError
from ..runtime.simulator import run as run_sim
from ..trace.reader import open_trace, TraceError
from ..utils.logging import get_logger
from ..utils.reporting import generate_report

logger = get_logger("tracecache")


def cmd_run(args):
    """Handles the 'run' command."""
    if args.trace_path:
        args.trace_file = args.trace_path
    config = SimConfig.from_args(args)

    # 1. Reject bad settings before touching the trace
    cache_config = config.validate()
    logger.setLevel(str(config.log_level).upper())
    logger.info("Cache: %s", cache_config.describe())

    # 2. Replay the trace through both caches
    events = open_trace(config.trace_file)
    results = run_sim(events, config)

    # 3. Report
    generate_report(results, config)
    if config.report_dir:
        logger.info("Reports are in %s", config.report_dir)
    return 0


def cmd_info(args):
    """Handles the 'info' command."""
    config = SimConfig.from_args(args)
    cache_config = config.validate(require_trace=False)
    print(cache_config.describe())
    print(f"Lines: {cache_config.num_lines}")
    print(f"Sets: {cache_config.num_sets}")
    print(f"Offset bits: {cache_config.block_offset_bits}")
    print(f"Index bits: {cache_config.set_index_bits}")
    print(f"Tag shift: {cache_config.block_offset_bits + cache_config.set_index_bits}")
    return 0


def _add_geometry_args(p, with_policy=True):
    p.add_argument("cache_size", nargs='?', type=int, default=None,
                   help="Total cache size in bytes (power of two)")
    p.add_argument("associativity", nargs='?', default=None,
                   help="direct | assoc | assoc:N")
    if with_policy:
        p.add_argument("policy", nargs='?', default=None,
                       help="Replacement policy: fifo or lru")
    p.add_argument("block_size", nargs='?', type=int, default=None,
                   help="Block size in bytes (power of two)")


def build_parser():
    p = argparse.ArgumentParser(
        prog="tracecache",
        description="Trace-driven cache simulator with next-block prefetching",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    # --- Run Command ---
    pr = sub.add_parser("run", help="Replay a trace with and without prefetching",
                        description="Positional arguments are filled left to right; "
                                    "when -c supplies the geometry, pass the trace with -t.",
                        formatter_class=argparse.ArgumentDefaultsHelpFormatter)
    pr.add_argument("-c", "--config", type=str, default=None,
                    help="Path to YAML config file to override defaults")
    _add_geometry_args(pr)
    pr.add_argument("trace_file", nargs='?', default=None,
                    help="Trace file with '<pc>: <R|W> <address>' lines")
    pr.add_argument("-t", "--trace", type=str, default=None, dest="trace_path",
                    help="Trace file, for use when the geometry comes from --config")
    pr.add_argument("--report", type=str, default=None, dest="report_dir",
                    help="Directory to save report.json and report.html")
    pr.add_argument("--no-html", action="store_false", default=None, dest="html",
                    help="Skip the HTML chart when writing reports")
    pr.add_argument("--ascii-chart", action="store_true", default=None, dest="ascii_chart",
                    help="Print an ASCII bar chart of the counters")
    pr.add_argument("--log-level", type=str, default=None, dest="log_level",
                    choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                    help="Logging verbosity")
    pr.set_defaults(func=cmd_run)

    # --- Info Command ---
    pi = sub.add_parser("info", help="Show the derived cache geometry",
                        formatter_class=argparse.ArgumentDefaultsHelpFormatter)
    pi.add_argument("-c", "--config", type=str, default=None,
                    help="Path to YAML config file to override defaults")
    _add_geometry_args(pi, with_policy=False)
    pi.set_defaults(func=cmd_info)

    return p


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return args.func(args)
    except (ConfigError, TraceError) as e:
        logger.error("%s", e)
        return 1


def run_cli():
    sys.exit(main())


if __name__ == "__main__":
    run_cli()
