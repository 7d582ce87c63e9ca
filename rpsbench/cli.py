"""Command line entry point for the throughput benchmark."""
import argparse
import sys
from typing import List, Optional

from rpsbench.benchmark import BenchmarkConfig, BenchmarkError, BenchmarkRunner, ResultReporter
from rpsbench.const import EXIT_FATAL, EXIT_OK, STRATEGY_AUTO, STRATEGY_BATCH, STRATEGY_POOL
from rpsbench.shared.config import load_config
from rpsbench.shared.logging import LoggingManager

EPILOG = """Examples:
  rpsbench --url http://localhost:8080 --duration 10
  rpsbench -t 8 -c 200 -d 60
"""


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits with the fatal status on usage errors."""

    def error(self, message: str):
        self.print_usage(sys.stderr)
        self.exit(EXIT_FATAL, f"ERROR: {message}\nUse --help for usage information\n")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="rpsbench",
        description="Benchmark an HTTP server's sustained throughput.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-d", "--duration", type=int, help="Duration of the test in seconds (reported only)")
    parser.add_argument("-c", "--connections", type=int, help="Maximum requests in flight at once")
    parser.add_argument("-t", "--threads", type=int, help="Number of threads (reported only)")
    parser.add_argument("-u", "--url", help="URL of the target; its host is probed and its port tried first")
    parser.add_argument("-n", "--requests", dest="total_requests", type=int, help="Total requests to dispatch")
    parser.add_argument("--strategy", dest="dispatch_strategy",
                        choices=[STRATEGY_AUTO, STRATEGY_POOL, STRATEGY_BATCH],
                        help="Dispatch strategy (default: auto)")
    parser.add_argument("--log-level", dest="log_level", help="Logging level (default: WARNING)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the benchmark and return the process exit code.

    Exit code 0 on completion whether or not the threshold was met, 1 on a
    fatal error (bad option, unavailable strategy, target not found).
    """
    args = build_parser().parse_args(argv)
    reporter = ResultReporter()
    reporter.header("HTTP Throughput Benchmark")

    try:
        settings = load_config(**vars(args))
        LoggingManager.setup_logging(settings.log_level, settings.library_log_levels)
        runner = BenchmarkRunner(BenchmarkConfig.from_settings(settings), reporter=reporter)
        runner.run()
    except BenchmarkError as e:
        reporter.fatal(e)
        return EXIT_FATAL

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
