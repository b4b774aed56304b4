"""Command line for running the kernels with a chosen dataset, timing and output dump."""

from __future__ import annotations

import argparse
import sys
from typing import Optional

from polykern.apml import FDTD_APML
from polykern.medley import FLOYD_WARSHALL, REG_DETECT, TEMPLATE
from polykern.relaxation import JACOBI_2D, SEIDEL_2D
from polykern.runtime import Benchmark, Dataset, Timer
from polykern.stencils import ADI, FDTD_2D, JACOBI_1D

BENCHMARKS: dict[str, Benchmark] = {
    bench.name: bench
    for bench in (
        ADI,
        FDTD_2D,
        FDTD_APML,
        FLOYD_WARSHALL,
        JACOBI_1D,
        JACOBI_2D,
        REG_DETECT,
        SEIDEL_2D,
        TEMPLATE,
    )
}


def _size_override(text: str) -> tuple[str, int]:
    name, sep, value = text.partition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got {text!r}")
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"size {name!r} must be an integer: {value!r}"
        ) from None
    return name, number


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the benchmark runner."""
    parser = argparse.ArgumentParser(
        prog="polykern", description="Run a numerical kernel benchmark."
    )
    parser.add_argument(
        "benchmark",
        nargs="?",
        choices=sorted(BENCHMARKS),
        help="kernel to run",
    )
    parser.add_argument(
        "--list", action="store_true", help="list the available kernels and exit"
    )
    parser.add_argument(
        "--dataset",
        choices=[d.value for d in Dataset],
        default=Dataset.STANDARD.value,
        help="problem-size preset (default: standard)",
    )
    parser.add_argument(
        "--size",
        dest="sizes",
        type=_size_override,
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="override one problem size; may be repeated",
    )
    parser.add_argument(
        "--time", action="store_true", help="report the kernel's execution time"
    )
    parser.add_argument(
        "--gflops",
        type=float,
        nargs="?",
        const=0.0,
        default=None,
        metavar="FLOPS",
        help="report GFLOP/s for the given total flop count",
    )
    parser.add_argument(
        "--dump",
        action="store_true",
        help="write the live-out data to standard error",
    )
    parser.add_argument(
        "--no-flush",
        dest="flush",
        action="store_false",
        help="do not flush the cache before timing",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Run the selected kernel; return the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list:
        for name in sorted(BENCHMARKS):
            print(name)
        return 0
    if args.benchmark is None:
        parser.error("a benchmark name is required")

    bench = BENCHMARKS[args.benchmark]
    overrides = dict(args.sizes)
    measuring = args.time or args.gflops is not None
    timer = Timer(flush=args.flush) if measuring else None
    try:
        bench.run(
            args.dataset,
            timer=timer,
            dump=sys.stderr if args.dump else None,
            overrides=overrides,
        )
    except (ValueError, TypeError) as exc:
        print(f"polykern: {exc}", file=sys.stderr)
        return 1

    if timer is not None:
        try:
            print(timer.report(args.gflops))
        except ValueError as exc:
            print(f"polykern: {exc}", file=sys.stderr)
            return 1
    return 0