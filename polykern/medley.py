"""Medley kernels: Floyd-Warshall shortest paths, region detection, and a template kernel."""

from __future__ import annotations

from typing import TextIO

from polykern.runtime import (
    Benchmark,
    Dataset,
    alloc_array,
    format_double,
    format_int,
    write_values,
)

Grid = list[list[float]]
IntGrid = list[list[int]]


def _trunc_div(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(numerator) // abs(denominator)
    return -quotient if (numerator < 0) != (denominator < 0) else quotient


# --- Floyd-Warshall -------------------------------------------------------

_FLOYD_SIZES = {
    Dataset.MINI: {"n": 32},
    Dataset.SMALL: {"n": 128},
    Dataset.STANDARD: {"n": 1024},
    Dataset.LARGE: {"n": 2000},
    Dataset.EXTRALARGE: {"n": 4000},
}


def floyd_warshall_init(n: int) -> Grid:
    """Build the initial path matrix: ``(i+1)*(j+1)/n``."""
    return [[float(i + 1) * (j + 1) / n for j in range(n)] for i in range(n)]


def floyd_warshall_kernel(n: int, path: Grid) -> None:
    """Relax every path through each intermediate vertex, in place."""
    for k in range(n):
        row_k = path[k]
        for i in range(n):
            row = path[i]
            for j in range(n):
                via = row[k] + row_k[j]
                if not row[j] < via:
                    row[j] = via


def floyd_warshall_dump(n: int, path: Grid, stream: TextIO) -> None:
    """Write the path matrix."""
    write_values(
        stream,
        ((i * n + j, path[i][j]) for i in range(n) for j in range(n)),
        format_double,
    )


FLOYD_WARSHALL = Benchmark(
    name="floyd-warshall",
    sizes=_FLOYD_SIZES,
    init=lambda s: {"path": floyd_warshall_init(s["n"])},
    kernel=lambda s, st: floyd_warshall_kernel(s["n"], st["path"]),
    dump=lambda s, st, out: floyd_warshall_dump(s["n"], st["path"], out),
)


# --- Region detection ----------------------------------------------------

_REG_DETECT_SIZES = {
    Dataset.MINI: {"niter": 10, "length": 32, "maxgrid": 2},
    Dataset.SMALL: {"niter": 100, "length": 50, "maxgrid": 6},
    Dataset.STANDARD: {"niter": 10000, "length": 64, "maxgrid": 6},
    Dataset.LARGE: {"niter": 1000, "length": 500, "maxgrid": 12},
    Dataset.EXTRALARGE: {"niter": 10000, "length": 500, "maxgrid": 12},
}


def reg_detect_init(maxgrid: int) -> tuple[IntGrid, IntGrid, IntGrid]:
    """Build the integer ``sum_tang``, ``mean`` and ``path`` matrices."""
    sum_tang = [[(i + 1) * (j + 1) for j in range(maxgrid)] for i in range(maxgrid)]
    mean = [[_trunc_div(i - j, maxgrid) for j in range(maxgrid)] for i in range(maxgrid)]
    path = [[_trunc_div(i * (j - 1), maxgrid) for j in range(maxgrid)] for i in range(maxgrid)]
    return sum_tang, mean, path


def reg_detect_kernel(
    niter: int,
    maxgrid: int,
    length: int,
    sum_tang: IntGrid,
    mean: IntGrid,
    path: IntGrid,
    diff: list[IntGrid],
    sum_diff: list[IntGrid],
) -> None:
    """Run the region-detection kernel in place over the upper triangle."""
    for _ in range(niter):
        for j in range(maxgrid):
            for i in range(j, maxgrid):
                cells = diff[j][i]
                value = sum_tang[j][i]
                for cnt in range(length):
                    cells[cnt] = value

        for j in range(maxgrid):
            for i in range(j, maxgrid):
                cells = diff[j][i]
                sums = sum_diff[j][i]
                sums[0] = cells[0]
                for cnt in range(1, length):
                    sums[cnt] = sums[cnt - 1] + cells[cnt]
                mean[j][i] = sums[length - 1]

        for i in range(maxgrid):
            path[0][i] = mean[0][i]

        for j in range(1, maxgrid):
            for i in range(j, maxgrid):
                path[j][i] = path[j - 1][i - 1] + mean[j][i]


def reg_detect_dump(maxgrid: int, path: IntGrid, stream: TextIO) -> None:
    """Write the path matrix as integers."""
    write_values(
        stream,
        ((i * maxgrid + j, path[i][j]) for i in range(maxgrid) for j in range(maxgrid)),
        format_int,
    )


def _reg_detect_state(sizes: dict[str, int]) -> dict:
    maxgrid, length = sizes["maxgrid"], sizes["length"]
    sum_tang, mean, path = reg_detect_init(maxgrid)
    return {
        "sum_tang": sum_tang,
        "mean": mean,
        "path": path,
        "diff": alloc_array(maxgrid, maxgrid, length, fill=0),
        "sum_diff": alloc_array(maxgrid, maxgrid, length, fill=0),
    }


REG_DETECT = Benchmark(
    name="reg_detect",
    sizes=_REG_DETECT_SIZES,
    init=_reg_detect_state,
    kernel=lambda s, st: reg_detect_kernel(
        s["niter"],
        s["maxgrid"],
        s["length"],
        st["sum_tang"],
        st["mean"],
        st["path"],
        st["diff"],
        st["sum_diff"],
    ),
    dump=lambda s, st, out: reg_detect_dump(s["maxgrid"], st["path"], out),
)


# --- Template ------------------------------------------------------------

_TEMPLATE_SIZES = dict(_FLOYD_SIZES)


def template_init(n: int) -> Grid:
    """Build an ``n`` by ``n`` matrix filled with 42."""
    return [[42.0] * n for _ in range(n)]


def template_kernel(n: int, c: Grid) -> None:
    """Add 42 to every cell, in place."""
    for i in range(n):
        row = c[i]
        for j in range(n):
            row[j] += 42


def template_dump(n: int, c: Grid, stream: TextIO) -> None:
    """Write the matrix, breaking after every cell of rows whose index divides by 20."""
    write_values(
        stream,
        ((i, c[i][j]) for i in range(n) for j in range(n)),
        format_double,
    )


TEMPLATE = Benchmark(
    name="template",
    sizes=_TEMPLATE_SIZES,
    init=lambda s: {"c": template_init(s["n"])},
    kernel=lambda s, st: template_kernel(s["n"], st["c"]),
    dump=lambda s, st, out: template_dump(s["n"], st["c"], out),
)