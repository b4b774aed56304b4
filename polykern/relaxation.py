"""Relaxation stencils: 2-D Jacobi and 2-D Gauss-Seidel iteration."""

from __future__ import annotations

from typing import TextIO

from polykern.runtime import Benchmark, Dataset, format_double, write_values

Grid = list[list[float]]

_RELAXATION_SIZES = {
    Dataset.MINI: {"tsteps": 2, "n": 32},
    Dataset.SMALL: {"tsteps": 10, "n": 500},
    Dataset.STANDARD: {"tsteps": 20, "n": 1000},
    Dataset.LARGE: {"tsteps": 20, "n": 2000},
    Dataset.EXTRALARGE: {"tsteps": 100, "n": 4000},
}


def _dump_grid(n: int, grid: Grid, stream: TextIO) -> None:
    write_values(
        stream,
        ((i * n + j, grid[i][j]) for i in range(n) for j in range(n)),
        format_double,
    )


# --- 2-D Jacobi -----------------------------------------------------------


def jacobi_2d_init(n: int) -> tuple[Grid, Grid]:
    """Build the ``A`` and ``B`` matrices."""
    a = [[(i * (j + 2) + 2) / n for j in range(n)] for i in range(n)]
    b = [[(i * (j + 3) + 3) / n for j in range(n)] for i in range(n)]
    return a, b


def jacobi_2d_kernel(tsteps: int, n: int, a: Grid, b: Grid) -> None:
    """Replace each interior point by its five-point average *tsteps* times, in place."""
    for _ in range(tsteps):
        for i in range(1, n - 1):
            up, row, down, out = a[i - 1], a[i], a[i + 1], b[i]
            for j in range(1, n - 1):
                out[j] = 0.2 * (row[j] + row[j - 1] + row[1 + j] + down[j] + up[j])
        for i in range(1, n - 1):
            a[i][1 : n - 1] = b[i][1 : n - 1]


def jacobi_2d_dump(n: int, a: Grid, stream: TextIO) -> None:
    """Write the ``A`` matrix."""
    _dump_grid(n, a, stream)


def _jacobi_2d_state(sizes: dict[str, int]) -> dict:
    a, b = jacobi_2d_init(sizes["n"])
    return {"a": a, "b": b}


JACOBI_2D = Benchmark(
    name="jacobi-2d-imper",
    sizes=_RELAXATION_SIZES,
    init=_jacobi_2d_state,
    kernel=lambda s, st: jacobi_2d_kernel(s["tsteps"], s["n"], st["a"], st["b"]),
    dump=lambda s, st, out: jacobi_2d_dump(s["n"], st["a"], out),
)


# --- 2-D Gauss-Seidel -----------------------------------------------------


def seidel_2d_init(n: int) -> Grid:
    """Build the ``A`` matrix."""
    return [[(i * (j + 2) + 2) / n for j in range(n)] for i in range(n)]


def seidel_2d_kernel(tsteps: int, n: int, a: Grid) -> None:
    """Replace each interior point by its nine-point average, using fresh values, in place."""
    for _ in range(tsteps):
        for i in range(1, n - 1):
            up, row, down = a[i - 1], a[i], a[i + 1]
            for j in range(1, n - 1):
                row[j] = (
                    up[j - 1] + up[j] + up[j + 1]
                    + row[j - 1] + row[j] + row[j + 1]
                    + down[j - 1] + down[j] + down[j + 1]
                ) / 9.0


def seidel_2d_dump(n: int, a: Grid, stream: TextIO) -> None:
    """Write the ``A`` matrix."""
    _dump_grid(n, a, stream)


SEIDEL_2D = Benchmark(
    name="seidel-2d",
    sizes=dict(_RELAXATION_SIZES),
    init=lambda s: {"a": seidel_2d_init(s["n"])},
    kernel=lambda s, st: seidel_2d_kernel(s["tsteps"], s["n"], st["a"]),
    dump=lambda s, st, out: seidel_2d_dump(s["n"], st["a"], out),
)