"""Stencil kernels: alternating-direction implicit solver, 2-D FDTD and 1-D Jacobi."""

from __future__ import annotations

from typing import TextIO

from polykern.runtime import Benchmark, Dataset, format_double, write_values

Vector = list[float]
Grid = list[list[float]]


# --- Alternating direction implicit ---------------------------------------

_ADI_SIZES = {
    Dataset.MINI: {"tsteps": 2, "n": 32},
    Dataset.SMALL: {"tsteps": 10, "n": 500},
    Dataset.STANDARD: {"tsteps": 50, "n": 1024},
    Dataset.LARGE: {"tsteps": 50, "n": 2000},
    Dataset.EXTRALARGE: {"tsteps": 100, "n": 4000},
}


def adi_init(n: int) -> tuple[Grid, Grid, Grid]:
    """Build the ``X``, ``A`` and ``B`` matrices."""
    x = [[(i * (j + 1) + 1) / n for j in range(n)] for i in range(n)]
    a = [[(i * (j + 2) + 2) / n for j in range(n)] for i in range(n)]
    b = [[(i * (j + 3) + 3) / n for j in range(n)] for i in range(n)]
    return x, a, b


def adi_kernel(tsteps: int, n: int, x: Grid, a: Grid, b: Grid) -> None:
    """Sweep along rows, then along columns, *tsteps* times, in place."""
    last = n - 1
    for _ in range(tsteps):
        for xr, ar, br in zip(x, a, b):
            for i2 in range(1, n):
                xr[i2] = xr[i2] - xr[i2 - 1] * ar[i2] / br[i2 - 1]
                br[i2] = br[i2] - ar[i2] * ar[i2] / br[i2 - 1]

        for xr, br in zip(x, b):
            xr[last] = xr[last] / br[last]

        for xr, ar, br in zip(x, a, b):
            for i2 in range(n - 2):
                xr[n - i2 - 2] = (
                    xr[n - 2 - i2] - xr[n - 3 - i2] * ar[n - i2 - 3]
                ) / br[n - 3 - i2]

        for i1 in range(1, n):
            xr, ar, br = x[i1], a[i1], b[i1]
            xp, bp = x[i1 - 1], b[i1 - 1]
            for i2 in range(n):
                xr[i2] = xr[i2] - xp[i2] * ar[i2] / bp[i2]
                br[i2] = br[i2] - ar[i2] * ar[i2] / bp[i2]

        if n > 0:
            xl, bl = x[last], b[last]
            for i2 in range(n):
                xl[i2] = xl[i2] / bl[i2]

        for i1 in range(n - 2):
            xr = x[n - 2 - i1]
            xq = x[n - i1 - 3]
            aq = a[n - 3 - i1]
            br = b[n - 2 - i1]
            for i2 in range(n):
                xr[i2] = (xr[i2] - xq[i2] * aq[i2]) / br[i2]


def adi_dump(n: int, x: Grid, stream: TextIO) -> None:
    """Write the ``X`` matrix."""
    write_values(
        stream,
        ((i * n + j, x[i][j]) for i in range(n) for j in range(n)),
        format_double,
    )


def _adi_state(sizes: dict[str, int]) -> dict:
    x, a, b = adi_init(sizes["n"])
    return {"x": x, "a": a, "b": b}


ADI = Benchmark(
    name="adi",
    sizes=_ADI_SIZES,
    init=_adi_state,
    kernel=lambda s, st: adi_kernel(s["tsteps"], s["n"], st["x"], st["a"], st["b"]),
    dump=lambda s, st, out: adi_dump(s["n"], st["x"], out),
)


# --- 2-D finite-difference time domain ------------------------------------

_FDTD_2D_SIZES = {
    Dataset.MINI: {"tmax": 2, "nx": 32, "ny": 32},
    Dataset.SMALL: {"tmax": 10, "nx": 500, "ny": 500},
    Dataset.STANDARD: {"tmax": 50, "nx": 1000, "ny": 1000},
    Dataset.LARGE: {"tmax": 50, "nx": 2000, "ny": 2000},
    Dataset.EXTRALARGE: {"tmax": 100, "nx": 4000, "ny": 4000},
}


def fdtd_2d_init(tmax: int, nx: int, ny: int) -> tuple[Grid, Grid, Grid, Vector]:
    """Build the ``ex``, ``ey`` and ``hz`` fields and the source vector ``fict``."""
    fict = [float(i) for i in range(tmax)]
    ex = [[i * (j + 1) / nx for j in range(ny)] for i in range(nx)]
    ey = [[i * (j + 2) / ny for j in range(ny)] for i in range(nx)]
    hz = [[i * (j + 3) / nx for j in range(ny)] for i in range(nx)]
    return ex, ey, hz, fict


def fdtd_2d_kernel(
    tmax: int, nx: int, ny: int, ex: Grid, ey: Grid, hz: Grid, fict: Vector
) -> None:
    """Advance the electric and magnetic fields *tmax* time steps, in place."""
    for t in range(tmax):
        if nx > 0:
            ey[0][:ny] = [fict[t]] * ny
        for i in range(1, nx):
            eyr, hzr, hzp = ey[i], hz[i], hz[i - 1]
            for j in range(ny):
                eyr[j] = eyr[j] - 0.5 * (hzr[j] - hzp[j])
        for exr, hzr in zip(ex[:nx], hz):
            for j in range(1, ny):
                exr[j] = exr[j] - 0.5 * (hzr[j] - hzr[j - 1])
        for i in range(nx - 1):
            hzr, exr, eyr, eyn = hz[i], ex[i], ey[i], ey[i + 1]
            for j in range(ny - 1):
                hzr[j] = hzr[j] - 0.7 * (exr[j + 1] - exr[j] + eyn[j] - eyr[j])


def fdtd_2d_dump(
    nx: int, ny: int, ex: Grid, ey: Grid, hz: Grid, stream: TextIO
) -> None:
    """Write the three fields interleaved cell by cell."""
    write_values(
        stream,
        (
            (i * nx + j, (ex[i][j], ey[i][j], hz[i][j]))
            for i in range(nx)
            for j in range(ny)
        ),
        format_double,
    )


def _fdtd_2d_state(sizes: dict[str, int]) -> dict:
    ex, ey, hz, fict = fdtd_2d_init(sizes["tmax"], sizes["nx"], sizes["ny"])
    return {"ex": ex, "ey": ey, "hz": hz, "fict": fict}


FDTD_2D = Benchmark(
    name="fdtd-2d",
    sizes=_FDTD_2D_SIZES,
    init=_fdtd_2d_state,
    kernel=lambda s, st: fdtd_2d_kernel(
        s["tmax"], s["nx"], s["ny"], st["ex"], st["ey"], st["hz"], st["fict"]
    ),
    dump=lambda s, st, out: fdtd_2d_dump(
        s["nx"], s["ny"], st["ex"], st["ey"], st["hz"], out
    ),
)


# --- 1-D Jacobi -----------------------------------------------------------

_JACOBI_1D_SIZES = {
    Dataset.MINI: {"tsteps": 2, "n": 500},
    Dataset.SMALL: {"tsteps": 10, "n": 1000},
    Dataset.STANDARD: {"tsteps": 100, "n": 10000},
    Dataset.LARGE: {"tsteps": 1000, "n": 100000},
    Dataset.EXTRALARGE: {"tsteps": 1000, "n": 1000000},
}


def jacobi_1d_init(n: int) -> tuple[Vector, Vector]:
    """Build the ``A`` and ``B`` vectors."""
    a = [(i + 2) / n for i in range(n)]
    b = [(i + 3) / n for i in range(n)]
    return a, b


def jacobi_1d_kernel(tsteps: int, n: int, a: Vector, b: Vector) -> None:
    """Average each interior point with its neighbours *tsteps* times, in place."""
    for _ in range(tsteps):
        for i in range(1, n - 1):
            b[i] = 0.33333 * (a[i - 1] + a[i] + a[i + 1])
        a[1 : n - 1] = b[1 : n - 1]


def jacobi_1d_dump(n: int, a: Vector, stream: TextIO) -> None:
    """Write the ``A`` vector."""
    write_values(stream, ((i, a[i]) for i in range(n)), format_double)


def _jacobi_1d_state(sizes: dict[str, int]) -> dict:
    a, b = jacobi_1d_init(sizes["n"])
    return {"a": a, "b": b}


JACOBI_1D = Benchmark(
    name="jacobi-1d-imper",
    sizes=_JACOBI_1D_SIZES,
    init=_jacobi_1d_state,
    kernel=lambda s, st: jacobi_1d_kernel(s["tsteps"], s["n"], st["a"], st["b"]),
    dump=lambda s, st, out: jacobi_1d_dump(s["n"], st["a"], out),
)