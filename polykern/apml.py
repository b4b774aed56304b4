"""Finite-difference time-domain kernel with anisotropic perfectly matched layers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TextIO

from polykern.runtime import Benchmark, Dataset, alloc_array, format_double, write_values

Vector = list[float]
Grid = list[list[float]]
Cube = list[list[list[float]]]

_APML_SIZES = {
    Dataset.MINI: {"cz": 32, "cym": 32, "cxm": 32},
    Dataset.SMALL: {"cz": 64, "cym": 64, "cxm": 64},
    Dataset.STANDARD: {"cz": 256, "cym": 256, "cxm": 256},
    Dataset.LARGE: {"cz": 512, "cym": 512, "cxm": 512},
    Dataset.EXTRALARGE: {"cz": 1000, "cym": 1000, "cxm": 1000},
}


@dataclass
class ApmlFields:
    """Every coefficient, field and scratch array the kernel works on."""

    mui: float
    ch: float
    ax: Grid
    ry: Grid
    clf: Grid
    tmp: Grid
    bza: Cube
    ex: Cube
    ey: Cube
    hz: Cube
    czm: Vector
    czp: Vector
    cxmh: Vector
    cxph: Vector
    cymh: Vector
    cyph: Vector


def _cell(width: int, i: int, j: int) -> tuple[int, int]:
    """Row and column of ``[i][j]`` in a row-major grid of the given width."""
    return divmod(i * width + j, width)


def fdtd_apml_init(cz: int, cxm: int, cym: int) -> ApmlFields:
    """Build the initial fields; ``Bza`` and the scratch arrays start at zero."""
    czm = [(i + 1) / cxm for i in range(cz + 1)]
    czp = [(i + 2) / cxm for i in range(cz + 1)]
    cxmh = [(i + 3) / cxm for i in range(cxm + 1)]
    cxph = [(i + 4) / cxm for i in range(cxm + 1)]
    cymh = [(i + 5) / cxm for i in range(cym + 1)]
    cyph = [(i + 6) / cxm for i in range(cym + 1)]

    ry = [[(i * (j + 1) + 10) / cym for j in range(cym + 1)] for i in range(cz + 1)]
    ax = [[(i * (j + 2) + 11) / cym for j in range(cym + 1)] for i in range(cz + 1)]
    ex = [
        [[(i * (j + 3) + k + 1) / cxm for k in range(cxm + 1)] for j in range(cym + 1)]
        for i in range(cz + 1)
    ]
    ey = [
        [[(i * (j + 4) + k + 2) / cym for k in range(cxm + 1)] for j in range(cym + 1)]
        for i in range(cz + 1)
    ]
    hz = [
        [[(i * (j + 5) + k + 3) / cz for k in range(cxm + 1)] for j in range(cym + 1)]
        for i in range(cz + 1)
    ]
    return ApmlFields(
        mui=2341.0,
        ch=42.0,
        ax=ax,
        ry=ry,
        clf=alloc_array(cym + 1, cxm + 1),
        tmp=alloc_array(cym + 1, cxm + 1),
        bza=alloc_array(cz + 1, cym + 1, cxm + 1),
        ex=ex,
        ey=ey,
        hz=hz,
        czm=czm,
        czp=czp,
        cxmh=cxmh,
        cxph=cxph,
        cymh=cymh,
        cyph=cyph,
    )


def fdtd_apml_kernel(cz: int, cxm: int, cym: int, fields: ApmlFields) -> None:
    """Update ``Hz`` and ``Bza`` across every z plane, in place."""
    f = fields
    mui, ch = f.mui, f.ch
    ex, ey, hz, bza = f.ex, f.ey, f.hz, f.bza
    cxmh, cxph, cymh, cyph = f.cxmh, f.cxph, f.cymh, f.cyph
    # Scratch and Ax are addressed row-major with their declared widths.
    scratch_width = cxm + 1
    ax_width = cym + 1

    def store(iz: int, iy: int, clf: float, tmp: float) -> None:
        r, c = _cell(scratch_width, iz, iy)
        f.clf[r][c] = clf
        f.tmp[r][c] = tmp

    def ax_at(iz: int, ix: int) -> float:
        r, c = _cell(ax_width, iz, ix)
        return f.ax[r][c]

    for iz in range(cz):
        czp_iz, czm_iz = f.czp[iz], f.czm[iz]
        ex_z, ey_z, hz_z, bza_z = ex[iz], ey[iz], hz[iz], bza[iz]
        ex_top, ey_top, hz_top, bza_top = ex_z[cym], ey_z[cym], hz_z[cym], bza_z[cym]
        for iy in range(cym):
            ex_row, ex_next = ex_z[iy], ex_z[iy + 1]
            ey_row, hz_row, bza_row = ey_z[iy], hz_z[iy], bza_z[iy]
            for ix in range(cxm):
                clf = ex_row[ix] - ex_next[ix] + ey_row[ix + 1] - ey_row[ix]
                tmp = (cymh[iy] / cyph[iy]) * bza_row[ix] - (ch / cyph[iy]) * clf
                hz_row[ix] = (
                    (cxmh[ix] / cxph[ix]) * hz_row[ix]
                    + (mui * czp_iz / cxph[ix]) * tmp
                    - (mui * czm_iz / cxph[ix]) * bza_row[ix]
                )
                bza_row[ix] = tmp
                store(iz, iy, clf, tmp)

            clf = ex_row[cxm] - ex_next[cxm] + f.ry[iz][iy] - ey_row[cxm]
            tmp = (cymh[iy] / cyph[iy]) * bza_row[cxm] - (ch / cyph[iy]) * clf
            hz_row[cxm] = (
                (cxmh[cxm] / cxph[cxm]) * hz_row[cxm]
                + (mui * czp_iz / cxph[cxm]) * tmp
                - (mui * czm_iz / cxph[cxm]) * bza_row[cxm]
            )
            bza_row[cxm] = tmp
            store(iz, iy, clf, tmp)

            for ix in range(cxm):
                clf = ex_top[ix] - ax_at(iz, ix) + ey_top[ix + 1] - ey_top[ix]
                tmp = (cymh[cym] / cyph[iy]) * bza_row[ix] - (ch / cyph[iy]) * clf
                hz_top[ix] = (
                    (cxmh[ix] / cxph[ix]) * hz_top[ix]
                    + (mui * czp_iz / cxph[ix]) * tmp
                    - (mui * czm_iz / cxph[ix]) * bza_top[ix]
                )
                bza_top[ix] = tmp
                store(iz, iy, clf, tmp)

            clf = ex_top[cxm] - ax_at(iz, cxm) + f.ry[iz][cym] - ey_top[cxm]
            tmp = (cymh[cym] / cyph[cym]) * bza_top[cxm] - (ch / cyph[cym]) * clf
            hz_top[cxm] = (
                (cxmh[cxm] / cxph[cxm]) * hz_top[cxm]
                + (mui * czp_iz / cxph[cxm]) * tmp
                - (mui * czm_iz / cxph[cxm]) * bza_top[cxm]
            )
            bza_top[cxm] = tmp
            store(iz, iy, clf, tmp)


def fdtd_apml_dump(
    cz: int, cxm: int, cym: int, fields: ApmlFields, stream: TextIO
) -> None:
    """Write ``Bza``, ``Ex``, ``Ey`` and ``Hz`` interleaved cell by cell."""
    f = fields
    write_values(
        stream,
        (
            (i * cxm + j, (f.bza[i][j][k], f.ex[i][j][k], f.ey[i][j][k], f.hz[i][j][k]))
            for i in range(cz + 1)
            for j in range(cym + 1)
            for k in range(cxm + 1)
        ),
        format_double,
    )


FDTD_APML = Benchmark(
    name="fdtd-apml",
    sizes=_APML_SIZES,
    init=lambda s: {"fields": fdtd_apml_init(s["cz"], s["cxm"], s["cym"])},
    kernel=lambda s, st: fdtd_apml_kernel(s["cz"], s["cxm"], s["cym"], st["fields"]),
    dump=lambda s, st, out: fdtd_apml_dump(
        s["cz"], s["cxm"], s["cym"], st["fields"], out
    ),
)