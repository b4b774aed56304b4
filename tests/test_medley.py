import io

import pytest

from polykern.medley import (
    FLOYD_WARSHALL,
    REG_DETECT,
    TEMPLATE,
    floyd_warshall_dump,
    floyd_warshall_init,
    floyd_warshall_kernel,
    reg_detect_dump,
    reg_detect_init,
    reg_detect_kernel,
    template_dump,
    template_init,
    template_kernel,
)
from polykern.runtime import alloc_array


def test_floyd_init_diagonal_and_symmetry():
    n = 5
    path = floyd_warshall_init(n)
    assert len(path) == n and all(len(row) == n for row in path)
    for i in range(n):
        for j in range(n):
            assert path[i][j] == path[j][i]
    assert path[n - 1][n - 1] == pytest.approx(float(n * n) / n)


def test_floyd_kernel_triangle_inequality_and_monotone():
    n = 6
    original = floyd_warshall_init(n)
    path = [row[:] for row in original]
    floyd_warshall_kernel(n, path)
    for i in range(n):
        for j in range(n):
            assert path[i][j] <= original[i][j]
            for k in range(n):
                assert path[i][j] <= path[i][k] + path[k][j] + 1e-12


def test_floyd_kernel_idempotent():
    n = 7
    path = floyd_warshall_init(n)
    floyd_warshall_kernel(n, path)
    again = [row[:] for row in path]
    floyd_warshall_kernel(n, again)
    assert again == path


def test_floyd_dump_format():
    n = 3
    path = floyd_warshall_init(n)
    out = io.StringIO()
    floyd_warshall_dump(n, path, out)
    text = out.getvalue()
    assert text.startswith(f"{path[0][0]:0.2f} \n")
    assert text.endswith("\n")
    assert text.replace("\n", "").split() == [f"{v:0.2f}" for row in path for v in row]


def test_floyd_benchmark_run_with_override():
    state = FLOYD_WARSHALL.run("mini", overrides={"n": 4})
    assert len(state["path"]) == 4
    reference = floyd_warshall_init(4)
    floyd_warshall_kernel(4, reference)
    assert state["path"] == reference


def test_floyd_benchmark_sizes():
    assert FLOYD_WARSHALL.sizes_for("standard") == {"n": 1024}
    assert FLOYD_WARSHALL.sizes_for("extralarge") == {"n": 4000}


def test_reg_detect_init_truncates_toward_zero():
    sum_tang, mean, path = reg_detect_init(6)
    # (0 - 1) / 6 truncates to zero rather than flooring to -1
    assert mean[0][1] == 0
    assert mean[5][0] == 0
    assert path[0][0] == 0
    assert sum_tang[2][3] == 12
    for row in mean + path + sum_tang:
        assert all(isinstance(v, int) for v in row)


def _reg_detect_run(niter, maxgrid, length):
    sum_tang, mean, path = reg_detect_init(maxgrid)
    diff = alloc_array(maxgrid, maxgrid, length, fill=0)
    sum_diff = alloc_array(maxgrid, maxgrid, length, fill=0)
    original_mean = [row[:] for row in mean]
    reg_detect_kernel(niter, maxgrid, length, sum_tang, mean, path, diff, sum_diff)
    return sum_tang, mean, path, original_mean


def test_reg_detect_kernel_invariants():
    maxgrid, length = 5, 8
    sum_tang, mean, path, original_mean = _reg_detect_run(3, maxgrid, length)
    for j in range(maxgrid):
        for i in range(maxgrid):
            if i >= j:
                assert mean[j][i] == length * sum_tang[j][i]
            else:
                assert mean[j][i] == original_mean[j][i]
    assert path[0] == mean[0]
    for j in range(1, maxgrid):
        for i in range(j, maxgrid):
            assert path[j][i] == path[j - 1][i - 1] + mean[j][i]


def test_reg_detect_repeated_iterations_stable():
    _, _, path_once, _ = _reg_detect_run(1, 4, 6)
    _, _, path_many, _ = _reg_detect_run(5, 4, 6)
    assert path_once == path_many


def test_reg_detect_dump_writes_integers():
    maxgrid = 3
    _, _, path, _ = _reg_detect_run(1, maxgrid, 4)
    out = io.StringIO()
    reg_detect_dump(maxgrid, path, out)
    tokens = out.getvalue().split()
    assert tokens == [str(v) for row in path for v in row]


def test_reg_detect_benchmark_run_mini():
    state = REG_DETECT.run("mini")
    assert REG_DETECT.sizes_for("standard") == {"niter": 10000, "length": 64, "maxgrid": 6}
    assert state["mean"][0][0] == 32 * state["sum_tang"][0][0]


def test_template_kernel_adds_42():
    n = 3
    c = template_init(n)
    template_kernel(n, c)
    assert c == [[84.0] * n for _ in range(n)]


def test_template_dump_breaks_on_row_index():
    n = 2
    c = template_init(n)
    out = io.StringIO()
    template_dump(n, c, out)
    assert out.getvalue() == "42.00 \n42.00 \n42.00 42.00 \n"


def test_template_benchmark_run_dump():
    out = io.StringIO()
    state = TEMPLATE.run("mini", dump=out, overrides={"n": 2})
    assert state["c"] == [[84.0, 84.0], [84.0, 84.0]]
    assert out.getvalue().startswith("84.00 \n")