import io

import pytest

from polykern.runtime import (
    Benchmark,
    Dataset,
    Timer,
    alloc_array,
    flush_cache,
    format_double,
    format_int,
    write_values,
)


def fake_clock(*values):
    it = iter(values)
    return lambda: next(it)


def _init(sizes):
    return {"a": alloc_array(sizes["n"], fill=1.0)}


def _kernel(sizes, state):
    state["a"] = [v * sizes["k"] for v in state["a"]]


def _dump(sizes, state, stream):
    write_values(stream, enumerate(state["a"]))


@pytest.fixture
def bench():
    return Benchmark(
        name="toy",
        sizes={
            Dataset.MINI: {"n": 2, "k": 3},
            Dataset.STANDARD: {"n": 4, "k": 5},
        },
        init=_init,
        kernel=_kernel,
        dump=_dump,
    )


def test_format_double_two_decimals_and_space():
    assert format_double(1.5) == "1.50 "
    assert format_double(42) == "42.00 "


def test_format_int():
    assert format_int(7) == "7 "
    assert format_int(-3) == "-3 "


def test_write_values_breaks_on_multiples_of_twenty():
    out = io.StringIO()
    write_values(out, [(0, 1.0), (1, 2.0), (20, 3.0)])
    assert out.getvalue() == "1.00 \n2.00 3.00 \n\n"


def test_write_values_tuples_and_int_format():
    out = io.StringIO()
    write_values(out, [(1, (1, 2, 3))], fmt=format_int)
    assert out.getvalue() == "1 2 3 \n"


def test_write_values_empty_writes_newline():
    out = io.StringIO()
    write_values(out, [])
    assert out.getvalue() == "\n"


def test_alloc_array_shape_and_fill():
    arr = alloc_array(2, 3, fill=7)
    assert len(arr) == 2
    assert all(len(row) == 3 for row in arr)
    assert all(v == 7 for row in arr for v in row)


def test_alloc_array_rows_are_independent():
    arr = alloc_array(3, 2)
    arr[0][0] = 9.0
    assert arr[1][0] == 0.0
    assert arr[2][0] == 0.0


def test_alloc_array_three_dims():
    arr = alloc_array(2, 2, 4)
    assert len(arr[1][1]) == 4
    arr[0][0][0] = 1.0
    assert arr[1][0][0] == 0.0


def test_alloc_array_errors():
    with pytest.raises(ValueError):
        alloc_array()
    with pytest.raises(ValueError):
        alloc_array(2, -1)
    with pytest.raises(TypeError):
        alloc_array(2.5)


def test_flush_cache_returns_zero_sum():
    assert flush_cache(1) == 0.0
    assert flush_cache(0) == 0.0


def test_flush_cache_rejects_negative():
    with pytest.raises(ValueError):
        flush_cache(-1)


def test_timer_elapsed_and_report():
    timer = Timer(clock=fake_clock(1.0, 3.5), flush=False)
    timer.start()
    timer.stop()
    assert timer.elapsed() == pytest.approx(2.5)
    assert timer.report() == "2.500000"


def test_timer_report_gflops():
    timer = Timer(clock=fake_clock(0.0, 2.0), flush=False)
    timer.start()
    timer.stop()
    assert timer.report(4e9) == "2.00"


def test_timer_report_zero_flops_warns():
    timer = Timer(clock=fake_clock(0.0, 1.0), flush=False)
    timer.start()
    timer.stop()
    lines = timer.report(0).splitlines()
    assert lines[0].startswith("[PolyBench][WARNING] Program flops not defined")
    assert lines[1] == "1.000000"


def test_timer_rate_over_zero_time_raises():
    timer = Timer(clock=fake_clock(5.0, 5.0), flush=False)
    timer.start()
    timer.stop()
    with pytest.raises(ValueError):
        timer.report(1e9)


def test_timer_misuse_raises():
    timer = Timer(clock=fake_clock(1.0, 2.0), flush=False)
    with pytest.raises(RuntimeError):
        timer.stop()
    with pytest.raises(RuntimeError):
        timer.elapsed()
    timer.start()
    with pytest.raises(RuntimeError):
        timer.elapsed()


def test_timer_with_flush_still_measures():
    timer = Timer(clock=fake_clock(0.0, 1.0), flush=True, cache_size_kb=1)
    timer.start()
    timer.stop()
    assert timer.elapsed() == pytest.approx(1.0)


def test_sizes_for_defaults_and_string_dataset(bench):
    assert bench.sizes_for() == {"n": 4, "k": 5}
    assert bench.sizes_for("mini") == {"n": 2, "k": 3}


def test_sizes_for_overrides(bench):
    assert bench.sizes_for(Dataset.MINI, {"n": 6}) == {"n": 6, "k": 3}


def test_sizes_for_errors(bench):
    with pytest.raises(ValueError):
        bench.sizes_for(Dataset.LARGE)
    with pytest.raises(ValueError):
        bench.sizes_for(Dataset.MINI, {"m": 1})
    with pytest.raises(ValueError):
        bench.sizes_for(Dataset.MINI, {"n": -1})
    with pytest.raises(TypeError):
        bench.sizes_for(Dataset.MINI, {"n": "3"})
    with pytest.raises(ValueError):
        bench.sizes_for("huge")


def test_run_times_and_dumps(bench):
    timer = Timer(clock=fake_clock(10.0, 12.0), flush=False)
    out = io.StringIO()
    state = bench.run(Dataset.MINI, timer=timer, dump=out)
    assert state["a"] == [3.0, 3.0]
    assert timer.elapsed() == pytest.approx(2.0)
    assert out.getvalue() == "3.00 \n3.00 \n"


def test_run_without_timer_or_dump(bench):
    state = bench.run(overrides={"n": 3, "k": 2})
    assert state["a"] == [2.0, 2.0, 2.0]