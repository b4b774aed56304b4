# polykern

A small collection of classic polyhedral benchmark kernels in pure Python,
together with the harness that initialises, times and dumps them.

## What is inside

- `polykern.runtime` is the harness. It has these parts:
  - `Dataset` holds the size presets: `mini`, `small`, `standard`, `large` and `extralarge`.
  - `Timer` is a wall-clock timer. By default it flushes the cache before it starts. It reports elapsed seconds, or GFLOP/s when you give it a flop count.
  - `Benchmark` describes a kernel: its sizes and its init, kernel and dump functions. `Benchmark.sizes_for` resolves the sizes for a preset and applies any overrides. `Benchmark.run` runs the kernel and returns its state.
  - Helpers: `flush_cache`, `alloc_array`, `format_double`, `format_int` and `write_values`. `write_values` writes `(index, value)` pairs and breaks the line after every index divisible by 20.
- `polykern.medley` has these kernels:
  - Floyd–Warshall all-pairs shortest paths (`floyd_warshall_*`)
  - Integer region detection (`reg_detect_*`)
  - A minimal template kernel (`template_*`)
- `polykern.stencils` has ADI (`adi_*`), FDTD-2D (`fdtd_2d_*`) and 1-D Jacobi (`jacobi_1d_*`).
- `polykern.relaxation` has 2-D Jacobi (`jacobi_2d_*`) and 2-D Gauss–Seidel (`seidel_2d_*`).
- `polykern.apml` has FDTD with an anisotropic perfectly matched layer (`fdtd_apml_*`). Its arrays are grouped in the `ApmlFields` dataclass.
- `polykern.cli` is the command-line runner.

Each kernel comes as three functions:

- `*_init` builds the input arrays with the standard deterministic values.
- `*_kernel` runs the computation in place.
- `*_dump` writes the result to a text stream.

## Command line

```
polykern --list
polykern jacobi-1d-imper --dataset mini --time
polykern floyd-warshall --dataset mini --size n=16 --dump
```

Options:

- `--dataset` picks a preset.
- `--size NAME=VALUE` overrides one problem size. You can repeat it.
- `--time` prints the elapsed seconds.
- `--gflops [FLOPS]` prints GFLOP/s. If you give no flop count, it prints a warning and then the seconds.
- `--dump` writes the live-out data to standard error.
- `--no-flush` skips the cache flush before timing.

Available kernels: `adi`, `fdtd-2d`, `fdtd-apml`, `floyd-warshall`,
`jacobi-1d-imper`, `jacobi-2d-imper`, `reg_detect`, `seidel-2d`, `template`.

## Using the kernels from Python

```python
import sys
from polykern.medley import floyd_warshall_init, floyd_warshall_kernel, floyd_warshall_dump

n = 32
path = floyd_warshall_init(n)
floyd_warshall_kernel(n, path)
floyd_warshall_dump(n, path, sys.stdout)
```

The preset sizes are the usual ones for this suite. For example, the standard
Floyd–Warshall problem is 1024×1024. Because the kernels are pure Python, the
mini and small presets are the practical ones for interactive use.

## What it does not do

The package does not measure memory latency. There is no pointer-chasing probe.
It also does not read hardware performance counters. The only measurement is
wall-clock timing.

## Tests

```
pip install -e .[test]
pytest
```