"""Shared benchmark runtime: datasets, timing, array allocation and dumping."""

from __future__ import annotations

import enum
import time
from array import array
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping, Optional, TextIO, Union

CACHE_SIZE_KB = 32770
"""Default size of the cache to flush before timing, in kilobytes."""

_DOUBLE_SIZE = 8
_LINE_BREAK_EVERY = 20


class Dataset(enum.Enum):
    """Problem-size presets shared by every benchmark."""

    MINI = "mini"
    SMALL = "small"
    STANDARD = "standard"
    LARGE = "large"
    EXTRALARGE = "extralarge"


def flush_cache(cache_size_kb: int = CACHE_SIZE_KB) -> float:
    """Touch a zeroed buffer the size of the last-level cache and return its sum."""
    if cache_size_kb < 0:
        raise ValueError(f"cache size must not be negative: {cache_size_kb}")
    count = cache_size_kb * 1024 // _DOUBLE_SIZE
    buffer = array("d", bytes(count * _DOUBLE_SIZE))
    total = sum(buffer)
    if total > 10.0:
        raise RuntimeError("cache flush buffer was not zeroed")
    return total


def alloc_array(*dims: int, fill: Any = 0.0) -> list:
    """Allocate a nested list with the given dimensions, every cell set to *fill*."""
    if not dims:
        raise ValueError("at least one dimension is required")
    for dim in dims:
        if isinstance(dim, bool) or not isinstance(dim, int):
            raise TypeError(f"dimension must be an integer: {dim!r}")
        if dim < 0:
            raise ValueError(f"dimension must not be negative: {dim}")

    def build(remaining: tuple[int, ...]) -> list:
        head, *rest = remaining
        if not rest:
            return [fill] * head
        return [build(tuple(rest)) for _ in range(head)]

    return build(dims)


def format_double(value: float) -> str:
    """Format a floating-point value the way benchmark output does."""
    return f"{value:0.2f} "


def format_int(value: int) -> str:
    """Format an integer value the way benchmark output does."""
    return f"{int(value)} "


Value = Union[float, int, tuple]


def write_values(
    stream: TextIO,
    items: Iterable[tuple[int, Value]],
    fmt: Callable[[Any], str] = format_double,
) -> None:
    """Write ``(index, value)`` pairs, breaking the line after every index divisible by 20.

    A value may be a tuple, in which case each of its members is written in turn.
    A final newline always ends the output.
    """
    for index, value in items:
        values = value if isinstance(value, tuple) else (value,)
        stream.write("".join(fmt(v) for v in values))
        if index % _LINE_BREAK_EVERY == 0:
            stream.write("\n")
    stream.write("\n")


@dataclass
class Timer:
    """Wall-clock timer that optionally flushes the cache before starting."""

    clock: Callable[[], float] = time.perf_counter
    flush: bool = True
    cache_size_kb: int = CACHE_SIZE_KB
    _start: Optional[float] = field(default=None, init=False, repr=False)
    _end: Optional[float] = field(default=None, init=False, repr=False)

    def start(self) -> None:
        """Prepare the machine and record the start time."""
        if self.flush:
            flush_cache(self.cache_size_kb)
        self._end = None
        self._start = self.clock()

    def stop(self) -> None:
        """Record the end time."""
        if self._start is None:
            raise RuntimeError("timer was stopped before it was started")
        self._end = self.clock()

    def elapsed(self) -> float:
        """Seconds between start and stop."""
        if self._start is None or self._end is None:
            raise RuntimeError("timer has not been started and stopped")
        return self._end - self._start

    def report(self, flops: Optional[float] = None) -> str:
        """Render the measurement: seconds, or GFLOP/s when a flop count is given."""
        seconds = self.elapsed()
        if flops is None:
            return f"{seconds:0.6f}"
        if flops == 0:
            return (
                "[PolyBench][WARNING] Program flops not defined, "
                "use polybench_set_program_flops(value)\n"
                f"{seconds:0.6f}"
            )
        if seconds == 0:
            raise ValueError("cannot compute a rate over zero elapsed time")
        return f"{flops / seconds / 1e9:0.2f}"


Sizes = dict[str, int]
State = dict[str, Any]


@dataclass
class Benchmark:
    """A kernel together with its size presets, initialisation and output dump."""

    name: str
    sizes: Mapping[Dataset, Mapping[str, int]]
    init: Callable[[Sizes], State]
    kernel: Callable[[Sizes, State], None]
    dump: Callable[[Sizes, State, TextIO], None]

    def sizes_for(
        self,
        dataset: Union[Dataset, str] = Dataset.STANDARD,
        overrides: Optional[Mapping[str, int]] = None,
    ) -> Sizes:
        """Problem sizes for *dataset*, with any explicitly given sizes replacing them."""
        preset = Dataset(dataset)
        try:
            result = dict(self.sizes[preset])
        except KeyError:
            raise ValueError(
                f"{self.name} has no {preset.value} dataset"
            ) from None
        for key, value in (overrides or {}).items():
            if key not in result:
                known = ", ".join(sorted(result))
                raise ValueError(
                    f"{self.name} has no size named {key!r} (known: {known})"
                )
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"size {key!r} must be an integer: {value!r}")
            if value < 0:
                raise ValueError(f"size {key!r} must not be negative: {value}")
            result[key] = value
        return result

    def run(
        self,
        dataset: Union[Dataset, str] = Dataset.STANDARD,
        timer: Optional[Timer] = None,
        dump: Optional[TextIO] = None,
        overrides: Optional[Mapping[str, int]] = None,
    ) -> State:
        """Initialise, time the kernel, optionally dump the live-out data; return the state."""
        sizes = self.sizes_for(dataset, overrides)
        state = self.init(sizes)
        if timer is not None:
            timer.start()
        self.kernel(sizes, state)
        if timer is not None:
            timer.stop()
        if dump is not None:
            self.dump(sizes, state, dump)
        return state