"""Fixed four-stage filter pipeline, run sequentially and with a thread pool."""

from __future__ import annotations

import argparse
import os
import sys
import time
from collections.abc import Callable, Sequence
from concurrent.futures import Executor, ThreadPoolExecutor
from functools import partial

from imgpp.mat import ROI, Mat, Rect
from imgpp.pixel import PixelRGB
from imgpp.transformation import (
    MeanFilterProc,
    MedianFilterProc,
    Processor,
    SobelFilterProc,
    ThresholdFilterProc,
    do_filter,
    init_img,
)

DEFAULT_ROWS = 5000
DEFAULT_COLS = 5000
DEFAULT_BORDER = 3
_CHUNK_ROWS = 64


def _stages() -> tuple[Processor, ...]:
    return (
        MedianFilterProc(7),
        MeanFilterProc(7),
        SobelFilterProc(),
        ThresholdFilterProc(20),
    )


def _bordered_image(rows: int, cols: int, border_size: int) -> Mat:
    if rows < 1 or cols < 1:
        raise ValueError(f"image size must be positive, got {rows}x{cols}")
    return Mat(rows, cols).copy_with_border(border_size)


def run_stages(img: Mat, border_size: int) -> Mat:
    """Run median, mean, Sobel and threshold stages, mirroring the border before each.

    ``img`` serves as one of the two working buffers and is overwritten.
    """
    current = img
    spare = Mat(img.rows, img.cols, img.border_size)
    for proc in _stages():
        current.make_mirror_border(border_size)
        do_filter(current, spare, proc)
        current, spare = spare, current
    return current


def reference_pipeline(rows: int, cols: int, border_size: int) -> Mat:
    """Sequential result of the pipeline on the generated test pattern."""
    img = _bordered_image(rows, cols, border_size)
    init_img(img)
    return run_stages(img, border_size)


def _init_rows(img: Mat, start: int, stop: int) -> None:
    b = img.border_size
    for row in range(start, stop):
        for col in range(b, img.cols - b):
            index = row * img.cols + col
            img.set_pixel(
                row,
                col,
                PixelRGB((653 + index) % 256, (1754 + index) % 256, (1999 + index) % 256),
            )


def _filter_rows(src: Mat, dst: Mat, proc: Processor, start: int, stop: int) -> None:
    k = proc.kernel_size
    half = k // 2
    for row in range(start, stop):
        for col in range(src.cols - k + 1):
            dst.set_pixel(row + half, col + half, proc(ROI(src, Rect(col, row, k, k))))


def _run_chunks(pool: Executor, start: int, stop: int, task: Callable[[int, int], None]) -> None:
    bounds = [(s, min(s + _CHUNK_ROWS, stop)) for s in range(start, stop, _CHUNK_ROWS)]
    for future in [pool.submit(task, lo, hi) for lo, hi in bounds]:
        future.result()


def parallel_pipeline(rows: int, cols: int, border_size: int, workers: int) -> Mat:
    """The same pipeline with pattern generation and filtering split into row chunks."""
    if workers < 1:
        raise ValueError(f"worker count must be positive, got {workers}")
    img = _bordered_image(rows, cols, border_size)
    spare = Mat(img.rows, img.cols, img.border_size)

    with ThreadPoolExecutor(max_workers=workers) as pool:
        b = img.border_size
        _run_chunks(pool, b, img.rows - b, partial(_init_rows, img))

        current = img
        for proc in _stages():
            current.make_mirror_border(border_size)
            k = proc.kernel_size
            if k > current.rows or k > current.cols:
                raise ValueError(
                    f"kernel of size {k} does not fit a {current.rows}x{current.cols} image"
                )
            _run_chunks(pool, 0, current.rows - k + 1, partial(_filter_rows, current, spare, proc))
            current, spare = spare, current
    return current


def main(argv: Sequence[str] | None = None) -> int:
    """Time the sequential and parallel pipelines and check they agree."""
    parser = argparse.ArgumentParser(
        prog="imgpp-benchmark", description="Compare sequential and threaded filtering."
    )
    parser.add_argument("--rows", type=int, default=DEFAULT_ROWS)
    parser.add_argument("--cols", type=int, default=DEFAULT_COLS)
    parser.add_argument("--border", type=int, default=DEFAULT_BORDER)
    parser.add_argument("--workers", type=int, default=os.cpu_count() or 1)
    args = parser.parse_args(argv)

    try:
        started = time.perf_counter()
        correct = reference_pipeline(args.rows, args.cols, args.border)
        print(f"(S)Elapsed time (sec.): {time.perf_counter() - started:.12f}")

        started = time.perf_counter()
        result = parallel_pipeline(args.rows, args.cols, args.border, args.workers)
        elapsed = time.perf_counter() - started
    except ValueError as exc:
        print(f"imgpp-benchmark: {exc}", file=sys.stderr)
        return 1

    print(f"Result: {int(result == correct)}")
    print(f"(P)Elapsed time (sec.): {elapsed:.12f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())