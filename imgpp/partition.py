"""Split an image into a grid of tiles with ghost cells and filter them independently.

Each tile carries a ghost margin as wide as the image border. Before every
filter stage the margin is filled by mirroring the tile and then overwritten
with the neighbouring tiles' edge pixels. The tiles together reproduce the
whole-image result.
"""

from __future__ import annotations

import argparse
import math
import sys
import time
from collections.abc import Sequence
from dataclasses import dataclass

from imgpp.benchmark import run_stages
from imgpp.mat import Mat
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

DEFAULT_ROWS = 150
DEFAULT_COLS = 150
DEFAULT_BORDER = 3
DEFAULT_RANKS = 4
_PIXEL_SIZE = 3


@dataclass
class Tile:
    """One block of the grid: its grid position, global offset and local buffer.

    ``mat`` holds the block's pixels surrounded by a ghost margin of
    ``mat.border_size`` on every side.
    """

    row: int
    col: int
    row_offset: int
    col_offset: int
    mat: Mat


def local_len(total: int, coord: int, dims: int) -> int:
    """Length of block ``coord`` when ``total`` is split as evenly as possible into ``dims``."""
    if dims < 1 or not 0 <= coord < dims:
        raise ValueError(f"coordinate {coord} outside a grid of {dims}")
    base, extra = divmod(total, dims)
    return base + (1 if coord < extra else 0)


def local_off(total: int, coord: int, dims: int) -> int:
    """Start of block ``coord`` when ``total`` is split as evenly as possible into ``dims``."""
    if dims < 1 or not 0 <= coord < dims:
        raise ValueError(f"coordinate {coord} outside a grid of {dims}")
    base, extra = divmod(total, dims)
    if coord < extra:
        return coord * (base + 1)
    return extra * (base + 1) + (coord - extra) * base


def dims_create(size: int) -> tuple[int, int]:
    """The most nearly square two-dimensional grid of ``size`` cells, larger side first."""
    if size < 1:
        raise ValueError(f"grid size must be positive, got {size}")
    side = math.isqrt(size)
    while size % side:
        side -= 1
    return size // side, side


def init_tile(tile: Tile, total_cols: int) -> None:
    """Fill the tile's interior with the test pattern of an image ``total_cols`` wide."""
    mat = tile.mat
    b = mat.border_size
    for row in range(b, mat.rows - b):
        global_row = row - b + tile.row_offset
        for col in range(b, mat.cols - b):
            index = global_row * total_cols + col - b + tile.col_offset
            mat.set_pixel(
                row,
                col,
                PixelRGB((653 + index) % 256, (1754 + index) % 256, (1999 + index) % 256),
            )


def compare_tile(img: Mat, tile: Tile) -> bool:
    """Whether the tile's interior equals the matching part of the bordered image ``img``."""
    b = tile.mat.border_size
    for row in range(b, tile.mat.rows - b):
        for col in range(b, tile.mat.cols - b):
            expected = img.get_pixel(tile.row_offset + row, tile.col_offset + col)
            if tile.mat.get_pixel(row, col) != expected:
                return False
    return True


def _check_grid(grid: Sequence[int]) -> tuple[int, int]:
    if len(grid) != 2 or any(not isinstance(n, int) or n < 1 for n in grid):
        raise ValueError(f"grid must be two positive integers, got {grid!r}")
    return grid[0], grid[1]


def _copy_block(
    src: Mat, src_row: int, src_col: int, dst: Mat, dst_row: int, dst_col: int,
    height: int, width: int,
) -> None:
    span = width * _PIXEL_SIZE
    for i in range(height):
        s = ((src_row + i) * src.cols + src_col) * _PIXEL_SIZE
        d = ((dst_row + i) * dst.cols + dst_col) * _PIXEL_SIZE
        dst.data[d : d + span] = src.data[s : s + span]


def exchange_ghost_cells(tiles: Sequence[Tile], grid: Sequence[int], border_size: int) -> None:
    """Copy each tile's edge pixels into its neighbours' ghost margins.

    ``tiles`` are in row-major grid order. Columns are exchanged first over
    the full tile height, then rows over the full width, so corner margins
    receive pixels from diagonal neighbours. Margins on the outside of the
    grid are left as they are.
    """
    grid_rows, grid_cols = _check_grid(grid)
    if len(tiles) != grid_rows * grid_cols:
        raise ValueError(f"{len(tiles)} tiles do not fill a {grid_rows}x{grid_cols} grid")
    b = border_size

    for r in range(grid_rows):
        for c in range(grid_cols - 1):
            west = tiles[r * grid_cols + c].mat
            east = tiles[r * grid_cols + c + 1].mat
            if west.rows != east.rows:
                raise ValueError("tiles in one grid row must have the same height")
            _copy_block(west, 0, west.cols - 2 * b, east, 0, 0, west.rows, b)
            _copy_block(east, 0, b, west, 0, west.cols - b, east.rows, b)

    for r in range(grid_rows - 1):
        for c in range(grid_cols):
            north = tiles[r * grid_cols + c].mat
            south = tiles[(r + 1) * grid_cols + c].mat
            if north.cols != south.cols:
                raise ValueError("tiles in one grid column must have the same width")
            _copy_block(north, north.rows - 2 * b, 0, south, 0, 0, b, north.cols)
            _copy_block(south, b, 0, north, north.rows - b, 0, b, south.cols)


def _stages() -> tuple[Processor, ...]:
    return (
        MedianFilterProc(7),
        MeanFilterProc(7),
        SobelFilterProc(),
        ThresholdFilterProc(20),
    )


def _make_tiles(rows: int, cols: int, border_size: int, grid: Sequence[int]) -> list[Tile]:
    grid_rows, grid_cols = _check_grid(grid)
    if rows < 1 or cols < 1:
        raise ValueError(f"image size must be positive, got {rows}x{cols}")
    if border_size < 0:
        raise ValueError(f"border size must be non-negative, got {border_size}")
    smallest = min(local_len(rows, grid_rows - 1, grid_rows), local_len(cols, grid_cols - 1, grid_cols))
    if smallest < max(border_size, 1):
        raise ValueError(
            f"a {rows}x{cols} image split into a {grid_rows}x{grid_cols} grid "
            f"leaves tiles narrower than the border of {border_size}"
        )
    tiles = []
    for r in range(grid_rows):
        for c in range(grid_cols):
            height = local_len(rows, r, grid_rows) + 2 * border_size
            width = local_len(cols, c, grid_cols) + 2 * border_size
            tiles.append(
                Tile(
                    row=r,
                    col=c,
                    row_offset=local_off(rows, r, grid_rows),
                    col_offset=local_off(cols, c, grid_cols),
                    mat=Mat(height, width, border_size),
                )
            )
    return tiles


def run_decomposed(rows: int, cols: int, border_size: int, grid: Sequence[int]) -> list[Tile]:
    """Run the four-stage pipeline on the test pattern split into a grid of tiles."""
    tiles = _make_tiles(rows, cols, border_size, grid)
    for tile in tiles:
        init_tile(tile, cols)
    spares = [Mat(t.mat.rows, t.mat.cols, t.mat.border_size) for t in tiles]

    for proc in _stages():
        for tile in tiles:
            tile.mat.make_mirror_border(border_size)
        exchange_ghost_cells(tiles, grid, border_size)
        next_spares = []
        for tile, spare in zip(tiles, spares):
            do_filter(tile.mat, spare, proc)
            tile.mat, spare = spare, tile.mat
            next_spares.append(spare)
        spares = next_spares
    return tiles


def _reference(rows: int, cols: int, border_size: int) -> Mat:
    img = Mat(rows, cols)
    init_img(img)
    return run_stages(img.copy_with_border(border_size), border_size)


def main(argv: Sequence[str] | None = None) -> int:
    """Filter the test pattern whole and as tiles, and check both agree."""
    parser = argparse.ArgumentParser(
        prog="imgpp-partition", description="Compare whole-image and tiled filtering."
    )
    parser.add_argument("--rows", type=int, default=DEFAULT_ROWS)
    parser.add_argument("--cols", type=int, default=DEFAULT_COLS)
    parser.add_argument("--border", type=int, default=DEFAULT_BORDER)
    parser.add_argument("--ranks", type=int, default=DEFAULT_RANKS)
    parser.add_argument("--layout", choices=("1d", "2d"), default="2d")
    args = parser.parse_args(argv)

    try:
        grid = (args.ranks, 1) if args.layout == "1d" else dims_create(args.ranks)

        started = time.perf_counter()
        correct = _reference(args.rows, args.cols, args.border)
        elapsed = time.perf_counter() - started
        print(f"MPI(0//{args.ranks} ranks) (s)elapsed: {elapsed:.3f} s")

        started = time.perf_counter()
        tiles = run_decomposed(args.rows, args.cols, args.border, grid)
        elapsed = time.perf_counter() - started
    except ValueError as exc:
        print(f"imgpp-partition: {exc}", file=sys.stderr)
        return 1

    result = all(compare_tile(correct, tile) for tile in tiles)
    print()
    print(f"MPI(0//{args.ranks} ranks) (p)elapsed: {elapsed:.3f} s")
    print(f"MPI(0//{args.ranks} ranks) result: {int(result)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())