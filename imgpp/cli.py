"""Command that runs a configured filter pipeline over an image file."""

from __future__ import annotations

import argparse
import sys
import time
from collections.abc import Iterable, Sequence
from os import PathLike

from PIL import Image

from imgpp.config import load_config
from imgpp.filters import ImageFilter
from imgpp.mat import Mat

DEFAULT_CONFIG = "config.json"


def read_image(path: str | PathLike[str]) -> Mat:
    """Load an image file as an RGB Mat without a border."""
    with Image.open(path) as image:
        rgb = image.convert("RGB")
        width, height = rgb.size
        return Mat(height, width, data=rgb.tobytes())


def write_image(mat: Mat, path: str | PathLike[str]) -> None:
    """Save the whole of ``mat`` as an RGB image file."""
    image = Image.frombytes("RGB", (mat.cols, mat.rows), bytes(mat.data))
    image.save(path)


def run_pipeline(img: Mat, filters: Iterable[ImageFilter]) -> Mat:
    """Apply ``filters`` one after another and return the final image."""
    for image_filter in filters:
        img = image_filter.apply(img)
    return img


def main(argv: Sequence[str] | None = None) -> int:
    """Read a JSON configuration, filter its input image and write the output."""
    parser = argparse.ArgumentParser(
        prog="imgpp", description="Run a filter pipeline described by a JSON file."
    )
    parser.add_argument(
        "config",
        nargs="?",
        default=DEFAULT_CONFIG,
        help=f"path of the pipeline configuration (default: {DEFAULT_CONFIG})",
    )
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
        config.log()
        img = read_image(config.input_path)

        started = time.perf_counter()
        img = run_pipeline(img, config.filters)
        elapsed = time.perf_counter() - started

        print(f"Elapsed time (sec.): {elapsed:.12f}")
        write_image(img, config.output_path)
    except (OSError, ValueError) as exc:
        print(f"imgpp: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())