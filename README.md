# imgpp

`imgpp` preprocesses 8-bit RGB images. It provides:

- a small set of neighbourhood filters;
- mirror padding, so that those filters reach the edges of the image;
- a pipeline driven by a JSON file, which reads an image, runs the filters in order and writes the result.

## Installation

```
pip install .
```

To install the test dependencies as well:

```
pip install ".[test]"
```

Pillow is the only runtime dependency. It is used to read and write image files.

## Images, borders and regions

`imgpp.mat.Mat` holds an image of `rows` × `cols` RGB pixels in a `bytearray`,
with three bytes per pixel in row-major order. `border_size` records how many
pixels on each side count as padding around the interior.

Pixel access:

- `get_pixel(row, col)` returns a `PixelRGB`.
- `set_pixel(row, col, pixel)` accepts a `PixelRGB` or any three channel values.
- Coordinates outside the image raise `IndexError`.
- Two `Mat`s compare equal when their size and pixel data match.

Methods for working with the border:

- `copy()` returns an independent copy.
- `copy_with_border(n)` returns a larger copy with an `n`-pixel border on every side. The border is filled with zeros.
- `make_mirror_border(n)` fills an existing border by mirroring the interior pixels next to it.
  - `mirror_edges` and `mirror_corners` each do part of this job.
  - The eight `mirror_*_edge` and `mirror_*_corner` methods each fill one piece.
- `make_border(n)` also fills the border by mirroring. It copies whole rows first and then columns.
- `copy_make_border(n)` is `copy_with_border(n)` followed by `make_border(n)`.
- `reset_border()` returns a copy of the interior with the border removed.

A border that does not fit the image raises `ValueError`.

`imgpp.mat.ROI` is a view of a `Rect` (`x`, `y`, `width`, `height`) inside a
`Mat`. Coordinates inside a view are relative to the rectangle.

- `get_pixel` and `set_pixel` work as they do on `Mat`.
- `sub(rect)` returns a nested view.
- Iterating over a view yields its pixels row by row.

## Pixels and colour spaces

`imgpp.pixel` contains the following:

- `PixelRGB`: an immutable pixel. Each channel must be in 0..255. It can be iterated and indexed by `Channel.R`, `Channel.G` and `Channel.B`.
  - `normalized()` returns the channels scaled to 0..1.
  - `grayscale()` returns the weighted luminance, `0.2989 R + 0.5870 G + 0.1141 B`, rounded.
- `PixelHSI` and `PixelHSV`, with conversions to and from RGB:
  - `rgb_to_hsi` and `hsi_to_rgb`
  - `rgb_to_hsv` and `hsv_to_rgb`

  Hue is given in degrees.

## Filters

The processors in `imgpp.transformation` each turn a square window into one
output pixel:

| Processor                           | Output                                                           |
|-------------------------------------|------------------------------------------------------------------|
| `MeanFilterProc(kernel_size)`       | The integer mean of the window, per channel                     |
| `MedianFilterProc(kernel_size)`     | The median of the window, per channel                           |
| `ThresholdFilterProc(value)`        | Each channel becomes 0 below `value` and 255 otherwise (1×1 window) |
| `SobelFilterProc(mode)`             | Gradient magnitude from the 3×3 Sobel kernels                   |
| `PrewittFilterProc(mode)`           | Gradient magnitude from the 3×3 Prewitt kernels                 |
| `SegmentationFilterProc(kx, ky, size, mode)` | Gradient magnitude from any pair of kernels             |

The magnitude is rounded and clamped to 255. `SegmentationMode` decides what
the gradient kernels are applied to:

- `MAX_GRADIENT` (the default) and `GRAY_SCALE` apply the kernels to the grayscale value.
- `EACH_CHANNEL_SEPARATELY` applies them to each channel on its own.

`do_filter(src, dst, proc)` slides the processor's window over every full
window of `src` and writes each result to the window's centre pixel in `dst`.
Pixels of `dst` nearer the edge than half a kernel are left untouched. This is
why the usual pattern is to mirror a border first.

`init_img(mat)` fills the interior of `mat` with a deterministic test pattern.

`imgpp.filters` wraps the processors as whole-image filters. Each `apply(img)`
returns a new `Mat` of the same shape and border size:

- `MeanFilter(kernel_size=3)`
- `MedianFilter(kernel_size=3)`
- `SobelFilter()`
- `PrewittFilter()`
- `ThresholdFilter(threshold_value)`

Their `str()` is a short description such as `MeanFilter(kernelSize=3)`.

## Pipeline configuration

A pipeline is described in JSON:

```json
{
  "num_threads": 1,
  "in": "in.png",
  "out": "out.png",
  "filters": [
    {"type": "Median", "kernel_size": 5},
    {"type": "Mean", "kernel_size": 3},
    {"type": "Sobel"},
    {"type": "Threshold", "threshold": 77}
  ]
}
```

The `filters` list is required. The other keys have defaults:

| Key           | Default   |
|---------------|-----------|
| `num_threads` | `1`       |
| `in`          | `in.png`  |
| `out`         | `out.png` |
| `kernel_size` | `3`       |
| `threshold`   | `128`     |

The filter types are `Mean`, `Median`, `Sobel`, `Prewitt` and `Threshold`. An
unknown type, a missing `filters` list or a value of the wrong type raises
`ValueError`.

Reading a configuration:

- `imgpp.config.load_config(path)` reads a file.
- `parse_config(data)` accepts an already-decoded JSON object.

Both return a `FilterPipelineParams`, which has these fields:

- `filters`
- `num_threads`
- `input_path`
- `output_path`

`describe()` returns a summary of these fields, and `log()` prints it.

## Command line

```
imgpp [config]
```

This command:

1. reads the configuration (by default `config.json`) and prints its summary;
2. loads the input image as RGB;
3. applies the filters in order;
4. prints the elapsed time;
5. writes the output image.

It exits with status 1 and a message on standard error if a file cannot be
read or written, or if the configuration is invalid.

```
imgpp-benchmark [--rows N] [--cols N] [--border N] [--workers N]
```

This runs the fixed pipeline — median 7×7, mean 7×7, Sobel, threshold 20 — on
the generated test pattern twice: once sequentially, and once split into row
chunks on a thread pool. The border is mirrored before each stage. It prints
both timings and `Result: 1` if the two images are identical.

The defaults are:

- a 5000 × 5000 image;
- a border of 3;
- one worker per CPU.

```
imgpp-partition [--rows N] [--cols N] [--border N] [--ranks N] [--layout {1d,2d}]
```

This runs the same fixed pipeline on the test pattern split into a grid of
tiles:

- `1d` uses `ranks` × 1 horizontal strips.
- `2d` uses the near-square grid from `dims_create(ranks)`.

Each tile carries a ghost margin as wide as the border. Before every stage,
that margin is mirrored and then overwritten with the neighbouring tiles' edge
pixels by `exchange_ghost_cells`. At the end, every tile is checked against a
whole-image reference, and the command prints `result: 1` if all tiles match.

The defaults are:

- a 150 × 150 image;
- a border of 3;
- 4 ranks;
- the `2d` layout.

The building blocks are available in `imgpp.partition`:

- `Tile`
- `local_len` and `local_off`
- `init_tile` and `compare_tile`
- `run_decomposed`

## Using it from Python

```python
from imgpp.cli import read_image, run_pipeline, write_image
from imgpp.config import load_config

config = load_config("config.json")
config.log()

img = read_image(config.input_path)
result = run_pipeline(img, config.filters)
write_image(result, config.output_path)
```

You can also build a pipeline directly from filter objects:

```python
from imgpp.cli import read_image, run_pipeline, write_image
from imgpp.filters import MedianFilter, SobelFilter, ThresholdFilter

img = read_image("in.png")
result = run_pipeline(img, [MedianFilter(5), SobelFilter(), ThresholdFilter(77)])
write_image(result, "edges.png")
```

## What it does not do

- **`num_threads` is not used for filtering.** The setting is read from the configuration and printed, but `imgpp` applies the filters in a single thread.
- **Only `imgpp-benchmark` uses threads.**
- **No separate processes.** `imgpp-partition` does not spread tiles over processes or machines. All tiles are filtered one after another in one process. The ghost-cell exchange is a copy between in-memory buffers.
- **`imgpp` does not pad the image before filtering.** Each filter's output keeps the input pixels' positions, and pixels within half a kernel of the edge are left black.