"""Filter pipeline configuration read from JSON."""

from __future__ import annotations

import json
import sys
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from os import PathLike
from typing import Any

from imgpp.filters import (
    ImageFilter,
    MeanFilter,
    MedianFilter,
    PrewittFilter,
    SobelFilter,
    ThresholdFilter,
)


@dataclass
class FilterPipelineParams:
    """Filters to run in order, plus thread count and input/output paths."""

    filters: list[ImageFilter] = field(default_factory=list)
    num_threads: int = 1
    input_path: str = "in.png"
    output_path: str = "out.png"

    def describe(self) -> str:
        """Multi-line summary of the configuration."""
        filters_info = ",".join(str(f) for f in self.filters)
        return (
            "FilterPipelineParams:\n"
            f"\tnumThreads={self.num_threads}\n"
            f"\tin={self.input_path}\n"
            f"\tout={self.output_path}\n"
            f"\tfilters={filters_info}\n\n"
        )

    def log(self) -> None:
        """Write the summary to standard output."""
        sys.stdout.write(self.describe())


def _value(mapping: Mapping[str, Any], key: str, default: Any, kind: type) -> Any:
    value = mapping.get(key, default)
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise ValueError(f"'{key}' must be of type {kind.__name__}, got {value!r}")
    return value


_BUILDERS: dict[str, Callable[[Mapping[str, Any]], ImageFilter]] = {
    "Sobel": lambda cfg: SobelFilter(),
    "Prewitt": lambda cfg: PrewittFilter(),
    "Threshold": lambda cfg: ThresholdFilter(_value(cfg, "threshold", 128, int)),
    "Mean": lambda cfg: MeanFilter(_value(cfg, "kernel_size", 3, int)),
    "Median": lambda cfg: MedianFilter(_value(cfg, "kernel_size", 3, int)),
}


def parse_config(data: Mapping[str, Any]) -> FilterPipelineParams:
    """Build pipeline parameters from a decoded JSON object."""
    if not isinstance(data, Mapping):
        raise ValueError("configuration must be a JSON object")
    if "filters" not in data:
        raise ValueError("configuration has no 'filters' entry")
    filter_configs = data["filters"]
    if not isinstance(filter_configs, list):
        raise ValueError("'filters' must be a list")

    filters: list[ImageFilter] = []
    for filter_config in filter_configs:
        if not isinstance(filter_config, Mapping) or "type" not in filter_config:
            raise ValueError(f"filter entry has no 'type': {filter_config!r}")
        kind = filter_config["type"]
        builder = _BUILDERS.get(kind) if isinstance(kind, str) else None
        if builder is None:
            raise ValueError(f"Unknown filter type: {kind}")
        filters.append(builder(filter_config))

    return FilterPipelineParams(
        filters=filters,
        num_threads=_value(data, "num_threads", 1, int),
        input_path=_value(data, "in", "in.png", str),
        output_path=_value(data, "out", "out.png", str),
    )


def load_config(path: str | PathLike[str]) -> FilterPipelineParams:
    """Read and parse a JSON configuration file."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    return parse_config(data)