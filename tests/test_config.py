import json

import pytest

from imgpp.config import FilterPipelineParams, load_config, parse_config
from imgpp.filters import MeanFilter, SobelFilter, ThresholdFilter


def test_defaults():
    params = parse_config({"filters": []})
    assert params.num_threads == 1
    assert params.input_path == "in.png"
    assert params.output_path == "out.png"
    assert params.filters == []


def test_all_filter_types_in_order():
    params = parse_config(
        {
            "num_threads": 4,
            "in": "a.png",
            "out": "b.png",
            "filters": [
                {"type": "Mean", "kernel_size": 5},
                {"type": "Median"},
                {"type": "Sobel"},
                {"type": "Prewitt"},
                {"type": "Threshold", "threshold": 77},
            ],
        }
    )
    assert params.num_threads == 4
    assert (params.input_path, params.output_path) == ("a.png", "b.png")
    assert [str(f) for f in params.filters] == [
        "MeanFilter(kernelSize=5)",
        "MedianFilter(kernelSize=3)",
        "SobelFilter()",
        "PrewittFilter()",
        "ThresholdFilter(thresholdValue=77)",
    ]


def test_threshold_default():
    params = parse_config({"filters": [{"type": "Threshold"}]})
    assert str(params.filters[0]) == "ThresholdFilter(thresholdValue=128)"


def test_unknown_filter_type():
    with pytest.raises(ValueError, match="Unknown filter type: Blur"):
        parse_config({"filters": [{"type": "Blur"}]})


@pytest.mark.parametrize(
    "data",
    [
        {},
        {"filters": {"type": "Sobel"}},
        {"filters": [{"kernel_size": 3}]},
        {"filters": [], "num_threads": "two"},
        {"filters": [], "in": 5},
        {"filters": [{"type": "Mean", "kernel_size": "3"}]},
        ["filters"],
    ],
)
def test_invalid_configurations(data):
    with pytest.raises(ValueError):
        parse_config(data)


def test_describe_format():
    params = FilterPipelineParams(
        filters=[MeanFilter(3), SobelFilter(), ThresholdFilter(20)],
        num_threads=2,
        input_path="x.png",
        output_path="y.png",
    )
    assert params.describe() == (
        "FilterPipelineParams:\n"
        "\tnumThreads=2\n"
        "\tin=x.png\n"
        "\tout=y.png\n"
        "\tfilters=MeanFilter(kernelSize=3),SobelFilter(),ThresholdFilter(thresholdValue=20)\n\n"
    )


def test_log_writes_description(capsys):
    params = parse_config({"filters": [{"type": "Sobel"}]})
    params.log()
    assert capsys.readouterr().out == params.describe()


def test_load_config_round_trip(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps({"in": "src.png", "filters": [{"type": "Median", "kernel_size": 7}]}),
        encoding="utf-8",
    )
    params = load_config(path)
    assert params.input_path == "src.png"
    assert [str(f) for f in params.filters] == ["MedianFilter(kernelSize=7)"]


def test_load_config_bad_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.json")