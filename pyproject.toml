[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "imgpp"
version = "1.0.0"
description = "RGB image preprocessing: mirror borders, mean, median, Sobel, Prewitt and threshold filters, run as configurable pipelines"
requires-python = ">=3.10"
dependencies = [
    "pillow",
]
keywords = [
    "image processing",
    "filters",
    "median filter",
    "sobel",
    "prewitt",
    "threshold",
    "edge detection",
    "tiling",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Processing",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
imgpp = "imgpp.cli:main"
imgpp-benchmark = "imgpp.benchmark:main"
imgpp-partition = "imgpp.partition:main"

[tool.hatch.build.targets.wheel]
packages = ["imgpp"]

[tool.hatch.build.targets.sdist]
include = [
    "imgpp",
    "tests",
]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP", "SIM"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
check_untyped_defs = true
