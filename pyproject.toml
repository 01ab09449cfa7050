[build-system]
requires = ["setuptools>=61.0"]
build-backend = "setuptools.build_meta"

[project]
name = "fppmapf"
version = "0.1.0"
description = "Grid environment, energy-aware action model and heuristic tables for lifelong multi-agent pickup-and-delivery planning"
requires-python = ">=3.10"
dependencies = []
keywords = ["mapf", "multi-agent", "path-finding", "planning", "heuristics", "pickup-and-delivery"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["fppmapf*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
