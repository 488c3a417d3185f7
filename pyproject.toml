[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "graphgrepsx"
version = "3.3.0"
description = "Labelled graphs, path index trees and VF2 matching for subgraph search over graph collections"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "graph",
    "subgraph isomorphism",
    "monomorphism",
    "graph isomorphism",
    "path index",
    "vf2",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Bio-Informatics",
    "Topic :: Scientific/Engineering :: Mathematics",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["graphgrepsx"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
