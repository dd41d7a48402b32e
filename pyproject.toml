[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "opgm"
version = "0.1.0"
description = "Query front end, pattern graphs and planning for out-of-core property graph matching"
requires-python = ">=3.10"
dependencies = []
keywords = ["graph", "subgraph-matching", "pattern", "query", "planner", "mmap"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database :: Database Engines/Servers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["opgm"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
