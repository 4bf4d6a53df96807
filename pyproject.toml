[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "termweave"
version = "0.1.0"
description = "Building blocks for terminal user interfaces: styled cells, escape sequences, layout and widgets"
requires-python = ">=3.10"
keywords = ["terminal", "tui", "widgets", "ansi", "layout"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: User Interfaces",
    "Topic :: Terminals",
]
dependencies = [
    "pillow",
    "regex",
    "wcwidth",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["termweave"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
