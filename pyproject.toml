[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "flyby"
version = "0.1.0"
description = "Core of a small game engine: reserved memory, commits, tags, arenas, a linear allocator, physics tables and packed asset files."
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "engine", "arena", "allocator", "physics", "assets"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["flyby"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
