[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gamehub"
version = "0.1.0"
description = "Building blocks for a multiplayer game server: packet codec, buffers, config tables, task scheduling and schema tooling."
requires-python = ">=3.10"
keywords = ["game server", "packet codec", "ring buffer", "config tables", "mysql schema"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
    "Topic :: Software Development :: Libraries",
]
dependencies = [
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
gamehub-tables = "gamehub.table_schema:main"

[tool.hatch.build.targets.wheel]
packages = ["gamehub"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
