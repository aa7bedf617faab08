[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "paxi"
version = "0.1.0"
description = "Building blocks for replicated key-value stores: node ids, ballots, a multi-version database, graph and container utilities, protocol messages, a REST client and an admin shell."
requires-python = ">=3.10"
keywords = ["paxos", "consensus", "replication", "distributed-systems", "key-value"]
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
    "Topic :: System :: Distributed Computing",
]
dependencies = [
    "requests",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[project.scripts]
paxi-cmd = "paxi.cmd:main"

[tool.hatch.build.targets.wheel]
packages = ["paxi"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
