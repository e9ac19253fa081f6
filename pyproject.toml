[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sqllogger"
version = "0.2.0"
description = "Wrap database driver connectors and log every successful SQL operation with ids and timings"
requires-python = ">=3.10"
dependencies = []
keywords = ["sql", "logging", "database", "driver", "connector", "tracing"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database",
    "Topic :: System :: Logging",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sqllogger"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
