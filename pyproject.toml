[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "unixkit"
version = "0.1.0"
description = "A small Unix toolkit: a command-tree shell executor, a WiFi packet statistics reporter and the containers behind them."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "shell",
    "pipeline",
    "redirection",
    "wifi",
    "mac-address",
    "oui",
    "hash-table",
    "open-addressing",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Shells",
    "Topic :: System :: Networking :: Monitoring",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
wifistats = "unixkit.wifistats:main"

[tool.hatch.build.targets.wheel]
packages = ["unixkit"]

[tool.hatch.build.targets.sdist]
include = ["unixkit", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
