[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "confstack"
version = "0.1.0"
description = "Layered application configuration from JSON objects, files, streams, key-per-file directories, in-memory settings and command-line arguments"
requires-python = ">=3.10"
dependencies = []
keywords = ["configuration", "settings", "json", "command-line", "deep-merge"]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["confstack"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
