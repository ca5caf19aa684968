[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "packcli"
version = "0.1.0"
description = "Command-line building blocks: grouped flag sets, a terminal spinner, logging, filesystem and template helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["cli", "flags", "spinner", "templates", "filesystem"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["packcli"]

[tool.pytest.ini_options]
addopts = "-ra"
