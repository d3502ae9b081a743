[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gust"
version = "0.1.0"
description = "A small snapshot-based version control system"
requires-python = ">=3.10"
keywords = ["version control", "vcs", "snapshots", "commits", "branches"]
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
    "Topic :: Software Development :: Version Control",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
gust = "gust.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["gust"]

[tool.pytest.ini_options]
addopts = "-ra"
