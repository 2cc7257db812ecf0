[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "isoworld"
version = "0.1.0"
description = "An isometric terrain editor: sculpt, paint, rotate and save tile maps."
requires-python = ">=3.10"
keywords = ["isometric", "terrain", "editor", "map", "pygame"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: End Users/Desktop",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Simulation",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
isoworld = "isoworld.app:main"

[tool.hatch.build.targets.wheel]
packages = ["isoworld"]

[tool.pytest.ini_options]
addopts = "-ra"
