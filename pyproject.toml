[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "towerdef"
version = "0.1.0"
description = "A full-screen tower defense game with randomly generated paths and obstacles, drawn with pygame"
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = ["game", "tower-defense", "pygame", "procedural-generation", "collision"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Real Time Strategy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
towerdef = "towerdef.game:main"

[tool.hatch.build.targets.wheel]
packages = ["towerdef"]

[tool.pytest.ini_options]
addopts = "-ra"
