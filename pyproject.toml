[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gioco_oca"
version = "1.0.0"
description = "The Game of the Goose played in the terminal, with save slots and a winners' leaderboard"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "goose", "board game", "terminal", "oca"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Natural Language :: Italian",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Board Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
gioco-oca = "gioco_oca.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["gioco_oca"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
