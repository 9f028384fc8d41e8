[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "termquest"
version = "1.0.0"
description = "Game logic for a terminal dungeon crawler: dice, luck, maze maps, fog of war, abilities, gear tables and save files."
requires-python = ">=3.10"
dependencies = []
keywords = ["roguelike", "dungeon", "maze", "rpg", "dice", "game"]
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
    "Topic :: Games/Entertainment :: Role-Playing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["termquest"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
