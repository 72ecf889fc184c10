[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "killchime"
version = "0.1.0"
description = "Play kill-streak sound packs driven by Counter-Strike 2 game state integration"
requires-python = ">=3.10"
keywords = ["cs2", "game state integration", "gsi", "sound", "kill sounds"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Topic :: Games/Entertainment :: First Person Shooters",
    "Topic :: Multimedia :: Sound/Audio :: Players",
]
dependencies = [
    "aiohttp",
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
killchime = "killchime.app:main"

[tool.hatch.build.targets.wheel]
packages = ["killchime"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
