[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pokerleague"
version = "0.1.0"
description = "Track poker league wins from the command line or over HTTP and WebSockets, with blind alerts during a game."
requires-python = ">=3.10"
keywords = ["poker", "texas holdem", "league", "blinds", "websocket", "aiohttp"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Environment :: Web Environment",
    "Framework :: AsyncIO",
    "Framework :: aiohttp",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Board Games",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]
dependencies = [
    "aiohttp",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
pokerleague-cli = "pokerleague.cli:main"
pokerleague-server = "pokerleague.server:main"

[tool.hatch.build.targets.wheel]
packages = ["pokerleague"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
