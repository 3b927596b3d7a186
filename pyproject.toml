[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tunedeck"
version = "0.1.0"
description = "Terminal MP3 player with a JSON-backed media library, playlists, tag editing and serial-board remote control"
requires-python = ">=3.10"
keywords = ["mp3", "music", "player", "playlist", "terminal", "serial", "id3"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Players :: MP3",
    "Topic :: Terminals :: Serial",
]
dependencies = [
    "pygame",
    "pyserial",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
tunedeck = "tunedeck.app:main"

[tool.hatch.build.targets.wheel]
packages = ["tunedeck"]

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
ignore_missing_imports = true
