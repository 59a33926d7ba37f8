[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "yomine"
version = "0.3.8"
description = "Building blocks for mining Japanese vocabulary from subtitle files: subtitle parsing, settings, Anki field guessing and mpv seeking."
requires-python = ">=3.10"
dependencies = [
    "platformdirs",
]
keywords = [
    "japanese",
    "subtitles",
    "srt",
    "ass",
    "vocabulary",
    "anki",
    "mpv",
    "language-learning",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Education",
    "Natural Language :: Japanese",
    "Natural Language :: English",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
    "Topic :: Text Processing :: Linguistic",
    "Topic :: Multimedia :: Video",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["yomine"]

[tool.hatch.build.targets.sdist]
include = [
    "yomine",
    "tests",
]

[tool.pytest.ini_options]
addopts = "-ra"
