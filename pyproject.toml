[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dmgcreator"
version = "0.1.0"
description = "Build a macOS application bundle and package it as a compressed DMG disk image."
requires-python = ">=3.10"
dependencies = []
keywords = ["macos", "dmg", "app-bundle", "hdiutil", "packaging", "disk-image"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: MacOS :: MacOS X",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Archiving :: Packaging",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
createdmg = "dmgcreator.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["dmgcreator"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
