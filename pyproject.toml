[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "glyphedit"
version = "0.1.0"
description = "Multi-cursor text editing core with box selection, undo/redo and background search"
requires-python = ">=3.10"
dependencies = []
keywords = ["editor", "text", "multi-cursor", "box-selection", "undo", "search"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Editors",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["glyphedit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
