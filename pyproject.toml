[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "stageconfig"
version = "0.1.0"
description = "Organise process programs into stages and steps, and keep a paged library of program files."
requires-python = ">=3.10"
dependencies = []
keywords = ["process", "stages", "steps", "configuration", "program library", "json"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Science/Research",
    "Natural Language :: Chinese (Simplified)",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
stageconfig = "stageconfig.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["stageconfig"]

[tool.hatch.build.targets.sdist]
include = ["stageconfig", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
testpaths = ["tests"]
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
