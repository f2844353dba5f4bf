[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cliframe"
version = "0.1.0"
description = "Command-line framework pieces: argument lists, command categories and alternate flag value sources (maps, YAML, TOML, JSON)"
requires-python = ">=3.11"
dependencies = [
    "pyyaml",
]
keywords = ["cli", "command-line", "flags", "configuration", "yaml", "toml", "json"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Application Frameworks",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["cliframe"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
