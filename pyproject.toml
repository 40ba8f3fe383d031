[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "avrcmd"
version = "0.1.0"
description = "A small line-oriented command interpreter with integer expressions, variables and simulated GPIO ports"
requires-python = ">=3.10"
dependencies = []
keywords = ["interpreter", "command", "expression", "gpio", "serial", "repl"]
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
    "Topic :: Software Development :: Interpreters",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
avrcmd = "avrcmd.interpreter:main"

[tool.hatch.build.targets.wheel]
packages = ["avrcmd"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
