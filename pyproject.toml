[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "educe-derive"
version = "0.1.0"
description = "Derive Clone and Copy behaviour for Python classes from attribute-style declarations, with per-field clone methods and bounds."
requires-python = ">=3.10"
dependencies = []
keywords = ["derive", "clone", "copy", "code generation", "attributes", "decorator"]
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
    "Topic :: Software Development :: Code Generators",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["educe_derive"]

[tool.pytest.ini_options]
addopts = "-ra"
