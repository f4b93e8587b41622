[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sonnetkit"
version = "0.1.0"
description = "Building blocks for a Jsonnet interpreter and formatter: errors, lazy values, contexts, arrays, options and comment formatting"
requires-python = ">=3.10"
dependencies = []
keywords = ["jsonnet", "interpreter", "configuration", "formatter", "lazy evaluation"]
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
    "Topic :: Software Development :: Interpreters",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sonnetkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
