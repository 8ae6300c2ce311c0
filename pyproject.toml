[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gitview"
version = "0.1.0"
description = "Building blocks for a git history viewer: reference maps, command templates and HTML formatting helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["git", "refs", "show-ref", "stgit", "ref names", "version control"]
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
    "Topic :: Software Development :: Version Control :: Git",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["gitview"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
