[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "commentapi"
version = "0.1.0"
description = "A small JSON REST service for creating, fetching, updating and deleting comments stored in SQLite."
requires-python = ">=3.10"
dependencies = [
    "flask",
]
keywords = ["rest", "api", "comments", "json", "http", "flask", "sqlite"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
commentapi = "commentapi.server:main"

[tool.hatch.build.targets.wheel]
packages = ["commentapi"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
